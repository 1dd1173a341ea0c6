"""Reverse index from items to the rings that hold them."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, FrozenSet, Hashable, List, Set

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .ring import Ring


class EventBus:
    """Minimal event bus relaying ring bookkeeping to host callbacks."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Callable[[object], None]) -> None:
        callbacks = self._subscribers.get(event)
        if callbacks and callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)


class MembershipIndex:
    """Tracks, for every item, the set of rings currently containing it.

    An item has an entry exactly while at least one ring holds it. Only
    ``Ring.insert``/``Ring.delete`` call ``add``/``remove``; everything else
    goes through ``drop_item_everywhere`` or the ring API.
    """

    def __init__(self, bus: EventBus | None = None) -> None:
        self._entries: Dict[Hashable, Set["Ring"]] = {}
        self.bus = bus or EventBus()

    def __len__(self) -> int:
        return len(self._entries)

    def is_tracked(self, item: Hashable) -> bool:
        return item in self._entries

    def rings_containing(self, item: Hashable) -> FrozenSet["Ring"]:
        return frozenset(self._entries.get(item, ()))

    def add(self, item: Hashable, ring: "Ring") -> None:
        self._entries.setdefault(item, set()).add(ring)
        self.bus.emit("item.added", {"item": item, "ring": ring})

    def remove(self, item: Hashable, ring: "Ring") -> None:
        rings = self._entries.get(item)
        if not rings or ring not in rings:
            return
        rings.discard(ring)
        self.bus.emit("item.removed", {"item": item, "ring": ring})
        if not rings:
            del self._entries[item]
            self.bus.emit("item.untracked", {"item": item})

    def drop_item_everywhere(self, item: Hashable) -> List["Ring"]:
        """Delete ``item`` from every ring holding it; return those rings."""

        released: List["Ring"] = []
        for ring in list(self._entries.get(item, ())):
            if ring.delete(item):
                released.append(ring)
        return released


__all__ = ["EventBus", "MembershipIndex"]
