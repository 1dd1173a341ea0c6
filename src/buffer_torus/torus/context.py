"""Explicit container for one registry + torus + membership index."""

from __future__ import annotations

from typing import Hashable, List, Optional

from buffer_torus.rings import EventBus, MembershipIndex, Ring

from .registry import RingRegistry
from .torus import Torus


class TorusContext:
    """Everything a caller needs to drive rings, owned by the caller.

    Hosts create one context and pass it to every command. Several contexts
    never share state.
    """

    def __init__(
        self, *, bus: Optional[EventBus] = None, logger_name: str | None = None
    ) -> None:
        self.bus = bus or EventBus()
        self.index = MembershipIndex(self.bus)
        self.torus = Torus(logger_name=logger_name)
        self.registry = RingRegistry(
            self.torus, index=self.index, logger_name=logger_name
        )

    def current_ring(self) -> Optional[Ring[Hashable]]:
        return self.torus.current_ring()

    def current_item(self) -> Optional[Hashable]:
        return self.torus.current_item()

    def rings_containing(self, item: Hashable) -> List[Ring[Hashable]]:
        """Rings holding ``item``, in torus order."""

        holders = self.index.rings_containing(item)
        return [ring for ring in self.torus.rings.traverse_collect() if ring in holders]

    def item_destroyed(self, item: Hashable) -> List[Ring[Hashable]]:
        """Host hook: ``item`` no longer exists; forget it everywhere."""

        return self.index.drop_item_everywhere(item)


__all__ = ["TorusContext"]
