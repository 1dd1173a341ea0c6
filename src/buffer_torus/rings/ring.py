"""Cyclic doubly-linked container with a current-item cursor."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import (
    Callable,
    Dict,
    Generic,
    Hashable,
    Iterator,
    List,
    Optional,
    TypeVar,
    overload,
)

from .membership import MembershipIndex
from .status import Direction, RingDestroyedError, RingStatus

T = TypeVar("T", bound=Hashable)
R = TypeVar("R")


@dataclass(slots=True, eq=False)
class _Node(Generic[T]):
    item: T
    prev: "_Node[T]" = field(init=False, repr=False)
    next: "_Node[T]" = field(init=False, repr=False)


class Ring(Generic[T]):
    """Ordered cycle of distinct items; one of them is *current*.

    New items are appended at the end of the cycle, which is the slot just
    behind the cursor, so traversal from the current item visits them last.
    Rings are hashed by identity and may themselves be items of another ring.
    """

    def __init__(self, name: str, *, index: Optional[MembershipIndex] = None) -> None:
        self.name = name
        self.index = index
        self._nodes: Dict[T, _Node[T]] = {}
        self._cursor: Optional[_Node[T]] = None
        self._destroyed = False

    def __repr__(self) -> str:
        state = "destroyed" if self._destroyed else f"size={len(self._nodes)}"
        return f"Ring({self.name!r}, {state})"

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, item: object) -> bool:
        return self.contains(item)  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[T]:
        return iter(self.traverse_collect())

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def _ensure_alive(self) -> None:
        if self._destroyed:
            raise RingDestroyedError(self.name)

    def size(self) -> int:
        self._ensure_alive()
        return len(self._nodes)

    def contains(self, item: T) -> bool:
        self._ensure_alive()
        return item in self._nodes

    def current(self) -> Optional[T]:
        self._ensure_alive()
        return self._cursor.item if self._cursor is not None else None

    def insert(self, item: T) -> bool:
        """Append ``item``; ``False`` if it is already in the ring."""

        self._ensure_alive()
        if item in self._nodes:
            return False
        node = self._link_before_cursor(item)
        if self._cursor is None:
            self._cursor = node
        self._nodes[item] = node
        if self.index is not None:
            self.index.add(item, self)
        return True

    def delete(self, item: T) -> bool:
        """Remove ``item``; ``False`` if it was not in the ring."""

        self._ensure_alive()
        node = self._nodes.pop(item, None)
        if node is None:
            return False
        self._unlink(node)
        if self.index is not None:
            self.index.remove(item, self)
        return True

    def rotate(self, direction: Direction | str = Direction.FORWARD) -> RingStatus:
        self._ensure_alive()
        step = Direction.coerce(direction)
        if self._cursor is None:
            return RingStatus.EMPTY
        if len(self._nodes) < 2:
            return RingStatus.SINGLE
        self._step(step)
        return RingStatus.OK

    def rotate_until(
        self,
        direction: Direction | str,
        predicate: Callable[[T], bool],
    ) -> bool:
        """Rotate until ``predicate`` holds for the current item.

        At most one full cycle is walked. When nothing matches, the cursor is
        put back where it started and ``False`` is returned.
        """

        self._ensure_alive()
        step = Direction.coerce(direction)
        start = self._cursor
        if start is None:
            return False
        for _ in range(len(self._nodes)):
            self._step(step)
            if predicate(self._cursor.item):  # type: ignore[union-attr]
                return True
        self._cursor = start
        return False

    def break_and_reinsert(self, item: T) -> bool:
        """Move ``item`` to the cursor slot and make it current."""

        self._ensure_alive()
        node = self._nodes.get(item)
        if node is None:
            return False
        if node is self._cursor:
            return True
        self._unlink(node)
        self._nodes[item] = self._link_before_cursor(item)
        self._cursor = self._nodes[item]
        return True

    def find(self, predicate: Callable[[T], bool]) -> Optional[T]:
        for item in self.traverse_collect():
            if predicate(item):
                return item
        return None

    @overload
    def traverse_collect(self) -> List[T]: ...

    @overload
    def traverse_collect(self, transform: Callable[[T], R]) -> List[R]: ...

    def traverse_collect(self, transform=None):  # type: ignore[no-untyped-def]
        """Snapshot of ``transform(item)`` in ring order from the current item."""

        self._ensure_alive()
        collected = []
        node = self._cursor
        for _ in range(len(self._nodes)):
            assert node is not None
            collected.append(node.item if transform is None else transform(node.item))
            node = node.next
        return collected

    def destroy(self) -> None:
        """Release index entries for every item and retire the ring."""

        if self._destroyed:
            return
        if self.index is not None:
            for item in list(self._nodes):
                self.index.remove(item, self)
        self._nodes.clear()
        self._cursor = None
        self._destroyed = True

    def _step(self, direction: Direction) -> None:
        assert self._cursor is not None
        if direction is Direction.FORWARD:
            self._cursor = self._cursor.next
        else:
            self._cursor = self._cursor.prev

    def _link_before_cursor(self, item: T) -> _Node[T]:
        node: _Node[T] = _Node(item)
        cursor = self._cursor
        if cursor is None:
            node.prev = node.next = node
            return node
        node.prev = cursor.prev
        node.next = cursor
        cursor.prev.next = node
        cursor.prev = node
        return node

    def _unlink(self, node: _Node[T]) -> None:
        if node.next is node:
            self._cursor = None
            return
        node.prev.next = node.next
        node.next.prev = node.prev
        if node is self._cursor:
            self._cursor = node.next


def ring_size(ring: Optional[Ring]) -> int:
    """Size of ``ring``, or ``-1`` when there is no ring."""

    if ring is None:
        return -1
    return ring.size()


__all__ = ["Ring", "ring_size"]
