"""The torus: a ring whose items are rings."""

from __future__ import annotations

from typing import TYPE_CHECKING, Hashable, Optional

from buffer_torus.rings import Direction, Ring, RingStatus
from buffer_torus.runtime import telemetry
from buffer_torus.runtime.telemetry import span

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .registry import RingRegistry


def _has_items(ring: Ring[Hashable]) -> bool:
    return ring.size() > 0


class Torus:
    """Cycle of named rings with a *current ring*.

    The torus keeps no membership index of its own; ring membership of items
    is tracked by each ring's index. ``registry`` is bound by ``RingRegistry``.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self.rings: Ring[Ring[Hashable]] = Ring("torus")
        self.registry: Optional["RingRegistry"] = None
        self._logger_name = logger_name

    def __len__(self) -> int:
        return self.rings.size()

    def __contains__(self, ring: object) -> bool:
        return self.rings.contains(ring)  # type: ignore[arg-type]

    def add_ring(self, ring: Ring[Hashable]) -> bool:
        return self.rings.insert(ring)

    def remove_ring(self, ring: Ring[Hashable]) -> bool:
        return self.rings.delete(ring)

    def current_ring(self) -> Optional[Ring[Hashable]]:
        return self.rings.current()

    def current_item(self) -> Optional[Hashable]:
        ring = self.current_ring()
        if ring is None:
            return None
        return ring.current()

    def list_names(self) -> list[str]:
        return self.rings.traverse_collect(lambda ring: ring.name)

    def switch_to(self, name: str) -> Optional[Ring[Hashable]]:
        """Make the ring called ``name`` current; ``None`` if unknown."""

        with span(
            "torus::switch_to",
            logger_name=self._logger_name,
            component="torus",
            metadata={"ring": name},
        ) as handle:
            ring = self.registry.lookup(name) if self.registry is not None else None
            if ring is None or not self.rings.break_and_reinsert(ring):
                handle.outcome(RingStatus.NOT_FOUND)
                return None
            handle.outcome(RingStatus.OK)
            return ring

    def rotate(self, direction: Direction | str = Direction.FORWARD) -> RingStatus:
        """Move to the next non-empty ring, skipping empty ones."""

        step = Direction.coerce(direction)
        with span(
            "torus::rotate",
            logger_name=self._logger_name,
            component="torus",
            metadata={"direction": step.value},
        ) as handle:
            if self.rings.size() == 0:
                status = RingStatus.EMPTY
            elif self.rings.rotate_until(step, _has_items):
                status = RingStatus.OK
            else:
                status = RingStatus.ALL_EMPTY
            handle.outcome(status)
            current = self.current_ring()
            telemetry.record_event(
                "torus.rotate",
                level="debug",
                data={
                    "direction": step.value,
                    "status": status.value,
                    "ring": current.name if current is not None else None,
                },
                logger_name=self._logger_name,
            )
            return status

    def surface(self, item: Hashable) -> Optional[Ring[Hashable]]:
        """Make current the first ring, in torus order, that holds ``item``."""

        ring = self.rings.find(lambda candidate: candidate.contains(item))
        if ring is None:
            return None
        self.rings.break_and_reinsert(ring)
        return ring

    def delete_current_ring(self) -> Optional[Ring[Hashable]]:
        """Empty, unregister and destroy the current ring.

        Items leave through ``Ring.delete`` so index events fire for each of
        them exactly as for any other removal. Returns the destroyed ring.
        """

        ring = self.current_ring()
        if ring is None:
            return None
        with span(
            "torus::delete_current_ring",
            logger_name=self._logger_name,
            component="torus",
            metadata={"ring": ring.name},
        ) as handle:
            for item in ring.traverse_collect():
                ring.delete(item)
            handle.add_metadata("released", ring.size() == 0)
            self.rings.delete(ring)
            if self.registry is not None and self.registry.lookup(ring.name) is ring:
                self.registry.remove(ring.name)
            ring.destroy()
            telemetry.record_event(
                "ring.deleted", data={"ring": ring.name}, logger_name=self._logger_name
            )
            return ring


__all__ = ["Torus"]
