"""Name -> ring table; creating a ring also places it on the torus."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Hashable, Iterator, Optional

from buffer_torus.rings import MembershipIndex, Ring
from buffer_torus.runtime import telemetry
from buffer_torus.runtime.telemetry import span

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .torus import Torus


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    ring_count: int
    empty_rings: int
    tracked_items: int


class RingRegistry:
    """Owns the flat ring namespace.

    Names are stable identifiers: an entry lives until ``remove`` is called.
    The registry binds itself to ``torus`` so torus-level operations can
    resolve names and unregister rings they delete.
    """

    def __init__(
        self,
        torus: "Torus",
        *,
        index: MembershipIndex,
        logger_name: str | None = None,
    ) -> None:
        self._rings: Dict[str, Ring[Hashable]] = {}
        self.torus = torus
        self.index = index
        self._logger_name = logger_name
        torus.registry = self

    def __contains__(self, name: object) -> bool:
        return name in self._rings

    def __len__(self) -> int:
        return len(self._rings)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._rings))

    def names(self) -> list[str]:
        return list(self._rings)

    def lookup(self, name: str) -> Optional[Ring[Hashable]]:
        return self._rings.get(name)

    def create(self, name: str) -> Ring[Hashable]:
        with span(
            "registry::create",
            logger_name=self._logger_name,
            component="registry",
            metadata={"ring": name},
        ):
            if not name or not name.strip():
                raise ValueError("Ring name cannot be empty")
            if name in self._rings:
                raise ValueError(f"Ring '{name}' already registered")
            ring: Ring[Hashable] = Ring(name, index=self.index)
            self._rings[name] = ring
            self.torus.add_ring(ring)
            telemetry.record_event(
                "ring.created", data={"ring": name}, logger_name=self._logger_name
            )
            return ring

    def get_or_create(self, name: str) -> Ring[Hashable]:
        ring = self.lookup(name)
        if ring is not None:
            return ring
        return self.create(name)

    def remove(self, name: str) -> Optional[Ring[Hashable]]:
        """Unregister ``name``. The ring itself is left intact."""

        ring = self._rings.pop(name, None)
        if ring is not None:
            telemetry.record_event(
                "ring.unregistered", data={"ring": name}, logger_name=self._logger_name
            )
        return ring

    def rename(self, old: str, new: str) -> bool:
        with span(
            "registry::rename",
            logger_name=self._logger_name,
            component="registry",
            metadata={"ring": old, "new_name": new},
        ) as handle:
            if not new or not new.strip():
                raise ValueError("Ring name cannot be empty")
            ring = self._rings.get(old)
            if ring is None or new in self._rings:
                handle.add_metadata("rejected", True)
                return False
            del self._rings[old]
            ring.name = new
            self._rings[new] = ring
            return True

    def stats(self) -> RegistryStats:
        return RegistryStats(
            ring_count=len(self._rings),
            empty_rings=sum(1 for ring in self._rings.values() if ring.size() == 0),
            tracked_items=len(self.index),
        )


__all__ = ["RegistryStats", "RingRegistry"]
