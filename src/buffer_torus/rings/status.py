"""Outcome codes, rotation directions, and contract errors."""

from __future__ import annotations

from enum import Enum


class Direction(str, Enum):
    """Way the cursor travels around a ring."""

    FORWARD = "forward"
    BACKWARD = "backward"

    @classmethod
    def coerce(cls, value: "Direction | str") -> "Direction":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise TypeError(f"Unknown direction {value!r}") from exc


class RingStatus(str, Enum):
    """Expected, recoverable outcomes reported by ring and torus operations."""

    OK = "ok"
    SINGLE = "single"  # fewer than two items, nothing to rotate to
    EMPTY = "empty"
    ALL_EMPTY = "all_empty"
    NOT_FOUND = "not_found"
    DUPLICATE = "duplicate"


class RingDestroyedError(RuntimeError):
    """Raised when a ring is used after ``destroy()``."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Ring '{name}' has been destroyed")
        self.name = name


__all__ = ["Direction", "RingStatus", "RingDestroyedError"]
