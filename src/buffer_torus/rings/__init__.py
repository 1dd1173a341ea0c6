"""Generic cyclic containers and their membership bookkeeping."""

from .membership import EventBus, MembershipIndex
from .ring import Ring, ring_size
from .status import Direction, RingDestroyedError, RingStatus

__all__ = [
    "Direction",
    "EventBus",
    "MembershipIndex",
    "Ring",
    "RingDestroyedError",
    "RingStatus",
    "ring_size",
]
