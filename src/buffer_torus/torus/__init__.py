"""Named rings arranged on a torus."""

from .context import TorusContext
from .registry import RegistryStats, RingRegistry
from .torus import Torus

__all__ = ["RegistryStats", "RingRegistry", "Torus", "TorusContext"]
