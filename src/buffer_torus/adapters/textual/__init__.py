"""Textual-facing host bridge."""

from .controller import HostHooks, TorusAdapter

__all__ = ["HostHooks", "TorusAdapter"]
