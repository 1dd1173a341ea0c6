"""Named cyclic rings of items arranged on a torus, for editor navigation."""

__all__ = [
    "actions",
    "adapters",
    "rings",
    "runtime",
    "torus",
]

__version__ = "0.1.0"
