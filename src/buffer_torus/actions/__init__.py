"""Ring and torus commands exposed to hosts."""

from .commands import (
    CommandResult,
    add_item_to_ring,
    command_names,
    delete_current_ring,
    list_ring_items,
    list_ring_names,
    remove_item_from_ring,
    rename_ring,
    rotate_ring,
    rotate_torus,
    run_command,
    surface_ring,
    switch_ring,
)

__all__ = [
    "CommandResult",
    "add_item_to_ring",
    "command_names",
    "delete_current_ring",
    "list_ring_items",
    "list_ring_names",
    "remove_item_from_ring",
    "rename_ring",
    "rotate_ring",
    "rotate_torus",
    "run_command",
    "surface_ring",
    "switch_ring",
]
