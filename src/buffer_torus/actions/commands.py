"""Host-facing ring and torus commands plus a command-line dispatcher."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, Hashable, List, Optional

from buffer_torus.rings import Direction, RingStatus
from buffer_torus.runtime.telemetry import span
from buffer_torus.torus import TorusContext


@dataclass(slots=True)
class CommandResult:
    """Outcome of a command.

    When ``refresh`` is set the current item may have changed and the host
    should show ``item``, which is ``None`` when nothing is current any more.
    ``outcome`` is the core status behind ``status``.
    """

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None
    item: Optional[Hashable] = None
    ring: Optional[str] = None
    payload: object | None = None
    outcome: RingStatus = RingStatus.OK
    refresh: bool = False


CommandHandler = Callable[[TorusContext, List[str], Optional[Hashable]], CommandResult]

_ROTATE_STATUS: Dict[RingStatus, str] = {
    RingStatus.OK: "rotated",
    RingStatus.SINGLE: "ring_single",
    RingStatus.EMPTY: "ring_empty",
    RingStatus.ALL_EMPTY: "all_empty",
}


def _emit(context: TorusContext, event: str, result: CommandResult) -> CommandResult:
    context.bus.emit(f"command.{event}", result)
    return result


def _no_ring(context: TorusContext, event: str) -> CommandResult:
    return _emit(
        context,
        event,
        CommandResult(
            consumed=True,
            status="torus_empty",
            message="no rings",
            outcome=RingStatus.EMPTY,
        ),
    )


def _bad_name(context: TorusContext, event: str, name: str) -> CommandResult:
    return _emit(
        context,
        event,
        CommandResult(
            consumed=True, status="command_error", message=f"bad ring name {name!r}"
        ),
    )


def add_item_to_ring(
    context: TorusContext, item: Hashable, name: str
) -> CommandResult:
    """Put ``item`` on ring ``name`` (created on demand) and focus both."""

    if not name or not name.strip():
        return _bad_name(context, "add", name)
    with span("commands::add", component="commands", metadata={"ring": name}) as handle:
        ring = context.registry.lookup(name)
        created = ring is None
        if ring is None:
            ring = context.registry.create(name)
        if not ring.insert(item):
            handle.outcome(RingStatus.DUPLICATE)
            result = CommandResult(
                consumed=True,
                status="item_duplicate",
                message=f"already in ring {name}",
                item=item,
                ring=name,
                outcome=RingStatus.DUPLICATE,
            )
            return _emit(context, "add", result)
        handle.outcome(RingStatus.OK)
        context.torus.rings.break_and_reinsert(ring)
        ring.break_and_reinsert(item)
    status = "ring_created" if created else "item_added"
    message = f"created ring {name}" if created else f"added to ring {name}"
    return _emit(
        context,
        "add",
        CommandResult(
            consumed=True,
            status=status,
            message=message,
            item=item,
            ring=name,
            refresh=True,
        ),
    )


def remove_item_from_ring(context: TorusContext, item: Hashable) -> CommandResult:
    ring = context.current_ring()
    if ring is None:
        return _no_ring(context, "remove")
    if not ring.delete(item):
        result = CommandResult(
            consumed=True,
            status="not_found",
            message=f"not in ring {ring.name}",
            ring=ring.name,
            outcome=RingStatus.NOT_FOUND,
        )
        return _emit(context, "remove", result)
    return _emit(
        context,
        "remove",
        CommandResult(
            consumed=True,
            status="item_removed",
            message=f"removed from ring {ring.name}",
            item=ring.current(),
            ring=ring.name,
            refresh=True,
        ),
    )


def list_ring_items(
    context: TorusContext, describe: Callable[[Hashable], str] = str
) -> CommandResult:
    ring = context.current_ring()
    if ring is None:
        return _no_ring(context, "list")
    lines = ring.traverse_collect(describe)
    return _emit(
        context,
        "list",
        CommandResult(
            consumed=True,
            status="listed" if lines else "ring_empty",
            message=", ".join(lines),
            item=ring.current(),
            ring=ring.name,
            payload=lines,
        ),
    )


def rotate_ring(
    context: TorusContext, direction: Direction | str = Direction.FORWARD
) -> CommandResult:
    ring = context.current_ring()
    if ring is None:
        return _no_ring(context, "rotate")
    status = ring.rotate(direction)
    return _emit(
        context,
        "rotate",
        CommandResult(
            consumed=True,
            status=_ROTATE_STATUS[status],
            item=ring.current(),
            ring=ring.name,
            outcome=status,
            refresh=True,
        ),
    )


def switch_ring(context: TorusContext, name: str) -> CommandResult:
    ring = context.torus.switch_to(name)
    if ring is None:
        return _emit(
            context,
            "switch",
            CommandResult(
                consumed=True,
                status="not_found",
                message=f"no ring {name}",
                outcome=RingStatus.NOT_FOUND,
            ),
        )
    return _emit(
        context,
        "switch",
        CommandResult(
            consumed=True,
            status="switched",
            message=name,
            item=ring.current(),
            ring=ring.name,
            refresh=True,
        ),
    )


def rotate_torus(
    context: TorusContext, direction: Direction | str = Direction.FORWARD
) -> CommandResult:
    status = context.torus.rotate(direction)
    if status is RingStatus.EMPTY:
        return _no_ring(context, "torus_rotate")
    ring = context.current_ring()
    message = "all rings are empty" if status is RingStatus.ALL_EMPTY else None
    return _emit(
        context,
        "torus_rotate",
        CommandResult(
            consumed=True,
            status=_ROTATE_STATUS[status],
            message=message or (ring.name if ring is not None else None),
            item=context.current_item(),
            ring=ring.name if ring is not None else None,
            outcome=status,
            refresh=True,
        ),
    )


def list_ring_names(context: TorusContext) -> CommandResult:
    names = context.torus.list_names()
    if not names:
        return _no_ring(context, "names")
    return _emit(
        context,
        "names",
        CommandResult(
            consumed=True,
            status="listed",
            message=", ".join(names),
            item=context.current_item(),
            ring=names[0],
            payload=names,
        ),
    )


def delete_current_ring(context: TorusContext) -> CommandResult:
    ring = context.torus.delete_current_ring()
    if ring is None:
        return _no_ring(context, "delete_ring")
    current = context.current_ring()
    return _emit(
        context,
        "delete_ring",
        CommandResult(
            consumed=True,
            status="ring_deleted",
            message=f"deleted ring {ring.name}",
            item=context.current_item(),
            ring=current.name if current is not None else None,
            refresh=True,
        ),
    )


def surface_ring(context: TorusContext, item: Hashable) -> CommandResult:
    ring = context.torus.surface(item)
    if ring is None:
        return _emit(
            context,
            "surface",
            CommandResult(
                consumed=True,
                status="not_found",
                message="not in any ring",
                outcome=RingStatus.NOT_FOUND,
            ),
        )
    return _emit(
        context,
        "surface",
        CommandResult(
            consumed=True,
            status="switched",
            message=ring.name,
            item=ring.current(),
            ring=ring.name,
            refresh=True,
        ),
    )


def rename_ring(context: TorusContext, old: str, new: str) -> CommandResult:
    if not new or not new.strip():
        return _bad_name(context, "rename", new)
    if not context.registry.rename(old, new):
        missing = old not in context.registry
        return _emit(
            context,
            "rename",
            CommandResult(
                consumed=True,
                status="not_found" if missing else "name_taken",
                message=f"cannot rename {old} to {new}",
                outcome=RingStatus.NOT_FOUND if missing else RingStatus.DUPLICATE,
            ),
        )
    return _emit(
        context,
        "rename",
        CommandResult(
            consumed=True, status="renamed", message=f"{old} -> {new}", ring=new
        ),
    )


def _missing_argument(context: TorusContext, command: str) -> CommandResult:
    return _emit(
        context,
        "error",
        CommandResult(consumed=True, status="command_error", message=command),
    )


def _handle_add(
    context: TorusContext, args: List[str], item: Optional[Hashable]
) -> CommandResult:
    if item is None or len(args) != 1:
        return _missing_argument(context, "ring-add")
    return add_item_to_ring(context, item, args[0])


def _handle_remove(
    context: TorusContext, args: List[str], item: Optional[Hashable]
) -> CommandResult:
    if item is None:
        return _missing_argument(context, "ring-remove")
    return remove_item_from_ring(context, item)


def _handle_list(
    context: TorusContext, args: List[str], item: Optional[Hashable]
) -> CommandResult:
    return list_ring_items(context)


def _handle_rotate(
    context: TorusContext,
    args: List[str],
    item: Optional[Hashable],
    *,
    direction: Direction,
) -> CommandResult:
    return rotate_ring(context, direction)


def _handle_switch(
    context: TorusContext, args: List[str], item: Optional[Hashable]
) -> CommandResult:
    if len(args) != 1:
        return _missing_argument(context, "torus-switch")
    return switch_ring(context, args[0])


def _handle_torus_rotate(
    context: TorusContext,
    args: List[str],
    item: Optional[Hashable],
    *,
    direction: Direction,
) -> CommandResult:
    return rotate_torus(context, direction)


def _handle_names(
    context: TorusContext, args: List[str], item: Optional[Hashable]
) -> CommandResult:
    return list_ring_names(context)


def _handle_delete_ring(
    context: TorusContext, args: List[str], item: Optional[Hashable]
) -> CommandResult:
    return delete_current_ring(context)


def _handle_surface(
    context: TorusContext, args: List[str], item: Optional[Hashable]
) -> CommandResult:
    if item is None:
        return _missing_argument(context, "torus-surface")
    return surface_ring(context, item)


def _handle_rename(
    context: TorusContext, args: List[str], item: Optional[Hashable]
) -> CommandResult:
    if len(args) != 2:
        return _missing_argument(context, "ring-rename")
    return rename_ring(context, args[0], args[1])


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "ring-add": _handle_add,
    "ring-remove": _handle_remove,
    "ring-list": _handle_list,
    "ring-next": partial(_handle_rotate, direction=Direction.FORWARD),
    "ring-prev": partial(_handle_rotate, direction=Direction.BACKWARD),
    "ring-rename": _handle_rename,
    "torus-switch": _handle_switch,
    "torus-next": partial(_handle_torus_rotate, direction=Direction.FORWARD),
    "torus-prev": partial(_handle_torus_rotate, direction=Direction.BACKWARD),
    "torus-list": _handle_names,
    "torus-delete": _handle_delete_ring,
    "torus-surface": _handle_surface,
}


def command_names() -> List[str]:
    return sorted(_COMMAND_HANDLERS)


def run_command(
    context: TorusContext, text: str, *, item: Optional[Hashable] = None
) -> CommandResult:
    """Parse and run a command line such as ``"ring-add work"``.

    ``item`` is the host's current item, needed by commands that act on it.
    """

    parts = text.split()
    if not parts:
        return CommandResult(consumed=False, status="command_empty")
    command, args = parts[0], parts[1:]
    handler = _COMMAND_HANDLERS.get(command)
    if handler is None:
        return _emit(
            context,
            "error",
            CommandResult(consumed=True, status="command_error", message=command),
        )
    with span(
        f"command::{command}",
        component="commands",
        metadata={"args": " ".join(args)},
    ) as handle:
        result = handler(context, args, item)
        handle.outcome(result.status)
        return result


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
