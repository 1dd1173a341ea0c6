"""Host bridge that runs commands and makes their results visible."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Hashable, List, Optional

from buffer_torus.actions import CommandResult, run_command
from buffer_torus.rings import Ring
from buffer_torus.torus import TorusContext


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class HostHooks:
    """Callbacks the adapter invokes on the host UI."""

    show_item: Callable[[Optional[Hashable]], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


_RELAYED_EVENTS = (
    "item.added",
    "item.removed",
    "item.untracked",
    "command.add",
    "command.remove",
    "command.switch",
    "command.torus_rotate",
    "command.delete_ring",
    "command.error",
)


class TorusAdapter:
    """Runs commands against one context and pushes results to the host."""

    def __init__(self, context: TorusContext, hooks: HostHooks) -> None:
        self.context = context
        self.hooks = hooks
        for event in _RELAYED_EVENTS:
            context.bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def execute(self, text: str, *, item: Optional[Hashable] = None) -> CommandResult:
        self.hooks.log(f"command -> {text!r} item={item!r}")
        result = run_command(self.context, text, item=item)
        self._after_result(result)
        self.hooks.log(
            f"result <- status={result.status!r} ring={result.ring!r} item={result.item!r}"
        )
        return result

    def item_destroyed(self, item: Hashable) -> List[Ring[Hashable]]:
        """Forward the host's destroy notification and refresh the view."""

        released = self.context.item_destroyed(item)
        if released:
            self.hooks.show_item(self.context.current_item())
        return released

    def _after_result(self, result: CommandResult) -> None:
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        if result.refresh:
            self.hooks.show_item(result.item)

    def _handle_event(self, name: str, payload: object | None) -> None:
        self.hooks.log(f"event -> {name} {payload!r}")
        self.hooks.handle_event(name, payload)


__all__ = ["HostHooks", "TorusAdapter"]
