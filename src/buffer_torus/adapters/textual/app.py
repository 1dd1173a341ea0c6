"""Executable Textual demo hosting a buffer torus over scratch buffers."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass, field
from typing import Dict, Hashable, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Input, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use buffer_torus.adapters.textual.app"
    ) from exc

from buffer_torus.runtime import telemetry
from buffer_torus.torus import TorusContext

from .controller import HostHooks, TorusAdapter


@dataclass
class UIState:
    buffers: Dict[str, str] = field(default_factory=dict)
    visible: Optional[str] = None
    status_text: str = ""


class BufferTorusApp(App[None]):
    """Scratch buffers navigated through rings; commands typed at the bottom."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+n", "ring_next", "Next buffer"),
        ("ctrl+p", "ring_prev", "Previous buffer"),
        ("ctrl+f", "torus_next", "Next ring"),
        ("ctrl+b", "torus_prev", "Previous ring"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, rings: Sequence[str] = ()) -> None:
        super().__init__()
        self._state = UIState()
        self._initial_rings = tuple(rings)
        self.context = TorusContext(logger_name="buffer_torus.demo")
        self.adapter: TorusAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._log = telemetry.get_logger("buffer_torus.demo")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Input(placeholder="open NAME | kill | ring-add RING | torus-list ...")
        yield Footer()

    def on_mount(self) -> None:
        hooks = HostHooks(
            show_item=self._show_item,
            update_status=self._update_status,
            log=self._log.debug,
        )
        self.adapter = TorusAdapter(self.context, hooks)
        for name in self._initial_rings:
            self.context.registry.get_or_create(name)
        names = self.context.torus.list_names()
        self._update_status("rings: " + ", ".join(names) if names else "no rings")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        text = event.value.strip()
        event.input.value = ""
        if not text or self.adapter is None:
            return
        verb, _, rest = text.partition(" ")
        if verb == "open":
            self._open_buffer(rest.strip())
        elif verb == "kill":
            self._kill_buffer(rest.strip() or self._state.visible)
        else:
            self.adapter.execute(text, item=self._state.visible)

    def action_ring_next(self) -> None:
        self._run("ring-next")

    def action_ring_prev(self) -> None:
        self._run("ring-prev")

    def action_torus_next(self) -> None:
        self._run("torus-next")

    def action_torus_prev(self) -> None:
        self._run("torus-prev")

    def _run(self, command: str) -> None:
        if self.adapter is not None:
            self.adapter.execute(command, item=self._state.visible)

    def _open_buffer(self, name: str) -> None:
        if not name:
            self._update_status("open needs a buffer name")
            return
        self._state.buffers.setdefault(name, f"*{name}*\n")
        self._show_item(name)

    def _kill_buffer(self, name: Optional[str]) -> None:
        if not name or name not in self._state.buffers:
            self._update_status("no such buffer")
            return
        del self._state.buffers[name]
        if self._state.visible == name:
            self._show_item(None)
        if self.adapter is not None:
            self.adapter.item_destroyed(name)
        self._update_status(f"killed {name}")

    def _show_item(self, item: Optional[Hashable]) -> None:
        name = item if isinstance(item, str) else None
        self._state.visible = name
        text = self._state.buffers.get(name, "") if name else ""
        if self._buffer_widget:
            self._buffer_widget.update(text)
        self.sub_title = name or ""

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)


def _env_rings() -> list[str]:
    raw = os.environ.get(f"{telemetry.ENV_PREFIX}RINGS", "")
    return [name.strip() for name in raw.split(",") if name.strip()]


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the buffer torus Textual demo.")
    parser.add_argument(
        "--ring",
        action="append",
        dest="rings",
        default=None,
        help="Ring to create at startup (repeatable; default: $BUFFER_TORUS_RINGS)",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "performance"),
        default=None,
        help="Telelog preset to use instead of BUFFER_TORUS_* settings",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    rings: list[str] = args.rings if args.rings is not None else _env_rings()
    BufferTorusApp(rings=rings).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
