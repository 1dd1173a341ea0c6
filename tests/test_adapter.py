from typing import Hashable, List, Optional

from buffer_torus.adapters.textual import HostHooks, TorusAdapter
from buffer_torus.torus import TorusContext


def make_adapter() -> tuple[TorusAdapter, List[Optional[Hashable]], List[str]]:
    shown: List[Optional[Hashable]] = []
    statuses: List[str] = []
    hooks = HostHooks(show_item=shown.append, update_status=statuses.append)
    return TorusAdapter(TorusContext(), hooks), shown, statuses


def test_adapter_shows_result_item_and_status() -> None:
    adapter, shown, statuses = make_adapter()

    adapter.execute("ring-add work", item="buf1")
    adapter.execute("ring-add work", item="buf2")
    adapter.execute("ring-next")

    assert shown == ["buf1", "buf2", "buf1"]
    assert statuses[0] == "created ring work"


def test_adapter_relays_events() -> None:
    events: List[str] = []
    hooks = HostHooks(
        show_item=lambda item: None,
        handle_event=lambda name, payload: events.append(name),
    )
    adapter = TorusAdapter(TorusContext(), hooks)

    adapter.execute("ring-add work", item="buf1")
    adapter.execute("bogus")

    assert events == ["item.added", "command.add", "command.error"]


def test_adapter_item_destroyed_refreshes_view() -> None:
    adapter, shown, _ = make_adapter()
    adapter.execute("ring-add work", item="buf1")
    adapter.execute("ring-add work", item="buf2")
    shown.clear()

    released = adapter.item_destroyed("buf2")
    untouched = adapter.item_destroyed("never-added")

    assert [ring.name for ring in released] == ["work"]
    assert untouched == []
    assert shown == ["buf1"]


def test_adapter_clears_view_when_last_item_leaves_ring() -> None:
    adapter, shown, _ = make_adapter()
    adapter.execute("ring-add work", item="buf1")

    result = adapter.execute("ring-remove", item="buf1")

    assert result.status == "item_removed"
    assert shown == ["buf1", None]


def test_adapter_clears_view_after_deleting_into_empty_ring() -> None:
    adapter, shown, _ = make_adapter()
    adapter.execute("ring-add work", item="buf1")
    adapter.context.registry.get_or_create("scratch")

    result = adapter.execute("torus-delete")

    assert result.ring == "scratch"
    assert shown == ["buf1", None]


def test_adapter_clears_view_when_every_ring_is_empty() -> None:
    adapter, shown, _ = make_adapter()
    adapter.context.registry.get_or_create("A")
    adapter.context.registry.get_or_create("B")

    result = adapter.execute("torus-next")

    assert result.status == "all_empty"
    assert shown == [None]


def test_adapter_keeps_view_on_rejected_commands() -> None:
    adapter, shown, _ = make_adapter()
    adapter.execute("ring-add work", item="buf1")

    adapter.execute("ring-add work", item="buf1")
    adapter.execute("torus-switch missing")
    adapter.execute("ring-list")

    assert shown == ["buf1"]
