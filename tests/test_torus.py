from typing import Dict, List

from buffer_torus.rings import Direction, RingStatus
from buffer_torus.torus import TorusContext


def make_context(layout: Dict[str, List[str]]) -> TorusContext:
    context = TorusContext()
    for name, items in layout.items():
        ring = context.registry.get_or_create(name)
        for item in items:
            ring.insert(item)
    return context


def current_name(context: TorusContext) -> str:
    ring = context.current_ring()
    assert ring is not None
    return ring.name


def test_scenario_create_insert_and_duplicate() -> None:
    context = TorusContext()

    ring = context.registry.get_or_create("A")
    assert len(context.torus) == 1
    assert ring.insert("buf1")
    assert ring.size() == 1
    assert ring.insert("buf1") is False
    assert ring.size() == 1


def test_rotate_skips_empty_rings() -> None:
    context = make_context(
        {"empty1": [], "A": ["a1"], "empty2": [], "B": ["b1", "b2"]}
    )
    visited = []

    for _ in range(4):
        assert context.torus.rotate(Direction.FORWARD) is RingStatus.OK
        visited.append(current_name(context))

    assert visited == ["A", "B", "A", "B"]


def test_rotate_backward_skips_empty_rings() -> None:
    context = make_context({"empty1": [], "A": ["a1"], "empty2": [], "B": ["b1"]})

    context.torus.rotate(Direction.BACKWARD)
    assert current_name(context) == "B"
    context.torus.rotate(Direction.BACKWARD)
    assert current_name(context) == "A"


def test_scenario_rotate_from_empty_to_populated_ring() -> None:
    context = make_context({"A": [], "B": ["buf1"]})
    assert current_name(context) == "A"

    status = context.torus.rotate(Direction.FORWARD)

    assert status is RingStatus.OK
    assert current_name(context) == "B"
    assert context.current_item() == "buf1"


def test_rotate_all_empty_keeps_position() -> None:
    context = make_context({"A": [], "B": [], "C": []})
    context.torus.switch_to("B")

    assert context.torus.rotate(Direction.FORWARD) is RingStatus.ALL_EMPTY
    assert current_name(context) == "B"


def test_rotate_empty_torus() -> None:
    context = TorusContext()

    assert context.torus.rotate(Direction.FORWARD) is RingStatus.EMPTY
    assert context.current_ring() is None
    assert context.current_item() is None


def test_switch_to_makes_ring_current() -> None:
    context = make_context({"A": ["a1"], "B": ["b1"], "C": []})

    ring = context.torus.switch_to("B")

    assert ring is not None and ring.name == "B"
    assert context.current_item() == "b1"
    assert context.torus.list_names() == ["B", "A", "C"]


def test_switch_to_unknown_name_is_noop() -> None:
    context = make_context({"A": ["a1"], "B": []})

    assert context.torus.switch_to("missing") is None
    assert context.torus.list_names() == ["A", "B"]


def test_list_names_starts_at_current_ring() -> None:
    context = make_context({"A": ["a1"], "B": ["b1"], "C": ["c1"]})

    context.torus.rotate(Direction.FORWARD)

    assert context.torus.list_names() == ["B", "C", "A"]


def test_delete_current_ring_releases_items() -> None:
    context = make_context({"A": ["shared", "only_a"], "B": ["shared"]})
    removed_events: List[object] = []
    context.bus.subscribe("item.removed", removed_events.append)
    doomed = context.current_ring()

    removed = context.torus.delete_current_ring()

    assert removed is doomed and removed is not None
    assert removed.destroyed
    assert len(removed_events) == 2
    assert context.index.rings_containing("shared") == {context.registry.lookup("B")}
    assert not context.index.is_tracked("only_a")
    assert context.registry.lookup("A") is None
    assert context.torus.list_names() == ["B"]
    assert current_name(context) == "B"


def test_delete_current_ring_on_empty_torus() -> None:
    context = TorusContext()

    assert context.torus.delete_current_ring() is None


def test_surface_switches_to_ring_holding_item() -> None:
    context = make_context({"A": ["a1"], "B": ["b1", "shared"], "C": ["shared"]})

    ring = context.torus.surface("shared")

    assert ring is not None and ring.name == "B"
    assert current_name(context) == "B"
    assert context.torus.surface("ghost") is None


def test_item_destroyed_removes_item_from_all_rings() -> None:
    context = make_context({"A": ["buf1", "buf2"], "B": ["buf1"]})

    released = context.item_destroyed("buf1")

    assert {ring.name for ring in released} == {"A", "B"}
    assert context.index.rings_containing("buf1") == frozenset()
    assert context.registry.lookup("A").traverse_collect() == ["buf2"]
    assert context.registry.lookup("B").size() == 0


def test_rings_containing_in_torus_order() -> None:
    context = make_context({"A": ["x"], "B": [], "C": ["x"]})

    assert [ring.name for ring in context.rings_containing("x")] == ["A", "C"]


def test_contexts_are_independent() -> None:
    first = make_context({"A": ["buf1"]})
    second = TorusContext()

    assert second.registry.lookup("A") is None
    assert not second.index.is_tracked("buf1")
    assert first.index.is_tracked("buf1")
