import pytest

from buffer_torus.torus import TorusContext


def test_get_or_create_registers_ring_on_torus() -> None:
    context = TorusContext()

    ring = context.registry.get_or_create("A")

    assert context.registry.lookup("A") is ring
    assert len(context.torus) == 1
    assert context.current_ring() is ring


def test_get_or_create_is_idempotent() -> None:
    context = TorusContext()

    first = context.registry.get_or_create("A")
    second = context.registry.get_or_create("A")

    assert first is second
    assert len(context.registry) == 1
    assert len(context.torus) == 1


def test_lookup_unknown_name() -> None:
    context = TorusContext()

    assert context.registry.lookup("nope") is None
    assert "nope" not in context.registry


def test_create_rejects_existing_and_empty_names() -> None:
    context = TorusContext()
    context.registry.create("A")

    with pytest.raises(ValueError):
        context.registry.create("A")
    with pytest.raises(ValueError):
        context.registry.create("  ")


def test_remove_unregisters_without_destroying() -> None:
    context = TorusContext()
    ring = context.registry.get_or_create("A")
    ring.insert("buf1")

    removed = context.registry.remove("A")

    assert removed is ring
    assert context.registry.lookup("A") is None
    assert not ring.destroyed
    assert ring.contains("buf1")
    assert context.registry.remove("A") is None


def test_rename_moves_ring_to_new_name() -> None:
    context = TorusContext()
    ring = context.registry.get_or_create("A")
    context.registry.get_or_create("B")

    assert context.registry.rename("A", "C")
    assert context.registry.rename("C", "B") is False
    assert context.registry.rename("missing", "D") is False

    assert ring.name == "C"
    assert context.registry.lookup("C") is ring
    assert context.registry.names() == ["B", "C"]


def test_stats_reports_rings_and_items() -> None:
    context = TorusContext()
    context.registry.get_or_create("A").insert("buf1")
    context.registry.get_or_create("B")

    stats = context.registry.stats()

    assert stats.ring_count == 2
    assert stats.empty_rings == 1
    assert stats.tracked_items == 1
