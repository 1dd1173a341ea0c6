from typing import List

from buffer_torus.rings import EventBus, MembershipIndex, Ring


def make_rings(index: MembershipIndex, *names: str) -> List[Ring[str]]:
    return [Ring(name, index=index) for name in names]


def test_index_follows_inserts_and_deletes() -> None:
    index = MembershipIndex()
    work, notes = make_rings(index, "work", "notes")

    work.insert("buf1")
    notes.insert("buf1")
    assert index.rings_containing("buf1") == {work, notes}

    work.delete("buf1")
    assert index.rings_containing("buf1") == {notes}

    notes.delete("buf1")
    assert index.rings_containing("buf1") == frozenset()
    assert not index.is_tracked("buf1")
    assert len(index) == 0


def test_rejected_insert_leaves_index_alone() -> None:
    index = MembershipIndex()
    (work,) = make_rings(index, "work")
    work.insert("buf1")

    work.insert("buf1")
    work.delete("missing")

    assert index.rings_containing("buf1") == {work}
    assert not index.is_tracked("missing")


def test_drop_item_everywhere() -> None:
    index = MembershipIndex()
    work, notes, misc = make_rings(index, "work", "notes", "misc")
    for ring in (work, notes):
        ring.insert("buf1")
        ring.insert("buf2")
    misc.insert("buf2")

    released = index.drop_item_everywhere("buf1")

    assert set(released) == {work, notes}
    assert index.rings_containing("buf1") == frozenset()
    assert not work.contains("buf1")
    assert not notes.contains("buf1")
    assert index.rings_containing("buf2") == {work, notes, misc}


def test_drop_untracked_item_is_harmless() -> None:
    index = MembershipIndex()

    assert index.drop_item_everywhere("ghost") == []


def test_index_emits_lifecycle_events() -> None:
    bus = EventBus()
    events: List[str] = []
    for name in ("item.added", "item.removed", "item.untracked"):
        bus.subscribe(name, lambda payload, name=name: events.append(name))
    index = MembershipIndex(bus)
    work, notes = make_rings(index, "work", "notes")

    work.insert("buf1")
    notes.insert("buf1")
    index.drop_item_everywhere("buf1")

    assert events == [
        "item.added",
        "item.added",
        "item.removed",
        "item.removed",
        "item.untracked",
    ]


def test_bus_unsubscribe() -> None:
    bus = EventBus()
    seen: List[object] = []
    callback = seen.append
    bus.subscribe("ping", callback)

    bus.emit("ping", 1)
    bus.unsubscribe("ping", callback)
    bus.emit("ping", 2)

    assert seen == [1]
