# tests/test_task_store.py

from __future__ import annotations

import pytest

from laneboard.board.errors import TaskNotFound
from laneboard.board.models import Lane, Task
from laneboard.board.task_store import TaskStore

from .fakes import NOW, MemoryPersistence


def test_store_loads_persisted_tasks() -> None:
    persistence = MemoryPersistence([Task(id=1, title="a"), Task(id=2, title="b")])
    store = TaskStore(persistence)

    assert [t.id for t in store.get_all()] == [1, 2]
    assert store.find(2) == Task(id=2, title="b")
    assert store.find(3) is None
    with pytest.raises(TaskNotFound):
        store.get(3)


def test_mutations_persist_then_notify_in_order() -> None:
    persistence = MemoryPersistence()
    store = TaskStore(persistence)
    calls: list[tuple[str, list[int], int]] = []

    # Each subscriber records how many writes had happened when it ran.
    store.subscribe(lambda ts: calls.append(("first", [t.id for t in ts], len(persistence.writes))))
    store.subscribe(lambda ts: calls.append(("second", [t.id for t in ts], len(persistence.writes))))

    store.add(Task(id=1, title="a"))
    store.add(Task(id=2, title="b"))
    store.update(Task(id=1, title="a2", lane=Lane.DONE))
    store.remove(2)

    assert calls == [
        ("first", [1], 1),
        ("second", [1], 1),
        ("first", [1, 2], 2),
        ("second", [1, 2], 2),
        ("first", [1], 3),
        ("second", [1], 3),
        ("first", [1], 4),
        ("second", [1], 4),
    ]
    assert persistence.tasks == [Task(id=1, title="a2", lane=Lane.DONE)]


def test_unknown_update_and_remove_are_noops() -> None:
    persistence = MemoryPersistence([Task(id=1, title="a")])
    store = TaskStore(persistence)
    notified: list[list[Task]] = []
    store.subscribe(notified.append)

    store.update(Task(id=9, title="ghost"))
    store.remove(9)

    assert notified == []
    assert persistence.writes == []


def test_add_rejects_duplicate_id() -> None:
    store = TaskStore(MemoryPersistence([Task(id=1, title="a")]))
    with pytest.raises(ValueError):
        store.add(Task(id=1, title="again"))


def test_replace_all_swaps_whole_list() -> None:
    store = TaskStore(MemoryPersistence([Task(id=1, title="a")]))
    store.replace_all([Task(id=2, title="b"), Task(id=3, title="c")])
    assert [t.id for t in store.get_all()] == [2, 3]


def test_snapshot_is_detached_from_store() -> None:
    store = TaskStore(MemoryPersistence([Task(id=1, title="a")]))
    snapshot = store.get_all()
    snapshot.append(Task(id=2, title="b"))
    assert len(store.get_all()) == 1


def test_allocate_id_is_unique_and_time_based() -> None:
    store = TaskStore(MemoryPersistence())
    first = store.allocate_id(NOW)
    assert first == int(NOW * 1000)

    store.add(Task(id=first, title="a"))
    # Same clock reading must not produce the same id twice.
    second = store.allocate_id(NOW)
    assert second == first + 1


def test_clear_empties_board() -> None:
    persistence = MemoryPersistence([Task(id=1, title="a")])
    store = TaskStore(persistence)
    notified: list[list[Task]] = []
    store.subscribe(notified.append)

    store.clear()

    assert store.get_all() == []
    assert persistence.cleared == 1
    assert notified == [[]]
