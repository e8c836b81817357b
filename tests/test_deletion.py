# tests/test_deletion.py

from __future__ import annotations

import asyncio

import pytest

from tidy_tasks.core.deletion import DeletionCoordinator
from tidy_tasks.tasks.task_store import TaskStore

from .fakes import FakeAnimator, spin


@pytest.mark.asyncio
async def test_remove_happens_only_after_animation_completes(store: TaskStore) -> None:
    task = store.add("a")
    assert task
    animator = FakeAnimator()
    coord = DeletionCoordinator(store, animator)

    fut = coord.request_delete(task.id)
    assert isinstance(fut, asyncio.Future)
    await spin()

    assert task.id in store, "task must stay until the slide finishes"
    assert coord.is_pending(task.id)
    (call,) = animator.pending()
    assert (call.to_value, call.duration_ms) == (-300.0, 300)

    animator.complete(call)
    assert await fut is True

    assert task.id not in store
    assert coord.pending_ids == ()
    assert coord.offset_for(task.id) == 0.0


@pytest.mark.asyncio
async def test_value_is_reset_after_removal(store: TaskStore) -> None:
    task = store.add("a")
    assert task
    animator = FakeAnimator()
    coord = DeletionCoordinator(store, animator, duration_ms=120, slide_distance=-50)

    observed = []
    store.subscribe(lambda _s: observed.append(coord.offset_for(task.id)))

    fut = coord.request_delete(task.id)
    await spin()
    animator.complete_all()
    await fut

    # At removal time the slide had reached its target; afterwards it is neutral again.
    assert observed == [-50.0]
    assert coord.offset_for(task.id) == 0.0
    assert animator.history == [(f"slide:{task.id}", -50.0, 120)]


@pytest.mark.asyncio
async def test_unknown_id_resolves_false_without_animation(store: TaskStore) -> None:
    animator = FakeAnimator()
    coord = DeletionCoordinator(store, animator)

    fut = coord.request_delete("missing")
    assert isinstance(fut, asyncio.Future)
    assert fut.done()
    assert await fut is False
    assert animator.history == []


@pytest.mark.asyncio
async def test_duplicate_request_reuses_pending_deletion(store: TaskStore) -> None:
    task = store.add("a")
    assert task
    animator = FakeAnimator()
    coord = DeletionCoordinator(store, animator)
    removals = []
    store.subscribe(removals.append)

    first = coord.request_delete(task.id)
    second = coord.request_delete(task.id)
    assert first is second

    await spin()
    assert len(animator.pending()) == 1
    animator.complete_all()
    assert await first is True
    assert len(removals) == 1


@pytest.mark.asyncio
async def test_concurrent_deletions_are_independent(store: TaskStore) -> None:
    a = store.add("a")
    b = store.add("b")
    c = store.add("c")
    assert a and b and c
    animator = FakeAnimator()
    coord = DeletionCoordinator(store, animator)

    fa = coord.request_delete(a.id)
    fb = coord.request_delete(b.id)
    await spin()

    calls = {call.value.name: call for call in animator.pending()}
    assert set(calls) == {f"slide:{a.id}", f"slide:{b.id}"}
    assert calls[f"slide:{a.id}"].value is not calls[f"slide:{b.id}"].value

    # Finish b first: only b is removed, a keeps animating.
    animator.complete(calls[f"slide:{b.id}"])
    assert await fb is True
    assert [t.id for t in store.snapshot()] == [a.id, c.id]
    assert coord.is_pending(a.id)

    animator.complete(calls[f"slide:{a.id}"])
    assert await fa is True
    assert [t.id for t in store.snapshot()] == [c.id]


@pytest.mark.asyncio
async def test_animation_failure_still_commits_removal(store: TaskStore) -> None:
    task = store.add("a")
    assert task
    animator = FakeAnimator()
    coord = DeletionCoordinator(store, animator)

    fut = coord.request_delete(task.id)
    await spin()
    animator.fail(animator.pending()[0], RuntimeError("renderer went away"))

    assert await fut is True
    assert task.id not in store
    assert coord.offset_for(task.id) == 0.0


@pytest.mark.asyncio
async def test_task_removed_elsewhere_during_animation(store: TaskStore) -> None:
    task = store.add("a")
    assert task
    animator = FakeAnimator()
    coord = DeletionCoordinator(store, animator)

    fut = coord.request_delete(task.id)
    await spin()
    store.remove(task.id)
    animator.complete_all()

    assert await fut is False
    assert coord.pending_ids == ()


@pytest.mark.asyncio
async def test_on_change_fires_on_start_and_finish(store: TaskStore) -> None:
    task = store.add("a")
    assert task
    animator = FakeAnimator()
    changes = []
    coord = DeletionCoordinator(store, animator, on_change=lambda: changes.append(coord.pending_ids))

    fut = coord.request_delete(task.id)
    await spin()
    animator.complete_all()
    await fut
    await coord.wait_idle()

    assert changes == [(task.id,), ()]
