# tests/test_persistence.py

from __future__ import annotations

import json

import pytest

from tidy_tasks.errors import PersistenceLoadError, PersistenceSaveError
from tidy_tasks.storage.persistence import PersistenceGateway
from tidy_tasks.tasks.task_models import Task

from .fakes import RecordingStorage


@pytest.mark.asyncio
async def test_load_without_stored_key_is_empty_and_ok(storage: RecordingStorage) -> None:
    result = await PersistenceGateway(storage).load()
    assert result.tasks == ()
    assert result.ok
    assert result.error is None


@pytest.mark.asyncio
async def test_save_then_load_round_trip(storage: RecordingStorage) -> None:
    gw = PersistenceGateway(storage)
    tasks = (Task("1", "Buy milk"), Task("2", "  spaced  ", True), Task("3", "Ünïcode ✓"))

    await gw.save(tasks)
    result = await gw.load()

    assert result.ok
    assert result.tasks == tasks


@pytest.mark.asyncio
async def test_blob_is_full_json_array_under_fixed_key(storage: RecordingStorage) -> None:
    gw = PersistenceGateway(storage)
    await gw.save((Task("1", "a"), Task("2", "b", True)))

    assert list(storage.items) == ["tasks"]
    assert json.loads(storage.items["tasks"]) == [
        {"id": "1", "text": "a", "completed": False},
        {"id": "2", "text": "b", "completed": True},
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "blob",
    [
        "{not json",
        '{"id": "1"}',
        "null",
        '[{"id": "1", "text": 5, "completed": false}]',
        '[{"id": "1", "text": "a", "completed": "yes"}]',
        '["just a string"]',
    ],
)
async def test_malformed_blob_falls_back_to_empty_with_error(blob: str) -> None:
    storage = RecordingStorage({"tasks": blob})
    result = await PersistenceGateway(storage).load()

    assert result.tasks == ()
    assert isinstance(result.error, PersistenceLoadError)
    assert result.error.key == "tasks"


@pytest.mark.asyncio
async def test_unreadable_storage_is_reported_not_raised(storage: RecordingStorage) -> None:
    storage.fail_reads = True
    result = await PersistenceGateway(storage).load()
    assert result.tasks == ()
    assert isinstance(result.error, PersistenceLoadError)


@pytest.mark.asyncio
async def test_direct_save_failure_raises(storage: RecordingStorage) -> None:
    storage.fail_writes = True
    with pytest.raises(PersistenceSaveError):
        await PersistenceGateway(storage).save((Task("1", "a"),))


@pytest.mark.asyncio
async def test_scheduled_save_failure_is_reported_not_retried(storage: RecordingStorage) -> None:
    errors: list[PersistenceSaveError] = []
    gw = PersistenceGateway(storage, on_error=errors.append)
    storage.fail_writes = True

    gw.schedule_save((Task("1", "a"),))
    await gw.flush()

    assert len(errors) == 1
    assert storage.writes == []
    assert gw.pending_writes == 0


@pytest.mark.asyncio
async def test_scheduled_saves_are_not_batched_and_land_in_order(storage: RecordingStorage) -> None:
    gw = PersistenceGateway(storage)
    snaps = [tuple(Task(str(i), f"t{i}") for i in range(n)) for n in range(1, 6)]

    for snap in snaps:
        gw.schedule_save(snap)
    await gw.flush()

    assert len(storage.writes) == 5
    assert [len(json.loads(v)) for _k, v in storage.writes] == [1, 2, 3, 4, 5]
    assert (await gw.load()).tasks == snaps[-1]


@pytest.mark.asyncio
async def test_custom_key(storage: RecordingStorage) -> None:
    gw = PersistenceGateway(storage, key="other")
    await gw.save((Task("1", "a"),))
    assert "other" in storage.items
    assert (await PersistenceGateway(storage).load()).tasks == ()
