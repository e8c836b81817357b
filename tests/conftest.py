# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tidy_tasks.core.state import TaskListApp
from tidy_tasks.storage.persistence import PersistenceGateway
from tidy_tasks.tasks.task_store import TaskStore

from .fakes import FakeAnimator, RecordingStorage


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the bootstrap code.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="tidy-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        storage_dir=tmp_path / "data" / "storage",
        persist=True,
        storage_key="tasks",
        animations=False,
        delete_duration_ms=300,
        delete_slide_distance=-300.0,
        pulse_duration_ms=300,
    )


@pytest.fixture()
def store() -> TaskStore:
    counter = iter(range(1, 1_000_000))
    return TaskStore(id_factory=lambda: f"t{next(counter)}")


@pytest.fixture()
def storage() -> RecordingStorage:
    return RecordingStorage()


@pytest.fixture()
def animator() -> FakeAnimator:
    # Deletion slides wait for the test; the creation pulse completes immediately.
    return FakeAnimator(hold=("slide:",))


@pytest.fixture()
def app(storage: RecordingStorage, animator: FakeAnimator, store: TaskStore) -> TaskListApp:
    """
    TaskListApp wired with deterministic fakes.

    NOTE: the real PersistenceGateway and TaskStore are used here because
    their interplay is part of what we want to test.
    """
    return TaskListApp(gateway=PersistenceGateway(storage), animator=animator, store=store)
