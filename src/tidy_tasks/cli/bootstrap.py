# src/tidy_tasks/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete storage/animator implementations into a TaskListApp.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.animation import InstantAnimator, TimerAnimator
from ..core.ports import Animator, KeyValueStorage
from ..core.state import TaskListApp
from ..errors import PersistenceSaveError
from ..storage.kv import InMemoryStorage, JsonFileStorage
from ..storage.persistence import PersistenceGateway

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    if settings.persist:
        settings.storage_dir.mkdir(parents=True, exist_ok=True)


def _report_save_error(err: PersistenceSaveError) -> None:
    # The in-memory list stays authoritative; the next commit rewrites the whole blob.
    logger.warning("Tasks were not saved (key=%s): %s", err.key, err)


def build_storage(settings) -> KeyValueStorage:
    if not settings.persist:
        logger.info("Persistence disabled; tasks live in memory only.")
        return InMemoryStorage()
    return JsonFileStorage(settings.storage_dir)


def build_animator(settings) -> Animator:
    return TimerAnimator() if settings.animations else InstantAnimator()


def create_app(*, settings=None, storage: KeyValueStorage | None = None) -> TaskListApp:
    """
    Create a TaskListApp from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    gateway = PersistenceGateway(
        storage if storage is not None else build_storage(settings),
        key=settings.storage_key,
        on_error=_report_save_error,
    )

    return TaskListApp(
        gateway=gateway,
        animator=build_animator(settings),
        delete_duration_ms=settings.delete_duration_ms,
        delete_slide_distance=settings.delete_slide_distance,
        pulse_duration_ms=settings.pulse_duration_ms,
    )
