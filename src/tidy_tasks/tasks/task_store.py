# src/tidy_tasks/tasks/task_store.py

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable
from dataclasses import replace

from .task_models import Task, TaskSnapshot

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[TaskSnapshot], None]
IdFactory = Callable[[], str]

_MAX_ID_ATTEMPTS = 16


def new_task_id() -> str:
    return uuid.uuid4().hex


class TaskStore:
    """
    Authoritative in-memory task collection.

    The collection is an insertion-ordered dict keyed by id:
    - add appends at the end
    - remove deletes in place
    - toggle/edit replace the Task object without moving it

    Every committed mutation notifies subscribers exactly once with a fresh
    immutable snapshot. No-ops (empty text, unknown id) notify nothing.
    """

    def __init__(self, *, id_factory: IdFactory = new_task_id) -> None:
        self._tasks: dict[str, Task] = {}
        self._id_factory = id_factory
        self._listeners: list[SnapshotListener] = []

    # ---- read API ----

    def snapshot(self) -> TaskSnapshot:
        return tuple(self._tasks.values())

    def get(self, task_id: str) -> Task | None:
        return self._tasks.get(task_id)

    def count(self) -> int:
        return len(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks

    # ---- subscriptions ----

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _commit(self, action: str, task_id: str) -> None:
        snap = self.snapshot()
        logger.debug("TaskStore %s id=%s total=%d", action, task_id, len(snap))
        for listener in list(self._listeners):
            try:
                listener(snap)
            except Exception:
                logger.exception("Snapshot listener failed after %s id=%s", action, task_id)

    # ---- mutations ----

    def replace_all(self, tasks: Iterable[Task]) -> None:
        """Seed the collection (startup load). Does not notify."""
        seeded: dict[str, Task] = {}
        for task in tasks:
            if task.id in seeded:
                logger.warning("Duplicate task id %s in loaded data; keeping first", task.id)
                continue
            seeded[task.id] = task
        self._tasks = seeded
        logger.info("TaskStore seeded total=%d", len(seeded))

    def _next_id(self) -> str:
        for _ in range(_MAX_ID_ATTEMPTS):
            candidate = self._id_factory()
            if candidate not in self._tasks:
                return candidate
            logger.warning("Task id collision on %s; regenerating", candidate)
        raise RuntimeError("id factory keeps returning ids already in use")

    def add(self, raw_text: str) -> Task | None:
        # Trim only for the emptiness check; the stored text is the raw input.
        if not raw_text or not raw_text.strip():
            logger.debug("add ignored: empty text")
            return None

        task = Task(id=self._next_id(), text=raw_text, completed=False)
        self._tasks[task.id] = task
        self._commit("add", task.id)
        return task

    def remove(self, task_id: str) -> bool:
        if self._tasks.pop(task_id, None) is None:
            logger.debug("remove ignored: unknown id=%s", task_id)
            return False
        self._commit("remove", task_id)
        return True

    def toggle(self, task_id: str) -> Task | None:
        task = self._tasks.get(task_id)
        if task is None:
            logger.debug("toggle ignored: unknown id=%s", task_id)
            return None
        updated = replace(task, completed=not task.completed)
        self._tasks[task_id] = updated
        self._commit("toggle", task_id)
        return updated

    def edit(self, task_id: str, new_text: str) -> Task | None:
        # No trimming and no empty check on edit.
        task = self._tasks.get(task_id)
        if task is None:
            logger.debug("edit ignored: unknown id=%s", task_id)
            return None
        updated = replace(task, text=new_text)
        self._tasks[task_id] = updated
        self._commit("edit", task_id)
        return updated
