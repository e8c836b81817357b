# src/tidy_tasks/core/deletion.py

from __future__ import annotations

"""
Animate-then-remove deletion.

Two phases per request:
1) begin the slide-out transition for that task
2) after the animator reports completion: TaskStore.remove, then reset the value

The removal never happens before phase 1 completes. Every task gets its own
AnimatedValue, so concurrent deletions animate and commit independently.
"""

import asyncio
import logging
from collections.abc import Callable

from ..tasks.task_store import TaskStore
from .animation import AnimatedValue
from .ports import Animator

logger = logging.getLogger(__name__)

DEFAULT_DELETE_DURATION_MS = 300
DEFAULT_SLIDE_DISTANCE = -300.0


class DeletionCoordinator:
    def __init__(
        self,
        store: TaskStore,
        animator: Animator,
        *,
        duration_ms: int = DEFAULT_DELETE_DURATION_MS,
        slide_distance: float = DEFAULT_SLIDE_DISTANCE,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._store = store
        self._animator = animator
        self._duration_ms = int(duration_ms)
        self._slide_distance = float(slide_distance)
        self._on_change = on_change
        self._values: dict[str, AnimatedValue] = {}
        self._pending: dict[str, asyncio.Task[bool]] = {}

    # ---- read API ----

    @property
    def pending_ids(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def is_pending(self, task_id: str) -> bool:
        return task_id in self._pending

    def offset_for(self, task_id: str) -> float:
        value = self._values.get(task_id)
        return value.value if value is not None else 0.0

    def offsets(self) -> dict[str, float]:
        return {task_id: v.value for task_id, v in self._values.items()}

    # ---- operations ----

    def request_delete(self, task_id: str) -> asyncio.Future[bool]:
        """
        Start deleting `task_id`. Resolves True once the task was removed.

        - unknown id: resolves False immediately, no animation
        - already pending: returns the in-flight request
        """
        existing = self._pending.get(task_id)
        if existing is not None:
            logger.debug("Deletion already pending id=%s", task_id)
            return existing

        loop = asyncio.get_running_loop()
        if task_id not in self._store:
            logger.debug("request_delete ignored: unknown id=%s", task_id)
            done: asyncio.Future[bool] = loop.create_future()
            done.set_result(False)
            return done

        value = AnimatedValue(0.0, name=f"slide:{task_id}")
        self._values[task_id] = value
        task = loop.create_task(self._run(task_id, value))
        self._pending[task_id] = task
        self._notify()
        return task

    async def _run(self, task_id: str, value: AnimatedValue) -> bool:
        try:
            try:
                await self._animator.animate(
                    value,
                    to_value=self._slide_distance,
                    duration_ms=self._duration_ms,
                )
            except Exception:
                logger.exception("Slide animation failed id=%s; removing anyway", task_id)

            removed = self._store.remove(task_id)
            value.set_value(0.0)
            logger.info("Deleted task id=%s removed=%s", task_id, removed)
            return removed
        finally:
            self._pending.pop(task_id, None)
            self._values.pop(task_id, None)
            self._notify()

    async def wait_idle(self) -> None:
        while self._pending:
            await asyncio.gather(*list(self._pending.values()), return_exceptions=True)

    def _notify(self) -> None:
        if self._on_change is None:
            return
        try:
            self._on_change()
        except Exception:
            logger.exception("Deletion change listener failed")
