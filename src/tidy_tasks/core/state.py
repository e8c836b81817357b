# src/tidy_tasks/core/state.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from ..storage.persistence import LoadResult, PersistenceGateway
from ..tasks.task_models import Task, TaskSnapshot
from ..tasks.task_store import TaskStore
from .deletion import DeletionCoordinator
from .edit_session import EditSession, EditSessionState
from .ports import Animator, Renderer
from .pulse import CreationPulse

logger = logging.getLogger(__name__)

ViewListener = Callable[["TaskListView"], None]


@dataclass(frozen=True, slots=True)
class TaskListView:
    """Everything a renderer needs to draw one frame."""

    tasks: TaskSnapshot
    edit: EditSessionState
    deleting: dict[str, float] = field(default_factory=dict)
    pulse_scale: float = 1.0

    def position_of(self, task_id: str) -> int | None:
        for i, t in enumerate(self.tasks, start=1):
            if t.id == task_id:
                return i
        return None


class TaskListApp:
    """
    The task engine as seen by a renderer.

    Intents in (add/toggle/edit/delete), views out (subscribe or view()).
    Owned by the composition root; there is no module-level instance.
    """

    def __init__(
        self,
        *,
        gateway: PersistenceGateway,
        animator: Animator,
        store: TaskStore | None = None,
        delete_duration_ms: int = 300,
        delete_slide_distance: float = -300.0,
        pulse_duration_ms: int = 300,
    ) -> None:
        self.store = store if store is not None else TaskStore()
        self.gateway = gateway
        self.edit_session = EditSession(self.store, on_change=self._emit)
        self.deletions = DeletionCoordinator(
            self.store,
            animator,
            duration_ms=delete_duration_ms,
            slide_distance=delete_slide_distance,
            on_change=self._emit,
        )
        self.pulse = CreationPulse(animator, duration_ms=pulse_duration_ms)
        self._listeners: list[ViewListener] = []
        self._started = False

    # ---- lifecycle ----

    async def start(self) -> LoadResult:
        """Load persisted tasks, seed the store, then persist every later commit."""
        if self._started:
            raise RuntimeError("TaskListApp already started")

        result = await self.gateway.load()
        if result.error is not None:
            logger.warning("Starting with an empty list: %s", result.error)
        self.store.replace_all(result.tasks)

        self.store.subscribe(self.gateway.schedule_save)
        self.store.subscribe(lambda _snap: self._emit())
        self._started = True
        self._emit()
        return result

    async def settle(self) -> None:
        """Wait until pending deletions, the pulse and scheduled writes are done."""
        await self.deletions.wait_idle()
        await self.pulse.wait_idle()
        await self.gateway.flush()

    async def shutdown(self) -> None:
        await self.settle()
        logger.info("TaskListApp stopped with %d tasks", self.store.count())

    # ---- outputs ----

    def view(self) -> TaskListView:
        return TaskListView(
            tasks=self.store.snapshot(),
            edit=self.edit_session.state,
            deleting=self.deletions.offsets(),
            pulse_scale=self.pulse.display_scale(),
        )

    def subscribe(self, listener: ViewListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def attach(self, renderer: Renderer) -> Callable[[], None]:
        """Subscribe a renderer and draw the current view once."""
        unsubscribe = self.subscribe(renderer.render)
        renderer.render(self.view())
        return unsubscribe

    def _emit(self) -> None:
        if not self._listeners:
            return
        view = self.view()
        for listener in list(self._listeners):
            try:
                listener(view)
            except Exception:
                logger.exception("View listener failed")

    # ---- intents ----

    def add_new_task(self, text: str) -> Task | None:
        task = self.store.add(text)
        if task is not None:
            self.pulse.fire()
        return task

    def toggle_completion_status(self, task_id: str) -> Task | None:
        return self.store.toggle(task_id)

    def start_edit_task(self, task_id: str) -> bool:
        return self.edit_session.start_edit(task_id)

    def update_draft_text(self, text: str) -> bool:
        return self.edit_session.update_draft(text)

    def save_edited_task(self) -> Task | None:
        return self.edit_session.commit()

    def cancel_edit(self) -> bool:
        return self.edit_session.cancel()

    def remove_task(self, task_id: str) -> asyncio.Future[bool]:
        """Returns an awaitable resolving True once the task is gone."""
        return self.deletions.request_delete(task_id)
