# src/tidy_tasks/core/edit_session.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from ..tasks.task_models import Task
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


class EditState(StrEnum):
    IDLE = "idle"
    EDITING = "editing"


@dataclass(frozen=True, slots=True)
class EditSessionState:
    active: bool
    target_id: str | None
    draft_text: str


IDLE_STATE = EditSessionState(active=False, target_id=None, draft_text="")


class EditSession:
    """
    Tracks at most one task being edited and its unsaved draft.

    Transitions:
    - start_edit:   IDLE -> EDITING, or EDITING -> EDITING (previous draft dropped)
    - update_draft: EDITING only, replaces the draft verbatim
    - commit:       EDITING -> IDLE, writes the draft through TaskStore.edit
    - cancel:       EDITING -> IDLE, store untouched
    """

    def __init__(self, store: TaskStore, *, on_change: Callable[[], None] | None = None) -> None:
        self._store = store
        self._on_change = on_change
        self._state = IDLE_STATE

    @property
    def state(self) -> EditSessionState:
        return self._state

    @property
    def mode(self) -> EditState:
        return EditState.EDITING if self._state.active else EditState.IDLE

    @property
    def is_editing(self) -> bool:
        return self._state.active

    @property
    def target_id(self) -> str | None:
        return self._state.target_id

    @property
    def draft_text(self) -> str:
        return self._state.draft_text

    def _set(self, state: EditSessionState) -> None:
        self._state = state
        if self._on_change is not None:
            self._on_change()

    def start_edit(self, task_id: str) -> bool:
        task = self._store.get(task_id)
        if task is None:
            logger.debug("start_edit ignored: unknown id=%s", task_id)
            return False

        if self._state.active and self._state.target_id != task_id:
            logger.debug("Discarding unsaved draft for id=%s", self._state.target_id)

        self._set(EditSessionState(active=True, target_id=task_id, draft_text=task.text))
        return True

    def update_draft(self, text: str) -> bool:
        if not self._state.active:
            return False
        self._set(EditSessionState(active=True, target_id=self._state.target_id, draft_text=text))
        return True

    def commit(self) -> Task | None:
        if not self._state.active or self._state.target_id is None:
            return None

        target_id, draft = self._state.target_id, self._state.draft_text
        # Task may have been deleted mid-edit; store.edit is then a no-op.
        updated = self._store.edit(target_id, draft)
        self._set(IDLE_STATE)
        return updated

    def cancel(self) -> bool:
        if not self._state.active:
            return False
        self._set(IDLE_STATE)
        return True
