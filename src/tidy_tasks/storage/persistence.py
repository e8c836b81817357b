# src/tidy_tasks/storage/persistence.py

from __future__ import annotations

"""
PersistenceGateway.

Loads/saves the whole task collection as one JSON array under a fixed key:
- load never raises; bad data degrades to an empty collection + error value
- save always writes the full collection (no deltas)
- schedule_save is fire-and-forget; writes land in scheduling order
"""

import asyncio
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..core.ports import KeyValueStorage
from ..errors import PersistenceLoadError, PersistenceSaveError
from ..tasks.task_models import Task, TaskSnapshot

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "tasks"

SaveErrorHandler = Callable[[PersistenceSaveError], None]


@dataclass(frozen=True, slots=True)
class LoadResult:
    tasks: TaskSnapshot
    error: PersistenceLoadError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def serialize_tasks(tasks: TaskSnapshot) -> str:
    return json.dumps([t.to_dict() for t in tasks], ensure_ascii=False)


def deserialize_tasks(blob: str) -> TaskSnapshot:
    """Parse a stored blob. Raises ValueError on anything but a well-formed task array."""
    data = json.loads(blob)
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array, got {type(data).__name__}")
    return tuple(Task.from_dict(item) for item in data)


class PersistenceGateway:
    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = DEFAULT_STORAGE_KEY,
        on_error: SaveErrorHandler | None = None,
    ) -> None:
        self._storage = storage
        self._key = key
        self._on_error = on_error
        self._write_lock = asyncio.Lock()
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def key(self) -> str:
        return self._key

    @property
    def pending_writes(self) -> int:
        return len(self._pending)

    async def load(self) -> LoadResult:
        try:
            blob = await self._storage.get_item(self._key)
        except Exception as e:
            logger.exception("Failed to read key=%s", self._key)
            err = PersistenceLoadError(f"storage read failed: {e}", key=self._key)
            err.__cause__ = e
            return LoadResult(tasks=(), error=err)

        if blob is None:
            logger.info("No stored tasks under key=%s; starting empty", self._key)
            return LoadResult(tasks=())

        try:
            tasks = deserialize_tasks(blob)
        except ValueError as e:
            # json.JSONDecodeError is a ValueError too.
            logger.warning("Stored tasks under key=%s are malformed (%s); starting empty", self._key, e)
            err = PersistenceLoadError(f"malformed stored tasks: {e}", key=self._key)
            err.__cause__ = e
            return LoadResult(tasks=(), error=err)

        logger.info("Loaded %d tasks from key=%s", len(tasks), self._key)
        return LoadResult(tasks=tasks)

    async def save(self, tasks: TaskSnapshot) -> None:
        await self._write(serialize_tasks(tasks), len(tasks))

    async def _write(self, blob: str, count: int) -> None:
        async with self._write_lock:
            try:
                await self._storage.set_item(self._key, blob)
            except Exception as e:
                raise PersistenceSaveError(f"storage write failed: {e}", key=self._key) from e
        logger.debug("Saved %d tasks to key=%s", count, self._key)

    async def _write_reporting(self, blob: str, count: int) -> None:
        try:
            await self._write(blob, count)
        except PersistenceSaveError as e:
            logger.exception("Background save failed key=%s (not retried)", self._key)
            if self._on_error is not None:
                try:
                    self._on_error(e)
                except Exception:
                    logger.exception("Save error handler failed")

    def schedule_save(self, tasks: TaskSnapshot) -> asyncio.Task[None]:
        """
        Fire-and-forget full write of `tasks`.

        Must be called from inside a running event loop. The blob is serialized
        immediately, so later mutations cannot leak into this write.
        """
        blob = serialize_tasks(tasks)
        task = asyncio.get_running_loop().create_task(self._write_reporting(blob, len(tasks)))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def flush(self) -> None:
        """Wait for every scheduled write. Failed writes were already reported."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
