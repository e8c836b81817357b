# src/tidy_tasks/storage/kv.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import re
from pathlib import Path

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class InMemoryStorage:
    """Dict-backed KeyValueStorage. Used in tests and when persistence is disabled."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self.items[key] = value


class JsonFileStorage:
    """
    One file per key under `directory` (<dir>/<key>.json).

    Writes are atomic (temp file + os.replace). File I/O runs in a worker
    thread so the event loop is never blocked on disk.
    """

    def __init__(self, directory: str | Path) -> None:
        self._dir = Path(directory)
        self._dir.mkdir(parents=True, exist_ok=True)
        logger.info("JsonFileStorage ready dir=%s", self._dir)

    def path_for(self, key: str) -> Path:
        if not _KEY_RE.match(key or ""):
            raise ValueError(f"invalid storage key: {key!r}")
        return self._dir / f"{key}.json"

    def _read(self, path: Path) -> str | None:
        if not path.exists():
            return None
        return path.read_text("utf-8")

    def _write(self, path: Path, value: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(value, "utf-8")
        os.replace(tmp, path)
        with contextlib.suppress(OSError):
            os.chmod(path, 0o600)

    async def get_item(self, key: str) -> str | None:
        path = self.path_for(key)
        return await asyncio.to_thread(self._read, path)

    async def set_item(self, key: str, value: str) -> None:
        path = self.path_for(key)
        await asyncio.to_thread(self._write, path, value)
        logger.debug("Wrote key=%s bytes=%d path=%s", key, len(value), path)
