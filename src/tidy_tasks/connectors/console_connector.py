# src/tidy_tasks/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
import sys
import threading
from datetime import datetime
from typing import TextIO

from ..cli.commands import format_view, registry as command_registry
from ..core.ports import Renderer
from ..core.state import TaskListApp, TaskListView
from ..tasks.task_models import TaskSnapshot

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


class ConsoleRenderer(Renderer):
    """
    Text renderer: redraws the list whenever the collection changes.

    Edit-session and animation-only changes are shown through command replies
    instead, so the terminal is not flooded with identical lists.
    """

    def __init__(self) -> None:
        self._last: TaskSnapshot | None = None
        self.frames = 0

    def render(self, view: TaskListView) -> None:
        if view.tasks == self._last:
            return
        self._last = view.tasks
        self.frames += 1
        print(format_view(view), flush=True)


class StdinReader:
    """
    Line reader backed by a daemon thread.

    A blocked read in the default executor would keep asyncio.run() from
    returning on Ctrl+C, because the executor joins its workers on shutdown.
    A daemon thread is simply abandoned at exit.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._queue: asyncio.Queue[str | None] | None = None
        self.thread: threading.Thread | None = None

    def _start(self) -> asyncio.Queue[str | None]:
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue[str | None] = asyncio.Queue()
        self._queue = queue
        self.thread = threading.Thread(
            target=self._pump,
            args=(loop, queue),
            name="tidy-stdin",
            daemon=True,
        )
        self.thread.start()
        return queue

    def _pump(self, loop: asyncio.AbstractEventLoop, queue: asyncio.Queue[str | None]) -> None:
        stream = self._stream or sys.stdin
        while True:
            try:
                raw = stream.readline()
            except (OSError, ValueError):
                logger.exception("Console input failed; treating as EOF.")
                raw = ""

            # None marks EOF; a line keeps everything but its newline, like input().
            line = (raw[:-1] if raw.endswith("\n") else raw) if raw else None
            try:
                loop.call_soon_threadsafe(queue.put_nowait, line)
            except RuntimeError:
                # Event loop already closed.
                return
            if line is None:
                return

    async def readline(self) -> str:
        queue = self._queue or self._start()
        line = await queue.get()
        if line is None:
            queue.put_nowait(None)
            raise EOFError
        return line


async def _read_line(reader: StdinReader, prompt: str) -> str:
    print(prompt, end="", flush=True)
    return await reader.readline()


async def run_console_loop(app: TaskListApp, reader: StdinReader | None = None) -> None:
    reader = reader or StdinReader()
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Type a task to add it. Use /help for commands. Use /exit to quit.\n")

    unsubscribe = app.attach(ConsoleRenderer())

    try:
        while True:
            try:
                line = await _read_line(reader, ">>> ")
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except asyncio.CancelledError:
                # Ctrl+C under asyncio.run(); the caller still flushes on the way out.
                logger.info("Console loop cancelled, exiting.")
                print()
                raise

            user_input = line.strip()
            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            try:
                reply = await command_registry.handle(app, line.lstrip(), emit=_print_ts)
            except Exception:
                logger.exception("Command handler crashed.")
                reply = "Internal error while handling a command."

            if reply is not None:
                _print_ts(reply)
                continue

            # Plain text: the raw line is the new task (stored untrimmed).
            if app.add_new_task(line) is None:
                _print_ts("Nothing to add (task text is empty).")
    finally:
        unsubscribe()
        logger.info("Console connector finished.")
