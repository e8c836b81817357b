# src/tidy_tasks/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the TaskListApp, loads persisted tasks,
then runs the console renderer until the user quits.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_app
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _run(settings) -> None:
    app = create_app(settings=settings)

    result = await app.start()
    if result.error is not None:
        print(f"Stored tasks could not be read; starting with an empty list. ({result.error})")

    try:
        await run_console_loop(app)
    finally:
        await app.shutdown()


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    file_level = getattr(logging, level_name, logging.INFO)
    # Console stays quiet (WARNING+) so logs do not interleave with the list.
    setup_logging(log_dir=settings.data_dir, file_level=file_level)

    logger.info("Starting %s...", settings.app_name)
    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    logger.info("Bye.")


if __name__ == "__main__":
    main()
