# src/tidy_tasks/core/pulse.py

from __future__ import annotations

import asyncio
import logging

from .animation import AnimatedValue
from .ports import Animator

logger = logging.getLogger(__name__)

DEFAULT_PULSE_DURATION_MS = 300

# Renderer mapping of the pulse value: [0, 1] -> [1.0, 1.1]
SCALE_MIN = 1.0
SCALE_MAX = 1.1


class CreationPulse:
    """
    Feedback pulse fired after a successful add.

    Scale up (0 -> 1) then back down (1 -> 0), strictly in sequence.
    Firing again while a pulse runs restarts the sequence from the current value.
    Touches no task state.
    """

    def __init__(self, animator: Animator, *, duration_ms: int = DEFAULT_PULSE_DURATION_MS) -> None:
        self._animator = animator
        self._duration_ms = int(duration_ms)
        self.value = AnimatedValue(0.0, name="pulse")
        self._running: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._running is not None and not self._running.done()

    def display_scale(self) -> float:
        return SCALE_MIN + (SCALE_MAX - SCALE_MIN) * self.value.value

    def fire(self) -> asyncio.Task[None]:
        if self._running is not None and not self._running.done():
            self._running.cancel()
        self._running = asyncio.get_running_loop().create_task(self._sequence())
        return self._running

    async def _sequence(self) -> None:
        try:
            await self._animator.animate(self.value, to_value=1.0, duration_ms=self._duration_ms)
            await self._animator.animate(self.value, to_value=0.0, duration_ms=self._duration_ms)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Creation pulse failed")
            self.value.set_value(0.0)

    async def wait_idle(self) -> None:
        # A restart cancels the previous run; keep waiting on whichever run is current.
        while self._running is not None and not self._running.done():
            await asyncio.wait({self._running})
