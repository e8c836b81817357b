# src/tidy_tasks/core/animation.py

from __future__ import annotations

import asyncio
import logging

logger = logging.getLogger(__name__)


class AnimatedValue:
    """A scalar a renderer reads while an animator drives it."""

    __slots__ = ("name", "_value")

    def __init__(self, initial: float = 0.0, *, name: str = "") -> None:
        self.name = name
        self._value = float(initial)

    @property
    def value(self) -> float:
        return self._value

    def set_value(self, value: float) -> None:
        self._value = float(value)

    def __repr__(self) -> str:
        return f"AnimatedValue(name={self.name!r}, value={self._value})"


class TimerAnimator:
    """
    Reference animator: linear interpolation driven by asyncio.sleep.

    Completion is signalled by animate() returning.
    """

    def __init__(self, *, steps: int = 10) -> None:
        self._steps = max(1, int(steps))

    async def animate(self, value: AnimatedValue, *, to_value: float, duration_ms: int) -> None:
        if duration_ms <= 0:
            value.set_value(to_value)
            return

        start = value.value
        step_s = duration_ms / 1000.0 / self._steps
        for i in range(1, self._steps + 1):
            await asyncio.sleep(step_s)
            value.set_value(start + (to_value - start) * (i / self._steps))
        logger.debug("Animation done name=%s to=%s duration_ms=%s", value.name, to_value, duration_ms)


class InstantAnimator:
    """Jumps straight to the target (headless runs, animations disabled)."""

    async def animate(self, value: AnimatedValue, *, to_value: float, duration_ms: int) -> None:
        value.set_value(to_value)
