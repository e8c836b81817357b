# tests/test_pulse.py

from __future__ import annotations

import asyncio

import pytest

from tidy_tasks.core.animation import AnimatedValue, InstantAnimator, TimerAnimator
from tidy_tasks.core.pulse import CreationPulse

from .fakes import FakeAnimator, spin


@pytest.mark.asyncio
async def test_scale_down_starts_only_after_scale_up_finished() -> None:
    animator = FakeAnimator()
    pulse = CreationPulse(animator, duration_ms=300)

    pulse.fire()
    await spin()
    (up,) = animator.pending()
    assert (up.to_value, up.duration_ms) == (1.0, 300)

    animator.complete(up)
    await spin()
    (down,) = animator.pending()
    assert down.to_value == 0.0
    assert pulse.value.value == 1.0
    assert pulse.display_scale() == pytest.approx(1.1)

    animator.complete(down)
    await pulse.wait_idle()
    assert pulse.value.value == 0.0
    assert pulse.display_scale() == pytest.approx(1.0)
    assert [h[1] for h in animator.history] == [1.0, 0.0]


@pytest.mark.asyncio
async def test_firing_again_restarts_the_sequence() -> None:
    animator = FakeAnimator()
    pulse = CreationPulse(animator)

    first = pulse.fire()
    await spin()
    second = pulse.fire()
    await spin()

    assert first.cancelled()
    assert second is not first
    animator.complete_all()
    await spin()
    animator.complete_all()
    await pulse.wait_idle()
    assert pulse.running is False
    assert pulse.value.value == 0.0


@pytest.mark.asyncio
async def test_timer_animator_reaches_target() -> None:
    value = AnimatedValue(0.0, name="x")
    await TimerAnimator(steps=4).animate(value, to_value=-300.0, duration_ms=8)
    assert value.value == -300.0


@pytest.mark.asyncio
async def test_timer_animator_zero_duration_jumps() -> None:
    value = AnimatedValue(5.0)
    await asyncio.wait_for(TimerAnimator().animate(value, to_value=1.0, duration_ms=0), timeout=1)
    assert value.value == 1.0


@pytest.mark.asyncio
async def test_instant_animator() -> None:
    value = AnimatedValue()
    await InstantAnimator().animate(value, to_value=1.0, duration_ms=300)
    assert value.value == 1.0
