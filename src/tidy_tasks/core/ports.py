# src/tidy_tasks/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage backends, animation drivers and renderers swappable and makes testing easier.
"""

from typing import Any, Protocol


class KeyValueStorage(Protocol):
    """
    Durable key-value slot holding opaque string blobs.

    get_item returns None when the key has never been written.
    """

    async def get_item(self, key: str) -> str | None: ...
    async def set_item(self, key: str, value: str) -> None: ...


class AnimatableValue(Protocol):
    @property
    def value(self) -> float: ...
    def set_value(self, value: float) -> None: ...


class Animator(Protocol):
    """
    Renderer-side animation capability.

    animate() drives `value` towards `to_value` over `duration_ms` and returns
    once the transition is complete. Returning is the completion signal.
    """

    async def animate(self, value: AnimatableValue, *, to_value: float, duration_ms: int) -> None: ...


class Renderer(Protocol):
    # view is a TaskListView (kept as Any to avoid import coupling)
    def render(self, view: Any) -> None: ...
