"""Protocols for the platform collaborators the engine drives.

The pynput-backed implementations live in ``actuator.py`` and
``capture.py``; tests substitute in-memory fakes.
"""
from __future__ import annotations

from typing import Callable, Protocol

from simplyauto.core.events import InputEvent, MouseButton

LogFn     = Callable[[str, str], None]       # (level, message)
EventFn   = Callable[[InputEvent], None]
Completed = Callable[[], None]


def null_log(level: str, message: str) -> None:
    pass


class Actuator(Protocol):
    """Fire-and-forget pointer/keyboard synthesis."""

    def move(self, x: int, y: int) -> None: ...

    def click(self, button: MouseButton, double: bool = False) -> None: ...

    def toggle_button(self, button: MouseButton, down: bool) -> None: ...

    def scroll(self, amount: int, direction: str) -> None: ...

    def key_down(self, code: int) -> None: ...

    def key_up(self, code: int) -> None: ...


class EventSource(Protocol):
    """Delivers captured input events asynchronously.

    ``unsubscribe`` must guarantee that no callback runs after it returns.
    Both methods raise CaptureError when the underlying hook fails.
    """

    def subscribe(self, on_event: EventFn) -> None: ...

    def unsubscribe(self) -> None: ...
