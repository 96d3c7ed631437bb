"""Input event types shared by the recorder, player and storage.

Event kinds reuse the Windows message codes so recordings written by
earlier versions of the file format load unchanged.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional


class EventKind(IntEnum):
    MOUSE_MOVE        = 0x0200
    MOUSE_LEFT_DOWN   = 0x0201
    MOUSE_LEFT_UP     = 0x0202
    MOUSE_RIGHT_DOWN  = 0x0204
    MOUSE_RIGHT_UP    = 0x0205
    MOUSE_MIDDLE_DOWN = 0x0207
    MOUSE_MIDDLE_UP   = 0x0208
    MOUSE_WHEEL       = 0x020A
    KEY_DOWN          = 0x0100
    KEY_UP            = 0x0101

    @property
    def is_mouse(self) -> bool:
        return self >= EventKind.MOUSE_MOVE

    @property
    def is_key(self) -> bool:
        return self in (EventKind.KEY_DOWN, EventKind.KEY_UP)


class MouseButton(Enum):
    LEFT   = "left"
    RIGHT  = "right"
    MIDDLE = "middle"


class ClickType(Enum):
    SINGLE = "single"
    DOUBLE = "double"


@dataclass(frozen=True)
class InputEvent:
    """One captured input event.

    ``timestamp`` is seconds elapsed since the recording session started.
    """

    kind:      EventKind
    timestamp: float = 0.0
    x:         int   = 0
    y:         int   = 0
    key_code:  int   = 0
    scan_code: int   = 0
    delta:     int   = 0


# kind → (button, pressed)
_BUTTON_TRANSITIONS: dict[EventKind, tuple[MouseButton, bool]] = {
    EventKind.MOUSE_LEFT_DOWN:   (MouseButton.LEFT,   True),
    EventKind.MOUSE_LEFT_UP:     (MouseButton.LEFT,   False),
    EventKind.MOUSE_RIGHT_DOWN:  (MouseButton.RIGHT,  True),
    EventKind.MOUSE_RIGHT_UP:    (MouseButton.RIGHT,  False),
    EventKind.MOUSE_MIDDLE_DOWN: (MouseButton.MIDDLE, True),
    EventKind.MOUSE_MIDDLE_UP:   (MouseButton.MIDDLE, False),
}

_BUTTON_KINDS: dict[tuple[MouseButton, bool], EventKind] = {
    v: k for k, v in _BUTTON_TRANSITIONS.items()
}


def button_transition(kind: EventKind) -> Optional[tuple[MouseButton, bool]]:
    """Return (button, pressed) for a button event kind, else None."""
    return _BUTTON_TRANSITIONS.get(kind)


def button_event_kind(button: MouseButton, pressed: bool) -> EventKind:
    return _BUTTON_KINDS[(button, pressed)]
