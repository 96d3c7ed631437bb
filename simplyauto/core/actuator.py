"""pynput-backed Actuator — synthesises pointer and keyboard input."""
from __future__ import annotations

from pynput import mouse, keyboard

from simplyauto.core.events import MouseButton
from simplyauto.core.keys import BUTTON_MAP, key_from_code


class PynputActuator:
    """Fire-and-forget input synthesis over pynput controllers."""

    def __init__(self) -> None:
        self._mc = mouse.Controller()
        self._kc = keyboard.Controller()

    def position(self) -> tuple[int, int]:
        """Return the current mouse position as (x, y)."""
        x, y = self._mc.position
        return int(x), int(y)

    # ------------------------------------------------------------------
    # Mouse
    # ------------------------------------------------------------------

    def move(self, x: int, y: int) -> None:
        self._mc.position = (x, y)

    def click(self, button: MouseButton, double: bool = False) -> None:
        self._mc.click(BUTTON_MAP[button], 2 if double else 1)

    def toggle_button(self, button: MouseButton, down: bool) -> None:
        if down:
            self._mc.press(BUTTON_MAP[button])
        else:
            self._mc.release(BUTTON_MAP[button])

    def scroll(self, amount: int, direction: str) -> None:
        """Scroll ``amount`` wheel units "up" or "down"."""
        dy = amount if direction == "up" else -amount
        self._mc.scroll(0, dy)

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------

    def key_down(self, code: int) -> None:
        self._kc.press(key_from_code(code))

    def key_up(self, code: int) -> None:
        self._kc.release(key_from_code(code))
