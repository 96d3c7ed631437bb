"""Shared key / button mappings for pynput.

Centralises the tables used by the actuator (playback), the capture
layer (recording) and the hotkey manager so all three agree on names
and key codes.
"""
from __future__ import annotations

from typing import Any, Optional

from pynput import mouse, keyboard

from simplyauto.core.events import MouseButton

# ---------------------------------------------------------------------------
# Key-name → pynput Key
# ---------------------------------------------------------------------------

SPECIAL_KEYS: dict[str, Any] = {
    "CTRL":        keyboard.Key.ctrl,
    "SHIFT":       keyboard.Key.shift,
    "ALT":         keyboard.Key.alt,
    "WIN":         keyboard.Key.cmd,
    "SUPER":       keyboard.Key.cmd,
    "ENTER":       keyboard.Key.enter,
    "RETURN":      keyboard.Key.enter,
    "SPACE":       keyboard.Key.space,
    "BACKSPACE":   keyboard.Key.backspace,
    "TAB":         keyboard.Key.tab,
    "ESC":         keyboard.Key.esc,
    "ESCAPE":      keyboard.Key.esc,
    "DELETE":      keyboard.Key.delete,
    "HOME":        keyboard.Key.home,
    "END":         keyboard.Key.end,
    "PAGEUP":      keyboard.Key.page_up,
    "PAGEDOWN":    keyboard.Key.page_down,
    "UP":          keyboard.Key.up,
    "DOWN":        keyboard.Key.down,
    "LEFT":        keyboard.Key.left,
    "RIGHT":       keyboard.Key.right,
    "PAUSE":       keyboard.Key.pause,
    **{f"F{n}": getattr(keyboard.Key, f"f{n}") for n in range(1, 13)},
}

# Modifier names in GlobalHotKeys syntax
_HOTKEY_MODIFIERS: dict[str, str] = {
    "CTRL":  "<ctrl>",
    "ALT":   "<alt>",
    "SHIFT": "<shift>",
    "WIN":   "<cmd>",
    "SUPER": "<cmd>",
}

BUTTON_MAP: dict[MouseButton, mouse.Button] = {
    MouseButton.LEFT:   mouse.Button.left,
    MouseButton.RIGHT:  mouse.Button.right,
    MouseButton.MIDDLE: mouse.Button.middle,
}

PYNPUT_BUTTONS: dict[mouse.Button, MouseButton] = {v: k for k, v in BUTTON_MAP.items()}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def parse_key(name: str) -> Optional[Any]:
    """Convert a key name ("F9", "enter", "a") to a pynput Key or KeyCode."""
    upper = name.strip().upper()
    if upper in SPECIAL_KEYS:
        return SPECIAL_KEYS[upper]
    if len(name.strip()) == 1:
        return keyboard.KeyCode.from_char(name.strip().lower())
    return None


def parse_hotkey(combo_str: str) -> Optional[str]:
    """Convert 'Ctrl+Shift+R' / 'F6' into GlobalHotKeys format '<ctrl>+<shift>+r' / '<f6>'.

    Returns None if the combo string is empty or unparseable.
    """
    if not combo_str or not combo_str.strip():
        return None

    result: list[str] = []
    for part in (p.strip() for p in combo_str.split("+")):
        upper = part.upper()
        if upper in _HOTKEY_MODIFIERS:
            result.append(_HOTKEY_MODIFIERS[upper])
        elif upper in SPECIAL_KEYS:
            result.append(f"<{SPECIAL_KEYS[upper].name}>")
        elif len(part) == 1:
            result.append(part.lower())
        else:
            return None
    return "+".join(result)


def key_code(key) -> Optional[int]:
    """Return the virtual key code of a pynput key object, if it has one."""
    if isinstance(key, keyboard.Key):
        key = key.value
    return getattr(key, "vk", None)


def hotkey_code(combo_str: str) -> Optional[int]:
    """Key code of the last (non-modifier) key in a hotkey string."""
    if not combo_str or not combo_str.strip():
        return None
    key = parse_key(combo_str.split("+")[-1])
    return None if key is None else key_code(key)


def key_from_code(code: int) -> keyboard.KeyCode:
    return keyboard.KeyCode.from_vk(code)
