"""Global hotkey manager — system-wide keyboard shortcuts via pynput.

Listens for the key bindings held by the coordinator (F6/F9/F10/F11 by
default) and emits one Qt signal per action. The listener runs in a
daemon thread; signals cross into the GUI thread via queued connections.
"""
from __future__ import annotations

from typing import Callable, Mapping

from PySide6.QtCore import QObject, Signal

from pynput import keyboard

from simplyauto.core.app import HotkeyAction
from simplyauto.core.keys import parse_hotkey


class HotkeyManager(QObject):
    """Manages global hotkeys for the auto-clicker, recorder and player.

    Signals
    -------
    autoclicker_triggered : toggle the auto-clicker
    record_triggered      : toggle recording
    playback_triggered    : toggle playback
    stop_triggered        : stop whatever is active
    """

    autoclicker_triggered = Signal()
    record_triggered      = Signal()
    playback_triggered    = Signal()
    stop_triggered        = Signal()

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._listener: keyboard.GlobalHotKeys | None = None
        self._signals: dict[HotkeyAction, Signal] = {
            HotkeyAction.AUTOCLICKER: self.autoclicker_triggered,
            HotkeyAction.RECORD:      self.record_triggered,
            HotkeyAction.PLAYBACK:    self.playback_triggered,
            HotkeyAction.STOP:        self.stop_triggered,
        }

    @property
    def is_listening(self) -> bool:
        return self._listener is not None

    def start(self, bindings: Mapping[HotkeyAction, str]) -> list[HotkeyAction]:
        """Start listening; returns the actions whose binding could not be parsed."""
        if self._listener is not None:
            return []

        hotkeys: dict[str, Callable] = {}
        failed: list[HotkeyAction] = []
        for action, combo_str in bindings.items():
            combo = parse_hotkey(combo_str)
            if combo is None:
                failed.append(action)
                continue
            hotkeys[combo] = self._signals[action].emit

        if not hotkeys:
            return failed

        self._listener = keyboard.GlobalHotKeys(hotkeys)
        self._listener.daemon = True
        self._listener.start()
        return failed

    def stop(self) -> None:
        """Stop the global hotkey listener."""
        if self._listener is not None:
            self._listener.stop()
            self._listener = None

    def restart(self, bindings: Mapping[HotkeyAction, str]) -> list[HotkeyAction]:
        """Restart with potentially updated bindings."""
        self.stop()
        return self.start(bindings)
