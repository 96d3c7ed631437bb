"""Session coordinator — the outer application state.

Owns the AutoClicker, Recorder and Player and guarantees that at most one
of them is active. Every entry point takes the coordinator lock, checks
the other sessions' is-active predicates, then delegates to the session
(which takes its own lock). The order is always coordinator → session;
sessions never call back into the coordinator while holding their lock.

Entry points are safe to call from any thread (GUI, hotkey listener).
Toggles return True when they changed something and False when they were
rejected (another session busy, nothing to play, capture failure); the
reason is logged.

State changes are published as ``StateEvent``s on ``self.events``.
"""
from __future__ import annotations

import math
import random
import threading
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from simplyauto.core.autoclicker import AutoClicker
from simplyauto.core.config import AutoClickerConfig, LoopMode, PlaybackConfig
from simplyauto.core.constants import NOTIFY_CAPACITY
from simplyauto.core.errors import BusyError, CaptureError, StorageError, ValidationError
from simplyauto.core.interfaces import Actuator, EventSource, LogFn, null_log
from simplyauto.core.notifier import AUTOCLICKER, PLAYER, RECORDER, StateEvent, StateNotifier
from simplyauto.core.player import Player
from simplyauto.core.recorder import Recorder, RecorderOptions
from simplyauto.core.recording import Recording
from simplyauto.core.settings_manager import DEFAULT_HOTKEYS, SettingsManager
from simplyauto.core.storage import JSONStorage, PathLike

KeyCodeFn = Callable[[str], Optional[int]]


class HotkeyAction(Enum):
    AUTOCLICKER = "autoclicker"
    RECORD      = "record"
    PLAYBACK    = "playback"
    STOP        = "stop"


class App:
    """Coordinates the three sessions, storage, settings and notifications.

    Parameters
    ----------
    actuator : Actuator
        Shared by the AutoClicker and the Player.
    source : EventSource
        Consumed by the Recorder.
    storage : JSONStorage, optional
    settings : SettingsManager, optional
        When given, configs and hotkeys are read from and written to it.
    key_code_fn : callable, optional
        Maps a hotkey name ("F9") to the key code the event source reports,
        so hotkey presses are not recorded.
    log_fn : callable, optional
    """

    def __init__(
        self,
        actuator:        Actuator,
        source:          EventSource,
        storage:         Optional[JSONStorage]     = None,
        settings:        Optional[SettingsManager] = None,
        key_code_fn:     Optional[KeyCodeFn]       = None,
        log_fn:          Optional[LogFn]           = None,
        notify_capacity: int                       = NOTIFY_CAPACITY,
        rng:             Optional[random.Random]   = None,
    ) -> None:
        self._log      = log_fn or null_log
        self._settings = settings
        self._key_code = key_code_fn or (lambda name: None)
        self._lock     = threading.Lock()

        self.events      = StateNotifier(notify_capacity)
        self.storage     = storage or JSONStorage()
        self.autoclicker = AutoClicker(actuator, on_complete=self._on_autoclicker_complete,
                                       log_fn=self._log, rng=rng)
        self.recorder    = Recorder(source, log_fn=self._log)
        self.player      = Player(actuator, on_complete=self._on_playback_complete,
                                  log_fn=self._log)

        self._current_recording: Optional[Recording] = None
        self._current_path:      Optional[Path]      = None
        self._playback = PlaybackConfig()
        self._hotkeys: dict[HotkeyAction, str] = {
            a: DEFAULT_HOTKEYS[a.value] for a in HotkeyAction
        }

        if settings is not None:
            self._load_settings(settings)

    def _load_settings(self, settings: SettingsManager) -> None:
        for action in HotkeyAction:
            self._hotkeys[action] = settings.hotkey(action.value)
        self._playback = settings.playback_config
        try:
            self.autoclicker.set_config(settings.autoclicker_config)
        except ValidationError as exc:
            self._log("WARNING", f"Ignoring saved auto-clicker settings: {exc}")

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def _publish(self, event: StateEvent) -> None:
        self.events.publish(event)

    def _player_event(self, running: bool) -> StateEvent:
        progress, total, loop = self.player.progress()
        return StateEvent(PLAYER, running, progress=progress, total=total,
                          loop=loop, paused=self.player.is_paused)

    def _on_autoclicker_complete(self) -> None:
        self._publish(StateEvent(AUTOCLICKER, False, count=self.autoclicker.click_count))

    def _on_playback_complete(self) -> None:
        self._publish(self._player_event(False))

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    def _is_idle(self) -> bool:
        return not (self.autoclicker.is_running
                    or self.recorder.is_recording
                    or self.player.is_playing)

    def _macro_active(self) -> bool:
        return self.recorder.is_recording or self.player.is_playing

    @property
    def is_idle(self) -> bool:
        with self._lock:
            return self._is_idle()

    def _busy(self, what: str) -> bool:
        self._log("DEBUG", f"{what}: another session is active")
        return False

    # ------------------------------------------------------------------
    # Session toggles
    # ------------------------------------------------------------------

    def toggle_autoclicker(self) -> bool:
        with self._lock:
            if self._macro_active():
                return self._busy("Auto-clicker")
            self.autoclicker.toggle()
            self._publish(StateEvent(AUTOCLICKER, self.autoclicker.is_running,
                                     count=self.autoclicker.click_count))
            return True

    def toggle_recording(self) -> bool:
        with self._lock:
            if self.autoclicker.is_running or self.player.is_playing:
                return self._busy("Recorder")

            if self.recorder.is_recording:
                try:
                    self._stop_recorder()
                except CaptureError as exc:
                    self._log("ERROR", f"Failed to stop recording: {exc}")
                    return False
            else:
                self.recorder.set_options(self._recorder_options())
                try:
                    self.recorder.start()
                except CaptureError as exc:
                    self._log("ERROR", f"Failed to start recording: {exc}")
                    return False

            self._publish(StateEvent(RECORDER, self.recorder.is_recording,
                                     count=self.recorder.event_count))
            return True

    def toggle_playback(self) -> bool:
        with self._lock:
            if self.autoclicker.is_running or self.recorder.is_recording:
                return self._busy("Player")

            if self.player.is_playing:
                self.player.stop()
                self._publish(self._player_event(False))
                return True

            recording = self._current_recording
            if recording is None or recording.is_empty:
                self._log("WARNING", "Nothing to play: record or load a macro first")
                return False

            config = self._playback.normalized()
            try:
                config.validate()
            except ValidationError as exc:
                self._log("ERROR", f"Cannot play: {exc}")
                return False

            # must precede the completion event published by the player thread
            self._publish(StateEvent(PLAYER, True, progress=0,
                                     total=len(recording.events), loop=1))
            self.player.play(recording, config)
            return True

    def toggle_pause(self) -> bool:
        with self._lock:
            if not self.player.is_playing:
                return False
            self.player.toggle_pause()
            self._publish(self._player_event(self.player.is_playing))
            return True

    def stop(self) -> bool:
        """Stop whichever session is active."""
        with self._lock:
            if self.autoclicker.is_running:
                self.autoclicker.stop()
                self._publish(StateEvent(AUTOCLICKER, False,
                                         count=self.autoclicker.click_count))
                return True

            if self.recorder.is_recording:
                try:
                    self._stop_recorder()
                except CaptureError as exc:
                    self._log("ERROR", f"Failed to stop recording: {exc}")
                    return False
                self._publish(StateEvent(RECORDER, False, count=self.recorder.event_count))
                return True

            if self.player.is_playing:
                self.player.stop()
                self._publish(self._player_event(False))
                return True
            return False

    def cleanup(self) -> None:
        self.stop()
        with self._lock:
            self.autoclicker.stop()
            self.player.stop()

    def _stop_recorder(self) -> None:
        recording = self.recorder.stop()
        self._current_recording = recording
        self._current_path = None

    def _recorder_options(self) -> RecorderOptions:
        codes = {self._key_code(name) for name in self._hotkeys.values() if name}
        codes.discard(None)
        return RecorderOptions(filter_keys=frozenset(codes))

    # ------------------------------------------------------------------
    # Recordings
    # ------------------------------------------------------------------

    @property
    def current_recording(self) -> Optional[Recording]:
        with self._lock:
            return self._current_recording

    @property
    def current_file_path(self) -> Optional[Path]:
        with self._lock:
            return self._current_path

    @property
    def has_recording(self) -> bool:
        with self._lock:
            return self._current_recording is not None

    def save_recording(self, path: PathLike) -> Optional[Path]:
        """Save the current recording; returns the written path (None if nothing to save)."""
        with self._lock:
            if self._current_recording is None:
                return None
            try:
                written = self.storage.save(self._current_recording, path)
            except StorageError as exc:
                self._log("ERROR", str(exc))
                raise
            self._current_path = written
            self._log("INFO", f"Saved {written.name}")
            return written

    def load_recording(self, path: PathLike) -> Recording:
        """Load a recording and make it current; raises BusyError unless idle."""
        with self._lock:
            if not self._is_idle():
                raise BusyError("stop current operation first")
            try:
                recording = self.storage.load(path)
            except StorageError as exc:
                self._log("ERROR", str(exc))
                raise
            self._current_recording = recording
            self._current_path = Path(path)
            self._log("INFO", f"Loaded {recording.name!r} ({len(recording.events)} events)")
            return recording

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_autoclicker_config(self, config: AutoClickerConfig) -> None:
        """Validate and apply; takes effect from the next auto-clicker start."""
        self.autoclicker.set_config(config)
        if self._settings is not None:
            self._settings.store_autoclicker_config(config)

    @property
    def playback_config(self) -> PlaybackConfig:
        with self._lock:
            return self._playback

    def set_playback_speed(self, speed: float) -> None:
        """Non-positive and non-finite speeds are ignored."""
        if not 0 < speed < math.inf:
            return
        with self._lock:
            self._playback = PlaybackConfig(speed, self._playback.loop_mode,
                                            self._playback.loop_count)
            self._store_playback()

    def set_playback_loop(self, mode: LoopMode, count: int = 0) -> None:
        """Set the loop mode; ``count`` < 1 keeps the current loop count."""
        with self._lock:
            loop_count = count if count > 0 else self._playback.loop_count
            self._playback = PlaybackConfig(self._playback.speed, mode, loop_count)
            self._store_playback()

    def _store_playback(self) -> None:
        if self._settings is not None:
            self._settings.store_playback_config(self._playback)

    # ------------------------------------------------------------------
    # Hotkey bindings
    # ------------------------------------------------------------------

    def hotkey_bindings(self) -> dict[HotkeyAction, str]:
        with self._lock:
            return dict(self._hotkeys)

    def rebind_hotkey(self, action: HotkeyAction, key: str) -> None:
        """Bind ``key`` to ``action``; ValidationError if another action uses it."""
        key = key.strip()
        if not key:
            raise ValidationError("hotkey cannot be empty")
        with self._lock:
            for other, bound in self._hotkeys.items():
                if other is not action and bound.upper() == key.upper():
                    raise ValidationError(f"key already in use by {other.value}")
            self._hotkeys[action] = key
            if self._settings is not None:
                self._settings.set_hotkey(action.value, key)

    def callback_for(self, action: HotkeyAction) -> Callable[[], bool]:
        return {
            HotkeyAction.AUTOCLICKER: self.toggle_autoclicker,
            HotkeyAction.RECORD:      self.toggle_recording,
            HotkeyAction.PLAYBACK:    self.toggle_playback,
            HotkeyAction.STOP:        self.stop,
        }[action]
