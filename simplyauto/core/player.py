"""Macro playback engine.

Architecture
------------
Player (caller threads: UI, hotkeys, coordinator)
  └─ _playback_loop (threading.Thread, one per play() call)
       ├─ CancelToken              — stop / pause / resume for this activation
       ├─ _play_events()           — one pass over the Recording
       │    ├─ wait (ts[i] - ts[i-1]) / speed, interruptible
       │    └─ _execute(event)     — Actuator call inside token.acting()
       └─ loop evaluation          — once / count / continuous

Pausing
-------
Pause takes effect at the next checkpoint: before an event, or during the
pre-event sleep. A sleep interrupted by pause is re-timed from the resume
point: the full scaled delay is waited again once resumed. The pending
event is executed exactly once either way.

The Recording is only read here; it is never mutated.
"""
from __future__ import annotations

import threading
from enum import Enum
from typing import Optional

from simplyauto.core.cancel import CancelToken
from simplyauto.core.config import LoopMode, PlaybackConfig
from simplyauto.core.events import EventKind, InputEvent, button_transition
from simplyauto.core.interfaces import Actuator, Completed, LogFn, null_log
from simplyauto.core.recording import Recording


class PlayerState(Enum):
    IDLE    = "idle"
    PLAYING = "playing"
    PAUSED  = "paused"


def should_loop(config: PlaybackConfig, current_loop: int) -> bool:
    """Return True if pass number ``current_loop`` (1-based) should run."""
    if config.loop_mode is LoopMode.CONTINUOUS:
        return True
    if config.loop_mode is LoopMode.COUNT:
        return current_loop <= config.loop_count
    return current_loop == 1


def scaled_delay(prev: InputEvent, event: InputEvent, speed: float) -> float:
    """Seconds to wait before ``event`` given the previous one and a speed factor."""
    return (event.timestamp - prev.timestamp) / speed


class Player:
    """Replays a Recording through an Actuator on a background thread.

    Parameters
    ----------
    actuator : Actuator
    on_complete : callable, optional
        Invoked (outside any lock) when playback ends by itself.
    log_fn : callable, optional
    """

    def __init__(
        self,
        actuator:    Actuator,
        on_complete: Optional[Completed] = None,
        log_fn:      Optional[LogFn]     = None,
    ) -> None:
        self._actuator    = actuator
        self._on_complete = on_complete
        self._log         = log_fn or null_log

        self._lock          = threading.Lock()   # state / token / recording
        self._progress_lock = threading.Lock()   # current_idx / current_loop
        self._state         = PlayerState.IDLE
        self._recording: Optional[Recording]     = None
        self._config        = PlaybackConfig()
        self._current_idx   = 0
        self._current_loop  = 0
        self._generation    = 0
        self._token:  Optional[CancelToken]      = None
        self._thread: Optional[threading.Thread] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> PlayerState:
        with self._lock:
            return self._state

    @property
    def is_playing(self) -> bool:
        """True while Playing or Paused."""
        return self.state is not PlayerState.IDLE

    @property
    def is_paused(self) -> bool:
        return self.state is PlayerState.PAUSED

    @property
    def config(self) -> PlaybackConfig:
        with self._lock:
            return self._config

    def progress(self) -> tuple[int, int, int]:
        """Return (events executed in this pass, total events, current loop)."""
        with self._lock:
            recording = self._recording
        if recording is None:
            return 0, 0, 0
        with self._progress_lock:
            return self._current_idx, len(recording.events), self._current_loop

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------

    def play(self, recording: Recording, config: Optional[PlaybackConfig] = None) -> None:
        """Start replaying ``recording``; no-op while Playing or Paused.

        Raises ValidationError (state unchanged) for a bad loop count or speed.
        """
        config = (config or PlaybackConfig()).normalized()
        config.validate()
        with self._lock:
            if self._state is not PlayerState.IDLE:
                return
            self._generation += 1
            token = CancelToken(self._generation)
            self._recording = recording
            self._config    = config
            self._token     = token
            with self._progress_lock:
                self._current_idx  = 0
                self._current_loop = 1
            self._state = PlayerState.PLAYING
            thread = threading.Thread(
                target=self._playback_loop, args=(recording, config, token),
                name=f"player-{token.generation}", daemon=True,
            )
            self._thread = thread
        thread.start()
        self._log("INFO", f"Playback started: {len(recording.events)} events "
                          f"at {config.speed:g}x ({config.loop_mode.value})")

    def stop(self) -> None:
        """Stop playback; no-op when idle.

        Returns after any in-flight event finished; no actuation follows.
        """
        with self._lock:
            if self._state is PlayerState.IDLE:
                return
            self._token.cancel()
            self._state = PlayerState.IDLE
        self._log("INFO", "Playback stopped")

    def pause(self) -> None:
        """Hold playback at the next checkpoint; only valid while Playing."""
        with self._lock:
            if self._state is not PlayerState.PLAYING:
                return
            self._token.pause()
            self._state = PlayerState.PAUSED
        self._log("INFO", "Playback paused")

    def resume(self) -> None:
        """Continue a paused playback; only valid while Paused."""
        with self._lock:
            if self._state is not PlayerState.PAUSED:
                return
            self._token.resume()
            self._state = PlayerState.PLAYING
        self._log("INFO", "Playback resumed")

    def toggle_pause(self) -> None:
        state = self.state
        if state is PlayerState.PLAYING:
            self.pause()
        elif state is PlayerState.PAUSED:
            self.resume()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the current loop thread to exit; True if it has."""
        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    # ------------------------------------------------------------------
    # Loop  (background thread)
    # ------------------------------------------------------------------

    def _playback_loop(self, recording: Recording, config: PlaybackConfig, token: CancelToken) -> None:
        if not recording.events:
            self._finish(token)
            return
        current_loop = 1
        while True:
            if not self._play_events(recording.events, config.speed, token):
                return
            current_loop += 1
            if not should_loop(config, current_loop):
                break
            with self._progress_lock:
                if token.cancelled:
                    return
                self._current_loop = current_loop
                self._current_idx  = 0
        self._finish(token)

    def _play_events(self, events: list[InputEvent], speed: float, token: CancelToken) -> bool:
        """Run one pass; return False if cancelled part-way."""
        prev: Optional[InputEvent] = None
        for i, event in enumerate(events):
            delay = 0.0 if prev is None else scaled_delay(prev, event, speed)
            prev  = event
            if not self._wait_before(delay, token):
                return False

            while True:
                with token.acting() as live:
                    if live:
                        self._execute(event)
                        with self._progress_lock:
                            self._current_idx = i + 1
                        break
                if token.cancelled:
                    return False
                # paused between the wait and the act: hold, then act
                if not token.wait_while_paused():
                    return False
        return True

    def _wait_before(self, delay: float, token: CancelToken) -> bool:
        while True:
            if not token.wait_while_paused():
                return False
            if not token.sleep(delay, wake_on_pause=True):
                return False
            if not token.paused:
                return True
            # paused mid-sleep: wait for resume, then sleep the full delay again

    def _execute(self, event: InputEvent) -> None:
        act = self._actuator
        try:
            kind = event.kind
            if kind == EventKind.MOUSE_MOVE:
                act.move(event.x, event.y)
            elif kind == EventKind.MOUSE_WHEEL:
                if event.delta > 0:
                    act.scroll(event.delta, "up")
                else:
                    act.scroll(-event.delta, "down")
            elif kind == EventKind.KEY_DOWN:
                act.key_down(event.key_code)
            elif kind == EventKind.KEY_UP:
                act.key_up(event.key_code)
            else:
                transition = button_transition(kind)
                if transition is not None:
                    button, pressed = transition
                    act.move(event.x, event.y)
                    act.toggle_button(button, pressed)
        except Exception as exc:          # noqa: BLE001
            self._log("ERROR", f"Playback event {event.kind.name} failed: {exc!r}")

    def _finish(self, token: CancelToken) -> None:
        with self._lock:
            if self._token is not token or self._state is PlayerState.IDLE:
                return
            token.cancel()
            self._state = PlayerState.IDLE
        self._log("SUCCESS", "Playback complete")
        if self._on_complete:
            self._on_complete()
