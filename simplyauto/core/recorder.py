"""Macro recording session.

Subscribes to an EventSource and appends every delivered event to a
fresh Recording, stamped with the time elapsed since start(). Event
callbacks arrive on listener threads; they append under the same lock
that guards state reads, so ``event_count`` and ``duration`` always agree
with the last appended event.

Stop ordering
-------------
stop() unsubscribes *before* flipping state and without holding the
session lock (a callback blocked on that lock would otherwise deadlock
the source's drain). Once unsubscribe() returns the source delivers
nothing more, and the per-activation token is cancelled before the
Recording is handed out, so nothing is appended after stop() returns.
"""
from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Optional

from simplyauto.core.cancel import CancelToken
from simplyauto.core.errors import CaptureError
from simplyauto.core.events import InputEvent
from simplyauto.core.interfaces import EventSource, LogFn, null_log
from simplyauto.core.recording import Recording


class RecorderState(Enum):
    IDLE      = "idle"
    RECORDING = "recording"


@dataclass(frozen=True)
class RecorderOptions:
    record_mouse:    bool           = True
    record_keyboard: bool           = True
    filter_keys:     frozenset[int] = field(default_factory=frozenset)   # key codes never recorded


class Recorder:
    """Captures input events into a Recording.

    Parameters
    ----------
    source : EventSource
    options : RecorderOptions, optional
    log_fn : callable, optional
    clock : callable, optional
        Monotonic seconds; defaults to ``time.monotonic``.
    """

    def __init__(
        self,
        source:  EventSource,
        options: Optional[RecorderOptions] = None,
        log_fn:  Optional[LogFn]           = None,
        clock:   Callable[[], float]       = time.monotonic,
    ) -> None:
        self._source    = source
        self._options   = options or RecorderOptions()
        self._log       = log_fn or null_log
        self._clock     = clock
        # RLock: a source may deliver synchronously from inside subscribe()
        self._lock      = threading.RLock()
        self._state     = RecorderState.IDLE
        self._recording: Optional[Recording]   = None
        self._token:     Optional[CancelToken] = None
        self._start_t    = 0.0
        self._generation = 0

    # ------------------------------------------------------------------
    # Options
    # ------------------------------------------------------------------

    @property
    def options(self) -> RecorderOptions:
        with self._lock:
            return self._options

    def set_options(self, options: RecorderOptions) -> None:
        """Replace the options; they apply from the next start()."""
        with self._lock:
            self._options = options

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> RecorderState:
        with self._lock:
            return self._state

    @property
    def is_recording(self) -> bool:
        return self.state is RecorderState.RECORDING

    @property
    def recording(self) -> Optional[Recording]:
        """The in-progress Recording, or the last one returned by stop()."""
        with self._lock:
            return self._recording

    @property
    def event_count(self) -> int:
        with self._lock:
            return 0 if self._recording is None else len(self._recording.events)

    @property
    def duration(self) -> float:
        """Seconds since start() while recording, else 0."""
        with self._lock:
            if self._state is not RecorderState.RECORDING:
                return 0.0
            return self._clock() - self._start_t

    def set_name(self, name: str) -> None:
        with self._lock:
            if self._recording is not None:
                self._recording.name = name

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Begin recording into a new Recording; no-op when already recording.

        Raises CaptureError (state unchanged) if the source cannot subscribe.
        """
        with self._lock:
            if self._state is RecorderState.RECORDING:
                return
            self._generation += 1
            token   = CancelToken(self._generation)
            options = self._options
            self._token   = token
            self._start_t = self._clock()
            previous = self._recording
            self._recording = Recording("Untitled Recording")

            def on_event(event: InputEvent) -> None:
                self._on_event(token, options, event)

            try:
                self._source.subscribe(on_event)
            except CaptureError:
                token.cancel()
                self._recording = previous
                self._token = None
                raise
            except Exception as exc:
                token.cancel()
                self._recording = previous
                self._token = None
                raise CaptureError(f"failed to install input capture: {exc}") from exc

            self._state = RecorderState.RECORDING
        self._log("INFO", "Recording started")

    def stop(self) -> Optional[Recording]:
        """Stop recording and return the completed Recording.

        When not recording, returns the last Recording (or None) unchanged.
        Raises CaptureError (still recording) if the source cannot unsubscribe.
        """
        with self._lock:
            if self._state is not RecorderState.RECORDING:
                return self._recording
            token = self._token

        try:
            self._source.unsubscribe()
        except CaptureError:
            raise
        except Exception as exc:
            raise CaptureError(f"failed to remove input capture: {exc}") from exc

        with self._lock:
            recording = self._recording
            if self._token is not token or token.cancelled:
                return recording             # a concurrent stop() got here first
            token.cancel()
            recording.duration = max(recording.duration, self._clock() - self._start_t)
            recording.finalize()
            self._state = RecorderState.IDLE
        self._log("INFO", f"Recording stopped ({len(recording)} events)")
        return recording

    def toggle(self) -> Optional[Recording]:
        """Start or stop; returns the Recording when this call stopped it."""
        if self.is_recording:
            return self.stop()
        self.start()
        return None

    # ------------------------------------------------------------------
    # Event ingestion  (listener threads)
    # ------------------------------------------------------------------

    def _on_event(self, token: CancelToken, options: RecorderOptions, event: InputEvent) -> None:
        if event.kind.is_key:
            if not options.record_keyboard or event.key_code in options.filter_keys:
                return
        elif not options.record_mouse:
            return

        with self._lock:
            if token.cancelled or self._token is not token:
                return
            stamped = replace(event, timestamp=self._clock() - self._start_t)
            self._recording.add_event(stamped)
