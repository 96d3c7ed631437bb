"""Per-activation cancellation token.

Every session activation mints a fresh ``CancelToken`` and hands it to
the background loop it spawns. The loop only ever consults that token,
so a superseded loop can never act on behalf of a newer activation, and
cancelling twice is harmless.

All waits go through one ``threading.Condition``; ``cancel()`` and
``pause()`` notify it, so a sleeping loop wakes immediately instead of
polling.

Actuator calls are made inside ``acting()``, which holds the token's
lock. ``cancel()`` and ``pause()`` take the same lock, so once either
returns no actuation for this token is in progress or can start.
"""
from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class CancelToken:
    def __init__(self, generation: int = 0) -> None:
        self.generation = generation
        self._cond      = threading.Condition()
        self._cancelled = False
        self._paused    = False

    def __repr__(self) -> str:
        return (f"CancelToken(generation={self.generation}, "
                f"cancelled={self._cancelled}, paused={self._paused})")

    # ------------------------------------------------------------------
    # Signals  (any thread)
    # ------------------------------------------------------------------

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def paused(self) -> bool:
        return self._paused

    def cancel(self) -> None:
        with self._cond:
            self._cancelled = True
            self._cond.notify_all()

    def pause(self) -> None:
        with self._cond:
            self._paused = True
            self._cond.notify_all()

    def resume(self) -> None:
        with self._cond:
            self._paused = False
            self._cond.notify_all()

    # ------------------------------------------------------------------
    # Waits  (loop thread)
    # ------------------------------------------------------------------

    def sleep(self, seconds: float, wake_on_pause: bool = False) -> bool:
        """Sleep up to ``seconds``; return False if cancelled.

        With ``wake_on_pause`` the sleep also ends early when the token is
        paused; callers check ``paused`` afterwards.
        """
        with self._cond:
            if seconds > 0:
                self._cond.wait_for(
                    lambda: self._cancelled or (wake_on_pause and self._paused),
                    timeout=seconds,
                )
            return not self._cancelled

    def wait_while_paused(self) -> bool:
        """Block until resumed or cancelled; return False if cancelled."""
        with self._cond:
            self._cond.wait_for(lambda: self._cancelled or not self._paused)
            return not self._cancelled

    @contextmanager
    def acting(self) -> Iterator[bool]:
        """Hold the token lock for one actuation.

        Yields True when the loop may act (not cancelled, not paused).
        """
        with self._cond:
            yield not (self._cancelled or self._paused)
