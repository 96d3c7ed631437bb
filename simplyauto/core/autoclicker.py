"""Auto-clicker — a single-session jittered repeat scheduler.

Architecture
------------
AutoClicker (caller threads: UI, hotkeys, coordinator)
  └─ _click_loop (threading.Thread, one per start() call)
       ├─ CancelToken           — per-activation stop signal
       ├─ Actuator.move/click   — made inside token.acting()
       └─ token.sleep(delay)    — interval ± jitter, woken by stop()

Ticks
-----
1. move to the fixed coordinate (position mode FIXED only)
2. click with the configured button / click type
3. click_count += 1
4. repeat mode COUNT and click_count >= repeat_count → self-stop, on_complete()
5. delay = interval + uniform(-jitter, +jitter), floored at 1 ms
6. sleep(delay); return at once if stopped meanwhile
"""
from __future__ import annotations

import random
import threading
from enum import Enum
from typing import Optional

from simplyauto.core.cancel import CancelToken
from simplyauto.core.config import AutoClickerConfig, PositionMode, RepeatMode
from simplyauto.core.constants import MIN_INTERVAL_MS
from simplyauto.core.events import ClickType
from simplyauto.core.interfaces import Actuator, Completed, LogFn, null_log


class ClickerState(Enum):
    STOPPED = "stopped"
    RUNNING = "running"


def jittered_delay_ms(interval_ms: int, jitter_ms: int, rng: random.Random) -> int:
    """Return ``interval_ms`` shifted by a uniform offset in [-jitter, +jitter]."""
    delay = interval_ms
    if jitter_ms > 0:
        delay += rng.randint(-jitter_ms, jitter_ms)
    return max(MIN_INTERVAL_MS, delay)


class AutoClicker:
    """Clicks on a timed cadence until stopped or a repeat count is reached.

    Parameters
    ----------
    actuator : Actuator
    on_complete : callable, optional
        Invoked (outside any lock) when a fixed-count run stops by itself.
    log_fn : callable, optional
        ``log_fn(level, message)``.
    rng : random.Random, optional
        Jitter source; tests pass a seeded instance.
    """

    def __init__(
        self,
        actuator:    Actuator,
        on_complete: Optional[Completed] = None,
        log_fn:      Optional[LogFn]     = None,
        rng:         Optional[random.Random] = None,
    ) -> None:
        self._actuator    = actuator
        self._on_complete = on_complete
        self._log         = log_fn or null_log
        self._rng         = rng or random.Random()

        self._lock        = threading.Lock()     # state / config / token
        self._count_lock  = threading.Lock()     # click_count only
        self._state       = ClickerState.STOPPED
        self._config      = AutoClickerConfig()
        self._click_count = 0
        self._generation  = 0
        self._token:  Optional[CancelToken]      = None
        self._thread: Optional[threading.Thread] = None

    # ------------------------------------------------------------------
    # Config
    # ------------------------------------------------------------------

    def set_config(self, config: AutoClickerConfig) -> None:
        """Validate and store ``config``; it applies from the next start().

        Raises ValidationError and keeps the previous config on bad input.
        """
        config.validate()
        with self._lock:
            self._config = config

    @property
    def config(self) -> AutoClickerConfig:
        with self._lock:
            return self._config

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> ClickerState:
        with self._lock:
            return self._state

    @property
    def is_running(self) -> bool:
        return self.state is ClickerState.RUNNING

    @property
    def click_count(self) -> int:
        with self._count_lock:
            return self._click_count

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Launch the click loop; no-op when already running."""
        with self._lock:
            if self._state is ClickerState.RUNNING:
                return
            self._generation += 1
            token = CancelToken(self._generation)
            cfg   = self._config
            with self._count_lock:
                self._click_count = 0
            self._token = token
            self._state = ClickerState.RUNNING
            thread = threading.Thread(
                target=self._click_loop, args=(cfg, token),
                name=f"autoclicker-{token.generation}", daemon=True,
            )
            self._thread = thread
        thread.start()
        self._log("INFO", f"Auto-clicker started ({cfg.interval_ms} ms ± {cfg.jitter_ms} ms)")

    def stop(self) -> None:
        """Stop the click loop; no-op when already stopped.

        Returns after any in-flight click finished; no click follows.
        """
        with self._lock:
            if self._state is not ClickerState.RUNNING:
                return
            self._token.cancel()
            self._state = ClickerState.STOPPED
        self._log("INFO", f"Auto-clicker stopped ({self.click_count} clicks)")

    def toggle(self) -> None:
        if self.is_running:
            self.stop()
        else:
            self.start()

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

    def _click_loop(self, cfg: AutoClickerConfig, token: CancelToken) -> None:
        double = cfg.click_type is ClickType.DOUBLE
        while True:
            with token.acting() as live:
                if not live:
                    return
                try:
                    if cfg.position_mode is PositionMode.FIXED:
                        self._actuator.move(cfg.fixed_x, cfg.fixed_y)
                    self._actuator.click(cfg.button, double)
                except Exception as exc:          # noqa: BLE001
                    self._log("ERROR", f"Click failed: {exc!r}")
                with self._count_lock:
                    self._click_count += 1
                    count = self._click_count

            if cfg.repeat_mode is RepeatMode.COUNT and count >= cfg.repeat_count:
                self._finish(token)
                return

            delay = jittered_delay_ms(cfg.interval_ms, cfg.jitter_ms, self._rng)
            if not token.sleep(delay / 1000.0):
                return

    def _finish(self, token: CancelToken) -> None:
        with self._lock:
            if self._token is not token or self._state is ClickerState.STOPPED:
                return
            token.cancel()
            self._state = ClickerState.STOPPED
        self._log("SUCCESS", f"Auto-clicker finished ({self.click_count} clicks)")
        if self._on_complete:
            self._on_complete()
