"""Config value objects for the auto-clicker and the player.

Both are frozen: sessions snapshot the config at start time and the
running loop only ever sees that snapshot.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum

from simplyauto.core.constants import DEFAULT_INTERVAL_MS, DEFAULT_SPEED, MIN_INTERVAL_MS
from simplyauto.core.errors import ValidationError
from simplyauto.core.events import ClickType, MouseButton


class RepeatMode(Enum):
    UNTIL_STOPPED = "until_stopped"
    COUNT         = "count"


class PositionMode(Enum):
    CURRENT = "current"
    FIXED   = "fixed"


class LoopMode(Enum):
    ONCE       = "once"
    COUNT      = "count"
    CONTINUOUS = "continuous"


def interval_from_parts(hours: int = 0, mins: int = 0, secs: int = 0, ms: int = 0) -> int:
    """Combine the h/m/s/ms fields of the settings form into milliseconds."""
    return ((hours * 60 + mins) * 60 + secs) * 1000 + ms


# ---------------------------------------------------------------------------
# AutoClicker
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AutoClickerConfig:
    interval_ms:   int          = DEFAULT_INTERVAL_MS
    jitter_ms:     int          = 0
    button:        MouseButton  = MouseButton.LEFT
    click_type:    ClickType    = ClickType.SINGLE
    repeat_mode:   RepeatMode   = RepeatMode.UNTIL_STOPPED
    repeat_count:  int          = 1
    position_mode: PositionMode = PositionMode.CURRENT
    fixed_x:       int          = 0
    fixed_y:       int          = 0

    def validate(self) -> None:
        if self.interval_ms < MIN_INTERVAL_MS:
            raise ValidationError(f"interval must be at least {MIN_INTERVAL_MS} millisecond")
        if self.jitter_ms < 0:
            raise ValidationError("random offset cannot be negative")
        if self.repeat_count < 1:
            raise ValidationError("repeat count must be at least 1")

    @property
    def delay_bounds_ms(self) -> tuple[int, int]:
        """Inclusive (min, max) range of the effective per-tick delay."""
        return (
            max(MIN_INTERVAL_MS, self.interval_ms - self.jitter_ms),
            self.interval_ms + self.jitter_ms,
        )


# ---------------------------------------------------------------------------
# Player
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PlaybackConfig:
    speed:      float    = DEFAULT_SPEED
    loop_mode:  LoopMode = LoopMode.ONCE
    loop_count: int      = 1

    def normalized(self) -> PlaybackConfig:
        """Return a copy with non-positive speed replaced by 1.0."""
        if self.speed > 0:
            return self
        return replace(self, speed=DEFAULT_SPEED)

    def validate(self) -> None:
        if not math.isfinite(self.speed):
            raise ValidationError(f"playback speed must be finite, got {self.speed!r}")
        if self.loop_count < 1:
            raise ValidationError("loop count must be at least 1")
