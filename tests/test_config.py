"""Tests for simplyauto.core.config — AutoClickerConfig / PlaybackConfig."""
import dataclasses

import pytest

from simplyauto.core.config import (
    AutoClickerConfig, LoopMode, PlaybackConfig, PositionMode, RepeatMode,
    interval_from_parts,
)
from simplyauto.core.errors import SimplyAutoError, ValidationError
from simplyauto.core.events import ClickType, MouseButton


class TestIntervalFromParts:
    def test_ms_only(self):
        assert interval_from_parts(ms=250) == 250

    def test_all_parts(self):
        assert interval_from_parts(1, 2, 3, 4) == 3_723_004

    def test_default_is_zero(self):
        assert interval_from_parts() == 0


class TestAutoClickerConfig:
    def test_defaults(self):
        cfg = AutoClickerConfig()
        assert cfg.interval_ms == 100
        assert cfg.jitter_ms == 0
        assert cfg.button is MouseButton.LEFT
        assert cfg.click_type is ClickType.SINGLE
        assert cfg.repeat_mode is RepeatMode.UNTIL_STOPPED
        assert cfg.position_mode is PositionMode.CURRENT
        cfg.validate()

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            AutoClickerConfig().interval_ms = 5

    def test_interval_floor(self):
        AutoClickerConfig(interval_ms=1).validate()
        with pytest.raises(ValidationError, match="at least 1 millisecond"):
            AutoClickerConfig(interval_ms=0).validate()

    def test_negative_jitter(self):
        with pytest.raises(ValidationError, match="random offset cannot be negative"):
            AutoClickerConfig(jitter_ms=-5).validate()

    def test_repeat_count(self):
        with pytest.raises(ValidationError, match="repeat count must be at least 1"):
            AutoClickerConfig(repeat_mode=RepeatMode.COUNT, repeat_count=0).validate()

    def test_validation_error_hierarchy(self):
        with pytest.raises(ValueError):
            AutoClickerConfig(interval_ms=-1).validate()
        assert issubclass(ValidationError, SimplyAutoError)

    def test_delay_bounds(self):
        assert AutoClickerConfig(interval_ms=100, jitter_ms=20).delay_bounds_ms == (80, 120)
        assert AutoClickerConfig(interval_ms=100).delay_bounds_ms == (100, 100)


class TestPlaybackConfig:
    def test_defaults(self):
        cfg = PlaybackConfig()
        assert cfg.speed == 1.0
        assert cfg.loop_mode is LoopMode.ONCE
        assert cfg.loop_count == 1

    def test_normalized_keeps_positive_speed(self):
        cfg = PlaybackConfig(speed=2.0)
        assert cfg.normalized() is cfg

    @pytest.mark.parametrize("speed", [0, -1.5])
    def test_normalized_replaces_non_positive(self, speed):
        cfg = PlaybackConfig(speed=speed, loop_mode=LoopMode.COUNT, loop_count=4)
        norm = cfg.normalized()
        assert norm.speed == 1.0
        assert norm.loop_mode is LoopMode.COUNT
        assert norm.loop_count == 4

    def test_validate(self):
        PlaybackConfig(speed=0.5).validate()
        with pytest.raises(ValidationError):
            PlaybackConfig(speed=float("inf")).validate()
        with pytest.raises(ValidationError):
            PlaybackConfig(loop_count=0).validate()
