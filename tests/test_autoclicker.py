"""Tests for simplyauto.core.autoclicker — AutoClicker scheduling loop."""
import random
import time

import pytest

from conftest import wait_until
from simplyauto.core.autoclicker import AutoClicker, ClickerState, jittered_delay_ms
from simplyauto.core.config import AutoClickerConfig, PositionMode, RepeatMode
from simplyauto.core.errors import ValidationError
from simplyauto.core.events import ClickType, MouseButton


@pytest.fixture
def clicker(actuator):
    c = AutoClicker(actuator)
    yield c
    c.stop()
    c.join(1.0)


class TestStartStop:
    def test_initial_state(self, clicker):
        assert clicker.state is ClickerState.STOPPED
        assert not clicker.is_running
        assert clicker.click_count == 0

    def test_clicks_then_quiesces(self, clicker, actuator):
        clicker.set_config(AutoClickerConfig(interval_ms=10))
        clicker.start()
        assert clicker.is_running
        assert wait_until(lambda: clicker.click_count >= 2)
        clicker.stop()
        assert not clicker.is_running

        count = clicker.click_count
        calls = actuator.count("click")
        time.sleep(0.03)                    # 3 × interval
        assert clicker.click_count == count
        assert actuator.count("click") == calls
        assert count >= 1

    def test_first_click_is_immediate(self, clicker, actuator):
        clicker.set_config(AutoClickerConfig(interval_ms=5000))
        clicker.start()
        assert wait_until(lambda: clicker.click_count == 1, timeout=1.0)
        clicker.stop()
        assert clicker.join(1.0)

    def test_stop_interrupts_long_sleep(self, clicker):
        clicker.set_config(AutoClickerConfig(interval_ms=60_000))
        clicker.start()
        assert wait_until(lambda: clicker.click_count == 1)
        t0 = time.monotonic()
        clicker.stop()
        assert clicker.join(1.0)
        assert time.monotonic() - t0 < 1.0

    def test_start_twice_is_idempotent(self, clicker):
        clicker.set_config(AutoClickerConfig(interval_ms=60_000))
        clicker.start()
        assert wait_until(lambda: clicker.click_count == 1)
        clicker.start()
        time.sleep(0.02)
        assert clicker.click_count == 1
        assert clicker.is_running

    def test_stop_twice_is_idempotent(self, clicker):
        clicker.stop()
        clicker.start()
        clicker.stop()
        clicker.stop()
        assert clicker.state is ClickerState.STOPPED

    def test_toggle(self, clicker):
        clicker.set_config(AutoClickerConfig(interval_ms=60_000))
        clicker.toggle()
        assert clicker.is_running
        clicker.toggle()
        assert not clicker.is_running

    def test_restart_resets_count(self, clicker):
        clicker.set_config(AutoClickerConfig(interval_ms=5))
        clicker.start()
        assert wait_until(lambda: clicker.click_count >= 3)
        clicker.stop()
        clicker.set_config(AutoClickerConfig(interval_ms=60_000))
        clicker.start()
        assert wait_until(lambda: clicker.click_count == 1)
        time.sleep(0.02)
        assert clicker.click_count == 1


class TestRepeatCount:
    def test_self_stops_at_count(self, actuator):
        done = []
        clicker = AutoClicker(actuator, on_complete=lambda: done.append(True))
        clicker.set_config(AutoClickerConfig(interval_ms=1, repeat_mode=RepeatMode.COUNT,
                                             repeat_count=5))
        clicker.start()
        assert clicker.join(2.0)
        assert clicker.click_count == 5
        assert actuator.count("click") == 5
        assert not clicker.is_running
        assert done == [True]

    def test_external_stop_skips_completion(self, actuator):
        done = []
        clicker = AutoClicker(actuator, on_complete=lambda: done.append(True))
        clicker.set_config(AutoClickerConfig(interval_ms=60_000, repeat_mode=RepeatMode.COUNT,
                                             repeat_count=3))
        clicker.start()
        assert wait_until(lambda: clicker.click_count == 1)
        clicker.stop()
        assert clicker.join(1.0)
        assert done == []

    def test_completion_callback_can_query_state(self, actuator):
        seen = []
        clicker = AutoClicker(actuator)
        clicker._on_complete = lambda: seen.append((clicker.is_running, clicker.click_count))
        clicker.set_config(AutoClickerConfig(interval_ms=1, repeat_mode=RepeatMode.COUNT,
                                             repeat_count=2))
        clicker.start()
        assert clicker.join(2.0)
        assert seen == [(False, 2)]


class TestActions:
    def test_fixed_position_moves_before_click(self, clicker, actuator):
        clicker.set_config(AutoClickerConfig(
            interval_ms=60_000, position_mode=PositionMode.FIXED, fixed_x=40, fixed_y=50,
            button=MouseButton.RIGHT,
        ))
        clicker.start()
        assert wait_until(lambda: clicker.click_count == 1)
        assert actuator.names()[:2] == [
            ("move", (40, 50)),
            ("click", (MouseButton.RIGHT, False)),
        ]

    def test_current_position_does_not_move(self, clicker, actuator):
        clicker.set_config(AutoClickerConfig(interval_ms=60_000))
        clicker.start()
        assert wait_until(lambda: clicker.click_count == 1)
        assert actuator.count("move") == 0

    def test_double_click(self, clicker, actuator):
        clicker.set_config(AutoClickerConfig(interval_ms=60_000, click_type=ClickType.DOUBLE))
        clicker.start()
        assert wait_until(lambda: clicker.click_count == 1)
        assert actuator.names()[0] == ("click", (MouseButton.LEFT, True))

    def test_actuator_failure_does_not_abort_loop(self, actuator):
        logs = []

        class Broken:
            def click(self, button, double=False):
                raise OSError("no display")

        clicker = AutoClicker(Broken(), log_fn=lambda lvl, msg: logs.append(lvl))
        clicker.set_config(AutoClickerConfig(interval_ms=1))
        clicker.start()
        assert wait_until(lambda: clicker.click_count >= 3)
        clicker.stop()
        assert clicker.join(1.0)
        assert "ERROR" in logs


class TestConfig:
    def test_invalid_config_keeps_previous(self, clicker):
        good = AutoClickerConfig(interval_ms=250)
        clicker.set_config(good)
        with pytest.raises(ValidationError):
            clicker.set_config(AutoClickerConfig(interval_ms=0))
        with pytest.raises(ValidationError):
            clicker.set_config(AutoClickerConfig(jitter_ms=-1))
        with pytest.raises(ValidationError):
            clicker.set_config(AutoClickerConfig(repeat_count=0))
        assert clicker.config == good

    def test_set_config_while_running_applies_next_start(self, clicker, actuator):
        clicker.set_config(AutoClickerConfig(interval_ms=60_000))
        clicker.start()
        assert wait_until(lambda: clicker.click_count == 1)
        clicker.set_config(AutoClickerConfig(interval_ms=60_000, button=MouseButton.MIDDLE))
        assert clicker.is_running
        clicker.stop()
        clicker.start()
        assert wait_until(lambda: actuator.count("click") == 2)
        assert actuator.names()[-1] == ("click", (MouseButton.MIDDLE, False))


class TestJitter:
    def test_no_jitter_is_exact(self):
        rng = random.Random(1)
        assert {jittered_delay_ms(100, 0, rng) for _ in range(50)} == {100}

    def test_delay_within_bounds(self):
        rng = random.Random(42)
        cfg = AutoClickerConfig(interval_ms=100, jitter_ms=30)
        lo, hi = cfg.delay_bounds_ms
        delays = [jittered_delay_ms(100, 30, rng) for _ in range(2000)]
        assert all(lo <= d <= hi for d in delays)
        assert min(delays) == 70
        assert max(delays) == 130

    def test_floor_at_one_millisecond(self):
        rng = random.Random(7)
        delays = [jittered_delay_ms(2, 50, rng) for _ in range(500)]
        assert min(delays) == 1
        assert max(delays) <= 52
        assert AutoClickerConfig(interval_ms=2, jitter_ms=50).delay_bounds_ms == (1, 52)
