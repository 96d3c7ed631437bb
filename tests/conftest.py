"""Shared test fixtures.

The engine is exercised against in-memory fakes: ``FakeActuator`` records
every call with a monotonic timestamp, ``FakeEventSource`` lets a test push
events as if a listener thread delivered them, and ``FakeClock`` pins the
recorder's notion of elapsed time.
"""
import sys
import threading
import time
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `simplyauto.*` imports work
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from simplyauto.core.errors import CaptureError  # noqa: E402


class FakeActuator:
    """Thread-safe recorder of actuator calls: list of (name, args, t)."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.calls: list[tuple[str, tuple, float]] = []

    def _add(self, name: str, *args) -> None:
        with self._lock:
            self.calls.append((name, args, time.monotonic()))

    def snapshot(self) -> list[tuple[str, tuple, float]]:
        with self._lock:
            return list(self.calls)

    def names(self) -> list[tuple[str, tuple]]:
        return [(n, a) for n, a, _ in self.snapshot()]

    def count(self, name: str) -> int:
        return sum(1 for n, _, _ in self.snapshot() if n == name)

    def move(self, x, y):                 self._add("move", x, y)
    def click(self, button, double=False): self._add("click", button, double)
    def toggle_button(self, button, down): self._add("toggle_button", button, down)
    def scroll(self, amount, direction):  self._add("scroll", amount, direction)
    def key_down(self, code):             self._add("key_down", code)
    def key_up(self, code):               self._add("key_up", code)


class FakeEventSource:
    """EventSource whose events are pushed by the test via ``emit``."""

    def __init__(self, fail_subscribe: bool = False, fail_unsubscribe: bool = False) -> None:
        self.fail_subscribe   = fail_subscribe
        self.fail_unsubscribe = fail_unsubscribe
        self.subscriptions    = 0
        self._callback = None

    @property
    def subscribed(self) -> bool:
        return self._callback is not None

    def subscribe(self, on_event) -> None:
        if self.fail_subscribe:
            raise CaptureError("hook install failed")
        self.subscriptions += 1
        self._callback = on_event

    def unsubscribe(self) -> None:
        if self.fail_unsubscribe:
            raise CaptureError("hook removal failed")
        self._callback = None

    def emit(self, event) -> None:
        if self._callback is not None:
            self._callback(event)

    def emit_raw(self, callback, event) -> None:
        """Deliver through a stale callback, as a late listener thread would."""
        callback(event)


class FakeClock:
    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def wait_until(predicate, timeout: float = 2.0, interval: float = 0.005) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


@pytest.fixture
def actuator():
    return FakeActuator()


@pytest.fixture
def source():
    return FakeEventSource()


@pytest.fixture
def clock():
    return FakeClock()
