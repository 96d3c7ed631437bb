"""State-change notification channel.

The coordinator and the session completion observers publish
``StateEvent``s; the GUI drains them from a QTimer. ``publish`` never
blocks: when the buffer is full the oldest event is dropped, so a slow
consumer can never stall a scheduling loop.
"""
from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass
from typing import Optional

from simplyauto.core.constants import NOTIFY_CAPACITY

AUTOCLICKER = "autoclicker"
RECORDER    = "recorder"
PLAYER      = "player"


@dataclass(frozen=True)
class StateEvent:
    kind:     str           # AUTOCLICKER | RECORDER | PLAYER
    running:  bool
    count:    int = 0       # clicks or recorded events
    progress: int = 0       # events executed in the current pass
    total:    int = 0       # events in the recording
    loop:     int = 0       # 1-based pass number
    paused:   bool = False


class StateNotifier:
    def __init__(self, capacity: int = NOTIFY_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._buf:  deque[StateEvent] = deque(maxlen=capacity)
        self._cond = threading.Condition()
        self._dropped = 0

    def __len__(self) -> int:
        with self._cond:
            return len(self._buf)

    @property
    def dropped(self) -> int:
        """Number of events discarded because the buffer was full."""
        with self._cond:
            return self._dropped

    def publish(self, event: StateEvent) -> None:
        with self._cond:
            if len(self._buf) == self._buf.maxlen:
                self._dropped += 1
            self._buf.append(event)          # deque(maxlen) evicts the oldest
            self._cond.notify()

    def get(self, timeout: Optional[float] = None) -> Optional[StateEvent]:
        """Pop the oldest event, waiting up to ``timeout``; None on timeout."""
        with self._cond:
            if not self._cond.wait_for(lambda: self._buf, timeout=timeout):
                return None
            return self._buf.popleft()

    def drain(self) -> list[StateEvent]:
        """Pop every pending event without blocking."""
        with self._cond:
            events = list(self._buf)
            self._buf.clear()
            return events
