"""pynput-backed EventSource — captures global mouse/keyboard input.

Listener callbacks run in pynput daemon threads. They are forwarded to
the subscriber outside the capture lock; an in-flight counter lets
``unsubscribe`` wait until every callback that already passed the
running check has returned, so nothing is delivered after it returns.
"""
from __future__ import annotations

import threading
from typing import Optional

from pynput import mouse, keyboard

from simplyauto.core.constants import LISTENER_JOIN_S
from simplyauto.core.errors import CaptureError
from simplyauto.core.events import EventKind, InputEvent, button_event_kind
from simplyauto.core.interfaces import EventFn
from simplyauto.core.keys import PYNPUT_BUTTONS, key_code


class InputCapture:
    """Global input hook.

    Parameters
    ----------
    capture_mouse : bool
    capture_keyboard : bool
    """

    def __init__(self, capture_mouse: bool = True, capture_keyboard: bool = True) -> None:
        self._capture_mouse = capture_mouse
        self._capture_kbd   = capture_keyboard
        self._cond          = threading.Condition()
        self._callback: Optional[EventFn] = None
        self._running       = False
        self._in_flight: dict[int, int] = {}     # thread ident → nesting depth
        self._ml: Optional[mouse.Listener]    = None
        self._kl: Optional[keyboard.Listener] = None

    @property
    def is_running(self) -> bool:
        with self._cond:
            return self._running

    # ------------------------------------------------------------------
    # EventSource
    # ------------------------------------------------------------------

    def subscribe(self, on_event: EventFn) -> None:
        with self._cond:
            if self._running:
                return
            self._callback = on_event
            self._running  = True

        try:
            if self._capture_mouse:
                self._ml = mouse.Listener(
                    on_move=self._on_move,
                    on_click=self._on_click,
                    on_scroll=self._on_scroll,
                )
                self._ml.daemon = True
                self._ml.start()
            if self._capture_kbd:
                self._kl = keyboard.Listener(
                    on_press=self._on_key_press,
                    on_release=self._on_key_release,
                )
                self._kl.daemon = True
                self._kl.start()
        except Exception as exc:
            self._teardown()
            raise CaptureError(f"failed to install input hooks: {exc}") from exc

    def unsubscribe(self) -> None:
        try:
            self._teardown()
        except Exception as exc:
            raise CaptureError(f"failed to remove input hooks: {exc}") from exc

    # ------------------------------------------------------------------

    def _teardown(self) -> None:
        me = threading.get_ident()
        with self._cond:
            self._running = False
            self._cond.wait_for(lambda: not any(
                t != me for t in self._in_flight
            ))
            self._callback = None
            ml, kl = self._ml, self._kl
            self._ml = self._kl = None

        for listener in (ml, kl):
            if listener is None:
                continue
            listener.stop()
            if listener is not threading.current_thread():
                listener.join(LISTENER_JOIN_S)

    def _deliver(self, event: InputEvent) -> None:
        me = threading.get_ident()
        with self._cond:
            if not self._running:
                return
            callback = self._callback
            self._in_flight[me] = self._in_flight.get(me, 0) + 1
        try:
            callback(event)
        finally:
            with self._cond:
                depth = self._in_flight.pop(me) - 1
                if depth:
                    self._in_flight[me] = depth
                self._cond.notify_all()

    # ------------------------------------------------------------------
    # Mouse callbacks  (mouse listener thread)
    # ------------------------------------------------------------------

    def _on_move(self, x: int, y: int, *_) -> None:
        self._deliver(InputEvent(EventKind.MOUSE_MOVE, x=int(x), y=int(y)))

    def _on_click(self, x: int, y: int, button: mouse.Button, pressed: bool, *_) -> None:
        ours = PYNPUT_BUTTONS.get(button)
        if ours is None:
            return
        self._deliver(InputEvent(button_event_kind(ours, pressed), x=int(x), y=int(y)))

    def _on_scroll(self, x: int, y: int, dx: int, dy: int, *_) -> None:
        ticks = int(dy) if dy != 0 else int(dx)
        if ticks == 0:
            return
        self._deliver(InputEvent(EventKind.MOUSE_WHEEL, x=int(x), y=int(y), delta=ticks))

    # ------------------------------------------------------------------
    # Keyboard callbacks  (keyboard listener thread)
    # ------------------------------------------------------------------

    def _on_key_press(self, key, *_) -> None:
        self._on_key(EventKind.KEY_DOWN, key)

    def _on_key_release(self, key, *_) -> None:
        self._on_key(EventKind.KEY_UP, key)

    def _on_key(self, kind: EventKind, key) -> None:
        code = key_code(key) if key is not None else None
        if code is None:
            return
        self._deliver(InputEvent(kind, key_code=int(code)))
