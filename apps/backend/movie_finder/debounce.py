"""
Debounced input for the search box.

A value pushed into a Debouncer is delivered to its callback only after the
quiet period passes with no newer value.
"""

import threading
from functools import partial
from typing import Any, Callable, Optional

_MISSING = object()


class Debouncer:
    """
    Deliver the last pushed value after `delay` seconds of quiet.

    Each push cancels the pending timer and starts a new one. The callback
    runs on the timer's thread.
    """

    def __init__(
        self,
        delay: float,
        callback: Callable[[Any], None],
        timer_factory: Callable[..., Any] = threading.Timer,
    ):
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self.delay = delay
        self.callback = callback
        self._timer_factory = timer_factory
        self._timer: Optional[Any] = None
        self._value: Any = _MISSING
        # Identifies the current timer; a timer whose token is stale never delivers
        self._token = 0
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        """Whether a value is waiting for the quiet period to end."""
        with self._lock:
            return self._value is not _MISSING

    def push(self, value: Any) -> None:
        """Replace the pending value and restart the quiet period."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._value = value
            self._token += 1
            timer = self._timer_factory(self.delay, partial(self._fire, self._token))
            timer.daemon = True
            self._timer = timer
        timer.start()

    def cancel(self) -> None:
        """Drop the pending value without delivering it."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._token += 1
            self._timer = None
            self._value = _MISSING

    def flush(self) -> None:
        """Deliver the pending value now, if there is one."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            token = self._token
        self._fire(token)

    def _fire(self, token: int) -> None:
        with self._lock:
            if token != self._token:
                return
            self._token += 1
            value = self._value
            self._value = _MISSING
            self._timer = None
        if value is not _MISSING:
            self.callback(value)
