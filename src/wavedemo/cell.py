"""
Single published loudness value shared between the capture thread and the UI.
"""

from __future__ import annotations
import threading
from typing import Callable


class LoudnessCell:
    """
    Single-writer, multi-reader float cell with notify-on-change.
    Each set() replaces the value atomically and bumps `version`.
    """
    def __init__(self, value: float = 0.0):
        self._cond = threading.Condition()
        self._value = float(value)
        self._version = 0
        self._subscribers: list[Callable[[float], None]] = []

    @property
    def version(self) -> int:
        with self._cond:
            return self._version

    def get(self) -> float:
        with self._cond:
            return self._value

    def set(self, value: float) -> None:
        with self._cond:
            self._value = float(value)
            self._version += 1
            subscribers = list(self._subscribers)
            self._cond.notify_all()
        # Callbacks run outside the lock on the writer's thread
        for fn in subscribers:
            fn(float(value))

    def wait_for_update(self, since_version: int, timeout: float | None = None) -> tuple[float, int]:
        """
        Block until the version moves past `since_version` or the timeout expires.
        Returns the (value, version) seen on wake-up either way.
        """
        with self._cond:
            self._cond.wait_for(lambda: self._version > since_version, timeout=timeout)
            return self._value, self._version

    def subscribe(self, fn: Callable[[float], None]) -> Callable[[], None]:
        """Register a change callback. Returns a function that removes it."""
        with self._cond:
            self._subscribers.append(fn)

        def _unsubscribe() -> None:
            with self._cond:
                if fn in self._subscribers:
                    self._subscribers.remove(fn)
        return _unsubscribe
