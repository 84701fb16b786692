"""
Linear amplitude smoothing: each new loudness target is approached over a fixed
duration, then the value idles at the target.
"""

from __future__ import annotations
import threading
from .constants import SMOOTHING_MS


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


class AmplitudeTween:
    """
    Fixed-duration linear tween, evaluated explicitly per frame.
    retarget() may come from another thread; the segment is swapped under a lock.
    """
    def __init__(self, duration_s: float = SMOOTHING_MS / 1000.0, value: float = 0.0):
        if duration_s < 0:
            raise ValueError("duration_s must be >= 0")
        self.duration_s = float(duration_s)
        self._start = float(value)
        self._target = float(value)
        self._t0 = 0.0
        self._lock = threading.Lock()

    @property
    def target(self) -> float:
        return self._target

    def retarget(self, target: float, now: float) -> None:
        """Start a new segment from wherever the tween is at `now`."""
        with self._lock:
            self._start = self._value_at(now)
            self._target = float(target)
            self._t0 = float(now)

    def value_at(self, now: float) -> float:
        with self._lock:
            return self._value_at(now)

    def _value_at(self, now: float) -> float:
        if self.duration_s == 0.0:
            return self._target
        t = (float(now) - self._t0) / self.duration_s
        return _lerp(self._start, self._target, min(1.0, max(0.0, t)))

    def is_idle(self, now: float) -> bool:
        return float(now) - self._t0 >= self.duration_s
