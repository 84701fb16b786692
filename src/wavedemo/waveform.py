"""
Waveform synthesis for the visualizer: a sine across the canvas, optionally
shaped by a Gaussian window, sampled once per pixel column.

render() is a pure function of its inputs; the only moving part is the phase,
which the caller drives (see PhaseDriver).
"""

from __future__ import annotations
from dataclasses import dataclass
import math
import numpy as np

from .dsp import gaussian_envelope


@dataclass
class WavePath:
    points: np.ndarray                # (N, 2) float64, (x, y) per column
    stroke_width: float
    color: str = "#FFFFFF"
    opacity: float = 1.0

    def __len__(self) -> int:
        return len(self.points)

    @property
    def is_empty(self) -> bool:
        return len(self.points) == 0

    def flat(self) -> list[float]:
        """x0, y0, x1, y1, ... as plain floats (Tk canvas coordinate order)."""
        return self.points.ravel().tolist()


def wave_y(width: float, amplitude: float, frequency: float, phase: float,
           envelope: bool = True) -> np.ndarray:
    """
    Vertical offsets from the centre line for columns 0..int(width):
        y(x) = amplitude * sin(frequency * x + phase) [* gaussian(x)]
    """
    x = np.arange(int(width) + 1, dtype=np.float64)
    y = amplitude * np.sin(frequency * x + phase)
    if envelope:
        y = y * gaussian_envelope(width)
    return y


def render(width: float, height: float, amplitude: float, frequency: float, phase: float,
           stroke_width: float, envelope: bool = True, color: str = "#FFFFFF",
           opacity: float = 1.0) -> WavePath:
    """
    Build the polyline for one layer. One point per integer column in [0, width],
    centred vertically. Zero-size canvases give an empty path.
    """
    if width <= 0 or height <= 0:
        return WavePath(np.zeros((0, 2), dtype=np.float64), stroke_width, color, opacity)

    y = wave_y(width, amplitude, frequency, phase, envelope=envelope)
    x = np.arange(len(y), dtype=np.float64)
    points = np.column_stack([x, height / 2.0 + y])
    return WavePath(points, float(stroke_width), color, float(opacity))


class PhaseDriver:
    """
    Sawtooth phase drive: ramps linearly from 0 to 2*pi*speed over `period_s`,
    then restarts from 0. Rate is proportional to speed.
    """
    def __init__(self, speed: float = 1.0, period_s: float = 1.0, t0: float = 0.0):
        if period_s <= 0:
            raise ValueError("period_s must be positive")
        self.speed = float(speed)
        self.period_s = float(period_s)
        self.t0 = float(t0)

    @property
    def sweep(self) -> float:
        return 2.0 * math.pi * self.speed

    def phase_at(self, t: float) -> float:
        frac = ((t - self.t0) / self.period_s) % 1.0
        return self.sweep * frac
