"""
Low-level signal utilities: block loudness, windowing and sample-format helpers.
Designed for clarity, not micro-optimized for speed.

All functions are pure and stateless.
"""

from __future__ import annotations
import numpy as np
from .constants import CALIBRATION_RMS, MAX_VISUAL_AMPLITUDE


# ---------- Loudness ----------

def rms(block: np.ndarray) -> float:
    """
    Root-mean-square of a block of samples. Empty blocks give 0.0.
    int16 input is widened first so squaring cannot overflow.
    """
    x = np.asarray(block, dtype=np.float64)
    if x.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(x * x)))


def loudness_from_rms(value: float,
                      calibration_rms: float = CALIBRATION_RMS,
                      max_amplitude: float = MAX_VISUAL_AMPLITUDE) -> float:
    """Map an RMS level to the visual range [0, max_amplitude]."""
    if calibration_rms <= 0.0:
        raise ValueError("calibration_rms must be positive")
    norm = min(1.0, max(0.0, float(value) / calibration_rms))
    return norm * max_amplitude


def block_loudness(block: np.ndarray) -> float:
    """RMS of the block, rescaled against the calibration constant and clamped."""
    return loudness_from_rms(rms(block))


# ---------- Windows ----------

def gaussian_envelope(width: float) -> np.ndarray:
    """
    Gaussian window over the integer columns 0..int(width), peak 1.0 at width/2,
    sigma = width/6 so the edges sit near zero. Empty for width <= 0.
    """
    width = float(width)
    if width <= 0.0:
        return np.zeros(0, dtype=np.float64)
    x = np.arange(int(width) + 1, dtype=np.float64)
    sigma = width / 6.0
    return np.exp(-0.5 * ((x - width / 2.0) / sigma) ** 2)


# ---------- Sample format ----------

def to_mono_int16(data: np.ndarray) -> np.ndarray:
    """
    Downmix (frames,) or (frames, channels) audio to mono int16.
    Float input is treated as [-1, 1] full scale.
    """
    x = np.asarray(data)
    is_float = np.issubdtype(x.dtype, np.floating)
    if x.ndim > 1:
        x = x.astype(np.float64).mean(axis=1)
    if is_float:
        x = np.clip(x, -1.0, 1.0) * 32767.0
    return np.clip(np.round(x), -32768, 32767).astype(np.int16)
