"""
Capture sources that need no audio hardware: in-memory arrays and audio files.

Every source exposes the same small surface the estimator reads from:
open(), close(), is_ready(), block_size and a blocking read(buffer) -> count.
"""

from __future__ import annotations
import numpy as np
import soundfile as sf

from .constants import SR
from .dsp import to_mono_int16
from .errors import DeviceInitError


class ArraySource:
    """Replays a mono int16 array block by block."""
    def __init__(self, samples: np.ndarray, block_size: int = 1024, loop: bool = False,
                 samplerate: int = SR):
        if int(block_size) <= 0:
            raise ValueError("block_size must be positive")
        self.samples = to_mono_int16(samples)
        self.block_size = int(block_size)
        self.loop = bool(loop)
        self.samplerate = int(samplerate)
        self._pos = 0
        self._open = False

    def open(self) -> None:
        self._pos = 0
        self._open = True

    def close(self) -> None:
        self._open = False

    def is_ready(self) -> bool:
        return self._open

    def read(self, buffer: np.ndarray) -> int:
        """Copy up to len(buffer) samples into `buffer`. Returns 0 once exhausted."""
        if not self._open:
            return 0
        n_total = len(self.samples)
        if self.loop and n_total > 0 and self._pos >= n_total:
            self._pos = 0
        chunk = self.samples[self._pos:self._pos + len(buffer)]
        n = len(chunk)
        buffer[:n] = chunk
        self._pos += n
        return n


class WavFileSource(ArraySource):
    """
    Loads an audio file with soundfile, downmixes to mono int16 and replays it.
    Unreadable files surface as DeviceInitError on open(), like a busy device.
    """
    def __init__(self, path: str, block_size: int = 1024, loop: bool = False):
        super().__init__(np.zeros(0, dtype=np.int16), block_size=block_size, loop=loop)
        self.path = str(path)

    def open(self) -> None:
        try:
            data, sr = sf.read(self.path, dtype="int16", always_2d=True)
        except (RuntimeError, OSError) as exc:
            raise DeviceInitError(f"cannot open audio file {self.path!r}: {exc}") from exc
        self.samples = to_mono_int16(data)
        self.samplerate = int(sr)
        super().open()

