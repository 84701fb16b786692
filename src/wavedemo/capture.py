"""
Microphone capture using sounddevice.
- Single mono int16 input stream at SR.
- Blocking reads sized to the device's low-latency block.
"""

from __future__ import annotations
import logging
import threading
import numpy as np
import sounddevice as sd

from .constants import SR, CHANNELS, DTYPE, MIN_BLOCK_SIZE
from .errors import DeviceInitError

logger = logging.getLogger(__name__)


def min_block_size(device=None, samplerate: int = SR) -> int:
    """
    Smallest practical block for the input device, in samples:
    its default low input latency times the sample rate, floored at MIN_BLOCK_SIZE.
    """
    try:
        info = sd.query_devices(device, "input")
    except (sd.PortAudioError, ValueError) as exc:
        raise DeviceInitError(f"no usable input device: {exc}") from exc
    latency = float(info.get("default_low_input_latency", 0.0))
    return max(MIN_BLOCK_SIZE, int(round(latency * samplerate)))


def list_input_devices() -> list[tuple[int, str, int]]:
    """(index, name, max_input_channels) for every device that can record."""
    out = []
    for idx, dev in enumerate(sd.query_devices()):
        if dev["max_input_channels"] > 0:
            out.append((idx, dev["name"], int(dev["max_input_channels"])))
    return out


class SoundDeviceSource:
    """Mono 16-bit microphone source backed by a blocking sd.InputStream."""
    def __init__(self, device=None, block_size: int | None = None, samplerate: int = SR):
        self.device = device
        self.samplerate = int(samplerate)
        self._block_size = block_size
        self._lock = threading.RLock()
        self._stream: sd.InputStream | None = None

    @property
    def block_size(self) -> int:
        if self._block_size is None:
            self._block_size = min_block_size(self.device, self.samplerate)
        return int(self._block_size)

    def open(self) -> None:
        """Open and start the input stream."""
        with self._lock:
            if self._stream is not None:
                return
            try:
                sd.check_input_settings(device=self.device, channels=CHANNELS,
                                        dtype=DTYPE, samplerate=self.samplerate)
                stream = sd.InputStream(
                    device=self.device, samplerate=self.samplerate, channels=CHANNELS,
                    dtype=DTYPE, blocksize=self.block_size
                )
                stream.start()
            except (sd.PortAudioError, ValueError) as exc:
                raise DeviceInitError(f"cannot open input device {self.device!r}: {exc}") from exc
            self._stream = stream
            logger.debug("input stream open: device=%s block=%d sr=%d",
                         self.device, self.block_size, self.samplerate)

    def close(self) -> None:
        """Stop and release the stream."""
        with self._lock:
            stream, self._stream = self._stream, None
        if stream is not None:
            stream.stop()
            stream.close()

    def is_ready(self) -> bool:
        with self._lock:
            return self._stream is not None and self._stream.active

    def read(self, buffer: np.ndarray) -> int:
        """Blocking read of len(buffer) frames. Returns 0 if the stream is gone."""
        with self._lock:
            stream = self._stream
        if stream is None:
            return 0
        data, overflowed = stream.read(len(buffer))
        if overflowed:
            logger.debug("input overflow")
        n = len(data)
        buffer[:n] = data[:, 0]
        return n
