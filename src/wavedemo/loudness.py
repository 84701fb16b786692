"""
Loudness estimator: a background read loop that turns capture blocks into one
published loudness value per tick.

    est = LoudnessEstimator(SoundDeviceSource())
    est.start(permission_granted=True)
    est.current_loudness   # 0..MAX_VISUAL_AMPLITUDE
    est.stop()             # releases the device, resets to 0
"""

from __future__ import annotations
import logging
import threading
import numpy as np

from .cell import LoudnessCell
from .constants import READ_INTERVAL_MS
from .dsp import block_loudness
from .errors import PermissionDenied, DeviceInitError, ReadUnderrun

logger = logging.getLogger(__name__)


class LoudnessEstimator:
    """
    Owns one capture source and one background thread.
    Single-caller discipline: start()/stop() are not meant to race each other.
    """
    def __init__(self, source, interval_ms: float = READ_INTERVAL_MS, cell: LoudnessCell | None = None):
        if interval_ms < 0:
            raise ValueError("interval_ms must be >= 0")
        self.source = source
        self.interval_s = float(interval_ms) / 1000.0
        self.cell = cell if cell is not None else LoudnessCell()
        self.error: Exception | None = None
        self._publish_lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    # ---------- API ----------
    @property
    def current_loudness(self) -> float:
        return self.cell.get()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, permission_granted: bool) -> None:
        """Open the source and launch the read loop. No-op if already running."""
        if self.is_running:
            return
        if not permission_granted:
            raise PermissionDenied("microphone permission not granted")

        self.error = None
        self.source.open()
        if not self.source.is_ready():
            self.source.close()
            raise DeviceInitError("capture source not ready after open")

        self._stop = threading.Event()
        self._thread = threading.Thread(
            target=self._read_loop, args=(self._stop,),
            name="loudness-estimator", daemon=True
        )
        self._thread.start()
        logger.debug("estimator started: block=%d interval=%.3fs",
                     self.source.block_size, self.interval_s)

    def stop(self, timeout: float | None = 1.0) -> None:
        """Cancel the loop, release the device and reset the published value to 0."""
        self._stop.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
            if thread.is_alive():
                logger.warning("estimator thread still blocked in read after %.1fs", timeout)
        self.source.close()
        with self._publish_lock:
            self.cell.set(0.0)

    # ---------- loop ----------
    def _tick(self, buffer: np.ndarray) -> float:
        """Read one block. Raises ReadUnderrun when nothing was read."""
        n = self.source.read(buffer)
        if n <= 0:
            raise ReadUnderrun(n)
        return block_loudness(buffer[:n])

    def _read_loop(self, stop: threading.Event) -> None:
        buffer = np.zeros(self.source.block_size, dtype=np.int16)
        while not stop.is_set():
            try:
                value = self._tick(buffer)
                with self._publish_lock:
                    if stop.is_set():
                        break
                    self.cell.set(value)
            except ReadUnderrun:
                pass
            except Exception as exc:
                if stop.is_set():
                    # stop() already ended this session; the source may belong to a newer one
                    logger.debug("loop failed after stop, ignoring: %s", exc)
                    return
                # Device errors end the session; the caller has to start() again
                logger.exception("capture loop failed, stopping estimator")
                self.error = exc
                stop.set()
                self.source.close()
                with self._publish_lock:
                    self.cell.set(0.0)
                return
            stop.wait(self.interval_s)
