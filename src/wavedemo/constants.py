"""
Global constants for capture, loudness estimation and wave rendering.
"""

SR: int = 44_100                      # Capture sample rate (Hz)
CHANNELS: int = 1                     # Mono
DTYPE: str = "int16"                  # Signed 16-bit PCM
MIN_BLOCK_SIZE: int = 256             # Floor for the device-reported block size

READ_INTERVAL_MS: int = 50            # Pause between reads
CALIBRATION_RMS: float = 5000.0       # RMS mapped to full visual amplitude
MAX_VISUAL_AMPLITUDE: float = 100.0   # Max wave amplitude in pixels

SMOOTHING_MS: int = 200               # Linear tween toward each new loudness
FRAME_INTERVAL_MS: int = 16           # ~60 Hz redraw
