"""
Error taxonomy for the capture side. The renderer never raises these.
"""


class WaveDemoError(Exception):
    """Base class for wavedemo errors."""


class PermissionDenied(WaveDemoError):
    """Microphone permission was not granted; re-request and call start() again."""


class DeviceInitError(WaveDemoError):
    """Capture device busy, missing or unsupported. Terminal for the session."""


class ReadUnderrun(WaveDemoError):
    """A read returned no samples. Handled inside the estimator by skipping the tick."""
