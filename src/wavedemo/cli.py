"""
Command-line entrypoint: live viewer, console meter, offline loudness scan.
"""

from __future__ import annotations
import argparse
import csv
import logging
import os
import sys
import time

import soundfile as sf

from .constants import READ_INTERVAL_MS, MAX_VISUAL_AMPLITUDE
from .dsp import rms, loudness_from_rms, to_mono_int16
from .errors import WaveDemoError
from .loudness import LoudnessEstimator
from .presets import PRESETS, get_preset
from .sources import WavFileSource


def _positive_int(value: str) -> int:
    n = int(value)
    if n <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return n


def _device(value: str | None):
    """Device flag: integer index when numeric, else a name substring for PortAudio."""
    if value is None:
        return None
    return int(value) if value.isdigit() else value


def _make_source(args):
    if args.wav:
        return WavFileSource(args.wav, loop=True)
    # PortAudio is only loaded when a real microphone is wanted
    from .capture import SoundDeviceSource
    return SoundDeviceSource(device=_device(args.device))


def cmd_view(args) -> int:
    import tkinter as tk
    from .ui_tk import WaveViewer

    estimator = LoudnessEstimator(_make_source(args), interval_ms=args.interval)
    root = tk.Tk()
    WaveViewer(root, estimator, get_preset(args.preset))
    root.mainloop()
    return 0


def cmd_meter(args) -> int:
    estimator = LoudnessEstimator(_make_source(args), interval_ms=args.interval)
    estimator.start(permission_granted=True)
    t_start = time.monotonic()
    version = estimator.cell.version
    try:
        while args.seconds <= 0 or time.monotonic() - t_start < args.seconds:
            value, new_version = estimator.cell.wait_for_update(version, timeout=0.5)
            if estimator.error is not None:
                print(f"[ERR] capture stopped: {estimator.error}", file=sys.stderr)
                return 1
            if new_version == version:
                continue
            version = new_version
            bar = "█" * int(round(40 * value / MAX_VISUAL_AMPLITUDE))
            print(f"{time.monotonic() - t_start:7.2f}s {value:6.1f} {bar}")
    except KeyboardInterrupt:
        print("\nStopping...")
    finally:
        estimator.stop()
    return 0


def scan_file(path: str, block_size: int = 1024):
    """Yield (time_s, rms, loudness) for each block of an audio file."""
    if int(block_size) <= 0:
        raise ValueError("block_size must be positive")
    info = sf.info(path)
    for i, block in enumerate(sf.blocks(path, blocksize=block_size, dtype="int16", always_2d=True)):
        mono = to_mono_int16(block)
        level = rms(mono)
        yield i * block_size / info.samplerate, level, loudness_from_rms(level)


def cmd_scan(args) -> int:
    try:
        sf.info(args.file)
    except (RuntimeError, OSError) as exc:
        print(f"[ERR] cannot read {args.file!r}: {exc}", file=sys.stderr)
        return 1
    rows = scan_file(args.file, block_size=args.block_size)
    if args.out:
        out_dir = os.path.dirname(args.out) or "."
        os.makedirs(out_dir, exist_ok=True)
        with open(args.out, "w", newline="") as fh:
            n = _write_rows(fh, rows)
        print(f"[OK] Wrote {n} rows: {os.path.abspath(args.out)}")
    else:
        _write_rows(sys.stdout, rows)
    return 0


def _write_rows(fh, rows) -> int:
    writer = csv.writer(fh)
    writer.writerow(["time_s", "rms", "loudness"])
    n = 0
    for t, level, loud in rows:
        writer.writerow([f"{t:.4f}", f"{level:.2f}", f"{loud:.2f}"])
        n += 1
    return n


def cmd_devices(args) -> int:
    from .capture import list_input_devices
    for idx, name, channels in list_input_devices():
        print(f"{idx:3d}  {name}  ({channels} in)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="wavedemo", description="Microphone loudness wave visualizer.")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = ap.add_subparsers(dest="command", required=True)

    def add_capture_flags(p):
        p.add_argument("--device", type=str, default=None, help="Input device index or name")
        p.add_argument("--wav", type=str, default=None, help="Replay an audio file instead of the mic")
        p.add_argument("--interval", type=float, default=READ_INTERVAL_MS, help="Read interval (ms)")

    p = sub.add_parser("view", help="Open the live wave viewer")
    add_capture_flags(p)
    p.add_argument("--preset", choices=sorted(PRESETS), default="layered", help="Layer preset")
    p.set_defaults(func=cmd_view)

    p = sub.add_parser("meter", help="Print live loudness to the console")
    add_capture_flags(p)
    p.add_argument("--seconds", type=float, default=0.0, help="Stop after N seconds (0 = until Ctrl+C)")
    p.set_defaults(func=cmd_meter)

    p = sub.add_parser("scan", help="Loudness trace of an audio file as CSV")
    p.add_argument("file", type=str, help="Input audio file")
    p.add_argument("--out", type=str, default=None, help="Output CSV path (default: stdout)")
    p.add_argument("--block-size", type=_positive_int, default=1024, help="Samples per block")
    p.set_defaults(func=cmd_scan)

    p = sub.add_parser("devices", help="List input devices")
    p.set_defaults(func=cmd_devices)
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except (WaveDemoError, ValueError) as exc:
        print(f"[ERR] {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
