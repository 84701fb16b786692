"""
Tkinter (ttk) viewer: Start/Stop buttons over a canvas of loudness-driven waves.
Tk has no alpha channel, so layer opacity and the edge mask are blended against
the background colour before drawing.
"""

from __future__ import annotations
import logging
import time
import tkinter as tk
from tkinter import ttk, messagebox

from .constants import FRAME_INTERVAL_MS
from .errors import WaveDemoError
from .loudness import LoudnessEstimator
from .presets import LayerPreset, mask_at, mix_hex
from .scene import WaveScene

logger = logging.getLogger(__name__)

APP_TITLE = "Wave Demo"
SEGMENT_COLUMNS = 16  # columns per canvas line item when the edge mask is on


def blend(fg: str, bg: str, alpha: float) -> str:
    """fg over bg at `alpha`, as #RRGGBB."""
    return mix_hex(bg, fg, alpha)


class WaveViewer(ttk.Frame):
    """Main application frame."""

    def __init__(self, master: tk.Tk, estimator: LoudnessEstimator, preset: LayerPreset,
                 height: int = 200) -> None:
        super().__init__(master, padding=16)
        master.title(APP_TITLE)
        master.minsize(480, height + 120)

        style = ttk.Style()
        theme = "vista" if "vista" in style.theme_names() else "clam"
        style.theme_use(theme)

        self.estimator = estimator
        self.preset = preset
        self.scene = WaveScene(preset, cell=estimator.cell)
        self.var_status = tk.StringVar(value="Idle")

        # Layout
        bar = ttk.Frame(self)
        bar.grid(row=0, column=0, sticky="w", pady=(0, 12))
        ttk.Button(bar, text="Start Recording", command=self.start).grid(row=0, column=0, padx=(0, 8))
        ttk.Button(bar, text="Stop Recording", command=self.stop).grid(row=0, column=1)

        self.canvas = tk.Canvas(self, height=height, background=preset.background,
                                highlightthickness=0)
        self.canvas.grid(row=1, column=0, sticky="nsew")
        ttk.Label(self, textvariable=self.var_status, foreground="#666").grid(
            row=2, column=0, sticky="w", pady=(8, 0))

        self.grid(sticky="nsew")
        self.columnconfigure(0, weight=1)
        self.rowconfigure(1, weight=1)
        master.columnconfigure(0, weight=1)
        master.rowconfigure(0, weight=1)
        master.protocol("WM_DELETE_WINDOW", self._on_close)

        self._tick()

    # ---------- actions ----------

    def start(self) -> None:
        try:
            self.estimator.start(permission_granted=True)
        except WaveDemoError as exc:
            messagebox.showerror(APP_TITLE, str(exc))
            self.var_status.set(f"Error: {exc}")
            return
        self.var_status.set("Recording")

    def stop(self) -> None:
        self.estimator.stop()
        self.var_status.set("Stopped")

    def _on_close(self) -> None:
        self.estimator.stop()
        self.scene.detach()
        self.master.destroy()

    # ---------- drawing ----------

    def _tick(self) -> None:
        self._draw(time.monotonic())
        if self.estimator.error is not None and self.var_status.get() == "Recording":
            self.var_status.set(f"Error: {self.estimator.error}")
        self.after(FRAME_INTERVAL_MS, self._tick)

    def _draw(self, now: float) -> None:
        cnv = self.canvas
        cnv.delete("wave")
        width, height = cnv.winfo_width(), cnv.winfo_height()
        bg = self.preset.background
        for path in self.scene.frame(now, width - 1, height):
            if path.is_empty:
                continue
            color = blend(path.color, bg, path.opacity)
            if not self.preset.mask_stops:
                cnv.create_line(*path.flat(), fill=color, width=path.stroke_width, tags="wave")
                continue
            # Edge mask: fade each chunk toward the mask colour
            pts = path.points
            for i in range(0, len(pts) - 1, SEGMENT_COLUMNS):
                seg = pts[i:i + SEGMENT_COLUMNS + 1]
                u = float(seg[len(seg) // 2, 0]) / max(1.0, width - 1)
                mask_color, mask_alpha = mask_at(self.preset.mask_stops, u)
                seg_color = blend(mask_color, color, mask_alpha)
                cnv.create_line(*seg.ravel().tolist(), fill=seg_color,
                                width=path.stroke_width, tags="wave")
