"""
Frame-loop glue: published loudness -> smoothed amplitude -> one path per layer.
"""

from __future__ import annotations
import time

from .cell import LoudnessCell
from .presets import LayerPreset
from .smoothing import AmplitudeTween
from .waveform import PhaseDriver, WavePath, render


class WaveScene:
    """
    Listens to a LoudnessCell and renders every layer of a preset on demand.
    Phase drivers all share the scene's start time.
    """
    def __init__(self, preset: LayerPreset, cell: LoudnessCell | None = None,
                 tween: AmplitudeTween | None = None, clock=time.monotonic):
        self.preset = preset
        self.clock = clock
        self.tween = tween if tween is not None else AmplitudeTween()
        t0 = self.clock()
        self.drivers = [PhaseDriver(layer.speed, t0=t0) for layer in preset.layers]
        self.cell = None
        self._unsubscribe = None
        if cell is not None:
            self.attach(cell)

    def attach(self, cell: LoudnessCell) -> None:
        """Follow `cell`; every new value retargets the tween."""
        self.detach()
        self.cell = cell
        self._unsubscribe = cell.subscribe(self.on_loudness)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
        self._unsubscribe = None
        self.cell = None

    def on_loudness(self, value: float) -> None:
        self.tween.retarget(value, self.clock())

    def amplitude_at(self, now: float) -> float:
        return self.tween.value_at(now)

    def frame(self, now: float, width: float, height: float) -> list[WavePath]:
        """Paths for every layer at time `now`, back to front in preset order."""
        amp = self.amplitude_at(now)
        paths = []
        for layer, driver in zip(self.preset.layers, self.drivers):
            paths.append(render(
                width, height,
                amplitude=amp * layer.amplitude_scale,
                frequency=layer.frequency,
                phase=driver.phase_at(now),
                stroke_width=layer.stroke_width,
                envelope=layer.envelope,
                color=layer.color,
                opacity=layer.opacity,
            ))
        return paths
