"""
Wave layer configurations and named presets.

"layered": three overlapping sines under a Gaussian window, with an edge-fade
mask for the compositor. "plain": the same layers, unwindowed and unmasked.
"""

from __future__ import annotations
from dataclasses import dataclass, replace

PRIMARY = "#6750A4"
SECONDARY = "#625B71"
ON_PRIMARY = "#FFFFFF"


@dataclass(frozen=True)
class WaveLayerConfig:
    speed: float            # phase sweeps per second, in turns of 2*pi
    amplitude_scale: float  # multiplier on the smoothed loudness
    frequency: float        # radians per pixel
    stroke_width: float = 5.0
    color: str = ON_PRIMARY
    opacity: float = 1.0
    envelope: bool = True   # Gaussian window on/off


@dataclass(frozen=True)
class LayerPreset:
    name: str
    layers: tuple[WaveLayerConfig, ...]
    # (offset 0..1, color, alpha) stops for a horizontal edge mask; empty = none
    mask_stops: tuple[tuple[float, str, float], ...] = ()
    background: str = PRIMARY


_LAYERS = (
    WaveLayerConfig(speed=2.0, amplitude_scale=2.0, frequency=0.050, opacity=1.0),
    WaveLayerConfig(speed=3.0, amplitude_scale=1.0, frequency=0.030, opacity=0.5),
    WaveLayerConfig(speed=1.0, amplitude_scale=0.5, frequency=0.015, opacity=0.2),
)

EDGE_MASK = (
    (0.0, PRIMARY, 1.0),
    (0.3, PRIMARY, 0.0),
    (0.7, SECONDARY, 0.0),
    (1.0, PRIMARY, 1.0),
)

PRESETS = {
    "layered": LayerPreset("layered", _LAYERS, mask_stops=EDGE_MASK),
    "plain": LayerPreset("plain", tuple(replace(layer, envelope=False) for layer in _LAYERS)),
}


def get_preset(name: str) -> LayerPreset:
    """Look up a preset by name (case-insensitive)."""
    try:
        return PRESETS[name.lower()]
    except KeyError:
        raise KeyError(f"unknown preset {name!r}; choose from {sorted(PRESETS)}") from None


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    c = color.lstrip("#")
    return int(c[0:2], 16), int(c[2:4], 16), int(c[4:6], 16)


def mix_hex(a: str, b: str, t: float) -> str:
    """Linear mix from colour a (t=0) to colour b (t=1), as #RRGGBB."""
    t = min(1.0, max(0.0, float(t)))
    ca, cb = hex_to_rgb(a), hex_to_rgb(b)
    r, g, bl = (int(round(ca[i] + (cb[i] - ca[i]) * t)) for i in range(3))
    return f"#{r:02X}{g:02X}{bl:02X}"


def mask_at(stops, u: float) -> tuple[str, float]:
    """
    Mask (color, alpha) at horizontal position u in [0, 1], both linear between stops.
    Without stops the mask is fully transparent.
    """
    if not stops:
        return "#000000", 0.0
    u = min(1.0, max(0.0, float(u)))
    prev = stops[0]
    for stop in stops:
        if u <= stop[0]:
            if stop[0] == prev[0]:
                return stop[1], stop[2]
            t = (u - prev[0]) / (stop[0] - prev[0])
            return mix_hex(prev[1], stop[1], t), prev[2] + (stop[2] - prev[2]) * t
        prev = stop
    return stops[-1][1], stops[-1][2]
