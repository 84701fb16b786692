import math
import numpy as np
import pytest

from wavedemo.waveform import render, wave_y, PhaseDriver


def test_point_count_is_width_plus_one():
    for width in (1, 7, 100, 641):
        path = render(width, 200, amplitude=50, frequency=0.05, phase=0.3, stroke_width=5)
        assert len(path) == width + 1
        assert path.points.shape == (width + 1, 2)
        assert path.points[0, 0] == 0.0
        assert path.points[-1, 0] == width


def test_zero_size_canvas_gives_empty_path():
    assert render(0, 200, 50, 0.05, 0.0, 5).is_empty
    assert render(300, 0, 50, 0.05, 0.0, 5).is_empty
    assert render(-10, 200, 50, 0.05, 0.0, 5).flat() == []


def test_render_is_deterministic():
    a = render(400, 200, 37.5, 0.03, 1.234, 5)
    b = render(400, 200, 37.5, 0.03, 1.234, 5)
    assert np.array_equal(a.points, b.points)


def test_centred_on_half_height():
    path = render(300, 200, amplitude=0.0, frequency=0.05, phase=0.0, stroke_width=5)
    assert np.all(path.points[:, 1] == 100.0)


def test_envelope_pins_edges_and_keeps_centre():
    width = 600
    # phase chosen so sin(...) = 1 at the centre column
    phase = math.pi / 2 - 0.05 * (width / 2)
    y = wave_y(width, 80.0, 0.05, phase, envelope=True)
    assert y[width // 2] == pytest.approx(80.0)
    assert abs(y[0]) <= 80.0 * math.exp(-4.5) + 1e-9
    assert abs(y[-1]) <= 80.0 * math.exp(-4.5) + 1e-9


def test_envelope_off_is_plain_sine():
    y = wave_y(100, 10.0, 0.1, 0.5, envelope=False)
    x = np.arange(101)
    assert np.allclose(y, 10.0 * np.sin(0.1 * x + 0.5))


def test_periodic_in_phase():
    a = render(500, 200, 60, 0.02, 0.7, 5)
    b = render(500, 200, 60, 0.02, 0.7 + 2 * math.pi, 5)
    assert np.allclose(a.points, b.points, atol=1e-9)


def test_path_carries_style():
    path = render(10, 10, 1, 0.1, 0, stroke_width=3, color="#112233", opacity=0.5)
    assert path.stroke_width == 3.0
    assert path.color == "#112233"
    assert path.opacity == 0.5
    assert len(path.flat()) == 22


def test_phase_driver_sawtooth():
    drv = PhaseDriver(speed=2.0, period_s=1.0, t0=10.0)
    assert drv.phase_at(10.0) == 0.0
    assert drv.phase_at(10.25) == pytest.approx(math.pi)
    assert drv.phase_at(10.5) == pytest.approx(2 * math.pi)
    # restarts instead of bouncing back
    assert drv.phase_at(11.0) == pytest.approx(0.0)
    assert drv.phase_at(11.25) == pytest.approx(math.pi)


def test_phase_driver_rate_follows_speed():
    slow = PhaseDriver(speed=1.0)
    fast = PhaseDriver(speed=3.0)
    assert fast.phase_at(0.1) == pytest.approx(3 * slow.phase_at(0.1))


def test_phase_driver_rejects_bad_period():
    with pytest.raises(ValueError):
        PhaseDriver(period_s=0)
