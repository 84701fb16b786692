import math
import numpy as np
import pytest

from wavedemo.dsp import rms, loudness_from_rms, block_loudness, gaussian_envelope, to_mono_int16


def test_silence_is_exactly_zero():
    block = np.zeros(1024, dtype=np.int16)
    assert rms(block) == 0.0
    assert block_loudness(block) == 0.0


def test_constant_block_clamps_to_max():
    block = np.full(1024, 10000, dtype=np.int16)
    assert rms(block) == pytest.approx(10000.0)
    assert block_loudness(block) == pytest.approx(100.0)


def test_int16_extremes_do_not_overflow():
    block = np.full(512, -32768, dtype=np.int16)
    assert rms(block) == pytest.approx(32768.0)


def test_sine_rms_is_peak_over_root_two():
    peak = 8000
    n = 44100
    t = np.arange(n) / 44100.0
    block = np.round(peak * np.sin(2 * np.pi * 441.0 * t)).astype(np.int16)
    assert rms(block) == pytest.approx(peak / math.sqrt(2), rel=1e-3)


def test_loudness_is_linear_below_calibration():
    assert loudness_from_rms(2500.0) == pytest.approx(50.0)
    assert loudness_from_rms(-1.0) == 0.0


def test_loudness_rejects_bad_calibration():
    with pytest.raises(ValueError):
        loudness_from_rms(1.0, calibration_rms=0.0)


def test_empty_block():
    assert rms(np.zeros(0, dtype=np.int16)) == 0.0


def test_gaussian_envelope_shape():
    env = gaussian_envelope(600)
    assert len(env) == 601
    assert env[300] == pytest.approx(1.0)
    assert env.argmax() == 300
    # three sigma out at the edges
    assert env[0] == pytest.approx(math.exp(-4.5))
    assert env[-1] == pytest.approx(math.exp(-4.5))
    assert np.allclose(env, env[::-1])


def test_gaussian_envelope_degenerate():
    assert len(gaussian_envelope(0)) == 0
    assert len(gaussian_envelope(-5)) == 0


def test_to_mono_int16_downmixes_int_and_float():
    stereo = np.array([[100, 300], [-200, -400]], dtype=np.int16)
    assert to_mono_int16(stereo).tolist() == [200, -300]

    floats = np.array([0.5, -1.0, 2.0])
    out = to_mono_int16(floats)
    assert out.dtype == np.int16
    assert out.tolist() == [16384, -32767, 32767]
