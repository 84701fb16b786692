import threading
import pytest

from wavedemo.cell import LoudnessCell
from wavedemo.smoothing import AmplitudeTween


def test_cell_set_get_and_version():
    cell = LoudnessCell()
    assert cell.get() == 0.0
    assert cell.version == 0
    cell.set(42)
    assert cell.get() == 42.0
    assert cell.version == 1


def test_cell_wait_for_update_wakes_on_set():
    cell = LoudnessCell()
    t = threading.Timer(0.05, cell.set, args=(7.0,))
    t.start()
    value, version = cell.wait_for_update(0, timeout=2.0)
    t.join()
    assert (value, version) == (7.0, 1)


def test_cell_wait_for_update_times_out():
    cell = LoudnessCell(3.0)
    assert cell.wait_for_update(0, timeout=0.01) == (3.0, 0)


def test_cell_subscribe_and_unsubscribe():
    cell = LoudnessCell()
    seen = []
    unsubscribe = cell.subscribe(seen.append)
    cell.set(1.0)
    cell.set(2.0)
    unsubscribe()
    cell.set(3.0)
    assert seen == [1.0, 2.0]
    unsubscribe()  # second call is harmless


def test_tween_linear_then_idle():
    tw = AmplitudeTween(duration_s=0.2)
    tw.retarget(100.0, now=10.0)
    assert tw.value_at(10.0) == 0.0
    assert tw.value_at(10.1) == pytest.approx(50.0)
    assert not tw.is_idle(10.1)
    assert tw.value_at(10.2) == pytest.approx(100.0)
    assert tw.value_at(99.0) == 100.0
    assert tw.is_idle(10.3)


def test_tween_retarget_midway_starts_from_current_value():
    tw = AmplitudeTween(duration_s=0.2)
    tw.retarget(100.0, now=0.0)
    tw.retarget(0.0, now=0.1)       # at 50 when retargeted
    assert tw.target == 0.0
    assert tw.value_at(0.1) == pytest.approx(50.0)
    assert tw.value_at(0.2) == pytest.approx(25.0)
    assert tw.value_at(0.3) == pytest.approx(0.0)


def test_tween_zero_duration_jumps():
    tw = AmplitudeTween(duration_s=0.0)
    tw.retarget(5.0, now=1.0)
    assert tw.value_at(1.0) == 5.0


def test_tween_rejects_negative_duration():
    with pytest.raises(ValueError):
        AmplitudeTween(duration_s=-1)
