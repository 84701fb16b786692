import pytest

pytest.importorskip("tkinter")

from wavedemo.ui_tk import blend


def test_blend_endpoints_and_midpoint():
    assert blend("#FFFFFF", "#000000", 1.0) == "#FFFFFF"
    assert blend("#FFFFFF", "#000000", 0.0) == "#000000"
    assert blend("#FFFFFF", "#000000", 0.5) == "#808080"


def test_blend_clamps_alpha():
    assert blend("#102030", "#000000", 3.0) == "#102030"
    assert blend("#102030", "#FFFFFF", -1.0) == "#FFFFFF"
