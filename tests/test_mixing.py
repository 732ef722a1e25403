import itertools

import numpy as np

from palette_master.mixing import (
    BLACK,
    WHITE,
    MixingSession,
    MixMode,
    mix,
    mix_additive,
    mix_subtractive,
)
from palette_master.models import CMYKColor, RGBColor
from palette_master.similarity import similarity

RED = RGBColor(255, 0, 0)
YELLOW = RGBColor(255, 255, 0)
BLUE = RGBColor(0, 0, 255)


def test_empty_fallbacks():
    assert mix_subtractive([]) == WHITE
    assert mix_additive([]) == BLACK


def test_single_color_unchanged():
    c = RGBColor(12, 200, 99, 0.4)
    assert mix_subtractive([c]) == c
    assert mix_additive([c]) == c


def test_red_and_yellow_make_orange():
    orange = mix_subtractive([RED, YELLOW])
    assert orange == RGBColor(255, 128, 0)
    assert 20.0 <= orange.to_hsv().hue <= 40.0
    assert similarity(orange, RGBColor(255, 128, 0)) >= 0.85


def test_subtractive_averages_cmyk():
    a = RGBColor(10, 120, 240)
    b = RGBColor(200, 30, 70)
    ca, cb = a.to_cmyk(), b.to_cmyk()
    expected = CMYKColor(
        (ca.c + cb.c) / 2, (ca.m + cb.m) / 2, (ca.y + cb.y) / 2, (ca.k + cb.k) / 2
    ).to_rgb()
    assert mix_subtractive([a, b]) == expected


def test_additive_averages_rgb():
    assert mix_additive([RED, BLUE]) == RGBColor(128, 0, 128)
    assert mix_additive([RED, YELLOW, BLUE]) == RGBColor(170, 85, 85)


def test_opacity_is_averaged():
    a = RGBColor(0, 0, 0, 0.2)
    b = RGBColor(255, 255, 255, 0.6)
    assert np.isclose(mix_subtractive([a, b]).opacity, 0.4)
    assert np.isclose(mix_additive([a, b]).opacity, 0.4)


def test_order_independent():
    colors = [
        RGBColor(255, 0, 0, 0.3),
        RGBColor(17, 200, 33, 0.7),
        RGBColor(0, 0, 255),
        RGBColor(250, 250, 5, 0.1),
    ]
    sub = {mix_subtractive(p) for p in itertools.permutations(colors)}
    add = {mix_additive(p) for p in itertools.permutations(colors)}
    assert len(sub) == 1
    assert len(add) == 1


def test_three_primaries_mix_to_a_muted_tone():
    muddy = mix_subtractive([RED, YELLOW, BLUE])
    assert muddy == RGBColor(170, 85, 85)
    assert np.isclose(muddy.to_hsv().saturation, 0.5)


def test_accepts_cmyk_and_hsv_inputs():
    assert mix_subtractive([RED.to_cmyk(), YELLOW.to_hsv()]) == mix_subtractive([RED, YELLOW])


def test_mix_dispatch():
    assert mix([RED, BLUE], "additive") == mix_additive([RED, BLUE])
    assert mix([RED, BLUE], MixMode.SUBTRACTIVE) == mix_subtractive([RED, BLUE])
    assert mix([RED, BLUE]) == mix_subtractive([RED, BLUE])


def test_unknown_mode():
    try:
        mix([RED], "glaze")
    except ValueError as e:
        assert "glaze" in str(e)
    else:
        raise AssertionError("expected ValueError")


def test_session_folds_drops():
    s = MixingSession()
    assert s.result() == WHITE
    assert s.add(RED) == RED
    assert s.add(YELLOW) == RGBColor(255, 128, 0)
    s.add(YELLOW, times=2)
    assert len(s) == 4
    assert s.result() == mix_subtractive([RED, YELLOW, YELLOW, YELLOW])
    assert s.undo() == mix_subtractive([RED, YELLOW, YELLOW])
    s.reset()
    assert len(s) == 0
    assert s.undo() == WHITE


def test_additive_session():
    s = MixingSession(MixMode.ADDITIVE)
    assert s.result() == BLACK
    s.add(RED)
    s.add(BLUE)
    assert s.result() == RGBColor(128, 0, 128)
