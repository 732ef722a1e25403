import itertools

import pytest

from palette_master.harmony import get_analogous, get_complementary, get_triadic
from palette_master.models import RGBColor

_LEVELS = (0, 33, 128, 200, 255)
GRID = [RGBColor(r, g, b, 0.5) for r, g, b in itertools.product(_LEVELS, repeat=3)]


def hue_gap(a, b):
    return (b - a) % 360.0


def test_complement_per_channel():
    assert get_complementary(RGBColor(255, 128, 0, 0.3)) == RGBColor(0, 127, 255, 0.3)


def test_double_complement_is_identity():
    for c in GRID:
        assert get_complementary(get_complementary(c)) == c


def test_triadic_pure_red():
    red = RGBColor(255, 0, 0)
    assert get_triadic(red) == [red, RGBColor(0, 255, 0), RGBColor(0, 0, 255)]


@pytest.mark.parametrize(
    "color", [RGBColor(200, 60, 40), RGBColor(30, 180, 220), RGBColor(90, 40, 160, 0.8)]
)
def test_triadic_spacing(color):
    out = get_triadic(color)
    assert len(out) == 3
    assert out[0] == color
    hsv = [c.to_hsv() for c in out]
    for a, b in ((hsv[0], hsv[1]), (hsv[1], hsv[2]), (hsv[2], hsv[0])):
        assert hue_gap(a.hue, b.hue) == pytest.approx(120.0, abs=1.5)
    for h in hsv[1:]:
        assert h.saturation == pytest.approx(hsv[0].saturation, abs=0.02)
        assert h.value == pytest.approx(hsv[0].value, abs=0.01)
        assert h.opacity == color.opacity


def test_analogous_defaults():
    base = RGBColor(255, 0, 0)
    out = get_analogous(base)
    assert len(out) == 3
    assert out[0] is base
    assert out[1] == RGBColor(255, 128, 0)
    assert out[2] == RGBColor(255, 255, 0)


def test_analogous_count_and_interval():
    base = RGBColor(0, 0, 255)
    out = get_analogous(base, count=5, interval=45.0)
    assert len(out) == 5
    hues = [c.to_hsv().hue for c in out]
    for i, h in enumerate(hues):
        assert hue_gap(hues[0], h) == pytest.approx((45.0 * i) % 360.0, abs=1.0)


def test_analogous_degenerate_count():
    c = RGBColor(1, 2, 3)
    assert get_analogous(c, count=0) == [c]
    assert get_analogous(c, count=1) == [c]


def test_analogous_wraps_hue():
    out = get_analogous(RGBColor(255, 0, 128), count=2, interval=90.0)
    assert out[1].to_hsv().hue < 90.0
