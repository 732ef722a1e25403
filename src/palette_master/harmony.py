# harmony.py – complementary / analogous / triadic colors via hue rotation

from __future__ import annotations

from typing import List

from .models import AnyColor, RGBColor


def get_complementary(color: AnyColor) -> RGBColor:
    rgb = color.to_rgb()
    return RGBColor(255 - rgb.r, 255 - rgb.g, 255 - rgb.b, rgb.opacity)


def get_analogous(color: AnyColor, count: int = 3, interval: float = 30.0) -> List[RGBColor]:
    """
    The input color followed by `count - 1` hue rotations of `interval * i`
    degrees. Saturation, value and opacity stay fixed.
    """
    rgb = color.to_rgb()
    hsv = rgb.to_hsv()
    out: List[RGBColor] = [rgb]
    for i in range(1, int(count)):
        out.append(hsv.rotate(interval * i).to_rgb())
    return out


def get_triadic(color: AnyColor) -> List[RGBColor]:
    rgb = color.to_rgb()
    hsv = rgb.to_hsv()
    return [rgb, hsv.rotate(120.0).to_rgb(), hsv.rotate(240.0).to_rgb()]


SCHEMES = ("complementary", "analogous", "triadic")

__all__ = ["SCHEMES", "get_analogous", "get_complementary", "get_triadic"]
