# palette.py – named swatches, hue naming and the palette heuristic tables

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Mapping, Sequence, Tuple, TypeVar

import numpy as np

from .models import AnyColor, HSVColor, RGBColor

T = TypeVar("T")

# --- pure hues and the curated level swatches --------------------------------
RED = RGBColor(255, 0, 0)
YELLOW = RGBColor(255, 255, 0)
BLUE = RGBColor(0, 0, 255)
WHITE = RGBColor(255, 255, 255)
BLACK = RGBColor(0, 0, 0)

ORANGE = RGBColor(255, 127, 0)
GREEN = RGBColor(0, 255, 0)
PURPLE = RGBColor(128, 0, 255)
PINK = RGBColor(255, 105, 180)
BROWN = RGBColor(139, 69, 19)
TEAL = RGBColor(0, 128, 128)
OLIVE = RGBColor(128, 128, 0)
VIBRANT_PURPLE = RGBColor(170, 0, 255)
EARTH_TONE = RGBColor(110, 70, 40)

# --- Material design primary swatches ----------------------------------------
MATERIAL: Mapping[str, RGBColor] = {
    name: RGBColor.from_hex(hx)
    for name, hx in (
        ("red", "f44336"),
        ("pink", "e91e63"),
        ("purple", "9c27b0"),
        ("indigo", "3f51b5"),
        ("blue", "2196f3"),
        ("cyan", "00bcd4"),
        ("teal", "009688"),
        ("green", "4caf50"),
        ("lime", "cddc39"),
        ("yellow", "ffeb3b"),
        ("amber", "ffc107"),
        ("orange", "ff9800"),
        ("deep_orange", "ff5722"),
        ("brown", "795548"),
        ("grey", "9e9e9e"),
        ("white", "ffffff"),
        ("black", "000000"),
    )
}

HOT_PINK = RGBColor.from_hex("fd3db5")

# swatches that have a common name of their own; anything else is named by hue
_COMMON_NAMES = ("red", "green", "blue", "yellow", "purple", "orange", "white", "black")

# upper bound (exclusive) → name; the last band catches everything up to 360
_HUE_NAMES: Tuple[Tuple[float, str], ...] = (
    (30.0, "red"),
    (60.0, "orange-red"),
    (90.0, "yellow-orange"),
    (120.0, "yellow"),
    (150.0, "yellow-green"),
    (180.0, "green"),
    (210.0, "blue-green"),
    (240.0, "teal"),
    (270.0, "blue"),
    (300.0, "purple"),
    (330.0, "magenta"),
    (math.inf, "red-magenta"),
)


def hue_description(hue: float) -> str:
    h = float(hue) % 360.0
    for upper, name in _HUE_NAMES:
        if h < upper:
            return name
    return _HUE_NAMES[-1][1]


def color_name(color: AnyColor) -> str:
    rgb = color.to_rgb()
    for name in _COMMON_NAMES:
        if MATERIAL[name] == rgb:
            return name
    return hue_description(rgb.to_hsv().hue)


# --- palette heuristic --------------------------------------------------------


@dataclass(frozen=True)
class HueBand:
    low: float
    high: float
    color: RGBColor
    closed: bool = False

    def contains(self, hue: float) -> bool:
        if self.closed:
            return self.low <= hue <= self.high
        return self.low < hue < self.high


@dataclass(frozen=True)
class ToneRule:
    channel: str  # "saturation" | "value"
    low: float
    high: float
    color: RGBColor

    def applies(self, hsv: HSVColor) -> bool:
        return self.low < getattr(hsv, self.channel) < self.high


HUE_BANDS: Tuple[HueBand, ...] = (
    HueBand(-math.inf, 60.0, MATERIAL["red"]),  # reds, pinks
    HueBand(300.0, math.inf, MATERIAL["red"]),  # purples wrapping to red
    HueBand(30.0, 150.0, MATERIAL["yellow"]),  # yellows, greens, oranges
    HueBand(90.0, 270.0, MATERIAL["blue"]),  # blues, purples, teals
    HueBand(30.0, 90.0, MATERIAL["orange"], closed=True),
    HueBand(60.0, 180.0, MATERIAL["green"], closed=True),
    HueBand(240.0, 300.0, MATERIAL["purple"], closed=True),
)

TONE_RULES: Tuple[ToneRule, ...] = (
    ToneRule("saturation", -math.inf, 0.6, MATERIAL["brown"]),  # muted / earth
    ToneRule("value", 0.4, math.inf, MATERIAL["white"]),  # lighten, not for very dark
    ToneRule("value", -math.inf, 0.8, MATERIAL["black"]),  # darken, not for very light
)

FALLBACK_COLORS: Tuple[RGBColor, ...] = tuple(
    MATERIAL[n]
    for n in ("pink", "teal", "cyan", "amber", "indigo", "lime", "grey", "deep_orange")
)


def shuffled(items: Sequence[T], rng: np.random.Generator) -> List[T]:
    return [items[int(i)] for i in rng.permutation(len(items))]


def candidate_colors(target: AnyColor) -> List[RGBColor]:
    """Table-driven candidates for `target`, deduplicated, in table order."""
    hsv = target.to_hsv()
    out: List[RGBColor] = []
    picks = [b.color for b in HUE_BANDS if b.contains(hsv.hue)]
    picks += [r.color for r in TONE_RULES if r.applies(hsv)]
    for c in picks:
        if c not in out:
            out.append(c)
    return out


def suggest_palette(
    target: AnyColor, required_count: int, rng: np.random.Generator
) -> List[RGBColor]:
    result = candidate_colors(target)
    if len(result) < required_count:
        for c in shuffled(FALLBACK_COLORS, rng):
            if c not in result:
                result.append(c)
                if len(result) >= required_count:
                    break
    # shuffle so the palette order gives nothing away
    return shuffled(result, rng)


NAMED: Dict[str, RGBColor] = {
    "red": RED,
    "yellow": YELLOW,
    "blue": BLUE,
    "white": WHITE,
    "black": BLACK,
    "orange": ORANGE,
    "green": GREEN,
    "purple": PURPLE,
    "pink": PINK,
    "brown": BROWN,
    "teal": TEAL,
    "olive": OLIVE,
}

__all__ = [
    "FALLBACK_COLORS",
    "HUE_BANDS",
    "HueBand",
    "MATERIAL",
    "NAMED",
    "TONE_RULES",
    "ToneRule",
    "candidate_colors",
    "color_name",
    "hue_description",
    "shuffled",
    "suggest_palette",
]
