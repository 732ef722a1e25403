# models.py – immutable RGB / CMYK / HSV value types and conversions

from __future__ import annotations

import math
import string
from dataclasses import dataclass
from typing import Any, Literal, Mapping, Union

import numpy as np
from coloraide import Color

Hex = str
Space = Literal["rgb", "cmyk", "hsv"]

SPACES: tuple[str, ...] = ("rgb", "cmyk", "hsv")


def _clamp01(x: float) -> float:
    x = float(x)
    if math.isnan(x):
        return 0.0
    return 0.0 if x <= 0.0 else 1.0 if x >= 1.0 else x


def _channel(x: float) -> int:
    """Round half up and clamp to an 8-bit channel."""
    x = float(x)
    if math.isnan(x):
        return 0
    return int(math.floor(float(np.clip(x, 0.0, 255.0)) + 0.5))


def _hue(h: float) -> float:
    h = float(h)
    if not math.isfinite(h):
        return 0.0
    h %= 360.0
    # tiny negatives wrap to exactly 360.0
    return 0.0 if h >= 360.0 else h


def canon_hex(s: str) -> Hex:
    """Normalize to '#rrggbb'; accept 3- or 6-digit hex only (same rules as the mixer web app)."""
    raw = (s or "").strip().lstrip("#")
    if len(raw) == 3 and all(c in string.hexdigits for c in raw):
        raw = "".join(ch * 2 for ch in raw)
    if len(raw) != 6 or not all(c in string.hexdigits for c in raw):
        raise ValueError(f"hex must be 3 or 6 hex digits, got {s!r}")
    return "#" + raw.lower()


@dataclass(frozen=True)
class RGBColor:
    r: int
    g: int
    b: int
    opacity: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "r", _channel(self.r))
        object.__setattr__(self, "g", _channel(self.g))
        object.__setattr__(self, "b", _channel(self.b))
        object.__setattr__(self, "opacity", _clamp01(self.opacity))

    @property
    def channels(self) -> tuple[int, int, int]:
        return self.r, self.g, self.b

    def to_rgb(self) -> RGBColor:
        return self

    def to_cmyk(self) -> CMYKColor:
        return CMYKColor.from_rgb(self)

    def to_hsv(self) -> HSVColor:
        return HSVColor.from_rgb(self)

    def to_hex(self) -> Hex:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    @classmethod
    def from_hex(cls, s: str, opacity: float = 1.0) -> RGBColor:
        raw = canon_hex(s)[1:]
        r, g, b = (int(raw[i : i + 2], 16) for i in (0, 2, 4))
        return cls(r, g, b, opacity)

    def to_dict(self) -> dict[str, Any]:
        return {"r": self.r, "g": self.g, "b": self.b, "opacity": self.opacity}

    @classmethod
    def from_dict(cls, m: Mapping[str, Any]) -> RGBColor:
        return cls(m.get("r", 0), m.get("g", 0), m.get("b", 0), m.get("opacity", 1.0))


@dataclass(frozen=True)
class CMYKColor:
    c: float
    m: float
    y: float
    k: float
    opacity: float = 1.0

    def __post_init__(self) -> None:
        for name in ("c", "m", "y", "k", "opacity"):
            object.__setattr__(self, name, _clamp01(getattr(self, name)))

    @classmethod
    def from_rgb(cls, rgb: RGBColor) -> CMYKColor:
        v = np.asarray(rgb.channels, dtype=np.float64) / 255.0
        k = 1.0 - float(v.max())
        if k >= 1.0:
            # pure black: cyan/magenta/yellow are undefined, pinned to 0
            cmy = np.zeros(3)
        else:
            cmy = np.clip((1.0 - v - k) / (1.0 - k), 0.0, 1.0)
        c, m, y = (float(x) for x in cmy)
        return cls(c, m, y, k, rgb.opacity)

    def to_rgb(self) -> RGBColor:
        cmy = np.array([self.c, self.m, self.y], dtype=np.float64)
        r, g, b = 255.0 * (1.0 - cmy) * (1.0 - self.k)
        return RGBColor(r, g, b, self.opacity)

    def to_cmyk(self) -> CMYKColor:
        return self

    def to_hsv(self) -> HSVColor:
        return self.to_rgb().to_hsv()

    def to_dict(self) -> dict[str, Any]:
        return {"c": self.c, "m": self.m, "y": self.y, "k": self.k, "opacity": self.opacity}

    @classmethod
    def from_dict(cls, m: Mapping[str, Any]) -> CMYKColor:
        return cls(
            m.get("c", 0.0),
            m.get("m", 0.0),
            m.get("y", 0.0),
            m.get("k", 0.0),
            m.get("opacity", 1.0),
        )


@dataclass(frozen=True)
class HSVColor:
    hue: float
    saturation: float
    value: float
    opacity: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "hue", _hue(self.hue))
        object.__setattr__(self, "saturation", _clamp01(self.saturation))
        object.__setattr__(self, "value", _clamp01(self.value))
        object.__setattr__(self, "opacity", _clamp01(self.opacity))

    @classmethod
    def from_rgb(cls, rgb: RGBColor) -> HSVColor:
        hsv = Color("srgb", [ch / 255.0 for ch in rgb.channels]).convert("hsv")
        # ColorAide reports an undefined (achromatic) hue as NaN; we use 0
        return cls(float(hsv["h"]), float(hsv["s"]), float(hsv["v"]), rgb.opacity)

    def to_rgb(self) -> RGBColor:
        srgb = Color("hsv", [self.hue, self.saturation, self.value]).convert("srgb")
        r, g, b = (255.0 * _clamp01(x) for x in srgb.coords())
        return RGBColor(r, g, b, self.opacity)

    def to_cmyk(self) -> CMYKColor:
        return self.to_rgb().to_cmyk()

    def to_hsv(self) -> HSVColor:
        return self

    def rotate(self, degrees: float) -> HSVColor:
        return HSVColor(self.hue + degrees, self.saturation, self.value, self.opacity)

    def to_dict(self) -> dict[str, Any]:
        return {
            "hue": self.hue,
            "saturation": self.saturation,
            "value": self.value,
            "opacity": self.opacity,
        }


AnyColor = Union[RGBColor, CMYKColor, HSVColor]


def to_cmyk(color: AnyColor) -> CMYKColor:
    return color.to_cmyk()


def to_hsv(color: AnyColor) -> HSVColor:
    return color.to_hsv()


def to_rgb(color: AnyColor) -> RGBColor:
    return color.to_rgb()


def convert(color: AnyColor, space: Space | str) -> AnyColor:
    """Convert any color value into `space` ('rgb', 'cmyk' or 'hsv')."""
    s = (space or "").strip().lower()
    if s == "rgb":
        return color.to_rgb()
    if s == "cmyk":
        return color.to_cmyk()
    if s == "hsv":
        return color.to_hsv()
    raise ValueError(f"unknown color space '{space}'")


__all__ = [
    "AnyColor",
    "CMYKColor",
    "HSVColor",
    "Hex",
    "RGBColor",
    "SPACES",
    "Space",
    "canon_hex",
    "convert",
    "to_cmyk",
    "to_hsv",
    "to_rgb",
]
