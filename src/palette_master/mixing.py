# mixing.py – subtractive (CMYK mean) and additive (RGB mean) color mixing
#   - plain unweighted averages; every drop counts once
#   - columns are sorted before the mean so input order never changes the sum

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List

import numpy as np

from .models import AnyColor, CMYKColor, RGBColor
from .palette import BLACK, WHITE

log = logging.getLogger(__name__)


class MixMode(str, Enum):
    SUBTRACTIVE = "subtractive"
    ADDITIVE = "additive"

    @classmethod
    def parse(cls, val: str | MixMode | None) -> MixMode:
        if isinstance(val, MixMode):
            return val
        m = (val or cls.SUBTRACTIVE.value).strip().lower()
        try:
            return cls(m)
        except ValueError:
            raise ValueError(f"unknown mix mode '{val}'") from None


def _column_mean(rows: np.ndarray) -> np.ndarray:
    return np.sort(rows, axis=0).mean(axis=0)


def mix_subtractive(colors: Iterable[AnyColor]) -> RGBColor:
    """Pigment-style mix: average c, m, y, k and opacity, then back to RGB."""
    items = list(colors)
    if not items:
        return WHITE
    if len(items) == 1:
        return items[0].to_rgb()

    rows = np.array(
        [[cm.c, cm.m, cm.y, cm.k, cm.opacity] for cm in (x.to_cmyk() for x in items)],
        dtype=np.float64,
    )
    c, m, y, k, a = _column_mean(rows)
    return CMYKColor(c, m, y, k, a).to_rgb()


def mix_additive(colors: Iterable[AnyColor]) -> RGBColor:
    """Light-style mix: average r, g, b and opacity directly."""
    items = list(colors)
    if not items:
        return BLACK
    if len(items) == 1:
        return items[0].to_rgb()

    rows = np.array(
        [[*rgb.channels, rgb.opacity] for rgb in (x.to_rgb() for x in items)],
        dtype=np.float64,
    )
    r, g, b, a = _column_mean(rows)
    return RGBColor(r, g, b, a)


MIXERS = {
    MixMode.SUBTRACTIVE: mix_subtractive,
    MixMode.ADDITIVE: mix_additive,
}


def mix(colors: Iterable[AnyColor], mode: MixMode | str = MixMode.SUBTRACTIVE) -> RGBColor:
    return MIXERS[MixMode.parse(mode)](colors)


@dataclass
class MixingSession:
    """Ordered multiset of drops since the last reset."""

    mode: MixMode = MixMode.SUBTRACTIVE
    drops: List[RGBColor] = field(default_factory=list)

    def add(self, color: AnyColor, times: int = 1) -> RGBColor:
        self.drops.extend([color.to_rgb()] * max(0, int(times)))
        return self.result()

    def undo(self) -> RGBColor:
        if self.drops:
            self.drops.pop()
        return self.result()

    def reset(self) -> None:
        log.debug("mixing session reset after %d drops", len(self.drops))
        self.drops.clear()

    def result(self) -> RGBColor:
        return mix(self.drops, self.mode)

    def __len__(self) -> int:
        return len(self.drops)


__all__ = [
    "BLACK",
    "MIXERS",
    "MixMode",
    "MixingSession",
    "WHITE",
    "mix",
    "mix_additive",
    "mix_subtractive",
]
