# similarity.py – luma-weighted RGB distance mapped to a [0, 1] score

from __future__ import annotations

import numpy as np

from .models import AnyColor

# approximate human luminance sensitivity: red, green, blue
LUMA_WEIGHTS = np.array([0.30, 0.59, 0.11], dtype=np.float64)


def similarity(a: AnyColor, b: AnyColor) -> float:
    """
    1.0 for identical colors, 0.0 for maximally different ones.
    Opacity is ignored.
    """
    d = (
        np.asarray(a.to_rgb().channels, dtype=np.float64)
        - np.asarray(b.to_rgb().channels, dtype=np.float64)
    ) / 255.0
    distance = float(np.sqrt(LUMA_WEIGHTS @ (d * d)))
    return 1.0 - min(max(distance, 0.0), 1.0)


def is_match(attempt: AnyColor, target: AnyColor, threshold: float) -> bool:
    return similarity(attempt, target) >= threshold


__all__ = ["LUMA_WEIGHTS", "is_match", "similarity"]
