# levels.py – puzzle/level generation
#
#   color_matching    curated levels 1..10, then subtle / vibrant / complex
#                     challenges rotating on level % 3
#   complementary     mix the complement of a rotating base hue
#   optical_illusion  grey from black and white
#   color_harmony     first color of an analogous set
#   tiered_matching   target mixed from its own rotating palette; solvable
#                     by construction

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

import numpy as np

from . import palette as P
from .harmony import get_analogous, get_complementary
from .models import AnyColor, HSVColor, RGBColor
from .mixing import mix_subtractive
from .similarity import is_match

log = logging.getLogger(__name__)

CURATED_MAX_LEVEL = 10
DEFAULT_THRESHOLD = 0.95
DEFAULT_MAX_ATTEMPTS = 5


class UnknownPuzzleTypeError(ValueError):
    """Raised for a puzzle type id that no generator knows about."""

    def __init__(self, puzzle_type: object) -> None:
        self.puzzle_type = puzzle_type
        super().__init__(f"unknown puzzle type '{puzzle_type}'")


class PuzzleType(str, Enum):
    COLOR_MATCHING = "color_matching"
    COMPLEMENTARY = "complementary"
    OPTICAL_ILLUSION = "optical_illusion"
    COLOR_HARMONY = "color_harmony"
    TIERED_MATCHING = "tiered_matching"

    @classmethod
    def parse(cls, val: Union[str, PuzzleType]) -> PuzzleType:
        if isinstance(val, PuzzleType):
            return val
        try:
            return cls(str(val).strip().lower())
        except ValueError:
            raise UnknownPuzzleTypeError(val) from None


class ChallengeKind(Enum):
    SUBTLE_SHADE = 0
    VIBRANT = 1
    COMPLEX_MIX = 2

    @classmethod
    def for_level(cls, level: int) -> ChallengeKind:
        return cls(level % 3)


@dataclass(frozen=True)
class TargetBand:
    """HSV box a target color is drawn from."""

    hue: Tuple[float, float]
    saturation: Tuple[float, float]
    value: Tuple[float, float]

    def sample(self, rng: np.random.Generator) -> HSVColor:
        h0, h1 = self.hue
        s0, s1 = self.saturation
        v0, v1 = self.value
        return HSVColor(
            h0 + rng.random() * (h1 - h0),
            s0 + rng.random() * (s1 - s0),
            v0 + rng.random() * (v1 - v0),
        )


VIBRANT_BAND = TargetBand((0.0, 360.0), (0.8, 1.0), (0.7, 1.0))
MUTED_BAND = TargetBand((0.0, 360.0), (0.3, 0.6), (0.4, 0.7))
GREEN_BLUE_BAND = TargetBand((120.0, 180.0), (0.6, 0.9), (0.6, 0.9))


@dataclass(frozen=True)
class LevelConfig:
    title: str
    description: str
    available_colors: Tuple[RGBColor, ...]
    target: Union[RGBColor, TargetBand]
    max_attempts: int
    hint: str
    suggested_mix: Tuple[RGBColor, ...] = ()


@dataclass(frozen=True)
class PuzzleConfig:
    puzzle_type: PuzzleType
    level: int
    title: str
    description: str
    target_color: RGBColor
    available_colors: Tuple[RGBColor, ...]
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    accuracy_threshold: float = DEFAULT_THRESHOLD
    difficulty: int = 1
    hint: str = ""
    points: int = 0
    suggested_mix: Tuple[RGBColor, ...] = ()
    reference_colors: Tuple[RGBColor, ...] = ()
    time_limit: int = 0  # seconds, 0 for none

    @property
    def puzzle_id(self) -> str:
        return self.puzzle_type.value

    def is_solved_by(self, color: AnyColor) -> bool:
        return is_match(color, self.target_color, self.accuracy_threshold)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.puzzle_id,
            "level": self.level,
            "title": self.title,
            "description": self.description,
            "target": self.target_color.to_hex(),
            "available": [c.to_hex() for c in self.available_colors],
            "max_attempts": self.max_attempts,
            "accuracy_threshold": self.accuracy_threshold,
            "difficulty": self.difficulty,
            "hint": self.hint,
            "points": self.points,
            "suggested_mix": [c.to_hex() for c in self.suggested_mix],
            "reference": [c.to_hex() for c in self.reference_colors],
            "time_limit": self.time_limit,
        }


# ---- difficulty calibration (hand-tuned constants) ----


def difficulty_for(level: int) -> int:
    if level <= 3:
        return 1  # beginner
    if level <= 6:
        return 2  # intermediate
    if level <= 10:
        return 3  # advanced
    return 4  # expert


def accuracy_threshold_for(difficulty: int) -> float:
    return 0.90 - min(max(difficulty * 0.01, 0.0), 0.15)


def palette_size_for(level: int, base: int) -> int:
    return base + min(max(level // 3, 0), 6)


# ---- curated color_matching levels ----

M = P.MATERIAL

CURATED_LEVELS: Mapping[int, LevelConfig] = {
    1: LevelConfig(
        "Mix Red and Yellow",
        "Create orange by mixing red and yellow",
        (P.RED, P.YELLOW),
        P.ORANGE,
        5,
        "Red and yellow are primary colors. When mixed, they create orange, a secondary color.",
        (P.RED, P.YELLOW),
    ),
    2: LevelConfig(
        "Mix Blue and Yellow",
        "Create green by mixing blue and yellow",
        (P.BLUE, P.YELLOW),
        P.GREEN,
        5,
        "Blue and yellow are primary colors. When mixed, they create green, a secondary color.",
        (P.BLUE, P.YELLOW),
    ),
    3: LevelConfig(
        "Mix Red and Blue",
        "Create purple by mixing red and blue",
        (P.RED, P.BLUE),
        P.PURPLE,
        5,
        "Red and blue are primary colors. When mixed, they create purple, a secondary color.",
        (P.RED, P.BLUE),
    ),
    4: LevelConfig(
        "Mix Red and Green",
        "Create an olive shade by mixing red and green",
        (P.RED, P.GREEN, P.YELLOW),
        P.OLIVE,
        6,
        "When you mix red with green, you get an olive or brown tone, depending on the proportions.",
        (P.RED, P.GREEN),
    ),
    5: LevelConfig(
        "Create a Tint",
        "Mix red with white to create pink",
        (P.RED, P.WHITE, P.YELLOW),
        P.PINK,
        6,
        "Adding white to a color creates a tint. This is how we get pastel colors like pink.",
        (P.RED, P.WHITE),
    ),
    6: LevelConfig(
        "Mix Blue and Green",
        "Create teal by mixing blue and green",
        (P.BLUE, P.GREEN, P.WHITE),
        P.TEAL,
        6,
        "Teal is created by mixing blue and green. It's a tertiary color in the color wheel.",
        (P.BLUE, P.GREEN),
    ),
    7: LevelConfig(
        "Complex Mixing",
        "Create brown using multiple colors",
        (P.RED, P.GREEN, P.BLUE, P.YELLOW),
        P.BROWN,
        7,
        "Brown is created by mixing multiple colors together. Try mixing complementary colors!",
    ),
    8: LevelConfig(
        "Precise Proportions",
        "Create this specific green-blue shade",
        (P.BLUE, P.GREEN, P.WHITE, P.YELLOW),
        GREEN_BLUE_BAND,
        7,
        "Precise colors require careful control of proportions. Try adding colors gradually.",
    ),
    9: LevelConfig(
        "Vibrant Purple",
        "Create a bright, vibrant purple",
        (P.RED, P.BLUE, P.PINK, P.WHITE),
        P.VIBRANT_PURPLE,
        7,
        "Vibrant colors have high saturation. Combine pure hues for maximum vibrance.",
    ),
    10: LevelConfig(
        "Earth Tone",
        "Create this natural earth tone",
        (P.RED, P.YELLOW, P.GREEN, P.BLUE, P.BLACK, P.WHITE),
        P.EARTH_TONE,
        8,
        "Earth tones contain all three primary colors, with red and yellow dominating.",
    ),
}

SUBTLE_SHADE_SWATCHES: Tuple[RGBColor, ...] = tuple(
    M[n]
    for n in (
        "red",
        "blue",
        "yellow",
        "green",
        "purple",
        "orange",
        "pink",
        "teal",
        "lime",
        "indigo",
        "cyan",
        "amber",
        "white",
        "black",
        "grey",
    )
)

COMPLEMENTARY_PALETTE: Tuple[RGBColor, ...] = (
    M["red"],
    M["green"],
    M["blue"],
    M["cyan"],
    P.HOT_PINK,
    M["yellow"],
)

HARMONY_PALETTE: Tuple[RGBColor, ...] = tuple(
    M[n] for n in ("red", "blue", "yellow", "green", "purple", "orange")
)


# ---- procedural color_matching challenges ----


def _subtle_variation(base: RGBColor, rng: np.random.Generator) -> RGBColor:
    hsv = base.to_hsv()
    hue = (hsv.hue + rng.random() * 20.0 - 10.0) % 360.0
    sat = min(max(hsv.saturation + rng.random() * 0.2 - 0.1, 0.1), 1.0)
    val = min(max(hsv.value + rng.random() * 0.2 - 0.1, 0.3), 1.0)
    return HSVColor(hue, sat, val).to_rgb()


def _subtle_shade(level: int, rng: np.random.Generator) -> LevelConfig:
    pool = P.shuffled(SUBTLE_SHADE_SWATCHES, rng)
    available = pool[: palette_size_for(level, 5)]
    if M["white"] not in available:
        available.append(M["white"])

    base = pool[0]
    return LevelConfig(
        "Subtle Shade Challenge",
        f"Create this subtle variation of {P.color_name(base)}",
        tuple(available),
        _subtle_variation(base, rng),
        8,
        "Subtle shades require careful mixing with white, black, or complementary colors.",
    )


def _vibrant(level: int, rng: np.random.Generator) -> LevelConfig:
    hsv = VIBRANT_BAND.sample(rng)
    target = hsv.to_rgb()
    return LevelConfig(
        "Vibrant Color Challenge",
        f"Create this vibrant {P.hue_description(hsv.hue)} color",
        tuple(P.suggest_palette(target, palette_size_for(level, 4), rng)),
        target,
        7 + level // 5,
        "Vibrant colors have high saturation. Layer pure hues to build intensity.",
    )


def _complex_mix(level: int, rng: np.random.Generator) -> LevelConfig:
    kind = int(rng.integers(3))
    if kind == 0:
        hsv = MUTED_BAND.sample(rng)
        target = hsv.to_rgb()
        description = f"Create this muted {P.hue_description(hsv.hue)} tone"
        hint = "Muted colors are created by adding complementary colors or a small amount of black."
    elif kind == 1:
        target = RGBColor(
            100 + int(rng.integers(100)),
            50 + int(rng.integers(70)),
            10 + int(rng.integers(50)),
        )
        description = "Create this complex earth tone"
        hint = "Earth tones often contain all three primary colors with red and yellow dominating."
    else:
        base = 100 + int(rng.integers(100))
        variation = 10 + int(rng.integers(30))
        target = RGBColor(base, base, base + variation)
        description = "Create this metallic shade"
        hint = "Metallic colors often have similar red and green values with slightly higher blue."

    return LevelConfig(
        "Complex Mix Challenge",
        description,
        tuple(P.suggest_palette(target, palette_size_for(level, 4), rng)),
        target,
        8 + level // 4,
        hint,
    )


CHALLENGES: Mapping[ChallengeKind, Callable[[int, np.random.Generator], LevelConfig]] = {
    ChallengeKind.SUBTLE_SHADE: _subtle_shade,
    ChallengeKind.VIBRANT: _vibrant,
    ChallengeKind.COMPLEX_MIX: _complex_mix,
}


def level_config(level: int, rng: np.random.Generator) -> LevelConfig:
    """Curated entry for levels 1..10, a procedural challenge beyond."""
    cfg = CURATED_LEVELS.get(level)
    if cfg is not None:
        return cfg
    return CHALLENGES[ChallengeKind.for_level(level)](level, rng)


# ---- per-type builders ----


def _color_matching(level: int, rng: np.random.Generator) -> PuzzleConfig:
    difficulty = difficulty_for(level)
    cfg = level_config(level, rng)
    target = cfg.target
    if isinstance(target, TargetBand):
        target = target.sample(rng).to_rgb()
    return PuzzleConfig(
        puzzle_type=PuzzleType.COLOR_MATCHING,
        level=level,
        title=cfg.title,
        description=cfg.description,
        target_color=target,
        available_colors=cfg.available_colors,
        max_attempts=cfg.max_attempts,
        accuracy_threshold=accuracy_threshold_for(difficulty),
        difficulty=difficulty,
        hint=cfg.hint,
        points=100 + level * 20,
        suggested_mix=cfg.suggested_mix,
    )


def _complementary(level: int, rng: np.random.Generator) -> PuzzleConfig:
    base = HSVColor((level * 30) % 360, 0.8, 0.8).to_rgb()
    return PuzzleConfig(
        puzzle_type=PuzzleType.COMPLEMENTARY,
        level=level,
        title="Find the Complement",
        description="Create the complementary color for the given color.",
        target_color=get_complementary(base),
        available_colors=COMPLEMENTARY_PALETTE,
        max_attempts=3 + level,
        difficulty=difficulty_for(level),
        hint="Complementary colors sit opposite each other on the color wheel.",
        points=level * 10,
        reference_colors=(base,),
    )


def _optical_illusion(level: int, rng: np.random.Generator) -> PuzzleConfig:
    return PuzzleConfig(
        puzzle_type=PuzzleType.OPTICAL_ILLUSION,
        level=level,
        title="Optical Illusion Challenge",
        description="Test your perception with this optical illusion.",
        target_color=M["grey"],
        available_colors=(M["black"], M["white"]),
        difficulty=difficulty_for(level),
        points=level * 10,
    )


def _color_harmony(level: int, rng: np.random.Generator) -> PuzzleConfig:
    base = HSVColor((level * 40) % 360, 0.7, 0.9).to_rgb()
    harmonic = get_analogous(base)
    return PuzzleConfig(
        puzzle_type=PuzzleType.COLOR_HARMONY,
        level=level,
        title="Create Color Harmony",
        description="Mix colors to create a harmonious color palette.",
        target_color=harmonic[0],
        available_colors=HARMONY_PALETTE,
        difficulty=difficulty_for(level),
        hint="Analogous colors sit next to each other on the color wheel.",
        points=level * 10,
        reference_colors=tuple(harmonic),
    )


# ---- tiered matching: the target is mixed from the puzzle's own palette ----

# swatches unlocked per tier, cumulative
TIER_SWATCHES: Tuple[Tuple[RGBColor, ...], ...] = tuple(
    tuple(M[n] for n in names)
    for names in (
        ("red", "blue", "yellow"),
        ("green", "purple", "orange"),
        ("pink", "teal", "lime"),
        ("indigo", "amber", "cyan"),
    )
)

# upper level bound (inclusive) → description
_TIERED_DESCRIPTIONS: Tuple[Tuple[float, str], ...] = (
    (5, "Mix colors to match the target. Try mixing two colors together."),
    (10, "Create an equal mix of colors to match the target shade."),
    (15, "This one is tricky! Try mixing three colors with different proportions."),
    (20, "Expert level: Create a precise color mixture with multiple colors."),
    (float("inf"), "Master challenge: Perfect your color mixing skills with subtle variations."),
)


def tier_for(level: int) -> int:
    """1 for levels 1-5, 2 for 6-10, and so on."""
    return (level - 1) // 5 + 1


def tiered_threshold_for(tier: int) -> float:
    return min(max(1.0 - tier * 0.05, 0.75), 0.95)


def tiered_recipe(level: int) -> Tuple[Tuple[RGBColor, ...], Tuple[RGBColor, ...]]:
    """(available colors, drops mixed into the target) for `level`."""
    tier = tier_for(level)
    base = [c for group in TIER_SWATCHES[: min(tier, len(TIER_SWATCHES))] for c in group]
    count = 3 if level <= 10 else 4 if level <= 20 else 5
    available = tuple(base[(level + i) % len(base)] for i in range(count))

    a = available
    if level <= 5:
        drops = (a[0], a[0], a[1])  # two colors, one dominant
    elif level <= 10:
        drops = (a[0], a[1])
    elif level <= 15:
        drops = (a[0], a[0], a[1], a[2])
    else:
        picks = []
        for i in range(count - 1):
            picks.append(a[i])
            if i % 2 == 0 and level > 20:
                picks.append(a[i])
        drops = tuple(picks)
    return available, drops


def _tiered_matching(level: int, rng: np.random.Generator) -> PuzzleConfig:
    tier = tier_for(level)
    available, drops = tiered_recipe(level)
    description = next(d for upper, d in _TIERED_DESCRIPTIONS if level <= upper)
    return PuzzleConfig(
        puzzle_type=PuzzleType.TIERED_MATCHING,
        level=level,
        title=f"Level {level}: Match This Color",
        description=description,
        target_color=mix_subtractive(drops),
        available_colors=available,
        max_attempts=5 + tier,
        accuracy_threshold=tiered_threshold_for(tier),
        difficulty=tier,
        points=level * 10,
        suggested_mix=drops,
        time_limit=60 if level > 15 else 0,
    )


BUILDERS: Mapping[PuzzleType, Callable[[int, np.random.Generator], PuzzleConfig]] = {
    PuzzleType.COLOR_MATCHING: _color_matching,
    PuzzleType.COMPLEMENTARY: _complementary,
    PuzzleType.OPTICAL_ILLUSION: _optical_illusion,
    PuzzleType.COLOR_HARMONY: _color_harmony,
    PuzzleType.TIERED_MATCHING: _tiered_matching,
}


@dataclass
class LevelGenerator:
    """
    Owns its random source. Calls on one instance are serialized, so an
    instance may be shared between threads; separate instances never
    share state.
    """

    rng: np.random.Generator = field(default_factory=np.random.default_rng)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @classmethod
    def seeded(cls, seed: Optional[int]) -> LevelGenerator:
        return cls(np.random.default_rng(seed))

    def generate(self, puzzle_type: Union[str, PuzzleType], level: int) -> PuzzleConfig:
        kind = PuzzleType.parse(puzzle_type)
        level = max(1, int(level))
        with self._lock:
            puzzle = BUILDERS[kind](level, self.rng)
        log.debug(
            "generated %s level %d: target=%s palette=%d threshold=%.2f",
            kind.value,
            level,
            puzzle.target_color.to_hex(),
            len(puzzle.available_colors),
            puzzle.accuracy_threshold,
        )
        return puzzle


def generate_level(
    puzzle_type: Union[str, PuzzleType],
    level: int,
    *,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> PuzzleConfig:
    gen = LevelGenerator(rng) if rng is not None else LevelGenerator.seeded(seed)
    return gen.generate(puzzle_type, level)


def solves(puzzle: PuzzleConfig, drops: Tuple[AnyColor, ...] = ()) -> bool:
    """Whether mixing `drops` (default: the suggested mix) passes `puzzle`."""
    return puzzle.is_solved_by(mix_subtractive(drops or puzzle.suggested_mix))


__all__ = [
    "BUILDERS",
    "CURATED_LEVELS",
    "ChallengeKind",
    "LevelConfig",
    "LevelGenerator",
    "PuzzleConfig",
    "PuzzleType",
    "TargetBand",
    "UnknownPuzzleTypeError",
    "accuracy_threshold_for",
    "difficulty_for",
    "generate_level",
    "level_config",
    "solves",
    "tier_for",
    "tiered_recipe",
    "tiered_threshold_for",
]
