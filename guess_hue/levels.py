from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Protocol

from .color_mixer import Rgb


@dataclass(frozen=True, slots=True)
class PaletteColor:
    name: str
    color: Rgb
    key: str  # keyboard shortcut shown on the brush


PALETTE_WHITE = Rgb(1.0, 1.0, 1.0)
PALETTE_RED = Rgb(1.0, 0.0, 0.0)
PALETTE_YELLOW = Rgb(1.0, 1.0, 0.0)
PALETTE_BLUE = Rgb(0.0, 0.0, 1.0)
PALETTE_BLACK = Rgb(0.0, 0.0, 0.0)

PALETTE: tuple[PaletteColor, ...] = (
    PaletteColor("White", PALETTE_WHITE, "1"),
    PaletteColor("Red", PALETTE_RED, "2"),
    PaletteColor("Yellow", PALETTE_YELLOW, "3"),
    PaletteColor("Blue", PALETTE_BLUE, "4"),
    PaletteColor("Black", PALETTE_BLACK, "5"),
)

OBJECTIVES: tuple[tuple[Rgb, ...], ...] = (
    (PALETTE_BLUE, PALETTE_YELLOW),
    (PALETTE_BLACK, PALETTE_YELLOW),
    (PALETTE_RED, PALETTE_YELLOW),
    (PALETTE_BLUE, PALETTE_WHITE),
    (PALETTE_RED, PALETTE_WHITE),
    (PALETTE_RED, PALETTE_YELLOW, PALETTE_YELLOW),
    (PALETTE_YELLOW, PALETTE_BLUE, PALETTE_WHITE),
    (PALETTE_RED, PALETTE_BLUE, PALETTE_WHITE),
    (PALETTE_YELLOW, PALETTE_BLACK, PALETTE_BLACK),
    (PALETTE_RED, PALETTE_RED, PALETTE_YELLOW, PALETTE_WHITE),
    (PALETTE_RED, PALETTE_BLUE, PALETTE_YELLOW, PALETTE_BLACK),
)


class ObjectiveSource(Protocol):
    """Supplies the target composition for each level."""

    def level_count(self) -> int: ...

    def objective(self, level_index: int) -> tuple[Rgb, ...]: ...


def _check_index(level_index: int, count: int) -> None:
    if not (0 <= level_index < count):
        raise IndexError(f"Reached the end of objectives (level {level_index}, {count} available)")


class FixedObjectives:
    """The hand-made campaign."""

    def __init__(self, objectives: tuple[tuple[Rgb, ...], ...] = OBJECTIVES) -> None:
        if not objectives:
            raise ValueError("objectives must not be empty")
        self._objectives = objectives

    def level_count(self) -> int:
        return len(self._objectives)

    def objective(self, level_index: int) -> tuple[Rgb, ...]:
        _check_index(level_index, len(self._objectives))
        return self._objectives[level_index]


class SeededRng:
    """Seeded RNG wrapper to keep deterministic streams explicit."""

    def __init__(self, seed: int) -> None:
        self._rng = random.Random(int(seed))

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)


def lerp_int(a: int, b: int, t: float) -> int:
    """Linear interpolation in integer space (inclusive bounds)."""

    if t <= 0:
        return a
    if t >= 1:
        return b
    return int(round(a + (b - a) * t))


class RandomObjectives:
    """Seeded objectives whose paint count grows from 2 to 5 across the run.

    All objectives are drawn up front so lookups are order-independent.
    """

    min_complexity = 2
    max_complexity = 5

    def __init__(
        self,
        seed: int,
        *,
        levels: int = 15,
        palette: tuple[PaletteColor, ...] = PALETTE,
    ) -> None:
        if levels < 1:
            raise ValueError("levels must be >= 1")
        if len({p.color for p in palette}) < 2:
            raise ValueError("palette must contain at least two distinct colors")
        self._seed = int(seed)
        self._palette = palette
        rng = SeededRng(self._seed)
        self._objectives = tuple(self._draw(rng, i, levels) for i in range(levels))

    @property
    def seed(self) -> int:
        return self._seed

    def level_count(self) -> int:
        return len(self._objectives)

    def objective(self, level_index: int) -> tuple[Rgb, ...]:
        _check_index(level_index, len(self._objectives))
        return self._objectives[level_index]

    def complexity_for(self, level_index: int, levels: int) -> int:
        t = 0.0 if levels <= 1 else level_index / float(levels - 1)
        return lerp_int(self.min_complexity, self.max_complexity, t)

    def _draw(self, rng: SeededRng, level_index: int, levels: int) -> tuple[Rgb, ...]:
        n = self.complexity_for(level_index, levels)
        last = len(self._palette) - 1
        while True:
            picks = [self._palette[rng.randint(0, last)].color for _ in range(n)]
            # A single repeated paint would be solved by one pick.
            if len(set(picks)) > 1:
                return tuple(picks)
