"""Difficulty policy: grid-size escalation and solution-weight bands.

The constants here are tuned gameplay values. Changing them changes how hard
the generated puzzles feel, so they are kept as a flat table.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class DifficultyTier(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: "DifficultyTier | str") -> "DifficultyTier":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown difficulty tier: {value}") from None


LEVELS_PER_TRACK = 10
LEVELS_PER_SIZE_STEP = 4
MAX_GRID_SIZE = 6

BASE_GRID_SIZE = {
    DifficultyTier.EASY: 3,
    DifficultyTier.MEDIUM: 4,
    DifficultyTier.HARD: 5,
}

# (low, high) fractions of the n*n cell count
BAND_FRACTIONS = {
    DifficultyTier.EASY: (0.30, 0.80),
    DifficultyTier.MEDIUM: (0.35, 0.90),
    DifficultyTier.HARD: (0.40, 1.00),
}


@dataclass(frozen=True)
class DifficultyBand:
    """Inclusive range of acceptable solution weights."""

    min_weight: int
    max_weight: int

    @property
    def midpoint(self) -> float:
        return (self.min_weight + self.max_weight) / 2.0

    @property
    def width(self) -> int:
        return self.max_weight - self.min_weight + 1

    def contains(self, weight: int) -> bool:
        return self.min_weight <= weight <= self.max_weight


def level_index_for(level_id: int) -> int:
    """Map a 1-based level id to its index within a 10-level track."""
    return (int(level_id) - 1) % LEVELS_PER_TRACK


def grid_size_for(tier, level_index: int) -> int:
    tier = DifficultyTier.parse(tier)
    step = max(0, int(level_index)) // LEVELS_PER_SIZE_STEP
    return min(BASE_GRID_SIZE[tier] + step, MAX_GRID_SIZE)


def difficulty_band(tier, n: int) -> DifficultyBand:
    tier = DifficultyTier.parse(tier)
    N = n * n
    lo, hi = BAND_FRACTIONS[tier]
    # strip float noise so exact products are not pushed past an integer
    min_w = max(1, math.ceil(round(lo * N, 9)))
    max_w = max(min_w, math.floor(round(hi * N, 9)))
    return DifficultyBand(min_w, min(max_w, N))
