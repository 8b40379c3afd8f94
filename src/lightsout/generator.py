from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .algebra import build_matrix, gf2_solve
from .board import BoardState
from .difficulty import (
    DifficultyBand,
    DifficultyTier,
    difficulty_band,
    grid_size_for,
)
from .influence import InfluencePattern, apply_press
from .rng import SeededRandom

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 30

OUTCOME_IN_BAND = "in_band"
OUTCOME_CLOSEST = "closest"
OUTCOME_FALLBACK = "fallback"


@dataclass(frozen=True)
class PuzzleView:
    """What a UI gets to see: the board and how many presses it needs."""

    initial_board: BoardState
    solution_weight: int


@dataclass(frozen=True, eq=False)
class GeneratedPuzzle:
    board: BoardState
    solution: np.ndarray
    weight: int
    pattern: InfluencePattern
    tier: DifficultyTier
    level_index: int
    band: DifficultyBand
    attempts: int
    outcome: str

    @property
    def n(self) -> int:
        return self.board.n

    def view(self) -> PuzzleView:
        return PuzzleView(self.board.copy(), self.weight)


@dataclass
class _Candidate:
    board: BoardState
    solution: np.ndarray
    weight: int


class PuzzleGenerator:
    """Scramble boards with random presses until one lands in a difficulty band.

    The solver is the oracle: each scrambled board is solved and the weight
    of its particular solution is compared with the band. Everything is
    driven by a SeededRandom built from the seed string, so the same inputs
    always produce the same puzzle.
    """

    def __init__(self, max_attempts: int = DEFAULT_MAX_ATTEMPTS):
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
        self.max_attempts = int(max_attempts)

    def generate(
        self,
        n: Optional[int],
        pattern,
        tier,
        level_index: int,
        seed: str,
    ) -> GeneratedPuzzle:
        pattern = InfluencePattern.parse(pattern)
        tier = DifficultyTier.parse(tier)
        if n is None:
            n = grid_size_for(tier, level_index)
        n = int(n)
        if n < 2:
            raise ValueError(f"Grid size must be at least 2, got {n}")

        band = difficulty_band(tier, n)
        A = build_matrix(n, pattern)
        rng = SeededRandom(seed)

        best: Optional[_Candidate] = None
        best_dist = float("inf")

        for attempt in range(1, self.max_attempts + 1):
            k = max(1, band.min_weight + rng.next_int(band.width))
            board = BoardState(n)
            for _ in range(k):
                r = rng.next_int(n)
                c = rng.next_int(n)
                apply_press(board, r, c, pattern)

            solution = gf2_solve(A, board.to_target())
            if solution is None:
                logger.debug("attempt %d: unsolvable scramble, retrying", attempt)
                continue
            weight = int(solution.sum())
            if weight == 0:
                logger.debug("attempt %d: presses cancelled out", attempt)
                continue

            if band.contains(weight):
                return self._result(
                    board, solution, pattern, tier, level_index, band,
                    attempt, OUTCOME_IN_BAND,
                )

            dist = abs(weight - band.midpoint)
            if dist < best_dist:
                best = _Candidate(board, solution, weight)
                best_dist = dist
            logger.debug(
                "attempt %d: weight %d outside band [%d, %d]",
                attempt,
                weight,
                band.min_weight,
                band.max_weight,
            )

        if best is not None:
            logger.info(
                "no in-band board for %s/%s n=%d seed=%r; using weight %d",
                tier.value,
                pattern.value,
                n,
                seed,
                best.weight,
            )
            return self._result(
                best.board, best.solution, pattern, tier, level_index, band,
                self.max_attempts, OUTCOME_CLOSEST,
            )

        logger.info(
            "no solvable scramble for %s/%s n=%d seed=%r; single-press fallback",
            tier.value,
            pattern.value,
            n,
            seed,
        )
        board = BoardState(n)
        apply_press(board, 0, 0, pattern)
        solution = gf2_solve(A, board.to_target())
        # one real press is always reachable, hence solvable
        assert solution is not None
        return self._result(
            board, solution, pattern, tier, level_index, band,
            self.max_attempts, OUTCOME_FALLBACK,
        )

    @staticmethod
    def _result(
        board, solution, pattern, tier, level_index, band, attempts, outcome
    ) -> GeneratedPuzzle:
        return GeneratedPuzzle(
            board=board,
            solution=solution,
            weight=int(solution.sum()),
            pattern=pattern,
            tier=tier,
            level_index=int(level_index),
            band=band,
            attempts=attempts,
            outcome=outcome,
        )


_default_generator = PuzzleGenerator()


def generate(
    n: Optional[int], pattern, tier, level_index: int, seed: str
) -> GeneratedPuzzle:
    """Generate a puzzle with the default retry budget."""
    return _default_generator.generate(n, pattern, tier, level_index, seed)
