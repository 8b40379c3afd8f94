from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from .algebra import build_matrix, gf2_solve
from .board import BoardState
from .generator import GeneratedPuzzle, generate
from .influence import InfluencePattern, apply_press


class SessionState(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass(frozen=True)
class PressResult:
    move_count: int
    completed: bool


class PuzzleSession:
    """Mutable gameplay state for one board.

    ``press`` toggles cells and counts moves until the board is all off;
    after that the session is COMPLETED and ignores presses until ``reset``.
    """

    def __init__(self, initial_board: BoardState, pattern="plus"):
        self.pattern = InfluencePattern.parse(pattern)
        self._initial = initial_board.copy()
        self.board = initial_board.copy()
        self.move_count = 0
        self.state = SessionState.IN_PROGRESS

    @classmethod
    def from_puzzle(cls, puzzle: GeneratedPuzzle) -> "PuzzleSession":
        return cls(puzzle.board, puzzle.pattern)

    @property
    def n(self) -> int:
        return self.board.n

    @property
    def initial_board(self) -> BoardState:
        return self._initial.copy()

    @property
    def completed(self) -> bool:
        return self.state is SessionState.COMPLETED

    def _settled_state(self) -> SessionState:
        if self.board.is_all_off():
            return SessionState.COMPLETED
        return SessionState.IN_PROGRESS

    def _result(self) -> PressResult:
        return PressResult(self.move_count, self.completed)

    def press(self, r: int, c: int) -> PressResult:
        if self.completed or not self.board.in_bounds(r, c):
            return self._result()
        apply_press(self.board, r, c, self.pattern)
        self.move_count += 1
        self.state = self._settled_state()
        return self._result()

    def reset(self) -> None:
        self.board = self._initial.copy()
        self.move_count = 0
        self.state = SessionState.IN_PROGRESS

    def get_board(self) -> BoardState:
        return self.board.copy()

    def hint(self) -> Optional[Tuple[int, int]]:
        """First cell of the current board's particular solution."""
        if self.completed:
            return None
        solution = gf2_solve(build_matrix(self.n, self.pattern), self.board.to_target())
        if solution is None:
            return None
        presses = np.flatnonzero(solution)
        if len(presses) == 0:
            return None
        return divmod(int(presses[0]), self.n)

    def __repr__(self):
        return (
            f"PuzzleSession(n={self.n}, pattern={self.pattern.value}, "
            f"moves={self.move_count}, state={self.state.value})"
        )


def start_session(
    tier, level_index: int, seed: str, pattern="plus", n: Optional[int] = None
) -> PuzzleSession:
    """Generate a puzzle and wrap it in a fresh session."""
    return PuzzleSession.from_puzzle(generate(n, pattern, tier, level_index, seed))
