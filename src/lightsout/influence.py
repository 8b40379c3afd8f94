from __future__ import annotations

from enum import Enum

from .board import BoardState


class InfluencePattern(str, Enum):
    """Which cells a single press toggles, besides the pressed cell."""

    PLUS = "plus"
    DIAGONAL = "diagonal"
    KNIGHT = "knight"

    @classmethod
    def parse(cls, value: "InfluencePattern | str") -> "InfluencePattern":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown influence pattern: {value}") from None


_OFFSETS: dict[InfluencePattern, tuple[tuple[int, int], ...]] = {
    InfluencePattern.PLUS: ((-1, 0), (1, 0), (0, -1), (0, 1)),
    InfluencePattern.DIAGONAL: ((-1, -1), (-1, 1), (1, -1), (1, 1)),
    InfluencePattern.KNIGHT: (
        (-2, -1),
        (-2, 1),
        (-1, -2),
        (-1, 2),
        (1, -2),
        (1, 2),
        (2, -1),
        (2, 1),
    ),
}


def pattern_offsets(pattern) -> tuple[tuple[int, int], ...]:
    """Offsets relative to the pressed cell, self excluded."""
    return _OFFSETS[InfluencePattern.parse(pattern)]


def neighbors(r: int, c: int, n: int, pattern) -> set[tuple[int, int]]:
    """Cells toggled by pressing (r, c) on an n x n board.

    Always contains (r, c) itself; offsets that leave the board are dropped.
    """
    neigh = {(r, c)}
    for dr, dc in pattern_offsets(pattern):
        rr, cc = r + dr, c + dc
        if 0 <= rr < n and 0 <= cc < n:
            neigh.add((rr, cc))
    return neigh


def apply_press(board: BoardState, r: int, c: int, pattern) -> None:
    """Toggle cell (r, c) and its pattern neighbors in place."""
    for rr, cc in neighbors(r, c, board.n, pattern):
        board.state[rr, cc] ^= True
