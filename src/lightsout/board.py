from __future__ import annotations

import numpy as np


class BoardState:
    def __init__(self, n: int, state: np.ndarray | None = None):
        self.n = n
        if state is None:
            self.state = np.zeros((n, n), dtype=bool)
        else:
            state = np.asarray(state)
            assert state.shape == (n, n)
            self.state = state.astype(bool, copy=True)

    def copy(self) -> "BoardState":
        return BoardState(self.n, self.state.copy())

    def to_flat(self) -> np.ndarray:
        """Row-major view; cell (r, c) sits at index r * n + c."""
        return self.state.reshape(-1)

    def to_target(self) -> np.ndarray:
        """Flattened board as a GF(2) vector (ON => 1)."""
        return self.to_flat().astype(np.uint8)

    @staticmethod
    def from_flat(n: int, flat: np.ndarray) -> "BoardState":
        return BoardState(n, np.asarray(flat).reshape(n, n))

    @staticmethod
    def from_rows(rows) -> "BoardState":
        """Build a board from nested 0/1 (or bool) rows."""
        grid = np.array(rows, dtype=bool)
        if grid.ndim != 2 or grid.shape[0] != grid.shape[1]:
            raise ValueError(f"Board must be square, got shape {grid.shape}")
        return BoardState(grid.shape[0], grid)

    def in_bounds(self, r: int, c: int) -> bool:
        return 0 <= r < self.n and 0 <= c < self.n

    def count_on(self) -> int:
        return int(self.state.sum())

    def is_all_off(self) -> bool:
        return not self.state.any()

    def __eq__(self, other):
        if not isinstance(other, BoardState):
            return NotImplemented
        return self.n == other.n and bool(np.array_equal(self.state, other.state))

    def __repr__(self):
        return f"BoardState(n={self.n}, on={self.count_on()})"

    def __str__(self) -> str:
        return "\n".join(
            "".join("1" if cell else "0" for cell in row) for row in self.state
        )
