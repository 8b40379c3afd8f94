from __future__ import annotations

import itertools
from functools import lru_cache
from typing import List, Optional, Tuple

import numpy as np

from .influence import InfluencePattern, neighbors


def build_matrix(n: int, pattern="plus") -> np.ndarray:
    """Return the N x N effect matrix A over GF(2) for an n x n board.

    Column j encodes the cells toggled when pressing cell j under
    ``pattern``. The array is cached per (n, pattern) and read-only.
    """
    return _build_matrix_cached(int(n), InfluencePattern.parse(pattern))


@lru_cache(maxsize=64)
def _build_matrix_cached(n: int, pattern: InfluencePattern) -> np.ndarray:
    if n < 2:
        raise ValueError(f"Grid size must be at least 2, got {n}")
    N = n * n
    A = np.zeros((N, N), dtype=np.uint8)  # use 0/1 ints for XOR via mod2

    def idx(r, c):
        return r * n + c

    for r in range(n):
        for c in range(n):
            j = idx(r, c)
            for rr, cc in neighbors(r, c, n, pattern):
                A[idx(rr, cc), j] = 1
    A.flags.writeable = False
    return A


def gf2_rref_augmented(
    A: np.ndarray, b: np.ndarray
) -> Tuple[np.ndarray, list[int]]:
    """Return RREF of augmented matrix [A|b] over GF(2) and list of pivot columns.

    Pivots are always the lowest-index candidate row, so the result is a
    pure function of (A, b).
    """
    A = (np.asarray(A) % 2).astype(np.uint8)
    b = (np.asarray(b) % 2).astype(np.uint8).reshape(-1, 1)
    m, n = A.shape
    M = np.concatenate([A, b], axis=1)  # shape (m, n+1)

    row = 0
    pivcols: list[int] = []
    for col in range(n):
        # find a pivot in/under current row
        candidates = np.flatnonzero(M[row:, col])
        if len(candidates) == 0:
            continue
        pivot = row + int(candidates[0])
        # swap pivot row up
        if pivot != row:
            M[[row, pivot]] = M[[pivot, row]]
        # eliminate ALL other rows (Gauss-Jordan)
        hits = np.flatnonzero(M[:, col])
        for r in hits:
            if r != row:
                M[r, :] ^= M[row, :]
        pivcols.append(col)
        row += 1
        if row == m:
            break
    return M, pivcols


def _is_consistent(R: np.ndarray, n: int) -> bool:
    # 0...0 | 1 rows make the system unsolvable
    return not np.any((R[:, :n].sum(axis=1) == 0) & (R[:, n] == 1))


def gf2_solve(A: np.ndarray, b: np.ndarray) -> Optional[np.ndarray]:
    """Solve A x = b over GF(2).

    Returns the particular solution with every free variable set to 0, or
    None if the system is inconsistent.
    """
    n = np.asarray(A).shape[1]
    R, pivcols = gf2_rref_augmented(A, b)
    if not _is_consistent(R, n):
        return None
    x0 = np.zeros((n,), dtype=np.uint8)
    # rows with pivots correspond 1-to-1 to pivcols in this construction
    x0[pivcols] = R[: len(pivcols), n]
    return x0


def gf2_nullity(A: np.ndarray) -> int:
    """Dimension of the nullspace of A over GF(2)."""
    m, n = np.asarray(A).shape
    _, pivcols = gf2_rref_augmented(A, np.zeros(m, dtype=np.uint8))
    return n - len(pivcols)


def gf2_solve_with_nullspace(
    A: np.ndarray, b: np.ndarray
) -> Tuple[Optional[np.ndarray], List[np.ndarray], bool]:
    """Solve A x = b over GF(2), and return a nullspace basis of A.

    Returns:
        x0: the particular solution (length n, uint8) or None if inconsistent
        basis: list of nullspace basis vectors v (length n, uint8) with A v = 0
        solvable: bool
    """
    m, n = np.asarray(A).shape
    R, pivcols = gf2_rref_augmented(A, b)
    if not _is_consistent(R, n):
        return None, [], False

    x0 = np.zeros((n,), dtype=np.uint8)
    x0[pivcols] = R[: len(pivcols), n]

    # For each free column f: x_f = 1, other frees 0, pivots read off column f
    pivset = set(pivcols)
    frees = [j for j in range(n) if j not in pivset]
    basis: list[np.ndarray] = []
    for f in frees:
        v = np.zeros((n,), dtype=np.uint8)
        v[f] = 1
        v[pivcols] = R[: len(pivcols), f]
        basis.append(v)

    return x0, basis, True


def gf2_min_weight_solution(
    A: np.ndarray, b: np.ndarray
) -> Tuple[Optional[np.ndarray], bool]:
    """Return the minimum-Hamming-weight solution to A x = b (if solvable).

    Enumerates the whole coset, so cost grows as 2**nullity.
    """
    x0, basis, ok = gf2_solve_with_nullspace(A, b)
    if not ok or x0 is None:
        return None, False
    best = x0.copy()
    best_w = int(best.sum())
    k = len(basis)
    for r in range(1, k + 1):
        for combo in itertools.combinations(range(k), r):
            cand = x0.copy()
            for idx in combo:
                cand ^= basis[idx]
            w = int(cand.sum())
            if w < best_w:
                best, best_w = cand, w
    return best, True
