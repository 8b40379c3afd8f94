"""Tests for GF(2) matrix construction and Gauss-Jordan solving."""

import numpy as np
import pytest

from lightsout.algebra import (
    build_matrix,
    gf2_min_weight_solution,
    gf2_nullity,
    gf2_solve,
    gf2_solve_with_nullspace,
)
from lightsout.board import BoardState
from lightsout.influence import InfluencePattern, apply_press


def _mod2_product(A, x):
    return (A.astype(int) @ x.astype(int)) % 2


def _board_from_presses(n, pattern, presses):
    board = BoardState(n)
    for p in presses:
        r, c = divmod(p, n)
        apply_press(board, r, c, pattern)
    return board


class TestBuildMatrix:
    def test_shape_and_dtype(self):
        A = build_matrix(3, "plus")
        assert A.shape == (9, 9)
        assert A.dtype == np.uint8

    def test_plus_column_weights(self):
        A = build_matrix(3, "plus")
        col_sums = A.sum(axis=0)
        assert col_sums[0] == 3  # corner
        assert col_sums[1] == 4  # edge
        assert col_sums[4] == 5  # center

    @pytest.mark.parametrize("pattern", list(InfluencePattern))
    def test_symmetric_with_unit_diagonal(self, pattern):
        A = build_matrix(4, pattern)
        assert np.array_equal(A, A.T)
        assert np.all(np.diag(A) == 1)

    def test_cached_and_read_only(self):
        A = build_matrix(3, "plus")
        assert build_matrix(3, InfluencePattern.PLUS) is A
        with pytest.raises(ValueError):
            A[0, 0] = 0

    def test_rejects_tiny_grid(self):
        with pytest.raises(ValueError):
            build_matrix(1, "plus")


class TestSolve:
    def test_recovers_presses_on_full_rank_board(self):
        board = _board_from_presses(3, "plus", [0, 4, 8])
        x = gf2_solve(build_matrix(3, "plus"), board.to_target())
        assert x is not None
        assert np.flatnonzero(x).tolist() == [0, 4, 8]

    @pytest.mark.parametrize("pattern", list(InfluencePattern))
    @pytest.mark.parametrize("n", [3, 4, 5])
    def test_solution_satisfies_system(self, pattern, n):
        A = build_matrix(n, pattern)
        board = _board_from_presses(n, pattern, [0, n + 1, n * n - 1, n])
        b = board.to_target()
        x = gf2_solve(A, b)
        assert x is not None
        assert np.array_equal(_mod2_product(A, x), b)

    def test_inconsistent_returns_none(self):
        A = np.array([[1, 1], [1, 1]], dtype=np.uint8)
        assert gf2_solve(A, np.array([1, 0], dtype=np.uint8)) is None

    def test_free_variables_set_to_zero(self):
        A = np.array([[1, 1], [0, 0]], dtype=np.uint8)
        x = gf2_solve(A, np.array([1, 0], dtype=np.uint8))
        assert x.tolist() == [1, 0]

    def test_all_off_target_gives_zero_vector(self):
        A = build_matrix(4, "plus")
        x = gf2_solve(A, np.zeros(16, dtype=np.uint8))
        assert x is not None and x.sum() == 0

    def test_deterministic(self):
        A = build_matrix(5, "plus")
        b = _board_from_presses(5, "plus", [1, 7, 13, 19]).to_target()
        assert np.array_equal(gf2_solve(A, b), gf2_solve(A, b))

    def test_does_not_mutate_inputs(self):
        A = np.array([[1, 1, 0], [0, 1, 1], [1, 0, 1]], dtype=np.uint8)
        b = np.array([1, 1, 0], dtype=np.uint8)
        A_before, b_before = A.copy(), b.copy()
        gf2_solve(A, b)
        assert np.array_equal(A, A_before)
        assert np.array_equal(b, b_before)

    def test_unreachable_target_on_singular_board(self):
        # 4x4 plus has a 4-dimensional nullspace, so some single lights are unsolvable
        A = build_matrix(4, "plus")
        b = np.zeros(16, dtype=np.uint8)
        b[0] = 1
        assert gf2_solve(A, b) is None


class TestNullspace:
    @pytest.mark.parametrize(
        "n,expected", [(2, 0), (3, 0), (4, 4), (5, 2)]
    )
    def test_plus_nullity(self, n, expected):
        assert gf2_nullity(build_matrix(n, "plus")) == expected

    def test_basis_vectors_are_in_kernel(self):
        A = build_matrix(5, "plus")
        b = _board_from_presses(5, "plus", [0, 12]).to_target()
        x0, basis, ok = gf2_solve_with_nullspace(A, b)
        assert ok
        assert len(basis) == 2
        for v in basis:
            assert v.sum() > 0
            assert not _mod2_product(A, v).any()
        assert np.array_equal(x0, gf2_solve(A, b))

    def test_inconsistent(self):
        A = build_matrix(4, "plus")
        b = np.zeros(16, dtype=np.uint8)
        b[0] = 1
        x0, basis, ok = gf2_solve_with_nullspace(A, b)
        assert x0 is None and basis == [] and not ok

    def test_min_weight_not_heavier_than_particular(self):
        A = build_matrix(5, "plus")
        b = _board_from_presses(5, "plus", [0, 3, 12, 20, 24]).to_target()
        best, ok = gf2_min_weight_solution(A, b)
        assert ok
        assert np.array_equal(_mod2_product(A, best), b)
        assert best.sum() <= gf2_solve(A, b).sum()
