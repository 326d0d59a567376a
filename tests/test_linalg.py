"""
Unit tests for the dense linear equation solver.

Tests solve_gauss, which is used once per derivative evaluation to recover
accelerations and contact forces.
"""

import numpy as np
import pytest
from scipy.linalg import solve

from racer import SingularSystem, solve_gauss


class TestSolveGauss:
    """Test suite for Gaussian elimination"""

    def test_identity_returns_rhs(self) -> None:
        """Test that I·x = b gives x = b"""
        b = np.array([1.5, -2.0, 0.0, 3.25, 7.0])

        x = solve_gauss(np.eye(5), b)

        assert np.array_equal(x, b)

    def test_matches_reference_solver(self) -> None:
        """Test agreement with scipy on a well-conditioned random system"""
        rng = np.random.default_rng(42)
        a = rng.normal(size=(6, 6)) + 6.0 * np.eye(6)
        b = rng.normal(size=6)

        x = solve_gauss(a, b)

        assert np.allclose(x, solve(a, b), atol=1e-12)
        assert np.allclose(a @ x, b, atol=1e-12)

    def test_zero_diagonal_needs_pivoting(self) -> None:
        """Test that a zero leading entry is handled by row swapping"""
        a = np.array([[0.0, 1.0], [1.0, 0.0]])
        b = np.array([2.0, 3.0])

        x = solve_gauss(a, b)

        assert np.allclose(x, [3.0, 2.0])

    def test_small_pivot_accuracy(self) -> None:
        """Test that a tiny leading pivot does not destroy accuracy"""
        a = np.array([[1e-17, 1.0], [1.0, 1.0]])
        b = np.array([1.0, 2.0])

        x = solve_gauss(a, b, eps=1e-20)

        assert abs(x[0] - 1.0) < 1e-12
        assert abs(x[1] - 1.0) < 1e-12

    def test_zero_row_is_singular(self) -> None:
        """Test that a zero row raises SingularSystem"""
        a = np.array([[1.0, 2.0, 3.0], [0.0, 0.0, 0.0], [4.0, 5.0, 6.0]])

        with pytest.raises(SingularSystem):
            solve_gauss(a, np.ones(3))

    def test_dependent_rows_are_singular(self) -> None:
        """Test that linearly dependent rows raise SingularSystem"""
        a = np.array([[1.0, 2.0], [2.0, 4.0]])

        with pytest.raises(SingularSystem):
            solve_gauss(a, np.array([1.0, 2.0]))

    def test_non_finite_entries_are_rejected(self) -> None:
        """Test that NaN coefficients are reported instead of propagated"""
        a = np.array([[np.nan, 0.0], [0.0, 1.0]])

        with pytest.raises(SingularSystem):
            solve_gauss(a, np.ones(2))

    def test_inputs_not_modified(self) -> None:
        """Test that the caller's matrix and vector are left untouched"""
        a = np.array([[0.0, 2.0], [3.0, 1.0]])
        b = np.array([4.0, 5.0])
        a_copy = a.copy()
        b_copy = b.copy()

        solve_gauss(a, b)

        assert np.array_equal(a, a_copy)
        assert np.array_equal(b, b_copy)

    def test_shape_mismatch(self) -> None:
        """Test that non-square matrices and wrong-length vectors are rejected"""
        with pytest.raises(ValueError):
            solve_gauss(np.ones((2, 3)), np.ones(2))
        with pytest.raises(ValueError):
            solve_gauss(np.eye(3), np.ones(2))
