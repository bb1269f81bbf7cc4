"""Tests for the Matoušek linear scramble."""

import numpy as np
import pytest
from hypothesis import given, settings, strategies as st

from landscape_simple.errors import DomainError
from landscape_simple.sampling.scramble import (
    digits_to_unif,
    log2_exact,
    matousek_matrices,
    scramble,
    scramble_digits,
    unif_to_digits,
)
from landscape_simple.sampling.sequence import sobol_points
from landscape_simple.sampling.sobol import sobols


class TestDigitExpansion:
    """Tests for conversion between values and base-2 digits."""

    def test_known_expansion(self):
        """0.625 = 0.101 in base 2."""
        digits = unif_to_digits(np.array([0.625]), digits=4)
        assert digits.tolist() == [[1, 0, 1, 0]]

    def test_one_saturates(self):
        """1.0 maps to the largest representable expansion."""
        digits = unif_to_digits(np.array([1.0]), digits=8)
        assert digits.tolist() == [[1] * 8]

    def test_shape(self):
        """A digit axis is appended to the input shape."""
        assert unif_to_digits(np.zeros((3, 4)), digits=32).shape == (3, 4, 32)

    @given(st.lists(st.integers(min_value=0, max_value=2 ** 32 - 1), min_size=1, max_size=20))
    def test_dyadic_values_reassemble(self, integers):
        """Multiples of 2^-P survive a round trip exactly."""
        values = np.array(integers, dtype=np.float64) / 2.0 ** 32
        np.testing.assert_array_equal(digits_to_unif(unif_to_digits(values, 32)), values)

    @pytest.mark.parametrize("digits", [0, 54])
    def test_digit_count_bounds(self, digits):
        """Digit counts must fit a double."""
        with pytest.raises(DomainError):
            unif_to_digits(np.zeros(2), digits=digits)


class TestLog2Exact:
    """Tests for power-of-two detection."""

    @pytest.mark.parametrize("n,m", [(1, 0), (2, 1), (1024, 10)])
    def test_powers_of_two(self, n, m):
        """Powers of two give their exponent."""
        assert log2_exact(n) == m

    @pytest.mark.parametrize("n", [0, 3, 6, 1000])
    def test_not_power_of_two(self, n):
        """Other counts are rejected."""
        with pytest.raises(DomainError, match="not a power of 2"):
            log2_exact(n)


class TestMatousekMatrices:
    """Tests for the random linear map."""

    def test_lower_triangular_unit_diagonal(self):
        """M is lower triangular with ones on the diagonal."""
        rng = np.random.default_rng(0)
        matrix, shift = matousek_matrices(rng, 6)
        assert matrix.shape == (6, 6)
        assert np.all(np.triu(matrix, k=1) == 0)
        assert np.all(np.diag(matrix) == 1)
        assert set(np.unique(matrix)) <= {0, 1}
        assert shift.shape == (6,)
        assert set(np.unique(shift)) <= {0, 1}


class TestScramble:
    """Tests for scrambling point matrices."""

    def test_shape_and_range(self):
        """Shape is kept and values stay in [0, 1]."""
        out = scramble(sobol_points(3, 6), rng=31)
        assert out.shape == (3, 64)
        assert out.min() >= 0.0
        assert out.max() <= 1.0

    @pytest.mark.parametrize("m", [1, 5, 10])
    def test_keeps_balance(self, m):
        """Each interval [k/N, (k+1)/N) still holds exactly one point per dimension."""
        n = 2 ** m
        out = scramble(sobol_points(4, m), rng=2024)
        for row in out:
            cells = np.floor(row * n).astype(int)
            assert sorted(cells) == list(range(n))

    def test_same_seed_identical(self):
        """The same seed gives bit-identical output."""
        points = sobol_points(3, 8)
        np.testing.assert_array_equal(scramble(points, rng=31), scramble(points, rng=31))

    def test_different_seeds_differ(self):
        """Different seeds give different output."""
        points = sobol_points(3, 8)
        assert not np.array_equal(scramble(points, rng=31), scramble(points, rng=42))

    def test_generator_accepted(self):
        """A numpy Generator can be passed instead of a seed."""
        points = sobol_points(2, 4)
        out = scramble(points, rng=np.random.default_rng(31))
        np.testing.assert_array_equal(out, scramble(points, rng=31))

    def test_input_untouched(self):
        """The input matrix is not modified."""
        points = sobol_points(2, 5)
        before = points.copy()
        scramble(points, rng=1)
        np.testing.assert_array_equal(points, before)

    def test_removes_origin(self):
        """The scrambled first point is no longer the origin."""
        out = scramble(sobol_points(4, 6), rng=5)
        assert np.any(out[:, 0] != 0.0)

    def test_dimensions_differ(self):
        """Dimensions are scrambled independently."""
        points = np.tile(sobol_points(1, 6), (2, 1))
        out = scramble(points, rng=11)
        assert not np.array_equal(out[0], out[1])

    def test_single_point(self):
        """N = 1 draws every digit at random."""
        out = scramble(np.zeros((3, 1)), rng=3)
        assert out.shape == (3, 1)
        assert np.all((out >= 0.0) & (out < 1.0))

    @pytest.mark.parametrize("n", [3, 6, 100])
    def test_non_power_of_two_rejected(self, n):
        """N must be a power of two."""
        with pytest.raises(DomainError, match="not a power of 2"):
            scramble(np.zeros((2, n)), rng=1)

    def test_one_dimensional_rejected(self):
        """A flat vector is not a point matrix."""
        with pytest.raises(DomainError, match="2-D"):
            scramble(np.zeros(8), rng=1)

    def test_float32_kept(self):
        """The floating type of the input is kept."""
        out = scramble(sobol_points(2, 4, dtype=np.float32), rng=1)
        assert out.dtype == np.float32

    def test_too_few_digits(self):
        """2^m points need at least m digits."""
        with pytest.raises(DomainError, match="digits"):
            scramble(sobol_points(1, 6), rng=1, digits=4)

    @settings(max_examples=25, deadline=None)
    @given(seed=st.integers(min_value=0, max_value=2 ** 32), m=st.integers(min_value=0, max_value=7))
    def test_balance_for_any_seed(self, seed, m):
        """Balance holds regardless of the seed."""
        n = 2 ** m
        out = scramble(sobol_points(2, m), rng=seed)
        for row in out:
            assert sorted(np.floor(row * n).astype(int)) == list(range(n))

    @pytest.mark.parametrize("m", [1, 5, 10])
    def test_keeps_elementary_boxes(self, m):
        """Every dyadic box of volume 1/N across two dimensions still holds one point."""
        n = 2 ** m
        x0, x1 = sobols(2, m, rng=2024)
        for k in range(m + 1):
            boxes = set(zip(np.floor(x0 * 2 ** k).astype(int), np.floor(x1 * 2 ** (m - k)).astype(int)))
            assert len(boxes) == n

    @settings(max_examples=25, deadline=None)
    @given(seed=st.integers(min_value=0, max_value=2 ** 32), m=st.integers(min_value=0, max_value=7))
    def test_elementary_boxes_for_any_seed(self, seed, m):
        """Joint balance holds regardless of the seed."""
        n = 2 ** m
        x0, x1 = scramble(sobol_points(2, m), rng=seed)
        for k in range(m + 1):
            boxes = set(zip(np.floor(x0 * 2 ** k).astype(int), np.floor(x1 * 2 ** (m - k)).astype(int)))
            assert len(boxes) == n


class TestScrambleDigits:
    """Tests for in-place digit scrambling."""

    def test_in_place(self):
        """The digit array is modified and returned."""
        digits = unif_to_digits(sobol_points(2, 3), 16)
        result = scramble_digits(digits, 3, np.random.default_rng(0))
        assert result is digits

    def test_m_larger_than_digits(self):
        """More leading digits than available are rejected."""
        digits = np.zeros((1, 4, 2), dtype=np.uint8)
        with pytest.raises(DomainError):
            scramble_digits(digits, 3, np.random.default_rng(0))
