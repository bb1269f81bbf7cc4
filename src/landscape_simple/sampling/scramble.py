"""Matoušek linear scrambling of digital nets.

Each coordinate is expanded into P base-2 digits (most significant first).
Per dimension, the leading m digits of every point (N = 2^m) are replaced by
``(M @ digits + C) mod 2`` with a random lower-triangular M with unit
diagonal and a random shift C; the remaining P - m digits are replaced by
independent random bits. An invertible linear map of the leading digits
keeps every dyadic interval of width 1/N occupied exactly once, so the
balance of the net survives the randomization.

See Owen, "Monte Carlo theory, methods and examples", section 17.6.
"""

import logging
from typing import Tuple

import numpy as np

from ..constants import BASE, DEFAULT_SEED, DIGITS
from ..errors import DomainError

logger = logging.getLogger(__name__)

# float64 represents k / 2^P exactly up to this many digits
_MAX_DIGITS = 53


def _check_digits(digits: int) -> int:
    if not 1 <= digits <= _MAX_DIGITS:
        raise DomainError(f"Digit count must be in [1, {_MAX_DIGITS}], got {digits}")
    return digits


def log2_exact(n: int) -> int:
    """Return m with n == 2^m.

    Raises:
        DomainError: If n is not a positive power of two
    """
    if n < 1 or n & (n - 1):
        raise DomainError(f"Number of matrix columns is not a power of 2: {n}")
    return n.bit_length() - 1


def unif_to_digits(values: np.ndarray, digits: int = DIGITS) -> np.ndarray:
    """Expand values in [0, 1] into base-2 digits.

    Args:
        values: Array of coordinates, any shape
        digits: Number of digits P to keep

    Returns:
        uint8 array of shape ``values.shape + (P,)``; 1.0 saturates to all ones
    """
    digits = _check_digits(digits)
    scaled = np.floor(np.asarray(values, dtype=np.float64) * 2.0 ** digits)
    integers = np.clip(scaled, 0, 2 ** digits - 1).astype(np.uint64)
    shifts = np.arange(digits - 1, -1, -1, dtype=np.uint64)
    return ((integers[..., np.newaxis] >> shifts) & np.uint64(1)).astype(np.uint8)


def digits_to_unif(digits: np.ndarray) -> np.ndarray:
    """Reassemble base-2 digit expansions into values in [0, 1).

    Inverse of ``unif_to_digits`` for values that are multiples of 2^-P.
    """
    p = _check_digits(digits.shape[-1])
    shifts = np.arange(p - 1, -1, -1, dtype=np.uint64)
    integers = (digits.astype(np.uint64) << shifts).sum(axis=-1, dtype=np.uint64)
    return integers / 2.0 ** p


def matousek_matrices(rng: np.random.Generator, m: int) -> Tuple[np.ndarray, np.ndarray]:
    """Draw the random linear map and shift of one dimension.

    Args:
        rng: Random generator
        m: Number of leading digits to scramble

    Returns:
        Tuple of (M, C): M is m x m lower triangular with non-zero diagonal
        over GF(2), C a length-m digit vector
    """
    matrix = np.tril(rng.integers(0, BASE, size=(m, m)), k=-1)
    matrix[np.diag_indices(m)] = rng.integers(1, BASE, size=m)
    shift = rng.integers(0, BASE, size=m)
    return matrix.astype(np.int64), shift.astype(np.int64)


def scramble_digits(digits: np.ndarray, m: int, rng: np.random.Generator) -> np.ndarray:
    """Scramble a (d, N, P) digit array in place.

    Each dimension gets its own M, C and tail digits so that no correlation
    between dimensions is introduced.

    Args:
        digits: Digit array of shape (d, N, P)
        m: log2(N); number of leading digits mixed linearly
        rng: Random generator

    Returns:
        The same array, scrambled
    """
    d, n, p = digits.shape
    if m > p:
        raise DomainError(f"Cannot scramble 2^{m} points with only {p} digits")

    if m > 0:
        for s in range(d):
            matrix, shift = matousek_matrices(rng, m)
            leading = digits[s, :, :m].astype(np.int64)
            digits[s, :, :m] = (leading @ matrix.T + shift) % BASE

    if p > m:
        digits[:, :, m:] = rng.integers(0, BASE, size=(d, n, p - m), dtype=np.uint8)

    return digits


def scramble(matrix: np.ndarray, rng=DEFAULT_SEED, digits: int = DIGITS) -> np.ndarray:
    """Apply a Matoušek scramble to a (d, N) point matrix.

    Args:
        matrix: Points in [0, 1], one column per point; N must be a power of 2
        rng: Seed or ``numpy.random.Generator`` (anything ``default_rng`` accepts)
        digits: Number of base-2 digits P per coordinate

    Returns:
        New (d, N) array in [0, 1] with the floating dtype of the input

    Raises:
        DomainError: If the matrix is not 2-D or N is not a power of two
    """
    values = np.asarray(matrix)
    if values.ndim != 2:
        raise DomainError(f"Expected a 2-D (dimensions x points) matrix, got shape {values.shape}")

    d, n = values.shape
    m = log2_exact(n)
    if m > digits:
        raise DomainError(f"Cannot scramble 2^{m} points with only {digits} digits")

    generator = np.random.default_rng(rng)
    bits = unif_to_digits(values, digits)
    scramble_digits(bits, m, generator)
    out = digits_to_unif(bits)

    dtype = values.dtype if np.issubdtype(values.dtype, np.floating) else np.float64
    logger.debug(f"Scrambled {n} points in {d} dimensions with {digits} digits")
    return out.astype(dtype)
