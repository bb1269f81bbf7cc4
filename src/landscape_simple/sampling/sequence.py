"""Unscrambled Sobol' digital nets.

The first 2^k points of a Sobol' sequence are balanced for every k only if
the point set starts at the origin. Generators that skip the origin break
this, so the origin is written explicitly and the remaining 2^m - 1 points
are drawn from the underlying recurrence.
"""

import logging
import numbers

import numpy as np
from scipy.stats import qmc

from ..constants import DIGITS, MAX_EXPONENT
from ..errors import DomainError

logger = logging.getLogger(__name__)


def exponent_to_count(m: int) -> int:
    """Number of points N = 2^m for an exponent m.

    Args:
        m: Exponent, an integer in [0, MAX_EXPONENT]

    Returns:
        2 ** m

    Raises:
        DomainError: If m is not an integer or yields an unusable N
    """
    if isinstance(m, (bool, np.bool_)) or not isinstance(m, numbers.Integral):
        raise DomainError(f"The exponent m must be an integer, got {m!r}")
    m = int(m)
    if m < 0 or m > MAX_EXPONENT:
        raise DomainError(
            f"The m you chose ({m}) does not yield a usable N = 2^m; "
            f"m must be in [0, {MAX_EXPONENT}]"
        )
    return 2 ** m


def check_dimension(d: int) -> int:
    """Validate the number of dimensions of a point set."""
    if isinstance(d, (bool, np.bool_)) or not isinstance(d, numbers.Integral):
        raise DomainError(f"The dimension count must be an integer, got {d!r}")
    if d < 1:
        raise DomainError(f"Sobol' points need at least one dimension, got {d}")
    if d > qmc.Sobol.MAXDIM:
        raise DomainError(f"At most {qmc.Sobol.MAXDIM} dimensions are supported, got {d}")
    return int(d)


def sobol_points(d: int, m: int, dtype=np.float64) -> np.ndarray:
    """Generate the first 2^m points of the d-dimensional Sobol' sequence.

    Deterministic in (d, m); no randomness is involved.

    Args:
        d: Number of dimensions
        m: Exponent; 2^m points are produced

    Returns:
        Array of shape (d, 2^m), one column per point, first column all zeros
    """
    n = exponent_to_count(m)
    d = check_dimension(d)

    points = np.zeros((d, n), dtype=np.float64)
    if n > 1:
        engine = qmc.Sobol(d=d, scramble=False, bits=DIGITS)
        # The origin is already in column 0
        engine.fast_forward(1)
        points[:, 1:] = engine.random(n - 1).T

    logger.debug(f"Generated {n} Sobol' points in {d} dimensions")
    return points.astype(dtype, copy=False)
