"""Scrambled Sobol' sampling of hyperparameter spaces."""

from typing import List, Mapping, Union

import numpy as np

from ..assemble import as_space, assemble, sample_dtype
from ..constants import DEFAULT_EXPONENT, DEFAULT_SEED
from ..scales import Scale
from ..space import Configuration, HyperparameterSpace
from .base import SamplingStrategy
from .scramble import scramble
from .sequence import sobol_points


def sobols(d: int, m: int = DEFAULT_EXPONENT, rng=DEFAULT_SEED, dtype=np.float64) -> np.ndarray:
    """Get 2^m scrambled Sobol' points in d dimensions.

    The result is a pure function of (rng seed, d, m): the same seed gives
    bit-identical points.

    Args:
        d: Number of dimensions
        m: Exponent; 2^m points are produced
        rng: Seed or ``numpy.random.Generator`` used for scrambling
        dtype: Floating type of the returned matrix

    Returns:
        Read-only array of shape (d, 2^m) with values in [0, 1]

    Raises:
        DomainError: If d or m is invalid
    """
    out = scramble(sobol_points(d, m), rng).astype(dtype)
    out.flags.writeable = False
    return out


def configurations(
    space: Union[HyperparameterSpace, Mapping[str, Scale]],
    m: int = DEFAULT_EXPONENT,
    rng=DEFAULT_SEED,
) -> List[Configuration]:
    """Generate 2^m configurations of a space from scrambled Sobol' points.

    Since generation is deterministic, the result can be indexed into from
    independent processes without coordination.

    Args:
        space: Dimension declarations (HyperparameterSpace or name -> Scale mapping)
        m: Exponent; 2^m configurations are produced
        rng: Seed or ``numpy.random.Generator`` used for scrambling

    Returns:
        List of 2^m configurations

    Example:
        >>> configs = configurations({"lr": geometric(1e-4, 1e-1)}, m=3, rng=31)
        >>> len(configs)
        8
    """
    space = as_space(space)
    matrix = sobols(len(space), m=m, rng=rng, dtype=sample_dtype(space))
    return assemble(matrix, space)


class SobolSampler(SamplingStrategy):
    """Scrambled Sobol' sequence sampling.

    Generates low-discrepancy configurations whose projections onto each
    dimension are far more even than independent random draws.
    """

    def __init__(self, space, seed=DEFAULT_SEED, scramble: bool = True):
        """Initialize Sobol sampler.

        Args:
            space: The hyperparameter space to sample from
            seed: Seed for scrambling
            scramble: Whether to scramble the sequence; unscrambled points
                start at the origin and are identical for every seed
        """
        super().__init__(space)
        self.seed = seed
        self.scramble = scramble

    def sample_matrix(self, m: int) -> np.ndarray:
        """Generate the (dimensions x 2^m) coordinate matrix."""
        dtype = sample_dtype(self.space)
        if self.scramble:
            return sobols(len(self.space), m=m, rng=self.seed, dtype=dtype)
        matrix = sobol_points(len(self.space), m, dtype=dtype)
        matrix.flags.writeable = False
        return matrix

    def sample(self, m: int) -> List[Configuration]:
        """Generate 2^m configurations.

        Args:
            m: Exponent of the number of configurations

        Returns:
            List of configurations from the Sobol' sequence
        """
        return assemble(self.sample_matrix(m), self.space)

    def method_name(self) -> str:
        """Return the name of this sampling method."""
        return "sobol"
