"""Global constants for landscape-simple.

This module centralizes the numeric defaults of the sampling engine so that
the generator, the scrambler and the public wrappers agree on them.
"""

# Seed used by the convenience wrappers when the caller does not pass one.
DEFAULT_SEED: int = 31

# Default exponent m, i.e. 2^9 = 512 configurations.
DEFAULT_EXPONENT: int = 9

# Largest accepted exponent (2^30 points).
MAX_EXPONENT: int = 30

# Base of the digit expansion; fixed for Sobol' digital nets.
BASE: int = 2

# Digits kept per coordinate by the Matoušek scramble. Exceeds float32 resolution.
DIGITS: int = 32

# Default tolerance for the sum-to-one check of unnormalised mixtures.
MIXTURE_ATOL: float = 1e-8
