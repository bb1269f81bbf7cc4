"""Quasi-random sampling of hyperparameter spaces.

This module provides the Sobol' digital-net generator, its Matoušek
scramble, and the sampling strategies built on them.
"""

from .base import SamplingStrategy
from .scramble import scramble
from .sequence import exponent_to_count, sobol_points
from .sobol import SobolSampler, configurations, sobols

__all__ = [
    "SamplingStrategy",
    "SobolSampler",
    "configurations",
    "exponent_to_count",
    "scramble",
    "sobol_points",
    "sobols",
]
