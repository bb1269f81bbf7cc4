"""Scales: typed mappings from [0, 1] to hyperparameter values.

This module provides the scale abstraction and its variants (constant,
discrete, linear, geometric, mixture and composed scales).
"""

from .types import (
    UNTYPED,
    Scale,
    coerce,
    compose,
    infer_output_type,
    promote_types,
    type_name,
)
from .factories import (
    Rescaler,
    constant,
    discrete,
    geometric,
    minmax,
)
from .mixture import MixtureTransform, mixture

__all__ = [
    # Core
    "UNTYPED",
    "Scale",
    "coerce",
    "compose",
    "infer_output_type",
    "promote_types",
    "type_name",
    # Variants
    "Rescaler",
    "constant",
    "discrete",
    "geometric",
    "minmax",
    "mixture",
    "MixtureTransform",
]
