"""Public API for landscape-simple.

This module provides the complete public API: scales, spaces, sampling,
declarative space files and tabular export.
"""

# Errors
from .errors import DomainError, ScaleTypeError

# Scales
from .scales import (
    UNTYPED,
    Scale,
    coerce,
    compose,
    infer_output_type,
    promote_types,
    # Variants
    Rescaler,
    constant,
    discrete,
    geometric,
    minmax,
    mixture,
    MixtureTransform,
)

# Spaces and records
from .space import HyperparameterSpace, Configuration

# Assembly
from .assemble import assemble, sample_dtype

# Sampling
from .sampling import (
    SamplingStrategy,
    SobolSampler,
    configurations,
    exponent_to_count,
    scramble,
    sobol_points,
    sobols,
)

# Declarative spaces
from .declarations import SpaceDeclaration, load_space, scale_from_dict, space_from_dict

# Tabular export
from .frame import to_frame, to_records

# Constants
from .constants import DEFAULT_SEED, DEFAULT_EXPONENT

# Version
try:
    from importlib.metadata import PackageNotFoundError, version
    __version__ = version("landscape-simple")
except PackageNotFoundError:
    __version__ = "0.1.0"

# Public API Export List
__all__ = [
    # Errors
    "DomainError",
    "ScaleTypeError",

    # Scales
    "UNTYPED",
    "Scale",
    "coerce",
    "compose",
    "infer_output_type",
    "promote_types",
    "Rescaler",
    "constant",
    "discrete",
    "geometric",
    "minmax",
    "mixture",
    "MixtureTransform",

    # Spaces
    "HyperparameterSpace",
    "Configuration",

    # Assembly and sampling
    "assemble",
    "sample_dtype",
    "SamplingStrategy",
    "SobolSampler",
    "configurations",
    "exponent_to_count",
    "scramble",
    "sobol_points",
    "sobols",

    # Declarations
    "SpaceDeclaration",
    "load_space",
    "scale_from_dict",
    "space_from_dict",

    # Export
    "to_frame",
    "to_records",

    # Constants
    "DEFAULT_SEED",
    "DEFAULT_EXPONENT",

    # Version
    "__version__",
]
