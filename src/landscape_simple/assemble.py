"""Assembly of configuration records from a sample matrix.

Row i of the matrix feeds the i-th declared dimension and column j becomes
the j-th configuration. Dimensions never interact; each record depends on
its own column only, so any column slice of a matrix can be assembled
independently (e.g. by separate workers) with identical results.
"""

import logging
from typing import List, Mapping, Union

import numpy as np

from .errors import DomainError, ScaleTypeError
from .scales import Scale
from .scales.types import is_float_type
from .space import Configuration, HyperparameterSpace

logger = logging.getLogger(__name__)


def as_space(space: Union[HyperparameterSpace, Mapping[str, Scale]]) -> HyperparameterSpace:
    """Accept a HyperparameterSpace or a plain name -> Scale mapping."""
    if isinstance(space, HyperparameterSpace):
        return space
    return HyperparameterSpace(space)


def sample_dtype(space: Union[HyperparameterSpace, Mapping[str, Scale]]):
    """Floating type of the sample matrix for a space.

    The promotion of every floating output type in the space, so that a
    space of ``np.float32`` scales is sampled in single precision. Half
    precision is raised to ``np.float32`` to keep 2^m points distinct.
    Defaults to ``np.float64`` when no scale is floating.
    """
    space = as_space(space)
    floats = [t for t in space.output_types().values() if is_float_type(t)]
    if not floats:
        return np.float64
    return np.result_type(np.float32, *floats).type


def _check_matrix(matrix: np.ndarray, space: HyperparameterSpace) -> np.ndarray:
    values = np.asarray(matrix)
    if values.ndim != 2:
        raise DomainError(f"Expected a 2-D (dimensions x points) matrix, got shape {values.shape}")

    d, n = values.shape
    if d != len(space):
        raise DomainError(f"Matrix has {d} rows but the space declares {len(space)} parameters")

    if n and (np.isnan(values).any() or values.min() < 0 or values.max() > 1):
        raise DomainError("Sample coordinates must lie in [0, 1]")

    return values


def assemble(matrix: np.ndarray, space: Union[HyperparameterSpace, Mapping[str, Scale]]) -> List[Configuration]:
    """Turn each column of a sample matrix into a configuration.

    Args:
        matrix: Array of shape (len(space), N) with coordinates in [0, 1]
        space: Dimension declarations, in matrix row order

    Returns:
        N configurations, in column order

    Raises:
        DomainError: If the matrix shape or values do not fit the space
        ScaleTypeError: If a scale produces a value its type cannot represent
    """
    space = as_space(space)
    values = _check_matrix(matrix, space)

    names = space.names()
    scales = space.scales()

    configs = []
    for column in values.T:
        record = {}
        for name, scale, u in zip(names, scales, column):
            try:
                record[name] = scale(u)
            except ScaleTypeError as e:
                raise ScaleTypeError(f"Parameter {name} at u={u}: {e}") from e
        configs.append(Configuration(record))

    logger.debug(f"Assembled {len(configs)} configurations over {names}")
    return configs
