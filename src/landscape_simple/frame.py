"""Export of configurations to plain records and polars DataFrames."""

import logging
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import polars as pl

from .scales import UNTYPED
from .space import Configuration, HyperparameterSpace

logger = logging.getLogger(__name__)

_PYTHON_DTYPES = {
    float: pl.Float64,
    int: pl.Int64,
    str: pl.Utf8,
    bool: pl.Boolean,
}


def _clean(value: Any) -> Any:
    if isinstance(value, (np.integer, np.floating)):
        return value.item()
    if isinstance(value, np.bool_):
        return bool(value)
    return value


def to_records(configs: Sequence[Configuration]) -> List[Dict[str, Any]]:
    """Convert configurations to plain dicts of Python scalars.

    NumPy scalars are converted with ``.item()`` so the records can be
    serialized as JSON.
    """
    return [{name: _clean(value) for name, value in config} for config in configs]


def _column_type(values: List[Any]) -> Any:
    kinds = {type(v) for v in values}
    return kinds.pop() if len(kinds) == 1 else UNTYPED


def _column(name: str, values: List[Any], output_type: Any) -> pl.Series:
    if output_type in _PYTHON_DTYPES:
        return pl.Series(name, values, dtype=_PYTHON_DTYPES[output_type])
    if isinstance(output_type, type) and issubclass(output_type, np.generic):
        return pl.Series(name, np.asarray(values, dtype=output_type))
    logger.debug(f"Column {name} has no columnar type; storing Python objects")
    return pl.Series(name, values, dtype=pl.Object)


def to_frame(
    configs: Sequence[Configuration],
    space: Optional[HyperparameterSpace] = None,
) -> pl.DataFrame:
    """Build a DataFrame with one row per configuration.

    Columns follow the declaration order. Column dtypes follow the declared
    output types when ``space`` is given (``np.float32`` scales give
    ``Float32`` columns) and the value types otherwise. Untyped columns
    hold Python objects and cannot be written to CSV or Parquet.

    Args:
        configs: Configurations, e.g. from ``configurations``
        space: Space the configurations were drawn from

    Returns:
        polars DataFrame of shape (len(configs), number of parameters)
    """
    if space is not None:
        names = space.names()
    elif configs:
        names = configs[0].names()
    else:
        return pl.DataFrame()

    columns = []
    for name in names:
        values = [config[name] for config in configs]
        if space is not None:
            output_type = space.get_scale(name).output_type
        else:
            output_type = _column_type(values)
        columns.append(_column(name, values, output_type))

    return pl.DataFrame(columns)


def is_columnar(frame: pl.DataFrame) -> bool:
    """Whether every column can be written to CSV or Parquet."""
    return all(dtype != pl.Object for dtype in frame.dtypes)
