"""Declarative hyperparameter spaces.

Spaces can be written as TOML or JSON documents instead of Python code:

    [sampling]
    m = 7
    seed = 31

    [parameters.layers]
    scale = "discrete"
    values = [2, 4, 8]

    [parameters.lr]
    scale = "geometric"
    min = 1e-4
    max = 1e-1
    dtype = "float32"

    [parameters.width]
    scale = "geometric"
    min = 1.0
    max = 10.0
    round = "ceil"
    cast = "int"

    [parameters.dropout]
    scale = "mixture"
    components = [
        { proportion = 0.2, scale = "constant", value = 0.0 },
        { proportion = 0.8, scale = "minmax", min = 0.05, max = 0.5 },
    ]

Parameter tables keep their document order, which fixes the row of each
dimension in the sample matrix.
"""

import json
import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Union

import numpy as np

from .constants import MIXTURE_ATOL
from .errors import DomainError
from .scales import Scale, compose, constant, discrete, geometric, minmax, mixture
from .space import HyperparameterSpace

logger = logging.getLogger(__name__)

DTYPES: Dict[str, type] = {
    "float": float,
    "float16": np.float16,
    "float32": np.float32,
    "float64": np.float64,
    "int": int,
    "int8": np.int8,
    "int16": np.int16,
    "int32": np.int32,
    "int64": np.int64,
    "uint8": np.uint8,
    "uint16": np.uint16,
    "uint32": np.uint32,
    "uint64": np.uint64,
    "str": str,
    "bool": bool,
}

ROUNDING: Dict[str, Callable[[Any], Any]] = {
    "floor": np.floor,
    "ceil": np.ceil,
    "round": np.round,
}

SCALE_KINDS = ("constant", "discrete", "minmax", "linear", "geometric", "geo", "log", "mixture")


@dataclass(frozen=True)
class SpaceDeclaration:
    """A parsed space document.

    Attributes:
        space: The declared hyperparameter space
        m: Exponent from the [sampling] table, if given
        seed: Seed from the [sampling] table, if given
    """
    space: HyperparameterSpace
    m: Optional[int] = None
    seed: Optional[int] = None


def _lookup(table: Mapping[str, Any], name: str, key: str, options: Mapping[str, Any]) -> Any:
    label = table[key]
    if not isinstance(label, str) or label not in options:
        raise DomainError(f"Parameter {name}: unknown {key} {label!r}. Choose from {sorted(options)}")
    return options[label]


def _require(decl: Mapping[str, Any], name: str, *keys: str) -> None:
    missing = [k for k in keys if k not in decl]
    if missing:
        raise DomainError(f"Parameter {name}: missing required keys {missing}")


def _base_scale(decl: Mapping[str, Any], name: str) -> Scale:
    kind = decl.get("scale")
    dtype = _lookup(decl, name, "dtype", DTYPES) if "dtype" in decl else None

    def convert(value: Any) -> Any:
        return dtype(value) if dtype is not None else value

    if kind == "constant":
        _require(decl, name, "value")
        return constant(convert(decl["value"]))

    if kind == "discrete":
        _require(decl, name, "values")
        return discrete([convert(v) for v in decl["values"]])

    if kind in ("minmax", "linear"):
        _require(decl, name, "min", "max")
        return minmax(convert(decl["min"]), convert(decl["max"]))

    if kind in ("geometric", "geo", "log"):
        _require(decl, name, "min", "max")
        return geometric(
            convert(decl["min"]),
            convert(decl["max"]),
            base=decl.get("base", 10),
            bias=decl.get("bias", 1.0),
        )

    if kind == "mixture":
        _require(decl, name, "components")
        components = []
        for i, component in enumerate(decl["components"]):
            _require(component, f"{name}.components[{i}]", "proportion")
            components.append((component["proportion"], scale_from_dict(component, f"{name}.components[{i}]")))
        return mixture(
            components,
            normalize=decl.get("normalize", True),
            atol=decl.get("atol", MIXTURE_ATOL),
        )

    raise DomainError(f"Parameter {name}: unknown scale {kind!r}. Choose from {list(SCALE_KINDS)}")


def scale_from_dict(decl: Mapping[str, Any], name: str = "<scale>") -> Scale:
    """Build a Scale from its declaration table.

    Recognized keys: ``scale`` (the variant), its arguments, ``dtype`` for
    the bound/value type, and optional ``round`` then ``cast`` steps applied
    after the scale.

    Args:
        decl: Declaration table
        name: Parameter name, used in error messages

    Returns:
        The declared Scale

    Raises:
        DomainError: If the declaration is malformed
    """
    if not isinstance(decl, Mapping):
        raise DomainError(f"Parameter {name}: declaration must be a table, got {type(decl).__name__}")

    scale = _base_scale(decl, name)
    if "round" in decl:
        scale = compose(_lookup(decl, name, "round", ROUNDING), scale)
    if "cast" in decl:
        scale = compose(_lookup(decl, name, "cast", DTYPES), scale)
    return scale


def space_from_dict(document: Mapping[str, Any]) -> SpaceDeclaration:
    """Build a space declaration from a parsed document.

    Args:
        document: Mapping with a ``parameters`` table and optional ``sampling`` table

    Returns:
        SpaceDeclaration with the space and sampling settings
    """
    parameters = document.get("parameters")
    if not isinstance(parameters, Mapping) or not parameters:
        raise DomainError("Space document needs a non-empty [parameters] table")

    space = HyperparameterSpace(
        [(name, scale_from_dict(decl, name)) for name, decl in parameters.items()]
    )

    sampling = document.get("sampling", {})
    if not isinstance(sampling, Mapping):
        raise DomainError("[sampling] must be a table")
    unknown = set(sampling) - {"m", "seed"}
    if unknown:
        raise DomainError(f"Unknown [sampling] keys: {sorted(unknown)}")

    return SpaceDeclaration(space, m=sampling.get("m"), seed=sampling.get("seed"))


def load_space(path: Union[str, Path]) -> SpaceDeclaration:
    """Read a space declaration from a TOML or JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        DomainError: If the file type is unsupported or the content is malformed
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".toml":
        with open(path, "rb") as f:
            try:
                document = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise DomainError(f"Invalid TOML in {path}: {e}") from e
    elif suffix == ".json":
        with open(path, "r", encoding="utf-8") as f:
            try:
                document = json.load(f)
            except json.JSONDecodeError as e:
                raise DomainError(f"Invalid JSON in {path}: {e}") from e
    else:
        raise DomainError(f"Unsupported space file type {suffix!r}; use .toml or .json")

    declaration = space_from_dict(document)
    logger.info(f"Loaded {len(declaration.space)} parameters from {path}")
    return declaration
