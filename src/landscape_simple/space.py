"""Hyperparameter spaces and configuration records.

This module implements the two containers of the sampling pipeline:
- HyperparameterSpace: ordered, immutable mapping of parameter name to Scale
- Configuration: immutable, labeled assignment of one value per parameter

Declaration order is kept everywhere so records list their fields in the
order the space declares them.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Tuple, Union

from .errors import DomainError, ScaleTypeError
from .scales import Scale


@dataclass(frozen=True)
class HyperparameterSpace:
    """Ordered declaration of the dimensions to sample.

    The space is immutable - dimensions cannot be added or removed after
    creation. Each dimension occupies a fixed row of the sample matrix,
    given by its position in the declaration.

    Attributes:
        dimensions: Mapping (or sequence of pairs) from name to Scale

    Example:
        >>> space = HyperparameterSpace.new(
        ...     layers=discrete([2, 4, 8]),
        ...     lr=geometric(1e-4, 1e-1),
        ... )
        >>> space.names()
        ['layers', 'lr']
    """
    dimensions: Union[Mapping[str, Scale], List[Tuple[str, Scale]]]

    def __post_init__(self):
        """Validate names and scales, then freeze the mapping."""
        if isinstance(self.dimensions, Mapping):
            items = list(self.dimensions.items())
        else:
            items = list(self.dimensions)

        names = [name for name, _ in items]
        if len(names) != len(set(names)):
            duplicates = [n for n in names if names.count(n) > 1]
            raise DomainError(f"Duplicate parameter names: {set(duplicates)}")

        for name, scale in items:
            if not isinstance(name, str) or not name:
                raise DomainError(f"Parameter names must be non-empty strings, got {name!r}")
            if not isinstance(scale, Scale):
                raise ScaleTypeError(
                    f"Parameter {name} must be declared with a Scale, got {type(scale).__name__}"
                )

        object.__setattr__(self, 'dimensions', MappingProxyType(dict(items)))

    @classmethod
    def new(cls, **scales: Scale) -> 'HyperparameterSpace':
        """Create a space from keyword arguments, in argument order."""
        return cls(scales)

    def __reduce__(self):
        # mappingproxy cannot be pickled; rebuild from plain pairs
        return (type(self), (list(self.dimensions.items()),))

    def names(self) -> List[str]:
        """Get ordered list of parameter names."""
        return list(self.dimensions)

    def get_scale(self, name: str) -> Scale:
        """Get the scale of a parameter.

        Raises:
            KeyError: If parameter not in space
        """
        if name not in self.dimensions:
            raise KeyError(f"Unknown parameter: {name}. Available: {self.names()}")
        return self.dimensions[name]

    def scales(self) -> List[Scale]:
        """Get scales in declaration order."""
        return list(self.dimensions.values())

    def output_types(self) -> Dict[str, Any]:
        """Declared output type of each parameter."""
        return {name: scale.output_type for name, scale in self.dimensions.items()}

    def __contains__(self, name: str) -> bool:
        return name in self.dimensions

    def __len__(self) -> int:
        return len(self.dimensions)

    def __iter__(self) -> Iterator[str]:
        return iter(self.dimensions)

    def describe(self) -> Dict[str, Any]:
        """Export the space as a serializable dictionary."""
        return {
            "parameters": [
                {"name": name, **scale.describe()}
                for name, scale in self.dimensions.items()
            ]
        }


@dataclass(frozen=True)
class Configuration:
    """One fully-instantiated assignment of values to all parameters.

    Values are reachable by key (``config["lr"]``) or attribute
    (``config.lr``) and are frozen after construction.

    Attributes:
        values: Mapping of parameter names to values, in declaration order
    """
    values: Mapping[str, Any]

    def __post_init__(self):
        """Freeze the values mapping."""
        object.__setattr__(self, 'values', MappingProxyType(dict(self.values)))

    def __getitem__(self, name: str) -> Any:
        if name not in self.values:
            raise KeyError(f"Parameter {name} not in configuration. Available: {list(self.values)}")
        return self.values[name]

    def __getattr__(self, name: str) -> Any:
        # Only reached when regular attribute lookup fails
        try:
            values = object.__getattribute__(self, 'values')
        except AttributeError:
            raise AttributeError(name) from None
        if name in values:
            return values[name]
        raise AttributeError(f"Configuration has no parameter {name!r}. Available: {list(values)}")

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        return iter(self.values.items())

    def __len__(self) -> int:
        return len(self.values)

    def __reduce__(self):
        return (type(self), (dict(self.values),))

    def __hash__(self) -> int:
        return hash(tuple(self.values.items()))

    def names(self) -> List[str]:
        """Parameter names in declaration order."""
        return list(self.values)

    def as_tuple(self) -> Tuple[Any, ...]:
        """Values in declaration order."""
        return tuple(self.values.values())

    def to_dict(self) -> Dict[str, Any]:
        """Export values as a regular dict."""
        return dict(self.values)

    def __repr__(self) -> str:
        items = [f"{k}={v!r}" for k, v in self.values.items()]
        return f"Configuration({', '.join(items)})"
