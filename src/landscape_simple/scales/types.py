"""Typed scales for the hyperparameter landscape.

A scale maps a coordinate ``u`` in [0, 1] to a parameter value and declares
the type of the values it produces. Key pieces:
- Scale: the (output_type, transform) pair; calling it coerces the result
- UNTYPED: explicit marker for scales whose output type is not known
- promote_types: common type of several scalar types
- coerce: checked conversion of a value to a declared output type
- infer_output_type / compose: post-processing with output type inference

Scales are immutable so that one declaration can be evaluated any number of
times, in any order, with identical results.
"""

import logging
import math
import numbers
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

import numpy as np

from ..errors import ScaleTypeError

logger = logging.getLogger(__name__)

# Output type of scales whose values may have any type.
UNTYPED = Any


def is_integer_type(output_type: Any) -> bool:
    """True for Python and NumPy integer types (booleans excluded)."""
    return (
        isinstance(output_type, type)
        and issubclass(output_type, (int, np.integer))
        and not issubclass(output_type, (bool, np.bool_))
    )


def is_float_type(output_type: Any) -> bool:
    """True for Python and NumPy floating point types."""
    return isinstance(output_type, type) and issubclass(output_type, (float, np.floating))


def type_name(output_type: Any) -> str:
    """Human-readable name of an output type."""
    if output_type is UNTYPED:
        return "untyped"
    return getattr(output_type, "__name__", repr(output_type))


def promote_types(*types: Any) -> Any:
    """Return the common type of the given scalar types.

    Identical types promote to themselves. Numeric types promote following
    NumPy rules, except that a mix of Python ``int`` and ``float`` stays a
    Python ``float``. Anything else has no common type and yields UNTYPED.

    Examples:
        >>> promote_types(int, int)
        <class 'int'>
        >>> promote_types(np.float32, np.float64)
        <class 'numpy.float64'>
        >>> promote_types(str, int) is UNTYPED
        True
    """
    if not types or any(t is UNTYPED for t in types):
        return UNTYPED

    first = types[0]
    if all(t is first for t in types):
        return first

    if all(is_integer_type(t) or is_float_type(t) for t in types):
        if all(t in (int, float) for t in types):
            return float
        return np.result_type(*types).type

    return UNTYPED


def floating_type(output_type: Any) -> Any:
    """Floating point type able to hold values of a numeric type."""
    if is_float_type(output_type):
        return output_type
    if output_type is int:
        return float
    if is_integer_type(output_type):
        return np.float64
    raise ScaleTypeError(f"Expected a real number type, got {type_name(output_type)}")


def _to_integer(value: Any, output_type: type) -> Any:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise ScaleTypeError(
            f"Cannot represent {value!r} ({type(value).__name__}) as {type_name(output_type)}"
        )

    if isinstance(value, numbers.Integral):
        integral = int(value)
    else:
        as_float = float(value)
        if not math.isfinite(as_float) or not as_float.is_integer():
            raise ScaleTypeError(
                f"Cannot represent {value!r} exactly as {type_name(output_type)}"
            )
        integral = int(as_float)

    if issubclass(output_type, np.integer):
        info = np.iinfo(output_type)
        if not info.min <= integral <= info.max:
            raise ScaleTypeError(
                f"{integral} is outside the range [{info.min}, {info.max}] "
                f"of {type_name(output_type)}"
            )

    return output_type(integral)


def _to_float(value: Any, output_type: type) -> Any:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise ScaleTypeError(
            f"Cannot represent {value!r} ({type(value).__name__}) as {type_name(output_type)}"
        )

    try:
        source_finite = math.isfinite(value)
        with np.errstate(over="ignore"):
            converted = output_type(value)
    except OverflowError as e:
        raise ScaleTypeError(f"{value!r} overflows {type_name(output_type)}") from e

    if source_finite and not math.isfinite(converted):
        raise ScaleTypeError(f"{value!r} overflows {type_name(output_type)}")

    return converted


def coerce(value: Any, output_type: Any) -> Any:
    """Convert a value to a declared output type, failing loudly.

    Integer targets only accept integral values inside the target range.
    Floating targets accept any real number whose magnitude fits. Other
    targets require the value to already be an instance of the type.

    Args:
        value: Value produced by a scale transform
        output_type: Declared output type (or UNTYPED)

    Returns:
        The value with runtime type ``output_type``

    Raises:
        ScaleTypeError: If the value cannot be represented without loss
    """
    if output_type is UNTYPED or type(value) is output_type:
        return value

    if is_integer_type(output_type):
        return _to_integer(value, output_type)

    if is_float_type(output_type):
        return _to_float(value, output_type)

    if isinstance(value, output_type):
        return value

    raise ScaleTypeError(
        f"Cannot represent {value!r} ({type(value).__name__}) as {type_name(output_type)}"
    )


@dataclass(frozen=True)
class Scale:
    """Typed mapping from a coordinate in [0, 1] to a parameter value.

    The transform must be total on the closed interval [0, 1]. Calling the
    scale evaluates the transform and coerces the result to ``output_type``,
    so every value leaving a scale has exactly the declared type.

    Attributes:
        output_type: Declared type of produced values, or UNTYPED
        transform: Pure function [0, 1] -> value
        kind: Short label of the scale variant (e.g. "minmax")
        note: Why the output type is UNTYPED, when it was inferred and not declared
    """
    output_type: Any
    transform: Callable[[float], Any]
    kind: str = "custom"
    note: Optional[str] = None

    def __post_init__(self):
        """Validate the output type and transform."""
        if not callable(self.transform):
            raise ScaleTypeError(f"Scale transform must be callable, got {type(self.transform).__name__}")
        if self.output_type is not UNTYPED and not isinstance(self.output_type, type):
            raise ScaleTypeError(f"Scale output type must be a type or UNTYPED, got {self.output_type!r}")

    @property
    def is_typed(self) -> bool:
        """Whether the scale declares a concrete output type."""
        return self.output_type is not UNTYPED

    def __call__(self, u: float) -> Any:
        """Evaluate the scale at ``u`` and coerce to the output type."""
        return coerce(self.transform(u), self.output_type)

    def then(self, func: Callable[[Any], Any]) -> "Scale":
        """Post-process this scale's values with ``func``."""
        return compose(func, self)

    def describe(self) -> Dict[str, Any]:
        """Serializable summary of the scale."""
        summary = {"kind": self.kind, "type": type_name(self.output_type)}
        if self.note:
            summary["note"] = self.note
        return summary


def _func_name(func: Callable) -> str:
    return getattr(func, "__name__", type(func).__name__)


def infer_output_type(func: Callable[[Any], Any], input_type: Any) -> Tuple[Any, Optional[str]]:
    """Infer the output type of ``func`` applied to values of ``input_type``.

    The function is evaluated once at the zero element ``input_type()``. The
    result is either a concrete type (and no note) or UNTYPED together with
    the reason that evaluation failed.

    Args:
        func: Post-processing function
        input_type: Output type of the wrapped scale

    Returns:
        Tuple of (inferred type or UNTYPED, reason or None)
    """
    if input_type is UNTYPED:
        return UNTYPED, "wrapped scale is untyped"

    try:
        zero = input_type()
    except (TypeError, ValueError) as e:
        return UNTYPED, f"{type_name(input_type)} has no zero element ({e})"

    try:
        result = func(zero)
    except (TypeError, ValueError, ArithmeticError, LookupError) as e:
        return UNTYPED, f"{_func_name(func)}({zero!r}) raised {type(e).__name__}: {e}"

    return type(result), None


@dataclass(frozen=True)
class Composed:
    """Transform applying ``func`` to the typed output of ``inner``."""
    func: Callable[[Any], Any]
    inner: Scale

    def __call__(self, u: float) -> Any:
        return self.func(self.inner(u))


def _compose_one(func: Callable[[Any], Any], scale: Scale) -> Scale:
    if not callable(func):
        raise ScaleTypeError(f"Cannot compose non-callable {func!r} with a scale")

    output_type, note = infer_output_type(func, scale.output_type)
    if note:
        logger.debug(f"Composed scale {_func_name(func)} falls back to untyped output: {note}")

    return Scale(output_type, Composed(func, scale), kind="composed", note=note)


def compose(*parts: Any) -> Scale:
    """Compose post-processing functions with a scale.

    The last argument is the scale; the functions before it are applied
    right to left, so ``compose(int, math.ceil, scale)`` evaluates
    ``int(math.ceil(scale(u)))``. The output type of each step is inferred
    with ``infer_output_type``.

    Args:
        *parts: Functions followed by the scale they post-process

    Returns:
        The composed Scale

    Raises:
        ScaleTypeError: If the last argument is not a Scale or a function is not callable

    Example:
        >>> steps = compose(int, math.ceil, geometric(1.0, 10.0))
        >>> steps.output_type
        <class 'int'>
    """
    if not parts or not isinstance(parts[-1], Scale):
        raise ScaleTypeError("compose() expects functions followed by a Scale")

    *funcs, scale = parts
    for func in reversed(funcs):
        scale = _compose_one(func, scale)
    return scale
