"""Scale constructors.

Each constructor validates its arguments once and returns an immutable
Scale whose transform is a small frozen dataclass, so equal arguments give
equal scales.
"""

import logging
import math
import numbers
from dataclasses import dataclass, field
from typing import Any, Sequence, Tuple

import numpy as np

from ..errors import DomainError, ScaleTypeError
from .types import UNTYPED, Scale, floating_type, promote_types, type_name

logger = logging.getLogger(__name__)


def _check_real(name: str, value: Any) -> float:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise DomainError(f"{name} must be a real number, got {value!r}")
    as_float = float(value)
    if not math.isfinite(as_float):
        raise DomainError(f"{name} must be finite, got {value!r}")
    return as_float


def _check_bounds(kind: str, xmin: Any, xmax: Any) -> Tuple[float, float]:
    lo = _check_real(f"{kind} xmin", xmin)
    hi = _check_real(f"{kind} xmax", xmax)
    if lo > hi:
        raise DomainError(f"{kind}: xmin ({xmin}) > xmax ({xmax})")
    return lo, hi


def _bounds_type(kind: str, xmin: Any, xmax: Any) -> Any:
    try:
        return floating_type(promote_types(type(xmin), type(xmax)))
    except ScaleTypeError as e:
        raise DomainError(f"{kind} bounds must be real numbers: {e}") from e


@dataclass(frozen=True)
class Rescaler:
    """Affine map from [xmin, xmax] to [xminnew, xmaxnew].

    The image is interpolated as ``xminnew * (1 - t) + xmaxnew * t`` so that
    bounds near the largest double never overflow to ``inf`` in a difference.
    The result is clamped to the target interval before being converted to
    ``output_type``, so rounding never produces a value outside it.

    Attributes:
        xmin: Lower bound of the source interval
        xmax: Upper bound of the source interval
        xminnew: Image of xmin
        xmaxnew: Image of xmax
        output_type: Type of returned values
    """
    xmin: float
    xmax: float
    xminnew: float
    xmaxnew: float
    output_type: Any = float
    _span: float = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        """Validate the source interval and precompute its half width."""
        if self.xmax == self.xmin:
            raise DomainError(f"Rescaler source interval is empty: [{self.xmin}, {self.xmax}]")
        object.__setattr__(self, '_span', float(self.xmax) / 2 - float(self.xmin) / 2)

    def _target_bounds(self) -> Tuple[float, float]:
        lo, hi = float(self.xminnew), float(self.xmaxnew)
        return (lo, hi) if lo <= hi else (hi, lo)

    def _position(self, x: Any) -> Any:
        return (x / 2 - float(self.xmin) / 2) / self._span

    def __call__(self, x: Any) -> Any:
        lo, hi = self._target_bounds()
        if isinstance(x, np.ndarray):
            t = self._position(x.astype(np.float64))
            out = float(self.xminnew) * (1.0 - t) + float(self.xmaxnew) * t
            if np.isnan(out).any():
                raise DomainError(f"Rescaler cannot map NaN coordinates onto [{lo}, {hi}]")
            return np.clip(out, lo, hi).astype(self.output_type)

        t = self._position(float(x))
        out = float(self.xminnew) * (1.0 - t) + float(self.xmaxnew) * t
        return self.output_type(_clamp(out, lo, hi))


def _clamp(value: float, lo: float, hi: float) -> float:
    if math.isnan(value):
        raise DomainError(f"Cannot clamp NaN to [{lo}, {hi}]")
    return min(max(value, lo), hi)


@dataclass(frozen=True)
class ConstantTransform:
    """Ignores its input and returns ``value``."""
    value: Any

    def __call__(self, x: Any) -> Any:
        return self.value


@dataclass(frozen=True)
class DiscreteTransform:
    """Equal-weight map of [0, 1] onto ``values``.

    ``u`` selects ``values[ceil(u * n) - 1]`` with the index clamped to the
    valid range; ``u == 0`` selects the first value.
    """
    values: Tuple[Any, ...]

    def __call__(self, x: Any) -> Any:
        n = len(self.values)
        u = float(x)
        # ceil(0) == 0 would fall off the front
        if u <= 0.0:
            return self.values[0]
        index = min(max(math.ceil(u * n), 1), n)
        return self.values[index - 1]


@dataclass(frozen=True)
class GeometricTransform:
    """Geometric progression from xmin to xmax.

    Equal steps in ``u`` multiply ``(value - xmin) + (xmax - xmin) / (base - 1)``
    by a constant factor. ``bias`` warps ``u`` to ``u ** bias`` first, which
    keeps both endpoints fixed.
    """
    xmin: float
    xmax: float
    base: float = 10.0
    bias: float = 1.0
    output_type: Any = float

    def __call__(self, x: Any) -> Any:
        u = min(max(float(x), 0.0), 1.0) ** self.bias
        if self.base == 1:
            g = u
        else:
            g = (self.base ** u - 1) / (self.base - 1)
        # weighted form: xmax - xmin overflows for bounds near the float limit
        out = self.xmin * (1.0 - g) + self.xmax * g
        return self.output_type(_clamp(out, self.xmin, self.xmax))


def constant(value: Any) -> Scale:
    """Scale that always returns ``value``."""
    return Scale(type(value), ConstantTransform(value), kind="constant")


def discrete(values: Sequence[Any]) -> Scale:
    """Scale assigning equal weight to each of ``values``.

    The output type is the common type of the values (see ``promote_types``);
    values of unrelated types give an untyped scale.

    Args:
        values: Non-empty sequence of choices

    Returns:
        Scale over the choices

    Raises:
        DomainError: If values is empty
    """
    choices = tuple(values)
    if not choices:
        raise DomainError("discrete scale requires at least one value")

    output_type = promote_types(*(type(v) for v in choices))
    if output_type is UNTYPED:
        logger.debug(f"Discrete scale over {len(choices)} values of mixed types is untyped")
    return Scale(output_type, DiscreteTransform(choices), kind="discrete")


def minmax(xmin: Any, xmax: Any) -> Scale:
    """Scale mapping [0, 1] linearly onto [xmin, xmax].

    The output type follows the bounds: ``np.float32`` bounds give
    ``np.float32`` values, integer bounds are promoted to floating point.

    Raises:
        DomainError: If a bound is not finite or xmin > xmax
    """
    output_type = _bounds_type("minmax", xmin, xmax)
    lo, hi = _check_bounds("minmax", xmin, xmax)
    return Scale(output_type, Rescaler(0.0, 1.0, lo, hi, output_type), kind="minmax")


def geometric(xmin: Any, xmax: Any, base: Any = 10, bias: Any = 1.0) -> Scale:
    """Scale mapping [0, 1] onto [xmin, xmax] as a geometric progression.

    Args:
        xmin: Lower bound, reached at u = 0
        xmax: Upper bound, reached at u = 1
        base: Growth base; 1 gives the linear map
        bias: Exponent applied to u first; > 1 concentrates values near xmin

    Returns:
        Scale with the floating type of the bounds

    Raises:
        DomainError: If bounds, base or bias are invalid
    """
    output_type = _bounds_type("geometric", xmin, xmax)
    lo, hi = _check_bounds("geometric", xmin, xmax)

    base_value = _check_real("geometric base", base)
    if base_value <= 0:
        raise DomainError(f"geometric base must be > 0, got {base}")

    bias_value = _check_real("geometric bias", bias)
    if bias_value <= 0:
        raise DomainError(f"geometric bias must be > 0, got {bias}")

    if lo < 0:
        logger.warning(
            f"geometric scale used with negative xmin={xmin}; values are spread "
            f"geometrically relative to xmin, not around zero"
        )

    transform = GeometricTransform(lo, hi, base_value, bias_value, output_type)
    logger.debug(f"geometric scale [{lo}, {hi}] base={base_value} bias={bias_value} -> {type_name(output_type)}")
    return Scale(output_type, transform, kind="geometric")
