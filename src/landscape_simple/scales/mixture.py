"""Weighted mixtures of scales.

A mixture splits [0, 1] into consecutive bins, one per component, whose
widths are the component proportions. A coordinate is routed to the bin it
falls in and rescaled to [0, 1) inside that bin before being handed to the
component scale. Bins are half-open ``[l, u)`` except the last, which is
closed so that ``u = 1`` is covered.
"""

import bisect
import logging
import math
import numbers
from dataclasses import dataclass
from typing import Any, Iterable, Tuple

import numpy as np

from ..constants import MIXTURE_ATOL
from ..errors import DomainError, ScaleTypeError
from .types import Scale, promote_types, type_name

logger = logging.getLogger(__name__)

_EPS = float(np.finfo(np.float64).eps)


@dataclass(frozen=True)
class MixtureTransform:
    """Routes a coordinate to one of several component scales.

    Attributes:
        proportions: Normalized bin widths, one per component
        edges: Cumulative upper bin edges; the last is exactly 1.0
        components: Component scales in bin order
    """
    proportions: Tuple[float, ...]
    edges: Tuple[float, ...]
    components: Tuple[Scale, ...]

    def locate(self, u: Any) -> Tuple[int, float]:
        """Find the bin containing ``u`` and the local coordinate inside it.

        Coordinates within one machine epsilon of 0 or 1 are assigned to the
        first or last bin. The local coordinate is kept strictly below 1.

        Args:
            u: Coordinate in [0, 1]

        Returns:
            Tuple of (component index, local coordinate in [0, 1))
        """
        value = float(u)
        last = len(self.components) - 1

        if value <= _EPS:
            index, value = 0, max(value, 0.0)
        elif value >= 1.0 - _EPS:
            index, value = last, min(value, 1.0)
        else:
            index = min(bisect.bisect_right(self.edges, value), last)

        lower = 0.0 if index == 0 else self.edges[index - 1]
        upper = self.edges[index]
        local = min(max((value - lower) / (upper - lower), 0.0), 1.0)
        if local >= 1.0:
            local = 1.0 - _EPS
        return index, local

    def __call__(self, u: Any) -> Any:
        index, local = self.locate(u)
        return self.components[index](local)


def _check_proportion(index: int, proportion: Any) -> float:
    if isinstance(proportion, (bool, np.bool_)) or not isinstance(proportion, numbers.Real):
        raise DomainError(f"Mixture proportion {index} must be a real number, got {proportion!r}")
    value = float(proportion)
    if not math.isfinite(value) or value <= 0:
        raise DomainError(f"Mixture proportion {index} must be finite and > 0, got {proportion!r}")
    return value


def mixture(
    components: Iterable[Tuple[Any, Scale]],
    normalize: bool = True,
    atol: float = MIXTURE_ATOL,
) -> Scale:
    """Build a scale that picks among component scales by proportion.

    Args:
        components: Ordered (proportion, scale) pairs
        normalize: Rescale proportions to sum to 1; if False they must
            already sum to 1 within ``atol``
        atol: Tolerance of the sum-to-one check

    Returns:
        Scale whose output type is the common type of the components

    Raises:
        DomainError: If there are no components, a proportion is not finite
            and positive, proportions do not sum to 1 (with normalize=False),
            or a bin collapses to zero width
        ScaleTypeError: If a component is not a Scale

    Example:
        >>> mix = mixture([(0.2, constant(0.0)), (0.8, minmax(0.1, 0.6))])
        >>> mix(0.1)
        0.0
    """
    pairs = list(components)
    if not pairs:
        raise DomainError("Mixture requires at least one component")

    if isinstance(atol, bool) or not isinstance(atol, numbers.Real) or not atol >= 0:
        raise DomainError(f"Mixture atol must be a non-negative number, got {atol!r}")

    proportions = []
    scales = []
    for i, pair in enumerate(pairs):
        try:
            proportion, scale = pair
        except (TypeError, ValueError) as e:
            raise DomainError(f"Mixture component {i} must be a (proportion, scale) pair") from e
        if not isinstance(scale, Scale):
            raise ScaleTypeError(
                f"Mixture component {i} must be a Scale, got {type(scale).__name__}"
            )
        proportions.append(_check_proportion(i, proportion))
        scales.append(scale)

    total = math.fsum(proportions)
    if normalize:
        proportions = [p / total for p in proportions]
    elif abs(total - 1.0) > atol:
        raise DomainError(
            f"Mixture proportions sum to {total}, expected 1 within {atol} "
            f"(pass normalize=True to rescale)"
        )

    edges = np.cumsum(proportions)
    # Absorb round-off so the last bin always ends at exactly 1
    edges[-1] = 1.0
    widths = np.diff(edges, prepend=0.0)
    if np.any(widths <= 0):
        collapsed = [i for i, w in enumerate(widths) if w <= 0]
        raise DomainError(f"Mixture bins {collapsed} have zero width after normalization")

    output_type = promote_types(*(s.output_type for s in scales))
    transform = MixtureTransform(
        tuple(proportions),
        tuple(float(e) for e in edges),
        tuple(scales),
    )
    logger.debug(f"Mixture of {len(scales)} scales with edges {transform.edges} -> {type_name(output_type)}")
    return Scale(output_type, transform, kind="mixture")
