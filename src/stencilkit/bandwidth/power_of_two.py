"""Decorators that round bandwidths up to powers of two.

With ``h`` a power of two, ``x + k * h`` is computed without representation
error for a wide range of ``x``, so the differences taken by the stencil
carry less cancellation error.

Examples:
---------
>>> from stencilkit.bandwidth.power_of_two import round_up_to_power_of_two
>>> round_up_to_power_of_two(0.3)
0.5
>>> round_up_to_power_of_two(0.25)
0.25
"""

from __future__ import annotations

import math
import sys

import numpy as np
from numpy.typing import ArrayLike, NDArray

from stencilkit.bandwidth.base import (
    MultivariateBandwidthStrategy,
    UnivariateBandwidthStrategy,
    require_strategy,
)
from stencilkit.exceptions import BandwidthOverflowError
from stencilkit.stencil.descriptor import (
    MultivariateStencilDescriptor,
    StencilDescriptor,
)
from stencilkit.utils.types import MultivariateFunction, UnivariateFunction
from stencilkit.utils.validate import require_positive

__all__ = [
    "round_up_to_power_of_two",
    "PowerOfTwoUnivariateBandwidthStrategy",
    "PowerOfTwoMultivariateBandwidthStrategy",
]

_MIN_NORMAL = sys.float_info.min


def round_up_to_power_of_two(value: float) -> float:
    """Returns the smallest power of two greater than or equal to ``value``.

    Subnormal inputs round to the smallest normal float. Powers of two are
    returned unchanged.

    Args:
        value: A finite, strictly positive bandwidth.

    Returns:
        The rounded bandwidth.

    Raises:
        ValidationError: If ``value`` is not finite and strictly positive.
        BandwidthOverflowError: If the next power of two is not representable.
    """
    v = require_positive(value, "bandwidth")
    if v < _MIN_NORMAL:
        return _MIN_NORMAL

    mantissa, exponent = math.frexp(v)
    if mantissa == 0.5:
        return v
    if exponent >= sys.float_info.max_exp:
        raise BandwidthOverflowError(
            f"no power of two >= {v!r} is representable as a float."
        )
    return math.ldexp(1.0, exponent)


class PowerOfTwoUnivariateBandwidthStrategy:
    """Rounds the bandwidth of a wrapped strategy up to a power of two.

    Attributes:
        underlying_strategy: The wrapped strategy.
    """

    def __init__(self, underlying_strategy: UnivariateBandwidthStrategy) -> None:
        """Initialises the decorator.

        Raises:
            ValidationError: If ``underlying_strategy`` is missing or lacks
                ``get_bandwidth``.
        """
        self.underlying_strategy = require_strategy(
            underlying_strategy, UnivariateBandwidthStrategy, "underlying_strategy"
        )

    def get_bandwidth(
        self,
        function: UnivariateFunction,
        descriptor: StencilDescriptor,
        x: float,
    ) -> float:
        h = self.underlying_strategy.get_bandwidth(function, descriptor, x)
        return round_up_to_power_of_two(h)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.underlying_strategy!r})"


class PowerOfTwoMultivariateBandwidthStrategy:
    """Rounds each entry of a wrapped strategy's bandwidth vector up to a power of two."""

    def __init__(self, underlying_strategy: MultivariateBandwidthStrategy) -> None:
        """Initialises the decorator.

        Raises:
            ValidationError: If ``underlying_strategy`` is missing or lacks
                ``get_bandwidth_vector``.
        """
        self.underlying_strategy = require_strategy(
            underlying_strategy, MultivariateBandwidthStrategy, "underlying_strategy"
        )

    def get_bandwidth_vector(
        self,
        function: MultivariateFunction,
        descriptor: MultivariateStencilDescriptor,
        point: ArrayLike,
    ) -> NDArray[np.float64]:
        h = self.underlying_strategy.get_bandwidth_vector(function, descriptor, point)
        return np.array([round_up_to_power_of_two(v) for v in np.ravel(h)], dtype=float)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.underlying_strategy!r})"
