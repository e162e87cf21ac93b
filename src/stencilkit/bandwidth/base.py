"""Interfaces shared by the bandwidth strategies.

A bandwidth strategy decides the grid spacing ``h`` used when a stencil is
evaluated at a point. Strategies are plain objects that implement one of
the two protocols below; decorators such as the power-of-two rounding wrap
another strategy by composition.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from stencilkit.exceptions import ValidationError
from stencilkit.stencil.descriptor import (
    MultivariateStencilDescriptor,
    StencilDescriptor,
)
from stencilkit.utils.types import MultivariateFunction, UnivariateFunction

__all__ = [
    "MACHINE_EPSILON",
    "UnivariateBandwidthStrategy",
    "MultivariateBandwidthStrategy",
    "require_strategy",
]

#: Round-off level of a float64 value.
MACHINE_EPSILON = float(np.finfo(np.float64).eps)


@runtime_checkable
class UnivariateBandwidthStrategy(Protocol):
    """Protocol each univariate bandwidth strategy must satisfy."""

    def get_bandwidth(
        self,
        function: UnivariateFunction,
        descriptor: StencilDescriptor,
        x: float,
    ) -> float:
        """Returns the strictly positive bandwidth to use at ``x``."""
        ...


@runtime_checkable
class MultivariateBandwidthStrategy(Protocol):
    """Protocol each multivariate bandwidth strategy must satisfy."""

    def get_bandwidth_vector(
        self,
        function: MultivariateFunction,
        descriptor: MultivariateStencilDescriptor,
        point: ArrayLike,
    ) -> NDArray[np.float64]:
        """Returns one strictly positive bandwidth per dimension of ``point``."""
        ...


def require_strategy(strategy: object, protocol: type, name: str = "strategy") -> object:
    """Returns ``strategy`` if it implements ``protocol``.

    Raises:
        ValidationError: If ``strategy`` is ``None`` or lacks the protocol method.
    """
    if strategy is None or not isinstance(strategy, protocol):
        raise ValidationError(
            f"{name} must implement {protocol.__name__}; got {type(strategy).__name__}."
        )
    return strategy
