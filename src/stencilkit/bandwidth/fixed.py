"""Bandwidth strategies that always return the same spacing."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from stencilkit.stencil.descriptor import (
    MultivariateStencilDescriptor,
    StencilDescriptor,
)
from stencilkit.utils.types import MultivariateFunction, UnivariateFunction
from stencilkit.utils.validate import (
    as_point_vector,
    check_dimension,
    require_positive,
    require_positive_vector,
)

__all__ = [
    "FixedUnivariateBandwidthStrategy",
    "FixedMultivariateBandwidthStrategy",
]


class FixedUnivariateBandwidthStrategy:
    """Returns a constant bandwidth, whatever the function or point.

    Attributes:
        bandwidth: The strictly positive bandwidth.
    """

    def __init__(self, bandwidth: float) -> None:
        """Initialises the strategy.

        Args:
            bandwidth: The bandwidth to always use.

        Raises:
            ValidationError: If ``bandwidth`` is not finite and strictly positive.
        """
        self.bandwidth = require_positive(bandwidth, "bandwidth")

    def get_bandwidth(
        self,
        function: UnivariateFunction,
        descriptor: StencilDescriptor,
        x: float,
    ) -> float:
        return self.bandwidth

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.bandwidth!r})"


class FixedMultivariateBandwidthStrategy:
    """Returns a constant bandwidth vector, one entry per dimension."""

    def __init__(self, bandwidth: ArrayLike) -> None:
        """Initialises the strategy.

        Args:
            bandwidth: One bandwidth per dimension. The values are copied.

        Raises:
            ValidationError: If ``bandwidth`` is empty or has an entry that is
                not finite and strictly positive.
        """
        self._vector = require_positive_vector(bandwidth, "bandwidth")
        self._vector.setflags(write=False)

    @property
    def vector(self) -> NDArray[np.float64]:
        """A copy of the bandwidth vector."""
        return self._vector.copy()

    def get_bandwidth_vector(
        self,
        function: MultivariateFunction,
        descriptor: MultivariateStencilDescriptor,
        point: ArrayLike,
    ) -> NDArray[np.float64]:
        """Returns a copy of the fixed vector.

        Raises:
            DimensionMismatchError: If ``point`` or ``descriptor`` do not have
                as many dimensions as the fixed vector.
        """
        p = as_point_vector(point)
        check_dimension(p.size, self._vector.size, "point dimension")
        if descriptor is not None:
            check_dimension(descriptor.dimension, self._vector.size, "descriptor dimension")
        return self._vector.copy()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._vector.tolist()!r})"
