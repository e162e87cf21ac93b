"""Multivariate bandwidths chosen one axis at a time.

Each entry of the bandwidth vector is chosen by a univariate strategy applied
to the slice of the function through the point along that axis, with that
axis' stencil. This lets the rule-of-thumb and adaptive strategies serve
multivariate derivatives.

Examples:
---------
>>> import numpy as np
>>> from stencilkit.bandwidth.axis_wise import AxisWiseMultivariateBandwidthStrategy
>>> from stencilkit.bandwidth.fixed import FixedUnivariateBandwidthStrategy
>>> from stencilkit.stencil.descriptor import (
...     THREE_POINT_CENTRAL, MultivariateStencilDescriptor,
... )
>>> strategy = AxisWiseMultivariateBandwidthStrategy(FixedUnivariateBandwidthStrategy(0.5))
>>> descriptor = MultivariateStencilDescriptor(THREE_POINT_CENTRAL, THREE_POINT_CENTRAL)
>>> strategy.get_bandwidth_vector(np.sum, descriptor, [1.0, 2.0])
array([0.5, 0.5])
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from stencilkit.bandwidth.base import (
    UnivariateBandwidthStrategy,
    require_strategy,
)
from stencilkit.stencil.descriptor import MultivariateStencilDescriptor
from stencilkit.utils.sandbox import get_partial_function
from stencilkit.utils.types import MultivariateFunction
from stencilkit.utils.validate import (
    as_point_vector,
    check_dimension,
    require_positive,
)

__all__ = ["AxisWiseMultivariateBandwidthStrategy"]


class AxisWiseMultivariateBandwidthStrategy:
    """Applies a univariate strategy along each axis of a multivariate stencil.

    Attributes:
        univariate_strategy: The strategy consulted once per axis.
    """

    def __init__(self, univariate_strategy: UnivariateBandwidthStrategy) -> None:
        """Initialises the strategy.

        Raises:
            ValidationError: If ``univariate_strategy`` is missing or lacks
                ``get_bandwidth``.
        """
        self.univariate_strategy = require_strategy(
            univariate_strategy, UnivariateBandwidthStrategy, "univariate_strategy"
        )

    def get_bandwidth_vector(
        self,
        function: MultivariateFunction,
        descriptor: MultivariateStencilDescriptor,
        point: ArrayLike,
    ) -> NDArray[np.float64]:
        """Returns one bandwidth per axis.

        Raises:
            DimensionMismatchError: If ``point`` does not match the stencil
                dimension.
            ValidationError: If a per-axis bandwidth is not finite and
                strictly positive.
        """
        p = as_point_vector(point)
        check_dimension(p.size, descriptor.dimension, "point dimension")

        out = np.empty(p.size, dtype=float)
        for axis, univariate in enumerate(descriptor):
            partial = get_partial_function(function, axis, p)
            out[axis] = require_positive(
                self.univariate_strategy.get_bandwidth(partial, univariate, float(p[axis])),
                f"bandwidth[{axis}]",
            )
        return out

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.univariate_strategy!r})"
