"""Provides the finite-difference derivative evaluators.

An evaluator binds a function, a stencil descriptor and a bandwidth strategy.
Calling it at a point asks the strategy for a bandwidth, samples the function
on the implied grid and contracts the samples against the cached stencil
coefficients.

Examples:
--------
First derivative of ``sin`` with a fixed bandwidth:

>>> import math
>>> from stencilkit.bandwidth.fixed import FixedUnivariateBandwidthStrategy
>>> from stencilkit.finite.derivative import UnivariateFiniteDifferenceDerivative
>>> from stencilkit.stencil.descriptor import THREE_POINT_CENTRAL
>>> derivative = UnivariateFiniteDifferenceDerivative(
...     math.sin, THREE_POINT_CENTRAL, FixedUnivariateBandwidthStrategy(1e-3)
... )
>>> abs(derivative(0.0) - 1.0) < 1e-6
True

Mixed second derivative of ``x * y``:

>>> import numpy as np
>>> from stencilkit.bandwidth.fixed import FixedMultivariateBandwidthStrategy
>>> from stencilkit.finite.derivative import MultivariateFiniteDifferenceDerivative
>>> from stencilkit.stencil.descriptor import MultivariateStencilDescriptor
>>> mixed = MultivariateFiniteDifferenceDerivative(
...     lambda p: p[0] * p[1],
...     MultivariateStencilDescriptor(THREE_POINT_CENTRAL, THREE_POINT_CENTRAL),
...     FixedMultivariateBandwidthStrategy([1e-3, 1e-3]),
... )
>>> bool(np.isclose(mixed([0.5, 2.0]), 1.0))
True
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from stencilkit.exceptions import ValidationError
from stencilkit.finite.batch_eval import eval_points
from stencilkit.finite.core import evaluate_grid
from stencilkit.logger import stencilkit_logger
from stencilkit.stencil.cache import CoefficientCache, resolve_cache
from stencilkit.stencil.descriptor import (
    MultivariateStencilDescriptor,
    StencilDescriptor,
)
from stencilkit.stencil.row_major import RowMajorIteration
from stencilkit.utils.types import MultivariateFunction, UnivariateFunction
from stencilkit.utils.validate import (
    as_point_vector,
    check_dimension,
    require_positive,
    require_positive_vector,
)

if TYPE_CHECKING:
    from stencilkit.bandwidth.base import (
        MultivariateBandwidthStrategy,
        UnivariateBandwidthStrategy,
    )

__all__ = [
    "UnivariateFiniteDifferenceDerivative",
    "MultivariateFiniteDifferenceDerivative",
]


def _require_callable(function, name: str = "function"):
    if function is None or not callable(function):
        raise ValidationError(f"{name} must be callable; got {type(function).__name__}.")
    return function


def _require_method(strategy, method: str):
    if strategy is None or not callable(getattr(strategy, method, None)):
        raise ValidationError(
            f"bandwidth_strategy must provide {method}(); got {type(strategy).__name__}."
        )
    return strategy


class UnivariateFiniteDifferenceDerivative:
    """Derivative of a function of one real variable.

    The value at ``x`` is ``sum_i c_i f(x + (left + i) h) / h**d``. Grid
    points whose exact coefficient is zero are never sampled, so a central
    first derivative does not evaluate ``f(x)`` itself; this matters for
    functions with a removable singularity at ``x``.

    Attributes:
        function: The function to differentiate.
        descriptor: The stencil used.
        bandwidth_strategy: Decides ``h`` at each point.
        cache: The coefficient cache.
        n_workers: Threads used to sample the grid.
    """

    def __init__(
        self,
        function: UnivariateFunction,
        descriptor: StencilDescriptor,
        bandwidth_strategy: UnivariateBandwidthStrategy,
        *,
        cache: CoefficientCache | None = None,
        n_workers: int | None = 1,
    ) -> None:
        """Initialises the evaluator.

        Args:
            function: Callable mapping a float to a float.
            descriptor: The univariate stencil.
            bandwidth_strategy: Object providing ``get_bandwidth``.
            cache: Coefficient cache; the process-wide cache if omitted.
            n_workers: Threads used to sample the grid. ``None`` uses one
                thread per hardware thread.

        Raises:
            ValidationError: If an argument is missing or of the wrong kind.
        """
        if not isinstance(descriptor, StencilDescriptor):
            raise ValidationError(
                f"descriptor must be a StencilDescriptor; got {type(descriptor).__name__}."
            )
        self.function = _require_callable(function)
        self.descriptor = descriptor
        self.bandwidth_strategy = _require_method(bandwidth_strategy, "get_bandwidth")
        self.cache = resolve_cache(cache)
        self.n_workers = n_workers

    def value(self, x: float) -> float:
        """Returns the derivative at ``x`` using the configured bandwidth strategy.

        Raises:
            ValidationError: If the strategy returns a bandwidth that is not
                finite and strictly positive.
        """
        x = float(x)
        h = require_positive(
            self.bandwidth_strategy.get_bandwidth(self.function, self.descriptor, x),
            "bandwidth",
        )
        stencilkit_logger.debug("Using bandwidth %r at x=%r for %r.", h, x, self.descriptor)
        return self.value_with_bandwidth(x, h)

    __call__ = value

    def value_with_bandwidth(self, x: float, bandwidth: float) -> float:
        """Returns the derivative at ``x`` for an explicit bandwidth.

        Raises:
            ValidationError: If ``bandwidth`` is not finite and strictly positive.
        """
        x = float(x)
        h = require_positive(bandwidth, "bandwidth")
        exact = self.cache.get_exact_coefficients(self.descriptor)
        left = self.descriptor.left_multiplier

        sampled = [i for i, c in enumerate(exact) if c != 0]
        grid = np.zeros(len(exact), dtype=float)
        grid[sampled] = eval_points(
            self.function,
            [x + (left + i) * h for i in sampled],
            n_workers=self.n_workers,
        )
        return evaluate_grid(self.descriptor, grid, h, cache=self.cache)


class MultivariateFiniteDifferenceDerivative:
    """Derivative of a function of a real vector, on a tensor-product stencil.

    Every multi-index ``m`` of the stencil is sampled at
    ``point + h * (left + m)`` (component-wise) and the samples are
    contracted against the row-major coefficient tensor, then divided by
    ``prod h_i**d_i``.

    Attributes:
        function: The function to differentiate.
        descriptor: The multivariate stencil used.
        bandwidth_strategy: Decides the bandwidth vector at each point.
        cache: The coefficient cache.
        n_workers: Threads used to sample the grid.
    """

    def __init__(
        self,
        function: MultivariateFunction,
        descriptor: MultivariateStencilDescriptor,
        bandwidth_strategy: MultivariateBandwidthStrategy,
        *,
        cache: CoefficientCache | None = None,
        n_workers: int | None = 1,
    ) -> None:
        """Initialises the evaluator.

        Args:
            function: Callable mapping a 1D float array to a float.
            descriptor: The multivariate stencil.
            bandwidth_strategy: Object providing ``get_bandwidth_vector``.
            cache: Coefficient cache; the process-wide cache if omitted.
            n_workers: Threads used to sample the grid.

        Raises:
            ValidationError: If an argument is missing or of the wrong kind.
        """
        if not isinstance(descriptor, MultivariateStencilDescriptor):
            raise ValidationError(
                "descriptor must be a MultivariateStencilDescriptor; "
                f"got {type(descriptor).__name__}."
            )
        self.function = _require_callable(function)
        self.descriptor = descriptor
        self.bandwidth_strategy = _require_method(bandwidth_strategy, "get_bandwidth_vector")
        self.cache = resolve_cache(cache)
        self.n_workers = n_workers

    def value(self, point: ArrayLike) -> float:
        """Returns the derivative at ``point`` using the configured bandwidth strategy.

        Raises:
            DimensionMismatchError: If ``point`` or the returned bandwidth
                vector do not match the stencil dimension.
            ValidationError: If a bandwidth is not finite and strictly positive.
        """
        p = as_point_vector(point)
        check_dimension(p.size, self.descriptor.dimension, "point dimension")
        h = require_positive_vector(
            self.bandwidth_strategy.get_bandwidth_vector(self.function, self.descriptor, p.copy()),
            "bandwidth",
        )
        stencilkit_logger.debug("Using bandwidth %r at point=%r.", h.tolist(), p.tolist())
        return self.value_with_bandwidth(p, h)

    __call__ = value

    def value_with_bandwidth(self, point: ArrayLike, bandwidth: ArrayLike) -> float:
        """Returns the derivative at ``point`` for an explicit bandwidth vector."""
        points = self.grid_points(point, bandwidth)
        values = eval_points(self.function, points, n_workers=self.n_workers)
        return evaluate_grid(self.descriptor, values, bandwidth, cache=self.cache)

    def grid_points(self, point: ArrayLike, bandwidth: ArrayLike) -> list[NDArray[np.float64]]:
        """Returns the sample points of the stencil around ``point`` in row-major order.

        Raises:
            DimensionMismatchError: If ``point`` or ``bandwidth`` do not match
                the stencil dimension.
            ValidationError: If a bandwidth is not finite and strictly positive.
        """
        p = as_point_vector(point)
        h = require_positive_vector(bandwidth, "bandwidth")
        check_dimension(p.size, self.descriptor.dimension, "point dimension")
        check_dimension(h.size, self.descriptor.dimension, "bandwidth dimension")

        lefts = np.array([d.left_multiplier for d in self.descriptor], dtype=float)
        iteration = RowMajorIteration(self.descriptor.lengths)
        points: list[NDArray[np.float64]] = [p] * len(iteration)
        for multi_index, linear in iteration:
            points[linear] = p + h * (lefts + np.asarray(multi_index, dtype=float))
        return points
