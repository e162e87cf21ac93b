"""Contraction of sampled stencil grids against cached coefficients."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike

from stencilkit.exceptions import ValidationError
from stencilkit.stencil.cache import CoefficientCache, resolve_cache
from stencilkit.stencil.descriptor import (
    MultivariateStencilDescriptor,
    StencilDescriptor,
)
from stencilkit.utils.validate import (
    check_dimension,
    require_not_none,
    require_positive,
    require_positive_vector,
)

__all__ = [
    "evaluate_grid",
    "bandwidth_scale",
]


def bandwidth_scale(
    descriptor: StencilDescriptor | MultivariateStencilDescriptor,
    bandwidth: float | ArrayLike,
) -> float:
    """Returns the normalisation ``h**d`` (or ``prod h_i**d_i``) of a stencil.

    Args:
        descriptor: A univariate or multivariate stencil.
        bandwidth: A positive scalar for univariate stencils, or one positive
            value per dimension for multivariate stencils.

    Returns:
        The divisor applied to the contracted grid.

    Raises:
        ValidationError: If a bandwidth is not finite and strictly positive.
        DimensionMismatchError: If the bandwidth vector has the wrong length.
    """
    if isinstance(descriptor, StencilDescriptor):
        h = require_positive(bandwidth, "bandwidth")
        return h ** descriptor.derivative_order
    if isinstance(descriptor, MultivariateStencilDescriptor):
        h = require_positive_vector(bandwidth, "bandwidth")
        check_dimension(h.size, descriptor.dimension, "bandwidth dimension")
        return math.prod(
            float(hi) ** d for hi, d in zip(h, descriptor.derivative_orders)
        )
    raise ValidationError(
        f"descriptor must be a stencil descriptor; got {type(descriptor).__name__}."
    )


def evaluate_grid(
    descriptor: StencilDescriptor | MultivariateStencilDescriptor,
    grid: ArrayLike,
    bandwidth: float | ArrayLike,
    *,
    cache: CoefficientCache | None = None,
) -> float:
    """Returns the finite-difference derivative estimate for a sampled grid.

    Args:
        descriptor: The stencil the grid was sampled for.
        grid: Function values, one per grid point, in the order of the
            stencil offsets (row-major for multivariate stencils).
        bandwidth: The bandwidth the grid was sampled with; a vector with one
            entry per dimension for multivariate stencils.
        cache: Coefficient cache to use; the process-wide cache if omitted.

    Returns:
        ``sum(c * grid) / h**d`` (``/ prod h_i**d_i`` in several dimensions).

    Raises:
        ValidationError: If ``grid`` is missing or a bandwidth is not strictly
            positive.
        DimensionMismatchError: If ``grid`` or the bandwidth vector have the
            wrong length.
    """
    require_not_none(grid, "grid")
    coefficients = resolve_cache(cache).get_coefficients(descriptor)

    values = np.asarray(grid, dtype=float)
    if values.ndim != 1:
        raise ValidationError(f"grid must be 1D; got shape {values.shape}.")
    check_dimension(values.size, coefficients.size, "grid length")

    scale = bandwidth_scale(descriptor, bandwidth)
    return float(np.dot(coefficients, values)) / scale
