"""Stencil descriptors, exact coefficient generation and caching."""

from stencilkit.stencil.cache import CoefficientCache, default_cache
from stencilkit.stencil.descriptor import (
    FIVE_POINT_CENTRAL,
    FOUR_POINT_FORWARD,
    THREE_POINT_CENTRAL,
    THREE_POINT_CENTRAL_SECOND,
    TWO_POINT_BACKWARD,
    TWO_POINT_FORWARD,
    VALUE,
    MultivariateStencilDescriptor,
    StencilDescriptor,
    StencilType,
)
from stencilkit.stencil.row_major import RowMajorIteration

__all__ = [
    "CoefficientCache",
    "default_cache",
    "MultivariateStencilDescriptor",
    "RowMajorIteration",
    "StencilDescriptor",
    "StencilType",
    "FIVE_POINT_CENTRAL",
    "FOUR_POINT_FORWARD",
    "THREE_POINT_CENTRAL",
    "THREE_POINT_CENTRAL_SECOND",
    "TWO_POINT_BACKWARD",
    "TWO_POINT_FORWARD",
    "VALUE",
]
