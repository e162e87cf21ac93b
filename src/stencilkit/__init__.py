"""Exact finite-difference stencils and bandwidth selection."""

from importlib.metadata import PackageNotFoundError, version

from stencilkit.bandwidth import (
    AdaptiveBandwidthConfig,
    AdaptiveUnivariateBandwidthStrategy,
    AxisWiseMultivariateBandwidthStrategy,
    FixedMultivariateBandwidthStrategy,
    FixedUnivariateBandwidthStrategy,
    PowerOfTwoMultivariateBandwidthStrategy,
    PowerOfTwoUnivariateBandwidthStrategy,
    RuleOfThumbUnivariateBandwidthStrategy,
)
from stencilkit.exceptions import (
    BandwidthOverflowError,
    DimensionMismatchError,
    SingularSystemError,
    StencilKitError,
    ValidationError,
)
from stencilkit.finite import (
    MultivariateFiniteDifferenceDerivative,
    UnivariateFiniteDifferenceDerivative,
    evaluate_grid,
)
from stencilkit.stencil import (
    FIVE_POINT_CENTRAL,
    FOUR_POINT_FORWARD,
    THREE_POINT_CENTRAL,
    THREE_POINT_CENTRAL_SECOND,
    TWO_POINT_BACKWARD,
    TWO_POINT_FORWARD,
    VALUE,
    CoefficientCache,
    MultivariateStencilDescriptor,
    RowMajorIteration,
    StencilDescriptor,
    StencilType,
    default_cache,
)

try:
    __version__ = version("stencilkit")
except PackageNotFoundError:
    pass

__all__ = [
    "AdaptiveBandwidthConfig",
    "AdaptiveUnivariateBandwidthStrategy",
    "AxisWiseMultivariateBandwidthStrategy",
    "BandwidthOverflowError",
    "CoefficientCache",
    "DimensionMismatchError",
    "FixedMultivariateBandwidthStrategy",
    "FixedUnivariateBandwidthStrategy",
    "MultivariateFiniteDifferenceDerivative",
    "MultivariateStencilDescriptor",
    "PowerOfTwoMultivariateBandwidthStrategy",
    "PowerOfTwoUnivariateBandwidthStrategy",
    "RowMajorIteration",
    "RuleOfThumbUnivariateBandwidthStrategy",
    "SingularSystemError",
    "StencilDescriptor",
    "StencilKitError",
    "StencilType",
    "UnivariateFiniteDifferenceDerivative",
    "ValidationError",
    "default_cache",
    "evaluate_grid",
    "FIVE_POINT_CENTRAL",
    "FOUR_POINT_FORWARD",
    "THREE_POINT_CENTRAL",
    "THREE_POINT_CENTRAL_SECOND",
    "TWO_POINT_BACKWARD",
    "TWO_POINT_FORWARD",
    "VALUE",
]
