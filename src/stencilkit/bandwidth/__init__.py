"""Bandwidth strategies for finite-difference derivative evaluation."""

from stencilkit.bandwidth.adaptive import (
    AdaptiveBandwidthConfig,
    AdaptiveUnivariateBandwidthStrategy,
)
from stencilkit.bandwidth.axis_wise import AxisWiseMultivariateBandwidthStrategy
from stencilkit.bandwidth.base import (
    MACHINE_EPSILON,
    MultivariateBandwidthStrategy,
    UnivariateBandwidthStrategy,
)
from stencilkit.bandwidth.fixed import (
    FixedMultivariateBandwidthStrategy,
    FixedUnivariateBandwidthStrategy,
)
from stencilkit.bandwidth.power_of_two import (
    PowerOfTwoMultivariateBandwidthStrategy,
    PowerOfTwoUnivariateBandwidthStrategy,
    round_up_to_power_of_two,
)
from stencilkit.bandwidth.rule_of_thumb import RuleOfThumbUnivariateBandwidthStrategy

__all__ = [
    "MACHINE_EPSILON",
    "AdaptiveBandwidthConfig",
    "AdaptiveUnivariateBandwidthStrategy",
    "AxisWiseMultivariateBandwidthStrategy",
    "FixedMultivariateBandwidthStrategy",
    "FixedUnivariateBandwidthStrategy",
    "MultivariateBandwidthStrategy",
    "PowerOfTwoMultivariateBandwidthStrategy",
    "PowerOfTwoUnivariateBandwidthStrategy",
    "RuleOfThumbUnivariateBandwidthStrategy",
    "UnivariateBandwidthStrategy",
    "round_up_to_power_of_two",
]
