"""Adaptive bandwidth selection from an empirical truncation-error estimate.

Instead of assuming a curvature scale, this strategy measures the
truncation-error coefficient of the stencil at the point. Two derivative
estimates at a trial bandwidth ``h2`` and at ``h1 = step_ratio * h2`` give

    C_n = (D(h2) - D(h1)) / (h1**n - h2**n)

which replaces the assumed scale in the closed-form error balance:

    h = [(d / n) * (1 / |C_n|) * (eps * F * S + delta * F * S / 2)] ** (1 / (n + d))

with ``F = |f(x)|``. Both sides of the balance scale with ``f``, so the
bandwidth does not change when the function is multiplied by a constant.

If ``|C_n|`` is below the machine epsilon the truncation error is negligible
at ``h2`` and the trial bandwidth is returned as is. The same happens when
``f(x)`` is exactly zero.

Each request samples the function on two full stencil grids and once at
``x``, so this strategy suits calibration runs rather than hot loops. Wrap
it in a :class:`~stencilkit.bandwidth.fixed.FixedUnivariateBandwidthStrategy`
once a good bandwidth is known.

Examples:
---------
>>> import math
>>> from stencilkit.bandwidth.adaptive import AdaptiveUnivariateBandwidthStrategy
>>> from stencilkit.stencil.descriptor import THREE_POINT_CENTRAL
>>> strategy = AdaptiveUnivariateBandwidthStrategy()
>>> h = strategy.get_bandwidth(math.exp, THREE_POINT_CENTRAL, 1.0)
>>> 1e-7 < h < 1e-3
True
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from stencilkit.bandwidth.base import MACHINE_EPSILON
from stencilkit.bandwidth.fixed import FixedUnivariateBandwidthStrategy
from stencilkit.bandwidth.power_of_two import PowerOfTwoUnivariateBandwidthStrategy
from stencilkit.bandwidth.rule_of_thumb import (
    RuleOfThumbUnivariateBandwidthStrategy,
    optimal_bandwidth,
)
from stencilkit.exceptions import ValidationError
from stencilkit.finite.batch_eval import eval_points
from stencilkit.finite.derivative import UnivariateFiniteDifferenceDerivative
from stencilkit.logger import stencilkit_logger
from stencilkit.stencil.cache import CoefficientCache, resolve_cache
from stencilkit.stencil.descriptor import StencilDescriptor
from stencilkit.utils.types import UnivariateFunction
from stencilkit.utils.validate import require_positive

__all__ = [
    "AdaptiveBandwidthConfig",
    "AdaptiveUnivariateBandwidthStrategy",
]


@dataclass(frozen=True)
class AdaptiveBandwidthConfig:
    """Heuristic constants of the adaptive bandwidth strategy.

    Attributes:
        step_ratio: Ratio ``h1 / h2`` of the two bandwidths used to estimate
            the truncation coefficient. Must be greater than 1.
        trial_scale: Factor applied to the power-of-two rule-of-thumb
            bandwidth when no trial bandwidth is given. A slightly large
            trial bandwidth estimates the truncation error better than a
            slightly small one.
    """

    step_ratio: float = 2.0
    trial_scale: float = 2.0

    def __post_init__(self) -> None:
        """Validates the constants.

        Raises:
            ValidationError: If ``step_ratio <= 1`` or ``trial_scale <= 0``
                or either is not finite.
        """
        ratio = require_positive(self.step_ratio, "step_ratio")
        if ratio <= 1.0:
            raise ValidationError(f"step_ratio must be greater than 1; got {ratio!r}.")
        require_positive(self.trial_scale, "trial_scale")


class AdaptiveUnivariateBandwidthStrategy:
    """Bandwidth from an empirical estimate of the truncation-error coefficient.

    Attributes:
        epsilon: Condition error of the function values.
        trial_bandwidth: User-supplied trial bandwidth, or ``None`` to derive
            one from the rule of thumb.
        config: The heuristic constants.
        cache: Coefficient cache used by the trial derivative estimates.
    """

    def __init__(
        self,
        epsilon: float = MACHINE_EPSILON,
        trial_bandwidth: float | None = None,
        *,
        config: AdaptiveBandwidthConfig | None = None,
        cache: CoefficientCache | None = None,
    ) -> None:
        """Initialises the strategy.

        Args:
            epsilon: Condition error of the function; defaults to the machine
                epsilon.
            trial_bandwidth: Bandwidth ``h2`` at which the truncation error is
                estimated. Derived from the rule of thumb when omitted.
            config: Heuristic constants; defaults to
                :class:`AdaptiveBandwidthConfig`.
            cache: Coefficient cache; the process-wide cache if omitted.

        Raises:
            ValidationError: If ``epsilon`` or ``trial_bandwidth`` is not
                finite and strictly positive.
        """
        self.epsilon = require_positive(epsilon, "epsilon")
        self.trial_bandwidth = (
            None if trial_bandwidth is None
            else require_positive(trial_bandwidth, "trial_bandwidth")
        )
        self.config = AdaptiveBandwidthConfig() if config is None else config
        self.cache = resolve_cache(cache)

    def get_bandwidth(
        self,
        function: UnivariateFunction,
        descriptor: StencilDescriptor,
        x: float,
    ) -> float:
        """Returns the adaptive bandwidth at ``x``.

        Raises:
            ValidationError: If the computed bandwidth is not finite and
                strictly positive (for instance when the function returns
                non-finite values near ``x``).
        """
        if descriptor.derivative_order == 0:
            return 1.0

        h2 = self.get_trial_bandwidth(function, descriptor, x)
        cn = abs(self.estimate_truncation_coefficient(function, descriptor, x, h2))
        if cn < MACHINE_EPSILON:
            # truncation error is already negligible at the trial bandwidth
            stencilkit_logger.debug(
                "Truncation coefficient %r below epsilon at x=%r; keeping h=%r.", cn, x, h2
            )
            return h2

        magnitude = abs(float(eval_points(function, [x])[0]))
        if magnitude == 0.0:
            # no condition or round-off error to balance against
            stencilkit_logger.debug("f(x) is zero at x=%r; keeping h=%r.", x, h2)
            return h2

        h = optimal_bandwidth(
            descriptor.derivative_order,
            descriptor.error_order,
            1.0 / cn,
            self.epsilon,
            self.cache.l1_norm(descriptor),
            magnitude,
        )
        return require_positive(h, "adaptive bandwidth")

    def get_trial_bandwidth(
        self,
        function: UnivariateFunction,
        descriptor: StencilDescriptor,
        x: float,
    ) -> float:
        """Returns the user trial bandwidth or a scaled power-of-two rule of thumb."""
        if self.trial_bandwidth is not None:
            return self.trial_bandwidth
        rule_of_thumb = PowerOfTwoUnivariateBandwidthStrategy(
            RuleOfThumbUnivariateBandwidthStrategy(self.epsilon, cache=self.cache)
        )
        h = rule_of_thumb.get_bandwidth(function, descriptor, x)
        return h * self.config.trial_scale

    def estimate_truncation_coefficient(
        self,
        function: UnivariateFunction,
        descriptor: StencilDescriptor,
        x: float,
        trial_bandwidth: float,
    ) -> float:
        """Estimates ``C_n`` from derivative estimates at two bandwidths.

        Args:
            function: The function being differentiated.
            descriptor: The stencil.
            x: The evaluation point.
            trial_bandwidth: The smaller bandwidth ``h2``; the larger one is
                ``step_ratio * h2``.

        Returns:
            ``(D(h2) - D(h1)) / (h1**n - h2**n)``.
        """
        h2 = require_positive(trial_bandwidth, "trial_bandwidth")
        h1 = h2 * self.config.step_ratio
        d1 = self._derivative(function, descriptor, x, h1)
        d2 = self._derivative(function, descriptor, x, h2)
        n = descriptor.error_order
        denominator = math.pow(h1, n) - math.pow(h2, n)
        return (d2 - d1) / denominator

    def _derivative(
        self,
        function: UnivariateFunction,
        descriptor: StencilDescriptor,
        x: float,
        h: float,
    ) -> float:
        derivative = UnivariateFiniteDifferenceDerivative(
            function,
            descriptor,
            FixedUnivariateBandwidthStrategy(h),
            cache=self.cache,
        )
        return derivative.value(x)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(epsilon={self.epsilon!r}, "
            f"trial_bandwidth={self.trial_bandwidth!r}, config={self.config!r})"
        )
