"""Analytic rule-of-thumb bandwidth selection.

Balancing the condition and round-off error of a stencil against its
truncation error gives the closed form

    h = [(d / n) * c_n * (eps * S + delta * S / 2)] ** (1 / (n + d))

where ``S`` is the L1 norm of the stencil coefficients, ``eps`` the condition
error of the function, ``delta`` the machine epsilon and ``c_n = max(1, |x|)``
the assumed curvature scale. The scale assumption is what makes this a rule
of thumb: it treats the function as varying on the scale of ``x`` away from
the origin.
"""

from __future__ import annotations

from stencilkit.bandwidth.base import MACHINE_EPSILON
from stencilkit.stencil.cache import CoefficientCache, resolve_cache
from stencilkit.stencil.descriptor import StencilDescriptor
from stencilkit.utils.types import UnivariateFunction
from stencilkit.utils.validate import require_positive

__all__ = [
    "RuleOfThumbUnivariateBandwidthStrategy",
    "optimal_bandwidth",
]


def optimal_bandwidth(
    derivative_order: int,
    error_order: int,
    scale: float,
    epsilon: float,
    l1_norm: float,
    magnitude: float = 1.0,
) -> float:
    """Solves the error balance ``[(d/n) * scale * (eps*F*S + delta*F*S/2)]**(1/(n+d))``.

    Args:
        derivative_order: ``d``, strictly positive.
        error_order: ``n``, strictly positive.
        scale: Multiplier standing for the (inverse) truncation coefficient.
        epsilon: Condition error of the function values.
        l1_norm: Sum of the absolute stencil coefficients.
        magnitude: ``F``, the size of the function values the condition and
            round-off errors are relative to.

    Returns:
        The bandwidth that balances truncation against condition and
        round-off error.
    """
    d = float(derivative_order)
    n = float(error_order)
    fs = magnitude * l1_norm
    arg = (d / n) * scale * (epsilon * fs + MACHINE_EPSILON * fs / 2.0)
    return arg ** (1.0 / (n + d))


class RuleOfThumbUnivariateBandwidthStrategy:
    """Bandwidth from the analytic error balance with ``c_n = max(1, |x|)``.

    For the degenerate value stencil (derivative order 0) the grid is the
    single point ``x`` and any bandwidth gives the same result; ``1.0`` is
    returned.

    Attributes:
        epsilon: Condition error of the function values.
        cache: Coefficient cache used for the L1 norm.
    """

    def __init__(
        self,
        epsilon: float = MACHINE_EPSILON,
        *,
        cache: CoefficientCache | None = None,
    ) -> None:
        """Initialises the strategy.

        Args:
            epsilon: Condition error of the function; defaults to the machine
                epsilon.
            cache: Coefficient cache; the process-wide cache if omitted.

        Raises:
            ValidationError: If ``epsilon`` is not finite and strictly positive.
        """
        self.epsilon = require_positive(epsilon, "epsilon")
        self.cache = resolve_cache(cache)

    def get_bandwidth(
        self,
        function: UnivariateFunction,
        descriptor: StencilDescriptor,
        x: float,
    ) -> float:
        """Returns the rule-of-thumb bandwidth at ``x``.

        Raises:
            ValidationError: If the computed bandwidth is not finite and
                strictly positive.
        """
        if descriptor.derivative_order == 0:
            return 1.0
        h = optimal_bandwidth(
            descriptor.derivative_order,
            descriptor.error_order,
            max(1.0, abs(float(x))),
            self.epsilon,
            self.cache.l1_norm(descriptor),
        )
        return require_positive(h, "rule-of-thumb bandwidth")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(epsilon={self.epsilon!r})"
