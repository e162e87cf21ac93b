"""Finite-difference derivative evaluation."""

from stencilkit.finite.core import evaluate_grid
from stencilkit.finite.derivative import (
    MultivariateFiniteDifferenceDerivative,
    UnivariateFiniteDifferenceDerivative,
)

__all__ = [
    "evaluate_grid",
    "MultivariateFiniteDifferenceDerivative",
    "UnivariateFiniteDifferenceDerivative",
]
