"""Exact generation of finite-difference stencil coefficients.

The univariate coefficients come from a Taylor-expansion linear system that
is solved in rational arithmetic, so a coefficient that should vanish is
exactly zero rather than merely tiny. Multivariate coefficients are tensor
products of the univariate ones and inherit that exactness.

For a descriptor with lowest offset ``m``, ``size`` grid points and
derivative order ``d`` the system is ``A x = b`` with
``A[r][c] = (m + c)**r`` and ``b = e_d``; the solution is scaled by ``d!``
so that

    sum_i c_i f(x + (m + i) h) / h**d  ~  f^(d)(x).

Examples:
---------
>>> from stencilkit.stencil.coefficients import exact_univariate_coefficients
>>> from stencilkit.stencil.descriptor import THREE_POINT_CENTRAL
>>> exact_univariate_coefficients(THREE_POINT_CENTRAL)
(-1/2, 0, 1/2)
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

import sympy as sp

from stencilkit.exceptions import SingularSystemError
from stencilkit.stencil.descriptor import (
    MultivariateStencilDescriptor,
    StencilDescriptor,
)
from stencilkit.stencil.row_major import RowMajorIteration

__all__ = [
    "exact_univariate_coefficients",
    "exact_multivariate_coefficients",
    "taylor_moments",
    "truncation_order",
]

ExactCoefficients = tuple[sp.Rational, ...]


def _coefficient_matrix(descriptor: StencilDescriptor) -> sp.Matrix:
    """Builds the generalized Vandermonde matrix of the stencil offsets.

    Row 0 is all ones and each further row is the previous one multiplied
    element-wise by the offsets.
    """
    offsets = [sp.Integer(o) for o in descriptor.offsets]
    rows = [[sp.Integer(1)] * descriptor.length]
    for _ in range(1, descriptor.length):
        rows.append([value * offset for value, offset in zip(rows[-1], offsets)])
    return sp.Matrix(rows)


def _constant_vector(descriptor: StencilDescriptor) -> sp.Matrix:
    """Builds the right-hand side selecting the derivative-order Taylor term."""
    b = sp.zeros(descriptor.length, 1)
    b[descriptor.derivative_order, 0] = sp.Integer(1)
    return b


def exact_univariate_coefficients(descriptor: StencilDescriptor) -> ExactCoefficients:
    """Solves exactly for the coefficients of a univariate stencil.

    Args:
        descriptor: The stencil to generate coefficients for.

    Returns:
        One exact rational coefficient per grid offset, ordered from
        ``descriptor.left_multiplier`` to ``descriptor.right_multiplier``.

    Raises:
        SingularSystemError: If the Taylor system cannot be solved. This only
            happens if the descriptor's offsets are not distinct.
    """
    a = _coefficient_matrix(descriptor)
    b = _constant_vector(descriptor)
    try:
        x = a.LUsolve(b)
    except ValueError as e:
        raise SingularSystemError(
            f"stencil system for {descriptor!r} is singular."
        ) from e

    scale = sp.factorial(descriptor.derivative_order)
    return tuple(sp.Rational(value * scale) for value in x)


def exact_multivariate_coefficients(
    descriptor: MultivariateStencilDescriptor,
    univariate: Callable[[StencilDescriptor], Sequence[sp.Rational]] = exact_univariate_coefficients,
) -> ExactCoefficients:
    """Builds the row-major coefficient tensor of a multivariate stencil.

    The coefficient at multi-index ``(i0, ..., ik)`` is the product of the
    univariate coefficient ``i_dim`` of each dimension. No further linear
    solve is needed.

    Args:
        descriptor: The multivariate stencil.
        univariate: Callable returning the exact univariate coefficients of a
            descriptor. The coefficient cache passes its own lookup here so
            per-dimension results are reused.

    Returns:
        The flattened coefficient tensor, in row-major order.
    """
    per_axis = [tuple(univariate(d)) for d in descriptor]
    iteration = RowMajorIteration(descriptor.lengths)

    flat: list[sp.Rational] = [sp.Integer(0)] * len(iteration)
    for multi_index, linear in iteration:
        coefficient = sp.Integer(1)
        for axis, i in enumerate(multi_index):
            coefficient *= per_axis[axis][i]
        flat[linear] = coefficient
    return tuple(flat)


def taylor_moments(
    offsets: Sequence[int],
    coefficients: Sequence[sp.Rational],
    max_power: int,
) -> tuple[sp.Rational, ...]:
    """Computes the exact moments ``sum_i c_i * o_i**k`` for ``k = 0..max_power``.

    A stencil for derivative order ``d`` has moment ``d!`` at ``k = d`` and
    zero at every other ``k`` below its length.

    Args:
        offsets: Integer grid offsets.
        coefficients: Exact coefficients, one per offset.
        max_power: Highest power to evaluate.

    Returns:
        The moments, indexed by power.
    """
    return tuple(
        sum(
            (sp.Rational(c) * sp.Integer(o) ** k for o, c in zip(offsets, coefficients)),
            sp.Integer(0),
        )
        for k in range(max_power + 1)
    )


def truncation_order(
    descriptor: StencilDescriptor,
    coefficients: Sequence[sp.Rational] | None = None,
) -> int | None:
    """Returns the order of the leading truncation error actually achieved.

    This is the distance between the derivative order and the first
    non-vanishing moment above it. Central stencils for even derivative
    orders can exceed their nominal ``error_order``.

    Args:
        descriptor: The stencil.
        coefficients: Its exact coefficients; solved for if omitted.

    Returns:
        The achieved truncation order, or ``None`` if no moment beyond the
        derivative order is nonzero (the value stencil is exact).
    """
    if coefficients is None:
        coefficients = exact_univariate_coefficients(descriptor)
    d = descriptor.derivative_order
    max_power = 2 * descriptor.length + d + 2
    moments = taylor_moments(descriptor.offsets, coefficients, max_power)
    for k in range(d + 1, max_power + 1):
        if moments[k] != 0:
            return k - d
    return None
