"""Tests for exact stencil coefficient generation."""

from __future__ import annotations

import math

import pytest
import sympy as sp

from stencilkit.exceptions import SingularSystemError
from stencilkit.stencil import coefficients
from stencilkit.stencil.coefficients import (
    exact_multivariate_coefficients,
    exact_univariate_coefficients,
    taylor_moments,
    truncation_order,
)
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

R = sp.Rational


@pytest.mark.parametrize(
    "descriptor, expected",
    [
        (THREE_POINT_CENTRAL, (R(-1, 2), 0, R(1, 2))),
        (TWO_POINT_FORWARD, (-1, 1)),
        (TWO_POINT_BACKWARD, (-1, 1)),
        (THREE_POINT_CENTRAL_SECOND, (1, -2, 1)),
        (FIVE_POINT_CENTRAL, (R(1, 12), R(-2, 3), 0, R(2, 3), R(-1, 12))),
        (FOUR_POINT_FORWARD, (R(-11, 6), 3, R(-3, 2), R(1, 3))),
        (VALUE, (1,)),
    ],
)
def test_known_coefficients(descriptor, expected):
    """Tests that textbook stencils are reproduced exactly."""
    assert exact_univariate_coefficients(descriptor) == tuple(sp.Rational(e) for e in expected)


def test_coefficients_are_exact_rationals():
    """Tests that vanishing coefficients are exactly zero, not merely small."""
    c = exact_univariate_coefficients(FIVE_POINT_CENTRAL)
    assert all(isinstance(v, sp.Rational) for v in c)
    assert c[2] == 0
    assert c[2].is_zero


@pytest.mark.parametrize(
    "stencil_type, d, n",
    [
        (stencil_type, d, n)
        for stencil_type in StencilType
        for d in range(1, 5)
        for n in range(1, 6)
        if not (stencil_type is StencilType.CENTRAL and n % 2)
    ],
)
def test_taylor_moments_select_the_derivative(stencil_type, d, n):
    """Tests that the moments below the stencil length vanish except ``d!`` at ``k = d``."""
    descriptor = StencilDescriptor(stencil_type, d, n)
    c = exact_univariate_coefficients(descriptor)
    assert len(c) == descriptor.length

    moments = taylor_moments(descriptor.offsets, c, descriptor.length - 1)
    for k, moment in enumerate(moments):
        assert moment == (math.factorial(d) if k == d else 0)


@pytest.mark.parametrize(
    "stencil_type, d, n",
    [
        (StencilType.FORWARD, 1, 1),
        (StencilType.FORWARD, 2, 3),
        (StencilType.BACKWARD, 1, 2),
        (StencilType.BACKWARD, 3, 1),
        (StencilType.CENTRAL, 1, 2),
        (StencilType.CENTRAL, 2, 2),
        (StencilType.CENTRAL, 3, 4),
        (StencilType.CENTRAL, 4, 2),
    ],
)
def test_truncation_order_matches_requested_error_order(stencil_type, d, n):
    """Tests that every stencil achieves exactly its nominal error order."""
    assert truncation_order(StencilDescriptor(stencil_type, d, n)) == n


def test_truncation_order_of_value_stencil_is_none():
    """Tests that the value stencil has no truncation error."""
    assert truncation_order(VALUE) is None


def test_truncation_order_accepts_precomputed_coefficients():
    """Tests that supplied coefficients are used as given."""
    assert truncation_order(TWO_POINT_FORWARD, (sp.Integer(-1), sp.Integer(1))) == 1


def test_multivariate_coefficients_are_tensor_products():
    """Tests that each tensor entry is the product of per-axis coefficients."""
    axes = (THREE_POINT_CENTRAL, TWO_POINT_FORWARD, THREE_POINT_CENTRAL_SECOND)
    mv = MultivariateStencilDescriptor(*axes)
    flat = exact_multivariate_coefficients(mv)
    per_axis = [exact_univariate_coefficients(a) for a in axes]

    assert len(flat) == 3 * 2 * 3
    for multi_index, linear in RowMajorIteration(mv.lengths):
        expected = sp.Integer(1)
        for axis, i in enumerate(multi_index):
            expected *= per_axis[axis][i]
        assert flat[linear] == expected


def test_multivariate_with_value_axis_repeats_univariate():
    """Tests that a value stencil on one axis leaves the other axis' coefficients unchanged."""
    mv = MultivariateStencilDescriptor(VALUE, THREE_POINT_CENTRAL)
    assert exact_multivariate_coefficients(mv) == exact_univariate_coefficients(THREE_POINT_CENTRAL)


def test_multivariate_uses_supplied_univariate_lookup():
    """Tests that per-axis coefficients are taken from the injected callable."""
    seen = []

    def lookup(descriptor):
        seen.append(descriptor)
        return exact_univariate_coefficients(descriptor)

    exact_multivariate_coefficients(
        MultivariateStencilDescriptor(TWO_POINT_FORWARD, TWO_POINT_BACKWARD), univariate=lookup
    )
    assert seen == [TWO_POINT_FORWARD, TWO_POINT_BACKWARD]


def test_singular_system_raises(monkeypatch):
    """Tests that an unsolvable system surfaces as SingularSystemError."""
    monkeypatch.setattr(
        coefficients, "_coefficient_matrix", lambda d: sp.zeros(d.length, d.length)
    )
    with pytest.raises(SingularSystemError) as ei:
        exact_univariate_coefficients(THREE_POINT_CENTRAL)
    assert isinstance(ei.value, ArithmeticError)
