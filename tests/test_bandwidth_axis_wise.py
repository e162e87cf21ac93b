"""Tests for the axis-wise multivariate bandwidth strategy."""

from __future__ import annotations

import numpy as np
import pytest

from stencilkit.bandwidth.axis_wise import AxisWiseMultivariateBandwidthStrategy
from stencilkit.bandwidth.fixed import FixedUnivariateBandwidthStrategy
from stencilkit.bandwidth.rule_of_thumb import RuleOfThumbUnivariateBandwidthStrategy
from stencilkit.exceptions import DimensionMismatchError, ValidationError
from stencilkit.stencil.descriptor import (
    FIVE_POINT_CENTRAL,
    THREE_POINT_CENTRAL,
    MultivariateStencilDescriptor,
)


class _RecordingStrategy:
    def __init__(self):
        self.calls = []

    def get_bandwidth(self, function, descriptor, x):
        self.calls.append((function(x + 1.0), descriptor, x))
        return 0.125


def test_uses_each_axis_descriptor_and_coordinate():
    """Tests that the univariate strategy sees each axis' slice, stencil and coordinate."""
    recorder = _RecordingStrategy()
    strategy = AxisWiseMultivariateBandwidthStrategy(recorder)
    mv = MultivariateStencilDescriptor(THREE_POINT_CENTRAL, FIVE_POINT_CENTRAL)

    def f(p):
        return 10.0 * p[0] + p[1]

    out = strategy.get_bandwidth_vector(f, mv, [1.0, 2.0])
    np.testing.assert_array_equal(out, [0.125, 0.125])
    assert recorder.calls == [
        (22.0, THREE_POINT_CENTRAL, 1.0),
        (13.0, FIVE_POINT_CENTRAL, 2.0),
    ]


def test_rule_of_thumb_per_axis(cache):
    """Tests that each entry equals the univariate rule of thumb at that coordinate."""
    rule = RuleOfThumbUnivariateBandwidthStrategy(cache=cache)
    strategy = AxisWiseMultivariateBandwidthStrategy(rule)
    mv = MultivariateStencilDescriptor(THREE_POINT_CENTRAL, FIVE_POINT_CENTRAL)
    out = strategy.get_bandwidth_vector(np.sum, mv, [0.5, 10.0])
    assert out[0] == pytest.approx(rule.get_bandwidth(None, THREE_POINT_CENTRAL, 0.5))
    assert out[1] == pytest.approx(rule.get_bandwidth(None, FIVE_POINT_CENTRAL, 10.0))


def test_dimension_mismatch():
    """Tests that the point must match the stencil dimension."""
    strategy = AxisWiseMultivariateBandwidthStrategy(FixedUnivariateBandwidthStrategy(0.1))
    with pytest.raises(DimensionMismatchError):
        strategy.get_bandwidth_vector(
            np.sum, MultivariateStencilDescriptor(THREE_POINT_CENTRAL), [0.0, 1.0]
        )


def test_rejects_invalid_per_axis_bandwidth():
    """Tests that a non-positive axis bandwidth is reported."""

    class Broken:
        def get_bandwidth(self, function, descriptor, x):
            return -1.0

    strategy = AxisWiseMultivariateBandwidthStrategy(Broken())
    with pytest.raises(ValidationError, match=r"bandwidth\[0\]"):
        strategy.get_bandwidth_vector(
            np.sum, MultivariateStencilDescriptor(THREE_POINT_CENTRAL), [0.0]
        )


def test_requires_univariate_strategy():
    """Tests constructor validation."""
    with pytest.raises(ValidationError):
        AxisWiseMultivariateBandwidthStrategy(None)
