"""Tests for the validation helpers."""

from __future__ import annotations

import math

import numpy as np
import pytest

from stencilkit.exceptions import DimensionMismatchError, ValidationError
from stencilkit.utils.validate import (
    as_point_vector,
    check_dimension,
    require_integer,
    require_not_none,
    require_positive,
    require_positive_vector,
)


def test_require_not_none():
    """Tests that None is rejected and everything else passes through."""
    assert require_not_none(0, "x") == 0
    with pytest.raises(ValidationError, match="x must not be None"):
        require_not_none(None, "x")


def test_require_integer():
    """Tests that integers pass, including NumPy integers, and bools do not."""
    assert require_integer(np.int64(3), "n") == 3
    for bad in (True, 1.0, "1", None):
        with pytest.raises(ValidationError):
            require_integer(bad, "n")


def test_require_positive():
    """Tests that only finite, strictly positive reals pass."""
    assert require_positive(np.float32(0.5), "h") == 0.5
    assert require_positive(2, "h") == 2.0
    for bad in (0.0, -1.0, math.inf, math.nan, False, "1", None):
        with pytest.raises(ValidationError):
            require_positive(bad, "h")


def test_require_positive_vector_copies():
    """Tests that a fresh array is returned."""
    source = np.array([1.0, 2.0])
    out = require_positive_vector(source, "h")
    out[0] = 5.0
    assert source[0] == 1.0


@pytest.mark.parametrize("bad", [None, [], [[1.0]], [1.0, 0.0], [np.inf]])
def test_require_positive_vector_rejects(bad):
    """Tests that empty, non-1D and non-positive vectors are rejected."""
    with pytest.raises(ValidationError):
        require_positive_vector(bad, "h")


def test_require_positive_vector_names_offending_index():
    """Tests that the error message points at the bad entry."""
    with pytest.raises(ValidationError, match=r"h\[2\]"):
        require_positive_vector([1.0, 2.0, -3.0], "h")


def test_as_point_vector():
    """Tests conversion of points to 1D float arrays."""
    np.testing.assert_array_equal(as_point_vector([1, 2]), [1.0, 2.0])
    for bad in (None, 1.0, [[1.0, 2.0]]):
        with pytest.raises(ValidationError):
            as_point_vector(bad)


def test_check_dimension():
    """Tests that differing sizes raise DimensionMismatchError with both sizes."""
    check_dimension(3, 3)
    with pytest.raises(DimensionMismatchError) as ei:
        check_dimension(2, 3, "grid length")
    assert ei.value.actual == 2
    assert ei.value.expected == 3
    assert "grid length mismatch" in str(ei.value)
    assert isinstance(ei.value, ValueError)
