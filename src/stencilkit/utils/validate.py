"""Validation utilities for stencilkit."""

from __future__ import annotations

import math
from numbers import Integral, Real
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from stencilkit.exceptions import DimensionMismatchError, ValidationError

__all__ = [
    "require_not_none",
    "require_integer",
    "require_positive",
    "require_positive_vector",
    "as_point_vector",
    "check_dimension",
]


def require_not_none(value: Any, name: str) -> Any:
    """Returns ``value`` unchanged, raising if it is ``None``.

    Args:
        value: The argument to check.
        name: Argument name used in the error message.

    Returns:
        The argument itself.

    Raises:
        ValidationError: If ``value`` is ``None``.
    """
    if value is None:
        raise ValidationError(f"{name} must not be None.")
    return value


def require_integer(value: Any, name: str) -> int:
    """Returns ``value`` as a Python ``int``, rejecting bools and non-integers.

    Args:
        value: The argument to check.
        name: Argument name used in the error message.

    Returns:
        The value converted to ``int``.

    Raises:
        ValidationError: If ``value`` is not an integral number.
    """
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise ValidationError(
            f"{name} must be an integer; got {type(value).__name__}."
        )
    return int(value)


def require_positive(value: Any, name: str) -> float:
    """Returns ``value`` as a float, raising unless it is finite and strictly positive.

    Args:
        value: The argument to check.
        name: Argument name used in the error message.

    Returns:
        The value converted to ``float``.

    Raises:
        ValidationError: If ``value`` is not a real number, is not finite,
            or is not strictly positive.
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(
            f"{name} must be a real number; got {type(value).__name__}."
        )
    v = float(value)
    if not math.isfinite(v) or v <= 0.0:
        raise ValidationError(f"{name} must be finite and strictly positive; got {v!r}.")
    return v


def require_positive_vector(values: ArrayLike, name: str) -> NDArray[np.float64]:
    """Returns a fresh 1D float array whose entries are all finite and strictly positive.

    Args:
        values: Array-like of candidate values.
        name: Argument name used in the error message.

    Returns:
        A new 1D ``float64`` array.

    Raises:
        ValidationError: If ``values`` is ``None``, empty, not 1D, or has an
            entry that is not finite and strictly positive.
    """
    require_not_none(values, name)
    arr = np.array(values, dtype=float, copy=True)
    if arr.ndim != 1 or arr.size == 0:
        raise ValidationError(
            f"{name} must be a non-empty 1D sequence; got shape {arr.shape}."
        )
    bad = ~(np.isfinite(arr) & (arr > 0.0))
    if bad.any():
        index = int(np.argmax(bad))
        raise ValidationError(
            f"{name}[{index}] must be finite and strictly positive; got {arr[index]!r}."
        )
    return arr


def as_point_vector(point: ArrayLike, name: str = "point") -> NDArray[np.float64]:
    """Converts a point to a fresh 1D float array.

    Args:
        point: Array-like coordinates.
        name: Argument name used in the error message.

    Returns:
        A new 1D ``float64`` array.

    Raises:
        ValidationError: If ``point`` is ``None`` or not one-dimensional.
    """
    require_not_none(point, name)
    arr = np.array(point, dtype=float, copy=True)
    if arr.ndim != 1:
        raise ValidationError(f"{name} must be 1D; got shape {arr.shape}.")
    return arr


def check_dimension(actual: int, expected: int, what: str = "dimension") -> None:
    """Raises :class:`DimensionMismatchError` if two sizes differ.

    Args:
        actual: The size that was supplied.
        expected: The size that was required.
        what: Description used in the error message.

    Raises:
        DimensionMismatchError: If ``actual != expected``.
    """
    if actual != expected:
        raise DimensionMismatchError(actual, expected, what)
