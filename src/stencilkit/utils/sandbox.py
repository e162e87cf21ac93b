"""Helpers for slicing multivariate functions."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np

from stencilkit.exceptions import ValidationError

__all__ = [
    "get_partial_function",
]


def get_partial_function(
    full_function: Callable,
    variable_index: int,
    fixed_values: list | np.ndarray,
) -> Callable[[float], float]:
    """Returns a single-variable version of a multivariate function.

    A single coordinate must be specified by index. All other coordinates
    are held fixed.

    Args:
        full_function: A function that takes a 1D array of coordinates and
            returns a scalar.
        variable_index: The index of the coordinate to treat as the variable.
        fixed_values: The coordinate values used for every other coordinate.
            The values are copied.

    Returns:
        A function of a single float.

    Raises:
        ValidationError: If ``fixed_values`` is not 1D, ``variable_index`` is
            not an integer or is out of bounds.
    """
    fixed_arr = np.array(fixed_values, dtype=float, copy=True)
    if fixed_arr.ndim != 1:
        raise ValidationError(
            f"fixed_values must be 1D; got shape {fixed_arr.shape}."
        )
    if isinstance(variable_index, bool) or not isinstance(variable_index, (int, np.integer)):
        raise ValidationError(
            f"variable_index must be an integer; got {type(variable_index).__name__}."
        )
    if variable_index < 0 or variable_index >= fixed_arr.size:
        raise ValidationError(
            f"variable_index {variable_index} out of bounds for size {fixed_arr.size}."
        )

    def partial_function(x: float) -> float:
        params = fixed_arr.copy()
        params[variable_index] = x
        return full_function(params)

    return partial_function
