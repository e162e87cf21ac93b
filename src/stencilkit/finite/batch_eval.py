"""Batch evaluation of functions on stencil grids."""

from __future__ import annotations

from typing import Any, Callable, Sequence

import numpy as np

from stencilkit.utils.concurrency import parallel_execute, resolve_workers

__all__ = ["eval_points"]


def eval_points(
    func: Callable[[Any], Any],
    xs: Sequence[Any],
    n_workers: int | None = 1,
) -> np.ndarray:
    """Evaluates ``func`` at a sequence of points.

    Args:
        func: Callable taking a single argument (a float or a coordinate array).
        xs: Points at which to evaluate ``func``. Scalar points are passed as
            Python floats, array points as fresh ``float64`` arrays.
        n_workers: Number of threads. ``1`` runs serially, ``None`` uses one
            thread per hardware thread. Capped at the number of points.

    Returns:
        A float array of function values, one per point.

    Raises:
        ValueError: If ``func`` does not return a scalar at some point.
    """
    args = [_to_eval_arg(x) for x in xs]
    if not args:
        return np.asarray([], dtype=float)

    workers = resolve_workers(n_workers, len(args))
    vals = parallel_execute(func, [(x,) for x in args], outer_workers=workers)

    out = np.asarray(vals, dtype=float)
    if out.ndim == 2 and out.shape[1] == 1:
        # length-1 outputs such as np.atleast_1d(f(x))
        out = out[:, 0]
    if out.shape != (len(args),):
        raise ValueError(
            f"function must return a scalar at every grid point; got values of shape {out.shape}."
        )
    return out


def _to_eval_arg(x: Any) -> Any:
    """Prepares one evaluation argument."""
    if np.isscalar(x) or (isinstance(x, np.ndarray) and x.shape == ()):
        return float(x)
    return np.array(x, dtype=float, copy=True)
