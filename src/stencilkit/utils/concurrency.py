"""Concurrency helpers for sampling functions on stencil grids."""

from __future__ import annotations

import contextvars
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Sequence, Tuple

__all__ = [
    "parallel_execute",
    "normalize_workers",
    "resolve_workers",
    "detect_hw_threads",
]


def _int_env(name: str) -> int | None:
    """Reads a positive integer from an environment variable, or None if unset/invalid.

    Args:
        name: Environment variable name.

    Returns:
        Positive integer value, or None.
    """
    v = os.getenv(name)
    if not v:
        return None
    try:
        i = int(v)
        return i if i > 0 else None
    except ValueError:
        return None


def detect_hw_threads() -> int:
    """Detects the number of hardware threads, capped by thread-limit environment variables.

    Returns:
        Number of hardware threads (at least 1).
    """
    hints = [
        _int_env("STENCILKIT_NUM_THREADS"),
        _int_env("OMP_NUM_THREADS"),
    ]
    env_cap = min([h for h in hints if h is not None], default=None)
    hw = os.cpu_count() or 1
    return max(1, min(hw, env_cap) if env_cap else hw)


def normalize_workers(n_workers: Any) -> int:
    """Ensures n_workers is a positive integer, defaulting to 1.

    Args:
        n_workers: Input number of workers (can be None, float, negative, etc.)

    Returns:
        int: A positive integer number of workers (at least 1).
    """
    try:
        n = int(n_workers)
    except (TypeError, ValueError):
        n = 1
    return 1 if n < 1 else n


def resolve_workers(n_workers: int | None, n_tasks: int) -> int:
    """Decides how many threads to use for ``n_tasks`` independent evaluations.

    Args:
        n_workers: Requested worker count. ``None`` means one worker per
            detected hardware thread.
        n_tasks: Number of tasks that will be submitted.

    Returns:
        A worker count between 1 and ``max(1, n_tasks)``.
    """
    requested = detect_hw_threads() if n_workers is None else normalize_workers(n_workers)
    return max(1, min(requested, n_tasks))


def parallel_execute(
    worker: Callable[..., Any],
    arg_tuples: Sequence[Tuple[Any, ...]],
    *,
    outer_workers: int = 1,
) -> list[Any]:
    """Runs ``worker(*args)`` for each tuple in arg_tuples, preserving order.

    With more than one worker the calls run on a thread pool; each task
    runs in a copy of the caller's context.
    """
    if outer_workers > 1:
        with ThreadPoolExecutor(max_workers=outer_workers) as ex:
            futures = []
            for args in arg_tuples:
                ctx = contextvars.copy_context()
                futures.append(ex.submit(ctx.run, worker, *args))
            return [f.result() for f in futures]
    return [worker(*args) for args in arg_tuples]
