"""Pytest configuration with a fresh coefficient cache and a thread-spawning check."""

import os
from concurrent.futures import ThreadPoolExecutor, TimeoutError

import pytest

from stencilkit.stencil.cache import CoefficientCache

__all__ = ["extra_threads_ok", "cache"]


@pytest.fixture(autouse=True, scope="session")
def _limit_blas_threads():
    os.environ.setdefault("OPENBLAS_NUM_THREADS", "1")
    os.environ.setdefault("MKL_NUM_THREADS", "1")


@pytest.fixture(scope="session")
def threads_ok():
    """Return a callable that checks thread-spawning capability.

    The returned function has signature `check(n=2, timeout=1.0) -> bool` and
    returns True if at least `n` threads can be started and joined within `timeout`.
    """
    def _can_spawn(n: int = 2, timeout: float = 1.0) -> bool:
        try:
            with ThreadPoolExecutor(max_workers=n) as ex:
                futs = [ex.submit(lambda: None) for _ in range(n)]
                for f in futs:
                    f.result(timeout=timeout)
            return True
        except (RuntimeError, MemoryError, OSError, TimeoutError):
            return False
    return _can_spawn


@pytest.fixture(scope="session")
def extra_threads_ok(threads_ok):
    """Convenience: True iff we can start >= 2 threads (common case)."""
    return threads_ok(2)


@pytest.fixture
def cache():
    """A coefficient cache private to one test."""
    return CoefficientCache()


# --- default to one automatic worker unless the test opts in via @pytest.mark.parallel ---
@pytest.fixture(autouse=True)
def _serial_by_default(request, monkeypatch):
    """Cap n_workers=None at one thread unless the test is marked @pytest.mark.parallel."""
    if request.node.get_closest_marker("parallel"):
        monkeypatch.delenv("STENCILKIT_NUM_THREADS", raising=False)
        monkeypatch.delenv("OMP_NUM_THREADS", raising=False)
        return
    monkeypatch.setenv("STENCILKIT_NUM_THREADS", "1")
