"""Tests for the thread-safe coefficient cache."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from stencilkit.exceptions import ValidationError
from stencilkit.stencil.cache import CoefficientCache, default_cache, resolve_cache
from stencilkit.stencil.coefficients import exact_univariate_coefficients
from stencilkit.stencil.descriptor import (
    FIVE_POINT_CENTRAL,
    THREE_POINT_CENTRAL,
    TWO_POINT_FORWARD,
    MultivariateStencilDescriptor,
    StencilDescriptor,
    StencilType,
)


def test_float_coefficients_match_exact(cache):
    """Tests that float coefficients are the exact ones converted."""
    out = cache.get_coefficients(THREE_POINT_CENTRAL)
    np.testing.assert_array_equal(out, [-0.5, 0.0, 0.5])
    assert out.dtype == np.float64


def test_returned_arrays_are_fresh_copies(cache):
    """Tests that mutating a returned array does not alter later lookups."""
    first = cache.get_coefficients(THREE_POINT_CENTRAL)
    first[:] = 42.0
    np.testing.assert_array_equal(cache.get_coefficients(THREE_POINT_CENTRAL), [-0.5, 0.0, 0.5])


def test_exact_lookup_is_idempotent(cache):
    """Tests that repeated lookups return the same stored vector and count hits."""
    a = cache.get_exact_coefficients(FIVE_POINT_CENTRAL)
    b = cache.get_exact_coefficients(FIVE_POINT_CENTRAL)
    assert a is b
    assert a == exact_univariate_coefficients(FIVE_POINT_CENTRAL)
    assert cache.stats.misses == 1
    assert cache.stats.hits == 1


def test_equal_descriptors_share_an_entry(cache):
    """Tests that equal but distinct descriptor objects hit the same entry."""
    cache.get_coefficients(StencilDescriptor(StencilType.CENTRAL, 1, 2))
    cache.get_coefficients(THREE_POINT_CENTRAL)
    assert len(cache) == 1
    assert THREE_POINT_CENTRAL in cache


def test_l1_norm(cache):
    """Tests that the L1 norm sums absolute coefficients."""
    assert cache.l1_norm(THREE_POINT_CENTRAL) == pytest.approx(1.0)
    assert cache.l1_norm(FIVE_POINT_CENTRAL) == pytest.approx(1.5)


def test_multivariate_entries_reuse_univariate_ones(cache):
    """Tests that a multivariate lookup stores and reuses per-axis coefficients."""
    mv = MultivariateStencilDescriptor(THREE_POINT_CENTRAL, TWO_POINT_FORWARD)
    out = cache.get_coefficients(mv)
    np.testing.assert_array_equal(out, np.outer([-0.5, 0.0, 0.5], [-1.0, 1.0]).ravel())
    assert mv in cache
    assert THREE_POINT_CENTRAL in cache
    assert TWO_POINT_FORWARD in cache
    assert len(cache) == 3


def test_invalid_descriptor_raises(cache):
    """Tests that non-descriptors are rejected."""
    with pytest.raises(ValidationError):
        cache.get_coefficients((1, 2))
    with pytest.raises(ValidationError):
        cache.get_exact_coefficients(None)


def test_clear_resets_entries_and_counters(cache):
    """Tests that clear() empties the cache."""
    cache.get_coefficients(THREE_POINT_CENTRAL)
    cache.clear()
    assert len(cache) == 0
    assert cache.stats == (0, 0)
    assert THREE_POINT_CENTRAL not in cache


def test_default_cache_is_a_singleton():
    """Tests that the process-wide cache is stable and used for None."""
    assert default_cache() is default_cache()
    assert resolve_cache(None) is default_cache()
    own = CoefficientCache()
    assert resolve_cache(own) is own


def test_concurrent_first_requests_publish_one_vector(cache, extra_threads_ok):
    """Tests that threads racing on an empty cache all see one complete stored vector."""
    if not extra_threads_ok:
        pytest.skip("cannot spawn threads")

    n = 8
    descriptor = StencilDescriptor(StencilType.CENTRAL, 2, 6)
    barrier = threading.Barrier(n)

    def worker():
        barrier.wait()
        return cache.get_exact_coefficients(descriptor)

    with ThreadPoolExecutor(max_workers=n) as ex:
        results = [f.result() for f in [ex.submit(worker) for _ in range(n)]]

    expected = exact_univariate_coefficients(descriptor)
    assert all(r == expected for r in results)
    assert all(r is results[0] for r in results)
    assert cache.get_exact_coefficients(descriptor) is results[0]


def test_concurrent_mixed_requests(cache, extra_threads_ok):
    """Tests that many threads requesting several descriptors get correct copies."""
    if not extra_threads_ok:
        pytest.skip("cannot spawn threads")

    descriptors = [
        StencilDescriptor(stencil_type, d, n)
        for stencil_type in (StencilType.FORWARD, StencilType.BACKWARD)
        for d in (1, 2)
        for n in (1, 2, 3)
    ]

    def worker(descriptor):
        return descriptor, cache.get_coefficients(descriptor)

    with ThreadPoolExecutor(max_workers=4) as ex:
        results = list(ex.map(worker, descriptors * 4))

    for descriptor, out in results:
        expected = [float(c) for c in exact_univariate_coefficients(descriptor)]
        np.testing.assert_allclose(out, expected, rtol=0, atol=0)
    assert len(cache) == len(descriptors)
