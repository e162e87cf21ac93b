"""Thread-safe memoization of stencil coefficients.

Coefficients are solved once per descriptor in exact arithmetic and kept for
the lifetime of the cache; the floating-point form is derived from the exact
one on first request. Values are computed outside the lock and published with
``dict.setdefault`` under it, so concurrent first requests may duplicate the
(pure) computation but only one complete vector is ever stored.

Examples:
---------
>>> from stencilkit.stencil.cache import CoefficientCache
>>> from stencilkit.stencil.descriptor import TWO_POINT_FORWARD
>>> cache = CoefficientCache()
>>> cache.get_coefficients(TWO_POINT_FORWARD)
array([-1.,  1.])
"""

from __future__ import annotations

import threading
from typing import NamedTuple

import numpy as np
import sympy as sp
from numpy.typing import NDArray

from stencilkit.exceptions import ValidationError
from stencilkit.logger import stencilkit_logger
from stencilkit.stencil.coefficients import (
    exact_multivariate_coefficients,
    exact_univariate_coefficients,
)
from stencilkit.stencil.descriptor import (
    MultivariateStencilDescriptor,
    StencilDescriptor,
)

__all__ = [
    "CacheStats",
    "CoefficientCache",
    "default_cache",
]

Descriptor = StencilDescriptor | MultivariateStencilDescriptor


class CacheStats(NamedTuple):
    """Hit and miss counters of a :class:`CoefficientCache`."""

    hits: int
    misses: int


class CoefficientCache:
    """Process-lifetime store of exact and floating-point stencil coefficients.

    Univariate and multivariate descriptors are kept in separate maps. Entries
    are never evicted; descriptors are small immutable values drawn from a
    small working set.
    """

    def __init__(self) -> None:
        """Initialises an empty cache."""
        self._lock = threading.RLock()
        self._univariate: dict[StencilDescriptor, tuple[sp.Rational, ...]] = {}
        self._multivariate: dict[MultivariateStencilDescriptor, tuple[sp.Rational, ...]] = {}
        self._floats: dict[Descriptor, NDArray[np.float64]] = {}
        self._hits = 0
        self._misses = 0

    def _store_for(self, descriptor: Descriptor) -> dict:
        if isinstance(descriptor, StencilDescriptor):
            return self._univariate
        if isinstance(descriptor, MultivariateStencilDescriptor):
            return self._multivariate
        raise ValidationError(
            "descriptor must be a StencilDescriptor or MultivariateStencilDescriptor; "
            f"got {type(descriptor).__name__}."
        )

    def _generate(self, descriptor: Descriptor) -> tuple[sp.Rational, ...]:
        if isinstance(descriptor, StencilDescriptor):
            return exact_univariate_coefficients(descriptor)
        return exact_multivariate_coefficients(
            descriptor, univariate=self.get_exact_coefficients
        )

    def get_exact_coefficients(self, descriptor: Descriptor) -> tuple[sp.Rational, ...]:
        """Returns the exact rational coefficients, generating them on first use.

        Args:
            descriptor: A univariate or multivariate stencil descriptor.

        Returns:
            The immutable exact coefficient vector (row-major for multivariate
            descriptors).

        Raises:
            ValidationError: If ``descriptor`` is not a stencil descriptor.
            SingularSystemError: If the coefficient system cannot be solved.
        """
        store = self._store_for(descriptor)
        with self._lock:
            cached = store.get(descriptor)
            if cached is not None:
                self._hits += 1
                return cached
            self._misses += 1

        stencilkit_logger.debug("Generating stencil coefficients for %r.", descriptor)
        computed = self._generate(descriptor)
        with self._lock:
            return store.setdefault(descriptor, computed)

    def _float_view(self, descriptor: Descriptor) -> NDArray[np.float64]:
        """Returns the cached read-only float coefficients."""
        with self._lock:
            cached = self._floats.get(descriptor)
        if cached is not None:
            return cached

        exact = self.get_exact_coefficients(descriptor)
        converted = np.array([float(c) for c in exact], dtype=np.float64)
        converted.setflags(write=False)
        with self._lock:
            return self._floats.setdefault(descriptor, converted)

    def get_coefficients(self, descriptor: Descriptor) -> NDArray[np.float64]:
        """Returns the floating-point coefficients as a fresh writable array.

        Args:
            descriptor: A univariate or multivariate stencil descriptor.

        Returns:
            A copy of the coefficient vector that callers may modify.

        Raises:
            ValidationError: If ``descriptor`` is not a stencil descriptor.
            SingularSystemError: If the coefficient system cannot be solved.
        """
        return self._float_view(descriptor).copy()

    def l1_norm(self, descriptor: Descriptor) -> float:
        """Returns the sum of the absolute values of the float coefficients."""
        return float(np.sum(np.abs(self._float_view(descriptor))))

    @property
    def stats(self) -> CacheStats:
        """Hit and miss counts of exact-coefficient lookups."""
        with self._lock:
            return CacheStats(self._hits, self._misses)

    def clear(self) -> None:
        """Drops every cached entry and resets the counters."""
        with self._lock:
            self._univariate.clear()
            self._multivariate.clear()
            self._floats.clear()
            self._hits = 0
            self._misses = 0

    def __contains__(self, descriptor: object) -> bool:
        with self._lock:
            return descriptor in self._univariate or descriptor in self._multivariate

    def __len__(self) -> int:
        with self._lock:
            return len(self._univariate) + len(self._multivariate)


_DEFAULT_CACHE = CoefficientCache()


def default_cache() -> CoefficientCache:
    """Returns the process-wide cache used when no cache is injected."""
    return _DEFAULT_CACHE


def resolve_cache(cache: CoefficientCache | None) -> CoefficientCache:
    """Returns ``cache`` or the process-wide default when it is ``None``."""
    return _DEFAULT_CACHE if cache is None else cache
