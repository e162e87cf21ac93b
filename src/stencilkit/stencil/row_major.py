"""Row-major enumeration of rectangular multi-index spaces.

Examples:
---------
>>> from stencilkit.stencil.row_major import RowMajorIteration
>>> list(RowMajorIteration(2, 2))
[((0, 0), 0), ((0, 1), 1), ((1, 0), 2), ((1, 1), 3)]
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Sequence

from stencilkit.exceptions import DimensionMismatchError, ValidationError
from stencilkit.utils.validate import require_integer

__all__ = [
    "RowMajorIteration",
    "ravel_multi_index",
]


def _validate_lengths(lengths: Sequence[int]) -> tuple[int, ...]:
    if lengths is None:
        raise ValidationError("lengths must not be None.")
    checked = tuple(require_integer(length, "length") for length in lengths)
    if not checked:
        raise ValidationError("at least one dimension length is required.")
    for length in checked:
        if length <= 0:
            raise ValidationError(
                f"dimension lengths must be strictly positive; got {length}."
            )
    return checked


class RowMajorIteration:
    """Iterable over ``(multi_index, linear_index)`` pairs in row-major order.

    The last dimension varies fastest and ``linear_index`` is the usual
    row-major flattening of ``multi_index``. Every call to :func:`iter`
    starts an independent traversal, so one instance can be shared between
    threads.

    Attributes:
        lengths: The dimension lengths.
    """

    __slots__ = ("lengths", "_size")

    def __init__(self, *lengths: int) -> None:
        """Initialises the iteration over a rectangular index space.

        Args:
            *lengths: Strictly positive dimension lengths. A single sequence
                argument is also accepted.

        Raises:
            ValidationError: If no lengths are given or any length is not a
                strictly positive integer.
        """
        if len(lengths) == 1 and isinstance(lengths[0], Iterable):
            lengths = tuple(lengths[0])
        self.lengths = _validate_lengths(lengths)
        self._size = math.prod(self.lengths)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[tuple[tuple[int, ...], int]]:
        lengths = self.lengths
        last = len(lengths) - 1
        index = [0] * len(lengths)
        for linear in range(self._size):
            yield tuple(index), linear
            # odometer increment, last axis first
            for axis in range(last, -1, -1):
                index[axis] += 1
                if index[axis] < lengths[axis]:
                    break
                index[axis] = 0

    def __repr__(self) -> str:
        return f"RowMajorIteration{self.lengths}"


def ravel_multi_index(multi_index: Sequence[int], lengths: Sequence[int]) -> int:
    """Returns the row-major linear position of a multi-index.

    Args:
        multi_index: One index per dimension.
        lengths: The dimension lengths.

    Returns:
        ``sum(multi_index[i] * prod(lengths[i+1:]))``.

    Raises:
        ValidationError: If ``lengths`` is invalid or an index is out of range.
        DimensionMismatchError: If the number of indices differs from the
            number of lengths.
    """
    checked = _validate_lengths(lengths)
    if len(multi_index) != len(checked):
        raise DimensionMismatchError(len(multi_index), len(checked), "multi-index dimension")
    linear = 0
    for i, length in zip(multi_index, checked):
        if not 0 <= i < length:
            raise ValidationError(f"index {i} out of range for length {length}.")
        linear = linear * length + i
    return linear
