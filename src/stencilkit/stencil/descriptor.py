"""Descriptors of one- and multi-dimensional finite-difference stencils.

A :class:`StencilDescriptor` says *which* derivative is approximated
(``derivative_order``), how accurately (``error_order``) and on which side of
the evaluation point the grid lies (``stencil_type``). Everything else
(offsets and coefficients) follows from those three values.

Examples:
---------
>>> from stencilkit.stencil.descriptor import StencilDescriptor, StencilType
>>> central = StencilDescriptor(StencilType.CENTRAL, 1, 2)
>>> central.left_multiplier, central.right_multiplier, central.length
(-1, 1, 3)
>>> forward = StencilDescriptor(StencilType.FORWARD, 1, 1)
>>> forward.offsets
(0, 1)
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass, field

from stencilkit.exceptions import ValidationError
from stencilkit.utils.validate import require_integer

__all__ = [
    "StencilType",
    "StencilDescriptor",
    "MultivariateStencilDescriptor",
    "THREE_POINT_CENTRAL",
    "TWO_POINT_FORWARD",
    "TWO_POINT_BACKWARD",
    "FIVE_POINT_CENTRAL",
    "FOUR_POINT_FORWARD",
    "THREE_POINT_CENTRAL_SECOND",
    "VALUE",
]


class StencilType(enum.Enum):
    """Position of the stencil grid relative to the evaluation point."""

    FORWARD = "forward"
    BACKWARD = "backward"
    CENTRAL = "central"


def _multipliers(
    stencil_type: StencilType,
    derivative_order: int,
    error_order: int,
) -> tuple[int, int]:
    """Returns the ``(left, right)`` grid bounds in units of the bandwidth.

    Backward grids end at the evaluation point, ``-(d+n-1)..0``, mirroring
    forward grids; they do not start at ``left = -(d+n)``, which would leave
    ``x`` itself unsampled.
    """
    span = derivative_order + error_order
    if span == 0:
        return 0, 0
    if stencil_type is StencilType.FORWARD:
        return 0, span - 1
    if stencil_type is StencilType.BACKWARD:
        return -(span - 1), 0
    # span is odd for odd derivative orders and even otherwise; truncation
    # keeps the grid symmetric in both cases.
    half = (span - 1) // 2
    return -half, half


@dataclass(frozen=True)
class StencilDescriptor:
    """Immutable description of a one-dimensional finite-difference scheme.

    Attributes:
        stencil_type: Forward, backward or central grid placement.
        derivative_order: The derivative approximated (``d >= 0``).
        error_order: The order of the leading truncation error term
            (``n > 0`` when ``d > 0``; ``0`` for the degenerate value stencil).
        left_multiplier: Lowest grid offset, in units of the bandwidth.
        right_multiplier: Highest grid offset, in units of the bandwidth.
        length: Number of grid points, ``right - left + 1``.
    """

    stencil_type: StencilType
    derivative_order: int
    error_order: int
    left_multiplier: int = field(init=False, compare=False)
    right_multiplier: int = field(init=False, compare=False)
    length: int = field(init=False, compare=False)

    def __post_init__(self) -> None:
        """Validates the combination of inputs and derives the grid bounds.

        Raises:
            ValidationError: If the type is missing, an order is not an
                integer, the derivative order is negative, the error order is
                not strictly positive for a nonzero derivative order, the error
                order is nonzero for the value stencil, or a central stencil
                has an odd error order.
        """
        if not isinstance(self.stencil_type, StencilType):
            raise ValidationError(
                f"stencil_type must be a StencilType; got {self.stencil_type!r}."
            )
        d = require_integer(self.derivative_order, "derivative_order")
        n = require_integer(self.error_order, "error_order")

        if d < 0:
            raise ValidationError(f"derivative_order must be non-negative; got {d}.")
        if d > 0 and n <= 0:
            raise ValidationError(
                f"error_order must be strictly positive when derivative_order "
                f"is nonzero; got error_order={n}."
            )
        if d == 0 and n != 0:
            raise ValidationError(
                f"error_order must be 0 when derivative_order is 0; got {n}."
            )
        if self.stencil_type is StencilType.CENTRAL and n % 2 != 0:
            raise ValidationError(
                f"central stencils require an even error_order; got {n}."
            )

        left, right = _multipliers(self.stencil_type, d, n)
        object.__setattr__(self, "derivative_order", d)
        object.__setattr__(self, "error_order", n)
        object.__setattr__(self, "left_multiplier", left)
        object.__setattr__(self, "right_multiplier", right)
        object.__setattr__(self, "length", right - left + 1)

    @property
    def offsets(self) -> tuple[int, ...]:
        """Integer grid offsets ``left, left + 1, ..., right``."""
        return tuple(range(self.left_multiplier, self.right_multiplier + 1))

    def __repr__(self) -> str:
        return (
            f"StencilDescriptor({self.stencil_type.name}, "
            f"derivative_order={self.derivative_order}, "
            f"error_order={self.error_order})"
        )


class MultivariateStencilDescriptor:
    """Tensor product of univariate stencils, one per input dimension.

    Instances are immutable and hashable, so they can key the coefficient
    cache. Two descriptors are equal iff their per-dimension descriptors are
    equal in order.

    Examples:
    ---------
    >>> from stencilkit.stencil.descriptor import (
    ...     THREE_POINT_CENTRAL, VALUE, MultivariateStencilDescriptor,
    ... )
    >>> mixed = MultivariateStencilDescriptor(THREE_POINT_CENTRAL, VALUE)
    >>> mixed.lengths
    (3, 1)
    """

    __slots__ = ("_descriptors",)

    def __init__(self, *descriptors: StencilDescriptor) -> None:
        """Initialises the descriptor from its per-dimension stencils.

        Args:
            *descriptors: One :class:`StencilDescriptor` per dimension.

        Raises:
            ValidationError: If no descriptors are given or any entry is not a
                :class:`StencilDescriptor`.
        """
        if len(descriptors) == 1 and isinstance(descriptors[0], (list, tuple)):
            descriptors = tuple(descriptors[0])
        if not descriptors:
            raise ValidationError("at least one univariate descriptor is required.")
        for index, descriptor in enumerate(descriptors):
            if not isinstance(descriptor, StencilDescriptor):
                raise ValidationError(
                    f"descriptor {index} must be a StencilDescriptor; "
                    f"got {type(descriptor).__name__}."
                )
        object.__setattr__(self, "_descriptors", tuple(descriptors))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable.")

    @property
    def descriptors(self) -> tuple[StencilDescriptor, ...]:
        """The per-dimension univariate descriptors."""
        return self._descriptors

    @property
    def dimension(self) -> int:
        """Number of input dimensions."""
        return len(self._descriptors)

    @property
    def lengths(self) -> tuple[int, ...]:
        """Per-dimension stencil lengths."""
        return tuple(d.length for d in self._descriptors)

    @property
    def derivative_orders(self) -> tuple[int, ...]:
        """Per-dimension derivative orders."""
        return tuple(d.derivative_order for d in self._descriptors)

    def descriptor(self, index: int) -> StencilDescriptor:
        """Returns the univariate descriptor of dimension ``index``."""
        return self._descriptors[index]

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self) -> Iterator[StencilDescriptor]:
        return iter(self._descriptors)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MultivariateStencilDescriptor):
            return NotImplemented
        return self._descriptors == other._descriptors

    def __hash__(self) -> int:
        return hash((MultivariateStencilDescriptor, self._descriptors))

    def __repr__(self) -> str:
        inner = ", ".join(repr(d) for d in self._descriptors)
        return f"MultivariateStencilDescriptor({inner})"


#: The three-point central first derivative.
THREE_POINT_CENTRAL = StencilDescriptor(StencilType.CENTRAL, 1, 2)
#: The two-point forward first derivative.
TWO_POINT_FORWARD = StencilDescriptor(StencilType.FORWARD, 1, 1)
#: The two-point backward first derivative.
TWO_POINT_BACKWARD = StencilDescriptor(StencilType.BACKWARD, 1, 1)
#: The five-point central first derivative.
FIVE_POINT_CENTRAL = StencilDescriptor(StencilType.CENTRAL, 1, 4)
#: The four-point forward first derivative.
FOUR_POINT_FORWARD = StencilDescriptor(StencilType.FORWARD, 1, 3)
#: The three-point central second derivative.
THREE_POINT_CENTRAL_SECOND = StencilDescriptor(StencilType.CENTRAL, 2, 2)
#: Degenerate stencil that returns the function value itself.
VALUE = StencilDescriptor(StencilType.CENTRAL, 0, 0)
