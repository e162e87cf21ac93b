"""Exceptions raised by stencilkit."""


class StencilKitError(Exception):
    """Base exception for stencilkit operations."""

    pass


class ValidationError(StencilKitError, ValueError):
    """An argument or constructor value is invalid."""

    pass


class DimensionMismatchError(StencilKitError, ValueError):
    """A vector or grid does not have the length a descriptor expects."""

    def __init__(self, actual: int, expected: int, what: str = "length") -> None:
        self.actual = actual
        self.expected = expected
        super().__init__(f"{what} mismatch: got {actual}, expected {expected}.")


class SingularSystemError(StencilKitError, ArithmeticError):
    """The stencil coefficient system has no unique solution."""

    pass


class BandwidthOverflowError(StencilKitError, OverflowError):
    """Rounding a bandwidth exceeds the floating-point exponent range."""

    pass
