"""
unitum.core.exceptions
======================

Error kinds raised by the unit algebra, the converters and the quantity
arithmetic. Each one derives from the matching Python built-in so callers can
catch either the precise class or the generic one (``TypeError`` for a
dimension mismatch, ``ArithmeticError`` for an invalid root, ...).
"""

from __future__ import annotations


class InvalidRootError(ArithmeticError):
    """Raised when a dimension exponent is not divisible by the requested root."""


class NonInvertibleConverterError(ArithmeticError):
    """Raised when inverting a converter whose scale factor is zero."""


class IncommensurableError(TypeError):
    """Raised when two units (or quantities) do not share the same dimension."""

    def __init__(self, left: object, right: object, action: str = "combine") -> None:
        self.left = left
        self.right = right
        super().__init__(
            f"Cannot {action} '{left}' and '{right}': dimensions differ"
        )


class UnsupportedConversionError(ValueError):
    """Raised when a unit cannot be folded into a system converter."""


class QuantityOverflowError(OverflowError):
    """Raised when a 64-bit integer quantity cannot hold an exact result."""


class IndexOutOfRangeError(IndexError):
    """Raised when a product unit element is accessed outside ``[0, count)``."""


__all__ = [
    "InvalidRootError",
    "NonInvertibleConverterError",
    "IncommensurableError",
    "UnsupportedConversionError",
    "QuantityOverflowError",
    "IndexOutOfRangeError",
]
