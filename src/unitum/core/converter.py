"""
unitum.core.converter
=====================

Immutable numeric transforms between a unit and its system unit.

A converter is one of a closed set of variants:

- ``IdentityConverter``   ``y = x``
- ``LinearConverter``     ``y = x*scale + offset``
- ``RationalConverter``   ``y = x*numerator/denominator``
- ``PowerConverter``      ``y = x*base**exponent``
- ``LogConverter``        ``y = log_base(x)``
- ``ExpConverter``        ``y = base**x``
- ``CompositeConverter``  ``y = second(first(x))``

Evaluation, inversion and concatenation are each implemented once, as a
dispatch over the variants (``_evaluate``, ``_invert``, ``_fuse``), so the
rules for every variant can be read side by side. Converters compare and hash
structurally; a composite's nesting order is part of its identity.

Scale factors are kept as exact ``Fraction`` values. Integer and rational
amounts are converted exactly, ``Decimal`` amounts stay in ``Decimal``, and
floats are converted through ``Fraction`` and rounded once.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from numbers import Number, Rational
import math
from typing import Any

from unitum.core.exceptions import NonInvertibleConverterError


def _as_fraction(x: Any, what: str) -> Fraction:
    if isinstance(x, bool):
        raise TypeError(f"{what} must be a number, got bool")
    if isinstance(x, Fraction):
        return x
    if isinstance(x, (Rational, Decimal, str)):
        return Fraction(x)
    if isinstance(x, float):
        if not math.isfinite(x):
            raise ValueError(f"{what} must be finite, got {x!r}")
        return Fraction(x)
    raise TypeError(f"{what} must be a real number, got {type(x).__name__}")


def _exact(x: Fraction) -> int | Fraction:
    return x.numerator if x.denominator == 1 else x


def _decimal_of(f: Fraction) -> Decimal:
    # evaluated under the caller's decimal context
    if f.denominator == 1:
        return Decimal(f.numerator)
    return Decimal(f.numerator) / Decimal(f.denominator)


def _affine(x: Any, scale: Fraction, offset: Fraction) -> Any:
    """Evaluate ``x*scale + offset`` keeping ``x``'s numeric family."""
    if isinstance(x, bool):
        raise TypeError("Cannot convert a bool amount")
    if isinstance(x, Decimal):
        y = x * Decimal(scale.numerator)
        if scale.denominator != 1:
            y = y / Decimal(scale.denominator)
        if offset:
            y = y + _decimal_of(offset)
        return y
    if isinstance(x, Rational):
        return _exact(Fraction(x) * scale + offset)
    x = float(x)
    if not math.isfinite(x):
        return x * float(scale) + float(offset)
    return float(Fraction(x) * scale + offset)


def _real(x: Any) -> float:
    if isinstance(x, bool):
        raise TypeError("Cannot convert a bool amount")
    return float(x)


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------

class UnitConverter:
    """Base of every converter variant."""

    __slots__ = ()

    @property
    def is_linear(self) -> bool:
        return _is_linear(self)

    @property
    def is_identity(self) -> bool:
        return isinstance(self, IdentityConverter)

    def apply(self, x: Any) -> Any:
        """Convert the amount ``x``."""
        return _evaluate(self, x)

    def __call__(self, x: Any) -> Any:
        return _evaluate(self, x)

    def inverse(self) -> "UnitConverter":
        return _invert(self)

    def concatenate(self, other: "UnitConverter") -> "UnitConverter":
        """Return a converter applying ``self`` first, then ``other``."""
        if not isinstance(other, UnitConverter):
            raise TypeError(f"Cannot concatenate a converter with {type(other).__name__}")
        return _fuse(self, other)


@dataclass(frozen=True, slots=True)
class IdentityConverter(UnitConverter):
    def __repr__(self) -> str:
        return "IDENTITY"


@dataclass(frozen=True, slots=True)
class LinearConverter(UnitConverter):
    scale: Fraction
    offset: Fraction = Fraction(0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "scale", _as_fraction(self.scale, "scale"))
        object.__setattr__(self, "offset", _as_fraction(self.offset, "offset"))

    def __repr__(self) -> str:
        return f"LinearConverter({self.scale}, {self.offset})"


@dataclass(frozen=True, slots=True)
class RationalConverter(UnitConverter):
    numerator: int
    denominator: int = 1

    def __post_init__(self) -> None:
        for name in ("numerator", "denominator"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, int):
                raise TypeError(f"{name} must be an int, got {type(v).__name__}")
        if self.denominator == 0:
            raise ZeroDivisionError("RationalConverter denominator must be non-zero")
        f = Fraction(self.numerator, self.denominator)
        object.__setattr__(self, "numerator", f.numerator)
        object.__setattr__(self, "denominator", f.denominator)

    @property
    def factor(self) -> Fraction:
        return Fraction(self.numerator, self.denominator)

    def __repr__(self) -> str:
        return f"RationalConverter({self.numerator}, {self.denominator})"


@dataclass(frozen=True, slots=True)
class PowerConverter(UnitConverter):
    base: int
    exponent: int

    def __post_init__(self) -> None:
        for name in ("base", "exponent"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, int):
                raise TypeError(f"{name} must be an int, got {type(v).__name__}")
        if self.base == 0:
            raise ValueError("PowerConverter base must be non-zero")

    @property
    def factor(self) -> Fraction:
        return Fraction(self.base) ** self.exponent

    def __repr__(self) -> str:
        return f"PowerConverter({self.base}^{self.exponent})"


def _check_log_base(base: float) -> float:
    if isinstance(base, bool) or not isinstance(base, (int, float)):
        raise TypeError(f"base must be a real number, got {type(base).__name__}")
    base = float(base)
    if not (base > 0 and math.isfinite(base)) or base == 1.0:
        raise ValueError(f"Logarithm base must be positive, finite and != 1, got {base!r}")
    return base


@dataclass(frozen=True, slots=True)
class LogConverter(UnitConverter):
    base: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "base", _check_log_base(self.base))

    def __repr__(self) -> str:
        return "ln" if self.base == math.e else f"Log({self.base})"


@dataclass(frozen=True, slots=True)
class ExpConverter(UnitConverter):
    base: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "base", _check_log_base(self.base))

    def __repr__(self) -> str:
        return "exp" if self.base == math.e else f"Exp({self.base})"


@dataclass(frozen=True, slots=True)
class CompositeConverter(UnitConverter):
    first: UnitConverter
    second: UnitConverter

    def __post_init__(self) -> None:
        if not isinstance(self.first, UnitConverter) or not isinstance(self.second, UnitConverter):
            raise TypeError("CompositeConverter parts must be converters")

    def __repr__(self) -> str:
        return f"({self.first!r} -> {self.second!r})"


IDENTITY = IdentityConverter()

_SCALING = (LinearConverter, RationalConverter, PowerConverter)


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

def _scale_and_offset(c: UnitConverter) -> tuple[Fraction, Fraction]:
    if isinstance(c, LinearConverter):
        return c.scale, c.offset
    if isinstance(c, (RationalConverter, PowerConverter)):
        return c.factor, Fraction(0)
    raise TypeError(f"{c!r} is not a scaling converter")


def _is_linear(c: UnitConverter) -> bool:
    if isinstance(c, (IdentityConverter, *_SCALING)):
        return True
    if isinstance(c, (LogConverter, ExpConverter)):
        return False
    if isinstance(c, CompositeConverter):
        return _is_linear(c.first) and _is_linear(c.second)
    raise TypeError(f"Unknown converter variant {type(c).__name__}")


def _evaluate(c: UnitConverter, x: Any) -> Any:
    if isinstance(c, IdentityConverter):
        return x
    if isinstance(c, _SCALING):
        scale, offset = _scale_and_offset(c)
        return _affine(x, scale, offset)
    if isinstance(c, LogConverter):
        y = math.log(_real(x)) / math.log(c.base)
        return Decimal(repr(y)) if isinstance(x, Decimal) else y
    if isinstance(c, ExpConverter):
        try:
            y = c.base ** _real(x)
        except OverflowError:
            # same as float arithmetic past the largest double
            y = math.inf
        return Decimal(repr(y)) if isinstance(x, Decimal) else y
    if isinstance(c, CompositeConverter):
        return _evaluate(c.second, _evaluate(c.first, x))
    raise TypeError(f"Unknown converter variant {type(c).__name__}")


def _invert(c: UnitConverter) -> UnitConverter:
    if isinstance(c, IdentityConverter):
        return c
    if isinstance(c, LinearConverter):
        if c.scale == 0:
            raise NonInvertibleConverterError(f"{c!r} has a zero scale and cannot be inverted")
        return LinearConverter(1 / c.scale, -c.offset / c.scale)
    if isinstance(c, RationalConverter):
        if c.numerator == 0:
            raise NonInvertibleConverterError(f"{c!r} has a zero scale and cannot be inverted")
        return RationalConverter(c.denominator, c.numerator)
    if isinstance(c, PowerConverter):
        return PowerConverter(c.base, -c.exponent)
    if isinstance(c, LogConverter):
        return ExpConverter(c.base)
    if isinstance(c, ExpConverter):
        return LogConverter(c.base)
    if isinstance(c, CompositeConverter):
        return CompositeConverter(_invert(c.second), _invert(c.first))
    raise TypeError(f"Unknown converter variant {type(c).__name__}")


def _fuse(a: UnitConverter, b: UnitConverter) -> UnitConverter:
    if isinstance(a, IdentityConverter):
        return b
    if isinstance(b, IdentityConverter):
        return a

    if isinstance(a, _SCALING) and isinstance(b, _SCALING):
        if isinstance(a, PowerConverter) and isinstance(b, PowerConverter) and a.base == b.base:
            exponent = a.exponent + b.exponent
            return IDENTITY if exponent == 0 else PowerConverter(a.base, exponent)
        s1, o1 = _scale_and_offset(a)
        s2, o2 = _scale_and_offset(b)
        scale, offset = s1 * s2, o1 * s2 + o2
        if scale == 1 and offset == 0:
            return IDENTITY
        if offset == 0 and not (isinstance(a, LinearConverter) or isinstance(b, LinearConverter)):
            return RationalConverter(scale.numerator, scale.denominator)
        return LinearConverter(scale, offset)

    if (
        (isinstance(a, LogConverter) and isinstance(b, ExpConverter))
        or (isinstance(a, ExpConverter) and isinstance(b, LogConverter))
    ) and a.base == b.base:
        return IDENTITY

    return CompositeConverter(a, b)


__all__ = [
    "UnitConverter",
    "IdentityConverter",
    "LinearConverter",
    "RationalConverter",
    "PowerConverter",
    "LogConverter",
    "ExpConverter",
    "CompositeConverter",
    "IDENTITY",
]
