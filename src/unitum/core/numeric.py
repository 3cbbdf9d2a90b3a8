"""
unitum.core.numeric
===================

Numeric representations backing a ``Quantity`` and the single arithmetic
entry point shared by every quantity operation.

Each quantity value has a ``NumberKind``. When two values meet, the result is
computed in the *dominant* kind, chosen by a fixed rank::

    DECIMAL > FLOAT64 > INT64 > FLOAT32 > NUMBER

and each kind applies its own rule so that no result silently loses
precision:

- ``DECIMAL``  Decimal arithmetic under ``DECIMAL_CONTEXT``.
- ``FLOAT64``  Python float arithmetic.
- ``INT64``    exact rational arithmetic. An integral result must fit in a
               signed 64-bit integer, otherwise ``QuantityOverflowError``;
               a non-integral result (any division that does not come out
               even) is promoted to ``FLOAT64``.
- ``FLOAT32``  evaluated in float64 and rounded to ``numpy.float32``; a result
               that only overflows in float32 is promoted to ``FLOAT64``.
- ``NUMBER``   the operands' own Python arithmetic (``Fraction`` etc.).

Division by zero raises ``ZeroDivisionError`` in every kind.
"""

from __future__ import annotations

from decimal import Context, Decimal, ROUND_HALF_EVEN, localcontext
from enum import Enum
from fractions import Fraction
from numbers import Integral, Number, Rational
import logging
import math
import operator
from typing import Any, Callable, Tuple

import numpy as np

from unitum.core.exceptions import QuantityOverflowError

_log = logging.getLogger(__name__)

# decimal128: 34 significant digits, banker's rounding
DECIMAL_CONTEXT = Context(prec=34, rounding=ROUND_HALF_EVEN)

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# Relative tolerance of equality between float-backed values
FLOAT_REL_TOL = 1e-12

BinaryOp = Callable[[Any, Any], Any]


class NumberKind(Enum):
    """Closed set of numeric representations a quantity value can have."""

    DECIMAL = "decimal"
    FLOAT64 = "float64"
    INT64 = "int64"
    FLOAT32 = "float32"
    NUMBER = "number"

    @property
    def rank(self) -> int:
        return _RANK[self]


_RANK = {
    NumberKind.DECIMAL: 5,
    NumberKind.FLOAT64: 4,
    NumberKind.INT64: 3,
    NumberKind.FLOAT32: 2,
    NumberKind.NUMBER: 1,
}


def dominant(a: NumberKind, b: NumberKind) -> NumberKind:
    """Return the representation in which an ``a``/``b`` operation is evaluated."""
    return a if a.rank >= b.rank else b


# ---------------------------------------------------------------------------
# Classification & casting
# ---------------------------------------------------------------------------

def classify(value: Any) -> NumberKind:
    """Infer the kind of a raw Python/numpy number."""
    if isinstance(value, bool) or not isinstance(value, Number):
        raise TypeError(f"Quantity value must be a number, got {type(value).__name__}")
    if isinstance(value, Decimal):
        return NumberKind.DECIMAL
    if isinstance(value, np.float32):
        return NumberKind.FLOAT32
    if isinstance(value, (float, np.float64)):
        return NumberKind.FLOAT64
    if isinstance(value, Integral):
        return NumberKind.INT64
    return NumberKind.NUMBER


def _check_int64(value: int) -> int:
    if not INT64_MIN <= value <= INT64_MAX:
        raise QuantityOverflowError(f"{value} does not fit in a 64-bit integer")
    return value


def _is_finite(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, Rational):
        return True
    return math.isfinite(float(value))


def to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, Integral):
        return Decimal(int(value))
    if isinstance(value, Rational):
        return Decimal(value.numerator) / Decimal(value.denominator)
    if isinstance(value, np.floating):
        # numpy renders the shortest round-tripping digits for its own width
        return Decimal(str(value))
    return Decimal(repr(float(value)))


def to_fraction(value: Any) -> Fraction:
    if isinstance(value, Fraction):
        return value
    if isinstance(value, Integral):
        return Fraction(int(value))
    if isinstance(value, (Rational, Decimal)):
        return Fraction(value)
    return Fraction(float(value))


def _to_float32(value: float) -> Tuple[NumberKind, Any]:
    with np.errstate(over="ignore"):
        narrowed = np.float32(value)
    if math.isinf(narrowed) and math.isfinite(value):
        _log.debug("float32 overflow for %r, promoting to float64", value)
        return NumberKind.FLOAT64, float(value)
    return NumberKind.FLOAT32, narrowed


def cast(kind: NumberKind, value: Any) -> Any:
    """
    Strictly represent ``value`` as ``kind``.

    Raises ``ValueError`` when an ``INT64`` is requested for a non-integral
    value and ``QuantityOverflowError`` when it does not fit in 64 bits.
    """
    if isinstance(value, bool) or not isinstance(value, Number):
        raise TypeError(f"Quantity value must be a number, got {type(value).__name__}")
    if kind is NumberKind.DECIMAL:
        with localcontext(DECIMAL_CONTEXT):
            return +to_decimal(value)
    if kind is NumberKind.FLOAT64:
        return float(value)
    if kind is NumberKind.FLOAT32:
        with np.errstate(over="ignore"):
            return np.float32(float(value))
    if kind is NumberKind.INT64:
        if isinstance(value, Integral):
            return _check_int64(int(value))
        if not _is_finite(value):
            raise ValueError(f"Cannot represent {value!r} as a 64-bit integer")
        exact = to_fraction(value)
        if exact.denominator != 1:
            raise ValueError(f"Cannot represent {value!r} as a 64-bit integer without losing precision")
        return _check_int64(exact.numerator)
    if kind is NumberKind.NUMBER:
        return value
    raise TypeError(f"Unknown number kind {kind!r}")


def narrow(kind: NumberKind, value: Any) -> Tuple[NumberKind, Any]:
    """
    Represent an exact or intermediate result as ``kind``, applying the
    promotion rules instead of failing where the kind allows it.
    """
    if kind is NumberKind.INT64:
        if not _is_finite(value):
            return NumberKind.FLOAT64, float(value)
        exact = to_fraction(value)
        if exact.denominator != 1:
            return NumberKind.FLOAT64, float(exact)
        return NumberKind.INT64, _check_int64(exact.numerator)
    if kind is NumberKind.FLOAT32:
        return _to_float32(float(value))
    return kind, cast(kind, value)


# ---------------------------------------------------------------------------
# Arithmetic entry point
# ---------------------------------------------------------------------------

def evaluate(kind: NumberKind, op: BinaryOp, a: Any, b: Any) -> Tuple[NumberKind, Any]:
    """Evaluate ``op(a, b)`` in the representation ``kind``."""
    if kind is NumberKind.DECIMAL:
        with localcontext(DECIMAL_CONTEXT):
            return kind, op(to_decimal(a), to_decimal(b))
    if kind is NumberKind.FLOAT64:
        return kind, float(op(float(a), float(b)))
    if kind is NumberKind.INT64:
        if not (_is_finite(a) and _is_finite(b)):
            return NumberKind.FLOAT64, float(op(float(a), float(b)))
        if op is operator.pow:
            return narrow(kind, to_fraction(a) ** int(b))
        return narrow(kind, op(to_fraction(a), to_fraction(b)))
    if kind is NumberKind.FLOAT32:
        return _to_float32(float(op(float(a), float(b))))
    if kind is NumberKind.NUMBER:
        return kind, op(a, b)
    raise TypeError(f"Unknown number kind {kind!r}")


def combine(
    op: BinaryOp,
    left_kind: NumberKind,
    left: Any,
    right_kind: NumberKind,
    right: Any,
) -> Tuple[NumberKind, Any]:
    """Apply ``op`` to two values of possibly different kinds in their dominant kind."""
    return evaluate(dominant(left_kind, right_kind), op, left, right)


def is_nan(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_nan()
    if isinstance(value, Rational):
        return False
    return value != value


def compare(left_kind: NumberKind, left: Any, right_kind: NumberKind, right: Any) -> int:
    """
    Three-way comparison of two values in their dominant kind: -1, 0 or 1.

    Float kinds treat values within ``FLOAT_REL_TOL`` of each other as equal so
    that binary rounding drift (``0.1 + 0.2`` against ``0.3``) compares as 0;
    integer and decimal kinds compare exactly. Raises ``ValueError`` when
    either value is NaN, since NaN has no order.
    """
    if is_nan(left) or is_nan(right):
        raise ValueError(f"Cannot order {left!r} and {right!r}: NaN is unordered")
    kind = dominant(left_kind, right_kind)
    if kind is NumberKind.DECIMAL:
        with localcontext(DECIMAL_CONTEXT):
            a, b = to_decimal(left), to_decimal(right)
    elif kind is NumberKind.INT64 and _is_finite(left) and _is_finite(right):
        a, b = to_fraction(left), to_fraction(right)
    elif kind is NumberKind.NUMBER:
        a, b = left, right
    else:
        # float32 values are exact in float64
        a, b = float(left), float(right)
        if math.isclose(a, b, rel_tol=FLOAT_REL_TOL, abs_tol=0.0):
            return 0
    return (a > b) - (a < b)


def equal(left_kind: NumberKind, left: Any, right_kind: NumberKind, right: Any) -> bool:
    """Equality in the sense of ``compare``, except that NaN equals nothing."""
    if is_nan(left) or is_nan(right):
        return False
    return compare(left_kind, left, right_kind, right) == 0


def as_python(kind: NumberKind, value: Any) -> Any:
    """Plain Python number for display and hashing helpers."""
    if kind is NumberKind.FLOAT32:
        return float(value)
    return value


__all__ = [
    "NumberKind",
    "DECIMAL_CONTEXT",
    "dominant",
    "classify",
    "cast",
    "narrow",
    "evaluate",
    "combine",
    "compare",
    "equal",
    "is_nan",
    "to_decimal",
    "to_fraction",
]
