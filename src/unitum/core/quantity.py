"""
unitum.core.quantity
====================

Defines the `Quantity` class: an immutable pairing of a numeric value with a
unit, supporting unit-aware arithmetic across numeric representations.

Every operation between two quantities first checks that their units are
commensurable, then rebases the right operand onto the left operand's unit
through the converter chain ``right unit → system unit → left unit``, and
finally evaluates the numeric operation in the dominant representation (see
`unitum.core.numeric`). Multiplication and division compose the units through
the product-unit algebra instead of requiring equal units.
"""

from __future__ import annotations

from decimal import localcontext
from numbers import Number
import operator
from typing import Any, Union

from unitum.core import numeric
from unitum.core.dimensions import Dim
from unitum.core.exceptions import IncommensurableError
from unitum.core.numeric import NumberKind
from unitum.core.product import ONE, ProductUnit
from unitum.core.unit import Unit

# Rounding applied to system-unit magnitudes by `Quantity.as_key`.
DEFAULT_KEY_PRECISION = 12

Operand = Union["Quantity", Unit, Number]


class Quantity:
    """
    Represents a physical quantity with a value, a unit and a numeric kind.

    Attributes
    ----------
    value : number
        The amount expressed in ``unit``; its Python type follows ``kind``
        (``float``, ``int``, ``numpy.float32``, ``Decimal`` or any other number).
    unit : Unit
        The unit the value is expressed in.
    kind : NumberKind
        The numeric representation of ``value``.
    """
    __slots__ = ["_value", "_unit", "_kind"]

    def __init__(self, value: Any, unit: Unit = ONE, kind: NumberKind | None = None):
        if not isinstance(unit, Unit):
            raise TypeError(f"Quantity unit must be a Unit, got {type(unit).__name__}")
        if kind is None:
            kind = numeric.classify(value)
        elif not isinstance(kind, NumberKind):
            raise TypeError(f"kind must be a NumberKind, got {type(kind).__name__}")
        self._value = numeric.cast(kind, value)
        self._unit = unit
        self._kind = kind

    @classmethod
    def _of(cls, kind: NumberKind, value: Any, unit: Unit) -> "Quantity":
        # results of arithmetic are already represented in `kind`
        q = cls.__new__(cls)
        q._value = value
        q._unit = unit
        q._kind = kind
        return q

    @staticmethod
    def _wrap(other: Any) -> "Quantity | None":
        if isinstance(other, Quantity):
            return other
        if isinstance(other, Number) and not isinstance(other, bool):
            return Quantity(other, ONE)
        return None

    # --- accessors ---
    @property
    def value(self) -> Any:
        return self._value

    @property
    def unit(self) -> Unit:
        return self._unit

    @property
    def kind(self) -> NumberKind:
        return self._kind

    @property
    def dimension(self) -> Dim:
        return self._unit.dimension

    # --- conversion ---
    def _rebase(self, other: "Quantity", action: str) -> Any:
        """Return ``other``'s value expressed in ``self.unit``."""
        if other._unit == self._unit:
            return other._value
        if other._unit.dimension != self._unit.dimension:
            raise IncommensurableError(other._unit, self._unit, action)
        converter = other._unit.get_converter_to(self._unit)
        with localcontext(numeric.DECIMAL_CONTEXT):
            return converter.apply(numeric.as_python(other._kind, other._value))

    def to(self, unit: Unit) -> "Quantity":
        """Return this quantity expressed in ``unit``, keeping its numeric kind where exact."""
        if not isinstance(unit, Unit):
            raise TypeError(f"Expected a Unit, got {type(unit).__name__}")
        if unit == self._unit:
            return self
        if unit.dimension != self._unit.dimension:
            raise IncommensurableError(self._unit, unit, "convert between")
        converter = self._unit.get_converter_to(unit)
        with localcontext(numeric.DECIMAL_CONTEXT):
            converted = converter.apply(numeric.as_python(self._kind, self._value))
        kind, value = numeric.narrow(self._kind, converted)
        return Quantity._of(kind, value, unit)

    def to_system_unit(self) -> "Quantity":
        return self.to(self._unit.system_unit)

    def float_value(self, unit: Unit | None = None) -> float:
        q = self if unit is None else self.to(unit)
        return float(q._value)

    def int_value(self, unit: Unit | None = None) -> int:
        """Value in ``unit`` truncated towards zero."""
        q = self if unit is None else self.to(unit)
        return int(q._value)

    # --- arithmetic ---
    def _additive(self, other: Any, op: numeric.BinaryOp, action: str) -> "Quantity":
        if not isinstance(other, Quantity):
            return NotImplemented
        rebased = self._rebase(other, action)
        kind, value = numeric.combine(op, self._kind, self._value, other._kind, rebased)
        return Quantity._of(kind, value, self._unit)

    def __add__(self, other: "Quantity") -> "Quantity":
        return self._additive(other, operator.add, "add")

    def __sub__(self, other: "Quantity") -> "Quantity":
        return self._additive(other, operator.sub, "subtract")

    def add(self, other: "Quantity") -> "Quantity":
        return self + other

    def subtract(self, other: "Quantity") -> "Quantity":
        return self - other

    def __mul__(self, other: Operand) -> "Quantity":
        # quantity × unit: only the unit changes
        if isinstance(other, Unit):
            return Quantity._of(self._kind, self._value, self._unit * other)
        o = self._wrap(other)
        if o is None:
            return NotImplemented
        kind, value = numeric.combine(operator.mul, self._kind, self._value, o._kind, o._value)
        return Quantity._of(kind, value, ProductUnit.get_product_instance(self._unit, o._unit))

    def __rmul__(self, other: Operand) -> "Quantity":
        # allows 3 * (2 m) -> 6 m and METRE * (2 s)
        if isinstance(other, Unit):
            return Quantity._of(self._kind, self._value, other * self._unit)
        o = self._wrap(other)
        if o is None:
            return NotImplemented
        return o.__mul__(self)

    def __truediv__(self, other: Operand) -> "Quantity":
        if isinstance(other, Unit):
            return Quantity._of(self._kind, self._value, self._unit / other)
        o = self._wrap(other)
        if o is None:
            return NotImplemented
        kind, value = numeric.combine(operator.truediv, self._kind, self._value, o._kind, o._value)
        return Quantity._of(kind, value, ProductUnit.get_quotient_instance(self._unit, o._unit))

    def __rtruediv__(self, other: Operand) -> "Quantity":
        o = self._wrap(other)
        if o is None:
            return NotImplemented
        return o.__truediv__(self)

    def multiply(self, other: Operand) -> "Quantity":
        return self * other

    def divide(self, other: Operand) -> "Quantity":
        return self / other

    def inverse(self) -> "Quantity":
        """Return ``1/value`` in ``ONE / unit``."""
        kind, value = numeric.evaluate(self._kind, operator.truediv, 1, self._value)
        return Quantity._of(kind, value, ProductUnit.get_quotient_instance(ONE, self._unit))

    def __pow__(self, n: int) -> "Quantity":
        if isinstance(n, bool) or not isinstance(n, int):
            return NotImplemented
        kind, value = numeric.evaluate(self._kind, operator.pow, self._value, n)
        return Quantity._of(kind, value, self._unit ** n)

    def __neg__(self) -> "Quantity":
        kind, value = numeric.evaluate(self._kind, operator.sub, 0, self._value)
        return Quantity._of(kind, value, self._unit)

    def __pos__(self) -> "Quantity":
        return self

    def __abs__(self) -> "Quantity":
        if numeric.is_nan(self._value):
            return self
        return -self if numeric.compare(self._kind, self._value, self._kind, 0) < 0 else self

    # --- comparisons ---
    def compare_to(self, other: "Quantity") -> int:
        """
        Three-way comparison after rebasing ``other`` onto this unit: -1, 0 or 1.

        Float-backed amounts within a relative ``numeric.FLOAT_REL_TOL`` compare
        as 0; integer and decimal amounts compare exactly. NaN amounts are
        unordered and raise ``ValueError``.
        """
        if not isinstance(other, Quantity):
            raise TypeError(f"Cannot compare Quantity with type {type(other)}")
        rebased = self._rebase(other, "compare")
        return numeric.compare(self._kind, self._value, other._kind, rebased)

    def __eq__(self, other: object) -> bool:
        """
        Equality after rebasing ``other`` onto this unit, tolerant for float
        amounts as in ``compare_to`` (so ``0.1 m + 0.2 m == 0.3 m``). A NaN
        amount equals nothing.
        """
        if not isinstance(other, Quantity):
            return NotImplemented
        if not self._unit.is_compatible(other._unit):
            return False
        rebased = self._rebase(other, "compare")
        return numeric.equal(self._kind, self._value, other._kind, rebased)

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    # Equality rebases across units, so no hash can agree with it; see as_key().
    __hash__ = None  # type: ignore[assignment]

    def __lt__(self, other: "Quantity") -> bool:
        return self.compare_to(other) < 0

    def __le__(self, other: "Quantity") -> bool:
        return self.compare_to(other) <= 0

    def __gt__(self, other: "Quantity") -> bool:
        return self.compare_to(other) > 0

    def __ge__(self, other: "Quantity") -> bool:
        return self.compare_to(other) >= 0

    def is_equivalent_to(self, other: "Quantity") -> bool:
        """True when ``other`` is commensurable and has the same magnitude."""
        return self == other

    def as_key(self, precision: int = DEFAULT_KEY_PRECISION) -> tuple:
        """
        Returns a hashable, discretized key for this quantity.

        Use it to group quantities in dictionaries or sets: two quantities
        that are equal up to ``precision`` decimal places of their system-unit
        magnitude produce the same key.

        Returns
        -------
        tuple
            ``(dimension, rounded system-unit magnitude)``.
        """
        magnitude = round(self.to_system_unit().float_value(), precision)
        # -0.0 and 0.0 round identically but must produce one key
        if magnitude == 0.0:
            magnitude = 0.0
        return (self.dimension, magnitude)

    # --- rendering ---
    def __repr__(self) -> str:
        value = numeric.as_python(self._kind, self._value)
        unit = str(self._unit)
        if self._unit == ONE or not unit:
            return f"{value}"
        return f"{value} {unit}"

    def __format__(self, spec: str) -> str:
        """
        Custom string formatting for Quantity objects.

        Supported specifiers
        --------------------
        "" (empty), or "native"
            Display the quantity in its current unit (default).
        "system"
            Display the quantity converted to its system unit.
        """
        spec = (spec or "").strip().lower()
        if spec in ("", "native"):
            return repr(self)
        if spec == "system":
            return repr(self.to_system_unit())
        raise ValueError("Unknown format spec; use '', 'native', or 'system'")


__all__ = ["Quantity", "NumberKind", "DEFAULT_KEY_PRECISION"]
