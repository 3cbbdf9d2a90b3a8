"""
unitum.core.product
===================

Canonical compound units.

A ``ProductUnit`` is a collection of ``Element(unit, pow, root)`` terms, each
meaning ``unit^(pow/root)``. Every construction path goes through a single
merge step which:

- combines the terms that reference the same unit,
- reduces each ``(pow, root)`` pair by its greatest common divisor,
- drops terms whose combined power is zero,
- returns ``ONE`` when nothing is left, and the bare unit when a single term
  with ``pow == root`` is left.

so that, for instance, ``METRE ** 2 / METRE`` is ``METRE`` itself and
``METRE * SECOND`` equals ``SECOND * METRE``.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key, reduce
from math import gcd
import logging
import threading
from typing import Dict, List, Sequence, Tuple

from unitum.core.converter import IDENTITY, UnitConverter
from unitum.core.dimensions import DIM_0, Dim
from unitum.core.exceptions import IndexOutOfRangeError, UnsupportedConversionError
from unitum.core.unit import Unit
from unitum.core.utils import format_unit_terms

_log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Element:
    """A single ``unit^(pow/root)`` term of a product unit."""

    unit: Unit
    pow: int
    root: int

    def __post_init__(self) -> None:
        if not isinstance(self.unit, Unit):
            raise TypeError(f"Element unit must be a Unit, got {type(self.unit).__name__}")
        if self.pow == 0:
            raise ValueError("Element power must be non-zero")
        if self.root <= 0:
            raise ValueError("Element root must be a positive integer")


def _reduced(unit: Unit, pow_: int, root: int) -> Element:
    d = gcd(abs(pow_), root)
    return Element(unit, pow_ // d, root // d)


def _compare_elements(e0: Element, e1: Element) -> int:
    """Order elements by their system unit's symbol, falling back to its string form."""
    sys0 = e0.unit.system_unit
    sys1 = e1.unit.system_unit
    sym0 = sys0.symbol
    sym1 = sys1.symbol
    if sym0 is not None and sym1 is not None:
        k0, k1 = sym0, sym1
    else:
        k0, k1 = str(sys0), str(sys1)
    if k0 != k1:
        return -1 if k0 < k1 else 1
    # same system unit (km and m in one product): order by the units themselves
    s0, s1 = repr(e0), repr(e1)
    return (s0 > s1) - (s0 < s1)


def _sorted_elements(elements: Sequence[Element]) -> Tuple[Element, ...]:
    if len(elements) <= 1:
        return tuple(elements)
    return tuple(sorted(elements, key=cmp_to_key(_compare_elements)))


def _equal_arbitrary_order(e0: Sequence[Element], e1: Sequence[Element]) -> bool:
    if len(e0) != len(e1):
        return False
    for left in e0:
        for right in e1:
            if left.unit == right.unit:
                if left.pow != right.pow or left.root != right.root:
                    return False
                break
        else:
            return False
    return True


class ProductUnit(Unit):
    """
    A unit formed as the product of rational powers of other units.

    Instances are normally obtained through ``get_product_instance``,
    ``get_quotient_instance``, ``get_pow_instance`` and ``get_root_instance``
    (or the ``*``, ``/``, ``**`` operators and ``root()`` of any unit), which
    always return the canonical form. The constructor is reserved for
    already-canonical element sequences; ``ProductUnit()`` is the
    dimensionless unit ``ONE``.
    """

    __slots__ = ("_elements", "_hash", "_hash_lock")

    def __init__(self, elements: Sequence[Element] = ()) -> None:
        self._elements: Tuple[Element, ...] = tuple(elements)
        self._hash: int | None = None
        self._hash_lock = threading.Lock()

    # --- factories ---------------------------------------------------------
    @staticmethod
    def _elements_of(unit: Unit) -> Tuple[Element, ...]:
        if isinstance(unit, ProductUnit):
            return unit._elements
        if not isinstance(unit, Unit):
            raise TypeError(f"Expected a Unit, got {type(unit).__name__}")
        return (Element(unit, 1, 1),)

    @staticmethod
    def get_product_instance(left: Unit, right: Unit) -> Unit:
        """Return ``left * right`` in canonical form."""
        return _merge(ProductUnit._elements_of(left), ProductUnit._elements_of(right))

    @staticmethod
    def get_quotient_instance(left: Unit, right: Unit) -> Unit:
        """Return ``left / right`` in canonical form."""
        right_elems = tuple(
            Element(e.unit, -e.pow, e.root) for e in ProductUnit._elements_of(right)
        )
        return _merge(ProductUnit._elements_of(left), right_elems)

    @staticmethod
    def get_pow_instance(unit: Unit, n: int) -> Unit:
        """Return ``unit ** n`` in canonical form."""
        elems = ProductUnit._elements_of(unit)
        if n == 0:
            return ONE
        return _merge(tuple(_reduced(e.unit, e.pow * n, e.root) for e in elems), ())

    @staticmethod
    def get_root_instance(unit: Unit, n: int) -> Unit:
        """Return the ``n``-th root of ``unit`` in canonical form."""
        if isinstance(n, bool) or not isinstance(n, int):
            raise TypeError(f"Root order must be an int, got {type(n).__name__}")
        if n <= 0:
            raise ValueError(f"Root order must be a positive integer, got {n}")
        elems = ProductUnit._elements_of(unit)
        return _merge(tuple(_reduced(e.unit, e.pow, e.root * n) for e in elems), ())

    # --- element access ----------------------------------------------------
    @property
    def elements(self) -> Tuple[Element, ...]:
        return self._elements

    @property
    def unit_count(self) -> int:
        return len(self._elements)

    def _element(self, index: int) -> Element:
        if not 0 <= index < len(self._elements):
            raise IndexOutOfRangeError(
                f"Element index {index} out of range [0, {len(self._elements)})"
            )
        return self._elements[index]

    def get_unit(self, index: int) -> Unit:
        return self._element(index).unit

    def get_unit_pow(self, index: int) -> int:
        return self._element(index).pow

    def get_unit_root(self, index: int) -> int:
        return self._element(index).root

    def get_base_units(self) -> Dict[Unit, int]:
        """Map each element's unit to its power. Root exponents are not represented."""
        return {e.unit: e.pow for e in self._elements}

    # --- Unit protocol -----------------------------------------------------
    @property
    def symbol(self) -> str | None:
        return None

    @property
    def dimension(self) -> Dim:
        dimension = DIM_0
        for e in self._elements:
            dimension = dimension * (e.unit.dimension ** e.pow).root(e.root)
        return dimension

    @property
    def system_unit(self) -> Unit:
        system: Unit = ONE
        for e in self._elements:
            unit = e.unit.system_unit ** e.pow
            unit = unit.root(e.root)
            system = system * unit
        return system

    @property
    def is_system_unit(self) -> bool:
        return all(e.unit.is_system_unit for e in self._elements)

    @property
    def system_converter(self) -> UnitConverter:
        converter: UnitConverter = IDENTITY
        for e in self._elements:
            cvtr = e.unit.system_converter
            if not cvtr.is_linear:
                _log.debug("rejecting system conversion of %s: %r is non-linear", self, cvtr)
                raise UnsupportedConversionError(f"{e.unit} is non-linear, cannot convert")
            if e.root != 1:
                _log.debug("rejecting system conversion of %s: %s^(%d/%d)", self, e.unit, e.pow, e.root)
                raise UnsupportedConversionError(
                    f"{e.unit} holds a base unit with fractional exponent"
                )
            pow_ = e.pow
            if pow_ < 0:
                pow_ = -pow_
                cvtr = cvtr.inverse()
            for _ in range(pow_):
                converter = converter.concatenate(cvtr)
        return converter

    # --- equality & hashing ------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if isinstance(other, ProductUnit):
            return _equal_arbitrary_order(self._elements, other._elements)
        if isinstance(other, Unit):
            # a one-element wrapper equals the unit it wraps
            return (
                len(self._elements) == 1
                and self._elements[0].pow == self._elements[0].root
                and other == self._elements[0].unit
            )
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def _calculate_hash(self) -> int:
        if len(self._elements) == 1 and self._elements[0].pow == self._elements[0].root:
            return hash(self._elements[0].unit)
        return hash(_sorted_elements(self._elements))

    def __hash__(self) -> int:
        h = self._hash
        if h is None:
            with self._hash_lock:
                if self._hash is None:
                    self._hash = self._calculate_hash()
                h = self._hash
        return h

    # --- rendering ---------------------------------------------------------
    def __str__(self) -> str:
        return format_unit_terms((str(e.unit), e.pow, e.root) for e in self._elements)

    def __repr__(self) -> str:
        return f"ProductUnit({str(self)!r})"


def _merge(left_elems: Sequence[Element], right_elems: Sequence[Element]) -> Unit:
    result: List[Element] = []
    for left in left_elems:
        p1, r1 = left.pow, left.root
        p2, r2 = 0, 1
        for right in right_elems:
            if left.unit == right.unit:
                p2, r2 = right.pow, right.root
                break
        pow_ = p1 * r2 + p2 * r1
        root = r1 * r2
        if pow_ != 0:
            result.append(_reduced(left.unit, pow_, root))

    for right in right_elems:
        if not any(right.unit == left.unit for left in left_elems):
            result.append(right)

    if not result:
        return ONE
    if len(result) == 1 and result[0].pow == result[0].root:
        return result[0].unit
    return ProductUnit(result)


ONE: ProductUnit = ProductUnit()

__all__ = ["Element", "ProductUnit", "ONE"]
