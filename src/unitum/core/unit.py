from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Integral, Number
from typing import TYPE_CHECKING, Any

from unitum.core.converter import IDENTITY, UnitConverter
from unitum.core.dimensions import Dim, Dimension
from unitum.core.exceptions import IncommensurableError

if TYPE_CHECKING:  # pragma: no cover - imported only for type checking
    from unitum.core.quantity import Quantity


class Unit:
    """
    Abstract unit of measurement.

    Concrete units provide ``symbol``, ``dimension``, ``system_unit`` and
    ``system_converter`` (the transform from an amount in this unit to an
    amount in ``system_unit``). Composition operators always go through the
    product-unit algebra, so the results are in canonical form::

        METRE ** 2 / METRE == METRE
        METRE * SECOND == SECOND * METRE
    """

    __slots__ = ()

    symbol: str | None

    @property
    def dimension(self) -> Dim:
        raise NotImplementedError

    @property
    def system_unit(self) -> "Unit":
        raise NotImplementedError

    @property
    def system_converter(self) -> UnitConverter:
        raise NotImplementedError

    @property
    def is_system_unit(self) -> bool:
        return self.system_unit == self

    def to_system_unit(self) -> "Unit":
        return self.system_unit

    # --- compatibility & conversion ---
    def is_compatible(self, other: "Unit") -> bool:
        """Two units are compatible (commensurable) iff their dimensions are equal."""
        if not isinstance(other, Unit):
            return False
        return self.dimension == other.dimension

    def get_converter_to(self, other: "Unit") -> UnitConverter:
        """Converter taking an amount in ``self`` to an amount in ``other``."""
        if not isinstance(other, Unit):
            raise TypeError(f"Expected a Unit, got {type(other).__name__}")
        if self == other:
            return IDENTITY
        if self.dimension != other.dimension:
            raise IncommensurableError(self, other, "convert between")
        return self.system_converter.concatenate(other.system_converter.inverse())

    def is_equivalent_to(self, other: "Unit") -> bool:
        """True if amounts convert between the two units unchanged (e.g. ``Ω`` and ``V/A``)."""
        if not self.is_compatible(other):
            return False
        return self.get_converter_to(other).is_identity

    def transform(self, converter: UnitConverter, symbol: str | None = None) -> "Unit":
        """Derive a unit whose amounts map onto this one through ``converter``."""
        if not isinstance(converter, UnitConverter):
            raise TypeError(f"Expected a UnitConverter, got {type(converter).__name__}")
        if converter.is_identity and symbol is None:
            return self
        return TransformedUnit(self, converter, symbol)

    # --- algebra ---
    def __mul__(self, other: "Unit") -> "Unit":
        from unitum.core.product import ProductUnit

        if not isinstance(other, Unit):
            return NotImplemented
        return ProductUnit.get_product_instance(self, other)

    def __truediv__(self, other: "Unit") -> "Unit":
        from unitum.core.product import ProductUnit

        if not isinstance(other, Unit):
            return NotImplemented
        return ProductUnit.get_quotient_instance(self, other)

    def __rtruediv__(self, n: Any) -> "Unit":
        if isinstance(n, Number) and not isinstance(n, bool) and n == 1:
            return self.inverse()
        if isinstance(n, Number):
            raise TypeError(
                f"Invalid operation: cannot divide {n} by a Unit ({self}). "
                "Only 1/unit (reciprocal) is supported."
            )
        return NotImplemented

    def __pow__(self, n: int) -> "Unit":
        from unitum.core.product import ProductUnit

        if isinstance(n, bool) or not isinstance(n, Integral):
            raise TypeError(f"Unit exponent must be an int, got {type(n).__name__}; use root() for roots")
        return ProductUnit.get_pow_instance(self, int(n))

    def root(self, n: int) -> "Unit":
        from unitum.core.product import ProductUnit

        return ProductUnit.get_root_instance(self, n)

    def inverse(self) -> "Unit":
        from unitum.core.product import ONE, ProductUnit

        return ProductUnit.get_quotient_instance(ONE, self)

    def __rmul__(self, value: Any) -> "Quantity":
        from unitum.core.quantity import Quantity

        if isinstance(value, Number) and not isinstance(value, bool):
            return Quantity(value, self)
        return NotImplemented

    def __str__(self) -> str:
        return self.symbol or ""


@dataclass(frozen=True, slots=True, eq=True, repr=False)
class BaseUnit(Unit):
    """A coherent unit defined directly by a dimension (metre, second, ...)."""

    symbol: str
    dim: Dim

    def __post_init__(self) -> None:
        if not isinstance(self.symbol, str) or not self.symbol:
            raise ValueError("BaseUnit symbol must be a non-empty string")
        object.__setattr__(self, "dim", Dimension(self.dim))

    @property
    def dimension(self) -> Dim:
        return self.dim

    @property
    def system_unit(self) -> "Unit":
        return self

    @property
    def system_converter(self) -> UnitConverter:
        return IDENTITY

    @property
    def is_system_unit(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"BaseUnit({self.symbol!r}, {self.dim!r})"


@dataclass(frozen=True, slots=True, eq=True, repr=False)
class AlternateUnit(Unit):
    """A named coherent unit standing for a system unit of the same dimension (Ω for V/A)."""

    symbol: str
    parent: Unit

    def __post_init__(self) -> None:
        if not isinstance(self.symbol, str) or not self.symbol:
            raise ValueError("AlternateUnit symbol must be a non-empty string")
        if not isinstance(self.parent, Unit):
            raise TypeError(f"AlternateUnit parent must be a Unit, got {type(self.parent).__name__}")
        if not self.parent.is_system_unit:
            raise ValueError(f"AlternateUnit parent '{self.parent}' must be a system unit")

    @property
    def dimension(self) -> Dim:
        return self.parent.dimension

    @property
    def system_unit(self) -> "Unit":
        return self

    @property
    def system_converter(self) -> UnitConverter:
        return self.parent.system_converter

    @property
    def is_system_unit(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"AlternateUnit({self.symbol!r}, {self.parent})"


@dataclass(frozen=True, slots=True, eq=True, repr=False)
class TransformedUnit(Unit):
    """A unit whose amounts convert to ``parent`` amounts through ``converter`` (km, °C, ...)."""

    parent: Unit
    converter: UnitConverter
    symbol: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.parent, Unit):
            raise TypeError(f"TransformedUnit parent must be a Unit, got {type(self.parent).__name__}")
        if not isinstance(self.converter, UnitConverter):
            raise TypeError(f"Expected a UnitConverter, got {type(self.converter).__name__}")

    @property
    def dimension(self) -> Dim:
        return self.parent.dimension

    @property
    def system_unit(self) -> "Unit":
        return self.parent.system_unit

    @property
    def system_converter(self) -> UnitConverter:
        return self.converter.concatenate(self.parent.system_converter)

    @property
    def is_system_unit(self) -> bool:
        return False

    def transform(self, converter: UnitConverter, symbol: str | None = None) -> "Unit":
        if not isinstance(converter, UnitConverter):
            raise TypeError(f"Expected a UnitConverter, got {type(converter).__name__}")
        if converter.is_identity and symbol is None:
            return self
        folded = converter.concatenate(self.converter)
        if folded.is_identity and symbol is None:
            return self.parent
        return TransformedUnit(self.parent, folded, symbol)

    def __str__(self) -> str:
        if self.symbol:
            return self.symbol
        return f"{self.parent}[{self.converter!r}]"

    def __repr__(self) -> str:
        return f"TransformedUnit({self.parent}, {self.converter!r}, symbol={self.symbol!r})"


__all__ = ["Unit", "BaseUnit", "AlternateUnit", "TransformedUnit"]
