from __future__ import annotations

from dataclasses import dataclass

from unitum.core import numeric
from unitum.core.quantity import Quantity


@dataclass(frozen=True, slots=True)
class QuantityRange:
    """
    A closed interval of quantities with an optional resolution.

    A missing bound means the range is unbounded on that side. The resolution
    is metadata only; it plays no part in ``contains``.
    """

    minimum: Quantity | None
    maximum: Quantity | None
    resolution: Quantity | None = None

    def __post_init__(self) -> None:
        for name in ("minimum", "maximum", "resolution"):
            bound = getattr(self, name)
            if bound is not None and not isinstance(bound, Quantity):
                raise TypeError(f"{name} must be a Quantity or None, got {type(bound).__name__}")

    @classmethod
    def of(
        cls,
        minimum: Quantity | None,
        maximum: Quantity | None,
        resolution: Quantity | None = None,
    ) -> "QuantityRange":
        return cls(minimum, maximum, resolution)

    @property
    def has_minimum(self) -> bool:
        return self.minimum is not None

    @property
    def has_maximum(self) -> bool:
        return self.maximum is not None

    def contains(self, q: object) -> bool:
        """
        Return True if ``q`` lies within ``[minimum, maximum]``.

        Anything that is not a quantity, a NaN amount, or a quantity whose
        unit is not commensurable with a present bound, is not contained.
        """
        if not isinstance(q, Quantity):
            return False
        if numeric.is_nan(q.value):
            return False
        bounds = [b for b in (self.minimum, self.maximum) if b is not None]
        if not all(q.unit.is_compatible(b.unit) for b in bounds):
            return False
        if self.minimum is not None and q < self.minimum:
            return False
        if self.maximum is not None and q > self.maximum:
            return False
        return True

    def __contains__(self, q: object) -> bool:
        return self.contains(q)

    def __str__(self) -> str:
        text = f"min= {self.minimum!r}, max= {self.maximum!r}"
        if self.resolution is not None:
            text += f", res= {self.resolution!r}"
        return text


__all__ = ["QuantityRange"]
