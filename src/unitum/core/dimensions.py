# unitum.core.dimensions

from __future__ import annotations
from numbers import Integral
from typing import Iterable, Union, Tuple, TypeAlias, Any

from unitum.core.exceptions import InvalidRootError

# --- Public typing -----------------------------------------------------------
Dim: TypeAlias = "Dimension"
DimTuple = Tuple[int, int, int, int, int, int, int]
DimLike = Union["Dimension", DimTuple, Iterable[int]]

_AXES = ("L", "M", "T", "I", "Θ", "N", "J")


def _as_exponent(x: Any) -> int:
    if isinstance(x, bool):
        raise TypeError("Dimension exponents must be integers, got bool")
    if isinstance(x, Integral):
        return int(x)
    # allow 1.0 / Fraction(2, 1) style values as long as they are integral
    try:
        as_int = int(x)
    except (TypeError, ValueError) as exc:
        raise TypeError(f"Dimension exponents must be integers, got {type(x).__name__}") from exc
    if as_int != x:
        raise ValueError(f"Dimension exponents must be integral, got {x!r}")
    return as_int


# --- Core object -------------------------------------------------------------

class Dimension(tuple):
    """
    Immutable 7-length vector of integer exponents for SI base dimensions.

    Tuple subclass => hashable, comparable to plain tuples, usable as dict keys.
    """

    __slots__ = ()

    def __new__(cls, data: DimLike = (0, 0, 0, 0, 0, 0, 0)) -> "Dimension":
        if isinstance(data, Dimension):
            return data

        t = tuple(_as_exponent(x) for x in data)
        if len(t) != 7:
            raise ValueError("Dimension must have length 7 (L, M, T, I, Θ, N, J).")
        return tuple.__new__(cls, t)

    # --- Algebra (operator overloads) ---
    def __mul__(self, other: DimLike) -> "Dimension": # type: ignore[override]
        o = Dimension(other)
        return Dimension(x + y for x, y in zip(self, o, strict=True))

    def __truediv__(self, other: DimLike) -> "Dimension":
        o = Dimension(other)
        return Dimension(x - y for x, y in zip(self, o, strict=True))

    def __pow__(self, n: int, modulo: Any | None = None) -> "Dimension":
        # Python may call __pow__ with a third arg (modulo); reject it explicitly
        if modulo is not None:
            raise TypeError("Modulo exponentiation is not supported for Dimension.")
        if isinstance(n, bool) or not isinstance(n, Integral):
            raise TypeError(f"Exponent must be an int, got {type(n).__name__}")
        return Dimension(e * int(n) for e in self)

    def root(self, n: int) -> "Dimension":
        """Divide every exponent by ``n``; fractional base dimensions are not representable."""
        if isinstance(n, bool) or not isinstance(n, Integral):
            raise TypeError(f"Root order must be an int, got {type(n).__name__}")
        if n <= 0:
            raise ValueError(f"Root order must be a positive integer, got {n}")
        n = int(n)
        if n == 1:
            return self
        for axis, e in zip(_AXES, self, strict=True):
            if e % n != 0:
                raise InvalidRootError(
                    f"Cannot take root {n} of {self!r}: exponent {e} of [{axis}] is not divisible by {n}"
                )
        return Dimension(e // n for e in self)

    def __rtruediv__(self, other: DimLike) -> "Dimension":
        """Handles (tuple / Dimension) by calculating (other / self)."""
        o = Dimension(other)
        return o / self

    def __rmul__(self, other: Any) -> "Dimension":
        """Prevent (int * Dimension) from falling back to tuple repetition."""
        return NotImplemented

    def __add__(self, other: Any) -> "Dimension":
        """Block tuple concatenation (e.g., LENGTH + MASS)."""
        return NotImplemented

    def __radd__(self, other: Any) -> "Dimension":
        """Block tuple concatenation (e.g., (1,2) + MASS)."""
        return NotImplemented

    # --- Helpers ---
    @property
    def is_dimensionless(self) -> bool:
        return all(x == 0 for x in self)

    def as_tuple(self) -> DimTuple:
        return tuple(self)  # type: ignore[return-value]

    def __repr__(self) -> str:
        parts = "".join(f"[{n}^{v}]" for n, v in zip(_AXES, self, strict=True) if v != 0)
        return parts or "[1]"

# --- Function shims ----------------------------------------------------------

def dim_mul(a: DimLike, b: DimLike) -> Dimension:
    return Dimension(a) * b

def dim_div(a: DimLike, b: DimLike) -> Dimension:
    return Dimension(a) / b

def dim_pow(a: DimLike, n: int) -> Dimension:
    return Dimension(a) ** n

def dim_root(a: DimLike, n: int) -> Dimension:
    return Dimension(a).root(n)

# --- Public constants --------------------------------------------------------

DIM_0: Dim       = Dimension((0, 0, 0, 0, 0, 0, 0))
NONE: Dim        = DIM_0
LENGTH: Dim      = Dimension((1, 0, 0, 0, 0, 0, 0))
MASS: Dim        = Dimension((0, 1, 0, 0, 0, 0, 0))
TIME: Dim        = Dimension((0, 0, 1, 0, 0, 0, 0))
CURRENT: Dim     = Dimension((0, 0, 0, 1, 0, 0, 0))
TEMPERATURE: Dim = Dimension((0, 0, 0, 0, 1, 0, 0))
AMOUNT: Dim      = Dimension((0, 0, 0, 0, 0, 1, 0))
LUMINOUS: Dim    = Dimension((0, 0, 0, 0, 0, 0, 1))
