"""
Unitum: an immutable algebra of physical units, unit conversions and quantities.

Unitum builds canonical compound units from rational powers of base units,
derives the converter chain from any unit to its coherent system unit, and
performs unit-consistent arithmetic between quantities backed by different
numeric representations (64-bit float and integer, 32-bit float, decimal, or
any other Python number).
"""

from importlib import metadata as _metadata
import logging as _logging

from unitum.core.converter import (
    IDENTITY,
    CompositeConverter,
    ExpConverter,
    IdentityConverter,
    LinearConverter,
    LogConverter,
    PowerConverter,
    RationalConverter,
    UnitConverter,
)
from unitum.core.dimensions import (
    AMOUNT,
    CURRENT,
    DIM_0,
    LENGTH,
    LUMINOUS,
    MASS,
    NONE,
    TEMPERATURE,
    TIME,
    Dimension,
)
from unitum.core.exceptions import (
    IncommensurableError,
    IndexOutOfRangeError,
    InvalidRootError,
    NonInvertibleConverterError,
    QuantityOverflowError,
    UnsupportedConversionError,
)
from unitum.core.numeric import NumberKind
from unitum.core.product import ONE, Element, ProductUnit
from unitum.core.quantity import Quantity
from unitum.core.range import QuantityRange
from unitum.core.unit import AlternateUnit, BaseUnit, TransformedUnit, Unit

__author__ = "Unitum contributors"
__license__ = "MIT"

# Try to read the installed package version first; fall back to pyproject.toml for local dev.
try:
    __version__ = _metadata.version("unitum")
except _metadata.PackageNotFoundError:
    import tomllib
    with open("pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

# Library logging: records are only emitted if the application configures a handler.
_logging.getLogger(__name__).addHandler(_logging.NullHandler())

__all__ = [
    "__version__", "__author__", "__license__",
    # dimensions
    "Dimension", "DIM_0", "NONE", "LENGTH", "MASS", "TIME", "CURRENT",
    "TEMPERATURE", "AMOUNT", "LUMINOUS",
    # converters
    "UnitConverter", "IdentityConverter", "LinearConverter", "RationalConverter",
    "PowerConverter", "LogConverter", "ExpConverter", "CompositeConverter", "IDENTITY",
    # units
    "Unit", "BaseUnit", "AlternateUnit", "TransformedUnit", "ProductUnit", "Element", "ONE",
    # quantities
    "Quantity", "NumberKind", "QuantityRange",
    # errors
    "InvalidRootError", "NonInvertibleConverterError", "IncommensurableError",
    "UnsupportedConversionError", "QuantityOverflowError", "IndexOutOfRangeError",
]
