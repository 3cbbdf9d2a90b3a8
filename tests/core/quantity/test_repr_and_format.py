from decimal import Decimal

import numpy as np
import pytest

from unitum.core.quantity import Quantity
from tests.catalog import KELVIN, KILOMETRE, METRE, SECOND, SQUARE_OHM

# -------------------------------
# __repr__: pretty printing
# -------------------------------

@pytest.mark.parametrize("q,expected", [
    (Quantity(2, METRE), "2 m"),
    (Quantity(3, METRE / SECOND), "3 m/s"),
    (Quantity(2, SQUARE_OHM), "2 Ω²"),
    (Quantity(Decimal("298.15"), KELVIN), "298.15 K"),
    (Quantity(np.float32(1.5), KILOMETRE), "1.5 km"),
    (Quantity(9.8, METRE / SECOND ** 2), "9.8 m/s²"),
])
def test_repr(q, expected):
    assert repr(q) == expected

def test_repr_of_dimensionless_quantity_is_the_bare_value():
    assert repr(Quantity(1.5)) == "1.5"
    assert repr(Quantity(3, METRE) / Quantity(2, METRE)) == "1.5"

# -------------------------------
# __format__
# -------------------------------

def test_format_native_is_default():
    q = Quantity(2, KILOMETRE)
    assert f"{q}" == "2 km"
    assert f"{q:native}" == "2 km"
    assert format(q, " NATIVE ") == "2 km"

def test_format_system():
    assert f"{Quantity(2, KILOMETRE):system}" == "2000 m"
    assert f"{Quantity(36, KILOMETRE / SECOND):system}" == "36000 m/s"

def test_format_unknown_spec_raises():
    with pytest.raises(ValueError):
        format(Quantity(2, METRE), "si")
