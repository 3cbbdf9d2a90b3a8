import logging
import threading

import pytest

from unitum.core.converter import IDENTITY, LinearConverter, PowerConverter, RationalConverter
from unitum.core.dimensions import DIM_0, LENGTH, MASS, dim_div, dim_mul
from unitum.core.exceptions import (
    IndexOutOfRangeError,
    InvalidRootError,
    UnsupportedConversionError,
)
from unitum.core.product import ONE, Element, ProductUnit
from tests.catalog import (
    AMPERE,
    CELSIUS,
    CENTIMETRE,
    HOUR,
    KILOGRAM,
    KILOMETRE,
    METRE,
    NEPER,
    NEWTON,
    OHM,
    SECOND,
    SQUARE_METRE,
)

BASE_UNITS = [METRE, KILOGRAM, SECOND, AMPERE, OHM, KILOMETRE, HOUR]


# -------------------------------
# Canonical form
# -------------------------------

@pytest.mark.parametrize("a", BASE_UNITS)
def test_collapse_law(a):
    collapsed = (a ** 2) / a
    assert collapsed == a
    assert collapsed is a  # the bare unit itself, not a one-element wrapper

@pytest.mark.parametrize("a", BASE_UNITS)
def test_inverse_round_trip_is_one(a):
    assert ProductUnit.get_product_instance(a, a ** -1) is ONE
    assert a / a is ONE

@pytest.mark.parametrize("a,b", [
    (METRE, SECOND),
    (KILOGRAM, METRE / SECOND ** 2),
    (KILOMETRE, HOUR ** -1),
    (METRE ** 3, KILOGRAM.root(2)),
])
def test_product_is_commutative_and_hashes_identically(a, b):
    ab = ProductUnit.get_product_instance(a, b)
    ba = ProductUnit.get_product_instance(b, a)
    assert ab == ba
    assert hash(ab) == hash(ba)

def test_equality_is_independent_of_construction_order():
    n1 = (KILOGRAM * METRE) / SECOND ** 2
    n2 = (KILOGRAM / SECOND ** 2) * METRE
    n3 = KILOGRAM * (METRE / SECOND ** 2)
    assert n1 == n2 == n3
    assert len({n1, n2, n3}) == 1

@pytest.mark.regression(reason="Elements sharing a system unit (km·m) hashed differently depending on construction order")
def test_same_system_unit_elements_hash_identically():
    a = KILOMETRE * METRE
    b = METRE * KILOMETRE
    assert a == b
    assert hash(a) == hash(b)

def test_merge_combines_powers_of_the_same_unit():
    u = (METRE ** 3) * SECOND / (METRE * SECOND ** 2)
    assert isinstance(u, ProductUnit)
    assert u.get_base_units() == {METRE: 2, SECOND: -1}

def test_merge_drops_zero_powers():
    u = METRE * SECOND / SECOND
    assert u is METRE

def test_empty_product_is_one():
    assert ProductUnit() == ONE
    assert ProductUnit.get_quotient_instance(SQUARE_METRE, METRE ** 2) is ONE
    assert METRE ** 0 is ONE

def test_pow_and_root_are_reduced_by_gcd():
    u = (METRE ** 4).root(6)  # m^(4/6) -> m^(2/3)
    assert u.get_unit_pow(0) == 2
    assert u.get_unit_root(0) == 3

def test_root_of_square_collapses():
    assert (METRE ** 2).root(2) is METRE
    assert ((METRE ** 2) * (SECOND ** -4)).root(2) == METRE / SECOND ** 2

def test_fractional_powers_merge():
    half = METRE.root(2)
    assert half * half is METRE
    three_halves = METRE * half
    assert (three_halves.get_unit_pow(0), three_halves.get_unit_root(0)) == (3, 2)

def test_root_order_must_be_positive():
    with pytest.raises(ValueError):
        METRE.root(0)

def test_wrapper_equals_bare_unit():
    wrapper = ProductUnit([Element(METRE, 1, 1)])
    assert wrapper == METRE
    assert METRE == wrapper
    assert hash(wrapper) == hash(METRE)
    assert ProductUnit([Element(METRE, 2, 1)]) != METRE

def test_element_validation():
    with pytest.raises(ValueError):
        Element(METRE, 0, 1)
    with pytest.raises(ValueError):
        Element(METRE, 1, 0)
    with pytest.raises(TypeError):
        Element("m", 1, 1)

# -------------------------------
# Element access
# -------------------------------

def test_element_accessors():
    u = KILOGRAM * METRE / SECOND ** 2
    assert u.unit_count == 3
    found = {u.get_unit(i): (u.get_unit_pow(i), u.get_unit_root(i)) for i in range(u.unit_count)}
    assert found == {KILOGRAM: (1, 1), METRE: (1, 1), SECOND: (-2, 1)}

@pytest.mark.parametrize("index", [-1, 2, 100])
def test_element_access_out_of_range(index):
    u = METRE / SECOND
    with pytest.raises(IndexOutOfRangeError):
        u.get_unit(index)
    with pytest.raises(IndexError):
        u.get_unit_pow(index)
    with pytest.raises(IndexOutOfRangeError):
        u.get_unit_root(index)

def test_base_units_view_drops_roots():
    u = METRE.root(2) * SECOND ** -1
    assert u.get_base_units() == {METRE: 1, SECOND: -1}

# -------------------------------
# Dimension
# -------------------------------

@pytest.mark.parametrize("a,b", [
    (METRE, SECOND),
    (KILOGRAM * METRE, SECOND ** -2),
    (NEWTON, METRE),
    (KILOMETRE, HOUR ** -1),
])
def test_dimension_homomorphism(a, b):
    assert ProductUnit.get_product_instance(a, b).dimension == dim_mul(a.dimension, b.dimension)
    assert ProductUnit.get_quotient_instance(a, b).dimension == dim_div(a.dimension, b.dimension)

def test_dimension_of_roots():
    assert (METRE ** 2).root(2).dimension == LENGTH
    assert ONE.dimension == DIM_0
    assert (KILOGRAM ** 2 * METRE ** 4).root(2).dimension == dim_mul(MASS, LENGTH ** 2)

def test_dimension_of_irreducible_root_raises():
    with pytest.raises(InvalidRootError):
        _ = METRE.root(2).dimension

# -------------------------------
# System unit & converter
# -------------------------------

def test_system_unit_of_product():
    speed = KILOMETRE / HOUR
    assert speed.system_unit == METRE / SECOND
    assert not speed.is_system_unit
    assert (METRE / SECOND).is_system_unit
    assert ONE.is_system_unit
    assert ONE.system_unit is ONE

def test_system_converter_folds_element_converters():
    speed = KILOMETRE / HOUR
    c = speed.system_converter
    assert c.is_linear
    assert c.apply(36) == 10  # 36 km/h = 10 m/s

def test_system_converter_repeats_for_integer_powers():
    area = CENTIMETRE ** 2
    assert area.system_converter == RationalConverter(1, 10000)
    volume = KILOMETRE ** 3
    assert volume.system_converter == PowerConverter(10, 9)

def test_system_converter_of_coherent_product_is_identity():
    assert (KILOGRAM * METRE / SECOND ** 2).system_converter is IDENTITY

def test_system_converter_rejects_non_linear_elements():
    with pytest.raises(UnsupportedConversionError):
        _ = (NEPER * METRE).system_converter

def test_rejected_system_conversion_is_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="unitum")
    with pytest.raises(UnsupportedConversionError):
        _ = (NEPER * METRE).system_converter
    assert any("non-linear" in r.getMessage() for r in caplog.records)

def test_system_converter_rejects_fractional_exponents():
    with pytest.raises(UnsupportedConversionError):
        _ = (KILOMETRE.root(2) * SECOND).system_converter

def test_offset_converters_count_as_linear():
    c = (CELSIUS * METRE).system_converter
    assert c == LinearConverter(1, "273.15")

# -------------------------------
# Rendering
# -------------------------------

@pytest.mark.parametrize("unit,expected", [
    (KILOGRAM * METRE / SECOND ** 2, "kg·m/s²"),
    (ONE / METRE, "1/m"),
    (METRE.root(2), "m^(1/2)"),
    (ONE, "1"),
    (KILOMETRE / (HOUR * AMPERE), "km/(h·A)"),
])
def test_str(unit, expected):
    assert str(unit) == expected

# -------------------------------
# Hash memoization
# -------------------------------

def test_hash_is_memoized_once_under_concurrent_readers(monkeypatch):
    calls = []
    original = ProductUnit._calculate_hash

    def counting(self):
        calls.append(1)
        return original(self)

    monkeypatch.setattr(ProductUnit, "_calculate_hash", counting)

    unit = KILOGRAM * METRE / SECOND ** 2
    barrier = threading.Barrier(16)
    results = []

    def reader():
        barrier.wait()
        results.append(hash(unit))

    threads = [threading.Thread(target=reader) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(calls) == 1
    assert len(set(results)) == 1
    assert results[0] == hash(SECOND ** -2 * METRE * KILOGRAM)
