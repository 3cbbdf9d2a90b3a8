import pytest

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
    Dim,
    Dimension,
    dim_div,
    dim_mul,
    dim_pow,
    dim_root,
)
from unitum.core.exceptions import InvalidRootError

# --- Basic structure & base vectors -------------------------------------------------

def test_base_vectors_shape_and_types():
    bases = [DIM_0, LENGTH, MASS, TIME, CURRENT, TEMPERATURE, AMOUNT, LUMINOUS]
    for b in bases:
        assert isinstance(b, tuple)
        assert len(b) == 7
        assert all(isinstance(x, int) for x in b)

def test_dimensional_basis():
    assert LENGTH      == (1,0,0,0,0,0,0)
    assert MASS        == (0,1,0,0,0,0,0)
    assert TIME        == (0,0,1,0,0,0,0)
    assert CURRENT     == (0,0,0,1,0,0,0)
    assert TEMPERATURE == (0,0,0,0,1,0,0)
    assert AMOUNT      == (0,0,0,0,0,1,0)
    assert LUMINOUS    == (0,0,0,0,0,0,1)
    assert DIM_0 == (0,0,0,0,0,0,0)
    assert NONE is DIM_0

# --- Algebra: multiplication, division, power --------------------------------------

@pytest.mark.parametrize("a,b,expected", [
    (LENGTH, dim_pow(TIME, -1), (1,0,-1,0,0,0,0)),  # speed
    (LENGTH, LENGTH, (2,0,0,0,0,0,0)),
    (MASS, TIME, (0,1,1,0,0,0,0)),
    (DIM_0, LENGTH, LENGTH),                          # identity
    (DIM_0, DIM_0, DIM_0),
])
def test_dim_mul(a, b, expected):
    assert dim_mul(a, b) == tuple(x+y for x,y in zip(a,b, strict=True))
    assert dim_mul(a, b) == dim_mul(b, a)
    assert dim_mul(a, b) == expected

@pytest.mark.parametrize("a", [LENGTH, MASS, TIME, CURRENT, TEMPERATURE, AMOUNT, LUMINOUS, (2, -1, 3, 0, 0, 0, -4)])
def test_dim_div_and_identities(a: Dim):
    assert dim_div(a, a) == DIM_0
    assert dim_div(a, DIM_0) == a
    assert dim_div(DIM_0, a) == tuple(0 - x for x in a)

@pytest.mark.parametrize("a,n,expected", [
    (LENGTH, 0, DIM_0),
    (LENGTH, 1, LENGTH),
    (LENGTH, 2, (2,0,0,0,0,0,0)),
    (TIME, -2, (0,0,-2,0,0,0,0)),
    ((1, -1, 2, 0, 0, 3, -4), 3, (3, -3, 6, 0, 0, 9, -12)),
])
def test_dim_pow(a: Dim, n: int, expected: Dim):
    assert dim_pow(a, n) == expected

# --- Roots ------------------------------------------------------------------------

@pytest.mark.parametrize("a,n,expected", [
    ((2,0,0,0,0,0,0), 2, LENGTH),
    ((3,0,-6,0,0,0,0), 3, (1,0,-2,0,0,0,0)),
    (DIM_0, 5, DIM_0),
    (LENGTH, 1, LENGTH),
])
def test_dim_root(a, n, expected):
    assert dim_root(a, n) == expected
    assert Dimension(a).root(n) == expected

@pytest.mark.parametrize("a,n", [
    (LENGTH, 2),
    ((2,0,-3,0,0,0,0), 2),
    ((0,0,0,0,0,0,-4), 3),
])
def test_root_of_indivisible_exponent_raises_arithmetic_error(a, n):
    with pytest.raises(InvalidRootError):
        Dimension(a).root(n)
    # also catchable as the generic arithmetic error
    with pytest.raises(ArithmeticError):
        dim_root(a, n)

@pytest.mark.parametrize("n", [0, -2])
def test_root_order_must_be_positive(n):
    with pytest.raises(ValueError):
        LENGTH.root(n)

def test_root_inverts_pow():
    d = (MASS * LENGTH) / (TIME ** 2)
    assert (d ** 4).root(4) == d

# --- Algebraic laws ----------------------------------------------------------------

@pytest.mark.parametrize("a,b,n", [
    (LENGTH, TIME, 3),
    (MASS, CURRENT, -2),
    ((1,0,-1,0,0,0,0), (0,1,0,0,0,0,0), 4),
])
def test_power_distributes_over_mul(a: Dim, b: Dim, n: int):
    left  = dim_pow(dim_mul(a, b), n)
    right = dim_mul(dim_pow(a, n), dim_pow(b, n))
    assert left == right

@pytest.mark.parametrize("a,m,n", [
    (LENGTH, 2, 3),
    (TIME, -1, 5),
    ((1,0,-2,0,0,0,0), 4, -2),
])
def test_same_base_adds_exponents(a: Dim, m: int, n: int):
    assert dim_mul(dim_pow(a, m), dim_pow(a, n)) == dim_pow(a, m + n)

def test_none_is_identity_under_multiply():
    for d in (LENGTH, MASS * TIME, LUMINOUS ** -3):
        assert d * NONE == d
        assert NONE * d == d

# --- Construction & tuple semantics -------------------------------------------------

def test_equality_with_plain_tuple_and_hashing():
    t = (1, 0, -1, 0, 0, 0, 0)
    d = Dimension(t)
    assert d == t
    assert hash(d) == hash(t)

def test_dimension_as_dict_key():
    m = {Dimension((1,0,0,0,0,0,0)): "ok"}
    m[(1,0,0,0,0,0,0)] = "overwritten"
    assert m[LENGTH] == "overwritten"

def test_dimension_rejects_wrong_length():
    with pytest.raises(ValueError):
        Dimension((1,2,3))

def test_dimension_coerces_integral_values():
    d = Dimension([1.0, 0, -1, 0, 0, 0, 0])
    assert d == (1, 0, -1, 0, 0, 0, 0)
    assert all(type(x) is int for x in d)

def test_dimension_rejects_fractional_exponents():
    with pytest.raises(ValueError):
        Dimension([0.5, 0, 0, 0, 0, 0, 0])

def test_pow_rejects_non_integer_exponent():
    with pytest.raises(TypeError):
        _ = LENGTH ** 2.5

def test_tuple_times_dimension_raises():
    t = (0, 1, 0, 0, 0, 0, 0)
    with pytest.raises(TypeError):
        _ = t * LENGTH  # tuple tries to "repeat", not dimensional multiply

def test_addition_is_blocked():
    with pytest.raises(TypeError):
        _ = LENGTH + MASS

def test_operator_and_shim_equivalence():
    assert (LENGTH / TIME) * MASS == dim_mul(dim_div(LENGTH, TIME), MASS)
    assert (TIME ** -2) == dim_pow(TIME, -2)
    for out in (dim_mul(LENGTH, TIME), dim_div(LENGTH, TIME), dim_pow(LENGTH, 3), dim_root(DIM_0, 2)):
        assert isinstance(out, Dimension)

def test_repr_lists_non_zero_axes():
    assert repr(LENGTH / TIME) == "[L^1][T^-1]"
    assert repr(DIM_0) == "[1]"
    assert DIM_0.is_dimensionless
    assert not LENGTH.is_dimensionless
    assert type(LENGTH.as_tuple()) is tuple
