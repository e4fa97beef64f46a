import math

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from softfloat.formats import F32, F64, F128
from softfloat.power import powi


def _signed(magnitude, negative):
    return -magnitude if negative else magnitude


@settings(max_examples=300, deadline=None)
@given(
    st.floats(min_value=0.25, max_value=4.0),
    st.booleans(),
    st.integers(-30, 30),
)
def test_f64_close_to_host_power(magnitude, negative, n):
    x = _signed(magnitude, negative)
    result = F64.to_float(powi(F64, F64.from_float(x), n))
    assert math.isclose(result, x**n, rel_tol=1e-12)


@settings(max_examples=300, deadline=None)
@given(
    st.floats(min_value=0.5, max_value=2.0),
    st.booleans(),
    st.integers(-20, 20),
)
def test_f32_close_to_host_power(magnitude, negative, n):
    bits = F32.from_float(_signed(magnitude, negative))
    x = F32.to_float(bits)
    result = F32.to_float(powi(F32, bits, n))
    assert math.isclose(result, x**n, rel_tol=1e-4)


@settings(max_examples=200, deadline=None)
@given(st.integers(0, F64.mask).filter(lambda b: not F64.is_nan(b)))
def test_first_power_is_identity(a):
    assert powi(F64, a, 1) == a


@settings(max_examples=100, deadline=None)
@given(st.integers(0, F64.mask))
def test_zeroth_power_is_one(a):
    assert powi(F64, a, 0) == F64.from_float(1.0)


@pytest.mark.parametrize(
    "x, n, expected",
    [
        (2.0, 10, 1024.0),
        (2.0, -2, 0.25),
        (-2.0, 3, -8.0),
        (0.0, -1, math.inf),
        (10.0, 400, math.inf),
        (0.5, 2000, 0.0),
    ],
)
def test_f64_values(x, n, expected):
    assert powi(F64, F64.from_float(x), n) == F64.from_float(expected)


def test_f32_value():
    assert powi(F32, F32.from_float(3.0), 5) == F32.from_float(243.0)


def test_f128_powers_of_two():
    two = F128.from_float(2.0)
    assert powi(F128, two, 100) == (F128.exponent_bias + 100) << F128.significand_bits
    assert powi(F128, two, -3) == F128.from_float(0.125)


def test_nan_to_zeroth_power_is_one():
    assert powi(F64, 0x7FF8000000000000, 0) == F64.from_float(1.0)


def test_exponent_out_of_range_raises():
    with pytest.raises(ValueError):
        powi(F64, F64.from_float(1.0), 1 << 31)
    with pytest.raises(ValueError):
        powi(F64, F64.from_float(1.0), -(1 << 31) - 1)


def test_bad_pattern_raises():
    with pytest.raises(ValueError):
        powi(F32, 1 << 32, 2)