import math
import struct

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from softfloat.formats import F16, F32, F64, F128
from softfloat.mul import mul


def _round_to_f32(value: float) -> int:
    try:
        return F32.from_float(value)
    except OverflowError:
        return F32.from_float(math.copysign(math.inf, value))


@settings(max_examples=2000)
@given(st.integers(0, F64.mask), st.integers(0, F64.mask))
def test_mul_f64_matches_native(x, y):
    expected = F64.from_float(F64.to_float(x) * F64.to_float(y))
    assert F64.eq_repr(mul(F64, x, y), expected)


@settings(max_examples=2000)
@given(st.integers(0, F32.mask), st.integers(0, F32.mask))
def test_mul_f32_matches_native(x, y):
    # The exact product of two single values fits a double.
    expected = _round_to_f32(F32.to_float(x) * F32.to_float(y))
    assert F32.eq_repr(mul(F32, x, y), expected)


@settings(max_examples=500)
@given(
    st.floats(allow_nan=False, allow_infinity=False, width=64),
    st.floats(allow_nan=False, allow_infinity=False, width=64),
)
def test_mul_f64_finite_floats(x, y):
    expected = struct.unpack("<Q", struct.pack("<d", x * y))[0]
    assert mul(F64, F64.from_float(x), F64.from_float(y)) == expected


def test_mul_pinned_f64():
    assert mul(F64, F64.from_float(1.5), F64.from_float(2.0)) == 0x4008000000000000


def test_mul_pinned_f16():
    assert mul(F16, F16.from_float(1.5), F16.from_float(2.0)) == F16.from_float(3.0)


def test_mul_pinned_f128():
    result = mul(F128, F128.from_float(1.5), F128.from_float(-2.0))
    assert result == F128.from_float(-3.0)


def test_mul_infinity_by_zero_is_nan():
    assert F32.is_nan(mul(F32, 0x7F800000, 0))


def test_mul_overflow_to_infinity():
    assert mul(F32, 0x7F7FFFFF, F32.from_float(2.0)) == 0x7F800000
    assert mul(F32, 0xFF7FFFFF, F32.from_float(2.0)) == 0xFF800000


def test_mul_signed_zero():
    assert mul(F64, 0x8000000000000000, F64.from_float(1.0)) == 0x8000000000000000


def test_mul_underflow_to_zero():
    assert mul(F32, 1, 1) == 0


def test_mul_nan_is_quieted():
    assert mul(F32, 0x7F800001, F32.from_float(1.0)) == 0x7FC00001


def test_mul_rejects_bad_pattern():
    with pytest.raises(ValueError):
        mul(F32, 1 << 32, 0)