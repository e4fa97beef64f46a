import math

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from softfloat.extend import extend
from softfloat.formats import F16, F32, F64, F128

PAIRS = [(F32, F64), (F16, F32), (F16, F128), (F32, F128), (F64, F128)]


@pytest.mark.parametrize("src,dst", PAIRS)
@settings(max_examples=1000)
@given(data=st.data())
def test_extend_matches_reference(src, dst, data):
    bits = data.draw(st.integers(0, src.mask))
    expected = dst.from_float(src.to_float(bits))
    assert dst.eq_repr(extend(src, dst, bits), expected)


def test_extend_all_f16_to_f32():
    for bits in range(F16.mask + 1):
        expected = F32.from_float(F16.to_float(bits))
        assert F32.eq_repr(extend(F16, F32, bits), expected)


def test_extend_one():
    assert extend(F32, F64, 0x3F800000) == 0x3FF0000000000000


def test_extend_negative_zero():
    assert extend(F32, F64, 0x80000000) == 0x8000000000000000


def test_extend_smallest_subnormal():
    assert extend(F32, F64, 1) == 0x36A0000000000000


def test_extend_infinity():
    assert extend(F32, F64, 0xFF800000) == 0xFFF0000000000000


def test_extend_nan_stays_nan():
    result = extend(F32, F64, 0x7FC00000)
    assert F64.is_nan(result)
    assert math.isnan(F64.to_float(result))


def test_extend_rejects_narrowing():
    with pytest.raises(ValueError):
        extend(F64, F32, 0)


def test_extend_rejects_bad_pattern():
    with pytest.raises(ValueError):
        extend(F32, F64, 1 << 32)