import math
import operator

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from softfloat.addsub import add, sub
from softfloat.formats import F16, F32, F64, F128


def _native(fmt, op, a, b):
    """Bits of the hardware double result rounded once into ``fmt``."""
    result = op(fmt.to_float(a), fmt.to_float(b))
    try:
        return fmt.from_float(result)
    except OverflowError:
        return fmt.exponent_mask | (fmt.sign_mask if result < 0 else 0)


def _edge_patterns(fmt):
    values = {
        0,
        1,
        fmt.significand_mask,
        fmt.implicit_bit,
        fmt.exponent_mask - 1,
        fmt.exponent_mask,
        fmt.exponent_mask | 1,
        fmt.exponent_mask | fmt.quiet_bit,
        fmt.from_float(1.0),
    }
    return sorted(values | {v | fmt.sign_mask for v in values})


def _check(fmt, a, b):
    got_add = add(fmt, a, b)
    got_sub = sub(fmt, a, b)
    assert fmt.eq_repr(got_add, _native(fmt, operator.add, a, b)), (a, b)
    assert fmt.eq_repr(got_sub, _native(fmt, operator.sub, a, b)), (a, b)


@pytest.mark.parametrize("fmt", [F16, F32, F64])
def test_edge_cases_match_hardware(fmt):
    patterns = _edge_patterns(fmt)
    for a in patterns:
        for b in patterns:
            _check(fmt, a, b)


@settings(max_examples=500)
@given(st.integers(0, F32.mask), st.integers(0, F32.mask))
def test_addsf3_matches_hardware(a, b):
    _check(F32, a, b)


@settings(max_examples=500)
@given(st.integers(0, F64.mask), st.integers(0, F64.mask))
def test_adddf3_matches_hardware(a, b):
    _check(F64, a, b)


@settings(max_examples=500)
@given(st.integers(0, F16.mask), st.integers(0, F16.mask))
def test_half_matches_hardware(a, b):
    _check(F16, a, b)


@given(st.floats(), st.floats())
def test_f64_floats_match_hardware(x, y):
    _check(F64, F64.from_float(x), F64.from_float(y))


@given(st.floats(width=32), st.floats(width=32))
def test_f32_floats_match_hardware(x, y):
    _check(F32, F32.from_float(x), F32.from_float(y))


def test_simple_sum():
    assert add(F32, F32.from_float(1.0), F32.from_float(2.0)) == F32.from_float(3.0)
    assert sub(F64, F64.from_float(1.0), F64.from_float(2.0)) == F64.from_float(-1.0)


def test_opposite_infinities_give_nan():
    inf = F32.exponent_mask
    result = add(F32, inf, inf | F32.sign_mask)
    assert F32.is_nan(result)
    assert result == F32.exponent_mask | F32.quiet_bit


def test_signed_zeros():
    neg_zero = F64.sign_mask
    assert add(F64, neg_zero, neg_zero) == neg_zero
    assert add(F64, 0, neg_zero) == 0
    assert sub(F64, neg_zero, 0) == neg_zero


def test_exact_cancellation_is_positive_zero():
    x = F32.from_float(-5.5)
    assert sub(F32, x, x) == 0


def test_nan_is_quieted():
    signalling = F32.exponent_mask | 1
    assert add(F32, signalling, F32.from_float(1.0)) == signalling | F32.quiet_bit


def test_overflow_to_infinity():
    largest = F32.exponent_mask - 1
    assert add(F32, largest, largest) == F32.exponent_mask
    negative = largest | F32.sign_mask
    assert add(F32, negative, negative) == F32.exponent_mask | F32.sign_mask


def test_subnormal_sum():
    assert add(F64, 1, 1) == 2
    assert add(F64, F64.significand_mask, 1) == F64.implicit_bit


def test_quad_precision():
    a = F128.from_float(1.5)
    b = F128.from_float(2.25)
    assert F128.to_float(add(F128, a, b)) == 3.75
    tiny = F128.from_float(2.0 ** -100)
    one = F128.from_float(1.0)
    total = add(F128, one, tiny)
    assert total != one
    assert sub(F128, total, tiny) == one
    assert F128.is_nan(add(F128, F128.exponent_mask, F128.exponent_mask | F128.sign_mask))


def test_quad_overflow():
    largest = F128.exponent_mask - 1
    assert add(F128, largest, largest) == F128.exponent_mask
    assert math.isinf(F128.to_float(add(F128, largest, largest)))


def test_rejects_out_of_range_bits():
    with pytest.raises(ValueError):
        add(F32, F32.mask + 1, 0)
    with pytest.raises(ValueError):
        sub(F32, 0, -1)