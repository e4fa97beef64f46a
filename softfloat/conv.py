"""Conversions between fixed-width integers and IEEE-754 bit patterns."""

from __future__ import annotations

import operator

from softfloat.formats import FloatFormat


def _int_range(int_bits: int, signed: bool) -> tuple[int, int]:
    """Smallest and largest value of an integer type of the given width."""
    int_bits = operator.index(int_bits)
    if int_bits < 1:
        raise ValueError("an integer type needs at least one bit")
    if signed:
        if int_bits < 2:
            raise ValueError("a signed integer type needs at least two bits")
        half = 1 << (int_bits - 1)
        return -half, half - 1
    return 0, (1 << int_bits) - 1


def int_to_float(fmt: FloatFormat, value: int, int_bits: int, signed: bool) -> int:
    """Convert an integer of the given type to the nearest value of ``fmt``.

    Rounding is to nearest with ties to even; magnitudes beyond the format's
    range become infinity of the matching sign.
    """
    value = operator.index(value)
    low, high = _int_range(int_bits, signed)
    if not low <= value <= high:
        kind = "signed" if signed else "unsigned"
        raise ValueError(f"{value} does not fit a {int_bits}-bit {kind} integer")

    sign = fmt.sign_mask if value < 0 else 0
    magnitude = abs(value)
    if magnitude == 0:
        return 0

    top = magnitude.bit_length() - 1
    precision = fmt.significand_bits + 1
    excess = top + 1 - precision
    if excess <= 0:
        significand = magnitude << -excess
    else:
        significand = magnitude >> excess
        dropped = magnitude & ((1 << excess) - 1)
        half = 1 << (excess - 1)
        if dropped > half or (dropped == half and significand & 1):
            significand += 1

    # The significand still carries its implicit bit, so the exponent is one
    # lower; adding rather than or-ing lets a rounding carry reach it.
    rep = ((top + fmt.exponent_bias - 1) << fmt.significand_bits) + significand
    return min(rep, fmt.exponent_mask) | sign


def float_to_int(fmt: FloatFormat, bits: int, int_bits: int, signed: bool) -> int:
    """Convert a value of ``fmt`` to an integer type, truncating toward zero.

    NaN gives zero; values beyond the type's range saturate to its minimum or
    maximum. Unsigned types map every negative value to zero.
    """
    low, high = _int_range(int_bits, signed)
    negative = fmt.is_sign_negative(bits)
    magnitude = fmt.abs(bits)

    if magnitude > fmt.exponent_mask:
        return 0
    if negative and not signed:
        return 0
    if magnitude < fmt.exponent_bias << fmt.significand_bits:
        return 0
    if magnitude == fmt.exponent_mask:
        return low if negative else high

    unbiased = fmt.exponent(bits) - fmt.exponent_bias
    significand = fmt.fraction(bits) | fmt.implicit_bit
    shift = unbiased - fmt.significand_bits
    truncated = significand << shift if shift >= 0 else significand >> -shift

    if negative:
        return max(-truncated, low)
    return min(truncated, high)