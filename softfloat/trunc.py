"""Rounding conversion from a wider IEEE-754 format to a narrower one."""

from __future__ import annotations

from softfloat.formats import FloatFormat


def _round(result: int, round_bits: int, halfway: int) -> int:
    """Round to nearest, ties to even, given the bits shifted out."""
    if round_bits > halfway:
        return result + 1
    if round_bits == halfway:
        return result + (result & 1)
    return result


def truncate(src: FloatFormat, dst: FloatFormat, a: int) -> int:
    """Convert the bits of ``a`` in ``src`` to the nearest value in ``dst``.

    Rounding is to nearest with ties to even. Values too large become
    infinity, values too small become subnormals or zero, and NaNs stay
    quiet NaNs keeping the top of their payload.
    """
    if (
        dst.bits > src.bits
        or dst.significand_bits >= src.significand_bits
        or dst.exponent_bits > src.exponent_bits
    ):
        raise ValueError("the destination format must be narrower")
    if not 0 <= a <= src.mask:
        raise ValueError(f"{a:#x} is not a {src.bits}-bit pattern")

    delta = src.significand_bits - dst.significand_bits
    round_mask = (1 << delta) - 1
    halfway = 1 << (delta - 1)
    src_nan_code = (1 << (src.significand_bits - 1)) - 1
    dst_qnan = 1 << (dst.significand_bits - 1)
    dst_nan_code = dst_qnan - 1
    dst_infinity = dst.exponent_max << dst.significand_bits

    underflow = (src.exponent_bias + 1 - dst.exponent_bias) << src.significand_bits
    overflow = (
        src.exponent_bias + dst.exponent_max - dst.exponent_bias
    ) << src.significand_bits

    a_abs = a & (src.sign_mask - 1)
    sign = a & src.sign_mask

    if underflow <= a_abs < overflow:
        # The exponent fits a normal number of the destination: shift the
        # significand down and rebias the exponent.
        abs_result = (a_abs >> delta) - (
            (src.exponent_bias - dst.exponent_bias) << dst.significand_bits
        )
        abs_result = _round(abs_result, a_abs & round_mask, halfway)
    elif a_abs > src.exponent_mask:
        # NaN: quiet it and keep what fits of the payload.
        abs_result = dst_infinity | dst_qnan
        abs_result |= dst_nan_code & ((a_abs & src_nan_code) >> delta)
    elif a_abs >= overflow:
        abs_result = dst_infinity
    else:
        # Underflow or zero: denormalize with a sticky bit, then round.
        a_exp = a_abs >> src.significand_bits
        shift = src.exponent_bias - dst.exponent_bias - a_exp + 1
        if shift > src.significand_bits:
            abs_result = 0
        else:
            significand = (a & src.significand_mask) | src.implicit_bit
            sticky = int(significand & ((1 << shift) - 1) != 0)
            denormalized = (significand >> shift) | sticky
            abs_result = _round(denormalized >> delta, denormalized & round_mask, halfway)

    return abs_result | (sign >> (src.bits - dst.bits))