"""Exact conversion from a narrower IEEE-754 format to a wider one."""

from __future__ import annotations

from softfloat.formats import FloatFormat


def extend(src: FloatFormat, dst: FloatFormat, a: int) -> int:
    """Convert the bits of ``a`` in ``src`` to the same value in ``dst``."""
    if (
        dst.bits < src.bits
        or dst.significand_bits < src.significand_bits
        or dst.exponent_bits < src.exponent_bits
    ):
        raise ValueError("the destination format must be at least as wide")
    if not 0 <= a <= src.mask:
        raise ValueError(f"{a:#x} is not a {src.bits}-bit pattern")

    src_min_normal = src.implicit_bit
    src_infinity = src.exponent_mask
    src_sign_mask = src.sign_mask
    src_abs_mask = src_sign_mask - 1
    src_qnan = src.significand_mask
    src_nan_code = src_qnan - 1

    dst_significand_bits = dst.significand_bits
    sign_bits_delta = dst_significand_bits - src.significand_bits
    exp_bias_delta = dst.exponent_bias - src.exponent_bias
    a_abs = a & src_abs_mask
    abs_result = 0

    if src_min_normal <= a_abs < src_infinity:
        # Normal: shift into place and rebias the exponent.
        abs_result = (a_abs << sign_bits_delta) + (exp_bias_delta << dst_significand_bits)
    elif a_abs >= src_infinity:
        # Infinity or NaN: keep the payload, right-aligned to the new field.
        abs_result = dst.exponent_max << dst_significand_bits
        abs_result |= (a_abs & src_qnan) << sign_bits_delta
        abs_result |= (a_abs & src_nan_code) << sign_bits_delta
    elif a_abs:
        # Subnormal: renormalize, clear the leading bit, set the exponent.
        scale = src_min_normal.bit_length() - a_abs.bit_length()
        abs_result = a_abs << (sign_bits_delta + scale)
        abs_result = (abs_result ^ dst.implicit_bit) | (
            (exp_bias_delta - scale + 1) << dst_significand_bits
        )

    sign_result = (a & src_sign_mask) << (dst.bits - src.bits)
    return abs_result | sign_result