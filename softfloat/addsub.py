"""Addition and subtraction of IEEE-754 values given as bit patterns."""

from __future__ import annotations

from softfloat.formats import FloatFormat


def _require(fmt: FloatFormat, bits: int) -> None:
    if not 0 <= bits <= fmt.mask:
        raise ValueError(f"{bits:#x} is not a {fmt.bits}-bit pattern")


def _is_special(magnitude: int, inf_rep: int) -> bool:
    """Zero, infinity or NaN."""
    return magnitude == 0 or magnitude >= inf_rep


def add(fmt: FloatFormat, a: int, b: int) -> int:
    """Return the bits of ``a + b``, rounded to nearest, ties to even."""
    _require(fmt, a)
    _require(fmt, b)

    width = fmt.bits
    significand_bits = fmt.significand_bits
    significand_mask = fmt.significand_mask
    implicit_bit = fmt.implicit_bit
    sign_bit = fmt.sign_mask
    abs_mask = sign_bit - 1
    inf_rep = fmt.exponent_mask
    quiet_bit = fmt.quiet_bit

    a_abs = a & abs_mask
    b_abs = b & abs_mask

    if _is_special(a_abs, inf_rep) or _is_special(b_abs, inf_rep):
        if a_abs > inf_rep:
            return a_abs | quiet_bit
        if b_abs > inf_rep:
            return b_abs | quiet_bit
        if a_abs == inf_rep:
            # Infinities of opposite sign give a quiet NaN.
            return inf_rep | quiet_bit if a ^ b == sign_bit else a
        if b_abs == inf_rep:
            return b
        if a_abs == 0:
            # Both zero: the result is negative only when both are.
            return a & b if b_abs == 0 else b
        if b_abs == 0:
            return a

    if b_abs > a_abs:
        a, b = b, a

    a_exponent = (a & inf_rep) >> significand_bits
    b_exponent = (b & inf_rep) >> significand_bits
    a_significand = a & significand_mask
    b_significand = b & significand_mask

    if a_exponent == 0:
        a_exponent, a_significand = fmt.normalize(a_significand)
    if b_exponent == 0:
        b_exponent, b_significand = fmt.normalize(b_significand)

    result_sign = a & sign_bit
    subtraction = (a ^ b) & sign_bit != 0

    # Three extra low bits hold round, guard and sticky.
    a_significand = (a_significand | implicit_bit) << 3
    b_significand = (b_significand | implicit_bit) << 3

    align = a_exponent - b_exponent
    if align:
        if align < width:
            sticky = int(b_significand & ((1 << align) - 1) != 0)
            b_significand = (b_significand >> align) | sticky
        else:
            b_significand = 1

    if subtraction:
        a_significand -= b_significand
        if a_significand == 0:
            return 0
        if a_significand < implicit_bit << 3:
            shift = (implicit_bit << 3).bit_length() - a_significand.bit_length()
            a_significand <<= shift
            a_exponent -= shift
    else:
        a_significand += b_significand
        if a_significand & (implicit_bit << 4):
            sticky = a_significand & 1
            a_significand = (a_significand >> 1) | sticky
            a_exponent += 1

    if a_exponent >= fmt.exponent_max:
        return inf_rep | result_sign

    if a_exponent <= 0:
        shift = 1 - a_exponent
        sticky = int(a_significand & ((1 << shift) - 1) != 0)
        a_significand = (a_significand >> shift) | sticky
        a_exponent = 0

    round_guard_sticky = a_significand & 0x7

    result = (a_significand >> 3) & significand_mask
    result |= a_exponent << significand_bits
    result |= result_sign

    if round_guard_sticky > 0x4:
        result += 1
    if round_guard_sticky == 0x4:
        result += result & 1

    return result


def sub(fmt: FloatFormat, a: int, b: int) -> int:
    """Return the bits of ``a - b``."""
    _require(fmt, b)
    return add(fmt, a, b ^ fmt.sign_mask)