"""Division of IEEE-754 values given as bit patterns.

The quotient's significand is found by multiplying the dividend with a
fixed-point reciprocal of the divisor. The reciprocal comes from a
Newton-Raphson refinement (see :mod:`softfloat.reciprocal`). The
quotient is then corrected with the remainder so that it rounds to
nearest, ties to even.
"""

from __future__ import annotations

from softfloat.formats import FloatFormat
from softfloat.reciprocal import c_hw, get_iterations, next_guess, reciprocal_precision


def _require(fmt: FloatFormat, bits: int) -> None:
    if not 0 <= bits <= fmt.mask:
        raise ValueError(f"{bits:#x} is not a {fmt.bits}-bit pattern")


def _estimate_reciprocal(
    fmt: FloatFormat, b_uq1: int, half_iterations: int, full_iterations: int
) -> int:
    """A UQ0.W estimate of ``1/b`` for the UQ1.(W-1) divisor ``b_uq1``."""
    width = fmt.bits
    mask = fmt.mask

    if half_iterations > 0:
        hw = width // 2
        hw_mask = (1 << hw) - 1
        b_uq1_hw = b_uq1 >> hw

        # 3/4 + 1/sqrt(2) - b/2, wrapped into [0, 1).
        x_hw = (c_hw(fmt) - b_uq1_hw) & hw_mask
        for _ in range(half_iterations):
            x_hw = next_guess(x_hw, b_uq1_hw, hw)
        # Allow for a possible overflow in the half-width steps.
        x_hw = (x_hw - 1) & hw_mask

        # One final step at full width, assembled from half-width products.
        blo = b_uq1 & hw_mask
        corr_uq1 = (1 - (x_hw * b_uq1_hw + ((x_hw * blo) >> hw))) & mask
        lo_corr = corr_uq1 & hw_mask
        hi_corr = corr_uq1 >> hw
        x_uq0 = ((x_hw * hi_corr) << 1) + ((x_hw * lo_corr) >> (hw - 1)) - 2
        return (x_uq0 - 1) & mask

    x_uq0 = ((0x7504F333 << (width - 32)) - b_uq1) & mask
    for _ in range(full_iterations):
        x_uq0 = next_guess(x_uq0, b_uq1, width)
    return x_uq0


def div(fmt: FloatFormat, a: int, b: int) -> int:
    """Return the bits of ``a / b``, rounded to nearest, ties to even.

    Supported formats are the 32, 64 and 128 bit ones; others raise
    ValueError.
    """
    _require(fmt, a)
    _require(fmt, b)

    width = fmt.bits
    mask = fmt.mask
    significand_bits = fmt.significand_bits
    exponent_sat = fmt.exponent_max
    implicit_bit = fmt.implicit_bit
    significand_mask = fmt.significand_mask
    sign_bit = fmt.sign_mask
    abs_mask = sign_bit - 1
    inf_rep = fmt.exponent_mask
    quiet_bit = fmt.quiet_bit
    qnan_rep = inf_rep | quiet_bit

    half_iterations, full_iterations = get_iterations(fmt)
    recip_precision = reciprocal_precision(fmt)
    if width == 128:
        # The quad format needs one half-width step more than planned.
        half_iterations += 1

    a_exponent = (a >> significand_bits) & exponent_sat
    b_exponent = (b >> significand_bits) & exponent_sat
    quotient_sign = (a ^ b) & sign_bit

    a_significand = a & significand_mask
    b_significand = b & significand_mask
    res_exponent = a_exponent - b_exponent + fmt.exponent_bias

    def special(exponent: int) -> bool:
        return exponent == 0 or exponent >= exponent_sat

    if special(a_exponent) or special(b_exponent):
        a_abs = a & abs_mask
        b_abs = b & abs_mask

        if a_abs > inf_rep:
            return a | quiet_bit
        if b_abs > inf_rep:
            return b | quiet_bit

        if a_abs == inf_rep:
            return qnan_rep if b_abs == inf_rep else a_abs | quotient_sign
        if b_abs == inf_rep:
            return quotient_sign

        if a_abs == 0:
            return qnan_rep if b_abs == 0 else quotient_sign
        if b_abs == 0:
            return inf_rep | quotient_sign

        if a_abs < implicit_bit:
            exponent, a_significand = fmt.normalize(a_significand)
            res_exponent += exponent
        if b_abs < implicit_bit:
            exponent, b_significand = fmt.normalize(b_significand)
            res_exponent -= exponent

    a_significand |= implicit_bit
    b_significand |= implicit_bit

    # The divisor as a UQ1.(W-1) number in [1, 2).
    b_uq1 = (b_significand << (width - significand_bits - 1)) & mask

    x_uq0 = _estimate_reciprocal(fmt, b_uq1, half_iterations, full_iterations)
    x_uq0 = (x_uq0 - 2) & mask
    # Bias the estimate low so the quotient never exceeds the true value.
    x_uq0 = (x_uq0 - recip_precision) & mask

    quotient = (x_uq0 * ((a_significand << 1) & mask)) >> width

    if quotient < implicit_bit << 1:
        residual_lo = (
            (a_significand << (significand_bits + 1)) - quotient * b_significand
        ) & mask
        res_exponent -= 1
        a_significand <<= 1
    else:
        quotient >>= 1
        residual_lo = (
            (a_significand << significand_bits) - quotient * b_significand
        ) & mask

    if res_exponent >= exponent_sat:
        return inf_rep | quotient_sign

    if res_exponent > 0:
        abs_result = (quotient & significand_mask) | (res_exponent << significand_bits)
        residual_lo = (residual_lo << 1) & mask
    else:
        if significand_bits + res_exponent < 0:
            return quotient_sign
        abs_result = quotient >> (1 - res_exponent)
        residual_lo = (
            (a_significand << (significand_bits + res_exponent))
            - ((abs_result * b_significand) << 1)
        ) & mask

    # Ties go to even: an odd result turns the comparison into "at least".
    residual_lo = (residual_lo + (abs_result & 1)) & mask
    abs_result += int(residual_lo > b_significand)

    if width == 128 or (width == 32 and half_iterations > 0):
        # Never step from infinity into the NaN range.
        abs_result += int(abs_result < inf_rep and residual_lo > 3 * b_significand)
    if width == 128:
        abs_result += int(abs_result < inf_rep and residual_lo > 5 * b_significand)

    return abs_result | quotient_sign