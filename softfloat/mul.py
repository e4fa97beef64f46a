"""Multiplication of IEEE-754 values given as bit patterns."""

from __future__ import annotations

from softfloat.formats import FloatFormat


def _require(fmt: FloatFormat, bits: int) -> None:
    if not 0 <= bits <= fmt.mask:
        raise ValueError(f"{bits:#x} is not a {fmt.bits}-bit pattern")


def mul(fmt: FloatFormat, a: int, b: int) -> int:
    """Return the bits of ``a * b``, rounded to nearest, ties to even."""
    _require(fmt, a)
    _require(fmt, b)

    width = fmt.bits
    mask = fmt.mask
    significand_bits = fmt.significand_bits
    max_exponent = fmt.exponent_max
    implicit_bit = fmt.implicit_bit
    significand_mask = fmt.significand_mask
    sign_bit = fmt.sign_mask
    abs_mask = sign_bit - 1
    inf_rep = fmt.exponent_mask
    quiet_bit = fmt.quiet_bit
    qnan_rep = inf_rep | quiet_bit

    a_exponent = (a >> significand_bits) & max_exponent
    b_exponent = (b >> significand_bits) & max_exponent
    product_sign = (a ^ b) & sign_bit

    a_significand = a & significand_mask
    b_significand = b & significand_mask
    scale = 0

    def special(exponent: int) -> bool:
        return exponent == 0 or exponent >= max_exponent

    if special(a_exponent) or special(b_exponent):
        a_abs = a & abs_mask
        b_abs = b & abs_mask

        if a_abs > inf_rep:
            return a | quiet_bit
        if b_abs > inf_rep:
            return b | quiet_bit

        if a_abs == inf_rep:
            # Infinity times zero has no value.
            return a_abs | product_sign if b_abs else qnan_rep
        if b_abs == inf_rep:
            return b_abs | product_sign if a_abs else qnan_rep

        if a_abs == 0 or b_abs == 0:
            return product_sign

        # At least one operand is subnormal; bring it to normal form.
        if a_abs < implicit_bit:
            exponent, a_significand = fmt.normalize(a_significand)
            scale += exponent
        if b_abs < implicit_bit:
            exponent, b_significand = fmt.normalize(b_significand)
            scale += exponent

    a_significand |= implicit_bit
    b_significand |= implicit_bit

    # Left-align one factor so the product's high word holds the result.
    product = a_significand * (b_significand << fmt.exponent_bits)
    product_low = product & mask
    product_high = product >> width

    product_exponent = a_exponent + b_exponent + scale - fmt.exponent_bias

    if product_high & implicit_bit:
        product_exponent += 1
    else:
        product_high = (product_high << 1) | (product_low >> (width - 1))
        product_low = (product_low << 1) & mask

    if product_exponent >= max_exponent:
        return inf_rep | product_sign

    if product_exponent <= 0:
        shift = 1 - product_exponent
        if shift >= width:
            return product_sign
        # Keep a sticky bit so rounding below still sees discarded bits.
        sticky = int((product_low << (width - shift)) & mask != 0)
        product_low = (
            ((product_high << (width - shift)) & mask)
            | (product_low >> shift)
            | sticky
        )
        product_high >>= shift
    else:
        product_high &= significand_mask
        product_high |= product_exponent << significand_bits

    product_high |= product_sign

    if product_low > sign_bit:
        product_high += 1
    if product_low == sign_bit:
        product_high += product_high & 1

    return product_high