"""Integer powers of IEEE-754 values given as bit patterns."""

from __future__ import annotations

import operator

from softfloat.div import div
from softfloat.formats import FloatFormat
from softfloat.mul import mul

_I32_MIN = -(1 << 31)
_I32_MAX = (1 << 31) - 1


def powi(fmt: FloatFormat, a: int, n: int) -> int:
    """Return the bits of ``a`` raised to the 32-bit signed integer ``n``.

    The power is built by repeated squaring; a negative exponent takes the
    reciprocal of the result at the end.
    """
    n = operator.index(n)
    if not _I32_MIN <= n <= _I32_MAX:
        raise ValueError(f"{n} does not fit a 32-bit signed integer")
    if not 0 <= a <= fmt.mask:
        raise ValueError(f"{a:#x} is not a {fmt.bits}-bit pattern")

    one = fmt.exponent_bias << fmt.significand_bits
    remaining = abs(n)
    result = one
    while True:
        if remaining & 1:
            result = mul(fmt, result, a)
        remaining >>= 1
        if remaining == 0:
            break
        a = mul(fmt, a, a)

    if n < 0:
        return div(fmt, one, result)
    return result