"""Fixed-point reciprocal estimation used by division.

Divisors are handled as UQ1.(W-1) fixed-point integers and reciprocals as
UQ0.W, both of a chosen width W. The estimate is refined with Newton-Raphson
steps ``x' = x * (2 - b * x)``, each roughly doubling its precision.
"""

from __future__ import annotations

import operator

from softfloat.formats import FloatFormat

# (3/4 + 1/sqrt(2)) - 1 as a UQ0.128 fraction.
_C_U128 = 0x7504F333F9DE6108B2FB1366EAA6A542

# Iterations are planned for a machine whose word is this wide.
_WORD_BITS = 64

_PRECISION = {
    (32, 2, 1): 74,
    (32, 0, 3): 10,
    (64, 3, 1): 220,
    (128, 4, 1): 13922,
}


def get_iterations(fmt: FloatFormat) -> tuple[int, int]:
    """Return ``(half, full)``: iterations at half and at full width.

    The initial estimate carries about 8 bits and each iteration doubles
    that. When a widening product fits the machine word, every iteration is
    done at full width; otherwise all but one are done at half width.
    """
    total = (fmt.bits.bit_length() - 1) - 2
    if 2 * fmt.bits <= _WORD_BITS:
        return 0, total
    return total - 1, 1


def reciprocal_precision(fmt: FloatFormat) -> int:
    """Error bound of the final reciprocal, in units of its last place."""
    half, full = get_iterations(fmt)
    if full < 1:
        raise ValueError("at least one full-width iteration is needed")
    try:
        return _PRECISION[(fmt.bits, half, full)]
    except KeyError:
        raise ValueError(
            f"no precision bound for a {fmt.bits}-bit format "
            f"with {half} + {full} iterations"
        ) from None


def c_hw(fmt: FloatFormat) -> int:
    """The initial-estimate constant truncated to half the format's width."""
    half = fmt.bits // 2
    if not 1 <= half <= 128:
        raise ValueError(f"no half-width constant for a {fmt.bits}-bit format")
    return _C_U128 >> (128 - half)


def next_guess(x_uq0: int, b_uq1: int, width: int) -> int:
    """One Newton-Raphson step towards ``1/b`` at the given width.

    ``x_uq0`` is the current UQ0.W estimate and ``b_uq1`` the UQ1.(W-1)
    divisor; the improved UQ0.W estimate is returned.
    """
    width = operator.index(width)
    if width < 1:
        raise ValueError("the width must be at least one bit")
    mask = (1 << width) - 1
    for name, value in (("x_uq0", x_uq0), ("b_uq1", b_uq1)):
        if not 0 <= value <= mask:
            raise ValueError(f"{name}={value:#x} does not fit {width} bits")

    # In UQ1 arithmetic 0 - y wraps to 2 - y.
    corr_uq1 = -((x_uq0 * b_uq1) >> width) & mask
    return ((x_uq0 * corr_uq1) >> (width - 1)) & mask