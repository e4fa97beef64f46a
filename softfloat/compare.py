"""Ordering of IEEE-754 values given as bit patterns."""

from __future__ import annotations

import enum

from softfloat.formats import FloatFormat


class Ordering(enum.Enum):
    LESS = "less"
    EQUAL = "equal"
    GREATER = "greater"
    UNORDERED = "unordered"

    def to_le_abi(self) -> int:
        """-1, 0 or 1; unordered counts as greater."""
        return {
            Ordering.LESS: -1,
            Ordering.EQUAL: 0,
            Ordering.GREATER: 1,
            Ordering.UNORDERED: 1,
        }[self]

    def to_ge_abi(self) -> int:
        """-1, 0 or 1; unordered counts as less."""
        return {
            Ordering.LESS: -1,
            Ordering.EQUAL: 0,
            Ordering.GREATER: 1,
            Ordering.UNORDERED: -1,
        }[self]


def _require(fmt: FloatFormat, bits: int) -> None:
    if not 0 <= bits <= fmt.mask:
        raise ValueError(f"{bits:#x} is not a {fmt.bits}-bit pattern")


def _signed(fmt: FloatFormat, bits: int) -> int:
    return bits - (1 << fmt.bits) if bits & fmt.sign_mask else bits


def compare(fmt: FloatFormat, a: int, b: int) -> Ordering:
    """Order two values; any NaN makes them unordered."""
    if unordered(fmt, a, b):
        return Ordering.UNORDERED

    abs_mask = fmt.sign_mask - 1
    if (a & abs_mask) | (b & abs_mask) == 0:
        return Ordering.EQUAL

    a_srep = _signed(fmt, a)
    b_srep = _signed(fmt, b)

    if a_srep & b_srep >= 0:
        # At least one is positive: integer order matches float order.
        if a_srep < b_srep:
            return Ordering.LESS
        if a_srep == b_srep:
            return Ordering.EQUAL
        return Ordering.GREATER
    # Both negative: integer order is reversed.
    if a_srep > b_srep:
        return Ordering.LESS
    if a_srep == b_srep:
        return Ordering.EQUAL
    return Ordering.GREATER


def unordered(fmt: FloatFormat, a: int, b: int) -> bool:
    """True when either value is a NaN."""
    _require(fmt, a)
    _require(fmt, b)
    abs_mask = fmt.sign_mask - 1
    inf_rep = fmt.exponent_mask
    return a & abs_mask > inf_rep or b & abs_mask > inf_rep