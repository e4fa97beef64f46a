"""Binary interchange formats and bit-level helpers for IEEE-754 values."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from fractions import Fraction

_STRUCT_CODES = {(16, 10): "<e", (32, 23): "<f", (64, 52): "<d"}


@dataclass(frozen=True)
class FloatFormat:
    """An IEEE-754 binary format described by its width and significand width.

    Values of the format are handled as unsigned integers holding their bit
    patterns.
    """

    bits: int
    significand_bits: int

    def __post_init__(self) -> None:
        if self.significand_bits < 1:
            raise ValueError("a format needs at least one significand bit")
        if self.bits - self.significand_bits - 1 < 2:
            raise ValueError("a format needs at least two exponent bits")

    @property
    def exponent_bits(self) -> int:
        return self.bits - self.significand_bits - 1

    @property
    def exponent_max(self) -> int:
        """The saturated exponent field, as used by infinity and NaN."""
        return (1 << self.exponent_bits) - 1

    @property
    def exponent_bias(self) -> int:
        return self.exponent_max >> 1

    @property
    def mask(self) -> int:
        """All bits of the format set."""
        return (1 << self.bits) - 1

    @property
    def sign_mask(self) -> int:
        return 1 << (self.bits - 1)

    @property
    def significand_mask(self) -> int:
        return (1 << self.significand_bits) - 1

    @property
    def implicit_bit(self) -> int:
        return 1 << self.significand_bits

    @property
    def exponent_mask(self) -> int:
        return self.mask & ~(self.sign_mask | self.significand_mask)

    @property
    def quiet_bit(self) -> int:
        return self.implicit_bit >> 1

    def _check(self, bits: int) -> None:
        if not 0 <= bits <= self.mask:
            raise ValueError(f"{bits:#x} is not a {self.bits}-bit pattern")

    def from_float(self, value: float) -> int:
        """Encode a Python float as a bit pattern of this format.

        The standard 16, 32 and 64 bit formats round to nearest and raise
        OverflowError when a finite value rounds beyond the format's range.
        Other formats accept only values they can hold exactly and raise
        ValueError otherwise.
        """
        value = float(value)
        code = _STRUCT_CODES.get((self.bits, self.significand_bits))
        if code is not None:
            return int.from_bytes(struct.pack(code, value), "little")
        return self._encode_exact(value)

    def _encode_exact(self, value: float) -> int:
        sign = self.sign_mask if math.copysign(1.0, value) < 0 else 0
        if math.isnan(value):
            return self.exponent_mask | self.quiet_bit | sign
        if math.isinf(value):
            return self.exponent_mask | sign
        if value == 0.0:
            return sign
        mantissa, exponent = math.frexp(abs(value))
        digits = int(mantissa * (1 << 53))
        scale = exponent - 53
        trailing = (digits & -digits).bit_length() - 1
        digits >>= trailing
        scale += trailing
        top = digits.bit_length() - 1
        biased = top + scale + self.exponent_bias
        if biased >= self.exponent_max:
            raise OverflowError(f"{value!r} is too large for this format")
        if biased >= 1:
            shift = self.significand_bits - top
            if shift < 0:
                raise ValueError(f"{value!r} is not exactly representable")
            significand = (digits << shift) & self.significand_mask
            return sign | (biased << self.significand_bits) | significand
        shift = scale - (1 - self.exponent_bias - self.significand_bits)
        if shift < 0:
            raise ValueError(f"{value!r} is not exactly representable")
        return sign | (digits << shift)

    def to_float(self, bits: int) -> float:
        """Decode a bit pattern to the nearest Python float."""
        self._check(bits)
        code = _STRUCT_CODES.get((self.bits, self.significand_bits))
        if code is not None:
            return struct.unpack(code, bits.to_bytes(self.bits // 8, "little"))[0]
        negative = self.is_sign_negative(bits)
        sign = -1.0 if negative else 1.0
        magnitude = bits & ~self.sign_mask
        if magnitude > self.exponent_mask:
            return math.copysign(math.nan, sign)
        if magnitude == self.exponent_mask:
            return math.copysign(math.inf, sign)
        field = self.exponent(bits)
        fraction = self.fraction(bits)
        if field == 0:
            significand = fraction
            power = 1 - self.exponent_bias - self.significand_bits
        else:
            significand = fraction | self.implicit_bit
            power = field - self.exponent_bias - self.significand_bits
        exact = Fraction(significand) * Fraction(2) ** power
        try:
            result = float(exact)
        except OverflowError:
            result = math.inf
        return math.copysign(result, sign)

    def normalize(self, significand: int) -> tuple[int, int]:
        """Shift a significand so its leading bit lands on the implicit bit.

        Returns the matching exponent and the shifted significand.
        """
        if significand < 0 or significand.bit_length() > self.significand_bits + 1:
            raise ValueError(f"{significand:#x} does not fit the significand field")
        shift = (self.bits - significand.bit_length()) - self.exponent_bits
        return 1 - shift, (significand << shift) & self.mask

    def is_nan(self, bits: int) -> bool:
        self._check(bits)
        return (
            bits & self.exponent_mask == self.exponent_mask
            and bits & self.significand_mask != 0
        )

    def is_subnormal(self, bits: int) -> bool:
        """True when the exponent field is zero (zeros included)."""
        self._check(bits)
        return bits & self.exponent_mask == 0

    def is_sign_negative(self, bits: int) -> bool:
        self._check(bits)
        return bits & self.sign_mask != 0

    def eq_repr(self, a: int, b: int) -> bool:
        """Compare bit patterns, treating any two NaNs as equal."""
        if self.is_nan(a) and self.is_nan(b):
            return True
        return a == b

    def from_parts(self, negative: bool, exponent: int, significand: int) -> int:
        """Assemble a bit pattern, masking each part into its field."""
        return (
            (int(bool(negative)) << (self.bits - 1))
            | ((exponent << self.significand_bits) & self.exponent_mask)
            | (significand & self.significand_mask)
        )

    def exponent(self, bits: int) -> int:
        """The raw exponent field, without removing the bias."""
        self._check(bits)
        return (bits & self.exponent_mask) >> self.significand_bits

    def fraction(self, bits: int) -> int:
        """The significand field without the implicit bit."""
        self._check(bits)
        return bits & self.significand_mask

    def abs(self, bits: int) -> int:
        self._check(bits)
        return bits & ~self.sign_mask


F16 = FloatFormat(16, 10)
F32 = FloatFormat(32, 23)
F64 = FloatFormat(64, 52)
F128 = FloatFormat(128, 112)