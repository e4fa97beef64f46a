# softfloat

Bit-exact IEEE-754 binary floating-point arithmetic in pure Python.

Every operation takes and returns raw bit patterns as Python integers, so the
results do not depend on the host's floating-point unit. Arithmetic rounds to
nearest, ties to even. NaN, infinity, signed zero and subnormal handling follow
IEEE-754.

## Installation

```
pip install .
```

To run the test suite, install the test extra and run pytest:

```
pip install .[test]
pytest
```

## What it provides

| Module | Names |
| --- | --- |
| `softfloat.formats` | `FloatFormat`, plus the ready-made formats `F16`, `F32`, `F64` and `F128` |
| `softfloat.addsub` | `add`, `sub` |
| `softfloat.mul` | `mul` |
| `softfloat.div` | `div` |
| `softfloat.power` | `powi`, which raises a value to a 32-bit signed integer power |
| `softfloat.compare` | `compare`, `unordered`, `Ordering` |
| `softfloat.extend` | `extend`, which converts a value exactly to a wider format |
| `softfloat.trunc` | `truncate`, which converts a value to a narrower format with rounding |
| `softfloat.conv` | `int_to_float`, `float_to_int` |
| `softfloat.reciprocal` | `get_iterations`, `reciprocal_precision`, `c_hw`, `next_guess`: the Newton–Raphson reciprocal steps that division uses |

## Formats

`FloatFormat(bits, significand_bits)` describes a binary format. It exposes
the format's masks and exponent constants as properties, and it has bit-level
helpers such as `is_nan`, `is_subnormal`, `is_sign_negative`, `exponent`,
`fraction`, `abs`, `from_parts`, `normalize` and `eq_repr`. `eq_repr` compares
bit patterns and treats any two NaNs as equal.

`from_float` encodes a Python float and `to_float` decodes a bit pattern:

- For the 16, 32 and 64 bit formats, `from_float` rounds to nearest. It raises
  `OverflowError` when a finite value is too large for the format.
- For other formats, `from_float` accepts only values that the format holds
  exactly. It raises `ValueError` otherwise.
- `to_float` gives the nearest Python float.

Every function that takes a bit pattern raises `ValueError` when the pattern
does not fit the format.

## Usage

The arithmetic functions take a `FloatFormat` first, followed by bit patterns
in that format:

```python
from softfloat.formats import F64
from softfloat.addsub import add
from softfloat.div import div

a = F64.from_float(1.5)
b = F64.from_float(0.25)

print(F64.to_float(add(F64, a, b)))   # 1.75
print(F64.to_float(div(F64, a, b)))   # 6.0
```

`add`, `sub` and `mul` work with any format. `div` supports the 32, 64 and
128 bit formats and raises `ValueError` for any other. `powi` uses `div` for
negative exponents, so the same limit applies there.

### Comparisons

`compare` returns an `Ordering`: `LESS`, `EQUAL`, `GREATER` or `UNORDERED`.
The result is unordered when either operand is a NaN. The two zeros compare
equal.

`to_le_abi()` and `to_ge_abi()` map an ordering to -1, 0 or 1. An unordered
result maps to 1 with `to_le_abi()` and to -1 with `to_ge_abi()`.

`unordered` reports whether either operand is a NaN.

### Conversions

`int_to_float(fmt, value, int_bits, signed)` converts an integer of the given
width to the nearest value of the format, with ties to even. Magnitudes beyond
the format's range become infinity. It raises `ValueError` when the value does
not fit the integer type.

`float_to_int(fmt, bits, int_bits, signed)` truncates toward zero:

- Values out of range saturate to the type's minimum or maximum.
- NaN converts to zero.
- For unsigned types, every negative value converts to zero.

`extend(src, dst, a)` converts exactly to a format that is at least as wide,
and keeps NaN payloads. `truncate(src, dst, a)` converts to a narrower format:

- It rounds to nearest, ties to even.
- Values that are too large become infinity.
- Values that are too small become subnormals or zero.
- NaNs become quiet NaNs that keep the top of their payload.

Both functions raise `ValueError` when the formats are the wrong way round.

## What it does not do

This is a library only; there is no command-line tool.

Only round-to-nearest, ties-to-even is available. There are no other rounding
modes, and no exception flags are raised or recorded. There is no fused
multiply-add, square root or remainder operation.