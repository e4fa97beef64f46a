"""Bit-exact IEEE-754 binary floating-point arithmetic, conversions and comparisons on raw bit patterns."""

__version__ = "0.1.0"
__all__ = [
    "formats",
    "addsub",
    "mul",
    "compare",
    "extend",
    "conv",
    "trunc",
    "reciprocal",
    "div",
    "power",
]