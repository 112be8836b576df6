"""Fixed-capacity decimal and hexadecimal big integers."""
from __future__ import annotations

from .decimal_int import DecimalBigInt
from .errors import BigIntError, DivisionByZero, FileIO, InvalidInput, Overflow
from .hex_int import HexBigInt

__all__ = [
    "BigIntError",
    "DecimalBigInt",
    "DivisionByZero",
    "FileIO",
    "HexBigInt",
    "InvalidInput",
    "Overflow",
]
