"""Base-10 arbitrary-precision integers (add, subtract, multiply, compare)."""
from __future__ import annotations

from typing import Final

from bigint.fixed_radix import FixedRadixInt

# Digit budgets: parsed operands vs. arithmetic results.
MAX_DIGITS: Final[int] = 618
MAX_RESULT_DIGITS: Final[int] = 2 * MAX_DIGITS

__all__ = ["DecimalBigInt", "MAX_DIGITS", "MAX_RESULT_DIGITS"]


class DecimalBigInt(FixedRadixInt):
    """Signed decimal integer; there is no division for this representation."""

    RADIX = 10
    ALPHABET = "0123456789"
    OPERAND_CAPACITY = MAX_DIGITS
    RESULT_CAPACITY = MAX_RESULT_DIGITS
    NAME = "BigInt"

    __slots__ = ()

    def multiply(self, other: "DecimalBigInt") -> "DecimalBigInt":
        return self.multiply_naive(other)

    def __mul__(self, other: object) -> "DecimalBigInt":
        return self.multiply(self._coerce(other))
