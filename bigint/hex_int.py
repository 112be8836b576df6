"""Base-16 arbitrary-precision integers.

On top of the shared add/subtract/compare, hex values support Karatsuba
multiplication (see :mod:`karatsuba.multiplier`), schoolbook long division,
digit shifts and the low/high split used by the Karatsuba recursion.

``/`` and ``%`` truncate toward zero: the quotient sign is the XOR of the
operand signs and the remainder takes the sign of the dividend, so
``q * b + r == a`` always holds.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Final, List, Optional, Tuple

from bigint.digit_buffer import add_magnitudes, compare_magnitudes, sub_magnitudes, trim
from bigint.errors import DivisionByZero, InvalidInput, Overflow
from bigint.fixed_radix import FixedRadixInt

if TYPE_CHECKING:  # pragma: no cover - typing only
    from karatsuba.multiplier import KaratsubaMultiplier

HEX_DIGITS: Final[str] = "0123456789abcdef"
MAX_HEX_DIGITS: Final[int] = 64
MAX_HEX_RESULT_DIGITS: Final[int] = 128

__all__ = [
    "HexBigInt",
    "HEX_DIGITS",
    "MAX_HEX_DIGITS",
    "MAX_HEX_RESULT_DIGITS",
    "hex_digit_value",
    "hex_digit_char",
]


def hex_digit_value(ch: str) -> int:
    """Map ``0-9a-fA-F`` to 0..15."""

    lowered = ch.lower()
    if len(lowered) != 1 or lowered not in HEX_DIGITS:
        raise InvalidInput(f"Invalid hex digit character: {ch!r}")
    return HEX_DIGITS.index(lowered)


def hex_digit_char(value: int) -> str:
    if not 0 <= value < 16:
        raise InvalidInput(f"Invalid hex digit value: {value}")
    return HEX_DIGITS[value]


class HexBigInt(FixedRadixInt):
    """Signed hexadecimal integer with lower-case canonical output."""

    RADIX = 16
    ALPHABET = HEX_DIGITS
    OPERAND_CAPACITY = MAX_HEX_DIGITS
    RESULT_CAPACITY = MAX_HEX_RESULT_DIGITS
    NAME = "BigHexInt"

    __slots__ = ()

    # ------------------------------------------------------------------
    # parity and halving (used by square-and-multiply)
    # ------------------------------------------------------------------
    def is_odd(self) -> bool:
        return bool(self.digits[0] & 1)

    def is_even(self) -> bool:
        return not self.is_odd()

    def half(self) -> "HexBigInt":
        """Divide by two, truncating toward zero."""

        if self.is_zero():
            return self
        result: List[int] = []
        carry = 0
        for digit in reversed(self.digits):
            value = digit + carry * 16
            result.append(value // 2)
            carry = value % 2
        result.reverse()
        return self.from_digits(result, self.is_negative, operation="halving")

    # ------------------------------------------------------------------
    # Karatsuba split helpers
    # ------------------------------------------------------------------
    def shift_left(self, n: int) -> "HexBigInt":
        """Multiply by ``16**n``."""

        if n < 0:
            raise InvalidInput(f"negative shift amount {n}")
        if self.is_zero() or n == 0:
            return self
        if self.length + n > self.RESULT_CAPACITY:
            raise Overflow("shift left operation")
        return self.from_digits((0,) * n + self.digits, self.is_negative, operation="shift left operation")

    def lower(self, n: int) -> "HexBigInt":
        """The least-significant ``n`` digits as a non-negative value."""

        if n <= 0:
            return self.zero()
        return self.from_digits(self.digits[:n])

    def higher(self, n: int) -> "HexBigInt":
        """The digits above position ``n`` as a non-negative value."""

        if self.length <= n:
            return self.zero()
        return self.from_digits(self.digits[max(n, 0):])

    def padded(self, n: int) -> Tuple[int, ...]:
        """Digits zero-extended to at least ``n`` positions (least-significant first)."""

        digits = self.digits
        if len(digits) >= n:
            return digits
        return digits + (0,) * (n - len(digits))

    def format_padded(self, width: int) -> str:
        """Magnitude as exactly ``max(width, length)`` hex characters."""

        return "".join(HEX_DIGITS[d] for d in reversed(self.padded(width)))

    # ------------------------------------------------------------------
    # multiplication
    # ------------------------------------------------------------------
    def multiply(
        self,
        other: "HexBigInt",
        multiplier: Optional["KaratsubaMultiplier"] = None,
    ) -> "HexBigInt":
        """Multiply through a Karatsuba engine.

        Without an explicit ``multiplier`` a throwaway engine with its own
        empty cache is used; pass a long-lived one to share memoised products.
        """

        if multiplier is None:
            from karatsuba.multiplier import KaratsubaMultiplier

            multiplier = KaratsubaMultiplier()
        return multiplier.multiply(self, other)

    def __mul__(self, other: object) -> "HexBigInt":
        return self.multiply(self._coerce(other))

    # ------------------------------------------------------------------
    # long division
    # ------------------------------------------------------------------
    def divmod(self, divisor: "HexBigInt") -> Tuple["HexBigInt", "HexBigInt"]:
        """Schoolbook long division, one hex digit of quotient per step."""

        if divisor.is_zero():
            raise DivisionByZero()

        if compare_magnitudes(self.digits, divisor.digits) < 0:
            return self.zero(), self

        # multiples[q] == q * |divisor| for q in 0..15
        multiples: List[Tuple[int, ...]] = [(0,)]
        for _ in range(15):
            multiples.append(trim(add_magnitudes(multiples[-1], divisor.digits, 16)))

        partial: Tuple[int, ...] = (0,)
        quotient: List[int] = []
        for digit in reversed(self.digits):
            # Bring down the next dividend digit.
            partial = (digit,) if partial == (0,) else (digit,) + partial

            lo, hi = 0, 15
            while lo < hi:
                mid = (lo + hi + 1) // 2
                if compare_magnitudes(multiples[mid], partial) <= 0:
                    lo = mid
                else:
                    hi = mid - 1

            if lo:
                partial = trim(sub_magnitudes(partial, multiples[lo], 16))
            if lo or quotient:
                quotient.append(lo)

        quotient.reverse()
        q = self.from_digits(
            quotient or (0,),
            self.is_negative != divisor.is_negative,
            operation="division",
        )
        r = self.from_digits(partial, self.is_negative, operation="division")
        return q, r

    def divide(self, divisor: "HexBigInt") -> "HexBigInt":
        return self.divmod(divisor)[0]

    def modulo(self, divisor: "HexBigInt") -> "HexBigInt":
        return self.divmod(divisor)[1]

    def __truediv__(self, other: object) -> "HexBigInt":
        return self.divide(self._coerce(other))

    def __mod__(self, other: object) -> "HexBigInt":
        return self.modulo(self._coerce(other))

    def __divmod__(self, other: object) -> Tuple["HexBigInt", "HexBigInt"]:
        return self.divmod(self._coerce(other))
