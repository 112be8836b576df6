"""Sign-aware integer arithmetic over a fixed radix and a fixed digit budget."""
from __future__ import annotations

from functools import total_ordering
from typing import ClassVar, Iterable, Tuple, Type, TypeVar

from bigint.digit_buffer import (
    DigitBuffer,
    add_magnitudes,
    compare_magnitudes,
    mul_magnitudes,
    sub_magnitudes,
)
from bigint.errors import InvalidInput, Overflow

T = TypeVar("T", bound="FixedRadixInt")

__all__ = ["FixedRadixInt"]


@total_ordering
class FixedRadixInt:
    """Immutable signed integer stored as a :class:`DigitBuffer`.

    Subclasses pick the radix, the digit alphabet and two capacities: the
    operand capacity bounds what :meth:`parse` accepts, the result capacity
    bounds what arithmetic may produce.
    """

    RADIX: ClassVar[int] = 10
    ALPHABET: ClassVar[str] = "0123456789"
    OPERAND_CAPACITY: ClassVar[int] = 0
    RESULT_CAPACITY: ClassVar[int] = 0
    NAME: ClassVar[str] = "FixedRadixInt"

    __slots__ = ("_buffer",)

    def __init__(self, numeral: str = "0"):
        self._buffer = self._parse_buffer(numeral, self.OPERAND_CAPACITY)

    # ------------------------------------------------------------------
    # construction
    # ------------------------------------------------------------------
    @classmethod
    def parse(cls: Type[T], numeral: str) -> T:
        return cls(numeral)

    @classmethod
    def from_numeral(cls: Type[T], numeral: str, *, capacity: int | None = None) -> T:
        """Parse with an explicit digit budget (defaults to the result capacity)."""

        limit = cls.RESULT_CAPACITY if capacity is None else capacity
        return cls._from_buffer(cls._parse_buffer(numeral, limit))

    @classmethod
    def from_digits(
        cls: Type[T],
        digits: Iterable[int],
        negative: bool = False,
        *,
        operation: str = "arithmetic",
    ) -> T:
        buffer = DigitBuffer(digits, cls.RESULT_CAPACITY, negative, operation=operation)
        return cls._from_buffer(buffer)

    @classmethod
    def zero(cls: Type[T]) -> T:
        return cls.from_digits((0,))

    @classmethod
    def one(cls: Type[T]) -> T:
        return cls.from_digits((1,))

    @classmethod
    def _from_buffer(cls: Type[T], buffer: DigitBuffer) -> T:
        obj = cls.__new__(cls)
        obj._buffer = buffer
        return obj

    @classmethod
    def is_valid_input(cls, numeral: str) -> bool:
        if not isinstance(numeral, str) or not numeral:
            return False
        body = numeral[1:] if numeral[0] == "-" else numeral
        if not body:
            return False
        alphabet = cls.ALPHABET
        return all(ch in alphabet for ch in body.lower())

    @classmethod
    def _parse_buffer(cls, numeral: str, capacity: int) -> DigitBuffer:
        if not cls.is_valid_input(numeral):
            raise InvalidInput(repr(numeral) if isinstance(numeral, str) else type(numeral).__name__)

        negative = numeral[0] == "-"
        body = (numeral[1:] if negative else numeral).lower().lstrip("0") or "0"
        if len(body) > capacity:
            raise Overflow(f"{cls.NAME} creation - exceeds {capacity} digits")

        index = cls.ALPHABET.index
        digits = [index(ch) for ch in reversed(body)]
        return DigitBuffer(digits, capacity, negative, operation=f"{cls.NAME} creation")

    # ------------------------------------------------------------------
    # views
    # ------------------------------------------------------------------
    @property
    def digits(self) -> Tuple[int, ...]:
        """Significant digits, least-significant first."""

        return self._buffer.digits

    @property
    def length(self) -> int:
        return self._buffer.length

    @property
    def is_negative(self) -> bool:
        return self._buffer.negative

    def is_zero(self) -> bool:
        return self._buffer.is_zero()

    def is_one(self) -> bool:
        return self.digits == (1,) and not self.is_negative

    def format(self) -> str:
        text = "".join(self.ALPHABET[d] for d in reversed(self.digits))
        return "-" + text if self.is_negative else text

    def __str__(self) -> str:
        return self.format()

    def __int__(self) -> int:
        return int(self.format(), self.RADIX)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.format()!r})"

    # ------------------------------------------------------------------
    # comparison
    # ------------------------------------------------------------------
    def compare(self, other: "FixedRadixInt") -> int:
        """Return -1, 0 or 1; negatives sort below non-negatives."""

        if self.is_negative != other.is_negative:
            return -1 if self.is_negative else 1
        result = compare_magnitudes(self.digits, other.digits)
        return -result if self.is_negative else result

    def compare_magnitude(self, other: "FixedRadixInt") -> int:
        return compare_magnitudes(self.digits, other.digits)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedRadixInt) or other.RADIX != self.RADIX:
            return NotImplemented
        return self._buffer == other._buffer

    def __lt__(self, other: "FixedRadixInt") -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash((self.RADIX, self._buffer))

    # ------------------------------------------------------------------
    # sign helpers
    # ------------------------------------------------------------------
    def _with_sign(self: T, negative: bool) -> T:
        return type(self)._from_buffer(
            DigitBuffer(self.digits, self._buffer.capacity, negative)
        )

    def __neg__(self: T) -> T:
        return self._with_sign(not self.is_negative)

    def __abs__(self: T) -> T:
        return self._with_sign(False)

    # ------------------------------------------------------------------
    # arithmetic
    # ------------------------------------------------------------------
    def add(self: T, other: T) -> T:
        if self.is_negative == other.is_negative:
            digits = add_magnitudes(self.digits, other.digits, self.RADIX)
            return self.from_digits(digits, self.is_negative, operation="addition")
        # Mixed signs: subtract the smaller magnitude from the larger one and
        # keep the sign of the larger operand; equal magnitudes give zero.
        order = self.compare_magnitude(other)
        if order == 0:
            return self.zero()
        larger, smaller = (self, other) if order > 0 else (other, self)
        digits = sub_magnitudes(larger.digits, smaller.digits, self.RADIX)
        return self.from_digits(digits, larger.is_negative, operation="addition")

    def subtract(self: T, other: T) -> T:
        if self.is_negative != other.is_negative:
            return self.add(-other)
        order = self.compare_magnitude(other)
        if order == 0:
            return self.zero()
        if order > 0:
            digits = sub_magnitudes(self.digits, other.digits, self.RADIX)
            return self.from_digits(digits, self.is_negative, operation="subtraction")
        digits = sub_magnitudes(other.digits, self.digits, self.RADIX)
        return self.from_digits(digits, not self.is_negative, operation="subtraction")

    def multiply_naive(self: T, other: T) -> T:
        if self.is_zero() or other.is_zero():
            return self.zero()
        if self.length + other.length - 1 > self.RESULT_CAPACITY:
            raise Overflow("naive multiplication")
        digits = mul_magnitudes(self.digits, other.digits, self.RADIX)
        return self.from_digits(
            digits,
            self.is_negative != other.is_negative,
            operation="naive multiplication",
        )

    def _coerce(self: T, other: object) -> T:
        if isinstance(other, type(self)):
            return other
        if isinstance(other, str):
            return type(self)(other)
        raise TypeError(
            f"unsupported operand type for {type(self).__name__}: {type(other).__name__}"
        )

    def __add__(self: T, other: object) -> T:
        return self.add(self._coerce(other))

    def __sub__(self: T, other: object) -> T:
        return self.subtract(self._coerce(other))
