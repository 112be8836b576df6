"""Capacity-checked digit storage shared by the decimal and hex integers.

Digits are kept least-significant first.  The helpers below work on plain
digit sequences so that both radices (10 and 16) share one implementation of
carry/borrow propagation and schoolbook multiplication.
"""
from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from bigint.errors import Overflow

__all__ = [
    "DigitBuffer",
    "trim",
    "compare_magnitudes",
    "add_magnitudes",
    "sub_magnitudes",
    "mul_magnitudes",
]


def trim(digits: Sequence[int]) -> Tuple[int, ...]:
    """Drop most-significant zeros, keeping a single ``0`` for zero."""

    end = len(digits)
    while end > 1 and digits[end - 1] == 0:
        end -= 1
    if end == 0:
        return (0,)
    return tuple(digits[:end])


def compare_magnitudes(a: Sequence[int], b: Sequence[int]) -> int:
    """Compare two trimmed magnitudes: by length, then from the top digit down."""

    if len(a) != len(b):
        return 1 if len(a) > len(b) else -1
    for i in range(len(a) - 1, -1, -1):
        if a[i] != b[i]:
            return 1 if a[i] > b[i] else -1
    return 0


def add_magnitudes(a: Sequence[int], b: Sequence[int], radix: int) -> List[int]:
    result: List[int] = []
    carry = 0
    for i in range(max(len(a), len(b))):
        total = (a[i] if i < len(a) else 0) + (b[i] if i < len(b) else 0) + carry
        result.append(total % radix)
        carry = total // radix
    if carry:
        result.append(carry)
    return result


def sub_magnitudes(a: Sequence[int], b: Sequence[int], radix: int) -> List[int]:
    """Return ``a - b`` digit-wise; the caller guarantees ``|a| >= |b|``."""

    result: List[int] = []
    borrow = 0
    for i in range(len(a)):
        diff = a[i] - (b[i] if i < len(b) else 0) - borrow
        if diff < 0:
            diff += radix
            borrow = 1
        else:
            borrow = 0
        result.append(diff)
    return result


def mul_magnitudes(a: Sequence[int], b: Sequence[int], radix: int) -> List[int]:
    """Schoolbook O(len(a) * len(b)) convolution with carry propagation."""

    result = [0] * (len(a) + len(b))
    for i, da in enumerate(a):
        if da == 0:
            continue
        carry = 0
        for j, db in enumerate(b):
            current = result[i + j] + da * db + carry
            result[i + j] = current % radix
            carry = current // radix
        k = i + len(b)
        while carry:
            current = result[k] + carry
            result[k] = current % radix
            carry = current // radix
            k += 1
    return result


class DigitBuffer:
    """Immutable digit sequence with an explicit capacity and a sign flag.

    The stored digits are always trimmed, so ``length >= 1`` and a zero value
    is a single ``0`` digit that never reads as negative.  A buffer whose
    significant length would exceed ``capacity`` is never built; ``Overflow``
    is raised instead.
    """

    __slots__ = ("_digits", "capacity", "negative")

    def __init__(
        self,
        digits: Iterable[int],
        capacity: int,
        negative: bool = False,
        *,
        operation: str = "buffer construction",
    ):
        trimmed = trim(list(digits))
        if len(trimmed) > capacity:
            raise Overflow(operation)
        self._digits = trimmed
        self.capacity = capacity
        self.negative = bool(negative) and trimmed != (0,)

    @property
    def digits(self) -> Tuple[int, ...]:
        return self._digits

    @property
    def length(self) -> int:
        return len(self._digits)

    def is_zero(self) -> bool:
        return self._digits == (0,)

    def __getitem__(self, index: int) -> int:
        # Positions past the significant length read as zero.
        if 0 <= index < len(self._digits):
            return self._digits[index]
        return 0

    def __len__(self) -> int:
        return len(self._digits)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DigitBuffer):
            return NotImplemented
        return self._digits == other._digits and self.negative == other.negative

    def __hash__(self) -> int:
        return hash((self._digits, self.negative))

    def __repr__(self) -> str:
        sign = "-" if self.negative else ""
        return f"DigitBuffer({sign}{list(reversed(self._digits))}, capacity={self.capacity})"
