"""Divide-and-conquer (Karatsuba) multiplication of hex integers with memoisation."""
from __future__ import annotations

import logging
from typing import Final

from bigint.errors import InvalidInput
from bigint.hex_int import HexBigInt
from karatsuba.cache import MultiplicationCache

logger = logging.getLogger(__name__)

# Operands at or below this many hex digits use the schoolbook multiply.
KARATSUBA_THRESHOLD: Final[int] = 4

__all__ = ["KaratsubaMultiplier", "KARATSUBA_THRESHOLD"]


class KaratsubaMultiplier:
    """Multiplication engine that owns (or shares) a :class:`MultiplicationCache`.

    Every call, including the recursive ones, consults the cache first and
    records its product afterwards, so repeated sub-problems are computed
    once per cache lifetime.  ``calls``, ``naive_calls`` and ``splits`` count
    work done and are handy for checking cache behaviour.
    """

    def __init__(
        self,
        cache: MultiplicationCache | None = None,
        threshold: int = KARATSUBA_THRESHOLD,
    ):
        if threshold < 1:
            raise InvalidInput(f"Karatsuba threshold must be >= 1, got {threshold}")
        self.cache = MultiplicationCache() if cache is None else cache
        self.threshold = threshold
        self.calls = 0
        self.naive_calls = 0
        self.splits = 0

    def multiply(self, a: HexBigInt, b: HexBigInt) -> HexBigInt:
        self.calls += 1
        left, right = a.format(), b.format()

        cached = self.cache.get(left, right)
        if cached is not None:
            return HexBigInt.from_numeral(cached)

        if a.is_zero() or b.is_zero():
            result = HexBigInt.zero()
        elif a.length <= self.threshold or b.length <= self.threshold:
            self.naive_calls += 1
            result = a.multiply_naive(b)
        else:
            result = self._split(a, b)

        self.cache.put(left, right, result.format())
        return result

    def _split(self, a: HexBigInt, b: HexBigInt) -> HexBigInt:
        self.splits += 1
        m = max(a.length, b.length) // 2

        low1, high1 = a.lower(m), a.higher(m)
        low2, high2 = b.lower(m), b.higher(m)

        z0 = self.multiply(low1, low2)
        z2 = self.multiply(high1, high2)
        z1 = self.multiply(low1 + high1, low2 + high2) - z2 - z0

        result = z2.shift_left(2 * m) + z1.shift_left(m) + z0
        logger.debug("karatsuba split at m=%d for %d x %d digits", m, a.length, b.length)
        if a.is_negative != b.is_negative:
            return -result
        return result
