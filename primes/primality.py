"""Modular exponentiation, Miller–Rabin and random probable primes on HexBigInt.

Randomness defaults to pycryptodome's ``Crypto.Random.random``; every routine
accepts an ``rng`` with a ``randint(a, b)`` method so callers (and tests) can
supply a seeded generator instead.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Final, Optional, Tuple

from bigint.errors import InvalidInput
from bigint.hex_int import MAX_HEX_DIGITS, HexBigInt
from bigint.randomness import RandomSource, resolve_rng
from karatsuba.multiplier import KaratsubaMultiplier

logger = logging.getLogger(__name__)

DEFAULT_ITERATIONS: Final[int] = 20
SMALL_PRIMES: Final[Tuple[int, ...]] = (2, 3, 5, 7, 11, 13, 17, 19)

_SIEVE: Final[Tuple[HexBigInt, ...]] = tuple(HexBigInt(format(p, "x")) for p in SMALL_PRIMES)
_TWO: Final[HexBigInt] = HexBigInt("2")
_THREE: Final[HexBigInt] = HexBigInt("3")

__all__ = [
    "DEFAULT_ITERATIONS",
    "SMALL_PRIMES",
    "RetryStrategy",
    "mod_pow",
    "miller_rabin",
    "random_hex",
    "random_in_range",
    "passes_sieve",
    "generate_prime",
]


class RetryStrategy(str, Enum):
    """How :func:`generate_prime` picks the next candidate after a rejection.

    ``MIXED`` draws a fresh candidate after a sieve rejection and steps by two
    after a Miller–Rabin failure.  ``FRESH`` always redraws, ``STEP`` always
    steps by two.
    """

    MIXED = "mixed"
    FRESH = "fresh"
    STEP = "step"


def mod_pow(
    base: HexBigInt,
    exponent: HexBigInt,
    modulus: HexBigInt,
    *,
    multiplier: KaratsubaMultiplier | None = None,
) -> HexBigInt:
    """Square-and-multiply ``base ** exponent mod |modulus|``.

    Every product is reduced modulo ``modulus`` immediately.  A negative base
    is mapped to its non-negative residue first.
    """

    if modulus.is_zero():
        raise InvalidInput("Modulus cannot be zero")
    if exponent.is_negative:
        raise InvalidInput("Negative exponents not supported in modular exponentiation")

    modulus = abs(modulus)
    if modulus.is_one():
        return HexBigInt.zero()
    if exponent.is_zero():
        return HexBigInt.one()

    engine = KaratsubaMultiplier() if multiplier is None else multiplier

    if base.is_negative:
        residue = abs(base) % modulus
        base = HexBigInt.zero() if residue.is_zero() else modulus - residue
    else:
        base = base % modulus
    if base.is_zero():
        return HexBigInt.zero()

    result = HexBigInt.one()
    exp = exponent
    while not exp.is_zero():
        if exp.is_odd():
            result = engine.multiply(result, base) % modulus
        base = engine.multiply(base, base) % modulus
        exp = exp.half()
    return result


def random_hex(digit_count: int, *, rng: Optional[RandomSource] = None) -> HexBigInt:
    """Random odd value with exactly ``digit_count`` hex digits."""

    if digit_count <= 0 or digit_count > MAX_HEX_DIGITS:
        raise InvalidInput(f"Invalid number of hex digits for random generation: {digit_count}")
    source = resolve_rng(rng)
    digits = [source.randint(0, 15) for _ in range(digit_count - 1)]
    digits.append(source.randint(1, 15))
    digits[0] |= 1
    return HexBigInt.from_digits(digits, operation="random generation")


def random_in_range(
    low: HexBigInt,
    high: HexBigInt,
    *,
    rng: Optional[RandomSource] = None,
) -> HexBigInt:
    """Uniform value in ``[low, high]`` by rejection sampling on the span."""

    if low > high:
        low, high = high, low
    span = high - low
    if span.is_zero():
        return low
    source = resolve_rng(rng)
    while True:
        offset = HexBigInt.from_digits([source.randint(0, 15) for _ in range(span.length)])
        if offset <= span:
            return low + offset


def miller_rabin(
    n: HexBigInt,
    iterations: int = DEFAULT_ITERATIONS,
    *,
    rng: Optional[RandomSource] = None,
    multiplier: KaratsubaMultiplier | None = None,
) -> bool:
    """Probabilistic primality test; ``False`` means certainly composite."""

    if iterations < 1:
        raise InvalidInput(f"Miller-Rabin needs at least one round, got {iterations}")
    one = HexBigInt.one()
    if n <= one:
        return False
    if n == _TWO or n == _THREE:
        return True
    if n.is_even():
        return False

    engine = KaratsubaMultiplier() if multiplier is None else multiplier
    n_minus_1 = n - one
    d, s = n_minus_1, 0
    while d.is_even():
        d = d.half()
        s += 1

    n_minus_2 = n_minus_1 - one
    for _ in range(iterations):
        a = random_in_range(_TWO, n_minus_2, rng=rng)
        x = mod_pow(a, d, n, multiplier=engine)
        if x.is_one() or x == n_minus_1:
            continue
        for _ in range(s - 1):
            x = engine.multiply(x, x) % n
            if x == n_minus_1:
                break
        else:
            return False
    return True


def passes_sieve(candidate: HexBigInt) -> bool:
    """Reject values divisible by a small prime (small primes themselves pass)."""

    if candidate <= HexBigInt.one():
        return False
    for prime in _SIEVE:
        if candidate == prime:
            return True
        if (candidate % prime).is_zero():
            return False
    return True


def generate_prime(
    digit_count: int,
    iterations: int = DEFAULT_ITERATIONS,
    *,
    rng: Optional[RandomSource] = None,
    multiplier: KaratsubaMultiplier | None = None,
    retry: RetryStrategy = RetryStrategy.MIXED,
) -> HexBigInt:
    """Draw random odd ``digit_count``-digit candidates until one is a probable prime."""

    retry = RetryStrategy(retry)
    engine = KaratsubaMultiplier() if multiplier is None else multiplier
    logger.info("Generating a %d-hex-digit prime (%s retry)", digit_count, retry.value)

    def step(value: HexBigInt) -> HexBigInt:
        stepped = value + _TWO
        # Stepping past the requested width falls back to a fresh draw.
        if stepped.length > digit_count:
            return random_hex(digit_count, rng=rng)
        return stepped

    candidate = random_hex(digit_count, rng=rng)
    while True:
        if not passes_sieve(candidate):
            logger.debug("Candidate %s eliminated by small prime sieve", candidate)
            if retry is RetryStrategy.STEP:
                candidate = step(candidate)
            else:
                candidate = random_hex(digit_count, rng=rng)
            continue

        logger.debug("Testing candidate %s with Miller-Rabin", candidate)
        if miller_rabin(candidate, iterations, rng=rng, multiplier=engine):
            logger.info("Found prime: %s", candidate)
            return candidate

        logger.debug("Candidate %s failed Miller-Rabin", candidate)
        if retry is RetryStrategy.FRESH:
            candidate = random_hex(digit_count, rng=rng)
        else:
            candidate = step(candidate)
