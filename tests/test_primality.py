import pytest


def _is_prime(n: int) -> bool:
    if n < 2:
        return False
    f = 2
    while f * f <= n:
        if n % f == 0:
            return False
        f += 1
    return True


def _hex(value: int):
    from bigint.hex_int import HexBigInt

    return HexBigInt(format(value, "x") if value >= 0 else "-" + format(-value, "x"))


def test_mod_pow_fixed_vector(engine):
    from primes.primality import mod_pow

    assert int(mod_pow(_hex(4), _hex(13), _hex(497), multiplier=engine)) == 445


@pytest.mark.parametrize(
    "base, exponent, modulus",
    [
        (2, 10, 1000),
        (3, 200, 1000007),
        (0xdeadbeef, 0x10001, 0xfffffffb),
        (-4, 13, 497),
        (7, 1, 5),
        (10, 5, 10),
    ],
)
def test_mod_pow_matches_builtin_pow(base, exponent, modulus, engine):
    from primes.primality import mod_pow

    assert int(mod_pow(_hex(base), _hex(exponent), _hex(modulus), multiplier=engine)) == pow(
        base, exponent, modulus
    )


def test_mod_pow_edge_cases():
    from primes.primality import mod_pow

    assert str(mod_pow(_hex(5), _hex(0), _hex(7))) == "1"
    assert str(mod_pow(_hex(5), _hex(3), _hex(1))) == "0"
    assert str(mod_pow(_hex(5), _hex(0), _hex(1))) == "0"
    assert str(mod_pow(_hex(14), _hex(3), _hex(7))) == "0"
    assert int(mod_pow(_hex(4), _hex(13), _hex(-497))) == 445


def test_mod_pow_rejects_zero_modulus_and_negative_exponent():
    from bigint.errors import InvalidInput
    from primes.primality import mod_pow

    with pytest.raises(InvalidInput, match="Modulus cannot be zero"):
        mod_pow(_hex(2), _hex(3), _hex(0))
    with pytest.raises(InvalidInput, match="Negative exponents"):
        mod_pow(_hex(2), _hex(-3), _hex(7))


@pytest.mark.parametrize("n", [2, 3, 5, 7, 61, 0x1fffffffffffffff])
def test_miller_rabin_accepts_primes(n, rng, engine):
    from primes.primality import miller_rabin

    assert miller_rabin(_hex(n), rng=rng, multiplier=engine)


@pytest.mark.parametrize("n", [0, 1, 4, 6, 9, 15, 21, 561, 0x1fffffffffffffff * 61, -7])
def test_miller_rabin_rejects_composites(n, rng, engine):
    from primes.primality import miller_rabin

    assert not miller_rabin(_hex(n), rng=rng, multiplier=engine)


def test_miller_rabin_needs_a_round():
    from bigint.errors import InvalidInput
    from primes.primality import miller_rabin

    with pytest.raises(InvalidInput):
        miller_rabin(_hex(7), 0)


def test_random_hex_has_exact_width_and_is_odd(rng):
    from primes.primality import random_hex

    for digits in (1, 2, 16, 64):
        value = random_hex(digits, rng=rng)
        assert value.length == digits
        assert value.is_odd()
        assert not value.is_negative


@pytest.mark.parametrize("digits", [0, -1, 65])
def test_random_hex_rejects_bad_widths(digits, rng):
    from bigint.errors import InvalidInput
    from primes.primality import random_hex

    with pytest.raises(InvalidInput):
        random_hex(digits, rng=rng)


def test_random_hex_defaults_to_pycryptodome_source():
    from primes.primality import random_hex

    assert random_hex(8).length == 8


def test_random_in_range_stays_inside_bounds(rng):
    from primes.primality import random_in_range

    low, high = _hex(0x100), _hex(0x1ff)
    for _ in range(50):
        value = random_in_range(high, low, rng=rng)
        assert low <= value <= high
    assert random_in_range(low, low, rng=rng) == low


def test_sieve():
    from primes.primality import passes_sieve

    assert passes_sieve(_hex(2))
    assert passes_sieve(_hex(19))
    assert passes_sieve(_hex(23))
    assert not passes_sieve(_hex(1))
    assert not passes_sieve(_hex(17 * 23))
    assert not passes_sieve(_hex(0x11 * 29))


def test_generate_one_digit_prime(rng, engine):
    from primes.primality import generate_prime

    for _ in range(5):
        assert int(generate_prime(1, rng=rng, multiplier=engine)) in {3, 5, 7, 11, 13}


@pytest.mark.parametrize("retry", ["mixed", "fresh", "step"])
def test_generate_prime_with_each_retry_strategy(retry, rng, engine):
    from primes.primality import RetryStrategy, generate_prime

    prime = generate_prime(8, rng=rng, multiplier=engine, retry=RetryStrategy(retry))
    assert prime.length == 8
    assert _is_prime(int(prime))


def test_generate_prime_rejects_bad_width(rng):
    from bigint.errors import InvalidInput
    from primes.primality import generate_prime

    with pytest.raises(InvalidInput):
        generate_prime(0, rng=rng)


def test_random_source_resolution(rng):
    from Crypto.Random import random as crypto_random

    from bigint.randomness import resolve_rng

    assert resolve_rng(None) is crypto_random
    assert resolve_rng(rng) is rng
