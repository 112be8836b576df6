"""Toy Diffie–Hellman exchange on HexBigInt plus an XOR chunk cipher.

The prime comes from :func:`primes.generate_prime`; every exponentiation goes
through :func:`primes.mod_pow`, so the demo exercises the whole engine.
The XOR cipher is a teaching aid only; it offers no real confidentiality.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from bigint.errors import InvalidInput
from bigint.hex_int import HexBigInt, hex_digit_char, hex_digit_value
from bigint.randomness import RandomSource
from karatsuba.multiplier import KaratsubaMultiplier
from primes.primality import generate_prime, mod_pow, random_in_range

logger = logging.getLogger(__name__)

g = HexBigInt("7")
PRIME_HEX_DIGITS = 16
MR_ITERATIONS = 10
MAX_KEY_ATTEMPTS = 64

_TWO = HexBigInt("2")

__all__ = [
    "g",
    "XorCiphertext",
    "validate_public_component",
    "generate_private_key",
    "derive_public_key",
    "generate_key_pair",
    "derive_shared_secret",
    "xor_encrypt",
    "xor_decrypt",
    "dh_demo",
    "demo",
]


@dataclass(frozen=True)
class XorCiphertext:
    chunks: List[str]
    message_len: int


def validate_public_component(component: HexBigInt, modulus: HexBigInt) -> None:
    """Basic peer validation before exponentiation."""

    if not isinstance(component, HexBigInt):
        raise InvalidInput("Public component must be a HexBigInt")
    if not (HexBigInt.one() < component < modulus - HexBigInt.one()):
        raise InvalidInput("Peer public component is out of the valid range (1, p-1)")


def generate_private_key(p: HexBigInt, *, rng: Optional[RandomSource] = None) -> HexBigInt:
    """Uniform private exponent in ``[2, p-2]``."""

    if p - _TWO < _TWO:
        raise InvalidInput(f"DH modulus {p} is too small for a private key")
    return random_in_range(_TWO, p - _TWO, rng=rng)


def derive_public_key(
    private_key: HexBigInt,
    p: HexBigInt,
    *,
    generator: HexBigInt = g,
    multiplier: KaratsubaMultiplier | None = None,
) -> HexBigInt:
    return mod_pow(generator, private_key, p, multiplier=multiplier)


def generate_key_pair(
    p: HexBigInt,
    *,
    generator: HexBigInt = g,
    rng: Optional[RandomSource] = None,
    multiplier: KaratsubaMultiplier | None = None,
) -> Tuple[HexBigInt, HexBigInt]:
    """Private key and a public key the peer will accept, i.e. inside ``(1, p-1)``.

    Small moduli often map ``g**a`` onto 1 or p-1, so such keys are redrawn.
    """

    for _ in range(MAX_KEY_ATTEMPTS):
        private_key = generate_private_key(p, rng=rng)
        public_key = derive_public_key(private_key, p, generator=generator, multiplier=multiplier)
        try:
            validate_public_component(public_key, p)
        except InvalidInput:
            logger.debug("Public key %s rejected for modulus %s; redrawing", public_key, p)
            continue
        return private_key, public_key
    raise InvalidInput(f"generator {generator} gave no usable public key modulo {p}")


def derive_shared_secret(
    private_key: HexBigInt,
    peer_public: HexBigInt,
    p: HexBigInt,
    *,
    multiplier: KaratsubaMultiplier | None = None,
) -> HexBigInt:
    validate_public_component(peer_public, p)
    return mod_pow(peer_public, private_key, p, multiplier=multiplier)


def _xor_hex(chunk: str, key: str) -> str:
    return "".join(
        hex_digit_char(hex_digit_value(c) ^ hex_digit_value(key[i % len(key)]))
        for i, c in enumerate(chunk)
    )


def xor_encrypt(message: bytes | str, secret: HexBigInt) -> XorCiphertext:
    """XOR the message's hex form with the secret, one secret-width chunk at a time."""

    data = message.encode("utf-8") if isinstance(message, str) else bytes(message)
    key = secret.format_padded(1)
    width = len(key)
    message_hex = data.hex()
    if len(message_hex) % width:
        message_hex += "0" * (width - len(message_hex) % width)
    chunks = [_xor_hex(message_hex[i:i + width], key) for i in range(0, len(message_hex), width)]
    return XorCiphertext(chunks=chunks, message_len=len(data))


def xor_decrypt(ciphertext: XorCiphertext, secret: HexBigInt) -> bytes:
    key = secret.format_padded(1)
    message_hex = "".join(_xor_hex(chunk, key) for chunk in ciphertext.chunks)
    return bytes.fromhex(message_hex[: 2 * ciphertext.message_len])


def _demo_exchange(
    prime_digits: int,
    iterations: int,
    rng: Optional[RandomSource],
    multiplier: KaratsubaMultiplier,
) -> Dict[str, HexBigInt]:
    p = generate_prime(prime_digits, iterations, rng=rng, multiplier=multiplier)
    a, A = generate_key_pair(p, rng=rng, multiplier=multiplier)
    b, B = generate_key_pair(p, rng=rng, multiplier=multiplier)
    logger.info("DH exchange over %d-digit prime %s", p.length, p)
    return {
        "p": p,
        "a": a,
        "b": b,
        "A": A,
        "B": B,
        "shared_a": derive_shared_secret(a, B, p, multiplier=multiplier),
        "shared_b": derive_shared_secret(b, A, p, multiplier=multiplier),
    }


def dh_demo(
    message: str = "Hello from the hex big-integer engine",
    *,
    prime_digits: int = PRIME_HEX_DIGITS,
    iterations: int = MR_ITERATIONS,
    rng: Optional[RandomSource] = None,
    multiplier: KaratsubaMultiplier | None = None,
) -> Dict[str, Any]:
    """Run an exchange, then encrypt/decrypt *message* with the shared secret."""

    if prime_digits < 2:
        raise InvalidInput("the DH prime needs at least 2 hex digits to exceed g")
    engine = KaratsubaMultiplier() if multiplier is None else multiplier
    values = _demo_exchange(prime_digits, iterations, rng, engine)
    ciphertext = xor_encrypt(message, values["shared_a"])
    recovered = xor_decrypt(ciphertext, values["shared_b"]).decode("utf-8", errors="replace")
    return {
        **values,
        "shared_match": values["shared_a"] == values["shared_b"],
        "ciphertext": ciphertext,
        "recovered": recovered,
        "ok": recovered == message,
    }


def demo():
    values = dh_demo()
    print(f"p (modulus): {values['p']} | generator g: {g}")
    print(f"Alice private a: {values['a']}")
    print(f"Bob private b: {values['b']}")
    print(f"Alice public A = g^a mod p: {values['A']}")
    print(f"Bob public B = g^b mod p: {values['B']}")
    print(f"Shared secret: {values['shared_a']}")
    print(f"Shared secrets match: {values['shared_match']}")
    for index, chunk in enumerate(values["ciphertext"].chunks, start=1):
        print(f"  Chunk {index}: {chunk}")
    print(f"Recovered message: {values['recovered']!r}")


if __name__ == "__main__":
    demo()
