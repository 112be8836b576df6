from __future__ import annotations

from .primality import (
    DEFAULT_ITERATIONS,
    RetryStrategy,
    generate_prime,
    miller_rabin,
    mod_pow,
    passes_sieve,
    random_hex,
    random_in_range,
)

__all__ = [
    "DEFAULT_ITERATIONS",
    "RetryStrategy",
    "generate_prime",
    "miller_rabin",
    "mod_pow",
    "passes_sieve",
    "random_hex",
    "random_in_range",
]
