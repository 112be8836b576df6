"""Random sources shared by prime generation, datasets and reports."""
from __future__ import annotations

from typing import Optional, Protocol

from Crypto.Random import random as crypto_random

__all__ = ["RandomSource", "resolve_rng"]


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int:  # pragma: no cover - protocol
        ...


def resolve_rng(rng: Optional[RandomSource]) -> RandomSource:
    """Use *rng* when given, else pycryptodome's ``Crypto.Random.random``."""

    return crypto_random if rng is None else rng
