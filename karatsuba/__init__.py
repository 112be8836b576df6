from __future__ import annotations

from .cache import DEFAULT_CACHE_FILE, MultiplicationCache, persistent_cache
from .multiplier import KARATSUBA_THRESHOLD, KaratsubaMultiplier

__all__ = [
    "DEFAULT_CACHE_FILE",
    "KARATSUBA_THRESHOLD",
    "KaratsubaMultiplier",
    "MultiplicationCache",
    "persistent_cache",
]
