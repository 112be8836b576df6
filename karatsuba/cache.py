"""Memoisation store for Karatsuba products and its flat-file persistence.

File format, one record per line::

    KARATSUBA:<numeralA>:<numeralB>:<product>
    <i>:<j>:<product>            (legacy single-digit lookup table)

Loading is permissive (malformed lines are skipped, a missing file is fine);
flushing appends only the entries learned since the last load or flush.
"""
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from bigint.errors import FileIO
from bigint.hex_int import HexBigInt

logger = logging.getLogger(__name__)

DEFAULT_CACHE_FILE = "numberstorage"
KARATSUBA_TAG = "KARATSUBA"
LOOKUP_TABLE_SIZE = 256

CacheKey = Tuple[str, str]

__all__ = [
    "DEFAULT_CACHE_FILE",
    "KARATSUBA_TAG",
    "MultiplicationCache",
    "persistent_cache",
]


class MultiplicationCache:
    """Exact product cache keyed by the unordered pair of operand numerals.

    The lock only protects the dictionaries; two callers racing on the same
    missing key may both compute the product, which is wasted work but never
    a wrong entry.
    """

    def __init__(self) -> None:
        self._entries: Dict[CacheKey, str] = {}
        self._pending: Dict[CacheKey, str] = {}
        self._lock = threading.Lock()
        # Parsed from old files for compatibility; no multiplication reads it.
        self.legacy_digit_products: Dict[Tuple[int, int], int] = {}
        self.hits = 0
        self.misses = 0
        self.stores = 0

    @staticmethod
    def key(a: str, b: str) -> CacheKey:
        return (a, b) if a <= b else (b, a)

    def get(self, a: str, b: str) -> Optional[str]:
        with self._lock:
            product = self._entries.get(self.key(a, b))
            if product is None:
                self.misses += 1
            else:
                self.hits += 1
            return product

    def put(self, a: str, b: str, product: str) -> None:
        k = self.key(a, b)
        with self._lock:
            if self._entries.get(k) == product:
                return
            self._entries[k] = product
            self._pending[k] = product
            self.stores += 1

    def __contains__(self, pair: object) -> bool:
        if not isinstance(pair, tuple) or len(pair) != 2:
            return False
        return self.key(*pair) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def pending(self) -> List[Tuple[str, str, str]]:
        with self._lock:
            return [(a, b, product) for (a, b), product in self._pending.items()]

    # ------------------------------------------------------------------
    # persistence
    # ------------------------------------------------------------------
    def load(self, path: str | Path = DEFAULT_CACHE_FILE) -> int:
        """Read memoised products from *path*; returns the number loaded."""

        source = Path(path)
        if not source.exists():
            logger.info("Cache file %s not found; a new one is created on flush", source)
            return 0
        try:
            text = source.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise FileIO(str(source), "open for reading") from exc

        loaded = skipped = 0
        with self._lock:
            for raw in text.splitlines():
                parsed = _parse_record(raw.strip())
                if parsed is None:
                    if raw.strip():
                        skipped += 1
                    continue
                tag, payload = parsed
                if tag == KARATSUBA_TAG:
                    a, b, product = payload
                    self._entries[self.key(a, b)] = product
                    loaded += 1
                else:
                    i, j, product = payload
                    self.legacy_digit_products[(i, j)] = product
        logger.info(
            "Loaded %d memoised products from %s (%d legacy, %d skipped)",
            loaded,
            source,
            len(self.legacy_digit_products),
            skipped,
        )
        return loaded

    def flush(self, path: str | Path = DEFAULT_CACHE_FILE) -> int:
        """Append the entries learned since the last load/flush to *path*."""

        target = Path(path)
        records = self.pending()
        try:
            with target.open("a", encoding="utf-8") as handle:
                for a, b, product in records:
                    handle.write(f"{KARATSUBA_TAG}:{a}:{b}:{product}\n")
        except OSError as exc:
            raise FileIO(str(target), "open for writing") from exc

        with self._lock:
            for a, b, _ in records:
                self._pending.pop((a, b), None)
        logger.info("Appended %d memoised products to %s", len(records), target)
        return len(records)


def _parse_record(line: str):
    if not line:
        return None
    parts = line.split(":")
    if parts[0] == KARATSUBA_TAG:
        if len(parts) != 4:
            return None
        a, b, product = parts[1:]
        if not all(HexBigInt.is_valid_input(item) for item in (a, b, product)):
            return None
        return KARATSUBA_TAG, (a, b, product)
    if len(parts) != 3:
        return None
    try:
        i, j, product = (int(part) for part in parts)
    except ValueError:
        return None
    if not (0 <= i < LOOKUP_TABLE_SIZE and 0 <= j < LOOKUP_TABLE_SIZE):
        return None
    return "LOOKUP", (i, j, product)


@contextmanager
def persistent_cache(
    path: str | Path = DEFAULT_CACHE_FILE,
    cache: MultiplicationCache | None = None,
) -> Iterator[MultiplicationCache]:
    """Load *path* on entry and append new products on exit.

    File errors are logged rather than raised: a cache that cannot be read
    starts empty, and a failed flush at shutdown must not crash the caller.
    """

    cache = MultiplicationCache() if cache is None else cache
    try:
        cache.load(path)
    except FileIO as exc:
        logger.error("Error initialising memoisation cache: %s", exc)
    try:
        yield cache
    finally:
        try:
            cache.flush(path)
        except FileIO as exc:
            logger.error("Error updating memoisation file: %s", exc)
