"""Write files of random numeral pairs (``a;b`` per line) for benchmarking."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from bigint.hex_int import HEX_DIGITS
from bigint.randomness import RandomSource, resolve_rng

logger = logging.getLogger(__name__)

DECIMAL_DIGITS = "0123456789"

# (file name, hex numerals?, line count)
DEFAULT_DATASETS: Sequence[Tuple[str, bool, int]] = (
    ("BigDataDeciAdd", False, 1000),
    ("BigDataDeciSub", False, 1000),
    ("BigDataDeciMul", False, 100),
    ("BigDataHexAdd", True, 1000),
    ("BigDataHexSub", True, 1000),
    ("BigDataHexMul", True, 100),
)

__all__ = [
    "DEFAULT_DATASETS",
    "random_numeral",
    "generate_dataset",
    "generate_default_datasets",
]


def random_numeral(
    digits: int = 50,
    *,
    hex_digits: bool = False,
    rng: Optional[RandomSource] = None,
) -> str:
    alphabet = HEX_DIGITS if hex_digits else DECIMAL_DIGITS
    source = resolve_rng(rng)
    return "".join(alphabet[source.randint(0, len(alphabet) - 1)] for _ in range(digits))


def generate_dataset(
    path: str | Path,
    lines: int,
    *,
    digits: int = 50,
    hex_digits: bool = False,
    rng: Optional[RandomSource] = None,
) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as fout:
        for _ in range(lines):
            a = random_numeral(digits, hex_digits=hex_digits, rng=rng)
            b = random_numeral(digits, hex_digits=hex_digits, rng=rng)
            fout.write(f"{a};{b}\n")
    logger.info("Wrote %d pairs to %s", lines, target)
    return target


def generate_default_datasets(
    out_dir: str | Path,
    *,
    scale: float = 1.0,
    digits: int = 50,
    rng: Optional[RandomSource] = None,
) -> List[Path]:
    """Write the six ``BigData*`` files; ``scale`` multiplies the line counts."""

    directory = Path(out_dir)
    written = []
    for name, hex_digits, lines in DEFAULT_DATASETS:
        count = max(1, int(lines * scale))
        written.append(
            generate_dataset(directory / name, count, digits=digits, hex_digits=hex_digits, rng=rng)
        )
    return written
