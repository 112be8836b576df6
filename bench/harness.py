"""Time batches of operations read from ``a;b`` dataset files."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from bigint.calculator import evaluate
from bigint.errors import FileIO, InvalidInput
from karatsuba.multiplier import KaratsubaMultiplier

logger = logging.getLogger(__name__)

BENCH_OPERATIONS = ("+", "-", "*")

_OP_NAMES: Dict[str, str] = {"+": "Add", "-": "Sub", "*": "Mul"}
_OP_LABELS: Dict[str, str] = {"+": "Addition", "-": "Subtraction", "*": "Multiplication"}

__all__ = [
    "BENCH_OPERATIONS",
    "BenchmarkResult",
    "Timer",
    "dataset_name",
    "load_pairs",
    "run_benchmark",
    "run_file_benchmark",
]


class Timer:
    """Scoped wall-clock timer; logs ``<label>: <ns> ns`` when the block exits."""

    def __init__(self, label: str):
        self.label = label
        self.elapsed_ns = 0
        self._start = 0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter_ns()
        return self

    def __exit__(self, *exc_info) -> None:
        self.elapsed_ns = time.perf_counter_ns() - self._start
        logger.info("%s: %d ns", self.label, self.elapsed_ns)

    @property
    def seconds(self) -> float:
        return self.elapsed_ns / 1e9


@dataclass
class BenchmarkResult:
    """Timing for one batch of operations."""

    label: str
    op: str
    count: int
    seconds: float
    errors: int = 0

    @property
    def per_op_us(self) -> float:
        return 0.0 if self.count == 0 else self.seconds * 1e6 / self.count


def dataset_name(op: str, hex_mode: bool) -> str:
    if op not in _OP_NAMES:
        raise InvalidInput(f"Unsupported benchmark operation: {op}")
    return f"BigData{'Hex' if hex_mode else 'Deci'}{_OP_NAMES[op]}"


def load_pairs(path: str | Path) -> List[Tuple[str, str]]:
    """Read ``a;b`` lines; lines without both halves are skipped."""

    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise FileIO(str(source), "open for reading") from exc

    pairs = []
    for line in text.splitlines():
        left, sep, right = line.strip().partition(";")
        if sep and left and right:
            pairs.append((left, right))
    return pairs


def run_benchmark(
    op: str,
    pairs: Sequence[Tuple[str, str]],
    *,
    hex_mode: bool = True,
    multiplier: KaratsubaMultiplier | None = None,
    label: Optional[str] = None,
) -> BenchmarkResult:
    if op not in BENCH_OPERATIONS:
        raise InvalidInput(f"Unsupported benchmark operation: {op}")
    engine = KaratsubaMultiplier() if multiplier is None else multiplier
    title = label or f"{'Hexadecimal' if hex_mode else 'decimal'} {_OP_LABELS[op]}"

    errors = 0
    with Timer(title) as timer:
        for left, right in pairs:
            if not evaluate(op, left, right, hex_mode=hex_mode, multiplier=engine).ok:
                errors += 1
    if errors:
        logger.warning("%s: %d of %d operations failed", title, errors, len(pairs))
    return BenchmarkResult(title, op, len(pairs), timer.seconds, errors)


def run_file_benchmark(
    data_dir: str | Path,
    op: str,
    *,
    hex_mode: bool = True,
    multiplier: KaratsubaMultiplier | None = None,
) -> BenchmarkResult:
    path = Path(data_dir) / dataset_name(op, hex_mode)
    return run_benchmark(op, load_pairs(path), hex_mode=hex_mode, multiplier=multiplier)
