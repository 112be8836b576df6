"""Multiplication performance dashboard: schoolbook vs Karatsuba vs warm cache."""
from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from bench.dataset import random_numeral
from bigint.hex_int import HexBigInt
from bigint.randomness import RandomSource
from karatsuba.multiplier import KaratsubaMultiplier
from utils.plotting import annotate_bars, nice_axes, save, wide_grid

DEFAULT_SIZES: Sequence[int] = (8, 16, 24, 32, 48, 64)


@dataclass
class SizeTiming:
    """Mean per-multiplication timings for one operand width."""

    digits: int
    naive_s: float
    karatsuba_s: float
    cached_s: float
    splits: int
    naive_calls: int
    cache_entries: int


def _timed(func) -> float:
    start = time.perf_counter()
    func()
    return time.perf_counter() - start


def measure_multiplication(
    sizes: Sequence[int] = DEFAULT_SIZES,
    *,
    samples: int = 3,
    rng: Optional[RandomSource] = None,
) -> List[SizeTiming]:
    """Time ``samples`` random products per size with each strategy."""

    timings = []
    for digits in sizes:
        pairs = [
            (
                HexBigInt(random_numeral(digits, hex_digits=True, rng=rng)),
                HexBigInt(random_numeral(digits, hex_digits=True, rng=rng)),
            )
            for _ in range(samples)
        ]
        engine = KaratsubaMultiplier()
        naive = sum(_timed(lambda: a.multiply_naive(b)) for a, b in pairs)
        cold = sum(_timed(lambda: engine.multiply(a, b)) for a, b in pairs)
        splits, naive_calls = engine.splits, engine.naive_calls
        warm = sum(_timed(lambda: engine.multiply(a, b)) for a, b in pairs)
        timings.append(
            SizeTiming(
                digits=digits,
                naive_s=naive / samples,
                karatsuba_s=cold / samples,
                cached_s=warm / samples,
                splits=splits,
                naive_calls=naive_calls,
                cache_entries=len(engine.cache),
            )
        )
    return timings


def make_performance_dashboard(
    save_path: str | Path,
    timings: Optional[Sequence[SizeTiming]] = None,
) -> Path:
    """Measure (unless *timings* is given) and save the dashboard PNG."""

    data = list(timings) if timings is not None else measure_multiplication()
    digits = [t.digits for t in data]

    fig, axes = wide_grid(2, 2)
    fig.suptitle("Hex multiplication: schoolbook vs Karatsuba vs memoised")

    ax = nice_axes(axes[0][0], "Time per product", xlabel="Operand hex digits", ylabel="Seconds")
    for label, values, marker in (
        ("schoolbook", [t.naive_s for t in data], "o"),
        ("Karatsuba (cold cache)", [t.karatsuba_s for t in data], "s"),
        ("Karatsuba (warm cache)", [t.cached_s for t in data], "^"),
    ):
        ax.plot(digits, values, marker=marker, label=label)
    ax.set_yscale("log")
    ax.legend()

    ax = nice_axes(axes[0][1], "Warm-cache speed-up", xlabel="Operand hex digits", ylabel="cold / warm")
    ratios = [t.karatsuba_s / t.cached_s if t.cached_s else 0.0 for t in data]
    bars = ax.bar([str(d) for d in digits], ratios, color="#10b981")
    annotate_bars(ax, bars, [f"{r:.0f}x" for r in ratios])

    ax = nice_axes(axes[1][0], "Recursion work (cold)", xlabel="Operand hex digits", ylabel="Calls")
    positions = range(len(digits))
    width = 0.35
    ax.bar([p - width / 2 for p in positions], [t.splits for t in data], width=width, label="splits", color="#f97316")
    ax.bar(
        [p + width / 2 for p in positions],
        [t.naive_calls for t in data],
        width=width,
        label="schoolbook base cases",
        color="#3b82f6",
    )
    ax.set_xticks(list(positions))
    ax.set_xticklabels([str(d) for d in digits])
    ax.legend()

    ax = nice_axes(axes[1][1], "Cache entries after one pass", xlabel="Operand hex digits", ylabel="Entries")
    ax.bar([str(d) for d in digits], [t.cache_entries for t in data], color="#6366f1")

    fig.tight_layout(rect=(0, 0.03, 1, 0.94))
    return save(fig, save_path)


__all__ = ["SizeTiming", "measure_multiplication", "make_performance_dashboard"]
