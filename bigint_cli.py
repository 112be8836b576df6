#!/usr/bin/env python3
"""
Big-integer engine CLI – one entry point for the calculator and its demos.

Usage:
  Interactive menu:
    python bigint_cli.py

  Batch mode (count, then "<op> <a> <b>" lines on stdin):
    printf '2\\n+ ff 1\\n* abc def\\n' | python bigint_cli.py --run calc

  Non-interactive demos:
    python bigint_cli.py --run prime --digits 16
    python bigint_cli.py --run dh
    python bigint_cli.py --run bench
    python bigint_cli.py --run dashboard
"""

from __future__ import annotations

import argparse
import contextlib
import logging
import os
import pathlib
import sys
import textwrap
import time
from typing import Callable, List, Optional, TextIO

# Ensure relative repo imports work even if executed from another directory.
sys.path.insert(0, str(pathlib.Path(__file__).parent.resolve()))

from bench.dataset import generate_default_datasets
from bench.harness import BENCH_OPERATIONS, run_file_benchmark
from bigint.calculator import OPERATORS, Evaluation, evaluate, parse_batch_line
from bigint.errors import BigIntError, InvalidInput
from dh.dh_hex_demo import PRIME_HEX_DIGITS, dh_demo, g
from karatsuba.cache import DEFAULT_CACHE_FILE, MultiplicationCache, persistent_cache
from karatsuba.multiplier import KaratsubaMultiplier
from primes.primality import DEFAULT_ITERATIONS, RetryStrategy, generate_prime
from reports.performance_dashboard import make_performance_dashboard
from utils import console_ui

logger = logging.getLogger("bigint_cli")

DEFAULT_DASHBOARD = pathlib.Path("out") / "performance_dashboard.png"
DEFAULT_DATA_DIR = pathlib.Path("bench_data")


def clear_screen() -> None:
    """Clear the terminal screen in a cross-platform way."""
    command = "cls" if os.name == "nt" else "clear"
    os.system(command)


def _pause(wait_for_key: bool) -> None:
    if wait_for_key:
        input("\nPress Enter to return to the main menu...")


def run_batch(
    stream: TextIO,
    *,
    hex_mode: bool = True,
    multiplier: KaratsubaMultiplier | None = None,
    emit: Callable[[str], None] = print,
) -> List[Evaluation]:
    """Read a count line then that many ``op a b`` lines; emit one result per line.

    A bad line produces ``Error: <message>`` and processing continues.
    """

    engine = KaratsubaMultiplier() if multiplier is None else multiplier
    header = stream.readline()
    try:
        count = int(header.strip())
    except ValueError:
        emit(f"Error: {InvalidInput(f'expected a line count, got {header.strip()!r}').message}")
        return []
    if count < 0:
        emit(f"Error: {InvalidInput(f'line count must be non-negative, got {count}').message}")
        return []

    results = []
    for _ in range(count):
        raw = stream.readline()
        if not raw:
            logger.warning("Input ended after %d of %d lines", len(results), count)
            break
        try:
            op, left, right = parse_batch_line(raw)
        except InvalidInput as exc:
            result = Evaluation("", "", "", "error", error_kind=exc.kind, message=exc.message)
        else:
            result = evaluate(op, left, right, hex_mode=hex_mode, multiplier=engine)
        emit(result.render())
        results.append(result)
    return results


def run_single(*, hex_mode: bool, multiplier: KaratsubaMultiplier, wait_for_key: bool = True) -> Evaluation:
    console_ui.section(f"{'Hexadecimal' if hex_mode else 'Decimal'} calculation")
    op = input(f"Operator {'/'.join(OPERATORS)}: ").strip()
    left = input("First operand: ").strip()
    right = input("Second operand: ").strip()
    result = evaluate(op, left, right, hex_mode=hex_mode, multiplier=multiplier)
    if result.ok:
        console_ui.kv("Result", result.value or "")
    else:
        console_ui.error(result.render())
    _pause(wait_for_key)
    return result


def run_prime(
    *,
    digits: int,
    iterations: int,
    retry: str,
    multiplier: KaratsubaMultiplier,
    wait_for_key: bool = False,
):
    console_ui.running_panel("Random probable prime", f"{digits} hex digits, {iterations} Miller-Rabin rounds")
    start = time.perf_counter()
    try:
        prime = generate_prime(digits, iterations, multiplier=multiplier, retry=RetryStrategy(retry))
    except BigIntError as exc:
        console_ui.error(exc.message)
        _pause(wait_for_key)
        return None
    console_ui.kv("Prime", str(prime))
    console_ui.kv("Decimal", str(int(prime)))
    console_ui.elapsed("DONE in", time.perf_counter() - start)
    _pause(wait_for_key)
    return prime


def run_dh(*, digits: int, iterations: int, multiplier: KaratsubaMultiplier, wait_for_key: bool = False):
    console_ui.running_panel("Diffie–Hellman over HexBigInt", "dh/dh_hex_demo.py")
    try:
        values = dh_demo(prime_digits=digits, iterations=iterations, multiplier=multiplier)
    except BigIntError as exc:
        console_ui.error(exc.message)
        _pause(wait_for_key)
        return {}
    console_ui.kv("p (modulus)", f"{values['p']} | generator g: {g}")
    console_ui.kv("Alice public A", str(values["A"]))
    console_ui.kv("Bob public B", str(values["B"]))
    console_ui.kv("Shared secret", str(values["shared_a"]))
    for index, chunk in enumerate(values["ciphertext"].chunks, start=1):
        console_ui.bullet(f"Chunk {index}: {chunk}")
    console_ui.kv("Recovered", repr(values["recovered"]))
    if values["ok"] and values["shared_match"]:
        console_ui.success("Shared secrets match and the message round-tripped.")
    else:
        console_ui.warning("Exchange did not round-trip.")
    _pause(wait_for_key)
    return values


def run_bench(
    *,
    data_dir: pathlib.Path,
    scale: float,
    multiplier: KaratsubaMultiplier,
    wait_for_key: bool = False,
):
    console_ui.running_panel("File-driven benchmarks", str(data_dir))
    generate_default_datasets(data_dir, scale=scale)
    results = []
    for hex_mode in (False, True):
        for op in BENCH_OPERATIONS:
            result = run_file_benchmark(data_dir, op, hex_mode=hex_mode, multiplier=multiplier)
            console_ui.kv(result.label, f"{result.count} ops, {result.per_op_us:.1f} us/op, {result.errors} errors")
            results.append(result)
    console_ui.success("Benchmarks completed.")
    _pause(wait_for_key)
    return results


def export_dashboard(save_path: pathlib.Path = DEFAULT_DASHBOARD, *, wait_for_key: bool = False):
    console_ui.section("Export Dashboard (PNG)")
    path = make_performance_dashboard(save_path)
    console_ui.success("Saved dashboard:")
    print(f"  {pathlib.Path(path).resolve()}")
    _pause(wait_for_key)
    return path


def menu(hex_mode: bool) -> str:
    clear_screen()
    console_ui.banner("BigHexInt")
    console_ui.bullet(f"Mode: {'hexadecimal' if hex_mode else 'decimal'}. Choose a task:")
    print("  1) Single calculation")
    print("  2) Batch calculation (count, then '<op> <a> <b>' lines)")
    print("  3) Toggle hexadecimal/decimal mode")
    print("  4) Generate a random probable prime")
    print("  5) Diffie–Hellman + XOR demo")
    print("  6) File-driven benchmarks")
    print("  7) Export performance dashboard (PNG)")
    print("  0) Exit")
    return input("\nEnter choice: ").strip()


def parse_args(argv: Optional[List[str]] = None):
    ap = argparse.ArgumentParser(
        description="Big-integer engine CLI: calculator, primes and demos from a single entry point.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""
        Examples:
          python bigint_cli.py
          python bigint_cli.py --run calc --decimal < requests.txt
          python bigint_cli.py --run prime --digits 32
        """),
    )
    ap.add_argument(
        "--run",
        choices=["calc", "prime", "dh", "bench", "dashboard"],
        help="Run a specific task non-interactively.",
    )
    mode = ap.add_mutually_exclusive_group()
    mode.add_argument("--hex", dest="hex_mode", action="store_true", default=True, help="Hexadecimal operands (default).")
    mode.add_argument("--decimal", dest="hex_mode", action="store_false", help="Decimal operands.")
    ap.add_argument("--cache-file", default=DEFAULT_CACHE_FILE, help="Karatsuba memoisation file.")
    ap.add_argument("--no-cache", action="store_true", help="Keep the memoisation cache in memory only.")
    ap.add_argument("--digits", type=int, default=PRIME_HEX_DIGITS, help="Hex digits for prime/DH tasks.")
    ap.add_argument("--iterations", type=int, default=DEFAULT_ITERATIONS, help="Miller-Rabin rounds.")
    ap.add_argument(
        "--retry",
        choices=[strategy.value for strategy in RetryStrategy],
        default=RetryStrategy.MIXED.value,
        help="Candidate retry strategy for prime generation.",
    )
    ap.add_argument("--data-dir", type=pathlib.Path, default=DEFAULT_DATA_DIR, help="Benchmark dataset directory.")
    ap.add_argument("--scale", type=float, default=0.1, help="Fraction of the default dataset sizes.")
    ap.add_argument("--dashboard", type=pathlib.Path, default=DEFAULT_DASHBOARD, help="Dashboard PNG path.")
    ap.add_argument(
        "--plain",
        action="store_true",
        help="Disable colors/banners; print plain ASCII.",
    )
    ap.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    return ap.parse_args(argv)


def _interactive(args, engine: KaratsubaMultiplier) -> None:
    hex_mode = args.hex_mode
    while True:
        choice = menu(hex_mode)
        if choice == "1":
            run_single(hex_mode=hex_mode, multiplier=engine)
        elif choice == "2":
            print("Enter the number of lines, then one '<op> <a> <b>' per line:")
            run_batch(sys.stdin, hex_mode=hex_mode, multiplier=engine)
            _pause(True)
        elif choice == "3":
            hex_mode = not hex_mode
        elif choice == "4":
            run_prime(
                digits=args.digits,
                iterations=args.iterations,
                retry=args.retry,
                multiplier=engine,
                wait_for_key=True,
            )
        elif choice == "5":
            run_dh(digits=args.digits, iterations=args.iterations, multiplier=engine, wait_for_key=True)
        elif choice == "6":
            run_bench(data_dir=args.data_dir, scale=args.scale, multiplier=engine, wait_for_key=True)
        elif choice == "7":
            export_dashboard(args.dashboard, wait_for_key=True)
        elif choice == "0" or choice.lower() in {"q", "quit", "exit"}:
            print("Goodbye!")
            break
        else:
            print("Invalid choice. Please select 0–7.")


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    console_ui.init(plain=args.plain)

    if args.no_cache:
        cache_scope = contextlib.nullcontext(MultiplicationCache())
    else:
        cache_scope = persistent_cache(args.cache_file)

    with cache_scope as cache:
        engine = KaratsubaMultiplier(cache)
        if args.run:
            mapping = {
                "calc": lambda: run_batch(sys.stdin, hex_mode=args.hex_mode, multiplier=engine),
                "prime": lambda: run_prime(
                    digits=args.digits, iterations=args.iterations, retry=args.retry, multiplier=engine
                ),
                "dh": lambda: run_dh(digits=args.digits, iterations=args.iterations, multiplier=engine),
                "bench": lambda: run_bench(data_dir=args.data_dir, scale=args.scale, multiplier=engine),
                "dashboard": lambda: export_dashboard(args.dashboard),
            }
            mapping[args.run]()
            return
        _interactive(args, engine)


if __name__ == "__main__":
    main()
