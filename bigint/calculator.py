"""Operator/operand evaluation that reports failures as values, not exceptions.

Batch callers (the CLI, the benchmark harness) get one :class:`Evaluation`
per input and keep going after a malformed numeral or an overflow.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from bigint.decimal_int import DecimalBigInt
from bigint.errors import BigIntError, InvalidInput
from bigint.hex_int import HexBigInt
from karatsuba.multiplier import KaratsubaMultiplier

OPERATORS = ("+", "-", "*", "/", "%")

__all__ = [
    "OPERATORS",
    "Evaluation",
    "calculate",
    "evaluate",
    "evaluate_batch",
    "parse_batch_line",
]


@dataclass(frozen=True)
class Evaluation:
    """Outcome of a single ``left <op> right`` request."""

    op: str
    left: str
    right: str
    status: str
    value: Optional[str] = None
    error_kind: str = ""
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    def render(self) -> str:
        return self.value if self.ok and self.value is not None else f"Error: {self.message}"


def parse_batch_line(line: str) -> Tuple[str, str, str]:
    """Split an ``op a b`` line."""

    parts = line.split()
    if len(parts) != 3:
        raise InvalidInput(f"expected '<op> <a> <b>', got {line.strip()!r}")
    op, left, right = parts
    return op, left, right


def calculate(
    op: str,
    left: str,
    right: str,
    *,
    hex_mode: bool = True,
    multiplier: KaratsubaMultiplier | None = None,
) -> str:
    """Apply *op* to two numerals and return the result numeral; raises on error."""

    if op not in OPERATORS:
        raise InvalidInput(f"Invalid operator: {op}")

    if not hex_mode:
        if op in ("/", "%"):
            raise InvalidInput("Division/Modulo only supported for hexadecimal")
        a, b = DecimalBigInt(left), DecimalBigInt(right)
        if op == "+":
            return str(a + b)
        if op == "-":
            return str(a - b)
        return str(a * b)

    x, y = HexBigInt(left), HexBigInt(right)
    if op == "+":
        return str(x + y)
    if op == "-":
        return str(x - y)
    if op == "*":
        return str(x.multiply(y, multiplier))
    if op == "/":
        return str(x.divide(y))
    return str(x.modulo(y))


def evaluate(
    op: str,
    left: str,
    right: str,
    *,
    hex_mode: bool = True,
    multiplier: KaratsubaMultiplier | None = None,
) -> Evaluation:
    try:
        value = calculate(op, left, right, hex_mode=hex_mode, multiplier=multiplier)
    except BigIntError as exc:
        return Evaluation(op, left, right, "error", error_kind=exc.kind, message=exc.message)
    return Evaluation(op, left, right, "ok", value=value)


def evaluate_batch(
    requests: Iterable[Tuple[str, str, str]],
    *,
    hex_mode: bool = True,
    multiplier: KaratsubaMultiplier | None = None,
) -> List[Evaluation]:
    """Evaluate every request; a shared multiplier lets products reuse its cache."""

    engine = KaratsubaMultiplier() if multiplier is None else multiplier
    return [
        evaluate(op, left, right, hex_mode=hex_mode, multiplier=engine)
        for op, left, right in requests
    ]
