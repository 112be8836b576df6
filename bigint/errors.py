"""Error kinds raised by the big-integer engine."""
from __future__ import annotations

__all__ = [
    "BigIntError",
    "InvalidInput",
    "DivisionByZero",
    "Overflow",
    "FileIO",
]


class BigIntError(Exception):
    """Base class for every engine error; ``message`` is human readable."""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidInput(BigIntError, ValueError):
    """Raised for malformed numerals or invalid routine parameters."""

    kind = "invalid_input"

    def __init__(self, detail: str):
        super().__init__(f"Invalid input: {detail}")
        self.detail = detail


class DivisionByZero(BigIntError, ZeroDivisionError):
    """Raised when a hex division or modulo has a zero divisor."""

    kind = "division_by_zero"

    def __init__(self):
        super().__init__("Division by zero is not allowed")


class Overflow(BigIntError, OverflowError):
    """Raised when a result would not fit the fixed digit capacity."""

    kind = "overflow"

    def __init__(self, operation: str):
        super().__init__(f"Overflow occurred during {operation}")
        self.operation = operation


class FileIO(BigIntError, OSError):
    """Raised when the cache file cannot be opened for the requested access."""

    kind = "file_io"

    def __init__(self, filename: str, operation: str):
        super().__init__(f"File I/O error: Cannot {operation} file {filename}")
        self.filename = filename
        self.operation = operation
