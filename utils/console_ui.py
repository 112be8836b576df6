"""Console presentation helpers for the calculator shell."""
from __future__ import annotations

import os
import shutil
import sys
from typing import Optional

import colorama
import pyfiglet
from colorama import Fore, Style

__all__ = [
    "init",
    "banner",
    "running_panel",
    "section",
    "kv",
    "bullet",
    "success",
    "warning",
    "error",
    "elapsed",
    "rule",
]

_width = 100
_plain_mode = False
_use_color = False

_symbol_success = "✓"
_symbol_warning = "!"
_symbol_error = "✗"
_symbol_bullet = "•"


def init(plain: bool = False) -> None:
    """Initialise console helpers; colour is used only on a real terminal."""

    global _width, _plain_mode, _use_color
    global _symbol_success, _symbol_warning, _symbol_error, _symbol_bullet

    _width = shutil.get_terminal_size(fallback=(100, 24)).columns or 100

    is_tty = bool(getattr(sys.stdout, "isatty", lambda: False)())
    _plain_mode = plain or bool(os.environ.get("NO_COLOR")) or not is_tty
    _use_color = not _plain_mode
    if _use_color:
        colorama.init(autoreset=True)

    if _plain_mode:
        _symbol_success, _symbol_warning, _symbol_error, _symbol_bullet = "[OK]", "[!]", "[X]", "-"
    else:
        _symbol_success, _symbol_warning, _symbol_error, _symbol_bullet = "✓", "!", "✗", "•"


def _apply(style: str, message: str) -> str:
    if not _use_color:
        return message
    return f"{style}{message}{Style.RESET_ALL}"


def rule(char: str = "=", width: Optional[int] = None) -> None:
    """Print a horizontal rule spanning the console width."""

    count = width if width is not None else _width
    print(char * max(1, count))


def banner(title: str) -> None:
    """Display a banner heading for the CLI."""

    if _plain_mode:
        print(f"=== {title} ===".center(_width))
        return
    print(pyfiglet.figlet_format(title, width=_width))


def running_panel(title: str, detail: str | None = None) -> None:
    rule("=")
    print(_apply(Fore.MAGENTA + Style.BRIGHT, f"RUNNING: {title}"))
    if detail:
        print(detail)
    rule("=")


def section(title: str) -> None:
    """Display a section divider with the given title."""

    rule("=")
    print(f" {title.upper()}")
    rule("=")


def kv(key: str, value: str) -> None:
    print(f"{key}: {value}")


def bullet(msg: str) -> None:
    print(f"{_symbol_bullet} {msg}")


def success(msg: str) -> None:
    print(_apply(Fore.GREEN + Style.BRIGHT, f"{_symbol_success} {msg}"))


def warning(msg: str) -> None:
    print(_apply(Fore.YELLOW + Style.BRIGHT, f"{_symbol_warning} {msg}"))


def error(msg: str) -> None:
    print(_apply(Fore.RED + Style.BRIGHT, f"{_symbol_error} {msg}"))


def elapsed(prefix: str, seconds: float) -> None:
    """Print a formatted elapsed time entry."""

    print(f"{prefix} {seconds:.4f}s")
