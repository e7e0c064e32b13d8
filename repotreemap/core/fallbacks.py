"""Reporting for failures a command survives: debug records and stderr notices."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from repotreemap.core.output import colorize

# Notice level -> (prefix, color).
_NOTICE_STYLES = {
    "error": ("Error", "red"),
    "warning": ("WARNING", "yellow"),
}


def log_fallback(logger: logging.Logger, action: str, exc: Exception) -> None:
    """Debug-log a failed attempt whose caller carries on with a fallback value."""
    logger.debug("Falling back after failing to %s: %s", action, exc)


def notice(level: str, message: str) -> None:
    prefix, color = _NOTICE_STYLES[level]
    print(colorize(f"  {prefix}: {message}", color, stream=sys.stderr), file=sys.stderr)


def print_error(message: str) -> None:
    notice("error", message)


def warn(message: str) -> None:
    notice("warning", message)


def print_write_error(path: str | Path, exc: OSError, *, label: str = "output") -> None:
    """Report an output file (image, report) that could not be written."""
    print_error(f"Could not write {label} to {path}: {exc}")


__all__ = [
    "log_fallback",
    "notice",
    "print_error",
    "print_write_error",
    "warn",
]
