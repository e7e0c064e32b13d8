"""Terminal output for treemap commands: colored status lines, tables and metric values."""

from __future__ import annotations

import math
import os
import sys
from collections.abc import Sequence
from typing import TextIO

ANSI = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
}

# (threshold, suffix) ladders, largest first.
COUNT_UNITS = ((1_000_000, "M"), (1_000, "K"))
BYTE_UNITS = ((1024**3, " GB"), (1024**2, " MB"), (1024, " KB"))

SIZE_MODE_UNITS = {"loc": "lines", "files": "files", "complexity": "cx"}


def colorize(text: str, color: str, *, stream: TextIO | None = None) -> str:
    """Wrap text in ANSI codes when the target stream is a color terminal."""
    target = stream if stream is not None else sys.stdout
    if "NO_COLOR" in os.environ or not target.isatty():
        return str(text)
    return f"{ANSI.get(color, '')}{text}{ANSI['reset']}"


def log(msg: str) -> None:
    """Dim progress line on stderr, kept off stdout so piped output stays clean."""
    print(colorize(msg, "dim", stream=sys.stderr), file=sys.stderr)


def _scaled(value: float, units: Sequence[tuple[int, str]]) -> str | None:
    for step, suffix in units:
        if value >= step:
            return f"{value / step:.1f}{suffix}"
    return None


def format_number(num: float) -> str:
    """Compact count: 950 -> "950", 1234 -> "1.2K", 2_500_000 -> "2.5M"."""
    if not math.isfinite(num):
        return "?"
    compact = _scaled(num, COUNT_UNITS)
    if compact is not None:
        return compact
    return str(int(num)) if num == int(num) else f"{num:.1f}"


def format_bytes(size: float) -> str:
    """Byte size in binary units: 512 -> "512 B", 31000 -> "30.3 KB"."""
    if not math.isfinite(size):
        return "?"
    return _scaled(size, BYTE_UNITS) or f"{int(size)} B"


def format_measure(value: float, size_mode: str, *, with_unit: bool = True) -> str:
    """Format an aggregated size-mode value; bytes always carry their unit."""
    if size_mode == "bytes":
        return format_bytes(value)
    text = format_number(value)
    unit = SIZE_MODE_UNITS.get(size_mode)
    if not with_unit or unit is None:
        return text
    return f"{text} {unit}"


def print_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[object]],
    *,
    numeric: Sequence[int] = (),
) -> None:
    """Print an aligned table; columns listed in ``numeric`` are right-justified."""
    if not rows:
        return
    cells = [[str(v) for v in row] for row in rows]
    widths = [
        max(len(h), *(len(row[i]) for row in cells if i < len(row)))
        for i, h in enumerate(headers)
    ]

    def _line(values: Sequence[str]) -> str:
        return "  ".join(
            v.rjust(w) if i in numeric else v.ljust(w)
            for i, (v, w) in enumerate(zip(values, widths))
        ).rstrip()

    print(colorize(_line(list(headers)), "bold"))
    print(colorize("-" * (sum(widths) + 2 * (len(widths) - 1)), "dim"))
    for row in cells:
        print(_line(row))


__all__ = [
    "ANSI",
    "BYTE_UNITS",
    "COUNT_UNITS",
    "SIZE_MODE_UNITS",
    "colorize",
    "format_bytes",
    "format_measure",
    "format_number",
    "log",
    "print_table",
]
