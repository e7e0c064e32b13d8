"""Tests for repotreemap.core.output and core.fallbacks: terminal text."""

from __future__ import annotations

import io
import logging
import math

import pytest

from repotreemap.core.fallbacks import log_fallback, print_error, print_write_error, warn
from repotreemap.core.output import (
    ANSI,
    colorize,
    format_bytes,
    format_measure,
    format_number,
    print_table,
)


class _Terminal(io.StringIO):
    def isatty(self) -> bool:
        return True


# ===================================================================
# Number formatting
# ===================================================================

class TestFormatting:
    @pytest.mark.parametrize(
        "value,expected",
        [(0, "0"), (950, "950"), (2.5, "2.5"), (1234, "1.2K"), (2_500_000, "2.5M"), (math.nan, "?")],
    )
    def test_format_number(self, value, expected):
        assert format_number(value) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [(512, "512 B"), (31000, "30.3 KB"), (3 * 1024**2, "3.0 MB"), (5 * 1024**3, "5.0 GB")],
    )
    def test_format_bytes(self, value, expected):
        assert format_bytes(value) == expected

    def test_format_measure_units(self):
        assert format_measure(1350, "loc") == "1.4K lines"
        assert format_measure(4, "files") == "4 files"
        assert format_measure(51, "complexity") == "51 cx"
        assert format_measure(2048, "bytes") == "2.0 KB"

    def test_format_measure_without_unit(self):
        assert format_measure(600, "loc", with_unit=False) == "600"
        assert format_measure(2048, "bytes", with_unit=False) == "2.0 KB"


# ===================================================================
# Color and tables
# ===================================================================

class TestColorize:
    def test_plain_when_not_a_terminal(self):
        assert colorize("ok", "green", stream=io.StringIO()) == "ok"

    def test_wraps_for_terminal(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        assert colorize("ok", "green", stream=_Terminal()) == f"{ANSI['green']}ok{ANSI['reset']}"

    def test_no_color_env_wins(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        assert colorize("ok", "green", stream=_Terminal()) == "ok"


class TestPrintTable:
    def test_numeric_columns_right_justified(self, capsys):
        print_table(["Legend", "Lines"], [["Python", "800"], ["CSS", "1.2K"]], numeric=(1,))
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "Legend  Lines"
        assert set(lines[1]) == {"-"}
        assert lines[2] == "Python    800"
        assert lines[3] == "CSS      1.2K"

    def test_empty_rows_print_nothing(self, capsys):
        print_table(["Field", "Value"], [])
        assert capsys.readouterr().out == ""


# ===================================================================
# Fallback reporting
# ===================================================================

class TestFallbacks:
    def test_error_and_warning_go_to_stderr(self, capsys):
        print_error("tree file is empty")
        warn("font missing")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.splitlines() == ["  Error: tree file is empty", "  WARNING: font missing"]

    def test_write_error_names_label_and_path(self, capsys):
        print_write_error("out/treemap.png", PermissionError("denied"), label="treemap image")
        assert "Could not write treemap image to out/treemap.png: denied" in capsys.readouterr().err

    def test_log_fallback_is_debug(self, caplog):
        logger = logging.getLogger("repotreemap.tests")
        with caplog.at_level(logging.DEBUG, logger="repotreemap.tests"):
            log_fallback(logger, "load font", OSError("no such file"))
        (record,) = caplog.records
        assert record.levelno == logging.DEBUG
        assert "load font" in record.getMessage()
