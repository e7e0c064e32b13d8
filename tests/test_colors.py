"""Tests for repotreemap.app.output.treemap_parts.colors: color modes."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from repotreemap.app.output.treemap_parts.colors import (
    adjust_brightness,
    age_color,
    complexity_color,
    contrast_text_color,
    density_color,
    interpolate,
    language_color,
    node_color,
    parse_timestamp,
)
from repotreemap.app.output.treemap_parts.theme import (
    DIRECTORY,
    HEAT_GREEN,
    HEAT_LIGHT_GREEN,
    HEAT_ORANGE,
    HEAT_RED,
    HEAT_YELLOW,
    NEUTRAL,
    TEXT_DARK,
    TEXT_LIGHT,
)
from repotreemap.engine.tree import dir_node, file_node

NOW = datetime(2026, 10, 18, tzinfo=timezone.utc)


def _days_ago(days: float) -> str:
    return (NOW - timedelta(days=days)).isoformat()


class TestLanguageColor:
    def test_known_language(self):
        assert language_color("Python") == (53, 114, 165)

    @pytest.mark.parametrize("language", [None, "", "Brainfuck"])
    def test_unknown_falls_back_to_neutral(self, language):
        assert language_color(language) == NEUTRAL


class TestAgeColor:
    @pytest.mark.parametrize(
        "days,expected",
        [
            (3, HEAT_GREEN),
            (45, HEAT_LIGHT_GREEN),
            (120, HEAT_YELLOW),
            (200, HEAT_ORANGE),
            (400, HEAT_RED),
        ],
    )
    def test_buckets(self, days, expected):
        assert age_color(_days_ago(days), now=NOW) == expected

    def test_zulu_suffix(self):
        assert age_color("2026-10-17T00:00:00Z", now=NOW) == HEAT_GREEN

    def test_missing_or_garbage(self):
        assert age_color(None, now=NOW) == NEUTRAL
        assert age_color("last tuesday", now=NOW) == NEUTRAL

    def test_parse_timestamp_assumes_utc(self):
        assert parse_timestamp("2026-01-02T03:04:05").tzinfo == timezone.utc


class TestComplexityColor:
    def test_missing_is_green(self):
        assert complexity_color(None) == HEAT_GREEN
        assert complexity_color(0) == HEAT_GREEN

    def test_thresholds(self):
        assert complexity_color(15) == HEAT_LIGHT_GREEN
        assert complexity_color(40) == HEAT_ORANGE
        assert complexity_color(100) == HEAT_RED
        assert complexity_color(500) == HEAT_RED


class TestDensityColor:
    def test_no_lines_is_neutral(self):
        assert density_color(0, 0, 0) == NEUTRAL

    def test_dense_code_is_green(self):
        assert density_color(90, 5, 5) == HEAT_GREEN

    def test_sparse_code_is_red(self):
        assert density_color(10, 80, 10) == HEAT_RED

    def test_midpoint_is_yellow(self):
        assert density_color(40, 30, 30) == HEAT_YELLOW


class TestNodeColor:
    def test_directories_are_gray_in_every_mode(self):
        directory = dir_node("src", [file_node("a.py", lines=1)])
        for mode in ("language", "age", "complexity", "density"):
            assert node_color(directory, mode) == DIRECTORY

    def test_dispatch_by_mode(self):
        node = file_node("a.py", lines=90, comment_lines=10, language="Python", complexity=100)
        assert node_color(node, "language") == (53, 114, 165)
        assert node_color(node, "complexity") == HEAT_RED
        assert node_color(node, "density") == HEAT_GREEN
        assert node_color(node, "age", now=NOW) == NEUTRAL

    def test_unknown_mode_is_neutral(self):
        assert node_color(file_node("a.py", language="Python"), "mood") == NEUTRAL


class TestHelpers:
    def test_interpolate_clamps(self):
        assert interpolate((0, 0, 0), (100, 200, 50), 0.5) == (50, 100, 25)
        assert interpolate((0, 0, 0), (100, 200, 50), 2) == (100, 200, 50)

    def test_adjust_brightness(self):
        assert adjust_brightness((100, 200, 10), 0.5) == (50, 100, 5)
        assert adjust_brightness((200, 200, 200), 2) == (255, 255, 255)

    def test_contrast_text(self):
        assert contrast_text_color((255, 235, 59)) == TEXT_DARK
        assert contrast_text_color((30, 30, 30)) == TEXT_LIGHT
        assert contrast_text_color(DIRECTORY) == TEXT_LIGHT
