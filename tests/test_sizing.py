"""Tests for repotreemap.engine.sizing: per-mode layout weights."""

from __future__ import annotations

import math

import pytest

from repotreemap.engine.sizing import (
    BYTES_PER_LINE_ESTIMATE,
    aggregate_weight,
    resolve_weight,
)
from repotreemap.engine.tree import dir_node, file_node


class TestResolveWeight:
    def test_directory_is_always_zero(self):
        directory = dir_node("src", [file_node("a.py", lines=10)])
        for mode in ("loc", "bytes", "files", "complexity"):
            assert resolve_weight(directory, mode) == 0

    def test_loc_uses_lines(self):
        assert resolve_weight(file_node("a.py", lines=120), "loc") == 120

    @pytest.mark.parametrize("lines", [None, 0, -4, math.nan])
    def test_loc_floor_is_one(self, lines):
        assert resolve_weight(file_node("a.py", lines=lines), "loc") == 1

    def test_bytes_prefers_reported_size(self):
        assert resolve_weight(file_node("a.py", lines=10, bytes=999), "bytes") == 999

    def test_bytes_estimated_from_lines(self):
        node = file_node("a.py", lines=10)
        assert resolve_weight(node, "bytes") == 10 * BYTES_PER_LINE_ESTIMATE

    def test_bytes_without_any_metric_is_zero(self):
        assert resolve_weight(file_node("a.py"), "bytes") == 0

    def test_files_counts_one(self):
        assert resolve_weight(file_node("a.py", lines=5000), "files") == 1

    def test_complexity_raw_value(self):
        assert resolve_weight(file_node("a.py", complexity=17), "complexity") == 17

    def test_missing_complexity_is_zero(self):
        assert resolve_weight(file_node("a.py", lines=100), "complexity") == 0


class TestAggregateWeight:
    def test_sums_descendants(self, sample_tree):
        assert aggregate_weight(sample_tree, "loc") == 1350
        assert aggregate_weight(sample_tree, "files") == 5

    def test_empty_directory(self):
        assert aggregate_weight(dir_node("empty"), "loc") == 0

    def test_complexity_counts_only_reported_files(self, sample_tree):
        assert aggregate_weight(sample_tree, "complexity") == 51
