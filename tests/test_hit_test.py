"""Tests for repotreemap.engine.hit_test: pointer to node mapping."""

from __future__ import annotations

import math

import pytest

from repotreemap.core.config import TreemapConfig
from repotreemap.engine.hit_test import HitTester, find_node_at_point
from repotreemap.engine.layout import build_layout
from repotreemap.engine.tree import dir_node, file_node


def _center(node):
    return (node.x0 + node.x1) / 2, (node.y0 + node.y1) / 2


def _two_files():
    root = dir_node("root", [file_node("a", lines=600), file_node("b", lines=400)], path="")
    return build_layout(root, 100, 100, TreemapConfig(label_min_width=200))


class TestHitTester:
    def test_leaves_resolve_at_their_center(self, sample_tree):
        result = build_layout(sample_tree, 1200, 800)
        leaves = [n for n in result.all_nodes if n.is_leaf and n.is_drawable]
        assert leaves
        for leaf in leaves:
            assert result.find_node_at_point(*_center(leaf)) is leaf

    def test_label_band_hits_directory(self, sample_tree):
        result = build_layout(sample_tree, 1200, 800)
        for node in result.all_nodes:
            if node.has_label_strip and node.is_drawable:
                assert result.find_node_at_point(node.x0 + 1, node.y0 + 1) is node

    def test_two_file_split(self):
        result = _two_files()
        assert result.find_node_at_point(50, 30).data.name == "a"
        assert result.find_node_at_point(50, 80).data.name == "b"

    def test_half_open_edges(self):
        result = _two_files()
        assert result.find_node_at_point(0, 0).data.name == "a"
        assert result.find_node_at_point(50, 60).data.name == "b"
        assert result.find_node_at_point(100, 50) is None

    def test_directory_body_without_band_is_not_interactive(self):
        result = _two_files()
        # Root has no label band; only its children are hit candidates.
        assert len(result.hit_tester) == 2

    @pytest.mark.parametrize("x,y", [(-1, 5), (5, 101), (math.nan, 5), (5, math.inf)])
    def test_misses(self, x, y):
        assert _two_files().find_node_at_point(x, y) is None

    def test_empty_layout(self):
        assert HitTester(()).find_node_at_point(1, 1) is None

    def test_sub_pixel_tiles_skipped(self):
        root = dir_node(
            "root",
            [file_node("big", lines=10_000), file_node("tiny", lines=1)],
            path="",
        )
        result = build_layout(root, 100, 100, TreemapConfig(label_min_width=1000))
        tiny = result.find_by_path("tiny")
        assert not tiny.is_drawable
        assert result.find_node_at_point(99.5, 50).data.name == "big"

    def test_module_level_lookup(self):
        result = _two_files()
        hit = find_node_at_point(result.all_nodes, 50, 30)
        assert hit.data.name == "a"
