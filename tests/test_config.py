"""Tests for repotreemap.core.config: TreemapConfig validation and loading."""

from __future__ import annotations

import json
import math

import pytest

from repotreemap.core.config import (
    DEFAULT_CONFIG,
    TreemapConfig,
    TreemapConfigError,
    clamp_depth,
    load_config_file,
    normalize_color_mode,
    normalize_size_mode,
)


class TestDefaults:
    def test_default_values(self):
        assert DEFAULT_CONFIG.max_nesting_depth == 3
        assert DEFAULT_CONFIG.label_min_width == 80
        assert DEFAULT_CONFIG.label_height == 18
        assert DEFAULT_CONFIG.size_mode == "loc"
        assert DEFAULT_CONFIG.color_mode == "language"


class TestValidation:
    @pytest.mark.parametrize("depth,expected", [(0, 1), (-3, 1), (1, 1), (5, 5), ("2", 2)])
    def test_clamp_depth(self, depth, expected):
        assert clamp_depth(depth) == expected

    @pytest.mark.parametrize("value", ["deep", None, math.inf, -math.inf, math.nan])
    def test_clamp_depth_rejects_garbage(self, value):
        with pytest.raises(TreemapConfigError, match="max_nesting_depth"):
            clamp_depth(value)

    def test_modes_are_case_insensitive(self):
        assert normalize_size_mode(" BYTES ") == "bytes"
        assert normalize_color_mode("Age") == "age"

    def test_unknown_size_mode(self):
        with pytest.raises(TreemapConfigError, match="size mode"):
            normalize_size_mode("weight")

    def test_unknown_color_mode(self):
        with pytest.raises(TreemapConfigError, match="color mode"):
            normalize_color_mode("rainbow")

    def test_depth_clamped_on_construction(self):
        assert TreemapConfig(max_nesting_depth=0).max_nesting_depth == 1

    @pytest.mark.parametrize("value", [-1, math.inf, math.nan, "wide", True])
    def test_bad_label_min_width(self, value):
        with pytest.raises(TreemapConfigError):
            TreemapConfig(label_min_width=value)

    def test_zero_label_height_allowed(self):
        assert TreemapConfig(label_height=0).label_height == 0


class TestFromMapping:
    def test_camel_case_keys(self):
        config = TreemapConfig.from_mapping(
            {"maxNestingDepth": 5, "labelMinWidth": 120, "sizeMode": "files", "colorMode": "DENSITY"}
        )
        assert config.max_nesting_depth == 5
        assert config.label_min_width == 120
        assert config.size_mode == "files"
        assert config.color_mode == "density"

    def test_unknown_keys_and_nulls_ignored(self):
        config = TreemapConfig.from_mapping({"theme": "dark", "label_height": None})
        assert config == DEFAULT_CONFIG

    def test_none_payload(self):
        assert TreemapConfig.from_mapping(None) == DEFAULT_CONFIG

    def test_round_trip_through_dict(self):
        config = TreemapConfig(max_nesting_depth=4, size_mode="bytes")
        assert TreemapConfig.from_mapping(config.to_dict()) == config


class TestWithOverrides:
    def test_none_overrides_skipped(self):
        config = DEFAULT_CONFIG.with_overrides(size_mode=None, max_nesting_depth=6)
        assert config.size_mode == "loc"
        assert config.max_nesting_depth == 6

    def test_overrides_are_validated(self):
        with pytest.raises(TreemapConfigError):
            DEFAULT_CONFIG.with_overrides(color_mode="plaid")


class TestLoadConfigFile:
    def test_reads_json_object(self, tmp_path):
        path = tmp_path / "treemap.json"
        path.write_text(json.dumps({"labelHeight": 24, "colorMode": "age"}), encoding="utf-8")
        config = load_config_file(path)
        assert config.label_height == 24
        assert config.color_mode == "age"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "treemap.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(TreemapConfigError, match="not valid JSON"):
            load_config_file(path)

    def test_non_object(self, tmp_path):
        path = tmp_path / "treemap.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(TreemapConfigError, match="JSON object"):
            load_config_file(path)

    def test_overflowing_depth(self, tmp_path):
        path = tmp_path / "treemap.json"
        path.write_text('{"maxNestingDepth": 1e400}', encoding="utf-8")
        with pytest.raises(TreemapConfigError, match="max_nesting_depth"):
            load_config_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_config_file(tmp_path / "missing.json")
