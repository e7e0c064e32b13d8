"""Shared pytest fixtures for the repotreemap test suite."""

from __future__ import annotations

import copy
import json
from pathlib import Path

import pytest

from repotreemap.engine.tree import TreeNode, tree_from_dict

SAMPLE_PAYLOAD = {
    "name": "repo",
    "type": "directory",
    "children": [
        {
            "name": "src",
            "type": "directory",
            "children": [
                {
                    "name": "app.py",
                    "type": "file",
                    "lines": 600,
                    "bytes": 24000,
                    "complexity": 42,
                    "commentLines": 80,
                    "blankLines": 60,
                    "language": "Python",
                    "lastModified": "2026-10-01T12:00:00Z",
                },
                {
                    "name": "util.py",
                    "type": "file",
                    "lines": 200,
                    "bytes": 7000,
                    "complexity": 9,
                    "language": "Python",
                },
                {
                    "name": "web",
                    "type": "directory",
                    "children": [
                        {"name": "index.ts", "type": "file", "lines": 300, "language": "TypeScript"},
                        {"name": "style.css", "type": "file", "lines": 100, "language": "CSS"},
                    ],
                },
            ],
        },
        {"name": "README.md", "type": "file", "lines": 150, "language": "Markdown"},
        {"name": "empty", "type": "directory", "children": []},
    ],
}


@pytest.fixture()
def sample_payload() -> dict:
    return copy.deepcopy(SAMPLE_PAYLOAD)


@pytest.fixture()
def sample_tree(sample_payload: dict) -> TreeNode:
    return tree_from_dict(sample_payload)


@pytest.fixture()
def sample_tree_file(tmp_path: Path, sample_payload: dict) -> Path:
    """Sample tree wrapped the way analysis results store it."""
    path = tmp_path / "analysis.json"
    path.write_text(json.dumps({"fileTree": sample_payload}), encoding="utf-8")
    return path
