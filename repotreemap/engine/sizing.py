"""Size metric resolution: turn raw file metrics into layout weights."""

from __future__ import annotations

import math

from repotreemap.core.config import SizeMode
from repotreemap.engine.tree import TreeNode

# Rough bytes-per-line used when a collector reports lines but no byte size.
BYTES_PER_LINE_ESTIMATE = 40


def _known(value: float | None) -> float | None:
    """Return ``value`` when it is a usable metric, else None."""
    if value is None or not math.isfinite(value) or value < 0:
        return None
    return value


def resolve_weight(node: TreeNode, mode: SizeMode) -> float:
    """Layout weight of a single node for the active size mode.

    Directories always resolve to 0; their area is the sum of their
    descendants. Files with no lines still get weight 1 in ``loc`` mode so they
    keep a sliver of area.
    """
    if node.is_directory:
        return 0
    if mode == "files":
        return 1
    lines = _known(node.lines)
    if mode == "loc":
        return max(lines or 0, 1)
    if mode == "bytes":
        size = _known(node.bytes)
        if size is None:
            return (lines or 0) * BYTES_PER_LINE_ESTIMATE
        return size
    if mode == "complexity":
        return _known(node.complexity) or 0
    return 0


def aggregate_weight(node: TreeNode, mode: SizeMode) -> float:
    """Total resolved weight of a subtree."""
    if node.is_file:
        return resolve_weight(node, mode)
    return sum(aggregate_weight(child, mode) for child in node.children)


__all__ = [
    "BYTES_PER_LINE_ESTIMATE",
    "aggregate_weight",
    "resolve_weight",
]
