"""Label text for treemap tiles: aggregate-metric captions and ellipsis truncation."""

from __future__ import annotations

from collections.abc import Callable

from repotreemap.core.config import SizeMode
from repotreemap.core.output import format_measure
from repotreemap.engine.tree import TreeNode, aggregate_metric, count_files

ELLIPSIS = "..."


def aggregate_measure(node: TreeNode, size_mode: SizeMode | str) -> float:
    """Subtree total of the quantity the size mode measures."""
    if size_mode == "files":
        return count_files(node)
    if size_mode in ("bytes", "complexity"):
        return aggregate_metric(node, size_mode)
    return aggregate_metric(node, "lines")


def size_caption(node: TreeNode, size_mode: SizeMode | str) -> str:
    # Line counts read as bare numbers inside directory labels.
    return format_measure(
        aggregate_measure(node, size_mode), size_mode, with_unit=size_mode != "loc"
    )


def directory_label(node: TreeNode, size_mode: SizeMode | str) -> str:
    return f"{node.name}/ ({size_caption(node, size_mode)})"


def truncate_text(measure: Callable[[str], float], text: str, max_width: float) -> str:
    """Trim ``text`` from the end and append an ellipsis until it fits ``max_width``.

    Returns the bare ellipsis when not even one character fits.
    """
    if measure(text) <= max_width:
        return text
    # Binary search for the longest prefix that fits with the ellipsis.
    lo, hi = 0, len(text)
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if measure(text[:mid] + ELLIPSIS) <= max_width:
            lo = mid
        else:
            hi = mid - 1
    return text[:lo] + ELLIPSIS


__all__ = ["ELLIPSIS", "aggregate_measure", "directory_label", "size_caption", "truncate_text"]
