"""Squarified treemap layout with per-directory re-optimization and label bands."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from repotreemap.core.config import DEFAULT_CONFIG, TreemapConfig
from repotreemap.engine.hit_test import HitTester
from repotreemap.engine.sizing import resolve_weight
from repotreemap.engine.tree import TreeNode

logger = logging.getLogger(__name__)

# Target aspect ratio for squarified rows (golden ratio, as d3-hierarchy uses).
SQUARIFY_RATIO = (1 + math.sqrt(5)) / 2

Rect = tuple[float, float, float, float]


@dataclass(frozen=True, eq=False)
class LayoutNode:
    """A positioned tile for one TreeNode.

    ``parent`` is a lookup reference only (vignette bias, breadcrumbs); the
    tree is owned by the LayoutResult that produced it.
    """

    data: TreeNode
    x0: float
    y0: float
    x1: float
    y1: float
    depth: int
    weight: float
    is_leaf: bool
    has_label_strip: bool
    label_height: float = 0
    children: tuple[LayoutNode, ...] = ()
    parent: LayoutNode | None = field(default=None, repr=False)

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0

    @property
    def rect(self) -> Rect:
        return (self.x0, self.y0, self.x1, self.y1)

    @property
    def is_drawable(self) -> bool:
        """False for sub-pixel tiles, which are kept only for aggregate correctness."""
        return self.width >= 1 and self.height >= 1

    @property
    def label_rect(self) -> Rect | None:
        if not self.has_label_strip:
            return None
        return (self.x0, self.y0, self.x1, min(self.y1, self.y0 + self.label_height))

    @property
    def content_rect(self) -> Rect:
        """Area available to children: the tile minus its label band."""
        if not self.has_label_strip:
            return self.rect
        return (self.x0, min(self.y1, self.y0 + self.label_height), self.x1, self.y1)

    def contains(self, x: float, y: float) -> bool:
        return self.x0 <= x < self.x1 and self.y0 <= y < self.y1


@dataclass(frozen=True)
class LayoutResult:
    """Output of one layout build: the root tile plus a flat pre-order index."""

    root: LayoutNode | None
    all_nodes: tuple[LayoutNode, ...]
    config: TreemapConfig
    width: float
    height: float
    hit_tester: HitTester = field(repr=False, compare=False)
    by_path: dict[str, LayoutNode] = field(repr=False, compare=False)

    @property
    def is_empty(self) -> bool:
        return self.root is None

    def find_node_at_point(self, x: float, y: float) -> LayoutNode | None:
        return self.hit_tester.find_node_at_point(x, y)

    def find_by_path(self, path: str) -> LayoutNode | None:
        return self.by_path.get(path)


def _empty_result(config: TreemapConfig, width: float, height: float) -> LayoutResult:
    return LayoutResult(
        root=None,
        all_nodes=(),
        config=config,
        width=width,
        height=height,
        hit_tester=HitTester(()),
        by_path={},
    )


def round_px(value: float) -> float:
    """Round half up to a whole pixel. Shared edges must round identically."""
    return float(math.floor(value + 0.5))


def _container_px(value: object) -> float | None:
    try:
        px = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(px):
        return None
    return round_px(px)


# ---------------------------------------------------------------------------
# Squarify
# ---------------------------------------------------------------------------


def squarify(
    weights: Sequence[float],
    width: float,
    height: float,
    *,
    ratio: float = SQUARIFY_RATIO,
) -> list[Rect]:
    """Partition a ``width`` x ``height`` box among positive ``weights``.

    ``weights`` must already be sorted in the order rows should be filled
    (largest first). Returns one local ``(x0, y0, x1, y1)`` per weight, in the
    same order, rounded to whole pixels. Rows grow while the worst aspect ratio
    in the row does not get worse; each row runs along the shorter side of the
    space that is left.
    """
    n = len(weights)
    rects: list[Rect] = [(0.0, 0.0, 0.0, 0.0)] * n
    if n == 0:
        return rects

    x0, y0, x1, y1 = 0.0, 0.0, float(width), float(height)
    remaining = float(sum(weights))
    i0 = 0
    while i0 < n:
        dx, dy = x1 - x0, y1 - y0
        i1 = i0 + 1
        row_sum = weights[i0]
        if dx > 0 and dy > 0 and remaining > 0:
            alpha = max(dy / dx, dx / dy) / (remaining * ratio)
            min_value = max_value = row_sum
            beta = row_sum * row_sum * alpha
            best = max(max_value / beta, beta / min_value)
            while i1 < n:
                w = weights[i1]
                candidate_sum = row_sum + w
                beta = candidate_sum * candidate_sum * alpha
                worst = max(max(max_value, w) / beta, beta / min(min_value, w))
                if worst > best:
                    break
                row_sum = candidate_sum
                min_value = min(min_value, w)
                max_value = max(max_value, w)
                best = worst
                i1 += 1
        else:
            # No usable space left: everything collapses into the last row.
            i1 = n
            row_sum = sum(weights[i0:])

        last_row = i1 == n
        share = row_sum / remaining if remaining > 0 else 1.0
        if dx < dy:
            # Row spans the full width at the top of the remaining space.
            row_end = y1 if last_row else y0 + dy * share
            _lay_row(weights, rects, i0, i1, row_sum, x0, x1, y0, row_end, horizontal=True)
            y0 = row_end
        else:
            # Column spans the full height at the left of the remaining space.
            row_end = x1 if last_row else x0 + dx * share
            _lay_row(weights, rects, i0, i1, row_sum, y0, y1, x0, row_end, horizontal=False)
            x0 = row_end
        remaining -= row_sum
        i0 = i1

    return [tuple(round_px(v) for v in r) for r in rects]  # type: ignore[misc]


def _lay_row(
    weights: Sequence[float],
    rects: list[Rect],
    i0: int,
    i1: int,
    row_sum: float,
    start: float,
    end: float,
    band0: float,
    band1: float,
    *,
    horizontal: bool,
) -> None:
    """Split ``start..end`` among weights[i0:i1] inside the band ``band0..band1``."""
    k = (end - start) / row_sum if row_sum > 0 else 0.0
    pos = start
    for i in range(i0, i1):
        nxt = end if i == i1 - 1 else pos + weights[i] * k
        if horizontal:
            rects[i] = (pos, band0, nxt, band1)
        else:
            rects[i] = (band0, pos, band1, nxt)
        pos = nxt


# ---------------------------------------------------------------------------
# Recursive build
# ---------------------------------------------------------------------------


@dataclass
class _BuildContext:
    config: TreemapConfig
    weights: dict[int, float]


def _collect_weights(node: TreeNode, config: TreemapConfig, out: dict[int, float]) -> float:
    if node.is_file:
        total = resolve_weight(node, config.size_mode)
    else:
        total = sum(_collect_weights(child, config, out) for child in node.children)
    out[id(node)] = total
    return total


def _set_children(node: LayoutNode, children: list[LayoutNode]) -> None:
    object.__setattr__(node, "children", tuple(children))


def _place(
    tree: TreeNode,
    rect: Rect,
    depth: int,
    parent: LayoutNode | None,
    ctx: _BuildContext,
) -> LayoutNode:
    config = ctx.config
    x0, y0, x1, y1 = rect
    weight = ctx.weights[id(tree)]

    if tree.is_file or depth >= config.max_nesting_depth:
        return LayoutNode(
            data=tree, x0=x0, y0=y0, x1=x1, y1=y1, depth=depth, weight=weight,
            is_leaf=True, has_label_strip=False, parent=parent,
        )

    has_label_strip = (x1 - x0) >= config.label_min_width
    # Bands snap to whole pixels so child edges stay on the integer grid.
    band = round_px(config.label_height) if has_label_strip else 0.0
    content_y0 = y0 + band
    content_w = x1 - x0
    content_h = y1 - content_y0

    if content_w < 1 or content_h < 1:
        # Too small to subdivide: either all label band, or one opaque tile.
        return LayoutNode(
            data=tree, x0=x0, y0=y0, x1=x1, y1=y1, depth=depth, weight=weight,
            is_leaf=not has_label_strip, has_label_strip=has_label_strip,
            label_height=band, parent=parent,
        )

    node = LayoutNode(
        data=tree, x0=x0, y0=y0, x1=x1, y1=y1, depth=depth, weight=weight,
        is_leaf=False, has_label_strip=has_label_strip,
        label_height=band, parent=parent,
    )

    # Zero-weight subtrees get no rectangle; equal weights keep input order.
    visible = [child for child in tree.children if ctx.weights[id(child)] > 0]
    visible.sort(key=lambda child: -ctx.weights[id(child)])
    local_rects = squarify([ctx.weights[id(c)] for c in visible], content_w, content_h)

    children = [
        _place(
            child,
            (x0 + lx0, content_y0 + ly0, x0 + lx1, content_y0 + ly1),
            depth + 1,
            node,
            ctx,
        )
        for child, (lx0, ly0, lx1, ly1) in zip(visible, local_rects, strict=True)
    ]
    _set_children(node, children)
    return node


def flatten(root: LayoutNode | None) -> tuple[LayoutNode, ...]:
    """Pre-order list of a layout tree."""
    if root is None:
        return ()
    out: list[LayoutNode] = []
    stack = [root]
    while stack:
        node = stack.pop()
        out.append(node)
        stack.extend(reversed(node.children))
    return tuple(out)


def build_layout(
    root: TreeNode | None,
    width: float,
    height: float,
    config: TreemapConfig = DEFAULT_CONFIG,
) -> LayoutResult:
    """Lay out ``root`` into a ``width`` x ``height`` pixel box.

    Degenerate boxes (zero, negative, NaN) and trees with no weight produce an
    empty result instead of raising.
    """
    w = _container_px(width)
    h = _container_px(height)
    if root is None or w is None or h is None or w < 1 or h < 1:
        logger.debug("Skipping treemap layout for degenerate box %rx%r", width, height)
        return _empty_result(config, w or 0, h or 0)

    weights: dict[int, float] = {}
    total = _collect_weights(root, config, weights)
    if total <= 0:
        logger.debug("Tree %r has no weight in %s mode", root.path, config.size_mode)
        return _empty_result(config, w, h)

    layout_root = _place(root, (0.0, 0.0, w, h), 0, None, _BuildContext(config, weights))
    all_nodes = flatten(layout_root)
    return LayoutResult(
        root=layout_root,
        all_nodes=all_nodes,
        config=config,
        width=w,
        height=h,
        hit_tester=HitTester(all_nodes),
        by_path={node.data.path: node for node in all_nodes},
    )


def rebuild(
    root: TreeNode | None,
    width: float,
    height: float,
    config: TreemapConfig = DEFAULT_CONFIG,
) -> LayoutResult:
    """Explicit full rebuild entry point for embedding event loops."""
    return build_layout(root, width, height, config)


__all__ = [
    "SQUARIFY_RATIO",
    "LayoutNode",
    "LayoutResult",
    "Rect",
    "build_layout",
    "flatten",
    "rebuild",
    "round_px",
    "squarify",
]
