"""Treemap render pipeline: tile fills, labels, hover, and selection passes."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from repotreemap.app.output.surface import Surface
from repotreemap.app.output.treemap_parts.colors import contrast_text_color, node_color
from repotreemap.app.output.treemap_parts.labels import directory_label, truncate_text
from repotreemap.app.output.treemap_parts.theme import (
    BG,
    BORDER_WIDTH,
    HOVER_BORDER,
    HOVER_OVERLAY,
    LABEL_INSET,
    MIN_LABEL_HEIGHT,
    MIN_LABEL_WIDTH,
    SELECTION_BORDER,
)
from repotreemap.app.output.vignette import gradient_for
from repotreemap.core.config import ColorMode, SizeMode
from repotreemap.engine.layout import LayoutNode
from repotreemap.engine.tree import TreeNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderOptions:
    color_mode: ColorMode = "language"
    size_mode: SizeMode = "loc"
    hovered_node: TreeNode | None = None
    selected_node: TreeNode | None = None
    # Reference time for the age color mode; None means "now".
    now: datetime | None = None


def _find_by_path(nodes: Sequence[LayoutNode], target: TreeNode | None) -> LayoutNode | None:
    if target is None:
        return None
    return next((n for n in nodes if n.data.path == target.path), None)


def _draw_tiles(surface: Surface, nodes: Sequence[LayoutNode], options: RenderOptions) -> None:
    for node in nodes:
        if not node.is_drawable or not (node.is_leaf or node.has_label_strip):
            continue
        color = node_color(node.data, options.color_mode, now=options.now)
        parent_rect = node.parent.rect if node.parent is not None else None
        surface.fill_gradient_rect(node.rect, gradient_for(node.rect, color, parent_rect))


def _draw_labels(surface: Surface, nodes: Sequence[LayoutNode], options: RenderOptions) -> None:
    for node in nodes:
        if not node.is_drawable:
            continue
        width, height = node.width, node.height
        max_text = width - 2 * LABEL_INSET

        if not node.is_leaf and node.has_label_strip and width >= MIN_LABEL_WIDTH:
            color = contrast_text_color(node_color(node.data, options.color_mode, now=options.now))
            text = truncate_text(
                surface.measure_text, directory_label(node.data, options.size_mode), max_text
            )
            band = min(node.label_height, height)
            surface.fill_text(text, node.x0 + LABEL_INSET, node.y0 + band / 2, color)
        elif node.is_leaf and width >= MIN_LABEL_WIDTH and height >= MIN_LABEL_HEIGHT:
            color = contrast_text_color(node_color(node.data, options.color_mode, now=options.now))
            text = truncate_text(surface.measure_text, node.data.name, max_text)
            surface.fill_text(text, node.x0 + LABEL_INSET, node.y0 + height / 2, color)


def _draw_hover(surface: Surface, nodes: Sequence[LayoutNode], options: RenderOptions) -> None:
    hovered = _find_by_path(nodes, options.hovered_node)
    if hovered is None:
        return
    surface.fill_rect(hovered.rect, HOVER_OVERLAY)
    surface.stroke_rect(hovered.rect, HOVER_BORDER, BORDER_WIDTH)


def _draw_selection(surface: Surface, nodes: Sequence[LayoutNode], options: RenderOptions) -> None:
    selected = _find_by_path(nodes, options.selected_node)
    if selected is None:
        return
    surface.stroke_rect(selected.rect, SELECTION_BORDER, BORDER_WIDTH)


def render(
    surface: Surface,
    all_nodes: Sequence[LayoutNode],
    options: RenderOptions | None = None,
) -> None:
    """Full redraw of a laid-out treemap onto ``surface``.

    Passes run in a fixed order (tiles, labels, hover, selection) so the
    selection border stays visible when it coincides with the hovered tile.
    """
    options = options or RenderOptions()
    surface.clear(BG)
    if not all_nodes:
        return
    # Back to front: parents before children.
    ordered = sorted(all_nodes, key=lambda n: n.depth)
    _draw_tiles(surface, ordered, options)
    _draw_labels(surface, ordered, options)
    _draw_hover(surface, ordered, options)
    _draw_selection(surface, ordered, options)
    logger.debug("Rendered %d treemap tiles", len(ordered))


__all__ = ["RenderOptions", "render"]
