"""Interactive treemap view: explicit rebuilds, pointer handling, and hover/select events."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime

from repotreemap.app.output.render import RenderOptions, render
from repotreemap.app.output.surface import Surface
from repotreemap.core.config import DEFAULT_CONFIG, TreemapConfig
from repotreemap.engine.layout import LayoutNode, LayoutResult, build_layout
from repotreemap.engine.tree import TreeNode, navigate

logger = logging.getLogger(__name__)

NodeCallback = Callable[[TreeNode | None], None]


@dataclass(frozen=True)
class LayoutCacheKey:
    """Inputs that change layout geometry. Color mode only affects painting."""

    tree_revision: object
    width: float
    height: float
    max_nesting_depth: int
    size_mode: str
    label_min_width: float
    label_height: float

    @classmethod
    def for_inputs(
        cls, tree_revision: object, width: float, height: float, config: TreemapConfig
    ) -> LayoutCacheKey:
        return cls(
            tree_revision=tree_revision,
            width=width,
            height=height,
            max_nesting_depth=config.max_nesting_depth,
            size_mode=config.size_mode,
            label_min_width=config.label_min_width,
            label_height=config.label_height,
        )


class TreemapView:
    """Holds the current layout plus hover/selection state for one treemap.

    Nothing recomputes implicitly: callers invoke :meth:`rebuild` whenever the
    tree, the container size or the config changes. Events always carry the
    original TreeNode, never a LayoutNode.
    """

    def __init__(
        self,
        *,
        on_hover: NodeCallback | None = None,
        on_select: NodeCallback | None = None,
        config: TreemapConfig = DEFAULT_CONFIG,
    ) -> None:
        self.on_hover = on_hover
        self.on_select = on_select
        self.config = config
        self.root: TreeNode | None = None
        self.display_root: TreeNode | None = None
        self.zoom_path: tuple[str, ...] = ()
        self.layout: LayoutResult = build_layout(None, 0, 0, config)
        self.hovered: TreeNode | None = None
        self.selected: TreeNode | None = None
        self._cache_key: LayoutCacheKey | None = None

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def rebuild(
        self,
        root: TreeNode | None,
        width: float,
        height: float,
        config: TreemapConfig | None = None,
        *,
        tree_revision: object = None,
    ) -> LayoutResult:
        """Lay out ``root`` again for the given box.

        When ``tree_revision`` is given, a rebuild with an unchanged
        :class:`LayoutCacheKey` reuses the previous layout. Hover and selection
        are carried over by path; a node that disappeared is cleared and its
        event fires with ``None``.
        """
        if config is not None:
            self.config = config
        self.root = root
        self.display_root = navigate(root, self.zoom_path) if root is not None else None

        key = None
        if tree_revision is not None:
            key = LayoutCacheKey.for_inputs(
                (tree_revision, self.zoom_path), width, height, self.config
            )
            if key == self._cache_key:
                logger.debug("Reusing cached treemap layout for %r", key)
                return self.layout

        self.layout = build_layout(self.display_root, width, height, self.config)
        self._cache_key = key
        self._reconcile_state()
        return self.layout

    def zoom(self, segments: Sequence[str]) -> LayoutResult:
        """Re-root the view at a descendant directory, keeping the current box."""
        self.zoom_path = tuple(segments)
        self._cache_key = None
        return self.rebuild(self.root, self.layout.width, self.layout.height)

    def zoom_out(self) -> LayoutResult:
        return self.zoom(self.zoom_path[:-1])

    def _reconcile_state(self) -> None:
        if self.hovered is not None:
            node = self.layout.find_by_path(self.hovered.path)
            if node is None or not node.is_drawable:
                self._set_hovered(None)
            else:
                self.hovered = node.data
        if self.selected is not None:
            node = self.layout.find_by_path(self.selected.path)
            if node is None:
                self._set_selected(None)
            else:
                self.selected = node.data

    # ------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------

    def node_at(self, x: float, y: float) -> LayoutNode | None:
        return self.layout.find_node_at_point(x, y)

    def pointer_move(self, x: float, y: float) -> TreeNode | None:
        hit = self.node_at(x, y)
        self._set_hovered(hit.data if hit is not None else None)
        return self.hovered

    def pointer_leave(self) -> None:
        self._set_hovered(None)

    def click(self, x: float, y: float) -> TreeNode | None:
        """Select the node under the pointer; clicking empty space clears the selection."""
        hit = self.node_at(x, y)
        self._set_selected(hit.data if hit is not None else None)
        return self.selected

    def clear_selection(self) -> None:
        self._set_selected(None)

    def hover_path(self, path: str) -> TreeNode | None:
        """Hover a node by path; unknown or sub-pixel paths clear the hover."""
        node = self.layout.find_by_path(path.strip("/"))
        self._set_hovered(node.data if node is not None and node.is_drawable else None)
        return self.hovered

    def select_path(self, path: str) -> TreeNode | None:
        node = self.layout.find_by_path(path.strip("/"))
        self._set_selected(node.data if node is not None else None)
        return self.selected

    def _set_hovered(self, node: TreeNode | None) -> None:
        if _same_path(node, self.hovered):
            return
        self.hovered = node
        if self.on_hover is not None:
            self.on_hover(node)

    def _set_selected(self, node: TreeNode | None) -> None:
        if _same_path(node, self.selected):
            return
        self.selected = node
        if self.on_select is not None:
            self.on_select(node)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def render(self, surface: Surface, *, now: datetime | None = None) -> None:
        render(
            surface,
            self.layout.all_nodes,
            RenderOptions(
                color_mode=self.config.color_mode,
                size_mode=self.config.size_mode,
                hovered_node=self.hovered,
                selected_node=self.selected,
                now=now,
            ),
        )


def _same_path(a: TreeNode | None, b: TreeNode | None) -> bool:
    if a is None or b is None:
        return a is b
    return a.path == b.path


__all__ = ["LayoutCacheKey", "NodeCallback", "TreemapView"]
