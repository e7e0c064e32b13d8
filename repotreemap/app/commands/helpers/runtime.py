"""Load the tree, config and laid-out view a command works on."""

from __future__ import annotations

import argparse
import logging

from repotreemap.app.view import TreemapView
from repotreemap.core.config import DEFAULT_CONFIG, TreemapConfig, load_config_file
from repotreemap.core.output import log
from repotreemap.engine.tree import count_files, load_tree, max_depth

logger = logging.getLogger(__name__)


def resolve_config(args: argparse.Namespace) -> TreemapConfig:
    """Config file (if any) first, then explicit CLI flags on top."""
    base = load_config_file(args.config) if getattr(args, "config", None) else DEFAULT_CONFIG
    return base.with_overrides(
        max_nesting_depth=getattr(args, "max_nesting_depth", None),
        label_min_width=getattr(args, "label_min_width", None),
        label_height=getattr(args, "label_height", None),
        size_mode=getattr(args, "size_mode", None),
        color_mode=getattr(args, "color_mode", None),
    )


def zoom_segments(path: str | None) -> list[str]:
    return [part for part in (path or "").split("/") if part]


def load_view(args: argparse.Namespace) -> TreemapView:
    """Build a TreemapView for the command's tree file and layout flags.

    Raises OSError, TreePayloadError or TreemapConfigError for bad inputs.
    """
    config = resolve_config(args)
    root = load_tree(args.tree)
    log(f"  Loaded {count_files(root)} files from {args.tree}")
    logger.debug("Tree %s is %d levels deep", args.tree, max_depth(root))
    view = TreemapView(config=config)
    view.zoom_path = tuple(zoom_segments(getattr(args, "zoom", None)))
    view.rebuild(root, args.width, args.height)
    if view.display_root is not None and view.zoom_path:
        reached = view.display_root.path or "/"
        logger.debug("Zoomed to %s (requested %s)", reached, "/".join(view.zoom_path))
    return view


__all__ = ["load_view", "resolve_config", "zoom_segments"]
