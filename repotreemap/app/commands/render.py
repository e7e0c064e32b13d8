"""render command: lay out a tree file and write the treemap as a PNG."""

from __future__ import annotations

import argparse
import sys

from repotreemap.app.commands.helpers.runtime import load_view
from repotreemap.app.output.surface import PillowSurface
from repotreemap.app.output.treemap_parts.legend import legend_entries
from repotreemap.app.view import TreemapView
from repotreemap.core.fallbacks import print_write_error, warn
from repotreemap.core.output import colorize, format_number, print_table


def _print_legend(view: TreemapView) -> None:
    if view.display_root is None:
        return
    entries = legend_entries(view.config.color_mode, view.display_root)
    if not entries:
        return
    rows = [
        [
            entry.label,
            "#{:02x}{:02x}{:02x}".format(*entry.color),
            format_number(entry.value) if entry.value is not None else "",
        ]
        for entry in entries
    ]
    print_table(["Legend", "Color", "Lines"], rows, numeric=(2,))


def cmd_render(args: argparse.Namespace) -> None:
    view = load_view(args)
    if view.layout.is_empty:
        warn("Nothing to draw: the tree has no weight in this size mode.")
    if args.hover:
        if view.hover_path(args.hover) is None:
            warn(f"--hover path not visible in the treemap: {args.hover}")
    if args.select:
        if view.select_path(args.select) is None:
            warn(f"--select path not in the treemap: {args.select}")

    surface = PillowSurface(view.layout.width, view.layout.height, scale=args.scale)
    view.render(surface)
    try:
        written = surface.save(args.output)
    except OSError as exc:
        print_write_error(args.output, exc, label="treemap image")
        sys.exit(1)

    print(
        colorize(
            f"  Treemap written to {written} "
            f"({len(view.layout.all_nodes)} tiles, {view.config.size_mode}/{view.config.color_mode})",
            "green",
        )
    )
    if args.legend:
        _print_legend(view)


__all__ = ["cmd_render"]
