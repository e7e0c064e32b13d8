"""hit command: report the tree node under a pointer coordinate."""

from __future__ import annotations

import argparse
import json
import sys

from repotreemap.app.commands.helpers.runtime import load_view
from repotreemap.app.output.treemap_parts.tooltip import tooltip_rows
from repotreemap.core.output import colorize, print_table


def cmd_hit(args: argparse.Namespace) -> None:
    """Print the hit node's path (or a JSON record); exit 1 when nothing is hit."""
    view = load_view(args)
    hit = view.node_at(args.x, args.y)
    if hit is None:
        if args.json:
            print(json.dumps({"hit": None}))
        else:
            print(
                colorize(f"  No node at ({args.x:g}, {args.y:g})", "yellow", stream=sys.stderr),
                file=sys.stderr,
            )
        sys.exit(1)

    rows = tooltip_rows(
        hit.data, size_mode=view.config.size_mode, color_mode=view.config.color_mode
    )
    if args.json:
        record = {
            "hit": {
                "path": hit.data.path,
                "name": hit.data.name,
                "kind": hit.data.kind,
                "depth": hit.depth,
                "rect": list(hit.rect),
                "is_leaf": hit.is_leaf,
                "weight": hit.weight,
                "details": dict(rows),
            }
        }
        print(json.dumps(record, indent=2))
        return

    print(hit.data.path or "/")
    print_table(["Field", "Value"], [[label, value] for label, value in rows[1:]])


__all__ = ["cmd_hit"]
