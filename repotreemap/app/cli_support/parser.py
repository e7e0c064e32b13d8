"""Top-level argparse parser and subcommand definitions."""

from __future__ import annotations

import argparse

from repotreemap.core.config import COLOR_MODES, SIZE_MODES

USAGE_EXAMPLES = """
examples:
  repotreemap render analysis.json -o treemap.png
  repotreemap render analysis.json -o src.png --zoom src --color-mode age
  repotreemap hit analysis.json 420 310 --json
"""


def _add_layout_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("tree", help="JSON file with the analyzed file tree")
    parser.add_argument("--width", type=float, default=1200, help="Canvas width in px (default: 1200)")
    parser.add_argument("--height", type=float, default=800, help="Canvas height in px (default: 800)")
    parser.add_argument("--config", default=None, help="JSON file with treemap settings")
    parser.add_argument(
        "--size-mode", choices=sorted(SIZE_MODES), default=None,
        help="Metric that sizes tiles (default: loc)",
    )
    parser.add_argument(
        "--color-mode", choices=sorted(COLOR_MODES), default=None,
        help="Metric that colors tiles (default: language)",
    )
    parser.add_argument(
        "--depth", type=int, default=None, dest="max_nesting_depth",
        help="Maximum directory nesting shown (default: 3)",
    )
    parser.add_argument(
        "--label-min-width", type=float, default=None,
        help="Narrowest directory that gets a label band (default: 80)",
    )
    parser.add_argument(
        "--label-height", type=float, default=None,
        help="Height of directory label bands (default: 18)",
    )
    parser.add_argument(
        "--zoom", default=None, metavar="PATH",
        help="Directory to use as the treemap root, e.g. src/engine",
    )


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repotreemap",
        description="Squarified treemaps of analyzed repository file trees.",
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_render = sub.add_parser("render", help="Render the treemap to a PNG image")
    _add_layout_args(p_render)
    p_render.add_argument("-o", "--output", required=True, help="PNG file to write")
    p_render.add_argument(
        "--scale", type=int, default=2, help="Device pixels per layout pixel (default: 2)"
    )
    p_render.add_argument("--hover", default=None, metavar="PATH", help="Draw PATH as hovered")
    p_render.add_argument("--select", default=None, metavar="PATH", help="Draw PATH as selected")
    p_render.add_argument(
        "--legend", action="store_true", help="Print the color legend after rendering"
    )

    p_hit = sub.add_parser("hit", help="Report the node under a point")
    _add_layout_args(p_hit)
    p_hit.add_argument("x", type=float, help="Pointer x in layout px")
    p_hit.add_argument("y", type=float, help="Pointer y in layout px")
    p_hit.add_argument("--json", action="store_true", help="Print a JSON record instead of text")

    return parser


__all__ = ["create_parser"]
