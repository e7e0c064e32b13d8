"""CLI entry point: parse args, configure logging, dispatch command handlers."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Sequence

from repotreemap.app.cli_support.parser import create_parser
from repotreemap.app.commands.hit import cmd_hit
from repotreemap.app.commands.render import cmd_render
from repotreemap.core.config import TreemapConfigError
from repotreemap.core.fallbacks import print_error
from repotreemap.engine.tree import TreePayloadError

logger = logging.getLogger(__name__)

COMMAND_HANDLERS: dict[str, Callable[[argparse.Namespace], None]] = {
    "render": cmd_render,
    "hit": cmd_hit,
}


def _reconfigure_streams() -> None:
    # Ensure Unicode output works on Windows terminals (cp1252 etc.)
    for stream in (sys.stdout, sys.stderr):
        if hasattr(stream, "reconfigure"):
            try:
                stream.reconfigure(encoding="utf-8", errors="replace")
            except (AttributeError, OSError):
                logger.debug(
                    "Skipping stream reconfigure for %s (not supported)",
                    getattr(stream, "name", "<stream>"),
                )


def main(argv: Sequence[str] | None = None) -> None:
    _reconfigure_streams()

    parser = create_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    handler = COMMAND_HANDLERS[args.command]
    try:
        handler(args)
    except (TreePayloadError, TreemapConfigError, OSError) as exc:
        print_error(str(exc))
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(1)


if __name__ == "__main__":
    main()
