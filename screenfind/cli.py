"""Command line entry point: find exact occurrences of icon files in a screenshot.

Exit status:
- 0 when every icon was found at least once,
- 1 when at least one icon was not found,
- 2 when an input image cannot be read or is not searchable.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from screenfind.config import debug_config_from_env
from screenfind.contracts.errors import InvalidInputError
from screenfind.logging_setup import setup_logging
from screenfind.vision.icon_locator import ScreenLocator
from screenfind.vision.image_io import load_icon, load_image

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="screenfind", description=__doc__.splitlines()[0])
    parser.add_argument("screen", help="Screenshot to search in.")
    parser.add_argument("icons", nargs="+", help="Icon image(s) to look for.")
    parser.add_argument("--json", action="store_true", help="Print results as JSON.")
    parser.add_argument("--debug-dir", help="Write debug frames to this directory (enables frames).")
    parser.add_argument("--verbose-debug", action="store_true", help="Write a frame for every narrowing step.")
    parser.add_argument("--log-dir", help="Directory for log files.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug messages to stderr.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    setup_logging(
        Path(args.log_dir) if args.log_dir else None,
        level=logging.DEBUG if args.verbose else logging.INFO,
        console=args.verbose,
    )

    debug_config = debug_config_from_env()
    if args.debug_dir:
        debug_config = debug_config.model_copy(
            update={"enabled": True, "directory": Path(args.debug_dir), "verbose": True}
        )
    elif args.verbose_debug:
        debug_config = debug_config.model_copy(update={"verbose": True})

    try:
        locator = ScreenLocator(load_image(args.screen), debug_config=debug_config)
        icons = [load_icon(path) for path in args.icons]
        outcomes = [locator.locate_detailed(icon) for icon in icons]
    except InvalidInputError as exc:
        logger.error("%s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.json:
        payload = [
            {"icon": o.icon_name, "state": o.state.value, "anchors": [[p.x, p.y] for p in o.anchors]}
            for o in outcomes
        ]
        print(json.dumps(payload, indent=2))
    else:
        for o in outcomes:
            if o.found:
                coords = ", ".join(f"({p.x}, {p.y})" for p in o.anchors)
                print(f"{o.icon_name}: {len(o.anchors)} match(es) at {coords}")
            else:
                print(f"{o.icon_name}: not found")

    return 0 if all(o.found for o in outcomes) else 1


if __name__ == "__main__":
    sys.exit(main())
