"""Command-line entry point for autometrics tooling."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .sloth import DEFAULT_OBJECTIVES, write_sloth_file

__all__ = ["build_parser", "main"]


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``autometrics`` command."""
    parser = argparse.ArgumentParser(prog="autometrics")
    commands = parser.add_subparsers(dest="command", required=True)

    sloth = commands.add_parser(
        "generate-sloth-file",
        help="Generate an SLO definition file for use with Sloth",
    )
    sloth.add_argument(
        "--objectives",
        action="append",
        default=None,
        help="Objective percentage to support; may be repeated "
        f"(default: {', '.join(DEFAULT_OBJECTIVES)})",
    )
    sloth.add_argument(
        "-a",
        "--alerting-traffic-threshold",
        type=float,
        default=1.0,
        help="Minimum traffic, in events per minute, for alerts to trigger",
    )
    sloth.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Where to write the SLO file; printed to stdout if omitted",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command and return its exit status."""
    args = build_parser().parse_args(argv)
    if args.command == "generate-sloth-file":
        objectives: List[str] = args.objectives or list(DEFAULT_OBJECTIVES)
        try:
            write_sloth_file(objectives, args.alerting_traffic_threshold, args.output)
        except OSError as err:
            print(f"Error writing SLO file to {str(args.output)!r}: {err}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())