"""CLI entry point for fmtag."""

import argparse
import sys
from typing import NoReturn

from loguru import logger

from .. import __version__
from ..core.config import Config
from . import commands


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="fmtag",
        description="Frontmatter tagging - reconcile inline #tags with note frontmatter",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=False)

    extract_parser = subparsers.add_parser(
        "extract", help="List inline tags found in a note"
    )
    commands.add_extract_arguments(extract_parser)

    apply_parser = subparsers.add_parser(
        "apply", help="Apply a generation result to a note's frontmatter"
    )
    commands.add_apply_arguments(apply_parser)

    return parser


def configure_logging(verbose: bool) -> None:
    """Send log output to stderr at the requested level."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = Config.from_env()
        if args.command == "extract":
            commands.handle_extract(args, config)
        elif args.command == "apply":
            commands.handle_apply(args, config)
        else:
            parser.print_help()

        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
