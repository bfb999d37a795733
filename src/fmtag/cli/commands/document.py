"""Note commands for fmtag CLI."""

import os
from datetime import date, datetime
from pathlib import Path

from loguru import logger

from ...core.config import Config
from ...core.exceptions import FmtagError
from ...core.types import FileTimes
from ...workflows import finalize_document, parse_generation_text, prepare_document


def add_extract_arguments(parser) -> None:
    """Add arguments for the extract command."""
    parser.add_argument("file", help="Markdown note to read")
    parser.add_argument(
        "--body",
        action="store_true",
        help="Also print the body with inline tags removed",
    )


def add_apply_arguments(parser) -> None:
    """Add arguments for the apply command."""
    parser.add_argument("file", help="Markdown note to update")
    parser.add_argument("result", help="JSON file with the generation result")
    parser.add_argument(
        "--write",
        action="store_true",
        help="Write the updated note back instead of printing it",
    )
    parser.add_argument(
        "--today",
        help="Date to stamp as fm_created (YYYY-MM-DD, default: today)",
    )


def handle_extract(args, config: Config) -> None:
    """Handle extract command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    raw = Path(args.file).read_text(encoding="utf-8")
    prepared = prepare_document(raw)

    if prepared.inline_tags:
        for tag in prepared.inline_tags:
            print(tag)
    else:
        print("No inline tags found.")

    if args.body:
        print()
        print(prepared.stripped_body)


def handle_apply(args, config: Config) -> None:
    """Handle apply command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    path = Path(args.file)
    raw = path.read_text(encoding="utf-8")
    generated = parse_generation_text(Path(args.result).read_text(encoding="utf-8"))

    outcome = finalize_document(
        prepare_document(raw),
        generated,
        now=_resolve_now(args.today),
        file_times=_file_times(path),
        quotas=config.quotas,
    )
    if not outcome.ok:
        raise FmtagError(outcome.error)

    if args.write:
        path.write_text(outcome.document, encoding="utf-8")
        logger.info(f"Updated frontmatter: {path}")
        print(f"Updated {path} ({len(outcome.tags)} tags)")
    else:
        print(outcome.document)


def _resolve_now(today: str | None) -> datetime:
    """Current time, or midnight of an explicit date."""
    if not today:
        return datetime.now()
    try:
        return datetime.combine(date.fromisoformat(today), datetime.min.time())
    except ValueError as e:
        raise FmtagError(f"Invalid --today date: {today!r}") from e


def _file_times(path: Path) -> FileTimes:
    """Creation and modification times of a note file."""
    stat = os.stat(path)
    return FileTimes(
        created=getattr(stat, "st_birthtime", None),
        modified=stat.st_mtime,
    )
