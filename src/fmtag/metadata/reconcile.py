"""Frontmatter reconciliation.

Builds the frontmatter written back to a note from the old mapping, the
generated title/summary and the merged tag list. The old mapping is never
modified; unrelated fields keep their values and order.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable
from datetime import date, datetime
from typing import Any

from loguru import logger

from fmtag.core.types import FORBIDDEN_FIELDS, FileTimes, GenerationResult, Timestamp

# Non-ISO layouts accepted for an existing ``created`` value
_DATE_FORMATS = (
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%Y.%m.%d",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)


def format_local_date(value: Timestamp | date) -> str:
    """Format a timestamp as a local ``YYYY-MM-DD`` calendar date.

    Aware datetimes are converted to local time first; naive datetimes and
    dates are taken as local already. Floats are POSIX timestamps.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        day = value.date()
    elif isinstance(value, date):
        day = value
    else:
        day = datetime.fromtimestamp(value).date()
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def parse_date_string(text: str) -> datetime | None:
    """Parse a date-like string, returning None if it is not one.

    Accepts ISO-8601 dates and datetimes (with or without offset, ``Z``
    included) plus a few common hand-written layouts.
    """
    text = text.strip()
    if not text:
        return None

    iso_text = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return datetime.fromisoformat(iso_text)
    except ValueError:
        pass

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def normalize_date_value(value: Any) -> Any:
    """Rewrite a date-like value as ``YYYY-MM-DD``.

    Values that are not dates (including unparsable strings) are returned
    unchanged.
    """
    if isinstance(value, (datetime, date)):
        return format_local_date(value)
    if isinstance(value, str):
        parsed = parse_date_string(value)
        if parsed is None:
            logger.debug(f"Leaving unparsable created value untouched: {value!r}")
            return value
        return format_local_date(parsed)
    return value


def creation_timestamp(file_times: FileTimes | None, now: Timestamp) -> Timestamp:
    """Pick the file creation time, then modification time, then ``now``."""
    if file_times is not None:
        if file_times.created is not None:
            return file_times.created
        if file_times.modified is not None:
            return file_times.modified
    return now


def reconcile_metadata(
    old: dict[str, Any] | None,
    generated: GenerationResult,
    merged_tags: Iterable[str],
    now: Timestamp,
    file_times: FileTimes | None = None,
) -> dict[str, Any]:
    """Produce the new frontmatter mapping.

    Steps, in order:
    1. Copy the old mapping (or start empty)
    2. Overwrite ``title``/``summary`` with generated values when present
    3. Replace ``tags`` with the merged list
    4. Drop ``updated``, ``last_modified`` and ``path``
    5. Fill a missing ``created`` from the file times, or normalize an
       existing date-like value
    6. Stamp ``fm_created`` with today's date

    Args:
        old: Existing frontmatter, or None when the note has none.
        generated: Generated title and summary.
        merged_tags: Output of the tag merge.
        now: Current time.
        file_times: File creation/modification times, if known.

    Returns:
        A new frontmatter mapping.
    """
    metadata: dict[str, Any] = copy.deepcopy(old) if old else {}

    if generated.title is not None:
        metadata["title"] = generated.title
    if generated.summary is not None:
        metadata["summary"] = generated.summary

    metadata["tags"] = list(merged_tags)

    dropped = [name for name in FORBIDDEN_FIELDS if metadata.pop(name, None) is not None]
    if dropped:
        logger.debug(f"Dropped forbidden frontmatter fields: {', '.join(dropped)}")

    created = metadata.get("created")
    if not created:
        metadata["created"] = format_local_date(creation_timestamp(file_times, now))
    else:
        metadata["created"] = normalize_date_value(created)

    metadata["fm_created"] = format_local_date(now)
    return metadata
