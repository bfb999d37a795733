"""Three-way tag merging.

Tags are merged in a fixed precedence order:

1. inline tags found in the body,
2. tags already present in the frontmatter,
3. tags produced by the generation service (all languages, in order).

A tag whose dedup key has already been seen is discarded, so a user's own
spelling is never replaced by a generated variant of the same tag.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from loguru import logger

from fmtag.core.types import TagSource
from fmtag.metadata.normalize import canonicalize, dedup_key


def as_tag_list(value: Any) -> list[Any]:
    """Coerce a frontmatter or payload field into a list of entries.

    Handles the shapes tags show up in:
    - List/tuple/set: entries as-is
    - String with commas: "tag1, tag2"
    - Any other value: a single entry

    Args:
        value: Field value, possibly None.

    Returns:
        List of raw entries (not yet normalized).
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    if isinstance(value, str) and "," in value:
        return [t.strip() for t in value.split(",") if t.strip()]
    return [value]


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def apply_language_quotas(
    tags_by_language: Mapping[str, Any],
    quotas: Mapping[str, int] | None,
) -> dict[str, list[Any]]:
    """Limit generated tags to the configured languages and counts.

    Args:
        tags_by_language: Language code to generated tags.
        quotas: Language code to maximum count; None disables the limit.

    Returns:
        Language code to tag list, in the original language order.
    """
    limited: dict[str, list[Any]] = {}
    for code, tags in tags_by_language.items():
        entries = as_tag_list(tags)
        if quotas is not None:
            if code not in quotas:
                logger.debug(f"Dropping {len(entries)} generated tags for unconfigured language {code!r}")
                continue
            entries = entries[: max(0, quotas[code])]
        limited[code] = entries
    return limited


def merge_tags(
    inline: Iterable[str],
    existing: Iterable[Any],
    generated_by_language: Mapping[str, Any],
    quotas: Mapping[str, int] | None = None,
) -> list[str]:
    """Merge inline, existing and generated tags.

    Args:
        inline: Tags extracted from the body.
        existing: Entries of the frontmatter ``tags`` field (any type).
        generated_by_language: Language code to generated tags.
        quotas: Optional per-language limits for generated tags.

    Returns:
        Canonical tags in first-seen order, unique by dedup key.

    Example:
        >>> merge_tags(["History"], ["history-notes"], {"en": ["History"]})
        ['History', 'history-notes']
    """
    chosen: dict[str, str] = {}

    def add(entries: Iterable[Any], source: TagSource) -> None:
        for entry in entries:
            tag = canonicalize(_as_text(entry), source)
            key = dedup_key(tag)
            if key and key not in chosen:
                chosen[key] = tag

    add(inline, TagSource.INLINE)
    add(existing, TagSource.EXISTING)
    for tags in apply_language_quotas(generated_by_language, quotas).values():
        add(tags, TagSource.GENERATED)

    logger.debug(f"Merged tags into {len(chosen)} unique entries")
    return list(chosen.values())
