"""Core types for fmtag."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Union

from .exceptions import MalformedGenerationError

# Inline tag marker and frontmatter fence
TAG_MARKER = "#"
FENCE = "---"

# Fields never written back to frontmatter
FORBIDDEN_FIELDS = ("updated", "last_modified", "path")


class TagSource(Enum):
    """Where a tag came from; selects the normalization rule."""

    INLINE = "inline"
    EXISTING = "existing"
    GENERATED = "generated"


class Script(Enum):
    """Coarse script classification of a tag."""

    KOREAN = "korean"
    LATIN = "latin"
    OTHER = "other"


Timestamp = Union[datetime, float]


@dataclass(frozen=True)
class FileTimes:
    """File timestamps used to fill a missing ``created`` field.

    Attributes:
        created: Creation time (datetime or POSIX timestamp), if known.
        modified: Modification time (datetime or POSIX timestamp), if known.
    """

    created: Timestamp | None = None
    modified: Timestamp | None = None


@dataclass
class GenerationResult:
    """Fields produced by the text-generation collaborator.

    ``title`` and ``summary`` are None when the payload did not carry a
    usable string, which leaves the existing frontmatter value in place.

    Attributes:
        title: Generated title, if any.
        summary: Generated summary, if any.
        tags_by_language: Language code to generated tag entries.
    """

    title: str | None = None
    summary: str | None = None
    tags_by_language: dict[str, list[Any]] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> "GenerationResult":
        """Build a result from an untrusted decoded payload.

        Non-string titles and summaries are dropped, a ``tags_by_lang``
        value that is not a mapping yields no tags, and each language's tags
        are coerced into a list.

        Args:
            payload: Decoded JSON value from the generation service.

        Returns:
            GenerationResult with whatever fields were usable.

        Raises:
            MalformedGenerationError: If the payload is not a mapping or has
                none of the expected fields.
        """
        if not isinstance(payload, Mapping):
            raise MalformedGenerationError(
                f"expected a mapping, got {type(payload).__name__}", payload
            )

        known = [key for key in _GENERATION_FIELDS if key in payload]
        if not known:
            raise MalformedGenerationError("no title, summary or tags_by_lang field", payload)

        title = payload.get("title")
        summary = payload.get("summary")

        raw_tags = payload.get("tags_by_lang", payload.get("tags_by_language"))
        tags_by_language: dict[str, list[Any]] = {}
        if isinstance(raw_tags, Mapping):
            for code, tags in raw_tags.items():
                if tags is None:
                    continue
                if isinstance(tags, (list, tuple)):
                    tags_by_language[str(code)] = list(tags)
                else:
                    tags_by_language[str(code)] = [tags]

        return cls(
            title=title if isinstance(title, str) else None,
            summary=summary if isinstance(summary, str) else None,
            tags_by_language=tags_by_language,
        )


_GENERATION_FIELDS = ("title", "summary", "tags_by_lang", "tags_by_language")
