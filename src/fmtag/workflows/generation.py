"""Boundary with the text-generation collaborator.

The collaborator (an HTTP client, a local model, a test fake) receives a
GenerationRequest and returns the decoded JSON payload, or None when it
could not produce one. Prompt wording and transport belong to the
collaborator; this module only defines the request and validates the reply.

Expected payload:

    {
      "title": "...",
      "summary": "...",
      "tags_by_lang": {"en": ["civil rights", ...], "ko": ["역사", ...]}
    }
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from loguru import logger

from fmtag.core.exceptions import MalformedGenerationError
from fmtag.core.types import GenerationResult

_CODE_FENCE_START = re.compile(r"^```[a-zA-Z]*\n?")
_CODE_FENCE_END = re.compile(r"\n?```$")


@dataclass
class GenerationRequest:
    """Everything a generator needs to describe one note.

    Attributes:
        path: Note path, for reference only.
        body: Sanitized body with inline tags removed.
        existing_metadata: Current frontmatter, or None.
        quotas: Language code to number of tags wanted.
    """

    path: str
    body: str
    existing_metadata: dict[str, Any] | None = None
    quotas: dict[str, int] = field(default_factory=dict)


@runtime_checkable
class TagGenerator(Protocol):
    """Produces title, summary and tags for a note.

    Example:
        class StaticGenerator:
            def generate(self, request: GenerationRequest) -> Mapping | None:
                return {"title": "T", "summary": "S", "tags_by_lang": {"en": ["a"]}}
    """

    def generate(self, request: GenerationRequest) -> Mapping[str, Any] | None:
        """Return the decoded payload, or None if generation failed.

        May raise GenerationError for transport or service failures.
        """
        ...


def strip_code_fences(text: str) -> str:
    """Remove a code fence wrapped around a whole reply."""
    text = text.strip()
    text = _CODE_FENCE_START.sub("", text)
    return _CODE_FENCE_END.sub("", text)


def parse_generation_text(text: str) -> GenerationResult:
    """Decode a generation reply into a GenerationResult.

    Args:
        text: Raw reply, possibly wrapped in a ```json fence.

    Returns:
        The validated result.

    Raises:
        MalformedGenerationError: If the reply is empty, not JSON, or not a
            usable mapping.
    """
    body = strip_code_fences(text)
    if not body:
        raise MalformedGenerationError("empty reply", text)

    try:
        payload = json.loads(body)
    except json.JSONDecodeError as e:
        logger.warning(f"Generation reply is not valid JSON: {e}")
        raise MalformedGenerationError(f"invalid JSON: {e}", text) from e

    return GenerationResult.from_payload(payload)
