"""YAML frontmatter splitting and composition.

A document carries frontmatter when it starts with the ``---`` fence and a
later line starts with ``---`` as well:

    ---
    title: My Note
    tags: [history, world]
    ---

    Body text.

``compose_document`` writes the same layout back, so parsing a composed
document returns the mapping and body it was built from.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import yaml
from loguru import logger

from fmtag.core.exceptions import FrontmatterError
from fmtag.core.types import FENCE


@dataclass
class SplitDocument:
    """Raw text split at the frontmatter fences.

    Attributes:
        metadata_text: Text between the fences (stripped), or None without fences.
        body: Everything after the closing fence.
    """

    metadata_text: str | None
    body: str


@dataclass
class FrontmatterResult:
    """Result from parsing YAML frontmatter.

    Attributes:
        data: Parsed mapping, or None if absent or malformed.
        body: Document body after the frontmatter.
        has_frontmatter: Whether a well-formed frontmatter mapping was found.
    """

    data: dict[str, Any] | None
    body: str
    has_frontmatter: bool


def _drop_blank_line(text: str) -> str:
    """Remove a single leading empty line."""
    if text.startswith("\r\n"):
        return text[2:]
    if text.startswith("\n"):
        return text[1:]
    return text


def split_document(raw: str) -> SplitDocument:
    """Split a document into frontmatter text and body.

    The closing fence is the first line after the opening one that starts
    with ``---``; extra dashes on that line are accepted. One blank line
    after the closing fence is dropped.

    Args:
        raw: Full document text.

    Returns:
        SplitDocument; ``metadata_text`` is None when there are no fences.
    """
    if not raw.startswith(FENCE):
        return SplitDocument(metadata_text=None, body=raw)

    close = raw.find("\n" + FENCE, len(FENCE))
    if close == -1:
        return SplitDocument(metadata_text=None, body=raw)

    metadata_text = raw[len(FENCE) : close + 1].strip()
    rest_start = close + 1 + len(FENCE)

    line_end = raw.find("\n", rest_start)
    if line_end == -1:
        line_end = len(raw)
    if raw[rest_start:line_end].strip(" \t\r-") == "":
        rest = raw[line_end + 1 :]
    else:
        rest = raw[rest_start:]

    return SplitDocument(metadata_text=metadata_text, body=_drop_blank_line(rest))


def load_metadata(text: str) -> dict[str, Any] | None:
    """Parse frontmatter text as a YAML mapping.

    Args:
        text: YAML text between the fences.

    Returns:
        The mapping (empty for blank text), or None if the text is not
        valid YAML or not a mapping.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        logger.warning(f"Ignoring malformed frontmatter: {e}")
        return None

    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring frontmatter that is not a mapping: {type(data).__name__}")
        return None
    return data


def parse_frontmatter(raw: str) -> FrontmatterResult:
    """Parse YAML frontmatter from markdown content.

    A malformed block is treated as missing: ``data`` is None, but ``body``
    still excludes the fenced text so the block is replaced on the next write.

    Args:
        raw: Full markdown document content.

    Returns:
        FrontmatterResult with parsed data and the body.

    Example:
        >>> result = parse_frontmatter('''---
        ... title: My Doc
        ... tags: [python, code]
        ... ---
        ... # Hello World
        ... ''')
        >>> result.data
        {'title': 'My Doc', 'tags': ['python', 'code']}
        >>> result.body
        '# Hello World\\n'
    """
    split = split_document(raw)
    if split.metadata_text is None:
        return FrontmatterResult(data=None, body=split.body, has_frontmatter=False)

    data = load_metadata(split.metadata_text)
    return FrontmatterResult(data=data, body=split.body, has_frontmatter=data is not None)


def dump_metadata(metadata: dict[str, Any]) -> str:
    """Serialize a frontmatter mapping to YAML, keeping key order.

    Raises:
        FrontmatterError: If a value cannot be represented as YAML.
    """
    try:
        text = yaml.safe_dump(
            metadata,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
    except yaml.YAMLError as e:
        raise FrontmatterError(f"Cannot serialize frontmatter: {e}") from e
    return text.rstrip()


def compose_document(metadata: dict[str, Any], body: str) -> str:
    """Join frontmatter and body into a document.

    Args:
        metadata: Frontmatter mapping.
        body: Document body.

    Returns:
        ``---``, the YAML mapping, ``---``, a blank line, then the body.
    """
    return f"{FENCE}\n{dump_metadata(metadata)}\n{FENCE}\n\n{body}"
