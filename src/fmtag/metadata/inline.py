"""Inline tag extraction.

Finds ``#tag`` markers in note bodies, removes them from the text and
returns the tags they carried.

A marker is recognized when:

- it is preceded by start of text, whitespace, or one of ``( [ { :``;
- the token after it is made of ASCII letters, digits, ``_``, ``-``, ``/``
  or Hangul syllables, and contains at least one letter or Hangul syllable;
- the token is followed by end of text, whitespace, or one of
  ``, . ; : ! ? ) } ]``.

Markdown headings (``# Heading``) and repeated markers (``##``) never match
because the marker must be followed directly by a token character. Pure
numbers (``#123``) are treated as references rather than tags.
"""

from __future__ import annotations

import re
import string
from dataclasses import dataclass, field

from loguru import logger

from fmtag.core.types import TAG_MARKER, TagSource
from fmtag.metadata.normalize import canonicalize, dedup_key

_ASCII_LETTERS = frozenset(string.ascii_letters)
_TOKEN_CHARS = frozenset(string.ascii_letters + string.digits + "_-/")
_LEFT_BOUNDARY = frozenset("([{:")
_RIGHT_BOUNDARY = frozenset(",.;:!?)}]")
_HORIZONTAL_SPACE = frozenset(" \t")

_ZERO_WIDTH_PATTERN = re.compile("[\u200b-\u200d\ufeff]")
_TRAILING_SPACE_PATTERN = re.compile(r"[ \t]+$", re.MULTILINE)
_EXCESS_BLANK_LINES_PATTERN = re.compile(r"\n{3,}")


@dataclass
class InlineTagMatch:
    """A recognized marker token.

    Attributes:
        start: Offset of the marker character.
        end: Offset just past the token.
        token: Token text without the marker.
    """

    start: int
    end: int
    token: str


@dataclass
class InlineExtraction:
    """Result of extracting inline tags from a body.

    Attributes:
        tags: Normalized tags in first-seen order, deduplicated case-insensitively.
        body: Body with the tag tokens removed and whitespace cleaned up.
    """

    tags: list[str] = field(default_factory=list)
    body: str = ""


def _is_hangul(ch: str) -> bool:
    return "\uac00" <= ch <= "\ud7af"


def _is_token_char(ch: str) -> bool:
    return ch in _TOKEN_CHARS or _is_hangul(ch)


def _is_left_boundary(text: str, pos: int) -> bool:
    if pos == 0:
        return True
    prev = text[pos - 1]
    return prev.isspace() or prev in _LEFT_BOUNDARY


def _is_right_boundary(text: str, pos: int) -> bool:
    if pos >= len(text):
        return True
    nxt = text[pos]
    return nxt.isspace() or nxt in _RIGHT_BOUNDARY


def find_inline_tags(text: str) -> list[InlineTagMatch]:
    """Locate every inline tag token in ``text``.

    Candidates are found by scanning for the marker, then their left
    boundary, token body and right boundary are validated in turn.

    Args:
        text: Body text to scan.

    Returns:
        Matches in order of appearance, non-overlapping.
    """
    matches: list[InlineTagMatch] = []
    length = len(text)
    pos = text.find(TAG_MARKER)

    while pos != -1:
        token_start = pos + len(TAG_MARKER)
        token_end = token_start
        while token_end < length and _is_token_char(text[token_end]):
            token_end += 1

        token = text[token_start:token_end]
        if (
            token
            and _is_left_boundary(text, pos)
            and any(ch in _ASCII_LETTERS or _is_hangul(ch) for ch in token)
            and _is_right_boundary(text, token_end)
        ):
            matches.append(InlineTagMatch(start=pos, end=token_end, token=token))
            pos = text.find(TAG_MARKER, token_end)
        else:
            pos = text.find(TAG_MARKER, pos + 1)

    return matches


def cleanup_body(text: str) -> str:
    """Tidy whitespace left behind after removing tags.

    Removes zero-width characters and trailing spaces on every line,
    collapses runs of blank lines to a single blank line and strips
    trailing whitespace at the end of the text.
    """
    text = _ZERO_WIDTH_PATTERN.sub("", text)
    text = _TRAILING_SPACE_PATTERN.sub("", text)
    text = _EXCESS_BLANK_LINES_PATTERN.sub("\n\n", text)
    return text.rstrip()


def extract_inline_tags(body: str) -> InlineExtraction:
    """Extract inline tags and strip them from the body.

    The boundary character before a tag is kept. A tag that starts a line
    or follows whitespace also takes the spaces after it, so
    ``"#history #world analysis"`` becomes ``"analysis"``.

    Args:
        body: Note body (frontmatter already removed).

    Returns:
        InlineExtraction with conservative-normalized tags and the cleaned body.

    Example:
        >>> result = extract_inline_tags("#history #world analysis")
        >>> result.tags
        ['history', 'world']
        >>> result.body
        'analysis'
    """
    matches = find_inline_tags(body)

    pieces: list[str] = []
    chosen: dict[str, str] = {}
    cursor = 0
    for match in matches:
        pieces.append(body[cursor : match.start])

        cut = match.end
        if match.start == 0 or body[match.start - 1].isspace():
            while cut < len(body) and body[cut] in _HORIZONTAL_SPACE:
                cut += 1
        cursor = cut

        tag = canonicalize(match.token, TagSource.INLINE)
        if tag and dedup_key(tag) not in chosen:
            chosen[dedup_key(tag)] = tag
    pieces.append(body[cursor:])

    stripped = cleanup_body("".join(pieces))
    logger.debug(f"Extracted {len(chosen)} inline tags from {len(matches)} markers")
    return InlineExtraction(tags=list(chosen.values()), body=stripped)
