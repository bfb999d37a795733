"""Tag normalization rules.

Maps a raw tag string to its canonical display form and to the
case-insensitive key used for deduplication.

Two rules exist, chosen by where the tag came from:

- Conservative (inline and existing tags): Korean and Latin tags are joined
  into one token with the original casing (Latin tags keep hyphens typed by
  the user); anything else is hyphenated.
- Expressive (generated tags): Korean tags are joined, Latin tags are joined
  in PascalCase so word boundaries survive; anything else is hyphenated.

Example:
    >>> canonicalize("civil rights", TagSource.GENERATED)
    'CivilRights'
    >>> canonicalize("civil rights", TagSource.INLINE)
    'civilrights'
    >>> dedup_key("CivilRights")
    'civilrights'
"""

from __future__ import annotations

import re

from fmtag.core.types import TAG_MARKER, Script, TagSource

_HANGUL_PATTERN = re.compile(r"[\uAC00-\uD7AF]")
_LATIN_PATTERN = re.compile(r"[A-Za-z0-9 _/-]+")
_LATIN_LETTER_PATTERN = re.compile(r"[A-Za-z]")

# Separators removed when joining Korean tags into one token
_JOIN_SEPARATORS = re.compile(r"[ _/-]+")
# Separators other than the hyphen
_NON_HYPHEN_SEPARATORS = re.compile(r"[ _/]+")
_REPEATED_HYPHENS = re.compile(r"-{2,}")

_ACRONYM_PATTERN = re.compile(r"[A-Z0-9]+")
_MIXED_CASE_PATTERN = re.compile(r"[A-Z].*[a-z]|[a-z].*[A-Z]")


def classify_script(text: str) -> Script:
    """Classify a tag by the characters it contains.

    Hangul wins over everything else, so mixed Hangul/Latin tags are Korean.

    Args:
        text: Tag text (marker already removed).

    Returns:
        The script classification.
    """
    if _HANGUL_PATTERN.search(text):
        return Script.KOREAN
    if _LATIN_PATTERN.fullmatch(text) and _LATIN_LETTER_PATTERN.search(text):
        return Script.LATIN
    return Script.OTHER


def strip_marker(raw: str) -> str:
    """Trim whitespace and a single leading tag marker."""
    text = raw.strip()
    if text.startswith(TAG_MARKER):
        text = text[len(TAG_MARKER) :]
    return text


def join_words(text: str, keep_hyphens: bool = False) -> str:
    """Remove separator runs, keeping letter case."""
    if keep_hyphens:
        return _NON_HYPHEN_SEPARATORS.sub("", text)
    return _JOIN_SEPARATORS.sub("", text)


def hyphenate(text: str) -> str:
    """Replace separator runs with single hyphens and trim edge hyphens."""
    text = _NON_HYPHEN_SEPARATORS.sub("-", text)
    text = _REPEATED_HYPHENS.sub("-", text)
    return text.strip("-")


def to_pascal_case(text: str) -> str:
    """Join Latin words in PascalCase.

    Acronyms (all uppercase/digits) and digit-led words are kept verbatim.
    Words that already mix case only get their first letter raised.

    Args:
        text: Latin tag text with separators between words.

    Returns:
        The words joined without separators.
    """
    tokens = [tok for tok in _JOIN_SEPARATORS.split(text) if tok] or [text]

    words = []
    for tok in tokens:
        if _ACRONYM_PATTERN.fullmatch(tok) or tok[:1].isdigit():
            words.append(tok)
        elif _MIXED_CASE_PATTERN.search(tok):
            words.append(tok[:1].upper() + tok[1:])
        else:
            words.append(tok[:1].upper() + tok[1:].lower())
    return "".join(words)


def canonicalize(raw: str, source: TagSource) -> str:
    """Normalize a raw tag to its canonical form.

    Args:
        raw: Tag as typed or generated, with or without the marker.
        source: Origin of the tag; generated tags use the expressive rule.

    Returns:
        Canonical tag, or an empty string if nothing is left.
    """
    base = strip_marker(raw)
    if not base:
        return ""

    script = classify_script(base)
    if script is Script.KOREAN:
        return join_words(base)
    if script is Script.LATIN:
        if source is TagSource.GENERATED:
            return to_pascal_case(base)
        return join_words(base, keep_hyphens=True)
    return hyphenate(base)


def dedup_key(canonical: str) -> str:
    """Case-insensitive equality key for a canonical tag."""
    return canonical.lower()
