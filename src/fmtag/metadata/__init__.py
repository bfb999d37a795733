"""Frontmatter and tag handling.

Submodules
----------
frontmatter
    Splitting a note into YAML frontmatter and body, and composing it back
normalize
    Per-script tag normalization and dedup keys
inline
    Extraction of inline ``#tags`` from note bodies
merge
    Precedence merge of inline, existing and generated tags
reconcile
    Building the frontmatter written back to the note

Example
-------
>>> from fmtag.metadata import parse_frontmatter, extract_inline_tags, merge_tags
>>> parsed = parse_frontmatter(raw)
>>> inline = extract_inline_tags(parsed.body)
>>> tags = merge_tags(inline.tags, (parsed.data or {}).get("tags"), {"en": ["civil rights"]})
"""

from fmtag.metadata.frontmatter import (
    FrontmatterResult,
    SplitDocument,
    compose_document,
    dump_metadata,
    load_metadata,
    parse_frontmatter,
    split_document,
)
from fmtag.metadata.inline import (
    InlineExtraction,
    InlineTagMatch,
    cleanup_body,
    extract_inline_tags,
    find_inline_tags,
)
from fmtag.metadata.merge import (
    apply_language_quotas,
    as_tag_list,
    merge_tags,
)
from fmtag.metadata.normalize import (
    canonicalize,
    classify_script,
    dedup_key,
    to_pascal_case,
)
from fmtag.metadata.reconcile import (
    format_local_date,
    normalize_date_value,
    parse_date_string,
    reconcile_metadata,
)

__all__ = [
    # Frontmatter
    "FrontmatterResult",
    "SplitDocument",
    "compose_document",
    "dump_metadata",
    "load_metadata",
    "parse_frontmatter",
    "split_document",
    # Inline tags
    "InlineExtraction",
    "InlineTagMatch",
    "cleanup_body",
    "extract_inline_tags",
    "find_inline_tags",
    # Merge
    "apply_language_quotas",
    "as_tag_list",
    "merge_tags",
    # Normalization
    "canonicalize",
    "classify_script",
    "dedup_key",
    "to_pascal_case",
    # Reconcile
    "format_local_date",
    "normalize_date_value",
    "parse_date_string",
    "reconcile_metadata",
]
