"""Note processing pipeline.

Runs one note through the full flow:
1. Split frontmatter from body and parse it
2. Extract inline tags, removing them from the body
3. Ask the generation collaborator for title, summary and tags
4. Merge tags and reconcile the frontmatter
5. Compose the rewritten note

The first two steps are available on their own (``prepare_document``) so
callers keep the stripped body and inline tags even when generation fails.
Nothing here reads the clock or the filesystem: ``now`` and file times are
passed in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from fmtag.core.config import Config
from fmtag.core.exceptions import FrontmatterError, GenerationError, MalformedGenerationError
from fmtag.core.types import FileTimes, GenerationResult, Timestamp
from fmtag.metadata.frontmatter import compose_document, parse_frontmatter
from fmtag.metadata.inline import extract_inline_tags
from fmtag.metadata.merge import as_tag_list, merge_tags
from fmtag.metadata.reconcile import reconcile_metadata
from fmtag.workflows.generation import GenerationRequest, TagGenerator
from fmtag.workflows.sanitize import sanitize_body


@dataclass
class PreparedDocument:
    """A note after frontmatter parsing and inline tag extraction.

    Attributes:
        metadata: Parsed frontmatter, or None if absent or malformed.
        body: Body as found in the note.
        inline_tags: Tags extracted from the body.
        stripped_body: Body with inline tags removed.
    """

    metadata: dict[str, Any] | None
    body: str
    inline_tags: list[str] = field(default_factory=list)
    stripped_body: str = ""


@dataclass
class ProcessingOutcome:
    """Result of processing one note.

    ``prepared`` is always set. On success ``document`` holds the rewritten
    note; on failure ``error`` explains why and nothing should be written.

    Attributes:
        prepared: Output of the preparation stage.
        document: Rewritten note text, on success.
        metadata: New frontmatter mapping, on success.
        tags: Merged tag list, on success.
        error: Failure reason, on failure.
    """

    prepared: PreparedDocument
    document: str | None = None
    metadata: dict[str, Any] | None = None
    tags: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Whether processing produced a document."""
        return self.error is None

    @classmethod
    def failure(cls, prepared: PreparedDocument, reason: str) -> "ProcessingOutcome":
        """Create a failed outcome that keeps the prepared stage."""
        return cls(prepared=prepared, error=reason)


def prepare_document(raw: str) -> PreparedDocument:
    """Parse frontmatter and strip inline tags from a note.

    Args:
        raw: Full note text.

    Returns:
        PreparedDocument with the parsed frontmatter and extracted tags.
    """
    parsed = parse_frontmatter(raw)
    extraction = extract_inline_tags(parsed.body)
    return PreparedDocument(
        metadata=parsed.data,
        body=parsed.body,
        inline_tags=extraction.tags,
        stripped_body=extraction.body,
    )


def build_generation_request(
    prepared: PreparedDocument,
    path: str = "",
    config: Config | None = None,
) -> GenerationRequest:
    """Describe a prepared note for the generation collaborator."""
    config = config or Config()
    return GenerationRequest(
        path=path,
        body=sanitize_body(prepared.stripped_body, max_chars=config.generation.max_body_chars),
        existing_metadata=prepared.metadata,
        quotas=config.quotas,
    )


def finalize_document(
    prepared: PreparedDocument,
    generated: GenerationResult,
    now: Timestamp,
    file_times: FileTimes | None = None,
    quotas: dict[str, int] | None = None,
) -> ProcessingOutcome:
    """Merge tags, reconcile frontmatter and compose the note.

    Args:
        prepared: Output of ``prepare_document``.
        generated: Validated generation result.
        now: Current time.
        file_times: File creation/modification times, if known.
        quotas: Optional per-language limits for generated tags.

    Returns:
        ProcessingOutcome with the rewritten note.
    """
    existing_tags = as_tag_list((prepared.metadata or {}).get("tags"))
    tags = merge_tags(prepared.inline_tags, existing_tags, generated.tags_by_language, quotas)
    metadata = reconcile_metadata(prepared.metadata, generated, tags, now, file_times)

    try:
        document = compose_document(metadata, prepared.stripped_body)
    except FrontmatterError as e:
        logger.warning(f"Cannot compose note: {e}")
        return ProcessingOutcome.failure(prepared, str(e))

    return ProcessingOutcome(prepared=prepared, document=document, metadata=metadata, tags=tags)


def process_document(
    raw: str,
    generator: TagGenerator,
    *,
    now: Timestamp,
    path: str = "",
    file_times: FileTimes | None = None,
    config: Config | None = None,
) -> ProcessingOutcome:
    """Run a note through the whole pipeline.

    Generation failures (an exception from the generator, no result, or a
    malformed payload) end processing with a failed outcome; they are not
    retried here.

    Args:
        raw: Full note text.
        generator: Generation collaborator.
        now: Current time.
        path: Note path passed to the generator for reference.
        file_times: File creation/modification times, if known.
        config: Configuration supplying language quotas and body limits.

    Returns:
        ProcessingOutcome; check ``ok`` before writing ``document``.
    """
    config = config or Config()
    prepared = prepare_document(raw)
    logger.debug(f"Prepared {path or '<note>'}: {len(prepared.inline_tags)} inline tags")

    request = build_generation_request(prepared, path=path, config=config)
    try:
        payload = generator.generate(request)
    except GenerationError as e:
        logger.warning(f"Generation failed for {path or '<note>'}: {e}")
        return ProcessingOutcome.failure(prepared, str(e))

    if payload is None:
        logger.warning(f"Generation returned no result for {path or '<note>'}")
        return ProcessingOutcome.failure(prepared, "generation returned no result")

    try:
        generated = GenerationResult.from_payload(payload)
    except MalformedGenerationError as e:
        logger.warning(f"{e} for {path or '<note>'}")
        return ProcessingOutcome.failure(prepared, str(e))

    return finalize_document(prepared, generated, now, file_times, quotas=config.quotas)
