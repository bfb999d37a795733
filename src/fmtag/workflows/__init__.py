"""Note processing workflows."""

from fmtag.workflows.generation import (
    GenerationRequest,
    TagGenerator,
    parse_generation_text,
    strip_code_fences,
)
from fmtag.workflows.pipeline import (
    PreparedDocument,
    ProcessingOutcome,
    build_generation_request,
    finalize_document,
    prepare_document,
    process_document,
)
from fmtag.workflows.sanitize import sanitize_body

__all__ = [
    "GenerationRequest",
    "TagGenerator",
    "parse_generation_text",
    "strip_code_fences",
    "PreparedDocument",
    "ProcessingOutcome",
    "build_generation_request",
    "finalize_document",
    "prepare_document",
    "process_document",
    "sanitize_body",
]
