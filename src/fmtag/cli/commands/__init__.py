"""Command implementations for fmtag CLI."""

from .document import (
    add_apply_arguments,
    add_extract_arguments,
    handle_apply,
    handle_extract,
)

__all__ = [
    "add_apply_arguments",
    "add_extract_arguments",
    "handle_apply",
    "handle_extract",
]
