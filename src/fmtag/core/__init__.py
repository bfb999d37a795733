"""Core configuration, errors and types for fmtag."""

from .config import (
    LANGUAGE_LABELS,
    Config,
    GenerationConfig,
    TagLanguageQuota,
    parse_tag_languages,
)
from .exceptions import (
    ConfigError,
    FmtagError,
    FrontmatterError,
    GenerationError,
    MalformedGenerationError,
)
from .types import (
    FENCE,
    FORBIDDEN_FIELDS,
    TAG_MARKER,
    FileTimes,
    GenerationResult,
    Script,
    TagSource,
    Timestamp,
)

__all__ = [
    # Config
    "LANGUAGE_LABELS",
    "Config",
    "GenerationConfig",
    "TagLanguageQuota",
    "parse_tag_languages",
    # Exceptions
    "ConfigError",
    "FmtagError",
    "FrontmatterError",
    "GenerationError",
    "MalformedGenerationError",
    # Types
    "FENCE",
    "FORBIDDEN_FIELDS",
    "TAG_MARKER",
    "FileTimes",
    "GenerationResult",
    "Script",
    "TagSource",
    "Timestamp",
]
