"""Custom exceptions for fmtag."""


class FmtagError(Exception):
    """Base exception for all fmtag errors."""

    pass


class ConfigError(FmtagError):
    """Configuration value could not be parsed."""

    pass


class FrontmatterError(FmtagError):
    """Frontmatter could not be serialized."""

    pass


class GenerationError(FmtagError):
    """The generation collaborator failed to produce a result."""

    pass


class MalformedGenerationError(GenerationError):
    """Generation payload is not a usable mapping."""

    def __init__(self, reason: str, payload: object = None):
        """Initialize exception with a reason and the offending payload.

        Args:
            reason: Human-readable description of what was wrong.
            payload: The raw payload, kept for diagnostics.
        """
        self.reason = reason
        self.payload = payload
        super().__init__(f"Malformed generation result: {reason}")
