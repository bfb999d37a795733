"""Configuration management for fmtag."""

import os
from dataclasses import dataclass, field

from .exceptions import ConfigError

LANGUAGE_LABELS: dict[str, str] = {
    "en": "English",
    "ko": "한국어",
    "ja": "日本語",
    "zh": "中文",
    "es": "Español",
    "de": "Deutsch",
    "fr": "Français",
}


@dataclass
class TagLanguageQuota:
    """Maximum number of generated tags for one language."""

    code: str
    max: int = 5

    @property
    def label(self) -> str:
        """Display label for the language, falling back to its code."""
        return LANGUAGE_LABELS.get(self.code, self.code)


def _default_tag_languages() -> list[TagLanguageQuota]:
    return [TagLanguageQuota(code="en", max=10)]


@dataclass
class GenerationConfig:
    """Settings handed to the text-generation collaborator."""

    api_base: str = "https://api.openai.com/v1"
    model: str = "gpt-4o-mini"
    api_key: str = ""
    temperature: float = 0.2
    # Body length sent for generation, in characters
    max_body_chars: int = 40000


@dataclass
class Config:
    """Main application configuration."""

    tag_languages: list[TagLanguageQuota] = field(default_factory=_default_tag_languages)
    generation: GenerationConfig = field(default_factory=GenerationConfig)

    @property
    def quotas(self) -> dict[str, int]:
        """Language code to maximum tag count, in configured order."""
        return {entry.code: entry.max for entry in self.tag_languages}

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        config = cls()

        if langs := os.environ.get("FMTAG_TAG_LANGS"):
            config.tag_languages = parse_tag_languages(langs)

        if api_base := os.environ.get("FMTAG_API_BASE"):
            config.generation.api_base = api_base

        if api_key := os.environ.get("FMTAG_API_KEY"):
            config.generation.api_key = api_key

        if model := os.environ.get("FMTAG_MODEL"):
            config.generation.model = model

        if max_chars := os.environ.get("FMTAG_MAX_BODY_CHARS"):
            try:
                config.generation.max_body_chars = int(max_chars)
            except ValueError as e:
                raise ConfigError(f"FMTAG_MAX_BODY_CHARS must be an integer: {max_chars!r}") from e

        return config


def parse_tag_languages(text: str) -> list[TagLanguageQuota]:
    """Parse a ``code:max`` list such as ``"en:10,ko:5"``.

    A code given without a maximum gets the default of 5. Negative maxima
    are clamped to 0 and a repeated code keeps its last value.

    Args:
        text: Comma-separated language entries.

    Returns:
        Quotas in first-seen order of their codes.

    Raises:
        ConfigError: If an entry has no code or its maximum is not an integer.
    """
    quotas: dict[str, int] = {}
    for entry in text.split(","):
        entry = entry.strip()
        if not entry:
            continue
        code, sep, max_text = entry.partition(":")
        code = code.strip()
        if not code:
            raise ConfigError(f"Missing language code in {entry!r}")
        if not sep:
            quotas[code] = TagLanguageQuota(code=code).max
            continue
        try:
            quotas[code] = max(0, int(max_text.strip()))
        except ValueError as e:
            raise ConfigError(f"Invalid tag count for {code!r}: {max_text!r}") from e
    return [TagLanguageQuota(code=code, max=count) for code, count in quotas.items()]
