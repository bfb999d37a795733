"""Tests for configuration loading."""

import pytest

from fmtag.core.config import Config, TagLanguageQuota, parse_tag_languages
from fmtag.core.exceptions import ConfigError


class TestConfigDefaults:
    """Tests for default configuration values."""

    def test_default_languages(self):
        config = Config()
        assert config.quotas == {"en": 10}

    def test_default_generation(self):
        config = Config()
        assert config.generation.api_base == "https://api.openai.com/v1"
        assert config.generation.model == "gpt-4o-mini"
        assert config.generation.max_body_chars == 40000

    def test_quota_label(self):
        assert TagLanguageQuota("ko", 3).label == "한국어"
        assert TagLanguageQuota("xx", 3).label == "xx"


class TestParseTagLanguages:
    """Tests for parse_tag_languages."""

    def test_parses_entries_in_order(self):
        quotas = parse_tag_languages("en:10, ko:5")
        assert [(q.code, q.max) for q in quotas] == [("en", 10), ("ko", 5)]

    def test_code_without_max_uses_default(self):
        assert parse_tag_languages("ja")[0].max == 5

    def test_negative_clamped(self):
        assert parse_tag_languages("en:-3")[0].max == 0

    def test_duplicate_keeps_last(self):
        quotas = parse_tag_languages("en:1,ko:2,en:7")
        assert [(q.code, q.max) for q in quotas] == [("en", 7), ("ko", 2)]

    def test_blank_entries_skipped(self):
        assert [q.code for q in parse_tag_languages("en:1,, ")] == ["en"]

    def test_invalid_count(self):
        with pytest.raises(ConfigError):
            parse_tag_languages("en:many")

    def test_missing_code(self):
        with pytest.raises(ConfigError):
            parse_tag_languages(":3")


class TestConfigFromEnv:
    """Tests for Config.from_env."""

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("FMTAG_TAG_LANGS", "en:3,ko:2")
        monkeypatch.setenv("FMTAG_API_BASE", "http://localhost:1234/v1")
        monkeypatch.setenv("FMTAG_API_KEY", "sk-test")
        monkeypatch.setenv("FMTAG_MODEL", "gpt-4o")
        monkeypatch.setenv("FMTAG_MAX_BODY_CHARS", "1000")

        config = Config.from_env()

        assert config.quotas == {"en": 3, "ko": 2}
        assert config.generation.api_base == "http://localhost:1234/v1"
        assert config.generation.api_key == "sk-test"
        assert config.generation.model == "gpt-4o"
        assert config.generation.max_body_chars == 1000

    def test_defaults_without_environment(self, monkeypatch):
        for name in ("FMTAG_TAG_LANGS", "FMTAG_API_BASE", "FMTAG_API_KEY", "FMTAG_MODEL", "FMTAG_MAX_BODY_CHARS"):
            monkeypatch.delenv(name, raising=False)
        assert Config.from_env() == Config()

    def test_invalid_max_body_chars(self, monkeypatch):
        monkeypatch.setenv("FMTAG_MAX_BODY_CHARS", "lots")
        with pytest.raises(ConfigError):
            Config.from_env()
