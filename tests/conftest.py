"""Pytest configuration and fixtures."""

from datetime import datetime
from pathlib import Path

import pytest

from fmtag.core.types import FileTimes


@pytest.fixture
def now() -> datetime:
    """Fixed naive local time used as the processing clock."""
    return datetime(2025, 8, 18, 9, 30)


@pytest.fixture
def file_times() -> FileTimes:
    """File created on 2025-08-01 and modified on 2025-08-10 (local time)."""
    return FileTimes(
        created=datetime(2025, 8, 1, 12, 0),
        modified=datetime(2025, 8, 10, 12, 0),
    )


@pytest.fixture
def sample_note() -> str:
    """A note with frontmatter, inline tags and a heading."""
    return """---
title: Old Title
author: Jane
tags:
  - history
  - civil-rights
updated: 2024-01-01
created: 2025-07-04
---

# Reconstruction

The period after the war reshaped the Constitution. #history #Law

Related: #civil_rights #헌법
"""


@pytest.fixture
def generation_payload() -> dict:
    """A well-formed generation payload."""
    return {
        "title": "Reconstruction Era",
        "summary": "How the postwar amendments changed the Constitution.",
        "tags_by_lang": {
            "en": ["civil rights", "US Constitution", "reconstruction"],
            "ko": ["재건 시대"],
        },
    }


@pytest.fixture
def note_file(tmp_path: Path, sample_note: str) -> Path:
    """Sample note written to a temporary file."""
    path = tmp_path / "note.md"
    path.write_text(sample_note, encoding="utf-8")
    return path
