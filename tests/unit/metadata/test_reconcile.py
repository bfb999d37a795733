"""Tests for frontmatter reconciliation."""

from datetime import date, datetime, timedelta, timezone

import pytest

from fmtag.core.types import FileTimes, GenerationResult
from fmtag.metadata.reconcile import (
    creation_timestamp,
    format_local_date,
    normalize_date_value,
    parse_date_string,
    reconcile_metadata,
)


@pytest.fixture
def generated() -> GenerationResult:
    return GenerationResult(title="T", summary="S")


class TestFormatLocalDate:
    """Tests for format_local_date."""

    def test_naive_datetime(self):
        assert format_local_date(datetime(2025, 8, 1, 23, 59)) == "2025-08-01"

    def test_date(self):
        assert format_local_date(date(2025, 1, 5)) == "2025-01-05"

    def test_posix_timestamp(self):
        ts = datetime(2025, 3, 9, 12, 0).timestamp()
        assert format_local_date(ts) == "2025-03-09"

    def test_aware_datetime_converted_to_local(self):
        value = datetime(2025, 8, 1, 12, 0, tzinfo=timezone.utc)
        assert format_local_date(value) == value.astimezone().date().isoformat()

    def test_zero_padding(self):
        assert format_local_date(date(987, 2, 3)) == "0987-02-03"


class TestParseDateString:
    """Tests for parse_date_string."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("2025-08-01", date(2025, 8, 1)),
            ("2025-08-01T10:30:00", date(2025, 8, 1)),
            ("2025-08-01 10:30", date(2025, 8, 1)),
            ("2025/08/01", date(2025, 8, 1)),
            ("2025.08.01", date(2025, 8, 1)),
            ("August 1, 2025", date(2025, 8, 1)),
            ("Aug 1, 2025", date(2025, 8, 1)),
            ("1 August 2025", date(2025, 8, 1)),
        ],
    )
    def test_recognized_layouts(self, text, expected):
        assert parse_date_string(text).date() == expected

    def test_utc_suffix(self):
        parsed = parse_date_string("2025-08-01T10:30:00Z")
        assert parsed.tzinfo is not None
        assert parsed.utcoffset() == timedelta(0)

    @pytest.mark.parametrize("text", ["not-a-date", "", "   ", "2025-13-45", "yesterday"])
    def test_unparsable(self, text):
        assert parse_date_string(text) is None


class TestNormalizeDateValue:
    """Tests for normalize_date_value."""

    def test_date_object(self):
        assert normalize_date_value(date(2025, 8, 1)) == "2025-08-01"

    def test_datetime_object(self):
        assert normalize_date_value(datetime(2025, 8, 1, 8, 0)) == "2025-08-01"

    def test_date_string_reformatted(self):
        assert normalize_date_value("2025/8/1") == "2025-08-01"

    def test_datetime_string_same_day(self):
        assert normalize_date_value("2025-08-01T23:30:00") == "2025-08-01"

    def test_unparsable_string_untouched(self):
        assert normalize_date_value("not-a-date") == "not-a-date"

    def test_other_types_untouched(self):
        assert normalize_date_value(20250801) == 20250801
        assert normalize_date_value(["2025-08-01"]) == ["2025-08-01"]


class TestCreationTimestamp:
    """Tests for creation_timestamp fallbacks."""

    def test_prefers_created(self, now, file_times):
        assert creation_timestamp(file_times, now) == file_times.created

    def test_falls_back_to_modified(self, now):
        times = FileTimes(created=None, modified=datetime(2025, 8, 10))
        assert creation_timestamp(times, now) == datetime(2025, 8, 10)

    def test_falls_back_to_now(self, now):
        assert creation_timestamp(FileTimes(), now) == now
        assert creation_timestamp(None, now) == now


class TestReconcileMetadata:
    """Tests for reconcile_metadata."""

    def test_empty_old_metadata(self, generated):
        result = reconcile_metadata(
            {},
            generated,
            ["A"],
            now=datetime(2025, 8, 18),
            file_times=FileTimes(created=datetime(2025, 8, 1)),
        )
        assert result == {
            "title": "T",
            "summary": "S",
            "tags": ["A"],
            "created": "2025-08-01",
            "fm_created": "2025-08-18",
        }

    def test_none_old_metadata(self, generated, now):
        result = reconcile_metadata(None, generated, [], now)
        assert result["tags"] == []
        assert result["created"] == "2025-08-18"

    def test_unparsable_created_untouched(self, generated, now, file_times):
        result = reconcile_metadata({"created": "not-a-date"}, generated, [], now, file_times)
        assert result["created"] == "not-a-date"

    def test_existing_created_normalized(self, generated, now, file_times):
        result = reconcile_metadata({"created": "2024/02/29"}, generated, [], now, file_times)
        assert result["created"] == "2024-02-29"

    def test_yaml_date_created_normalized(self, generated, now, file_times):
        result = reconcile_metadata({"created": date(2024, 2, 29)}, generated, [], now, file_times)
        assert result["created"] == "2024-02-29"

    @pytest.mark.parametrize("empty", [None, ""])
    def test_empty_created_filled(self, generated, now, file_times, empty):
        result = reconcile_metadata({"created": empty}, generated, [], now, file_times)
        assert result["created"] == "2025-08-01"

    def test_created_from_modified_time(self, generated, now):
        times = FileTimes(modified=datetime(2025, 8, 10, 8, 0))
        result = reconcile_metadata({}, generated, [], now, times)
        assert result["created"] == "2025-08-10"

    def test_created_from_posix_timestamp(self, generated, now):
        times = FileTimes(created=datetime(2025, 7, 2, 12, 0).timestamp())
        result = reconcile_metadata({}, generated, [], now, times)
        assert result["created"] == "2025-07-02"

    def test_forbidden_fields_removed(self, generated, now):
        old = {"updated": "x", "last_modified": "y", "path": "z", "keep": 1}
        result = reconcile_metadata(old, generated, [], now)
        assert "updated" not in result
        assert "last_modified" not in result
        assert "path" not in result
        assert result["keep"] == 1

    def test_title_and_summary_overwritten(self, generated, now):
        result = reconcile_metadata({"title": "Old", "summary": "Old"}, generated, [], now)
        assert result["title"] == "T"
        assert result["summary"] == "S"

    def test_missing_generated_fields_keep_old_values(self, now):
        result = reconcile_metadata(
            {"title": "Old", "summary": "Old summary"},
            GenerationResult(title=None, summary="New"),
            [],
            now,
        )
        assert result["title"] == "Old"
        assert result["summary"] == "New"

    def test_tags_overwritten(self, generated, now):
        result = reconcile_metadata({"tags": ["stale"]}, generated, ("fresh",), now)
        assert result["tags"] == ["fresh"]

    def test_fm_created_always_today(self, generated, now):
        result = reconcile_metadata({"fm_created": "2000-01-01"}, generated, [], now)
        assert result["fm_created"] == "2025-08-18"

    def test_unrelated_fields_and_order_preserved(self, generated, now, file_times):
        old = {
            "aliases": ["Alt"],
            "title": "Old",
            "cssclass": "wide",
            "created": "2025-07-04",
            "nested": {"a": [1, 2]},
        }
        result = reconcile_metadata(old, generated, ["x"], now, file_times)
        assert list(result) == [
            "aliases",
            "title",
            "cssclass",
            "created",
            "nested",
            "summary",
            "tags",
            "fm_created",
        ]
        assert result["aliases"] == ["Alt"]
        assert result["nested"] == {"a": [1, 2]}

    def test_old_metadata_not_mutated(self, generated, now):
        old = {"title": "Old", "path": "a.md", "nested": {"k": [1]}}
        result = reconcile_metadata(old, generated, ["x"], now)
        result["nested"]["k"].append(2)
        assert old == {"title": "Old", "path": "a.md", "nested": {"k": [1]}}
