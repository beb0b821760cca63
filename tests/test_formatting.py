"""
Tests for formatting and parsing utilities.
"""

from datetime import datetime, timezone

import pytest

from autosaver.core.formatting import (
    check_filename,
    crop_to_minutes,
    format_summary,
    parse_timestamp,
    short_id,
)


class TestCheckFilename:
    """Tests for check_filename() function."""

    def test_uuid_unchanged(self):
        name = "3f2b8c1e-4a5d-4e6f-8a9b-0c1d2e3f4a5b"
        assert check_filename(name) == name

    def test_distinct_ids_stay_distinct(self):
        assert check_filename("a:b") != check_filename("a-b")

    @pytest.mark.parametrize("name", ["../x", "a/b", "a\\b", "/etc/passwd"])
    def test_path_separators_rejected(self, name):
        with pytest.raises(ValueError):
            check_filename(name)

    @pytest.mark.parametrize("name", ["", ".", ".."])
    def test_not_a_name(self, name):
        with pytest.raises(ValueError):
            check_filename(name)

    def test_control_characters_rejected(self):
        with pytest.raises(ValueError):
            check_filename("g1\x00")


class TestShortId:
    """Tests for short_id() function."""

    def test_first_segment(self):
        assert short_id("3f2b8c1e-4a5d-4e6f") == "3f2b8c1e"

    def test_no_dashes(self):
        assert short_id("abcdef") == "abcdef"

    def test_none(self):
        assert short_id(None) == "none"


class TestParseTimestamp:
    """Tests for parse_timestamp() function."""

    def test_zulu(self):
        assert parse_timestamp("2024-05-01T12:00:00Z") == datetime(2024, 5, 1, 12, tzinfo=timezone.utc)

    def test_offset(self):
        assert parse_timestamp("2024-05-01T14:00:00+02:00") == parse_timestamp("2024-05-01T12:00:00Z")

    def test_long_fraction_truncated(self):
        parsed = parse_timestamp("2024-05-01T12:00:00.1234567Z")
        assert parsed.microsecond == 123456

    def test_short_fraction_padded(self):
        assert parse_timestamp("2024-05-01T12:00:00.5Z").microsecond == 500000

    def test_naive_is_utc(self):
        assert parse_timestamp("2024-05-01T12:00:00").tzinfo == timezone.utc

    def test_orders_by_instant(self):
        earlier = parse_timestamp("2024-05-01T13:00:00+02:00")
        later = parse_timestamp("2024-05-01T12:00:00Z")
        assert earlier < later

    @pytest.mark.parametrize("value", ["", "yesterday", None, 12345])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_timestamp(value)


class TestCropToMinutes:
    """Tests for crop_to_minutes() function."""

    def test_crop(self):
        assert crop_to_minutes("2024-05-01T12:34:56.789Z") == "2024-05-01 12:34"


class TestFormatSummary:
    """Tests for format_summary() function."""

    def test_saved_only(self):
        assert format_summary(3, 0, 0) == "3 saved"

    def test_all_counts(self):
        assert format_summary(2, 1, 4) == "2 saved, 1 skipped, 4 failed"

    def test_nothing(self):
        assert format_summary(0, 0, 0) == "0 saved"
