"""Tests for datetime helpers."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from autoplanner.utils.datetime_utils import format_interval, to_local_naive


class TestToLocalNaive:
    def test_none(self):
        assert to_local_naive(None) is None

    def test_naive_is_unchanged(self):
        value = datetime(2024, 6, 3, 9, 30)
        assert to_local_naive(value) == value

    def test_iso_string(self):
        assert to_local_naive("2024-06-03T09:30:00") == datetime(2024, 6, 3, 9, 30)

    def test_date_becomes_midnight(self):
        assert to_local_naive(date(2024, 6, 3)) == datetime(2024, 6, 3, 0, 0)

    def test_aware_is_converted_to_local(self):
        value = datetime(2024, 6, 3, 9, 30, tzinfo=timezone(timedelta(hours=2)))

        result = to_local_naive(value)

        assert result.tzinfo is None
        assert result == value.astimezone().replace(tzinfo=None)

    def test_invalid_string(self):
        with pytest.raises(ValueError):
            to_local_naive("tomorrow")


class TestFormatInterval:
    def test_same_day(self):
        result = format_interval(datetime(2024, 6, 3, 9, 30), datetime(2024, 6, 3, 11, 0))
        assert result == "2024-06-03 09:30 → 11:00"

    def test_across_days(self):
        result = format_interval(datetime(2024, 6, 3, 16, 30), datetime(2024, 6, 4, 9, 30))
        assert result == "2024-06-03 16:30 → 2024-06-04 09:30"

    def test_missing_bound(self):
        assert format_interval(None, datetime(2024, 6, 3, 9, 0)) == "-"
