from datetime import date, datetime, timedelta, timezone

import pytest
from src.utils.datetime_utils import (
    TimeRange,
    format_compact,
    format_date_only,
    format_display,
    format_iso_seconds,
    format_iso_utc,
    trailing_window,
)

NOW = datetime(2024, 5, 31, 12, 30, 45, tzinfo=timezone.utc)


def test_trailing_window_ends_now_by_default():
    window = trailing_window(30, now=NOW)
    assert window.end == NOW
    assert window.start == datetime(2024, 5, 1, 12, 30, 45, tzinfo=timezone.utc)


def test_trailing_window_end_offset():
    window = trailing_window(7, now=NOW, end_offset=timedelta(minutes=1))
    assert format_iso_utc(window.end) == "2024-05-31T12:29:45Z"
    assert format_iso_utc(window.start) == "2024-05-24T12:29:45Z"


def test_naive_now_is_taken_as_utc():
    window = trailing_window(1, now=datetime(2024, 1, 2, 0, 0, 0))
    assert window.end.tzinfo == timezone.utc
    assert format_iso_seconds(window.start) == "2024-01-01T00:00:00"


def test_formats_convert_offsets_to_utc():
    bogota = timezone(timedelta(hours=-5))
    local = datetime(2024, 5, 31, 22, 0, 0, tzinfo=bogota)
    assert format_iso_seconds(local) == "2024-06-01T03:00:00"
    assert format_iso_utc(local) == "2024-06-01T03:00:00Z"
    assert format_date_only(local) == "2024-06-01"


def test_compact_and_date_only_formats():
    assert format_compact(datetime(2023, 1, 1, 0, 0, 0)) == "20230101000000"
    assert format_compact(datetime(2023, 12, 31, 23, 59, 59)) == "20231231235959"
    assert format_date_only(date(2023, 12, 31)) == "2023-12-31"


def test_format_display():
    assert format_display(NOW) == "2024-05-31 12:30"
    assert format_display(NOW, "%Y-%m-%d") == "2024-05-31"
    assert format_display(None) == ""


def test_time_range_rejects_inverted_bounds():
    with pytest.raises(ValueError):
        TimeRange(start=NOW, end=NOW - timedelta(seconds=1))


def test_compact_format_converts_offsets_to_utc():
    bogota = timezone(timedelta(hours=-5))
    assert format_compact(datetime(2023, 1, 1, 0, 0, 0, tzinfo=bogota)) == "20230101050000"
    assert format_compact(datetime(2023, 1, 1, 0, 0, 0, tzinfo=timezone.utc)) == "20230101000000"
