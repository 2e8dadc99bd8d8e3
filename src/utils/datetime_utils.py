from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union

ISO_SECONDS_FORMAT = "%Y-%m-%dT%H:%M:%S"
ISO_UTC_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
DATE_ONLY_FORMAT = "%Y-%m-%d"
COMPACT_FORMAT = "%Y%m%d%H%M%S"
DISPLAY_FORMAT = "%Y-%m-%d %H:%M"


@dataclass(frozen=True)
class TimeRange:
    """Closed interval used to bound a single query."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError("TimeRange start must not be later than end")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def trailing_window(
    days: int,
    *,
    now: Optional[datetime] = None,
    end_offset: timedelta = timedelta(0),
) -> TimeRange:
    """
    Return the range ``[end - days, end]`` where ``end = now - end_offset``.

    ``now`` defaults to the current UTC time; naive values are taken as UTC.
    """
    end = _as_utc(now or utc_now()) - end_offset
    return TimeRange(start=end - timedelta(days=days), end=end)


def format_iso_seconds(dt: datetime) -> str:
    """``YYYY-MM-DDTHH:MM:SS`` in UTC, without offset suffix."""
    return _as_utc(dt).strftime(ISO_SECONDS_FORMAT)


def format_iso_utc(dt: datetime) -> str:
    """``YYYY-MM-DDTHH:MM:SSZ``."""
    return _as_utc(dt).strftime(ISO_UTC_FORMAT)


def format_date_only(value: Union[date, datetime]) -> str:
    if isinstance(value, datetime):
        value = _as_utc(value)
    return value.strftime(DATE_ONLY_FORMAT)


def format_compact(dt: datetime) -> str:
    """``YYYYMMDDHHMMSS`` in UTC; naive values are written as-is."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.strftime(COMPACT_FORMAT)


def format_display(value: Optional[Union[date, datetime]], fmt: str = DISPLAY_FORMAT) -> str:
    """Format a timestamp for console output; ``None`` yields an empty string."""
    if value is None:
        return ""
    return value.strftime(fmt)
