from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Final, Union

UTC: Final = timezone.utc


def now_utc() -> datetime:
    """Return a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime) -> datetime:
    """Attach UTC to naive datetimes; convert aware ones to UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def parse_datetime(value: Union[str, datetime, date]) -> datetime:
    """Parse an ISO-8601 date or datetime into an aware UTC datetime.

    Accepts a trailing 'Z'. Values without an offset are read as UTC,
    plain dates become midnight UTC.

    Raises:
        ValueError: if the string is not ISO-8601.
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    s = str(value).strip()
    if s.endswith("Z") or s.endswith("z"):
        s = s[:-1] + "+00:00"
    return ensure_utc(datetime.fromisoformat(s))


def isoformat_z(dt: datetime, *, microsecond_precision: bool = True) -> str:
    """Convert tz-aware datetime to ISO-8601 string with trailing 'Z'.

    Naive datetimes are rejected to prevent silent timezone bugs.

    Raises:
        ValueError: if dt is naive (tzinfo is None).
    """
    if dt.tzinfo is None:
        raise ValueError("isoformat_z requires a timezone-aware datetime (tzinfo != None)")

    dt_utc = dt.astimezone(UTC)
    if not microsecond_precision:
        dt_utc = dt_utc.replace(microsecond=0)

    s = dt_utc.isoformat()
    if s.endswith("+00:00"):
        return s[:-6] + "Z"
    return s
