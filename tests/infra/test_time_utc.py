from __future__ import annotations

import pytest
from datetime import date, datetime, timedelta, timezone

from adbridge.infra.time_utc import ensure_utc, isoformat_z, now_utc, parse_datetime


def test_now_utc_is_tz_aware_and_utc():
    dt = now_utc()
    assert dt.tzinfo == timezone.utc


def test_isoformat_z_emits_trailing_z_and_no_offset():
    dt = datetime(2020, 1, 2, 3, 4, 5, 123456, tzinfo=timezone.utc)
    s = isoformat_z(dt, microsecond_precision=True)
    assert s.endswith("Z")
    assert "+00:00" not in s
    assert "2020-01-02T03:04:05" in s


def test_isoformat_z_strips_microseconds_when_requested():
    dt = datetime(2020, 1, 2, 3, 4, 5, 999999, tzinfo=timezone.utc)
    assert isoformat_z(dt, microsecond_precision=False) == "2020-01-02T03:04:05Z"


def test_isoformat_z_rejects_naive_datetime():
    with pytest.raises(ValueError):
        isoformat_z(datetime(2020, 1, 2, 3, 4, 5))


def test_parse_datetime_accepts_z_offsets_and_plain_dates():
    assert parse_datetime("2026-03-04T12:00:00Z") == datetime(2026, 3, 4, 12, tzinfo=timezone.utc)
    assert parse_datetime("2026-03-04T14:00:00+02:00") == datetime(2026, 3, 4, 12, tzinfo=timezone.utc)
    assert parse_datetime("2026-03-04") == datetime(2026, 3, 4, tzinfo=timezone.utc)
    assert parse_datetime(date(2026, 3, 4)) == datetime(2026, 3, 4, tzinfo=timezone.utc)


def test_parse_datetime_rejects_garbage():
    with pytest.raises(ValueError):
        parse_datetime("next tuesday")


def test_ensure_utc_converts_aware_values():
    plus_two = timezone(timedelta(hours=2))
    assert ensure_utc(datetime(2026, 1, 1, 2, tzinfo=plus_two)) == datetime(2026, 1, 1, 0, tzinfo=timezone.utc)
    assert ensure_utc(datetime(2026, 1, 1)).tzinfo == timezone.utc
