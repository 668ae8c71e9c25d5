from __future__ import annotations

from decimal import Decimal

import deal
import pytest
from hypothesis import given
from hypothesis import strategies as st

from adbridge.models import ValidationReport
from adbridge.platforms.base import CENTS, MICROS, AgeBucket, check_age_range, dedupe, overlapping_buckets, to_minor_units
from adbridge.platforms.google.targeting import AGE_BUCKETS as GOOGLE_BUCKETS
from adbridge.platforms.tiktok.targeting import AGE_BUCKETS as TIKTOK_BUCKETS

ages = st.integers(min_value=13, max_value=65)
tables = st.sampled_from([GOOGLE_BUCKETS, TIKTOK_BUCKETS])


@given(lo=ages, hi=ages, buckets=tables)
def test_emitted_buckets_all_overlap_the_range(lo, hi, buckets):
    for b in overlapping_buckets(lo, hi, buckets):
        assert b.min <= hi and b.max >= lo


@given(lo=ages, hi=ages, buckets=tables)
def test_every_age_in_range_is_covered(lo, hi, buckets):
    picked = overlapping_buckets(lo, hi, buckets)
    for age in range(lo, hi + 1):
        in_table = [b for b in buckets if b.min <= age <= b.max]
        if in_table:
            assert any(b.min <= age <= b.max for b in picked)


@given(lo=ages, hi=ages, buckets=tables)
def test_buckets_keep_table_order(lo, hi, buckets):
    picked = overlapping_buckets(lo, hi, buckets)
    positions = [list(buckets).index(b) for b in picked]
    assert positions == sorted(positions)


def test_inverted_range_yields_nothing():
    assert overlapping_buckets(50, 20, GOOGLE_BUCKETS) == []


def test_google_25_44_maps_to_two_brackets():
    names = [b.name for b in overlapping_buckets(25, 44, GOOGLE_BUCKETS)]
    assert names == ["AGE_RANGE_25_34", "AGE_RANGE_35_44"]


def test_boundary_touch_counts_as_overlap():
    bucket = AgeBucket("X", 18, 24)
    assert bucket.overlaps(24, 30)
    assert not bucket.overlaps(25, 30)


@given(cents=st.integers(min_value=0, max_value=10**9))
def test_minor_units_exact_for_two_decimal_amounts(cents):
    amount = Decimal(cents) / 100
    assert to_minor_units(amount, CENTS) == cents
    assert to_minor_units(amount, MICROS) == cents * 10_000


def test_minor_units_rounds_half_up():
    assert to_minor_units("10.005", CENTS) == 1001
    assert to_minor_units(0.1, CENTS) == 10


def test_minor_units_rejects_negative_amounts():
    with pytest.raises(deal.PreContractError):
        to_minor_units(-1, CENTS)


def test_dedupe_drops_none_and_repeats():
    assert dedupe([3, None, 1, 3, 2, 1]) == [3, 1, 2]


def test_check_age_range_messages():
    report = ValidationReport()
    check_age_range(report, 10, 70)
    assert "Minimum age must be between 13 and 65" in report.errors
    assert "Maximum age must be between 13 and 65" in report.errors

    report = ValidationReport()
    check_age_range(report, 40, 30)
    assert report.errors == ["Minimum age must be less than maximum age"]
