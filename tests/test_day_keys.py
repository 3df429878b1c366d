from datetime import date, datetime, timedelta, timezone

import pytest

from app.services.day_keys import (
    month_bounds,
    normalize,
    parse_day,
    parse_timestamp,
    same_day,
    to_storage,
)
from app.utils.errors import InvalidTimestampError, ValidationError


def test_normalize_converts_offset_to_utc_day():
    # 22:00 at UTC-5 is 03:00 next day in UTC
    local = datetime(2024, 3, 5, 22, 0, tzinfo=timezone(timedelta(hours=-5)))
    assert normalize(local) == date(2024, 3, 6)


def test_normalize_treats_naive_as_utc():
    assert normalize(datetime(2024, 3, 5, 23, 59, 59)) == date(2024, 3, 5)


def test_normalize_passes_dates_through():
    assert normalize(date(2024, 3, 5)) == date(2024, 3, 5)


def test_same_day():
    assert same_day(datetime(2024, 3, 5, 0, 0), datetime(2024, 3, 5, 23, 0, tzinfo=timezone.utc))
    assert not same_day(datetime(2024, 3, 5), date(2024, 3, 6))


def test_to_storage_is_naive_midnight():
    stored = to_storage(datetime(2024, 3, 5, 18, 45, tzinfo=timezone.utc))
    assert stored == datetime(2024, 3, 5)
    assert stored.tzinfo is None


def test_parse_timestamp_variants():
    assert normalize(parse_timestamp("2024-03-05")) == date(2024, 3, 5)
    assert normalize(parse_timestamp("2024-03-05T09:00:00Z")) == date(2024, 3, 5)
    assert normalize(parse_timestamp("2024-03-05T01:00:00+02:00")) == date(2024, 3, 4)


def test_parse_timestamp_restores_plus_decoded_as_space():
    parsed = parse_timestamp("2024-03-05T01:00:00 02:00")
    assert parsed == parse_timestamp("2024-03-05T01:00:00+02:00")
    assert normalize(parsed) == date(2024, 3, 4)
    assert parse_timestamp("2024-03-05 10:00:00") == datetime(2024, 3, 5, 10, 0)


def test_parse_timestamp_missing_is_none():
    assert parse_timestamp(None) is None
    assert parse_timestamp("  ") is None


def test_parse_timestamp_rejects_garbage():
    with pytest.raises(InvalidTimestampError):
        parse_timestamp("yesterday")


def test_parse_day_is_strict():
    assert parse_day("2024-02-29") == date(2024, 2, 29)
    with pytest.raises(ValidationError):
        parse_day("2023-02-29")
    with pytest.raises(ValidationError):
        parse_day("not-a-date")


def test_month_bounds():
    assert month_bounds(2024, 3) == (date(2024, 3, 1), date(2024, 4, 1))
    assert month_bounds(2024, 12) == (date(2024, 12, 1), date(2025, 1, 1))
    with pytest.raises(ValidationError):
        month_bounds(2024, 13)
