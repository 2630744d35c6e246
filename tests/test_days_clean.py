from datetime import datetime, timedelta, timezone

import pytest

from app.utils.datetime_utils import (
    QuitDateParseError,
    days_clean,
    days_clean_or_none,
    format_quit_date,
    parse_quit_date,
)

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def test_quit_day_itself_is_day_one():
    assert days_clean(format_quit_date(NOW), NOW) == 1


def test_exactly_one_day_ago_is_day_two():
    assert days_clean(format_quit_date(NOW - timedelta(hours=24)), NOW) == 2


def test_partial_day_does_not_round_up():
    assert days_clean(format_quit_date(NOW - timedelta(hours=23, minutes=59)), NOW) == 1
    assert days_clean(format_quit_date(NOW - timedelta(days=9, hours=23)), NOW) == 10


def test_date_only_and_offset_forms():
    assert days_clean("2025-06-01", NOW) == 1
    assert days_clean("2025-05-31T12:00:00Z", NOW) == 2
    assert days_clean("2025-06-01T14:00:00+02:00", NOW) == 1
    assert days_clean("2025-05-22T12:00:00.123456", NOW) == 10


def test_future_quit_date_is_not_positive():
    assert days_clean(format_quit_date(NOW + timedelta(hours=12)), NOW) == 0
    assert days_clean(format_quit_date(NOW + timedelta(days=3)), NOW) == -2


def test_naive_now_is_treated_as_utc():
    naive_now = NOW.replace(tzinfo=None)
    assert days_clean("2025-05-31T12:00:00Z", naive_now) == 2


@pytest.mark.parametrize(
    "raw",
    [
        "not-a-date", "", "   ", "2025-13-01", "yesterday", None, 12345,
        "0001-01-01T00:00:00+05:00", "9999-12-31T23:00:00-05:00",
    ],
)
def test_malformed_quit_date_raises(raw):
    with pytest.raises(QuitDateParseError):
        parse_quit_date(raw)


def test_malformed_quit_date_in_days_clean_raises():
    with pytest.raises(QuitDateParseError):
        days_clean("not-a-date", NOW)


def test_storage_boundary_treats_bad_dates_as_unset():
    assert days_clean_or_none(None, NOW) is None
    assert days_clean_or_none("not-a-date", NOW) is None
    assert days_clean_or_none("2025-05-31T12:00:00Z", NOW) == 2


def test_format_quit_date_is_utc_with_z():
    local = datetime(2025, 6, 1, 14, 30, 15, 999, tzinfo=timezone(timedelta(hours=2)))
    assert format_quit_date(local) == "2025-06-01T12:30:15Z"


def test_out_of_range_offsets_are_treated_as_unset():
    assert days_clean_or_none("0001-01-01T00:00:00+05:00", NOW) is None
    assert days_clean_or_none("9999-12-31T23:00:00-05:00", NOW) is None
