from datetime import date, datetime, timedelta, timezone

import pytest

from habit_tracker.dates import day_boundary, parse_date, today, weekday_of
from habit_tracker.errors import ValidationError


def test_day_boundary_drops_time_of_day():
    assert day_boundary(datetime(2023, 1, 10, 17, 45, 12, 999)) == datetime(2023, 1, 10)


def test_day_boundary_accepts_plain_date():
    assert day_boundary(date(2023, 1, 10)) == datetime(2023, 1, 10)


def test_day_boundary_converts_aware_datetimes_to_utc():
    # 23:30 at UTC-3 is already the next day in UTC
    local = datetime(2023, 1, 10, 23, 30, tzinfo=timezone(timedelta(hours=-3)))
    assert day_boundary(local) == datetime(2023, 1, 11)
    assert day_boundary(local).tzinfo is None


def test_day_boundary_rejects_other_types():
    with pytest.raises(TypeError):
        day_boundary("2023-01-10")


@pytest.mark.parametrize("value, expected", [
    (date(2023, 1, 1), 0),    # Sunday
    (date(2023, 1, 2), 1),    # Monday
    (date(2023, 1, 4), 3),    # Wednesday
    (date(2023, 1, 7), 6),    # Saturday
    (datetime(2023, 1, 7, 23, 59), 6),
])
def test_weekday_of_is_sunday_based(value, expected):
    assert weekday_of(value) == expected


def test_weekday_uses_the_same_frame_as_day_boundary():
    late_saturday = datetime(2023, 1, 7, 22, 0, tzinfo=timezone(timedelta(hours=-5)))
    assert weekday_of(late_saturday) == 0


def test_today_is_truncated():
    now = datetime(2023, 1, 2, 8, 15, tzinfo=timezone.utc)
    assert today(now) == datetime(2023, 1, 2)
    assert today().time() == datetime.min.time()


@pytest.mark.parametrize("raw", ["2023-01-10", "2023-01-10T15:20:00", "2023-01-10T03:00:00Z"])
def test_parse_date_accepts_iso_strings(raw):
    assert parse_date(raw) == datetime(2023, 1, 10)


@pytest.mark.parametrize("raw", ["", "yesterday", "2023-13-01", None])
def test_parse_date_rejects_garbage(raw):
    with pytest.raises(ValidationError):
        parse_date(raw)
