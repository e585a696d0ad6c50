import datetime

import pytest

from storefront.core.dates import (
    business_today,
    day_bounds,
    local_midnight,
    next_daily_run,
    parse_time,
    window_bounds,
)

UTC = datetime.timezone.utc


def test_local_midnight_is_expressed_in_utc():
    # Buenos Aires is UTC-3 all year round.
    assert local_midnight(datetime.date(2024, 5, 10)) == datetime.datetime(2024, 5, 10, 3, tzinfo=UTC)


def test_day_bounds_are_half_open_local_days():
    start, end = day_bounds(datetime.date(2024, 5, 10))
    assert start == datetime.datetime(2024, 5, 10, 3, tzinfo=UTC)
    assert end == datetime.datetime(2024, 5, 11, 3, tzinfo=UTC)


def test_business_today_uses_business_timezone():
    # 02:00 UTC is still the previous evening in Buenos Aires.
    now = datetime.datetime(2024, 5, 10, 2, 0, tzinfo=UTC)
    assert business_today(now) == datetime.date(2024, 5, 9)


def test_window_bounds_cover_trailing_days():
    start, end = window_bounds(datetime.date(2024, 5, 10), 3)
    assert start == local_midnight(datetime.date(2024, 5, 8))
    assert end == local_midnight(datetime.date(2024, 5, 11))


def test_window_bounds_single_day_matches_day_bounds():
    assert window_bounds(datetime.date(2024, 5, 10), 1) == day_bounds(datetime.date(2024, 5, 10))


def test_window_bounds_rejects_empty_window():
    with pytest.raises(ValueError):
        window_bounds(datetime.date(2024, 5, 10), 0)


@pytest.mark.parametrize(
    "value, expected",
    [("23:59", datetime.time(23, 59)), ("18:01:30", datetime.time(18, 1, 30)), (" 07:05 ", datetime.time(7, 5))],
)
def test_parse_time(value, expected):
    assert parse_time(value) == expected


def test_parse_time_requires_minutes():
    with pytest.raises(ValueError):
        parse_time("23")


def test_next_daily_run_later_today():
    now = datetime.datetime(2024, 5, 10, 12, 0, tzinfo=UTC)  # 09:00 local
    run_at = next_daily_run(datetime.time(23, 59), now=now)
    assert run_at.astimezone(UTC) == datetime.datetime(2024, 5, 11, 2, 59, tzinfo=UTC)


def test_next_daily_run_rolls_over_to_tomorrow():
    now = datetime.datetime(2024, 5, 11, 3, 0, tzinfo=UTC)  # 00:00 local on the 11th
    run_at = next_daily_run(datetime.time(0, 0), now=now)
    assert run_at.astimezone(UTC) == datetime.datetime(2024, 5, 12, 3, 0, tzinfo=UTC)
