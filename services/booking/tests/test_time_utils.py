from datetime import date, datetime, timezone

import pytest

from app.core.exceptions import ValidationException
from app.services.time_utils import (
    current_instant_in_zone,
    format_hhmm,
    get_timezone,
    local_interval_to_utc,
    local_to_utc,
    minutes_of,
    parse_hhmm,
    today_date_string,
    weekday_of,
)


def test_weekday_of_calendar_date_keeps_its_own_weekday():
    assert weekday_of(date(2030, 1, 7), "Pacific/Auckland") == "Monday"
    assert weekday_of(date(2030, 1, 7), "America/Los_Angeles") == "Monday"


def test_weekday_of_instant_is_evaluated_in_zone():
    instant = datetime(2030, 1, 7, 2, 0, tzinfo=timezone.utc)

    assert weekday_of(instant, "UTC") == "Monday"
    assert weekday_of(instant, "America/New_York") == "Sunday"


def test_today_date_string_near_midnight():
    now = datetime(2030, 1, 7, 3, 0, tzinfo=timezone.utc)

    assert today_date_string("UTC", now) == "2030-01-07"
    assert today_date_string("America/Los_Angeles", now) == "2030-01-06"
    assert today_date_string("Asia/Tokyo", now) == "2030-01-07"


def test_current_instant_is_zone_independent():
    now = datetime(2030, 1, 7, 3, 0, tzinfo=timezone.utc)

    assert current_instant_in_zone("Asia/Tokyo", now) == now
    assert current_instant_in_zone("UTC", now).tzinfo is not None


@pytest.mark.parametrize("name", ["", None, "Mars/Olympus_Mons"])
def test_get_timezone_rejects_missing_and_unknown(name):
    with pytest.raises(ValidationException):
        get_timezone(name)


def test_local_to_utc_follows_daylight_saving():
    winter = local_to_utc(date(2030, 1, 7), "09:00", "America/New_York")
    summer = local_to_utc(date(2030, 7, 1), "09:00", "America/New_York")

    assert winter == datetime(2030, 1, 7, 14, 0, tzinfo=timezone.utc)
    assert summer == datetime(2030, 7, 1, 13, 0, tzinfo=timezone.utc)


def test_local_to_utc_takes_first_occurrence_when_clocks_fall_back():
    # 01:30 happens twice in New York on 2030-11-03; the EDT one comes first.
    assert local_to_utc(date(2030, 11, 3), "01:30", "America/New_York") == datetime(
        2030, 11, 3, 5, 30, tzinfo=timezone.utc
    )


def test_local_to_utc_rejects_time_skipped_by_spring_forward():
    with pytest.raises(ValidationException, match="does not exist"):
        local_to_utc(date(2030, 3, 10), "02:30", "America/New_York")


def test_local_interval_rolls_end_to_next_day():
    start, end = local_interval_to_utc(date(2030, 1, 7), "23:00", "00:00", "UTC")

    assert start == datetime(2030, 1, 7, 23, 0, tzinfo=timezone.utc)
    assert end == datetime(2030, 1, 8, 0, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", ["24:00", "9:00", "09:60", "0900", ""])
def test_parse_hhmm_rejects_malformed_values(value):
    with pytest.raises(ValidationException):
        parse_hhmm(value)


def test_minutes_and_format_are_inverse():
    assert minutes_of("09:30") == 570
    assert format_hhmm(570) == "09:30"
    assert format_hhmm(0) == "00:00"
