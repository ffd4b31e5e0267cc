"""
Scheduling helpers: time slots, holiday coverage and session date planning
"""

from datetime import date

import pytest

from mtadmin.core.exceptions import ApplicationError
from mtadmin.schemas.holiday import Holiday
from mtadmin.services.scheduling import (
    generate_time_slots, is_holiday, occupies_slot, plan_session_dates, weekday_index,
)


def test_slots_skip_lunch_break():
    slots = generate_time_slots("09:00", "14:00", "12:00", "13:00")
    assert slots == ["09:00-10:00", "10:00-11:00", "11:00-12:00", "13:00-14:00"]


def test_slots_without_lunch():
    assert generate_time_slots("07:00", "09:00") == ["07:00-08:00", "08:00-09:00"]


def test_last_slot_may_run_past_closing():
    assert generate_time_slots("09:00", "10:30") == ["09:00-10:00", "10:00-11:00"]


def test_partial_lunch_overlap_skips_slot():
    slots = generate_time_slots("09:30", "12:30", "12:00", "13:00")
    assert slots == ["09:30-10:30", "10:30-11:30"]


def test_weekday_index():
    assert weekday_index("MONDAY") == 0
    assert weekday_index("sunday") == 6
    assert weekday_index("FUNDAY") is None
    assert weekday_index(None) is None


def test_slot_releasing_statuses():
    assert occupies_slot("PENDING")
    assert occupies_slot("COMPLETED")
    assert not occupies_slot("HOLD")
    assert not occupies_slot("CANCELLED")
    assert not occupies_slot("EDITED")


# Holidays
HOLIDAYS = [
    Holiday(id=1, start_date="2025-01-10", end_date="2025-01-12"),
    Holiday(id=2, start_date="2025-01-20", car_id=4),
    Holiday(id=3, start_date="2025-01-25", slots='["09:00-10:00"]'),
    Holiday(id=4, start_date="2025-01-28", deleted_at="2025-01-01T00:00:00Z"),
]


def test_school_wide_holiday_range():
    assert is_holiday(HOLIDAYS, "2025-01-11")
    assert is_holiday(HOLIDAYS, date(2025, 1, 12), car_id=9, slot="15:00-16:00")
    assert not is_holiday(HOLIDAYS, "2025-01-13")


def test_car_holiday_only_blocks_that_car():
    assert is_holiday(HOLIDAYS, "2025-01-20", car_id=4)
    assert not is_holiday(HOLIDAYS, "2025-01-20", car_id=5)


def test_slot_holiday_only_blocks_listed_slots():
    assert is_holiday(HOLIDAYS, "2025-01-25", slot="09:00-10:00")
    assert not is_holiday(HOLIDAYS, "2025-01-25", slot="10:00-11:00")


def test_deleted_holidays_are_ignored():
    assert not is_holiday(HOLIDAYS, "2025-01-28")


# Planning
def test_plan_skips_weekly_holiday():
    # 2025-01-04 is a Saturday
    planned = plan_session_dates("2025-01-04", 3, weekly_holiday="SUNDAY")
    assert planned == ["2025-01-04", "2025-01-06", "2025-01-07"]


def test_plan_skips_unavailable_days():
    taken = {date(2025, 1, 7)}
    planned = plan_session_dates(date(2025, 1, 6), 2, is_available=lambda day: day not in taken)
    assert planned == ["2025-01-06", "2025-01-08"]


def test_plan_zero_days():
    assert plan_session_dates("2025-01-06", 0) == []


def test_plan_gives_up_after_horizon():
    with pytest.raises(ApplicationError) as exc_info:
        plan_session_dates("2025-01-06", 5, is_available=lambda day: day.day % 2 == 0, horizon_days=3)
    assert exc_info.value.message == "No available dates found. Please try a different slot or start date."
