"""
Scheduling helpers
Time slots from school operating hours, holiday coverage and planning of the
dated sessions of a multi-day course
"""

from datetime import date, datetime, timedelta
from typing import Callable, Iterable, List, Optional, Union
import logging

from mtadmin.core.config import get_settings
from mtadmin.core.exceptions import ApplicationError
from mtadmin.models.enums import SLOT_RELEASING_SESSION_STATUSES, WeekDay
from mtadmin.schemas.holiday import Holiday

logger = logging.getLogger(__name__)

SLOT_MINUTES = 60

DateLike = Union[date, str]


def parse_time(value: str) -> int:
    """Minutes since midnight for an HH:MM string"""
    hours, minutes = value.split(":")[:2]
    return int(hours) * 60 + int(minutes)


def format_time(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def generate_time_slots(
    start: str,
    end: str,
    lunch_start: Optional[str] = None,
    lunch_end: Optional[str] = None,
) -> List[str]:
    """
    Consecutive 60-minute "HH:MM-HH:MM" slots from start until end.

    A slot overlapping the lunch break is skipped. The last slot may run past end
    when the opening hours are not a whole number of hours.
    """
    current = parse_time(start)
    end_minutes = parse_time(end)
    lunch = None
    if lunch_start and lunch_end:
        lunch = (parse_time(lunch_start), parse_time(lunch_end))

    slots = []
    while current < end_minutes:
        following = current + SLOT_MINUTES
        if lunch is None or not (current < lunch[1] and following > lunch[0]):
            slots.append(f"{format_time(current)}-{format_time(following)}")
        current = following
    return slots


def to_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def is_holiday(
    holidays: Iterable[Holiday],
    day: DateLike,
    *,
    car_id: Optional[int] = None,
    slot: Optional[str] = None,
) -> bool:
    """
    Whether a date (and optionally a car/slot) is blocked by a declared holiday.

    A holiday without a car applies to every car; a holiday listing slots only blocks those.
    Deleted holidays are ignored.
    """
    day = to_date(day)
    for holiday in holidays:
        if holiday.deleted_at or not holiday.start_date:
            continue
        start = to_date(holiday.start_date)
        end = to_date(holiday.end_date) if holiday.end_date else start
        if not start <= day <= end:
            continue
        if holiday.car_id is not None and car_id is not None and holiday.car_id != car_id:
            continue
        if holiday.slots and slot is not None and slot not in holiday.slots:
            continue
        return True
    return False


def occupies_slot(status: Optional[str]) -> bool:
    """Cancelled, no-show, held and superseded sessions leave their slot free"""
    return status not in SLOT_RELEASING_SESSION_STATUSES


def weekday_index(weekly_holiday: Optional[str]) -> Optional[int]:
    """date.weekday() of the school's weekly holiday; unknown values skip nothing"""
    names = [day.value for day in WeekDay]
    value = (weekly_holiday or "").strip().upper()
    return names.index(value) if value in names else None


def plan_session_dates(
    start: DateLike,
    course_days: int,
    *,
    weekly_holiday: Optional[str] = None,
    is_available: Optional[Callable[[date], bool]] = None,
    horizon_days: Optional[int] = None,
) -> List[str]:
    """
    Walk forward from start collecting `course_days` dates.

    The school's weekly holiday and days rejected by `is_available` are skipped.
    Raises ApplicationError when the look-ahead horizon runs out first.
    """
    if course_days <= 0:
        return []
    horizon = horizon_days if horizon_days is not None else get_settings().SESSION_PLANNING_HORIZON_DAYS
    skip_weekday = weekday_index(weekly_holiday)
    current = to_date(start)
    last = current + timedelta(days=horizon)

    planned: List[str] = []
    while len(planned) < course_days:
        if current > last:
            logger.warning(f"Only {len(planned)} of {course_days} dates free within {horizon} days of {start}")
            raise ApplicationError("No available dates found. Please try a different slot or start date.")
        if current.weekday() != skip_weekday and (is_available is None or is_available(current)):
            planned.append(current.isoformat())
        current += timedelta(days=1)
    return planned
