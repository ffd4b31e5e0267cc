"""
Booking Domain Rules
Pure functions over a booking's dates: legal amendment actions, roll-up status,
totals, discount split, paid totals and school profile completeness.
Nothing here talks to the backend.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, ROUND_DOWN
from typing import Any, Dict, Iterable, List, Optional, Sequence

from mtadmin.core.exceptions import AmendmentNotAllowedError
from mtadmin.models.enums import (
    AmendmentAction, BookingDateStatus, BookingRollupStatus, BookingStatus,
    PaymentStatus, SessionStatus,
)
from mtadmin.schemas.amendment import AmendmentRequest, BookingDate

_SESSION_TO_DATE_STATUS = {
    SessionStatus.PENDING.value: BookingDateStatus.SCHEDULED,
    SessionStatus.CONFIRMED.value: BookingDateStatus.SCHEDULED,
    SessionStatus.HOLD.value: BookingDateStatus.SCHEDULED,
    SessionStatus.COMPLETED.value: BookingDateStatus.COMPLETED,
    SessionStatus.CANCELLED.value: BookingDateStatus.CANCELLED,
    SessionStatus.NO_SHOW.value: BookingDateStatus.CANCELLED,
    SessionStatus.EDITED.value: BookingDateStatus.CANCELLED,
}

PROFILE_REQUIRED_FIELDS = (
    "day_start_time",
    "day_end_time",
    "owner_name",
    "bank_name",
    "account_number",
    "ifsc_code",
    "rto_license_number",
)

# Actions that cancel their target dates
CANCELLING_ACTIONS = {
    AmendmentAction.CANCEL_BOOKING.value,
    AmendmentAction.CHANGE_DATE.value,
    AmendmentAction.CAR_BREAKDOWN.value,
    AmendmentAction.CAR_HOLIDAY.value,
}

TWO_PLACES = Decimal("0.01")


def _value(member: Any) -> Any:
    return getattr(member, "value", member)


def to_day(value: Optional[str]) -> str:
    """YYYY-MM-DD part of an ISO date or datetime string"""
    return (value or "")[:10]


# Booking dates
def to_booking_date(session: Any) -> BookingDate:
    """
    Reduce a booking session to a BookingDate.

    PENDING/CONFIRMED are scheduled, HOLD is scheduled and held, COMPLETED is completed,
    CANCELLED/NO_SHOW/EDITED are cancelled. A session without status is scheduled.
    """
    status = _value(session.status) or SessionStatus.PENDING.value
    date_status = _SESSION_TO_DATE_STATUS.get(status, BookingDateStatus.SCHEDULED)
    cancelled = date_status == BookingDateStatus.CANCELLED
    return BookingDate(
        id=session.id,
        date=to_day(session.session_date),
        status=date_status,
        held=status == SessionStatus.HOLD.value,
        cancel_reason=session.internal_notes if cancelled else None,
        cancelled_at=session.deleted_at if cancelled else None,
    )


def booking_dates(sessions: Iterable[Any]) -> List[BookingDate]:
    return [to_booking_date(session) for session in sessions]


def _scheduled(dates: Iterable[BookingDate]) -> List[BookingDate]:
    return [d for d in dates if d.status == BookingDateStatus.SCHEDULED.value]


def rollup_status(dates: Sequence[BookingDate]) -> BookingRollupStatus:
    """
    completed iff every date is completed, cancelled iff every date is cancelled,
    active iff any date is scheduled, partial otherwise.
    A booking without dates is active.
    """
    statuses = {_value(d.status) for d in dates}
    if not statuses or BookingDateStatus.SCHEDULED.value in statuses:
        return BookingRollupStatus.ACTIVE
    if statuses == {BookingDateStatus.COMPLETED.value}:
        return BookingRollupStatus.COMPLETED
    if statuses == {BookingDateStatus.CANCELLED.value}:
        return BookingRollupStatus.CANCELLED
    return BookingRollupStatus.PARTIAL


def rollup_to_booking_status(rollup: BookingRollupStatus, current: Optional[str] = None) -> BookingStatus:
    """Booking status persisted for a roll-up; an active booking keeps PENDING/CONFIRMED"""
    rollup = _value(rollup)
    if rollup in (BookingRollupStatus.COMPLETED.value, BookingRollupStatus.PARTIAL.value):
        return BookingStatus.COMPLETED
    if rollup == BookingRollupStatus.CANCELLED.value:
        return BookingStatus.CANCELLED
    current = _value(current)
    if current in (BookingStatus.PENDING.value, BookingStatus.CONFIRMED.value):
        return BookingStatus(current)
    return BookingStatus.CONFIRMED


# Amendments
def applicable_dates(dates: Sequence[BookingDate], action: AmendmentAction) -> List[BookingDate]:
    """Dates an action may target"""
    action = _value(action)
    scheduled = _scheduled(dates)
    if action == AmendmentAction.CHANGE_DATE.value:
        return [d for d in scheduled if not d.held]
    if action == AmendmentAction.RELEASE_HOLD.value:
        return [d for d in scheduled if d.held]
    return scheduled


def legal_actions(dates: Sequence[BookingDate]) -> List[AmendmentAction]:
    """Actions with at least one applicable date; none once every date is completed"""
    return [action for action in AmendmentAction if applicable_dates(dates, action)]


@dataclass
class AmendmentPlan:
    """A checked amendment: the dates it touches and their replacements, in order"""
    action: AmendmentAction
    reason: str
    targets: List[BookingDate]
    new_dates: List[str] = field(default_factory=list)


def check_amendment(dates: Sequence[BookingDate], request: AmendmentRequest) -> AmendmentPlan:
    """
    Check an amendment against the booking's current dates.

    Raises AmendmentNotAllowedError with a field -> message map when the request is illegal.
    """
    action = _value(request.action)
    reason = (request.reason or "").strip()
    errors: Dict[str, str] = {}

    if not reason:
        errors["reason"] = "A reason is required for every amendment"

    applicable = applicable_dates(dates, action)
    if not applicable:
        errors["action"] = f"{action} is not possible for this booking"
        raise AmendmentNotAllowedError(errors)

    by_id = {d.id: d for d in dates}
    applicable_ids = {d.id for d in applicable}
    if request.session_ids:
        targets = []
        for session_id in request.session_ids:
            if session_id not in by_id:
                errors["sessionIds"] = f"Session {session_id} does not belong to this booking"
                break
            if session_id not in applicable_ids:
                errors["sessionIds"] = f"Session {session_id} cannot be amended with {action}"
                break
            if by_id[session_id] not in targets:
                targets.append(by_id[session_id])
    else:
        targets = applicable

    new_dates = [to_day(d) for d in request.new_dates]
    if action == AmendmentAction.CHANGE_DATE.value and not new_dates:
        errors["newDates"] = "A new date is required to change a booking date"
    elif new_dates and action not in (AmendmentAction.CHANGE_DATE.value, AmendmentAction.CAR_BREAKDOWN.value):
        errors["newDates"] = f"New dates cannot be given for {action}"
    elif new_dates and "sessionIds" not in errors and len(new_dates) != len(targets):
        errors["newDates"] = f"Give one new date for each of the {len(targets)} selected dates"
    elif len(set(new_dates)) != len(new_dates):
        errors["newDates"] = "New dates must be different from each other"
    else:
        taken = {d.date for d in _scheduled(dates)}
        clashes = sorted(set(new_dates) & taken)
        if clashes:
            errors["newDates"] = f"{clashes[0]} is already scheduled for this booking"

    if errors:
        raise AmendmentNotAllowedError(errors)
    return AmendmentPlan(action=AmendmentAction(action), reason=reason, targets=targets, new_dates=new_dates)


def apply_amendment(
    dates: Sequence[BookingDate],
    plan: AmendmentPlan,
    now: Optional[datetime] = None,
) -> List[BookingDate]:
    """
    Dates after a checked amendment. Replacement dates are appended unsaved (id 0).
    """
    now = now or datetime.now(timezone.utc)
    target_ids = {d.id for d in plan.targets}
    action = _value(plan.action)
    result = []
    for d in dates:
        if d.id not in target_ids:
            result.append(d)
        elif action in CANCELLING_ACTIONS:
            result.append(d.model_copy(update={
                "status": BookingDateStatus.CANCELLED.value,
                "held": False,
                "cancel_reason": plan.reason,
                "cancelled_at": now.isoformat(),
            }))
        else:
            result.append(d.model_copy(update={"held": False}))
    for new_date in plan.new_dates:
        result.append(BookingDate(id=0, date=new_date, status=BookingDateStatus.SCHEDULED))
    return result


# Money
def to_decimal(value: Any) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    return Decimal(str(value))


def booking_total(
    course_price: Any,
    service_prices: Iterable[Any] = (),
    booking_discount: Any = 0,
    service_discount: Any = 0,
) -> Decimal:
    """Course price plus attached services, minus both discounts, floored at zero"""
    total = to_decimal(course_price) + sum((to_decimal(p) for p in service_prices), Decimal("0"))
    total -= to_decimal(booking_discount) + to_decimal(service_discount)
    return max(total, Decimal("0"))


def split_discount(discount: Any, count: int) -> List[Decimal]:
    """
    Equal share of a service discount per attached service.
    Shares are rounded down to paise; the last share takes the remainder so the sum is exact.
    """
    if count <= 0:
        return []
    total = to_decimal(discount)
    share = (total / count).quantize(TWO_PLACES, rounding=ROUND_DOWN)
    shares = [share] * count
    shares[-1] = total - share * (count - 1)
    return shares


def total_paid(payments: Iterable[Any]) -> Decimal:
    """Sum of payment amounts whose status is COMPLETED"""
    return sum(
        (to_decimal(p.amount) for p in payments if _value(p.status) == PaymentStatus.COMPLETED.value),
        Decimal("0"),
    )


# School profile
def missing_profile_fields(school: Any) -> List[str]:
    missing = []
    for name in PROFILE_REQUIRED_FIELDS:
        value = getattr(school, name, None)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(name)
    return missing


def is_profile_complete(school: Any) -> bool:
    """Operating hours, owner, bank and RTO license must all be filled in"""
    return not missing_profile_fields(school)
