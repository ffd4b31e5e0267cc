"""
Booking domain rules: date roll-up, legal amendments, totals and profile completeness
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from mtadmin.core.exceptions import AmendmentNotAllowedError
from mtadmin.models.enums import AmendmentAction, BookingRollupStatus, BookingStatus
from mtadmin.schemas.amendment import AmendmentRequest, BookingDate
from mtadmin.schemas.booking import BookingSession
from mtadmin.schemas.payment import Payment
from mtadmin.schemas.school import School
from mtadmin.services import booking_rules as rules


def d(id, day, status="scheduled", held=False):
    return BookingDate(id=id, date=day, status=status, held=held)


def request(action, reason="Customer request", session_ids=(), new_dates=()):
    return AmendmentRequest(
        booking_id=1,
        action=action,
        reason=reason,
        session_ids=list(session_ids),
        new_dates=list(new_dates),
    )


# Booking dates
@pytest.mark.parametrize("status, expected, held", [
    ("PENDING", "scheduled", False),
    ("CONFIRMED", "scheduled", False),
    ("HOLD", "scheduled", True),
    ("COMPLETED", "completed", False),
    ("CANCELLED", "cancelled", False),
    ("NO_SHOW", "cancelled", False),
    ("EDITED", "cancelled", False),
    (None, "scheduled", False),
])
def test_session_status_to_date_status(status, expected, held):
    session = BookingSession(id=5, session_date="2025-01-06T00:00:00.000Z", status=status)
    booking_date = rules.to_booking_date(session)
    assert booking_date.date == "2025-01-06"
    assert booking_date.status == expected
    assert booking_date.held is held


def test_cancelled_session_keeps_reason_and_time():
    session = BookingSession(
        id=5, session_date="2025-01-06", status="CANCELLED",
        internal_notes="Car breakdown - engine", deleted_at="2025-01-05T10:00:00Z",
    )
    booking_date = rules.to_booking_date(session)
    assert booking_date.cancel_reason == "Car breakdown - engine"
    assert booking_date.cancelled_at == "2025-01-05T10:00:00Z"


# Roll-up
@pytest.mark.parametrize("statuses, expected", [
    ([], BookingRollupStatus.ACTIVE),
    (["scheduled", "completed"], BookingRollupStatus.ACTIVE),
    (["scheduled", "cancelled"], BookingRollupStatus.ACTIVE),
    (["completed", "completed"], BookingRollupStatus.COMPLETED),
    (["cancelled", "cancelled"], BookingRollupStatus.CANCELLED),
    (["completed", "cancelled"], BookingRollupStatus.PARTIAL),
])
def test_rollup_status(statuses, expected):
    dates = [d(i + 1, f"2025-01-0{i + 1}", status) for i, status in enumerate(statuses)]
    assert rules.rollup_status(dates) == expected


def test_rollup_to_booking_status():
    assert rules.rollup_to_booking_status(BookingRollupStatus.COMPLETED) == BookingStatus.COMPLETED
    assert rules.rollup_to_booking_status(BookingRollupStatus.PARTIAL) == BookingStatus.COMPLETED
    assert rules.rollup_to_booking_status(BookingRollupStatus.CANCELLED) == BookingStatus.CANCELLED
    assert rules.rollup_to_booking_status(BookingRollupStatus.ACTIVE, "PENDING") == BookingStatus.PENDING
    assert rules.rollup_to_booking_status(BookingRollupStatus.ACTIVE, "CONFIRMED") == BookingStatus.CONFIRMED
    assert rules.rollup_to_booking_status(BookingRollupStatus.ACTIVE, "CANCELLED") == BookingStatus.CONFIRMED


# Legal actions
def test_no_actions_once_every_date_is_completed():
    dates = [d(1, "2025-01-06", "completed"), d(2, "2025-01-07", "completed")]
    assert rules.legal_actions(dates) == []


def test_held_dates_only_allow_release_and_cancellation():
    dates = [d(1, "2025-01-06", held=True), d(2, "2025-01-07", "completed")]
    actions = rules.legal_actions(dates)
    assert AmendmentAction.RELEASE_HOLD in actions
    assert AmendmentAction.CANCEL_BOOKING in actions
    assert AmendmentAction.CHANGE_DATE not in actions


def test_scheduled_dates_allow_everything_but_release():
    dates = [d(1, "2025-01-06"), d(2, "2025-01-07")]
    actions = rules.legal_actions(dates)
    assert AmendmentAction.RELEASE_HOLD not in actions
    assert set(actions) == {
        AmendmentAction.CANCEL_BOOKING, AmendmentAction.CHANGE_DATE,
        AmendmentAction.CAR_BREAKDOWN, AmendmentAction.CAR_HOLIDAY,
    }


# Amendment checks
def test_reason_is_required():
    with pytest.raises(AmendmentNotAllowedError) as exc_info:
        rules.check_amendment([d(1, "2025-01-06")], request("CANCEL_BOOKING", reason="  "))
    assert exc_info.value.errors["reason"] == "A reason is required for every amendment"


def test_completed_booking_cannot_be_amended():
    with pytest.raises(AmendmentNotAllowedError) as exc_info:
        rules.check_amendment([d(1, "2025-01-06", "completed")], request("CANCEL_BOOKING"))
    assert "action" in exc_info.value.errors


def test_cancel_targets_all_scheduled_dates_by_default():
    dates = [d(1, "2025-01-06", "completed"), d(2, "2025-01-07"), d(3, "2025-01-08", held=True)]
    plan = rules.check_amendment(dates, request("CANCEL_BOOKING"))
    assert [t.id for t in plan.targets] == [2, 3]
    assert plan.new_dates == []


def test_unknown_or_inapplicable_sessions_are_rejected():
    dates = [d(1, "2025-01-06", "completed"), d(2, "2025-01-07")]
    with pytest.raises(AmendmentNotAllowedError) as exc_info:
        rules.check_amendment(dates, request("CANCEL_BOOKING", session_ids=[9]))
    assert exc_info.value.errors["sessionIds"] == "Session 9 does not belong to this booking"

    with pytest.raises(AmendmentNotAllowedError) as exc_info:
        rules.check_amendment(dates, request("CANCEL_BOOKING", session_ids=[1]))
    assert "cannot be amended" in exc_info.value.errors["sessionIds"]


def test_change_date_needs_new_dates():
    with pytest.raises(AmendmentNotAllowedError) as exc_info:
        rules.check_amendment([d(1, "2025-01-06")], request("CHANGE_DATE", session_ids=[1]))
    assert exc_info.value.errors["newDates"] == "A new date is required to change a booking date"


def test_new_dates_not_accepted_for_cancellation():
    with pytest.raises(AmendmentNotAllowedError) as exc_info:
        rules.check_amendment([d(1, "2025-01-06")], request("CANCEL_BOOKING", new_dates=["2025-01-10"]))
    assert "newDates" in exc_info.value.errors


def test_one_new_date_per_target():
    dates = [d(1, "2025-01-06"), d(2, "2025-01-07")]
    with pytest.raises(AmendmentNotAllowedError) as exc_info:
        rules.check_amendment(dates, request("CHANGE_DATE", new_dates=["2025-01-10"]))
    assert exc_info.value.errors["newDates"] == "Give one new date for each of the 2 selected dates"


def test_new_dates_must_be_distinct_and_free():
    dates = [d(1, "2025-01-06"), d(2, "2025-01-07")]
    with pytest.raises(AmendmentNotAllowedError) as exc_info:
        rules.check_amendment(dates, request("CHANGE_DATE", new_dates=["2025-01-10", "2025-01-10"]))
    assert exc_info.value.errors["newDates"] == "New dates must be different from each other"

    with pytest.raises(AmendmentNotAllowedError) as exc_info:
        rules.check_amendment(dates, request("CHANGE_DATE", session_ids=[1], new_dates=["2025-01-07"]))
    assert exc_info.value.errors["newDates"] == "2025-01-07 is already scheduled for this booking"


def test_change_date_skips_held_dates():
    dates = [d(1, "2025-01-06", held=True), d(2, "2025-01-07")]
    with pytest.raises(AmendmentNotAllowedError):
        rules.check_amendment(dates, request("CHANGE_DATE", session_ids=[1], new_dates=["2025-01-10"]))
    plan = rules.check_amendment(dates, request("CHANGE_DATE", new_dates=["2025-01-10"]))
    assert [t.id for t in plan.targets] == [2]


def test_apply_change_date():
    dates = [d(1, "2025-01-06"), d(2, "2025-01-07")]
    plan = rules.check_amendment(dates, request("CHANGE_DATE", session_ids=[1], new_dates=["2025-01-10"]))
    now = datetime(2025, 1, 5, 9, 30, tzinfo=timezone.utc)
    after = rules.apply_amendment(dates, plan, now=now)

    assert [x.status for x in after] == ["cancelled", "scheduled", "scheduled"]
    assert after[0].cancel_reason == "Customer request"
    assert after[0].cancelled_at == now.isoformat()
    assert after[2].id == 0
    assert after[2].date == "2025-01-10"
    assert rules.rollup_status(after) == BookingRollupStatus.ACTIVE


def test_apply_cancel_booking_rolls_up_to_partial():
    dates = [d(1, "2025-01-06", "completed"), d(2, "2025-01-07")]
    plan = rules.check_amendment(dates, request("CANCEL_BOOKING"))
    after = rules.apply_amendment(dates, plan)
    assert rules.rollup_status(after) == BookingRollupStatus.PARTIAL


def test_apply_release_hold():
    dates = [d(1, "2025-01-06", held=True)]
    plan = rules.check_amendment(dates, request("RELEASE_HOLD"))
    after = rules.apply_amendment(dates, plan)
    assert after[0].status == "scheduled"
    assert after[0].held is False


@pytest.mark.parametrize("action", ["CAR_BREAKDOWN", "CAR_HOLIDAY"])
def test_car_actions_cancel_held_dates_too(action):
    dates = [d(1, "2025-01-06", held=True), d(2, "2025-01-07", "completed")]
    plan = rules.check_amendment(dates, request(action, reason="Clutch failure"))
    after = rules.apply_amendment(dates, plan)
    assert after[0].status == "cancelled"
    assert after[0].held is False
    assert after[0].cancel_reason == "Clutch failure"
    assert after[1].status == "completed"


# Money
def test_booking_total():
    assert rules.booking_total(4500, [500, 250.5], 300, 100) == Decimal("4850.5")
    assert rules.booking_total("1000", [], 1500) == Decimal("0")
    assert rules.booking_total(None) == Decimal("0")


def test_split_discount_sums_exactly():
    shares = rules.split_discount(100, 3)
    assert shares == [Decimal("33.33"), Decimal("33.33"), Decimal("33.34")]
    assert sum(shares) == Decimal("100")
    assert rules.split_discount(None, 2) == [Decimal("0.00"), Decimal("0")]
    assert rules.split_discount(50, 0) == []


def test_total_paid_counts_completed_only():
    payments = [
        Payment(id=1, amount=1000, status="COMPLETED"),
        Payment(id=2, amount=500, status="PENDING"),
        Payment(id=3, amount=250.25, status="COMPLETED"),
        Payment(id=4, amount=75, status="REFUNDED"),
    ]
    assert rules.total_paid(payments) == Decimal("1250.25")


# School profile
def test_profile_completeness():
    school = School(id=1, name="Sunrise", day_start_time="09:00", owner_name="Ravi", bank_name=" ")
    assert rules.missing_profile_fields(school) == [
        "day_end_time", "bank_name", "account_number", "ifsc_code", "rto_license_number",
    ]
    assert rules.is_profile_complete(school) is False

    complete = school.model_copy(update={
        "day_end_time": "18:00", "bank_name": "SBI", "account_number": "12345678",
        "ifsc_code": "SBIN0001234", "rto_license_number": "MH12-001",
    })
    assert rules.is_profile_complete(complete) is True
