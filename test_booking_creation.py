"""
Booking creation flow against the in-process GraphQL backend
"""

import itertools

import pytest

from mtadmin.core.exceptions import FormValidationError
from mtadmin.schemas.booking import BookingForm
from mtadmin.schemas.rules import validate_form
from mtadmin.services.booking_creation import (
    ADVANCE_PAYMENT_NOTE, BookingCreationService, advance_payment_number, generate_booking_reference,
)

SERVICES = [
    {"id": 1, "schoolServiceId": 5, "name": "Learner License", "licensePrice": 1200, "addonPrice": 800,
     "serviceType": "NEW_LICENSE"},
    {"id": 2, "schoolServiceId": 6, "name": "Night Driving", "licensePrice": 0, "addonPrice": 500,
     "serviceType": "ADDON"},
]

FORM = {
    "carId": "3",
    "slot": "09:00-10:00",
    # Saturday
    "bookingDate": "2025-01-04",
    "customerMobile": "9876543210",
    "courseId": 2,
    "coursePrice": 4500,
    "selectedServices": SERVICES,
    "bookingDiscount": 300,
    "serviceDiscount": 100,
    "totalAmount": 5400,
    "advanceAmount": 1000,
}


def echo(start):
    ids = itertools.count(start)
    return lambda variables: dict(variables["inputType"], id=next(ids))


@pytest.fixture
def school_backend(backend):
    backend.on("getCarById", {"id": 3, "carName": "Swift", "assignedDriver": {"id": 9}})
    backend.on("getCourseById", {"id": 2, "courseName": "Beginner Course", "courseDays": 3, "price": 4500})
    backend.on("searchUser", {"id": 4, "name": "Asha", "contact1": "9876543210", "role": "USER"})
    backend.on("getSchoolById", {"id": 1, "name": "Sunrise Motor School", "weeklyHoliday": "SUNDAY"})
    backend.on("getAllHoliday", [])
    backend.on("getAllBookingSession", [])
    backend.on("createBooking", echo(100))
    backend.on("createBookingService", echo(200))
    backend.on("createLicenseApplication", echo(300))
    backend.on("createBookingSession", echo(400))
    backend.on("createPayment", echo(500))
    return backend


def form(**overrides):
    return validate_form(BookingForm, dict(FORM, **overrides))


def test_reference_formats():
    assert generate_booking_reference().startswith("BK")
    assert advance_payment_number(42).startswith("PAY421")


def test_creates_booking_with_everything_attached(school_backend, transport, context):
    result = BookingCreationService(transport, context).create(form())

    assert result.warnings == []
    assert result.total_amount == 5400.0
    assert result.session_dates == ["2025-01-04", "2025-01-06", "2025-01-07"]
    assert result.session_ids == [400, 401, 402]
    assert result.booking_service_ids == [200, 201]
    assert result.license_application_ids == [300]
    assert result.payment_id == 500

    booking = school_backend.last("createBooking")["inputType"]
    assert booking["bookingId"].startswith("BK")
    assert booking["totalAmount"] == 5400.0
    assert booking["customerId"] == 4
    assert booking["schoolId"] == 1
    assert booking["discount"] == 300.0
    assert booking["carName"] == "Swift"
    assert booking["courseName"] == "Beginner Course"


def test_service_discount_is_split_across_services(school_backend, transport, context):
    BookingCreationService(transport, context).create(form())

    attached = [v["inputType"] for v in school_backend.calls("createBookingService")]
    assert [s["discount"] for s in attached] == [50.0, 50.0]
    assert [s["price"] for s in attached] == [800.0, 500.0]
    assert {s["bookingId"] for s in attached} == {100}
    assert {s["userId"] for s in attached} == {4}
    assert school_backend.last("createLicenseApplication")["inputType"]["bookingServiceId"] == 200


def test_sessions_follow_planned_dates(school_backend, transport, context):
    BookingCreationService(transport, context).create(form())

    sessions = [v["inputType"] for v in school_backend.calls("createBookingSession")]
    assert [s["dayNumber"] for s in sessions] == [1, 2, 3]
    assert [s["sessionDate"] for s in sessions] == ["2025-01-04", "2025-01-06", "2025-01-07"]
    assert {s["driverId"] for s in sessions} == {9}
    assert {s["slot"] for s in sessions} == {"09:00-10:00"}


def test_advance_payment_is_recorded(school_backend, transport, context):
    BookingCreationService(transport, context).create(form())

    payment = school_backend.last("createPayment")["inputType"]
    assert payment["amount"] == 1000.0
    assert payment["bookingId"] == 100
    assert payment["userId"] == 7
    assert payment["notes"] == ADVANCE_PAYMENT_NOTE
    assert payment["paymentNumber"].startswith("PAY1001")
    assert payment["paymentMethod"] == "CASH"


def test_no_advance_no_payment(school_backend, transport, context):
    result = BookingCreationService(transport, context).create(form(advanceAmount=None))
    assert result.payment_id is None
    assert school_backend.calls("createPayment") == []


def test_taken_slots_and_holidays_are_skipped(school_backend, transport, context):
    def sessions(variables):
        if variables["whereSearchInput"].get("sessionDate") == "2025-01-06":
            return [{"id": 50, "bookingId": 70, "carId": 3, "status": "CONFIRMED"}]
        return []

    school_backend.on("getAllBookingSession", sessions)
    school_backend.on("getAllHoliday", [{"id": 1, "startDate": "2025-01-07", "carId": 3}])

    result = BookingCreationService(transport, context).create(form())

    assert result.session_dates == ["2025-01-04", "2025-01-08", "2025-01-09"]


def test_given_session_dates_skip_planning(school_backend, transport, context):
    result = BookingCreationService(transport, context).create(form(), session_dates=["2025-02-01"])

    assert result.session_ids == [400]
    assert school_backend.calls("getSchoolById") == []


def test_submitted_total_is_recomputed(school_backend, transport, context):
    result = BookingCreationService(transport, context).create(form(totalAmount=1))
    assert school_backend.last("createBooking")["inputType"]["totalAmount"] == 5400.0
    assert result.total_amount == 5400.0


def test_new_customer_is_created(school_backend, transport, context):
    school_backend.on("searchUser", None)
    school_backend.on("createUser", echo(12))

    BookingCreationService(transport, context).create(form(customerName="Meera", customerEmail="meera@mail.in"))

    user = school_backend.last("createUser")["inputType"]
    assert user["contact1"] == "9876543210"
    assert user["name"] == "Meera"
    assert user["role"] == "USER"
    assert user["status"] == "ACTIVE"
    assert user["schoolId"] == 1
    assert school_backend.last("createBooking")["inputType"]["customerId"] == 12


def test_unknown_customer_without_name_is_rejected(school_backend, transport, context):
    school_backend.on("searchUser", None)

    with pytest.raises(FormValidationError) as exc_info:
        BookingCreationService(transport, context).create(form())

    assert "customerMobile" in exc_info.value.errors
    assert school_backend.calls("createBooking") == []


def test_follow_up_failures_become_warnings(school_backend, transport, context):
    school_backend.fail("createPayment", "Payment service down")
    school_backend.fail("createLicenseApplication", "Applications closed")

    result = BookingCreationService(transport, context).create(form())

    assert result.booking.id == 100
    assert result.payment_id is None
    assert result.license_application_ids == []
    assert result.session_ids == [400, 401, 402]
    assert "Booking created, but advance payment recording failed: Payment service down" in result.warnings
    assert "License application for Learner License was not created: Applications closed" in result.warnings
