"""
Resource clients against the in-process GraphQL backend
"""

from decimal import Decimal

import pytest

from mtadmin import crud
from mtadmin.core.exceptions import ApplicationError, ErrorKind, FormValidationError, NotFoundError
from mtadmin.schemas.car import CarFilter, CarUpdate
from mtadmin.schemas.common import SearchPagination
from mtadmin.schemas.service import SchoolServiceCreate, ServiceCreate


def cars(count, school_id=1):
    return [{"id": i + 1, "schoolId": school_id, "carName": f"Car {i + 1}", "status": "AVAILABLE"} for i in range(count)]


# Generic operations
def test_paginated_list_never_exceeds_take(backend, transport):
    backend.on("getPaginatedCar", {"data": cars(12), "total": 30})

    page = crud.car.get_paginated(
        transport, pagination=SearchPagination(skip=20, take=10), where=CarFilter(school_id=1),
    ).unwrap()

    assert len(page.data) == 10
    assert page.skip == 20
    assert page.take == 10
    assert page.total == 30
    assert backend.last("getPaginatedCar") == {
        "searchPaginationInput": {"skip": 20, "take": 10},
        "whereSearchInput": {"schoolId": 1},
    }


def test_paginated_total_is_at_least_the_rows_returned(backend, transport):
    backend.on("getPaginatedCar", {"data": cars(3), "total": 0})
    page = crud.car.get_paginated(transport).unwrap()
    assert page.total == 3
    assert page.take == 10


def test_filter_drops_null_fields(backend, transport):
    backend.on("getAllCar", [])
    crud.car.get_all(transport, where=CarFilter(school_id=1, status=None))
    assert backend.last("getAllCar") == {"whereSearchInput": {"schoolId": 1}}


def test_get_all_null_is_empty_list(backend, transport):
    backend.on("getAllCar", None)
    assert crud.car.get_all(transport).unwrap() == []


def test_status_only_update_sends_only_status(backend, transport):
    backend.on("updateCar", {"id": 3, "status": "MAINTENANCE"})

    updated = crud.car.update(transport, id=3, obj_in=CarUpdate(status="MAINTENANCE")).unwrap()

    assert updated.status == "MAINTENANCE"
    assert backend.last("updateCar") == {"id": 3, "updateType": {"status": "MAINTENANCE"}}


def test_get_missing_entity_is_not_found(backend, transport):
    backend.on("getCarById", None)
    result = crud.car.get(transport, 99)
    assert result.status is False
    assert result.error_kind == ErrorKind.NOT_FOUND
    with pytest.raises(NotFoundError):
        result.unwrap()


def test_backend_not_found_message_is_not_found(backend, transport):
    backend.fail("getCarById", "Car with id 99 not found")
    assert crud.car.get(transport, 99).error_kind == ErrorKind.NOT_FOUND


def test_backend_failure_is_application_error(backend, transport):
    backend.fail("createCar", "Registration number already exists")
    result = crud.car.create(transport, obj_in={"carName": "Swift"})
    assert result.status is False
    assert result.message == "Registration number already exists"
    with pytest.raises(ApplicationError):
        result.unwrap()


def test_unexpected_payload_is_reported(backend, transport):
    backend.on("getCarById", {"id": "not-a-number"})
    result = crud.car.get(transport, 1)
    assert result.status is False
    assert result.message == "Unexpected Car payload"


@pytest.mark.parametrize("bad_id", [0, -1, "3", None, True])
def test_ids_must_be_positive_integers(transport, bad_id):
    with pytest.raises(FormValidationError) as exc_info:
        crud.car.get(transport, bad_id)
    assert exc_info.value.errors == {"id": "must be a positive integer"}


def test_remove_is_soft_delete(backend, transport):
    backend.on("deleteCar", {"id": 3})
    assert crud.car.remove(transport, id=3).unwrap().id == 3
    assert backend.last("deleteCar") == {"id": 3}


# Services
def test_service_features_round_trip(backend, transport):
    backend.on("createService", lambda variables: dict(variables["inputType"], id=5))

    created = crud.service.create(transport, obj_in=ServiceCreate(
        service_name="Learner License",
        category="NEW_LICENSE",
        price=1200,
        duration=30,
        description="Learner license paperwork",
        features=["A", "B"],
    )).unwrap()

    sent = backend.last("createService")["inputType"]
    assert sent["features"] == '["A","B"]'
    assert sent["serviceType"] == "LICENSE"
    assert created.features == ["A", "B"]
    assert created.included_services == []


def test_service_pagination_uses_pages(backend, transport):
    backend.on("getPaginatedService", {"data": [{"id": 1}], "total": 25, "page": 3, "limit": 10})

    page = crud.service.get_paginated(transport, pagination=SearchPagination(skip=20, take=10)).unwrap()

    variables = backend.last("getPaginatedService")
    assert variables["page"] == 3
    assert variables["limit"] == 10
    assert page.skip == 20
    assert page.total == 25


def test_create_school_service_keeps_exact_prices(backend, transport):
    backend.on("createSchoolService", lambda variables: dict(variables["inputType"], id=11, status="ACTIVE"))

    created = crud.school_service.create(transport, obj_in=SchoolServiceCreate(
        school_id=1, service_id=5, license_price=5000, addon_price=2000,
    )).unwrap()

    assert created.status == "ACTIVE"
    assert created.license_price == 5000.0
    assert created.addon_price == 2000.0
    assert backend.last("createSchoolService")["inputType"] == {
        "schoolId": 1, "serviceId": 5, "licensePrice": 5000.0, "addonPrice": 2000.0,
    }


# Bookings
def test_sessions_of_a_booking_are_ordered(backend, transport):
    backend.on("getAllBookingSession", [
        {"id": 3, "dayNumber": 2, "sessionDate": "2025-01-07"},
        {"id": 1, "dayNumber": 1, "sessionDate": "2025-01-06"},
    ])
    sessions = crud.booking_session.get_by_booking(transport, 8).unwrap()
    assert [s.id for s in sessions] == [1, 3]
    assert backend.last("getAllBookingSession") == {"whereSearchInput": {"bookingId": 8}}


def test_slot_availability_ignores_released_sessions(backend, transport):
    backend.on("getAllBookingSession", [
        {"id": 1, "bookingId": 20, "carId": 3, "status": "CANCELLED"},
        {"id": 2, "bookingId": 21, "carId": 3, "status": "HOLD"},
        {"id": 3, "bookingId": 22, "carId": 4, "status": "PENDING"},
    ])
    kwargs = {"session_date": "2025-01-06", "slot": "09:00-10:00"}

    assert crud.booking_session.is_slot_available(transport, car_id=3, **kwargs).unwrap() is True
    assert crud.booking_session.is_slot_available(transport, car_id=4, **kwargs).unwrap() is False
    assert crud.booking_session.is_slot_available(
        transport, car_id=4, exclude_booking_id=22, **kwargs
    ).unwrap() is True
    assert backend.last("getAllBookingSession") == {
        "whereSearchInput": {"sessionDate": "2025-01-06", "slot": "09:00-10:00", "carId": 4},
    }


def test_session_without_car_uses_its_booking_car(backend, transport):
    backend.on("getAllBookingSession", [
        {"id": 1, "bookingId": 20, "carId": None, "status": "CONFIRMED", "booking": {"id": 20, "carId": 3}},
    ])
    free = crud.booking_session.is_slot_available(
        transport, car_id=3, session_date="2025-01-06", slot="09:00-10:00",
    ).unwrap()
    assert free is False


def test_session_selection_carries_cancellation_and_booking_car(backend, transport):
    backend.on("getAllBookingSession", [
        {"id": 1, "dayNumber": 1, "sessionDate": "2025-01-06", "status": "CANCELLED",
         "deletedAt": "2025-01-02T10:00:00Z", "booking": {"id": 8, "carId": 3, "schoolId": 1}},
    ])

    sessions = crud.booking_session.get_by_booking(transport, 8).unwrap()

    query = backend.query("getAllBookingSession")
    assert "deletedAt" in query
    assert "booking { id carId schoolId }" in query
    assert sessions[0].deleted_at == "2025-01-02T10:00:00Z"
    assert sessions[0].booking.car_id == 3


# Payments
def test_total_paid_counts_completed_payments(backend, transport):
    backend.on("getAllPayment", [
        {"id": 1, "bookingId": 42, "amount": 1000, "status": "COMPLETED"},
        {"id": 2, "bookingId": 42, "amount": 500, "status": "PENDING"},
    ])

    total = crud.payment.get_total_paid_amount(transport, 42).unwrap()

    assert total == Decimal("1000")
    assert backend.last("getAllPayment") == {"whereSearchInput": {"bookingId": 42, "status": "COMPLETED"}}


def test_service_total_paid(backend, transport):
    backend.on("getAllServicePayment", [
        {"id": 1, "bookingServiceId": 6, "amount": 300.5, "status": "COMPLETED"},
        {"id": 2, "bookingServiceId": 6, "amount": 200, "status": "COMPLETED"},
    ])
    assert crud.service_payment.get_total_paid_amount(transport, 6).unwrap() == Decimal("500.5")


def test_total_paid_propagates_failure(backend, transport):
    backend.fail("getAllPayment", "Booking not found")
    assert crud.payment.get_total_paid_amount(transport, 42).status is False


# Holidays
def test_holiday_delete_records_user(backend, transport):
    backend.on("deleteHoliday", {"id": 5, "deletedAt": "2025-01-01T00:00:00Z"})

    deleted = crud.holiday.remove(transport, id=5, user_id=7).unwrap()

    assert deleted.deleted_at == "2025-01-01T00:00:00Z"
    assert backend.last("deleteHoliday") == {"id": 5, "userid": 7}


def test_holiday_slots_are_decoded(backend, transport):
    backend.on("getAllHoliday", [{"id": 1, "startDate": "2025-01-06", "slots": '["09:00-10:00","10:00-11:00"]'}])
    holidays = crud.holiday.get_all(transport).unwrap()
    assert holidays[0].slots == ["09:00-10:00", "10:00-11:00"]


# License applications
def test_license_application_defaults(backend, transport):
    backend.on("createLicenseApplication", lambda variables: dict(variables["inputType"], id=2))

    application = crud.license_application.create_for_booking_service(transport, 8).unwrap()

    assert application.status == "PENDING"
    assert application.test_status == "NONE"
    assert backend.last("createLicenseApplication") == {
        "inputType": {"bookingServiceId": 8, "status": "PENDING", "testStatus": "NONE"},
    }


# Users
def test_search_user_by_contact(backend, transport):
    backend.on("searchUser", {"id": 4, "name": "Asha", "contact1": "9876543210", "role": "USER"})

    found = crud.user.search_by_contact(transport, "9876543210").unwrap()

    assert found.id == 4
    assert backend.last("searchUser") == {"whereSearchInput": {"contact1": "9876543210", "role": "USER"}}


def test_search_user_without_match(backend, transport):
    backend.on("searchUser", None)
    assert crud.user.search_by_contact(transport, "9876543210", "DRIVER").unwrap() is None
    assert backend.last("searchUser")["whereSearchInput"]["role"] == "DRIVER"


# Drivers
def test_driver_history(backend, transport):
    backend.on("getDriverById", {
        "id": 2, "name": "Mahesh",
        "leaveHistory": [{"id": 1, "reason": "Fever"}],
        "salaryHistory": None,
    })
    detail = crud.driver.get_with_history(transport, 2).unwrap()
    assert detail.leave_history[0].reason == "Fever"
    assert detail.salary_history == []
