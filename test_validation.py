"""
Form schemas: field rules, error maps and conversion to client inputs
"""

from datetime import date, timedelta

import pytest

from mtadmin.core.exceptions import FormValidationError
from mtadmin.schemas.amendment import AmendmentForm, AmendmentRequest
from mtadmin.schemas.booking import BookingForm
from mtadmin.schemas.car import AddCarForm, EditCarForm
from mtadmin.schemas.common import decode_string_list, encode_string_list
from mtadmin.schemas.course import AddCourseForm
from mtadmin.schemas.holiday import HolidayForm, HolidayUpdate
from mtadmin.schemas.rules import validate_form
from mtadmin.schemas.school import AddSchoolForm, SchoolProfileForm
from mtadmin.schemas.service import AddServiceForm, SchoolServiceForm
from mtadmin.schemas.syllabus import SyllabusForm
from mtadmin.schemas.user import UserCreate

SCHOOL = {
    "name": "Sunrise Motor School",
    "email": "info@sunrise.in",
    "phone": "9876543210",
    "address": "12 MG Road, Pune",
    "registrationNumber": "REG12345",
    "establishedYear": "2015",
}

PROFILE = dict(
    SCHOOL,
    dayStartTime="09:00",
    dayEndTime="18:00",
    lunchStartTime="13:00",
    lunchEndTime="14:00",
    weeklyHoliday="sunday",
    ownerName="Ravi Kumar",
    ownerPhone="9876500000",
    ownerEmail="ravi@sunrise.in",
    bankName="State Bank",
    accountNumber="123456789012",
    ifscCode="SBIN0001234",
    branchName="Kothrud",
    rtoLicenseNumber="MH12-2015-001",
)


def future(days):
    return (date.today() + timedelta(days=days)).isoformat()


def form_errors(schema, data):
    with pytest.raises(FormValidationError) as exc_info:
        validate_form(schema, data)
    return exc_info.value.errors


# Shared helpers
def test_string_list_decoding():
    assert decode_string_list('["A","B"]') == ["A", "B"]
    assert decode_string_list(None) == []
    assert decode_string_list("") == []
    with pytest.raises(ValueError):
        decode_string_list('{"a": 1}')


def test_string_list_encoding_is_compact():
    assert encode_string_list(["A", "B"]) == '["A","B"]'
    assert encode_string_list(None) == "[]"


# Schools
def test_add_school_form_accepts_valid_input():
    form = validate_form(AddSchoolForm, dict(SCHOOL, gstNumber="", website=""))
    assert form.gst_number is None
    assert form.website is None
    created = form.to_create()
    assert created.registration_number == "REG12345"


def test_add_school_form_reports_every_failing_field():
    errors = form_errors(AddSchoolForm, dict(
        SCHOOL,
        name="Abc",
        email="not-an-email",
        phone="98765 43210",
        gstNumber="27AAPFU",
        establishedYear="1850",
    ))
    assert errors["name"] == "School name must be at least 5 characters"
    assert errors["email"] == "Please enter valid email address"
    assert errors["phone"] == "Phone number cannot contain space"
    assert errors["gstNumber"] == "Please enter valid GST number"
    assert errors["establishedYear"] == "Please enter valid year (e.g., 2022)"


def test_add_school_form_accepts_gst_number():
    form = validate_form(AddSchoolForm, dict(SCHOOL, gstNumber="27AAPFU0939F1ZV"))
    assert form.gst_number == "27AAPFU0939F1ZV"


def test_school_profile_form_normalizes_weekly_holiday():
    form = validate_form(SchoolProfileForm, PROFILE)
    assert form.weekly_holiday == "SUNDAY"
    update = form.to_update()
    assert update.ifsc_code == "SBIN0001234"
    assert update.insurance_provider is None


def test_school_profile_form_rules():
    errors = form_errors(SchoolProfileForm, dict(
        PROFILE, dayStartTime="9am", ifscCode="SBIN1234567", accountNumber="1234",
    ))
    assert errors["dayStartTime"] == "Please enter valid time in HH:mm format"
    assert errors["ifscCode"] == "Please enter valid IFSC code"
    assert errors["accountNumber"] == "Account number must be at least 8 characters"


# Services
def test_school_service_form_accepts_numbers_and_strings():
    form = validate_form(SchoolServiceForm, {"serviceId": 4, "licensePrice": "1500.50", "addonPrice": 250})
    created = form.to_create(school_id=1)
    assert created.service_id == 4
    assert created.license_price == 1500.50
    assert created.addon_price == 250.0


def test_school_service_form_rejects_non_numeric_price():
    errors = form_errors(SchoolServiceForm, {"serviceId": "4", "licensePrice": "abc", "addonPrice": "-5"})
    assert errors["licensePrice"] == "License price must be a valid number"
    assert errors["addonPrice"] == "Addon price must be a valid number"


def test_add_service_form_splits_feature_lines():
    form = validate_form(AddServiceForm, {
        "serviceName": "Learner License",
        "category": "NEW_LICENSE",
        "price": 1200,
        "duration": 30,
        "description": "Learner license paperwork and test slot",
        "features": "Document check\nTest slot booking",
        "includedServices": '["Medical certificate"]',
    })
    created = form.to_create(school_id=1)
    assert created.included_services == '["Medical certificate"]'
    wire = created.model_dump(by_alias=True, exclude_none=True, mode="json")
    assert wire["features"] == '["Document check","Test slot booking"]'
    assert wire["serviceType"] == "LICENSE"


def test_add_service_form_category_is_case_sensitive():
    errors = form_errors(AddServiceForm, {
        "serviceName": "Learner License",
        "category": "new_license",
        "price": "1200",
        "duration": "30",
        "description": "Learner license paperwork",
    })
    assert errors["category"] == "Category is required"


# Cars
def test_add_car_form_converts_numbers():
    form = validate_form(AddCarForm, {
        "carId": "CAR001",
        "carName": "Swift",
        "model": "VXI",
        "registrationNumber": "MH12AB1234",
        "year": 2020,
        "color": "White",
        "fuelType": "PETROL",
        "transmission": "MANUAL",
        "seatingCapacity": 5,
        "purchaseCost": "650000.00",
        "status": "AVAILABLE",
    })
    created = form.to_create(school_id=1)
    assert created.year == 2020
    assert created.seating_capacity == 5
    assert created.purchase_cost == 650000.0
    assert created.car_id == "CAR001"


def test_car_form_rules():
    errors = form_errors(AddCarForm, {
        "carId": "C1",
        "carName": "S",
        "model": "VXI",
        "registrationNumber": "MH12",
        "year": "20",
        "color": "White",
        "fuelType": "petrol",
        "transmission": "MANUAL",
        "seatingCapacity": "five",
    })
    assert errors["carId"] == "Car ID must be at least 3 characters"
    assert errors["carName"] == "Car name must be at least 2 characters"
    assert errors["registrationNumber"] == "Registration number must be at least 5 characters"
    assert errors["year"] == "Year must be a valid 4-digit number"
    assert errors["fuelType"] == "Fuel type is required"
    assert errors["seatingCapacity"] == "Seating capacity must be a number"


def test_edit_car_form_sends_only_filled_fields():
    form = validate_form(EditCarForm, {
        "carName": "Swift",
        "model": "VXI",
        "registrationNumber": "MH12AB1234",
        "year": "2020",
        "color": "White",
        "fuelType": "DIESEL",
        "transmission": "AMT",
        "engineNumber": "",
        "status": "MAINTENANCE",
    })
    update = form.to_update()
    sent = update.model_dump(by_alias=True, exclude_unset=True, mode="json")
    assert "engineNumber" not in sent
    assert sent["status"] == "MAINTENANCE"


# Courses and syllabus
def test_add_course_form_lesson_length():
    base = {
        "courseName": "Beginner Car Course",
        "courseType": "BEGINNER",
        "courseDays": 15,
        "price": "4500",
        "description": "Fifteen days of practical driving",
    }
    form = validate_form(AddCourseForm, dict(base, hoursPerDay=60))
    created = form.to_create(school_id=1)
    assert created.mins_per_day == 60
    assert created.course_days == 15

    errors = form_errors(AddCourseForm, dict(base, hoursPerDay=45))
    assert errors["hoursPerDay"] == "Hours per day must be 30 or 60"


def test_syllabus_form_rules():
    errors = form_errors(SyllabusForm, {"dayNumber": "", "title": "ab", "topics": "short"})
    assert errors["dayNumber"] == "Day number is required"
    assert errors["title"] == "Title must be at least 3 characters"
    assert errors["topics"] == "Topics must be at least 10 characters"

    form = validate_form(SyllabusForm, {"dayNumber": 2, "title": "Clutch control", "topics": "Clutch, gears, stalling"})
    assert form.to_create(course_id=3).day_number == 2


# Holidays
def test_holiday_form_one_car_needs_a_car():
    errors = form_errors(HolidayForm, {
        "declarationType": "ONE_CAR_MULTIPLE_DATES",
        "carId": "",
        "dateRange": [future(3), future(5)],
        "slots": [],
        "reason": "Service",
    })
    assert errors["carId"] == "Select a car"


def test_holiday_form_particular_slots_need_slots():
    errors = form_errors(HolidayForm, {
        "declarationType": "ALL_CARS_PARTICULAR_SLOTS",
        "dateRange": [future(3)],
        "slots": [],
        "reason": "Staff meeting",
    })
    assert errors["slots"] == "Please select at least one slot"


def test_holiday_form_rejects_past_dates():
    errors = form_errors(HolidayForm, {
        "declarationType": "ALL_CARS_MULTIPLE_DATES",
        "dateRange": [(date.today() - timedelta(days=1)).isoformat()],
        "slots": [],
        "reason": "Festival",
    })
    assert errors["dateRange"] == "Please select future dates only. Past dates are not allowed."


def test_holiday_form_single_date_range():
    form = validate_form(HolidayForm, {
        "declarationType": "ONE_CAR_PARTICULAR_SLOTS",
        "carId": 4,
        "dateRange": [future(2)],
        "slots": ["09:00-10:00"],
        "reason": "Tyre change",
    })
    created = form.to_create(school_id=1)
    assert created.start_date == created.end_date == future(2)
    wire = created.model_dump(by_alias=True, exclude_none=True, mode="json")
    assert wire["carId"] == 4
    assert wire["slots"] == '["09:00-10:00"]'


def test_holiday_without_slots_omits_them():
    form = validate_form(HolidayForm, {
        "declarationType": "ALL_CARS_MULTIPLE_DATES",
        "dateRange": [future(2), future(4)],
        "reason": "Festival",
    })
    wire = form.to_create(school_id=1).model_dump(by_alias=True, exclude_none=True, mode="json")
    assert "slots" not in wire
    assert "carId" not in wire
    assert wire["endDate"] == future(4)


def test_holiday_form_rejects_malformed_end_date():
    errors = form_errors(HolidayForm, {
        "declarationType": "ALL_CARS_MULTIPLE_DATES",
        "dateRange": [future(2), "31/12/2030"],
        "reason": "Festival",
    })
    assert errors["dateRange"] == "Select date range"


def test_holiday_form_rejects_end_before_start():
    errors = form_errors(HolidayForm, {
        "declarationType": "ALL_CARS_MULTIPLE_DATES",
        "dateRange": [future(5), future(2)],
        "reason": "Festival",
    })
    assert errors["dateRange"] == "End date cannot be before start date"


def test_holiday_update_checks_dates():
    errors = form_errors(HolidayUpdate, {"startDate": future(5), "endDate": future(2)})
    assert errors["endDate"] == "End date cannot be before start date"

    errors = form_errors(HolidayUpdate, {"startDate": "tomorrow"})
    assert errors["startDate"] == "Date must be a valid date (YYYY-MM-DD)"

    update = validate_form(HolidayUpdate, {"endDate": future(3), "slots": ["09:00-10:00"]})
    assert update.slots == '["09:00-10:00"]'


# Bookings
BOOKING = {
    "carId": "3",
    "slot": "09:00-10:00",
    "bookingDate": "2025-01-06",
    "customerMobile": "9876543210",
    "courseId": 2,
    "coursePrice": 4500,
    "totalAmount": 4500,
}


def test_booking_form_accepts_numeric_car_id():
    form = validate_form(BookingForm, dict(BOOKING, carId=3, customerName=""))
    assert form.car_id == "3"
    assert form.customer_name is None
    assert form.selected_services == []


def test_booking_form_mobile_rules():
    assert form_errors(BookingForm, dict(BOOKING, customerMobile="98765"))["customerMobile"] == \
        "Mobile number must be at least 10 digits"
    assert form_errors(BookingForm, dict(BOOKING, customerMobile="98765432100"))["customerMobile"] == \
        "Mobile number must not exceed 10 digits"
    assert form_errors(BookingForm, dict(BOOKING, customerMobile="98765abcde"))["customerMobile"] == \
        "Please enter a valid mobile number"


def test_booking_form_selection_rules():
    errors = form_errors(BookingForm, dict(BOOKING, carId="", slot="", courseId=0))
    assert errors["carId"] == "Please select a car"
    assert errors["slot"] == "Please select a time slot"
    assert errors["courseId"] == "Please select a course"


@pytest.mark.parametrize("booking_date", ["04/01/2025", "2025-13-01", "2025-W01-1", "20250104"])
def test_booking_form_needs_an_iso_date(booking_date):
    errors = form_errors(BookingForm, dict(BOOKING, bookingDate=booking_date))
    assert errors["bookingDate"] == "Booking date must be a valid date (YYYY-MM-DD)"


# Amendments
def test_amendment_request_date_format():
    errors = form_errors(AmendmentRequest, {
        "bookingId": 1, "action": "CHANGE_DATE", "newDates": ["06/01/2025"], "reason": "Customer asked",
    })
    assert any(key.startswith("newDates") for key in errors)


def test_amendment_form_rules():
    errors = form_errors(AmendmentForm, {
        "searchMethod": "email", "customerMobile": "12345", "amendmentAction": "cancel",
    })
    assert errors["searchMethod"] == "Please choose how to search for the booking"
    assert errors["customerMobile"] == "Mobile number must be at least 10 digits"
    assert errors["amendmentAction"] == "Please select a valid amendment action"


# Users
def test_user_create_defaults():
    user = UserCreate(name="Asha", contact1="9876543210")
    assert user.role == "USER"
    assert user.status == "ACTIVE"
