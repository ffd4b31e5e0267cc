"""
Booking Schemas
Bookings, their dated sessions and attached services, plus the booking form
"""

from typing import List, Optional
from pydantic import Field, validator

from mtadmin.models.enums import BookingStatus, ServiceType, SessionStatus
from mtadmin.schemas.common import WireModel
from mtadmin.schemas.rules import (
    INTEGER_RE, TEN_DIGIT_MOBILE_RE, blank_to_none, check_min_length, check_pattern, parse_iso_date,
)


class SessionDriverRef(WireModel):
    id: int
    user_id: Optional[int] = None
    name: Optional[str] = None


class SessionBookingRef(WireModel):
    id: int
    car_id: Optional[int] = None
    school_id: Optional[int] = None


class BookingSession(WireModel):
    id: int
    booking_id: Optional[int] = None
    day_number: Optional[int] = None
    session_date: Optional[str] = None
    slot: Optional[str] = None
    car_id: Optional[int] = None
    driver_id: Optional[int] = None
    driver: Optional[SessionDriverRef] = None
    booking: Optional[SessionBookingRef] = None
    status: Optional[SessionStatus] = None
    attended: Optional[bool] = None
    completed_at: Optional[str] = None
    instructor_notes: Optional[str] = None
    customer_feedback: Optional[str] = None
    internal_notes: Optional[str] = None
    performance_rating: Optional[int] = None
    skills_assessed: Optional[str] = None
    progress_notes: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    deleted_at: Optional[str] = None


class BookingSessionFilter(WireModel):
    booking_id: Optional[int] = None
    car_id: Optional[int] = None
    driver_id: Optional[int] = None
    session_date: Optional[str] = None
    slot: Optional[str] = None
    status: Optional[SessionStatus] = None


class BookingSessionCreate(WireModel):
    booking_id: int
    day_number: int = Field(..., ge=1)
    session_date: str
    slot: str
    car_id: int
    driver_id: Optional[int] = None
    status: Optional[SessionStatus] = None
    internal_notes: Optional[str] = None


class BookingSessionUpdate(WireModel):
    session_date: Optional[str] = None
    slot: Optional[str] = None
    car_id: Optional[int] = None
    driver_id: Optional[int] = None
    status: Optional[SessionStatus] = None
    attended: Optional[bool] = None
    completed_at: Optional[str] = None
    instructor_notes: Optional[str] = None
    customer_feedback: Optional[str] = None
    internal_notes: Optional[str] = None
    performance_rating: Optional[int] = Field(None, ge=0)
    skills_assessed: Optional[str] = None
    progress_notes: Optional[str] = None
    deleted_at: Optional[str] = None


class SchoolServiceServiceRef(WireModel):
    id: int
    service_name: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None


class BookingSchoolServiceRef(WireModel):
    id: int
    school_service_id: Optional[str] = None
    license_price: Optional[float] = None
    addon_price: Optional[float] = None
    service: Optional[SchoolServiceServiceRef] = None


class BookingServiceItem(WireModel):
    """A service attached to a booking (wire entity BookingService)"""
    id: int
    booking_id: Optional[int] = None
    school_service_id: Optional[int] = None
    school_id: Optional[int] = None
    user_id: Optional[int] = None
    service_name: Optional[str] = None
    service_type: Optional[ServiceType] = None
    price: Optional[float] = None
    discount: Optional[float] = None
    description: Optional[str] = None
    confirmation_number: Optional[str] = None
    school_service: Optional[BookingSchoolServiceRef] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class BookingServiceFilter(WireModel):
    booking_id: Optional[int] = None
    school_id: Optional[int] = None
    user_id: Optional[int] = None
    school_service_id: Optional[int] = None
    service_type: Optional[ServiceType] = None


class BookingServiceCreate(WireModel):
    booking_id: Optional[int] = None
    school_service_id: int
    school_id: int
    user_id: Optional[int] = None
    service_name: str
    service_type: ServiceType = ServiceType.ADDON
    price: float = Field(..., ge=0)
    discount: float = Field(0, ge=0)
    description: Optional[str] = None


class BookingCustomerRef(WireModel):
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    contact1: Optional[str] = None
    address: Optional[str] = None


class BookingCarRef(WireModel):
    id: int
    car_id: Optional[str] = None
    car_name: Optional[str] = None
    model: Optional[str] = None
    registration_number: Optional[str] = None


class BookingCourseRef(WireModel):
    id: int
    course_name: Optional[str] = None
    price: Optional[float] = None
    course_days: Optional[int] = None


class Booking(WireModel):
    id: int
    school_id: Optional[int] = None
    booking_id: Optional[str] = None
    car_id: Optional[int] = None
    car_name: Optional[str] = None
    slot: Optional[str] = None
    booking_date: Optional[str] = None
    customer_mobile: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_id: Optional[int] = None
    course_id: Optional[int] = None
    course_name: Optional[str] = None
    course_price: Optional[float] = None
    total_amount: Optional[float] = None
    discount: Optional[float] = None
    notes: Optional[str] = None
    status: Optional[BookingStatus] = None
    confirmation_number: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    sessions: List[BookingSession] = Field(default_factory=list)
    booking_services: List[BookingServiceItem] = Field(default_factory=list)
    customer: Optional[BookingCustomerRef] = None
    car: Optional[BookingCarRef] = None
    course: Optional[BookingCourseRef] = None

    @validator('sessions', 'booking_services', pre=True)
    def null_lists(cls, v):
        return v or []


class BookingFilter(WireModel):
    school_id: Optional[int] = None
    booking_id: Optional[str] = None
    car_id: Optional[int] = None
    customer_id: Optional[int] = None
    customer_mobile: Optional[str] = None
    course_id: Optional[int] = None
    status: Optional[BookingStatus] = None


class BookingCreate(WireModel):
    school_id: int
    booking_id: str
    car_id: int
    car_name: Optional[str] = None
    slot: str
    booking_date: str
    customer_mobile: str
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_id: Optional[int] = None
    course_id: int
    course_name: Optional[str] = None
    course_price: float
    total_amount: float = Field(..., ge=0)
    discount: float = Field(0, ge=0)
    notes: Optional[str] = None


class BookingUpdate(WireModel):
    car_id: Optional[int] = None
    car_name: Optional[str] = None
    slot: Optional[str] = None
    booking_date: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[BookingStatus] = None


# Form
class SelectedService(WireModel):
    """A school service picked on the booking form"""
    id: int
    school_service_id: int
    name: str
    license_price: float = Field(..., ge=0)
    addon_price: float = Field(..., ge=0)
    service_type: str
    description: Optional[str] = None


class BookingForm(WireModel):
    car_id: str
    car_name: str = ""
    slot: str
    booking_date: str
    customer_mobile: str
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    course_id: int
    course_name: str = ""
    course_price: float
    selected_services: List[SelectedService] = Field(default_factory=list)
    total_amount: float
    booking_discount: Optional[float] = Field(None, ge=0)
    service_discount: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None
    advance_amount: Optional[float] = Field(None, ge=0)

    @validator('car_id', pre=True)
    def car_id_as_string(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @validator('customer_name', 'customer_email', 'notes', pre=True)
    def blank_optional(cls, v):
        return blank_to_none(v)

    @validator('selected_services', pre=True)
    def null_services(cls, v):
        return v or []

    @validator('car_id')
    def validate_car_id(cls, v):
        check_min_length(v, 1, "Please select a car")
        return check_pattern(v, INTEGER_RE, "Please select a car")

    @validator('slot')
    def validate_slot(cls, v):
        return check_min_length(v, 1, "Please select a time slot")

    @validator('booking_date')
    def validate_booking_date(cls, v):
        check_min_length(v, 1, "Please select a booking date")
        parse_iso_date(v, "Booking date must be a valid date (YYYY-MM-DD)")
        return v

    @validator('customer_mobile')
    def validate_customer_mobile(cls, v):
        if len(v) < 10:
            raise ValueError("Mobile number must be at least 10 digits")
        if len(v) > 10:
            raise ValueError("Mobile number must not exceed 10 digits")
        return check_pattern(v, TEN_DIGIT_MOBILE_RE, "Please enter a valid mobile number")

    @validator('course_id')
    def validate_course_id(cls, v):
        if v < 1:
            raise ValueError("Please select a course")
        return v


class BookingCreationResult(WireModel):
    """
    Everything created for a new booking.
    Failures after the booking itself exists are listed in warnings; nothing is rolled back.
    """
    booking: Booking
    total_amount: float
    session_dates: List[str] = Field(default_factory=list)
    session_ids: List[int] = Field(default_factory=list)
    booking_service_ids: List[int] = Field(default_factory=list)
    license_application_ids: List[int] = Field(default_factory=list)
    payment_id: Optional[int] = None
    warnings: List[str] = Field(default_factory=list)
