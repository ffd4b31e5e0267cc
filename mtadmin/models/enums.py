"""
Shared Enums for the Driving School Admin core
Closed, case-sensitive value sets exchanged with the GraphQL backend
"""

from enum import Enum as PythonEnum


class SchoolStatus(str, PythonEnum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"


class WeekDay(str, PythonEnum):
    """Weekly holiday values; index matches date.weekday()"""
    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"


class CarStatus(str, PythonEnum):
    AVAILABLE = "AVAILABLE"
    IN_USE = "IN_USE"
    MAINTENANCE = "MAINTENANCE"
    INACTIVE = "INACTIVE"


class FuelType(str, PythonEnum):
    PETROL = "PETROL"
    DIESEL = "DIESEL"
    ELECTRIC = "ELECTRIC"
    HYBRID = "HYBRID"
    CNG = "CNG"


class Transmission(str, PythonEnum):
    MANUAL = "MANUAL"
    AUTOMATIC = "AUTOMATIC"
    AMT = "AMT"
    CVT = "CVT"


class DriverStatus(str, PythonEnum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    ON_LEAVE = "ON_LEAVE"
    SUSPENDED = "SUSPENDED"


class LeaveStatus(str, PythonEnum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


class SalaryStatus(str, PythonEnum):
    PENDING = "PENDING"
    PAID = "PAID"
    PROCESSING = "PROCESSING"


class CourseType(str, PythonEnum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    REFRESHER = "REFRESHER"


class CourseStatus(str, PythonEnum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    UPCOMING = "UPCOMING"
    ARCHIVED = "ARCHIVED"


class ServiceType(str, PythonEnum):
    """Whether a service is sold as a license service or an add-on"""
    LICENSE = "LICENSE"
    ADDON = "ADDON"


class ServiceCategory(str, PythonEnum):
    NEW_LICENSE = "NEW_LICENSE"
    I_HOLD_LICENSE = "I_HOLD_LICENSE"
    TRANSPORT = "TRANSPORT"
    IDP = "IDP"


class ServiceStatus(str, PythonEnum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    UPCOMING = "UPCOMING"
    DISCONTINUED = "DISCONTINUED"


class SchoolServiceStatus(str, PythonEnum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class BookingStatus(str, PythonEnum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"


class SessionStatus(str, PythonEnum):
    """
    Booking session status
    HOLD marks a provisional hold; EDITED marks a session superseded by a replacement.
    """
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"
    HOLD = "HOLD"
    EDITED = "EDITED"


# Sessions in these states do not occupy their car/slot
SLOT_RELEASING_SESSION_STATUSES = frozenset({
    SessionStatus.CANCELLED.value,
    SessionStatus.NO_SHOW.value,
    SessionStatus.HOLD.value,
    SessionStatus.EDITED.value,
})


class AmendmentAction(str, PythonEnum):
    CANCEL_BOOKING = "CANCEL_BOOKING"
    CHANGE_DATE = "CHANGE_DATE"
    CAR_BREAKDOWN = "CAR_BREAKDOWN"
    CAR_HOLIDAY = "CAR_HOLIDAY"
    RELEASE_HOLD = "RELEASE_HOLD"


class BookingDateStatus(str, PythonEnum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class BookingRollupStatus(str, PythonEnum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    PARTIAL = "partial"


class PaymentStatus(str, PythonEnum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


class PaymentMethod(str, PythonEnum):
    CASH = "CASH"
    UPI = "UPI"
    CARD = "CARD"
    BANK_TRANSFER = "BANK_TRANSFER"
    CHEQUE = "CHEQUE"


class HolidayDeclarationType(str, PythonEnum):
    ALL_CARS_MULTIPLE_DATES = "ALL_CARS_MULTIPLE_DATES"
    ONE_CAR_MULTIPLE_DATES = "ONE_CAR_MULTIPLE_DATES"
    ALL_CARS_PARTICULAR_SLOTS = "ALL_CARS_PARTICULAR_SLOTS"
    ONE_CAR_PARTICULAR_SLOTS = "ONE_CAR_PARTICULAR_SLOTS"


class LicenseTestStatus(str, PythonEnum):
    NONE = "NONE"
    PASSED = "PASSED"
    FAILED = "FAILED"
    ABSENT = "ABSENT"


class LicenseApplicationStatus(str, PythonEnum):
    PENDING = "PENDING"
    CLOSED = "CLOSED"
    LL_APPLIED = "LL_APPLIED"
    DL_PENDING = "DL_PENDING"
    DL_APPLIED = "DL_APPLIED"


class UserRole(str, PythonEnum):
    ADMIN = "ADMIN"
    INSTRUCTOR = "INSTRUCTOR"
    STUDENT = "STUDENT"
    DRIVER = "DRIVER"
    MTADMIN = "MTADMIN"
    USER = "USER"


class UserStatus(str, PythonEnum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
