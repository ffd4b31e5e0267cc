"""
Shared enumerations for the driving school admin core
"""

from mtadmin.models.enums import (
    AmendmentAction, BookingDateStatus, BookingRollupStatus, BookingStatus,
    CarStatus, CourseStatus, CourseType, DriverStatus, FuelType,
    HolidayDeclarationType, LeaveStatus, LicenseApplicationStatus, LicenseTestStatus,
    PaymentMethod, PaymentStatus, SalaryStatus, SchoolServiceStatus, SchoolStatus,
    ServiceCategory, ServiceStatus, ServiceType, SessionStatus, Transmission,
    UserRole, UserStatus, WeekDay, SLOT_RELEASING_SESSION_STATUSES,
)
