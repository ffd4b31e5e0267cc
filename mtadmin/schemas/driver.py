"""
Driver Schemas
Driver read model with read-only leave and salary history, list filters and the add-driver form
"""

from typing import List, Optional
from pydantic import Field, validator

from mtadmin.models.enums import DriverStatus, LeaveStatus, SalaryStatus
from mtadmin.schemas.common import WireModel
from mtadmin.schemas.rules import (
    EMAIL_RE, INTEGER_RE, TEN_DIGIT_MOBILE_RE,
    blank_to_none, check_min_length, check_pattern, to_int,
)


class LeaveHistory(WireModel):
    id: int
    driver_id: Optional[int] = None
    leave_id: Optional[str] = None
    from_date: Optional[str] = None
    to_date: Optional[str] = None
    reason: Optional[str] = None
    leave_type: Optional[str] = None
    total_days: Optional[int] = None
    status: Optional[LeaveStatus] = None
    approved_by: Optional[int] = None
    approved_at: Optional[str] = None
    rejection_reason: Optional[str] = None
    created_at: Optional[str] = None


class SalaryHistory(WireModel):
    id: int
    driver_id: Optional[int] = None
    salary_id: Optional[str] = None
    month: Optional[str] = None
    year: Optional[int] = None
    month_number: Optional[int] = None
    basic_salary: Optional[float] = None
    bonus: Optional[float] = None
    deductions: Optional[float] = None
    net_salary: Optional[float] = None
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None
    paid_on: Optional[str] = None
    status: Optional[SalaryStatus] = None
    created_at: Optional[str] = None


class Driver(WireModel):
    id: int
    user_id: Optional[int] = None
    school_id: Optional[int] = None
    driver_id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    mobile: Optional[str] = None
    alternate_phone: Optional[str] = None
    address: Optional[str] = None
    date_of_birth: Optional[str] = None
    blood_group: Optional[str] = None
    gender: Optional[str] = None
    license_number: Optional[str] = None
    license_type: Optional[str] = None
    license_issue_date: Optional[str] = None
    license_expiry_date: Optional[str] = None
    experience: Optional[int] = None
    joining_date: Optional[str] = None
    salary: Optional[float] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_number: Optional[str] = None
    emergency_contact_relation: Optional[str] = None
    total_bookings: Optional[int] = None
    completed_bookings: Optional[int] = None
    cancelled_bookings: Optional[int] = None
    rating: Optional[float] = None
    status: Optional[DriverStatus] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class DriverWithHistory(Driver):
    leave_history: List[LeaveHistory] = Field(default_factory=list)
    salary_history: List[SalaryHistory] = Field(default_factory=list)

    @validator('leave_history', 'salary_history', pre=True)
    def null_history(cls, v):
        return v or []


class DriverFilter(WireModel):
    school_id: Optional[int] = None
    status: Optional[DriverStatus] = None
    license_type: Optional[str] = None
    search: Optional[str] = None


class DriverCreate(WireModel):
    school_id: int
    name: str
    email: str
    mobile: str
    alternate_phone: Optional[str] = None
    address: str
    date_of_birth: str
    blood_group: Optional[str] = None
    gender: str
    license_number: str
    license_type: str
    license_issue_date: str
    license_expiry_date: str
    experience: Optional[int] = None
    joining_date: Optional[str] = None
    salary: Optional[float] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_number: Optional[str] = None
    emergency_contact_relation: Optional[str] = None


class DriverUpdate(WireModel):
    # Booking counters are accepted here as the backend allows it; they should only
    # move through session/booking transitions.
    name: Optional[str] = None
    email: Optional[str] = None
    mobile: Optional[str] = None
    alternate_phone: Optional[str] = None
    address: Optional[str] = None
    date_of_birth: Optional[str] = None
    blood_group: Optional[str] = None
    gender: Optional[str] = None
    license_number: Optional[str] = None
    license_type: Optional[str] = None
    license_issue_date: Optional[str] = None
    license_expiry_date: Optional[str] = None
    experience: Optional[int] = None
    joining_date: Optional[str] = None
    salary: Optional[float] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_number: Optional[str] = None
    emergency_contact_relation: Optional[str] = None
    total_bookings: Optional[int] = None
    completed_bookings: Optional[int] = None
    cancelled_bookings: Optional[int] = None
    rating: Optional[float] = None
    status: Optional[DriverStatus] = None


class AddDriverForm(WireModel):
    name: str
    email: str
    mobile: str
    alternate_phone: Optional[str] = None
    address: str
    date_of_birth: str
    blood_group: Optional[str] = None
    gender: str
    license_number: str
    license_type: str
    license_issue_date: str
    license_expiry_date: str
    experience: Optional[str] = None
    joining_date: Optional[str] = None
    salary: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_number: Optional[str] = None
    emergency_contact_relation: Optional[str] = None

    @validator('alternate_phone', 'blood_group', 'experience', 'joining_date', 'salary',
               'emergency_contact_name', 'emergency_contact_number',
               'emergency_contact_relation', pre=True)
    def blank_optional(cls, v):
        v = blank_to_none(v)
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @validator('name')
    def validate_name(cls, v):
        return check_min_length(v, 3, "Name must be at least 3 characters")

    @validator('email')
    def validate_email(cls, v):
        return check_pattern(v, EMAIL_RE, "Invalid email address")

    @validator('mobile')
    def validate_mobile(cls, v):
        return check_pattern(v, TEN_DIGIT_MOBILE_RE, "Mobile number must be 10 digits")

    @validator('alternate_phone')
    def validate_alternate_phone(cls, v):
        if v is None:
            return v
        return check_pattern(v, TEN_DIGIT_MOBILE_RE, "Alternate phone must be 10 digits")

    @validator('address')
    def validate_address(cls, v):
        return check_min_length(v, 10, "Address must be at least 10 characters")

    @validator('date_of_birth')
    def validate_date_of_birth(cls, v):
        return check_min_length(v, 1, "Date of birth is required")

    @validator('gender')
    def validate_gender(cls, v):
        return check_min_length(v, 1, "Gender is required")

    @validator('license_number')
    def validate_license_number(cls, v):
        return check_min_length(v, 5, "License number must be at least 5 characters")

    @validator('license_type')
    def validate_license_type(cls, v):
        return check_min_length(v, 1, "License type is required")

    @validator('license_issue_date')
    def validate_license_issue_date(cls, v):
        return check_min_length(v, 1, "License issue date is required")

    @validator('license_expiry_date')
    def validate_license_expiry_date(cls, v):
        return check_min_length(v, 1, "License expiry date is required")

    @validator('experience')
    def validate_experience(cls, v):
        if v is None:
            return v
        return check_pattern(v, INTEGER_RE, "Experience must be a number")

    @validator('salary')
    def validate_salary(cls, v):
        if v is None:
            return v
        return check_pattern(v, INTEGER_RE, "Salary must be a number")

    @validator('emergency_contact_number')
    def validate_emergency_contact_number(cls, v):
        if v is None:
            return v
        return check_pattern(v, TEN_DIGIT_MOBILE_RE, "Emergency contact must be 10 digits")

    def to_create(self, school_id: int) -> DriverCreate:
        values = self.model_dump(exclude_none=True)
        if 'experience' in values:
            values['experience'] = to_int(values['experience'])
        if 'salary' in values:
            values['salary'] = float(values['salary'])
        return DriverCreate(school_id=school_id, **values)
