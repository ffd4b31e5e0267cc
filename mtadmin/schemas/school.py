"""
School Schemas
Read model, list filters, client inputs and the add-school / edit-profile forms
"""

from typing import Optional
from pydantic import Field, validator

from mtadmin.models.enums import SchoolStatus, WeekDay
from mtadmin.schemas.common import WireModel
from mtadmin.schemas.rules import (
    EMAIL_RE, ESTABLISHED_YEAR_RE, GST_RE, IFSC_RE, TIME_HHMM_RE, URL_RE,
    blank_to_none, check_min_length, check_no_space, check_pattern,
)


class School(WireModel):
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    alternate_phone: Optional[str] = None
    address: Optional[str] = None
    registration_number: Optional[str] = None
    gst_number: Optional[str] = None
    established_year: Optional[str] = None
    website: Optional[str] = None
    logo: Optional[str] = None

    # Operating hours
    day_start_time: Optional[str] = None
    day_end_time: Optional[str] = None
    lunch_start_time: Optional[str] = None
    lunch_end_time: Optional[str] = None
    weekly_holiday: Optional[str] = None

    # Owner
    owner_name: Optional[str] = None
    owner_phone: Optional[str] = None
    owner_email: Optional[str] = None

    # Bank
    bank_name: Optional[str] = None
    account_number: Optional[str] = None
    ifsc_code: Optional[str] = None
    branch_name: Optional[str] = None

    # Licenses
    rto_license_number: Optional[str] = None
    rto_license_expiry: Optional[str] = None
    insurance_provider: Optional[str] = None
    insurance_policy_number: Optional[str] = None
    insurance_expiry: Optional[str] = None

    # Social
    facebook: Optional[str] = None
    instagram: Optional[str] = None
    twitter: Optional[str] = None

    status: Optional[SchoolStatus] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    deleted_at: Optional[str] = None


class SchoolFilter(WireModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    status: Optional[SchoolStatus] = None
    address: Optional[str] = None


class SchoolCreate(WireModel):
    name: str
    email: str
    phone: str
    alternate_phone: Optional[str] = None
    address: str
    registration_number: str
    gst_number: Optional[str] = None
    established_year: str
    website: Optional[str] = None
    logo: Optional[str] = None


class SchoolUpdate(WireModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    alternate_phone: Optional[str] = None
    address: Optional[str] = None
    registration_number: Optional[str] = None
    gst_number: Optional[str] = None
    established_year: Optional[str] = None
    website: Optional[str] = None
    logo: Optional[str] = None
    status: Optional[SchoolStatus] = None
    day_start_time: Optional[str] = None
    day_end_time: Optional[str] = None
    lunch_start_time: Optional[str] = None
    lunch_end_time: Optional[str] = None
    weekly_holiday: Optional[str] = None
    owner_name: Optional[str] = None
    owner_phone: Optional[str] = None
    owner_email: Optional[str] = None
    bank_name: Optional[str] = None
    account_number: Optional[str] = None
    ifsc_code: Optional[str] = None
    branch_name: Optional[str] = None
    rto_license_number: Optional[str] = None
    rto_license_expiry: Optional[str] = None
    insurance_provider: Optional[str] = None
    insurance_policy_number: Optional[str] = None
    insurance_expiry: Optional[str] = None
    facebook: Optional[str] = None
    instagram: Optional[str] = None
    twitter: Optional[str] = None


# Forms
class AddSchoolForm(WireModel):
    """Add-school form; identity, contact and registration details"""
    name: str = Field(..., description="School name")
    email: str
    phone: str
    alternate_phone: Optional[str] = None
    address: str
    registration_number: str
    gst_number: Optional[str] = None
    established_year: str
    website: Optional[str] = None

    @validator('alternate_phone', 'gst_number', 'website', pre=True)
    def blank_optional(cls, v):
        return blank_to_none(v)

    @validator('name')
    def validate_name(cls, v):
        return check_min_length(v, 5, "School name must be at least 5 characters")

    @validator('email')
    def validate_email(cls, v):
        return check_pattern(v, EMAIL_RE, "Please enter valid email address")

    @validator('phone')
    def validate_phone(cls, v):
        check_min_length(v, 10, "Phone number should be at least 10 digits")
        return check_no_space(v, "Phone number cannot contain space")

    @validator('address')
    def validate_address(cls, v):
        return check_min_length(v, 10, "Address must be at least 10 characters")

    @validator('registration_number')
    def validate_registration_number(cls, v):
        return check_min_length(v, 5, "Registration number must be at least 5 characters")

    @validator('gst_number')
    def validate_gst_number(cls, v):
        if v is None:
            return v
        return check_pattern(v, GST_RE, "Please enter valid GST number")

    @validator('established_year')
    def validate_established_year(cls, v):
        return check_pattern(v, ESTABLISHED_YEAR_RE, "Please enter valid year (e.g., 2022)")

    @validator('website')
    def validate_website(cls, v):
        if v is None:
            return v
        return check_pattern(v, URL_RE, "Please enter valid URL")

    def to_create(self) -> SchoolCreate:
        return SchoolCreate(**self.model_dump(exclude_none=True))


class SchoolProfileForm(AddSchoolForm):
    """Edit-profile form: add-school fields plus hours, owner, bank and license details"""
    day_start_time: str
    day_end_time: str
    lunch_start_time: str
    lunch_end_time: str
    weekly_holiday: WeekDay

    owner_name: str
    owner_phone: str
    owner_email: str

    bank_name: str
    account_number: str
    ifsc_code: str
    branch_name: str

    rto_license_number: str
    rto_license_expiry: Optional[str] = None
    insurance_provider: Optional[str] = None
    insurance_policy_number: Optional[str] = None
    insurance_expiry: Optional[str] = None

    facebook: Optional[str] = None
    instagram: Optional[str] = None
    twitter: Optional[str] = None

    @validator('rto_license_expiry', 'insurance_provider', 'insurance_policy_number',
               'insurance_expiry', 'facebook', 'instagram', 'twitter', pre=True)
    def blank_profile_optional(cls, v):
        return blank_to_none(v)

    @validator('weekly_holiday', pre=True)
    def normalize_weekly_holiday(cls, v):
        if isinstance(v, str):
            if not v.strip():
                raise ValueError("Please select weekly holiday")
            return v.strip().upper()
        return v

    @validator('day_start_time', 'day_end_time', 'lunch_start_time', 'lunch_end_time')
    def validate_times(cls, v):
        return check_pattern(v, TIME_HHMM_RE, "Please enter valid time in HH:mm format")

    @validator('owner_name')
    def validate_owner_name(cls, v):
        return check_min_length(v, 3, "Owner name must be at least 3 characters")

    @validator('owner_phone')
    def validate_owner_phone(cls, v):
        check_min_length(v, 10, "Phone number should be at least 10 digits")
        return check_no_space(v, "Phone number cannot contain space")

    @validator('owner_email')
    def validate_owner_email(cls, v):
        return check_pattern(v, EMAIL_RE, "Please enter valid email address")

    @validator('bank_name')
    def validate_bank_name(cls, v):
        return check_min_length(v, 3, "Bank name must be at least 3 characters")

    @validator('account_number')
    def validate_account_number(cls, v):
        return check_min_length(v, 8, "Account number must be at least 8 characters")

    @validator('ifsc_code')
    def validate_ifsc_code(cls, v):
        return check_pattern(v, IFSC_RE, "Please enter valid IFSC code")

    @validator('branch_name')
    def validate_branch_name(cls, v):
        return check_min_length(v, 3, "Branch name must be at least 3 characters")

    @validator('rto_license_number')
    def validate_rto_license_number(cls, v):
        return check_min_length(v, 5, "RTO license number must be at least 5 characters")

    def to_update(self) -> SchoolUpdate:
        return SchoolUpdate(**self.model_dump(exclude_none=True))
