"""
User Schemas
Customers and staff accounts as stored by the backend
"""

from typing import Optional
from pydantic import Field, validator

from mtadmin.models.enums import UserRole, UserStatus
from mtadmin.schemas.common import WireModel
from mtadmin.schemas.rules import EMAIL_RE, blank_to_none, check_min_length, check_pattern


class User(WireModel):
    id: int
    name: Optional[str] = None
    surname: Optional[str] = None
    father_name: Optional[str] = None
    contact1: Optional[str] = None
    contact2: Optional[str] = None
    address: Optional[str] = None
    permanent_address: Optional[str] = None
    blood_group: Optional[str] = None
    role: Optional[UserRole] = None
    email: Optional[str] = None
    dob: Optional[str] = None
    profile: Optional[str] = None
    status: Optional[UserStatus] = None
    school_id: Optional[int] = None
    created_at: Optional[str] = None
    created_by_id: Optional[int] = None
    updated_at: Optional[str] = None
    updated_by_id: Optional[int] = None
    deleted_at: Optional[str] = None


class UserFilter(WireModel):
    contact1: Optional[str] = None
    contact2: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    school_id: Optional[int] = None
    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None


class UserCreate(WireModel):
    name: str = Field(..., min_length=1)
    surname: Optional[str] = None
    father_name: Optional[str] = None
    contact1: str = Field(..., min_length=10)
    contact2: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    permanent_address: Optional[str] = None
    blood_group: Optional[str] = None
    dob: Optional[str] = None
    role: UserRole = UserRole.USER
    status: UserStatus = UserStatus.ACTIVE
    school_id: Optional[int] = None

    @validator('surname', 'father_name', 'contact2', 'email', 'address',
               'permanent_address', 'blood_group', 'dob', pre=True)
    def blank_optional(cls, v):
        return blank_to_none(v)

    @validator('name')
    def validate_name(cls, v):
        return check_min_length(v, 1, "Name is required")

    @validator('email')
    def validate_email(cls, v):
        if v is None:
            return v
        return check_pattern(v, EMAIL_RE, "Please enter valid email address")


class UserUpdate(WireModel):
    name: Optional[str] = None
    surname: Optional[str] = None
    father_name: Optional[str] = None
    contact1: Optional[str] = None
    contact2: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    permanent_address: Optional[str] = None
    blood_group: Optional[str] = None
    dob: Optional[str] = None
    profile: Optional[str] = None
    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None
