"""
Service and School Service Schemas

Service.features / Service.includedServices travel as JSON-encoded string arrays.
They are decoded once, when a payload is parsed, and encoded again on submission.
"""

from typing import Any, List, Optional
import re

from pydantic import Field, validator

from mtadmin.models.enums import (
    SchoolServiceStatus, ServiceCategory, ServiceStatus, ServiceType,
)
from mtadmin.schemas.common import WireModel, decode_string_list, encode_string_list
from mtadmin.schemas.rules import (
    DECIMAL_RE, INTEGER_RE,
    blank_to_none, check_choice, check_min_length, check_pattern,
)


def split_items(value: Any) -> List[str]:
    """Form text: JSON array, or one item per line / comma-separated"""
    value = blank_to_none(value)
    if value is None:
        return []
    if isinstance(value, list):
        return [str(item).strip() for item in value if str(item).strip()]
    text = str(value).strip()
    if text.startswith("["):
        return decode_string_list(text)
    return [item.strip() for item in re.split(r"[\n,]", text) if item.strip()]


class Service(WireModel):
    id: int
    school_id: Optional[int] = None
    service_id: Optional[str] = None
    service_name: Optional[str] = None
    service_type: Optional[ServiceType] = None
    category: Optional[ServiceCategory] = None
    price: Optional[float] = None
    duration: Optional[int] = None
    description: Optional[str] = None
    features: List[str] = Field(default_factory=list)
    included_services: List[str] = Field(default_factory=list)
    requirements: Optional[str] = None
    terms_and_conditions: Optional[str] = None
    active_users: Optional[int] = None
    total_revenue: Optional[float] = None
    status: Optional[ServiceStatus] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @validator('features', 'included_services', pre=True)
    def decode_lists(cls, v):
        return decode_string_list(v)


class ServiceFilter(WireModel):
    school_id: Optional[int] = None
    service_type: Optional[ServiceType] = None
    category: Optional[ServiceCategory] = None
    status: Optional[ServiceStatus] = None


def encode_list_field(v):
    if v is None:
        return None
    return encode_string_list(decode_string_list(v))


class ServiceCreate(WireModel):
    school_id: Optional[int] = None
    service_name: str
    service_type: ServiceType = ServiceType.LICENSE
    category: ServiceCategory
    price: float
    duration: int
    description: str
    features: Optional[str] = None
    included_services: Optional[str] = None
    requirements: Optional[str] = None
    terms_and_conditions: Optional[str] = None

    @validator('features', 'included_services', pre=True)
    def encode_lists(cls, v):
        return encode_list_field(v)


class ServiceUpdate(WireModel):
    service_name: Optional[str] = None
    service_type: Optional[ServiceType] = None
    category: Optional[ServiceCategory] = None
    price: Optional[float] = None
    duration: Optional[int] = None
    description: Optional[str] = None
    features: Optional[str] = None
    included_services: Optional[str] = None
    requirements: Optional[str] = None
    terms_and_conditions: Optional[str] = None
    status: Optional[ServiceStatus] = None

    @validator('features', 'included_services', pre=True)
    def encode_lists(cls, v):
        return encode_list_field(v)


class _ServiceFormBase(WireModel):
    service_name: str
    category: str
    duration: str
    description: str
    features: List[str] = Field(default_factory=list)
    included_services: List[str] = Field(default_factory=list)
    requirements: Optional[str] = None
    terms_and_conditions: Optional[str] = None

    @validator('features', 'included_services', pre=True)
    def parse_items(cls, v):
        return split_items(v)

    @validator('duration', pre=True)
    def duration_as_string(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @validator('requirements', 'terms_and_conditions', pre=True)
    def blank_optional(cls, v):
        return blank_to_none(v)

    @validator('service_name')
    def validate_service_name(cls, v):
        return check_min_length(v, 3, "Service name must be at least 3 characters")

    @validator('category')
    def validate_category(cls, v):
        return check_choice(v, ServiceCategory, "Category is required")

    @validator('duration')
    def validate_duration(cls, v):
        return check_pattern(v, INTEGER_RE, "Duration must be a number")

    @validator('description')
    def validate_description(cls, v):
        return check_min_length(v, 10, "Description must be at least 10 characters")


class AddServiceForm(_ServiceFormBase):
    service_type: str = ServiceType.LICENSE.value
    price: str

    @validator('price', pre=True)
    def price_as_string(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @validator('service_type')
    def validate_service_type(cls, v):
        return check_choice(v, ServiceType, "Service type is required")

    @validator('price')
    def validate_price(cls, v):
        return check_pattern(v, DECIMAL_RE, "Price must be a valid number")

    def to_create(self, school_id: Optional[int] = None) -> ServiceCreate:
        return ServiceCreate(
            school_id=school_id,
            service_name=self.service_name,
            service_type=self.service_type,
            category=self.category,
            price=float(self.price),
            duration=int(self.duration),
            description=self.description,
            features=self.features,
            included_services=self.included_services,
            requirements=self.requirements,
            terms_and_conditions=self.terms_and_conditions,
        )


class EditServiceForm(_ServiceFormBase):
    service_id: str = ""
    status: str

    @validator('status')
    def validate_status(cls, v):
        return check_choice(v, ServiceStatus, "Please select a valid status")

    def to_update(self) -> ServiceUpdate:
        return ServiceUpdate(
            service_name=self.service_name,
            category=self.category,
            duration=int(self.duration),
            description=self.description,
            features=self.features,
            included_services=self.included_services,
            requirements=self.requirements,
            terms_and_conditions=self.terms_and_conditions,
            status=self.status,
        )


# School services
class SchoolRef(WireModel):
    id: int
    name: Optional[str] = None


class ServiceRef(WireModel):
    id: int
    service_id: Optional[str] = None
    service_name: Optional[str] = None
    category: Optional[ServiceCategory] = None
    duration: Optional[int] = None
    description: Optional[str] = None


class SchoolService(WireModel):
    id: int
    school_id: Optional[int] = None
    service_id: Optional[int] = None
    school_service_id: Optional[str] = None
    license_price: Optional[float] = None
    addon_price: Optional[float] = None
    status: Optional[SchoolServiceStatus] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    deleted_at: Optional[str] = None
    school: Optional[SchoolRef] = None
    service: Optional[ServiceRef] = None


class SchoolServiceFilter(WireModel):
    school_id: Optional[int] = None
    service_id: Optional[int] = None
    status: Optional[SchoolServiceStatus] = None


class SchoolServiceCreate(WireModel):
    school_id: int = Field(..., gt=0)
    service_id: int = Field(..., gt=0)
    license_price: float = Field(..., ge=0)
    addon_price: float = Field(..., ge=0)


class SchoolServiceUpdate(WireModel):
    school_id: Optional[int] = None
    service_id: Optional[int] = None
    license_price: Optional[float] = Field(None, ge=0)
    addon_price: Optional[float] = Field(None, ge=0)
    status: Optional[SchoolServiceStatus] = None


class SchoolServiceForm(WireModel):
    """Prices may arrive as strings or numbers; both are checked as decimal text"""
    service_id: str
    license_price: str
    addon_price: str

    @validator('service_id', 'license_price', 'addon_price', pre=True)
    def as_string(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @validator('service_id')
    def validate_service_id(cls, v):
        if not v:
            raise ValueError("Service is required")
        return check_pattern(v, INTEGER_RE, "Please select a valid service")

    @validator('license_price')
    def validate_license_price(cls, v):
        return check_pattern(v, DECIMAL_RE, "License price must be a valid number")

    @validator('addon_price')
    def validate_addon_price(cls, v):
        return check_pattern(v, DECIMAL_RE, "Addon price must be a valid number")

    def to_create(self, school_id: int) -> SchoolServiceCreate:
        return SchoolServiceCreate(
            school_id=school_id,
            service_id=int(self.service_id),
            license_price=float(self.license_price),
            addon_price=float(self.addon_price),
        )


class EditSchoolServiceForm(SchoolServiceForm):
    status: str

    @validator('status')
    def validate_status(cls, v):
        if not v:
            raise ValueError("Status is required")
        return check_choice(v, SchoolServiceStatus, "Status is required")

    def to_update(self) -> SchoolServiceUpdate:
        return SchoolServiceUpdate(
            service_id=int(self.service_id),
            license_price=float(self.license_price),
            addon_price=float(self.addon_price),
            status=self.status,
        )
