"""
License Application Schemas
Learner/driving license paperwork tracked for NEW_LICENSE booking services
"""

from typing import Optional

from mtadmin.models.enums import LicenseApplicationStatus, LicenseTestStatus
from mtadmin.schemas.common import WireModel


class LicenseBookingServiceRef(WireModel):
    id: int
    service_name: Optional[str] = None
    confirmation_number: Optional[str] = None


class LicenseApplication(WireModel):
    id: int
    booking_service_id: Optional[int] = None
    ll_number: Optional[str] = None
    issued_date: Optional[str] = None
    dl_application_number: Optional[str] = None
    test_date: Optional[str] = None
    test_status: Optional[LicenseTestStatus] = None
    status: Optional[LicenseApplicationStatus] = None
    booking_service: Optional[LicenseBookingServiceRef] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class LicenseApplicationFilter(WireModel):
    booking_service_id: Optional[int] = None
    status: Optional[LicenseApplicationStatus] = None
    test_status: Optional[LicenseTestStatus] = None


class LicenseApplicationCreate(WireModel):
    booking_service_id: int
    status: LicenseApplicationStatus = LicenseApplicationStatus.PENDING
    test_status: LicenseTestStatus = LicenseTestStatus.NONE


class LicenseApplicationUpdate(WireModel):
    ll_number: Optional[str] = None
    issued_date: Optional[str] = None
    dl_application_number: Optional[str] = None
    test_date: Optional[str] = None
    test_status: Optional[LicenseTestStatus] = None
    status: Optional[LicenseApplicationStatus] = None
