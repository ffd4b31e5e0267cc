"""
Booking Service Endpoints
Services attached to bookings and their license applications
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query

from mtadmin import crud
from mtadmin.api.deps import get_pagination, get_request_context, get_transport
from mtadmin.core.transport import GraphQLTransport
from mtadmin.models.enums import LicenseApplicationStatus
from mtadmin.schemas.booking import BookingServiceFilter, BookingServiceItem
from mtadmin.schemas.common import Page, RequestContext, SearchPagination
from mtadmin.schemas.license_application import (
    LicenseApplication, LicenseApplicationFilter, LicenseApplicationUpdate,
)
from mtadmin.services.audit_service import create_user_context, get_audit_service

router = APIRouter()
license_router = APIRouter()
audit = get_audit_service()


@router.get("/", response_model=List[BookingServiceItem])
def list_booking_services(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    booking_id: Optional[int] = Query(None, alias="bookingId", gt=0),
    user_id: Optional[int] = Query(None, alias="userId", gt=0),
):
    """Attached services of a booking, a customer, or the whole school"""
    where = BookingServiceFilter(booking_id=booking_id, user_id=user_id)
    if booking_id is None and user_id is None:
        where.school_id = context.require_school()
    return crud.booking_service.get_all(transport, where=where).unwrap()


@router.get("/{booking_service_id}", response_model=BookingServiceItem)
def get_booking_service(*, transport: GraphQLTransport = Depends(get_transport), booking_service_id: int):
    return crud.booking_service.get(transport, booking_service_id).unwrap()


# License applications
@license_router.get("/", response_model=Page[LicenseApplication])
def list_license_applications(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    pagination: SearchPagination = Depends(get_pagination),
    booking_service_id: Optional[int] = Query(None, alias="bookingServiceId", gt=0),
    application_status: Optional[LicenseApplicationStatus] = Query(None, alias="status"),
):
    where = LicenseApplicationFilter(booking_service_id=booking_service_id, status=application_status)
    return crud.license_application.get_paginated(transport, pagination=pagination, where=where).unwrap()


@license_router.get("/{application_id}", response_model=LicenseApplication)
def get_license_application(*, transport: GraphQLTransport = Depends(get_transport), application_id: int):
    return crud.license_application.get(transport, application_id).unwrap()


@license_router.put("/{application_id}", response_model=LicenseApplication)
def update_license_application(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    application_id: int,
    application_in: LicenseApplicationUpdate = Body(...),
):
    """Record LL/DL numbers, test dates and results"""
    updated = crud.license_application.update(transport, id=application_id, obj_in=application_in).unwrap()
    audit.log_mutation(
        "UPDATE", "LICENSE_APPLICATION", application_id, create_user_context(context),
        new_values=application_in.model_dump(by_alias=True, exclude_unset=True, mode="json"),
    )
    return updated
