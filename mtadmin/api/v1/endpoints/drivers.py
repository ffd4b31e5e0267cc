"""
Driver Management Endpoints
Drivers of the acting school, with their leave and salary history
"""

from typing import Any, Dict, Optional
import logging

from fastapi import APIRouter, Body, Depends, Query, status

from mtadmin import crud
from mtadmin.api.deps import get_pagination, get_request_context, get_transport
from mtadmin.core.transport import GraphQLTransport
from mtadmin.models.enums import DriverStatus
from mtadmin.schemas.common import DeleteResult, Page, RequestContext, SearchPagination
from mtadmin.schemas.driver import AddDriverForm, Driver, DriverFilter, DriverUpdate, DriverWithHistory
from mtadmin.schemas.rules import validate_form
from mtadmin.services.audit_service import create_user_context, get_audit_service

logger = logging.getLogger(__name__)
router = APIRouter()
audit = get_audit_service()

# Booking counters are derived from sessions; edits through this API are only logged
DRIVER_COUNTER_FIELDS = ("total_bookings", "completed_bookings", "cancelled_bookings")


@router.get("/", response_model=Page[Driver])
def list_drivers(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    pagination: SearchPagination = Depends(get_pagination),
    driver_status: Optional[DriverStatus] = Query(None, alias="status", description="Filter by status"),
):
    where = DriverFilter(school_id=context.require_school(), status=driver_status)
    return crud.driver.get_paginated(transport, pagination=pagination, where=where).unwrap()


@router.get("/{driver_id}", response_model=Driver)
def get_driver(*, transport: GraphQLTransport = Depends(get_transport), driver_id: int):
    return crud.driver.get(transport, driver_id).unwrap()


@router.get("/{driver_id}/history", response_model=DriverWithHistory)
def get_driver_history(*, transport: GraphQLTransport = Depends(get_transport), driver_id: int):
    """Driver with leave and salary history"""
    return crud.driver.get_with_history(transport, driver_id).unwrap()


@router.post("/", response_model=Driver, status_code=status.HTTP_201_CREATED)
def create_driver(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    form_in: Dict[str, Any] = Body(...),
):
    form = validate_form(AddDriverForm, form_in)
    created = crud.driver.create(transport, obj_in=form.to_create(context.require_school())).unwrap()
    audit.log_mutation("CREATE", "DRIVER", created.id, create_user_context(context), new_values={"name": created.name})
    return created


@router.put("/{driver_id}", response_model=Driver)
def update_driver(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    driver_id: int,
    driver_in: DriverUpdate,
):
    changed = driver_in.model_dump(by_alias=True, exclude_unset=True, mode="json")
    touched = [name for name in DRIVER_COUNTER_FIELDS if name in driver_in.model_fields_set]
    if touched:
        logger.warning(f"Driver {driver_id} booking counters edited directly: {', '.join(touched)}")
    updated = crud.driver.update(transport, id=driver_id, obj_in=driver_in).unwrap()
    audit.log_mutation("UPDATE", "DRIVER", driver_id, create_user_context(context), new_values=changed)
    return updated


@router.delete("/{driver_id}", response_model=DeleteResult)
def delete_driver(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    driver_id: int,
):
    deleted = crud.driver.remove(transport, id=driver_id).unwrap()
    audit.log_mutation("DELETE", "DRIVER", driver_id, create_user_context(context))
    return deleted
