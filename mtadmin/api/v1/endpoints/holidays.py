"""
Holiday Endpoints
School-wide and single-car holidays, for whole days or particular slots
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from mtadmin import crud
from mtadmin.api.deps import get_pagination, get_request_context, get_transport
from mtadmin.core.transport import GraphQLTransport
from mtadmin.models.enums import HolidayDeclarationType
from mtadmin.schemas.common import DeleteResult, Page, RequestContext, SearchPagination
from mtadmin.schemas.holiday import Holiday, HolidayFilter, HolidayForm, HolidayUpdate
from mtadmin.schemas.rules import validate_form
from mtadmin.services.audit_service import create_user_context, get_audit_service

router = APIRouter()
audit = get_audit_service()


@router.get("/", response_model=Page[Holiday])
def list_holidays(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    pagination: SearchPagination = Depends(get_pagination),
    car_id: Optional[int] = Query(None, alias="carId", gt=0),
    declaration_type: Optional[HolidayDeclarationType] = Query(None, alias="declarationType"),
):
    where = HolidayFilter(school_id=context.require_school(), car_id=car_id, declaration_type=declaration_type)
    return crud.holiday.get_paginated(transport, pagination=pagination, where=where).unwrap()


@router.get("/{holiday_id}", response_model=Holiday)
def get_holiday(*, transport: GraphQLTransport = Depends(get_transport), holiday_id: int):
    return crud.holiday.get(transport, holiday_id).unwrap()


@router.post("/", response_model=Holiday, status_code=status.HTTP_201_CREATED)
def declare_holiday(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    form_in: Dict[str, Any] = Body(...),
):
    """
    Declare a holiday. ONE_CAR_* declarations need a car; *_PARTICULAR_SLOTS need slots.
    """
    form = validate_form(HolidayForm, form_in)
    created = crud.holiday.create(transport, obj_in=form.to_create(context.require_school())).unwrap()
    audit.log_mutation(
        "CREATE", "HOLIDAY", created.id, create_user_context(context),
        new_values={"declarationType": form.declaration_type, "dateRange": form.date_range},
    )
    return created


@router.put("/{holiday_id}", response_model=Holiday)
def update_holiday(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    holiday_id: int,
    holiday_in: HolidayUpdate,
):
    updated = crud.holiday.update(transport, id=holiday_id, obj_in=holiday_in).unwrap()
    audit.log_mutation("UPDATE", "HOLIDAY", holiday_id, create_user_context(context))
    return updated


@router.delete("/{holiday_id}", response_model=DeleteResult)
def delete_holiday(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    holiday_id: int,
):
    """Soft delete, recorded against the acting user"""
    deleted = crud.holiday.remove(transport, id=holiday_id, user_id=context.require_user()).unwrap()
    audit.log_mutation("DELETE", "HOLIDAY", holiday_id, create_user_context(context))
    return deleted
