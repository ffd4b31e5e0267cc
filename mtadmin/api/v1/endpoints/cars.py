"""
Car Management Endpoints
Fleet of the acting school: list, view, add, edit and retire cars
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from mtadmin import crud
from mtadmin.api.deps import get_pagination, get_request_context, get_transport
from mtadmin.core.transport import GraphQLTransport
from mtadmin.models.enums import CarStatus, FuelType
from mtadmin.schemas.car import AddCarForm, Car, CarFilter, EditCarForm
from mtadmin.schemas.common import DeleteResult, Page, RequestContext, SearchPagination
from mtadmin.schemas.rules import validate_form
from mtadmin.services.audit_service import create_user_context, get_audit_service

router = APIRouter()
audit = get_audit_service()


@router.get("/", response_model=Page[Car])
def list_cars(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    pagination: SearchPagination = Depends(get_pagination),
    car_status: Optional[CarStatus] = Query(None, alias="status", description="Filter by status"),
    fuel_type: Optional[FuelType] = Query(None, alias="fuelType", description="Filter by fuel type"),
):
    """Paginated cars of the acting school"""
    where = CarFilter(school_id=context.require_school(), status=car_status, fuel_type=fuel_type)
    return crud.car.get_paginated(transport, pagination=pagination, where=where).unwrap()


@router.get("/all", response_model=List[Car])
def list_all_cars(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
):
    """Every car of the acting school, for pickers"""
    return crud.car.get_all(transport, where=CarFilter(school_id=context.require_school())).unwrap()


@router.get("/{car_id}", response_model=Car)
def get_car(*, transport: GraphQLTransport = Depends(get_transport), car_id: int):
    return crud.car.get(transport, car_id).unwrap()


@router.post("/", response_model=Car, status_code=status.HTTP_201_CREATED)
def create_car(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    form_in: Dict[str, Any] = Body(...),
):
    form = validate_form(AddCarForm, form_in)
    created = crud.car.create(transport, obj_in=form.to_create(context.require_school())).unwrap()
    audit.log_mutation("CREATE", "CAR", created.id, create_user_context(context), new_values={"carId": created.car_id})
    return created


@router.put("/{car_id}", response_model=Car)
def update_car(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    car_id: int,
    form_in: Dict[str, Any] = Body(...),
):
    """
    Save the edit-car form; blank optional fields are left unchanged
    """
    update = validate_form(EditCarForm, form_in).to_update()
    updated = crud.car.update(transport, id=car_id, obj_in=update).unwrap()
    audit.log_mutation(
        "UPDATE", "CAR", car_id, create_user_context(context),
        new_values=update.model_dump(by_alias=True, exclude_unset=True, mode="json"),
    )
    return updated


@router.delete("/{car_id}", response_model=DeleteResult)
def delete_car(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    car_id: int,
):
    deleted = crud.car.remove(transport, id=car_id).unwrap()
    audit.log_mutation("DELETE", "CAR", car_id, create_user_context(context))
    return deleted
