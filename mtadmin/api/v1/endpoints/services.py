"""
Service Catalogue Endpoints
Services (license and add-on) and the per-school offers priced from them
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from mtadmin import crud
from mtadmin.api.deps import get_pagination, get_request_context, get_transport
from mtadmin.core.transport import GraphQLTransport
from mtadmin.models.enums import SchoolServiceStatus, ServiceCategory, ServiceStatus, ServiceType
from mtadmin.schemas.common import DeleteResult, Page, RequestContext, SearchPagination
from mtadmin.schemas.rules import validate_form
from mtadmin.schemas.service import (
    AddServiceForm, EditSchoolServiceForm, EditServiceForm, SchoolService, SchoolServiceFilter,
    SchoolServiceForm, Service, ServiceFilter,
)
from mtadmin.services.audit_service import create_user_context, get_audit_service

router = APIRouter()
school_service_router = APIRouter()
audit = get_audit_service()


# Service endpoints
@router.get("/", response_model=Page[Service])
def list_services(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    pagination: SearchPagination = Depends(get_pagination),
    school_id: Optional[int] = Query(None, alias="schoolId", gt=0),
    service_type: Optional[ServiceType] = Query(None, alias="serviceType"),
    category: Optional[ServiceCategory] = Query(None),
    service_status: Optional[ServiceStatus] = Query(None, alias="status"),
):
    """
    Paginated service catalogue
    """
    where = ServiceFilter(school_id=school_id, service_type=service_type, category=category, status=service_status)
    return crud.service.get_paginated(transport, pagination=pagination, where=where).unwrap()


@router.get("/{service_id}", response_model=Service)
def get_service(*, transport: GraphQLTransport = Depends(get_transport), service_id: int):
    return crud.service.get(transport, service_id).unwrap()


@router.post("/", response_model=Service, status_code=status.HTTP_201_CREATED)
def create_service(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    form_in: Dict[str, Any] = Body(...),
):
    form = validate_form(AddServiceForm, form_in)
    created = crud.service.create(transport, obj_in=form.to_create(context.school_id)).unwrap()
    audit.log_mutation("CREATE", "SERVICE", created.id, create_user_context(context))
    return created


@router.put("/{service_id}", response_model=Service)
def update_service(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    service_id: int,
    form_in: Dict[str, Any] = Body(...),
):
    update = validate_form(EditServiceForm, form_in).to_update()
    updated = crud.service.update(transport, id=service_id, obj_in=update).unwrap()
    audit.log_mutation("UPDATE", "SERVICE", service_id, create_user_context(context))
    return updated


@router.delete("/{service_id}", response_model=DeleteResult)
def delete_service(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    service_id: int,
):
    deleted = crud.service.remove(transport, id=service_id).unwrap()
    audit.log_mutation("DELETE", "SERVICE", service_id, create_user_context(context))
    return deleted


# School service endpoints
@school_service_router.get("/", response_model=Page[SchoolService])
def list_school_services(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    pagination: SearchPagination = Depends(get_pagination),
    offer_status: Optional[SchoolServiceStatus] = Query(None, alias="status"),
):
    where = SchoolServiceFilter(school_id=context.require_school(), status=offer_status)
    return crud.school_service.get_paginated(transport, pagination=pagination, where=where).unwrap()


@school_service_router.get("/all", response_model=List[SchoolService])
def list_all_school_services(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
):
    """Every active offer of the acting school, for the booking form"""
    where = SchoolServiceFilter(school_id=context.require_school(), status=SchoolServiceStatus.ACTIVE)
    return crud.school_service.get_all(transport, where=where).unwrap()


@school_service_router.get("/{school_service_id}", response_model=SchoolService)
def get_school_service(*, transport: GraphQLTransport = Depends(get_transport), school_service_id: int):
    return crud.school_service.get(transport, school_service_id).unwrap()


@school_service_router.post("/", response_model=SchoolService, status_code=status.HTTP_201_CREATED)
def create_school_service(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    form_in: Dict[str, Any] = Body(...),
):
    """
    Offer a catalogue service at the acting school with its license and add-on prices
    """
    form = validate_form(SchoolServiceForm, form_in)
    created = crud.school_service.create(transport, obj_in=form.to_create(context.require_school())).unwrap()
    audit.log_mutation(
        "CREATE", "SCHOOL_SERVICE", created.id, create_user_context(context),
        new_values={"licensePrice": created.license_price, "addonPrice": created.addon_price},
    )
    return created


@school_service_router.put("/{school_service_id}", response_model=SchoolService)
def update_school_service(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    school_service_id: int,
    form_in: Dict[str, Any] = Body(...),
):
    update = validate_form(EditSchoolServiceForm, form_in).to_update()
    updated = crud.school_service.update(transport, id=school_service_id, obj_in=update).unwrap()
    audit.log_mutation(
        "UPDATE", "SCHOOL_SERVICE", school_service_id, create_user_context(context),
        new_values=update.model_dump(by_alias=True, exclude_unset=True, mode="json"),
    )
    return updated


@school_service_router.delete("/{school_service_id}", response_model=DeleteResult)
def delete_school_service(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    school_service_id: int,
):
    deleted = crud.school_service.remove(transport, id=school_service_id).unwrap()
    audit.log_mutation("DELETE", "SCHOOL_SERVICE", school_service_id, create_user_context(context))
    return deleted
