"""
School Management Endpoints
List, view, create and edit schools, plus the school profile and its completeness
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from pydantic.alias_generators import to_camel

from mtadmin import crud
from mtadmin.api.deps import get_pagination, get_request_context, get_transport
from mtadmin.core.transport import GraphQLTransport
from mtadmin.models.enums import SchoolStatus
from mtadmin.schemas.common import Page, RequestContext, SearchPagination
from mtadmin.schemas.rules import validate_form
from mtadmin.schemas.school import AddSchoolForm, School, SchoolFilter, SchoolProfileForm, SchoolUpdate
from mtadmin.services.audit_service import create_user_context, get_audit_service
from mtadmin.services.booking_rules import missing_profile_fields

router = APIRouter()
audit = get_audit_service()


@router.get("/", response_model=Page[School])
def list_schools(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    pagination: SearchPagination = Depends(get_pagination),
    school_status: Optional[SchoolStatus] = Query(None, alias="status", description="Filter by status"),
):
    """Paginated list of schools"""
    where = SchoolFilter(status=school_status)
    return crud.school.get_paginated(transport, pagination=pagination, where=where).unwrap()


@router.get("/{school_id}", response_model=School)
def get_school(*, transport: GraphQLTransport = Depends(get_transport), school_id: int):
    return crud.school.get(transport, school_id).unwrap()


@router.post("/", response_model=School, status_code=status.HTTP_201_CREATED)
def create_school(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    form_in: Dict[str, Any] = Body(...),
):
    """
    Create a school from the add-school form
    """
    form = validate_form(AddSchoolForm, form_in)
    created = crud.school.create(transport, obj_in=form.to_create()).unwrap()
    audit.log_mutation("CREATE", "SCHOOL", created.id, create_user_context(context), new_values={"name": created.name})
    return created


@router.put("/{school_id}", response_model=School)
def update_school(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    school_id: int,
    school_in: SchoolUpdate,
):
    """Partial update; only the fields sent are changed"""
    updated = crud.school.update(transport, id=school_id, obj_in=school_in).unwrap()
    audit.log_mutation(
        "UPDATE", "SCHOOL", school_id, create_user_context(context),
        new_values=school_in.model_dump(by_alias=True, exclude_unset=True, mode="json"),
    )
    return updated


@router.put("/{school_id}/profile", response_model=School)
def update_school_profile(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    school_id: int,
    form_in: Dict[str, Any] = Body(...),
):
    """
    Save the edit-profile form: operating hours, owner, bank and license details
    """
    form = validate_form(SchoolProfileForm, form_in)
    update = form.to_update()
    updated = crud.school.update(transport, id=school_id, obj_in=update).unwrap()
    audit.log_mutation(
        "UPDATE", "SCHOOL_PROFILE", school_id, create_user_context(context),
        new_values=update.model_dump(by_alias=True, exclude_unset=True, mode="json"),
    )
    return updated


@router.get("/{school_id}/profile-completeness")
def get_profile_completeness(*, transport: GraphQLTransport = Depends(get_transport), school_id: int):
    school = crud.school.get(transport, school_id).unwrap()
    missing = missing_profile_fields(school)
    return {"schoolId": school.id, "complete": not missing, "missingFields": [to_camel(name) for name in missing]}
