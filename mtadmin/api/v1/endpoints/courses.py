"""
Course Management Endpoints
Courses of the acting school and the day-by-day syllabus of each course
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from mtadmin import crud
from mtadmin.api.deps import get_pagination, get_request_context, get_transport
from mtadmin.core.transport import GraphQLTransport
from mtadmin.models.enums import CourseStatus, CourseType
from mtadmin.schemas.common import DeleteResult, Page, RequestContext, SearchPagination
from mtadmin.schemas.course import AddCourseForm, Course, CourseFilter, EditCourseForm
from mtadmin.schemas.rules import validate_form
from mtadmin.schemas.syllabus import Syllabus, SyllabusFilter, SyllabusForm
from mtadmin.services.audit_service import create_user_context, get_audit_service

router = APIRouter()
audit = get_audit_service()


# Course endpoints
@router.get("/", response_model=Page[Course])
def list_courses(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    pagination: SearchPagination = Depends(get_pagination),
    course_type: Optional[CourseType] = Query(None, alias="courseType", description="Filter by course type"),
    course_status: Optional[CourseStatus] = Query(None, alias="status", description="Filter by status"),
):
    where = CourseFilter(school_id=context.require_school(), course_type=course_type, status=course_status)
    return crud.course.get_paginated(transport, pagination=pagination, where=where).unwrap()


@router.get("/{course_id}", response_model=Course)
def get_course(*, transport: GraphQLTransport = Depends(get_transport), course_id: int):
    return crud.course.get(transport, course_id).unwrap()


@router.post("/", response_model=Course, status_code=status.HTTP_201_CREATED)
def create_course(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    form_in: Dict[str, Any] = Body(...),
):
    form = validate_form(AddCourseForm, form_in)
    created = crud.course.create(transport, obj_in=form.to_create(context.require_school())).unwrap()
    audit.log_mutation("CREATE", "COURSE", created.id, create_user_context(context))
    return created


@router.put("/{course_id}", response_model=Course)
def update_course(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    course_id: int,
    form_in: Dict[str, Any] = Body(...),
):
    update = validate_form(EditCourseForm, form_in).to_update()
    updated = crud.course.update(transport, id=course_id, obj_in=update).unwrap()
    audit.log_mutation(
        "UPDATE", "COURSE", course_id, create_user_context(context),
        new_values=update.model_dump(by_alias=True, exclude_unset=True, mode="json"),
    )
    return updated


@router.delete("/{course_id}", response_model=DeleteResult)
def delete_course(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    course_id: int,
):
    deleted = crud.course.remove(transport, id=course_id).unwrap()
    audit.log_mutation("DELETE", "COURSE", course_id, create_user_context(context))
    return deleted


# Syllabus endpoints
@router.get("/{course_id}/syllabus", response_model=List[Syllabus])
def list_syllabus(*, transport: GraphQLTransport = Depends(get_transport), course_id: int):
    """Syllabus days of a course, in day order"""
    days = crud.syllabus.get_all(transport, where=SyllabusFilter(course_id=course_id)).unwrap()
    return sorted(days, key=lambda day: day.day_number or 0)


@router.post("/{course_id}/syllabus", response_model=Syllabus, status_code=status.HTTP_201_CREATED)
def create_syllabus(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    course_id: int,
    form_in: Dict[str, Any] = Body(...),
):
    form = validate_form(SyllabusForm, form_in)
    created = crud.syllabus.create(transport, obj_in=form.to_create(course_id)).unwrap()
    audit.log_mutation("CREATE", "SYLLABUS", created.id, create_user_context(context))
    return created


@router.get("/syllabus/{syllabus_id}", response_model=Syllabus)
def get_syllabus(*, transport: GraphQLTransport = Depends(get_transport), syllabus_id: int):
    return crud.syllabus.get(transport, syllabus_id).unwrap()


@router.put("/syllabus/{syllabus_id}", response_model=Syllabus)
def update_syllabus(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    syllabus_id: int,
    form_in: Dict[str, Any] = Body(...),
):
    update = validate_form(SyllabusForm, form_in).to_update()
    updated = crud.syllabus.update(transport, id=syllabus_id, obj_in=update).unwrap()
    audit.log_mutation("UPDATE", "SYLLABUS", syllabus_id, create_user_context(context))
    return updated


@router.delete("/syllabus/{syllabus_id}", response_model=DeleteResult)
def delete_syllabus(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    syllabus_id: int,
):
    deleted = crud.syllabus.remove(transport, id=syllabus_id).unwrap()
    audit.log_mutation("DELETE", "SYLLABUS", syllabus_id, create_user_context(context))
    return deleted
