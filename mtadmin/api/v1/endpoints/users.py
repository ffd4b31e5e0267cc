"""
User Endpoints
Customers and staff accounts: list, search by contact, create and edit
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from mtadmin import crud
from mtadmin.api.deps import get_pagination, get_request_context, get_transport
from mtadmin.core.exceptions import NotFoundError
from mtadmin.core.transport import GraphQLTransport
from mtadmin.models.enums import UserRole, UserStatus
from mtadmin.schemas.common import DeleteResult, Page, RequestContext, SearchPagination
from mtadmin.schemas.user import User, UserCreate, UserFilter, UserUpdate
from mtadmin.services.audit_service import create_user_context, get_audit_service

router = APIRouter()
audit = get_audit_service()


@router.get("/", response_model=Page[User])
def list_users(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    pagination: SearchPagination = Depends(get_pagination),
    role: Optional[UserRole] = Query(None),
    user_status: Optional[UserStatus] = Query(None, alias="status"),
):
    where = UserFilter(school_id=context.school_id, role=role, status=user_status)
    return crud.user.get_paginated(transport, pagination=pagination, where=where).unwrap()


@router.get("/search", response_model=User)
def search_user(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    contact: str = Query(..., min_length=10, description="Primary contact number"),
    role: Optional[UserRole] = Query(None, description="Defaults to USER (customers)"),
):
    """
    Find a user by contact number
    """
    found = crud.user.search_by_contact(transport, contact, role).unwrap()
    if found is None:
        raise NotFoundError("User", message=f"No user found for contact {contact}")
    return found


@router.get("/{user_id}", response_model=User)
def get_user(*, transport: GraphQLTransport = Depends(get_transport), user_id: int):
    return crud.user.get(transport, user_id).unwrap()


@router.post("/", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    user_in: UserCreate,
):
    """New users default to role USER, status ACTIVE, in the acting school"""
    if user_in.school_id is None:
        user_in.school_id = context.school_id
    created = crud.user.create(transport, obj_in=user_in).unwrap()
    audit.log_mutation("CREATE", "USER", created.id, create_user_context(context))
    return created


@router.put("/{user_id}", response_model=User)
def update_user(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    user_id: int,
    user_in: UserUpdate,
):
    updated = crud.user.update(transport, id=user_id, obj_in=user_in).unwrap()
    audit.log_mutation(
        "UPDATE", "USER", user_id, create_user_context(context),
        new_values=user_in.model_dump(by_alias=True, exclude_unset=True, mode="json"),
    )
    return updated


@router.delete("/{user_id}", response_model=DeleteResult)
def delete_user(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    user_id: int,
):
    deleted = crud.user.remove(transport, id=user_id).unwrap()
    audit.log_mutation("DELETE", "USER", user_id, create_user_context(context))
    return deleted
