"""
Shared API dependencies: per-request transport, explicit identity and pagination
"""

from typing import Generator, Optional

from fastapi import Header, Query

from mtadmin.core.config import get_settings
from mtadmin.core.transport import GraphQLTransport
from mtadmin.schemas.common import RequestContext, SearchPagination


def get_transport() -> Generator[GraphQLTransport, None, None]:
    """One transport per request, closed when the request ends"""
    transport = GraphQLTransport()
    try:
        yield transport
    finally:
        transport.close()


def get_request_context(
    x_school_id: Optional[int] = Header(None, gt=0, description="School the admin operates on"),
    x_user_id: Optional[int] = Header(None, gt=0, description="Acting user"),
) -> RequestContext:
    return RequestContext(school_id=x_school_id, user_id=x_user_id)


def get_pagination(
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    take: Optional[int] = Query(None, ge=1, description="Number of records to return"),
    search: Optional[str] = Query(None, description="Search term"),
) -> SearchPagination:
    settings = get_settings()
    take = min(take or settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)
    return SearchPagination(skip=skip, take=take, search=search or None)
