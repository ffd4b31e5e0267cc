"""
Resource clients for the service catalogue and per-school service offers

The service list is paginated page/limit on the wire; it is exposed as skip/take
like every other entity.
"""

from typing import Optional

from mtadmin.crud.base import CRUDBase, VariablesIn, to_variables
from mtadmin.core.transport import GraphQLTransport
from mtadmin.schemas.common import ApiResult, Page, SearchPagination
from mtadmin.schemas.service import (
    SchoolService, SchoolServiceCreate, SchoolServiceUpdate,
    Service, ServiceCreate, ServiceUpdate,
)

SERVICE_FIELDS = """
    id schoolId serviceId serviceName serviceType category price duration description
    features includedServices requirements termsAndConditions activeUsers totalRevenue
    status createdAt updatedAt
"""

SCHOOL_SERVICE_FIELDS = """
    id schoolId serviceId schoolServiceId licensePrice addonPrice status
    createdAt updatedAt deletedAt
    school { id name }
    service { id serviceId serviceName category duration description }
"""


def page_for(pagination: SearchPagination) -> int:
    """1-based page holding the first requested row"""
    return pagination.skip // pagination.take + 1


class CRUDService(CRUDBase[Service, ServiceCreate, ServiceUpdate]):
    """CRUD operations for services"""

    def get_paginated(
        self,
        transport: GraphQLTransport,
        *,
        pagination: Optional[SearchPagination] = None,
        where: VariablesIn = None,
    ) -> ApiResult[Page[Service]]:
        pagination = pagination or SearchPagination()
        query = f"""
  query GetPaginatedService($page: Int!, $limit: Int!, $where: {self.where_input}) {{
    getPaginatedService(page: $page, limit: $limit, where: $where) {{
      data {{ {self.fields} }}
      total
      page
      limit
    }}
  }}
"""
        variables = {
            "page": page_for(pagination),
            "limit": pagination.take,
            "where": to_variables(where, partial=False),
        }
        result = self._run(transport, query, variables, "getPaginatedService")
        page = self._page(result, pagination)
        if page.status and result.data.get("limit"):
            # Report the window the backend actually served
            page.data.skip = ((result.data.get("page") or 1) - 1) * result.data["limit"]
        return page


class CRUDSchoolService(CRUDBase[SchoolService, SchoolServiceCreate, SchoolServiceUpdate]):
    pass


service = CRUDService(Service, entity="Service", where_input="WhereServiceSearchInput", fields=SERVICE_FIELDS)
school_service = CRUDSchoolService(
    SchoolService,
    entity="SchoolService",
    where_input="WhereSchoolServiceSearchInput",
    fields=SCHOOL_SERVICE_FIELDS,
)
