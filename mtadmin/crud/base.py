from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union
import logging

from pydantic import BaseModel, ValidationError

from mtadmin.core.exceptions import ErrorKind, FormValidationError
from mtadmin.core.transport import GraphQLTransport
from mtadmin.schemas.common import ApiResult, DeleteResult, Page, SearchPagination, WireModel

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=WireModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)

VariablesIn = Union[BaseModel, Dict[str, Any], None]


def to_variables(obj_in: VariablesIn, *, partial: bool = True) -> Dict[str, Any]:
    """
    Wire variables from a schema or a plain dict.

    partial=True sends only the fields that were set (updates);
    partial=False sends every non-null field, defaults included (creates, filters).
    """
    if obj_in is None:
        return {}
    if isinstance(obj_in, BaseModel):
        if partial:
            return obj_in.model_dump(by_alias=True, exclude_unset=True, mode="json")
        return obj_in.model_dump(by_alias=True, exclude_none=True, mode="json")
    return {key: value for key, value in obj_in.items() if value is not None}


def check_id(id: Any, field: str = "id") -> int:
    if isinstance(id, bool) or not isinstance(id, int) or id <= 0:
        raise FormValidationError({field: "must be a positive integer"})
    return id


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Base class for CRUD operations on one backend entity.

    Builds the GraphQL envelope for the uniform operation set
    (getPaginated<E>, getAll<E>, get<E>ById, create<E>, update<E>, delete<E>)
    and parses the answer into the entity model. Holds no state between calls.
    """
    def __init__(
        self,
        model: Type[ModelType],
        *,
        entity: str,
        where_input: str,
        fields: str,
        detail_fields: Optional[str] = None,
    ):
        """
        Initialize with the entity model, its GraphQL name, where-input type and selection.
        """
        self.model = model
        self.entity = entity
        self.where_input = where_input
        self.fields = fields
        self.detail_fields = detail_fields or fields

    # Envelope helpers
    def _run(
        self,
        transport: GraphQLTransport,
        query: str,
        variables: Dict[str, Any],
        root: str,
    ) -> ApiResult[Any]:
        """Execute and pull the root field out of `data`"""
        result = transport.execute(query, variables)
        if not result.status:
            return result
        return ApiResult.ok((result.data or {}).get(root), message=result.message)

    def _parse(self, result: ApiResult[Any], type_: Any) -> ApiResult[Any]:
        if not result.status:
            return result
        if result.data is None:
            return ApiResult.fail(f"{self.entity} returned no data", ErrorKind.APPLICATION)
        try:
            if isinstance(type_, type) and issubclass(type_, BaseModel):
                parsed = type_.model_validate(result.data)
            else:
                parsed = [self.model.model_validate(item) for item in result.data]
        except ValidationError as e:
            logger.error(f"Unexpected {self.entity} payload: {e}")
            return ApiResult.fail(f"Unexpected {self.entity} payload", ErrorKind.APPLICATION)
        return ApiResult.ok(parsed, message=result.message)

    # Queries
    def get_paginated(
        self,
        transport: GraphQLTransport,
        *,
        pagination: Optional[SearchPagination] = None,
        where: VariablesIn = None,
    ) -> ApiResult[Page[ModelType]]:
        """
        Get one page of records matching the filter.
        """
        pagination = pagination or SearchPagination()
        query = f"""
  query GetPaginated{self.entity}($searchPaginationInput: SearchPaginationInput!, $whereSearchInput: {self.where_input}!) {{
    getPaginated{self.entity}(searchPaginationInput: $searchPaginationInput, whereSearchInput: $whereSearchInput) {{
      data {{ {self.fields} }}
      total
    }}
  }}
"""
        variables = {
            "searchPaginationInput": pagination.model_dump(exclude_none=True),
            "whereSearchInput": to_variables(where, partial=False),
        }
        result = self._run(transport, query, variables, f"getPaginated{self.entity}")
        return self._page(result, pagination)

    def _page(self, result: ApiResult[Any], pagination: SearchPagination) -> ApiResult[Page[ModelType]]:
        parsed = self._parse(result, Page[self.model])
        if not parsed.status:
            return parsed
        page = parsed.data
        # The page always echoes the requested window and never exceeds it
        if len(page.data) > pagination.take:
            page.data = page.data[:pagination.take]
        page.skip = pagination.skip
        page.take = pagination.take
        page.total = max(page.total, len(page.data))
        return parsed

    def get_all(self, transport: GraphQLTransport, *, where: VariablesIn = None) -> ApiResult[List[ModelType]]:
        """
        Get all records matching the filter, without pagination.
        """
        query = f"""
  query GetAll{self.entity}($whereSearchInput: {self.where_input}!) {{
    getAll{self.entity}(whereSearchInput: $whereSearchInput) {{ {self.fields} }}
  }}
"""
        result = self._run(transport, query, {"whereSearchInput": to_variables(where, partial=False)}, f"getAll{self.entity}")
        if result.status and result.data is None:
            return ApiResult.ok([], message=result.message)
        return self._parse(result, list)

    def get(self, transport: GraphQLTransport, id: int) -> ApiResult[ModelType]:
        """
        Get a record by ID. A missing record is a NOT_FOUND failure.
        """
        check_id(id)
        query = f"""
  query Get{self.entity}ById($id: Int!) {{
    get{self.entity}ById(id: $id) {{ {self.detail_fields} }}
  }}
"""
        result = self._run(transport, query, {"id": id}, f"get{self.entity}ById")
        if not result.status and "not found" in result.message.lower():
            return ApiResult.fail(result.message, ErrorKind.NOT_FOUND)
        if result.status and result.data is None:
            return ApiResult.fail(f"{self.entity} {id} not found", ErrorKind.NOT_FOUND)
        return self._parse(result, self.model)

    # Mutations
    def create(self, transport: GraphQLTransport, *, obj_in: Union[CreateSchemaType, Dict[str, Any]]) -> ApiResult[ModelType]:
        """
        Create a new record.
        """
        query = f"""
  mutation Create{self.entity}($inputType: Create{self.entity}Input!) {{
    create{self.entity}(inputType: $inputType) {{ {self.fields} }}
  }}
"""
        result = self._run(transport, query, {"inputType": to_variables(obj_in, partial=False)}, f"create{self.entity}")
        return self._parse(result, self.model)

    def update(
        self,
        transport: GraphQLTransport,
        *,
        id: int,
        obj_in: Union[UpdateSchemaType, Dict[str, Any]],
    ) -> ApiResult[ModelType]:
        """
        Update a record. Only the fields set on `obj_in` are sent.
        """
        check_id(id)
        query = f"""
  mutation Update{self.entity}($id: Int!, $updateType: Update{self.entity}Input!) {{
    update{self.entity}(id: $id, updateType: $updateType) {{ {self.fields} }}
  }}
"""
        variables = {"id": id, "updateType": to_variables(obj_in)}
        result = self._run(transport, query, variables, f"update{self.entity}")
        return self._parse(result, self.model)

    def remove(self, transport: GraphQLTransport, *, id: int) -> ApiResult[DeleteResult]:
        """
        Soft delete a record by ID.
        """
        check_id(id)
        query = f"""
  mutation Delete{self.entity}($id: Int!) {{
    delete{self.entity}(id: $id) {{ id }}
  }}
"""
        result = self._run(transport, query, {"id": id}, f"delete{self.entity}")
        return self._parse(result, DeleteResult)
