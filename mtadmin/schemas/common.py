"""
Shared schemas: wire base model, request context, pagination and the normalized result
"""

from typing import Any, Generic, List, Optional, TypeVar
import json

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from mtadmin.core.exceptions import ApplicationError, ErrorKind, NotFoundError

T = TypeVar("T")


class WireModel(BaseModel):
    """Base for every model exchanged with the GraphQL backend (camelCase on the wire)"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
    )


class RequestContext(BaseModel):
    """Explicit identity of the caller, passed into every client call"""
    school_id: Optional[int] = Field(None, gt=0, description="School the admin operates on")
    user_id: Optional[int] = Field(None, gt=0, description="Acting user")

    def require_school(self) -> int:
        if self.school_id is None:
            raise ApplicationError("A school is required for this operation")
        return self.school_id

    def require_user(self) -> int:
        if self.user_id is None:
            raise ApplicationError("A user is required for this operation")
        return self.user_id


class SearchPagination(WireModel):
    """skip/take window plus free-text search"""
    skip: int = Field(0, ge=0)
    take: int = Field(10, gt=0)
    search: Optional[str] = None


class Page(WireModel, Generic[T]):
    """One page of a paginated list"""
    data: List[T] = Field(default_factory=list)
    total: int = 0
    skip: int = 0
    take: int = 0


class DeleteResult(WireModel):
    id: int
    deleted_at: Optional[str] = None


class ApiResult(BaseModel, Generic[T]):
    """Normalized {status, message, data} result of one backend exchange"""
    status: bool
    message: str = ""
    data: Optional[T] = None
    error_kind: Optional[ErrorKind] = None

    @classmethod
    def ok(cls, data: Any, message: str = "Success") -> "ApiResult":
        return cls(status=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str, kind: ErrorKind = ErrorKind.APPLICATION) -> "ApiResult":
        return cls(status=False, message=message, data=None, error_kind=kind)

    def unwrap(self) -> T:
        """Return data or raise the exception matching the failure kind"""
        if self.status:
            return self.data
        if self.error_kind == ErrorKind.NOT_FOUND:
            raise NotFoundError("Resource", message=self.message)
        raise ApplicationError(self.message or "Request failed")


def decode_string_list(value: Any) -> List[str]:
    """Decode a JSON-encoded string array; the single place that inspects the raw shape"""
    if value is None or value == "":
        return []
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            raise ValueError("must be a JSON array of strings")
    if not isinstance(value, list):
        raise ValueError("must be a JSON array of strings")
    return [str(item) for item in value]


def encode_string_list(values: Optional[List[str]]) -> str:
    """Compact, order-preserving JSON encoding for submission"""
    return json.dumps(list(values or []), separators=(",", ":"), ensure_ascii=False)
