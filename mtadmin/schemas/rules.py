"""
Field rules shared by the form schemas

Forms keep numeric-looking fields as strings; the rules below only check shape.
Coercion to numbers happens when a form is converted to a client input.
"""

from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, Type, TypeVar
import re

from pydantic import BaseModel, ValidationError

from mtadmin.core.exceptions import FormValidationError

FormT = TypeVar("FormT", bound=BaseModel)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
IFSC_RE = re.compile(r"^[A-Z]{4}0[A-Z0-9]{6}$")
GST_RE = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z]{1}[1-9A-Z]{1}Z[0-9A-Z]{1}$")
ESTABLISHED_YEAR_RE = re.compile(r"^(19|20)\d{2}$")
FOUR_DIGIT_YEAR_RE = re.compile(r"^[0-9]{4}$")
TIME_HHMM_RE = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")
INTEGER_RE = re.compile(r"^[0-9]+$")
DECIMAL_RE = re.compile(r"^[0-9]+(\.[0-9]+)?$")
TEN_DIGIT_MOBILE_RE = re.compile(r"^[0-9]{10}$")
LOOSE_PHONE_RE = re.compile(r"^[0-9+\-\s()]+$")
ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}([T ].*)?$")
URL_RE = re.compile(r"^https?://[^\s/$.?#][^\s]*$", re.IGNORECASE)


def blank_to_none(value: Any) -> Any:
    """Blank optional strings count as absent"""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def check_min_length(value: str, length: int, message: str) -> str:
    if value is None or len(value.strip()) < length:
        raise ValueError(message)
    return value


def check_pattern(value: str, pattern: re.Pattern, message: str) -> str:
    if value is None or not pattern.match(value):
        raise ValueError(message)
    return value


def check_no_space(value: str, message: str) -> str:
    if value is not None and re.search(r"\s", value):
        raise ValueError(message)
    return value


def parse_iso_date(value: Any, message: str) -> date:
    """YYYY-MM-DD, optionally followed by a time part"""
    if not isinstance(value, str) or not ISO_DATE_RE.match(value):
        raise ValueError(message)
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        raise ValueError(message)


def check_choice(value: Any, choices: Type[Enum], message: str) -> str:
    """Closed, case-sensitive picklist"""
    if isinstance(value, Enum):
        value = value.value
    if value not in {member.value for member in choices}:
        raise ValueError(message)
    return value


def to_int(value: Optional[str]) -> Optional[int]:
    return int(value) if value not in (None, "") else None


def to_float(value: Optional[str]) -> Optional[float]:
    return float(value) if value not in (None, "") else None


def error_map(exc: ValidationError) -> Dict[str, str]:
    """Flatten a pydantic ValidationError into a field -> first message map"""
    errors: Dict[str, str] = {}
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "__root__"
        if field in errors:
            continue
        ctx = err.get("ctx") or {}
        if "error" in ctx:
            errors[field] = str(ctx["error"])
        else:
            errors[field] = err["msg"]
    return errors


def validate_form(schema: Type[FormT], data: Dict[str, Any]) -> FormT:
    """
    Validate a whole form. All-or-nothing: either a fully valid model or
    FormValidationError with every failing field.
    """
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise FormValidationError(error_map(e)) from e
