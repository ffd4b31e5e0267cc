"""
Error taxonomy for the driving school admin core

Every failure a Resource Client call can produce maps to exactly one of:
- FormValidationError: input rejected by a form schema, never sent to the backend
- ApplicationError: the backend executed the request and reported a failure
- TransportError: the request could not be completed (network, malformed body)
- NotFoundError: a get-by-id returned no entity
"""

from enum import Enum
from typing import Dict, Optional


class ErrorKind(str, Enum):
    VALIDATION = "VALIDATION"
    APPLICATION = "APPLICATION"
    TRANSPORT = "TRANSPORT"
    NOT_FOUND = "NOT_FOUND"


class MTAdminError(Exception):
    """Base exception for the admin core"""
    kind: ErrorKind = ErrorKind.APPLICATION

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FormValidationError(MTAdminError):
    """Raised when a form fails its schema; carries a field -> message map"""
    kind = ErrorKind.VALIDATION

    def __init__(self, errors: Dict[str, str], message: str = "Please correct the highlighted fields"):
        super().__init__(message)
        self.errors = errors


class ApplicationError(MTAdminError):
    """Raised when the backend reports a business failure"""
    kind = ErrorKind.APPLICATION


class TransportError(MTAdminError):
    """Raised when the backend could not be reached or answered garbage"""
    kind = ErrorKind.TRANSPORT

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(MTAdminError):
    """Raised when a get-by-id yields no entity"""
    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, resource_id: Optional[int] = None, message: Optional[str] = None):
        super().__init__(message or f"{resource} {resource_id} not found")
        self.resource = resource
        self.resource_id = resource_id


class AmendmentNotAllowedError(FormValidationError):
    """Raised when an amendment request is illegal for the booking's current dates"""
