"""
Driving School Admin - Audit Service
Records who changed what through the admin core: bookings, amendments, holidays and
every other mutation sent to the backend
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional
import uuid

import structlog

from mtadmin.schemas.common import RequestContext

logger = structlog.get_logger()


@dataclass
class UserContext:
    """Acting school/user for audit logging"""
    school_id: Optional[int] = None
    user_id: Optional[int] = None

    def dict(self):
        return asdict(self)


@dataclass
class AuditLogData:
    """One audited action"""
    action_type: str  # CREATE, UPDATE, DELETE, AMEND, HOLD, ...
    resource_type: str  # BOOKING, BOOKING_SESSION, HOLIDAY, ...
    resource_id: Optional[str] = None
    success: bool = True
    message: Optional[str] = None
    changed_fields: Optional[List[str]] = None
    new_values: Optional[Dict[str, Any]] = None
    warning_messages: Optional[List[str]] = None
    school_id: Optional[int] = None
    user_id: Optional[int] = None

    def dict(self):
        return asdict(self)


class AuditService:
    """Emits structured audit events; holds no state"""

    def log_action(self, action_data: AuditLogData, transaction_id: Optional[str] = None) -> str:
        """
        Log an action and return its transaction id for correlation
        """
        if transaction_id is None:
            transaction_id = str(uuid.uuid4())

        event = {k: v for k, v in action_data.dict().items() if v is not None}
        event.pop("action_type")
        event.pop("resource_type")
        log = logger.info if action_data.success else logger.warning
        log(
            "Audit event",
            transaction_id=transaction_id,
            action=f"{action_data.action_type}:{action_data.resource_type}",
            **event,
        )
        return transaction_id

    def log_mutation(
        self,
        action_type: str,
        resource_type: str,
        resource_id: Any,
        user_context: UserContext,
        *,
        success: bool = True,
        message: Optional[str] = None,
        new_values: Optional[Dict[str, Any]] = None,
        warning_messages: Optional[List[str]] = None,
    ) -> str:
        """Log one create/update/delete sent to the backend"""
        return self.log_action(AuditLogData(
            action_type=action_type,
            resource_type=resource_type,
            resource_id=str(resource_id) if resource_id is not None else None,
            success=success,
            message=message,
            changed_fields=sorted(new_values) if new_values else None,
            new_values=new_values,
            warning_messages=warning_messages or None,
            school_id=user_context.school_id,
            user_id=user_context.user_id,
        ))


def create_user_context(context: Optional[RequestContext]) -> UserContext:
    """Build an audit user context from the explicit request identity"""
    if context is None:
        return UserContext()
    return UserContext(school_id=context.school_id, user_id=context.user_id)


audit_service = AuditService()


def get_audit_service() -> AuditService:
    return audit_service
