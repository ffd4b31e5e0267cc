"""
Services package for the driving school admin core

Booking creation and amendment processing live in their own modules
(booking_creation, amendment_service) and import the resource clients.
"""

from .audit_service import AuditService, UserContext, AuditLogData, create_user_context, get_audit_service

__all__ = [
    "AuditService",
    "UserContext",
    "AuditLogData",
    "create_user_context",
    "get_audit_service",
]
