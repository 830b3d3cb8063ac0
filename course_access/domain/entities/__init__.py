"""
Course Access Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import OrderStatus, VerifyFailure

# Export all entities
from .one_time_code import OneTimeCode
from .session import Session
from .grant import Grant
from .order import Order
from .lesson_progress import LessonProgress
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "OrderStatus",
    "VerifyFailure",
    # Entities
    "OneTimeCode",
    "Session",
    "Grant",
    "Order",
    "LessonProgress",
    "AuditEvent",
]
