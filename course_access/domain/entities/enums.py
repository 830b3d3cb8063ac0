"""
Course Access Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class OrderStatus(str, Enum):
    """Payment order status; approved and declined are terminal"""

    pending = "pending"
    approved = "approved"
    declined = "declined"


class VerifyFailure(str, Enum):
    """Reason a submitted one-time code was rejected"""

    not_found = "not_found"
    expired = "expired"
    mismatch = "mismatch"
