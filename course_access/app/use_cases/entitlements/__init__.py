"""
Entitlement Use Cases
"""

from .grant_entitlement_use_case import GrantEntitlementUseCase
from .list_entitlements_use_case import ListEntitlementsUseCase
from .dtos import EntitlementsResponse, GrantResponse

__all__ = [
    "GrantEntitlementUseCase",
    "ListEntitlementsUseCase",
    "EntitlementsResponse",
    "GrantResponse",
]
