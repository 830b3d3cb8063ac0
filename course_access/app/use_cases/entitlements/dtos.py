from typing import List

from pydantic import BaseModel


class GrantResponse(BaseModel):
    """Response for granting an entitlement"""

    identity: str
    entitlement_id: str
    created: bool


class EntitlementsResponse(BaseModel):
    """Entitlements held by one identity"""

    identity: str
    entitlements: List[str]
