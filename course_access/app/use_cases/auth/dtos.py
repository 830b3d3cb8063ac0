"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


# ============================================================================
# Response DTOs
# ============================================================================


class RequestCodeResponse(BaseModel):
    """Response for request code use case; identical for every identity"""

    accepted: bool = True


class VerifyCodeResult(BaseModel):
    """
    Result of a successful code verification.

    session_token is the only copy of the raw token. The API layer moves it
    into a cookie and never echoes it in a response body.
    """

    identity: str
    session_token: str
    expires_at: datetime


class LogoutResponse(BaseModel):
    """Response for logout use case"""

    ok: bool = True
    identity: Optional[str] = None
