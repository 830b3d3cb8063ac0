"""
Access API Routes

Who is calling and what they may open. Never fails for a bad or missing
session: such callers are simply anonymous.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, status
from pydantic import BaseModel

from course_access.app.use_cases.access import AccessContext
from course_access.depends import get_access_context

router = APIRouter(tags=["Access"])


class MeResponse(BaseModel):
    identity: Optional[str]


class AccessResponse(BaseModel):
    identity: Optional[str]
    entitlements: List[str]


class AccessCheckResponse(BaseModel):
    target_id: str
    allowed: bool


@router.get("/me", status_code=status.HTTP_200_OK, response_model=MeResponse)
async def me(context: AccessContext = Depends(get_access_context)):
    return MeResponse(identity=context.identity)


@router.get("/access", status_code=status.HTTP_200_OK, response_model=AccessResponse)
async def get_access(context: AccessContext = Depends(get_access_context)):
    return AccessResponse(identity=context.identity, entitlements=sorted(context.entitlements))


@router.get(
    "/access/{target_id}", status_code=status.HTTP_200_OK, response_model=AccessCheckResponse
)
async def check_access(
    target_id: str = Path(..., max_length=200),
    context: AccessContext = Depends(get_access_context),
):
    return AccessCheckResponse(target_id=target_id, allowed=context.has_access(target_id))
