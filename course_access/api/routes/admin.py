"""
Admin API Routes - System Administration Endpoints

Manual grants, the audit log and maintenance. Authentication is via Admin
API Key, not the viewer session cookie.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, EmailStr, Field

from course_access.api.error import ClientError, ServerError
from course_access.api.utils.admin_auth import verify_admin_api_key
from course_access.app.services.unit_of_work import UnitOfWork
from course_access.app.use_cases.admin import PurgeExpiredResponse, PurgeExpiredUseCase
from course_access.app.use_cases.audit import GetAuditEventsUseCase
from course_access.app.use_cases.entitlements import (
    EntitlementsResponse,
    GrantEntitlementUseCase,
    GrantResponse,
    ListEntitlementsUseCase,
)
from course_access.depends import get_catalog, get_unit_of_work
from course_access.domain.catalog import Catalog

router = APIRouter(prefix="/admin", tags=["Admin"])


class GrantRequest(BaseModel):
    """Manual grant HTTP request payload"""

    email: EmailStr = Field(..., description="Identity receiving the entitlement")
    entitlement_id: str = Field(..., min_length=1, max_length=200)


@router.post(
    "/grants",
    status_code=status.HTTP_200_OK,
    response_model=GrantResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def create_grant(
    request: GrantRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    catalog: Catalog = Depends(get_catalog),
):
    """
    Grant Entitlement

    Idempotent: granting twice keeps a single grant (created=false).

    Requires: X-Admin-API-Key header

    Raises:
        - 400 Bad Request: INVALID_ENTITLEMENT
        - 401 Unauthorized: Missing or invalid admin API key
    """
    use_case = GrantEntitlementUseCase(uow, catalog)
    result = await use_case.execute(request.email, request.entitlement_id)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_IDENTITY", "INVALID_ENTITLEMENT"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


@router.get(
    "/grants",
    status_code=status.HTTP_200_OK,
    response_model=EntitlementsResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def list_grants(
    email: str = Query(..., min_length=3, max_length=255, description="Identity to look up"),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Entitlements of an Identity

    Requires: X-Admin-API-Key header
    """
    result = await ListEntitlementsUseCase(uow).execute(email)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_IDENTITY":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class AuditEventResponse(BaseModel):
    """Single audit event in response"""

    action: str
    identity: Optional[str]
    timestamp: str
    metadata: Dict[str, Any]


class AuditEventsResponse(BaseModel):
    """GET /admin/audit-events response payload"""

    events: List[AuditEventResponse]
    next_cursor: Optional[str]


@router.get(
    "/audit-events",
    status_code=status.HTTP_200_OK,
    response_model=AuditEventsResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def get_audit_events(
    uow: UnitOfWork = Depends(get_unit_of_work),
    email: Optional[str] = Query(None, description="Only events of this identity"),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of events to return"),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
):
    """
    Get Audit Events

    Query Parameters:
        - email: Filter by identity (optional)
        - limit: Maximum number of events to return (1-100, default 50)
        - cursor: Pagination cursor for fetching next page

    Returns:
        - events: List of audit events ordered by newest first
        - next_cursor: Cursor for next page (null if no more events)
    """
    use_case = GetAuditEventsUseCase(uow)
    result = await use_case.execute(email=email, limit=limit, cursor=cursor)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.post(
    "/purge-expired",
    status_code=status.HTTP_200_OK,
    response_model=PurgeExpiredResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def purge_expired(uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Purge Expired Codes and Sessions

    Requires: X-Admin-API-Key header
    """
    result = await PurgeExpiredUseCase(uow).execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value
