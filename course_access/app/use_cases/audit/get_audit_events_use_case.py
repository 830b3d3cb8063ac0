"""
Get Audit Events Use Case

Retrieves security audit events with pagination.
"""

from typing import Any, Dict, Optional

from course_access.app.services.unit_of_work import UnitOfWork
from course_access.domain.base import normalize_identity
from course_access.libs.result import Result, Return


class GetAuditEventsUseCase:
    """
    Use case for retrieving audit events.

    Business Rules:
    - Admin-only (enforced by the API key at the route)
    - Optionally filtered by identity
    - Results ordered by newest first
    - Supports cursor-based pagination
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        email: Optional[str] = None,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Result[Dict[str, Any]]:
        """
        Execute get audit events use case.

        Args:
            email: Only events of this identity (optional)
            limit: Maximum number of events to return
            cursor: Pagination cursor (optional)

        Returns:
            Result with events list and next_cursor
        """
        identity = normalize_identity(email) if email else None

        async with self.uow:
            events, next_cursor = await self.uow.audit_events.list_paginated(
                identity=identity, limit=limit, cursor=cursor
            )

            events_list = [
                {
                    "action": event.action,
                    "identity": event.identity,
                    "timestamp": event.created_at.isoformat() + "Z",
                    "metadata": event.event_metadata or {},
                }
                for event in events
            ]

            return Return.ok({"events": events_list, "next_cursor": next_cursor})
