"""
Use Case: Purge Expired Credentials

Expiry is checked lazily on read, so expired codes and sessions stay in
storage until this purge runs. Grants, orders and audit events are never
purged.
"""

import logging

from pydantic import BaseModel

from course_access.app.services.unit_of_work import UnitOfWork
from course_access.domain.base import utcnow
from course_access.domain.entities import AuditEvent
from course_access.libs.result import Result, Return

logger = logging.getLogger(__name__)


class PurgeExpiredResponse(BaseModel):
    """Response DTO for PurgeExpiredUseCase"""

    codes_purged: int
    sessions_purged: int


class PurgeExpiredUseCase:
    """
    Delete expired one-time codes and sessions.

    Business Logic:
    1. Delete codes whose expires_at has passed
    2. Delete sessions whose expires_at has passed
    3. Record an audit event with the counts
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[PurgeExpiredResponse]:
        now = utcnow()

        async with self.uow:
            codes_purged = await self.uow.one_time_codes.delete_expired(now)
            sessions_purged = await self.uow.sessions.delete_expired(now)

            await self.uow.audit_events.create(
                AuditEvent(
                    identity=None,
                    action="expired_credentials_purged",
                    event_metadata={
                        "codes_purged": codes_purged,
                        "sessions_purged": sessions_purged,
                    },
                )
            )

            await self.uow.commit()

        logger.info(f"Purged {codes_purged} expired code(s) and {sessions_purged} session(s)")
        return Return.ok(
            PurgeExpiredResponse(codes_purged=codes_purged, sessions_purged=sessions_purged)
        )
