"""
Logout Use Case

Deletes the session behind a presented token.
"""

from typing import Optional

from course_access.app.services.unit_of_work import UnitOfWork
from course_access.domain.credentials import MAX_TOKEN_LENGTH, hash_token
from course_access.domain.entities import AuditEvent
from course_access.libs.result import Result, Return
from .dtos import LogoutResponse


class LogoutUseCase:
    """
    Use case for logging out.

    Business Rules:
    - Deletes only the presented session; other sessions stay valid
    - Idempotent: succeeds without a token or with an unknown token
    - Grants are never touched
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, session_token: Optional[str]) -> Result[LogoutResponse]:
        if not session_token or len(session_token) > MAX_TOKEN_LENGTH:
            return Return.ok(LogoutResponse())

        token_hash = hash_token(session_token)

        async with self.uow:
            session = await self.uow.sessions.get_by_token_hash(token_hash)
            if session is None:
                return Return.ok(LogoutResponse())

            await self.uow.sessions.delete_by_token_hash(token_hash)

            await self.uow.audit_events.create(
                AuditEvent(
                    identity=session.identity,
                    action="logout",
                    event_metadata={"session_id": str(session.id)},
                )
            )

            await self.uow.commit()

            return Return.ok(LogoutResponse(identity=session.identity))
