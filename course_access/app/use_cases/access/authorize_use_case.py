"""
Authorize Use Case

Resolves a raw session token to an identity and its entitlement set.
"""

from typing import Optional

from course_access.app.services.entitlement_grantor import EntitlementGrantor
from course_access.app.services.unit_of_work import UnitOfWork
from course_access.domain.base import utcnow
from course_access.domain.credentials import MAX_TOKEN_LENGTH, hash_token
from course_access.libs.result import Result, Return
from .dtos import AccessContext


class AuthorizeUseCase:
    """
    Use case for resolving the caller of a request.

    Business Rules:
    - No token is a normal anonymous request, not an error
    - Unknown, forged, malformed and expired tokens all resolve to anonymous
      (callers cannot tell them apart)
    - Expired sessions are left in place (lazy expiry)
    - Entitlements are read from storage on every call
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, session_token: Optional[str]) -> Result[AccessContext]:
        if not session_token or len(session_token) > MAX_TOKEN_LENGTH:
            return Return.ok(AccessContext.anonymous())

        async with self.uow:
            session = await self.uow.sessions.get_by_token_hash(hash_token(session_token))
            if session is None or session.expires_at <= utcnow():
                return Return.ok(AccessContext.anonymous())

            entitlements = await EntitlementGrantor(self.uow).list_entitlements(session.identity)

            return Return.ok(
                AccessContext(identity=session.identity, entitlements=frozenset(entitlements))
            )
