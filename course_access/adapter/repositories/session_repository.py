from typing import Optional

from sqlalchemy import delete
from sqlmodel import select

from course_access.adapter.repositories.base import SqlRepository
from course_access.app.repositories.session_repository import ISessionRepository
from course_access.domain.entities import Session


class SessionRepository(SqlRepository, ISessionRepository):
    """Session repository implementation using SQLModel"""

    async def get_by_token_hash(self, token_hash: str) -> Optional[Session]:
        """
        Get session by token digest.

        Tokens carry 256 bits of entropy, so a plain SHA-256 digest is a safe
        lookup key (no per-row salt, O(1) index lookup). Expiry is checked by
        the caller.
        """
        stmt = select(Session).where(Session.token_hash == token_hash)
        result = await self._run(self.session.exec(stmt))
        return result.one_or_none()

    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        return await self._persist(session_obj)

    async def delete_by_token_hash(self, token_hash: str) -> bool:
        """Delete the session holding this token digest"""
        stmt = delete(Session).where(Session.token_hash == token_hash)
        result = await self._run(self.session.execute(stmt))
        return result.rowcount > 0

    async def delete_expired(self, now) -> int:
        """Delete sessions whose expiry has passed"""
        stmt = delete(Session).where(Session.expires_at < now)
        result = await self._run(self.session.execute(stmt))
        return result.rowcount
