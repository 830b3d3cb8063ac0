from typing import Optional
from uuid import UUID

from sqlalchemy import delete, update
from sqlmodel import select

from course_access.adapter.repositories.base import SqlRepository
from course_access.app.repositories.one_time_code_repository import IOneTimeCodeRepository
from course_access.domain.entities import OneTimeCode


class OneTimeCodeRepository(SqlRepository, IOneTimeCodeRepository):
    """OneTimeCode repository implementation using SQLModel"""

    async def get_latest_by_identity(self, identity: str) -> Optional[OneTimeCode]:
        """Get the most recent code issued to an identity"""
        stmt = (
            select(OneTimeCode)
            .where(OneTimeCode.identity == identity)
            .order_by(OneTimeCode.created_at.desc())
            .limit(1)
        )
        result = await self._run(self.session.exec(stmt))
        return result.first()

    async def create(self, code: OneTimeCode) -> OneTimeCode:
        """Create a new one-time code"""
        return await self._persist(code)

    async def delete_by_identity(self, identity: str) -> int:
        """Delete all codes of an identity"""
        stmt = delete(OneTimeCode).where(OneTimeCode.identity == identity)
        result = await self._run(self.session.execute(stmt))
        return result.rowcount

    async def delete_by_id(self, code_id: UUID) -> bool:
        """
        Delete a code by ID.

        The row count tells concurrent verifications apart: only the caller
        that actually removed the row may treat the code as consumed.
        """
        stmt = delete(OneTimeCode).where(OneTimeCode.id == code_id)
        result = await self._run(self.session.execute(stmt))
        return result.rowcount > 0

    async def increment_attempts(self, code_id: UUID) -> int:
        """Atomically bump the failed attempt counter"""
        stmt = (
            update(OneTimeCode)
            .where(OneTimeCode.id == code_id)
            .values(attempts=OneTimeCode.attempts + 1)
        )
        await self._run(self.session.execute(stmt))
        result = await self._run(
            self.session.exec(select(OneTimeCode.attempts).where(OneTimeCode.id == code_id))
        )
        attempts = result.first()
        return attempts or 0

    async def delete_expired(self, now) -> int:
        """Delete codes whose expiry has passed"""
        stmt = delete(OneTimeCode).where(OneTimeCode.expires_at < now)
        result = await self._run(self.session.execute(stmt))
        return result.rowcount
