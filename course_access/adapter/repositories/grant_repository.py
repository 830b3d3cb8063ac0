from typing import List
from uuid import uuid4

from sqlalchemy.dialects import postgresql, sqlite
from sqlmodel import select

from course_access.adapter.repositories.base import SqlRepository
from course_access.app.repositories.grant_repository import IGrantRepository
from course_access.domain.base import utcnow
from course_access.domain.entities import Grant


class GrantRepository(SqlRepository, IGrantRepository):
    """Grant repository implementation using SQLModel"""

    def _insert(self):
        if self.dialect_name == "postgresql":
            return postgresql.insert(Grant)
        return sqlite.insert(Grant)

    async def add(self, identity: str, entitlement_id: str) -> bool:
        """
        Insert a grant with ON CONFLICT DO NOTHING.

        The unique constraint on (identity, entitlement_id) absorbs concurrent
        duplicate purchases and repeated payment callbacks.
        """
        stmt = (
            self._insert()
            .values(
                id=uuid4(),
                identity=identity,
                entitlement_id=entitlement_id,
                created_at=utcnow(),
            )
            .on_conflict_do_nothing(index_elements=["identity", "entitlement_id"])
        )
        result = await self._run(self.session.execute(stmt))
        return result.rowcount > 0

    async def list_entitlement_ids(self, identity: str) -> List[str]:
        """Get every entitlement id granted to an identity"""
        stmt = (
            select(Grant.entitlement_id)
            .where(Grant.identity == identity)
            .order_by(Grant.entitlement_id)
        )
        result = await self._run(self.session.exec(stmt))
        return list(result.all())
