from typing import List, Optional

from sqlmodel import select

from course_access.adapter.repositories.base import SqlRepository
from course_access.app.repositories.lesson_progress_repository import ILessonProgressRepository
from course_access.domain.entities import LessonProgress


class LessonProgressRepository(SqlRepository, ILessonProgressRepository):
    """LessonProgress repository implementation using SQLModel"""

    async def get(self, identity: str, block_id: str, position: int) -> Optional[LessonProgress]:
        """Get progress of one lesson"""
        stmt = select(LessonProgress).where(
            LessonProgress.identity == identity,
            LessonProgress.block_id == block_id,
            LessonProgress.position == position,
        )
        result = await self._run(self.session.exec(stmt))
        return result.one_or_none()

    async def list_by_block(self, identity: str, block_id: str) -> List[LessonProgress]:
        """Get progress of every lesson of a block"""
        stmt = (
            select(LessonProgress)
            .where(
                LessonProgress.identity == identity,
                LessonProgress.block_id == block_id,
            )
            .order_by(LessonProgress.position)
        )
        result = await self._run(self.session.exec(stmt))
        return list(result.all())

    async def save(self, progress: LessonProgress) -> LessonProgress:
        """Create or update lesson progress"""
        return await self._persist(progress)
