"""
Get Block Progress Use Case

Progress of every lesson in a block and the lesson to resume.
"""

from course_access.app.services.unit_of_work import UnitOfWork
from course_access.domain.catalog import Catalog
from course_access.libs.result import Error, Result, Return
from ..access.dtos import AccessContext
from .dtos import BlockProgressResponse, LessonProgressView


class GetBlockProgressUseCase:
    """
    Use case for reading block progress.

    Business Rules:
    - Caller must be logged in and have access to the block
    - Resume at the most recently watched lesson, or nothing if none watched
    - Block percent is the share of done lessons
    """

    def __init__(self, uow: UnitOfWork, catalog: Catalog):
        self.uow = uow
        self.catalog = catalog

    async def execute(self, context: AccessContext, block_id: str) -> Result[BlockProgressResponse]:
        if not context.is_authenticated:
            return Return.err(Error("NOT_AUTHENTICATED", "Login required"))

        block = self.catalog.find_block(block_id)
        if block is None:
            return Return.err(Error("BLOCK_NOT_FOUND", "Block not found"))

        if not context.has_access(block_id):
            return Return.err(Error("ACCESS_DENIED", "Block is locked"))

        async with self.uow:
            rows = await self.uow.lesson_progress.list_by_block(context.identity, block_id)

            positions = {lesson.position for lesson in block.lessons}
            rows = [row for row in rows if row.position in positions]

            total = len(block.lessons)
            completed = sum(1 for row in rows if row.done)
            latest = max(rows, key=lambda row: row.updated_at, default=None)

            return Return.ok(
                BlockProgressResponse(
                    block_id=block_id,
                    total_lessons=total,
                    completed_lessons=completed,
                    percent=round(completed * 100 / total) if total else 0,
                    resume_position=latest.position if latest else None,
                    lessons=[
                        LessonProgressView(
                            position=row.position,
                            seconds=row.seconds,
                            percent=row.percent,
                            done=row.done,
                            updated_at=row.updated_at,
                        )
                        for row in rows
                    ],
                )
            )
