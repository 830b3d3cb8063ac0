"""
Save Progress Use Case

Records the playback position of a lesson.
"""

import math

from course_access.app.services.unit_of_work import UnitOfWork
from course_access.domain.base import utcnow
from course_access.domain.catalog import Catalog
from course_access.domain.entities import LessonProgress
from course_access.libs.result import Error, Result, Return
from ..access.dtos import AccessContext
from .dtos import LessonProgressView, SaveProgressCommand

DONE_PERCENT = 90


class SaveProgressUseCase:
    """
    Use case for saving lesson progress.

    Business Rules:
    - Caller must be logged in and have access to the block
    - Lesson must exist in the block
    - A lesson is done at 90% or when marked; done is never cleared
    - The latest report wins for seconds and percent
    """

    def __init__(self, uow: UnitOfWork, catalog: Catalog):
        self.uow = uow
        self.catalog = catalog

    async def execute(
        self, context: AccessContext, command: SaveProgressCommand
    ) -> Result[LessonProgressView]:
        """
        Execute save progress use case.

        Errors:
            - NOT_AUTHENTICATED: Anonymous caller
            - BLOCK_NOT_FOUND / LESSON_NOT_FOUND: Unknown block or lesson
            - ACCESS_DENIED: Caller has no entitlement for the block
        """
        if not context.is_authenticated:
            return Return.err(Error("NOT_AUTHENTICATED", "Login required"))

        block = self.catalog.find_block(command.block_id)
        if block is None:
            return Return.err(Error("BLOCK_NOT_FOUND", "Block not found"))

        if not any(lesson.position == command.position for lesson in block.lessons):
            return Return.err(Error("LESSON_NOT_FOUND", "Lesson not found"))

        if not context.has_access(command.block_id):
            return Return.err(Error("ACCESS_DENIED", "Block is locked"))

        async with self.uow:
            progress = await self.uow.lesson_progress.get(
                context.identity, command.block_id, command.position
            )
            if progress is None:
                progress = LessonProgress(
                    identity=context.identity,
                    block_id=command.block_id,
                    position=command.position,
                )

            percent = min(max(command.percent, 0), 100)

            seconds = command.seconds
            progress.seconds = seconds if math.isfinite(seconds) and seconds > 0 else 0.0
            progress.percent = percent
            progress.done = progress.done or command.done or percent >= DONE_PERCENT
            progress.updated_at = utcnow()

            await self.uow.lesson_progress.save(progress)
            await self.uow.commit()

            return Return.ok(
                LessonProgressView(
                    position=progress.position,
                    seconds=progress.seconds,
                    percent=progress.percent,
                    done=progress.done,
                    updated_at=progress.updated_at,
                )
            )
