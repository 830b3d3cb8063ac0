"""
Get Block Lessons Use Case

Gated lesson listing for one block.
"""

from course_access.domain.catalog import Catalog
from course_access.libs.result import Error, Result, Return
from .dtos import AccessContext, BlockLessonsResponse, LessonView


class GetBlockLessonsUseCase:
    """
    Use case for listing the lessons of a block.

    Business Rules:
    - Block must exist in the catalog
    - Without access the block is returned locked with no lessons
    - Access through the block itself or its full-course bundle
    """

    def __init__(self, catalog: Catalog):
        self.catalog = catalog

    def execute(self, context: AccessContext, block_id: str) -> Result[BlockLessonsResponse]:
        block = self.catalog.find_block(block_id)
        if block is None:
            return Return.err(Error("BLOCK_NOT_FOUND", "Block not found"))

        if not context.has_access(block_id):
            return Return.ok(
                BlockLessonsResponse(block_id=block_id, title=block.title, locked=True, lessons=[])
            )

        return Return.ok(
            BlockLessonsResponse(
                block_id=block_id,
                title=block.title,
                locked=False,
                lessons=[
                    LessonView(
                        position=lesson.position,
                        title=lesson.title,
                        video_url=lesson.video_url,
                    )
                    for lesson in block.lessons
                ],
            )
        )
