"""
Access Use Cases

Session resolution and gated content.
"""

from .authorize_use_case import AuthorizeUseCase
from .get_block_lessons_use_case import GetBlockLessonsUseCase
from .dtos import AccessContext, BlockLessonsResponse, LessonView

__all__ = [
    "AuthorizeUseCase",
    "GetBlockLessonsUseCase",
    "AccessContext",
    "BlockLessonsResponse",
    "LessonView",
]
