"""
Lesson Progress Use Cases
"""

from .save_progress_use_case import SaveProgressUseCase
from .get_block_progress_use_case import GetBlockProgressUseCase
from .dtos import BlockProgressResponse, LessonProgressView, SaveProgressCommand

__all__ = [
    "SaveProgressUseCase",
    "GetBlockProgressUseCase",
    "SaveProgressCommand",
    "LessonProgressView",
    "BlockProgressResponse",
]
