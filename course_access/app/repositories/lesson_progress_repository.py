from abc import ABC, abstractmethod
from typing import List, Optional

from course_access.domain.entities import LessonProgress


class ILessonProgressRepository(ABC):
    """LessonProgress repository interface - application layer"""

    @abstractmethod
    async def get(self, identity: str, block_id: str, position: int) -> Optional[LessonProgress]:
        """Get progress of one lesson"""
        pass

    @abstractmethod
    async def list_by_block(self, identity: str, block_id: str) -> List[LessonProgress]:
        """Get progress of every lesson of a block, ordered by position"""
        pass

    @abstractmethod
    async def save(self, progress: LessonProgress) -> LessonProgress:
        """Create or update lesson progress"""
        pass
