"""
Access Use Case DTOs
"""

from typing import FrozenSet, List, Optional

from pydantic import BaseModel

from course_access.domain.entitlements import has_access


class AccessContext(BaseModel):
    """
    Identity and entitlements resolved for one request.

    Anonymous requests have identity None and no entitlements. Built fresh
    for every request, never cached.
    """

    identity: Optional[str] = None
    entitlements: FrozenSet[str] = frozenset()

    @classmethod
    def anonymous(cls) -> "AccessContext":
        return cls()

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None

    def has_access(self, target_id: str) -> bool:
        return has_access(self.entitlements, target_id)


class LessonView(BaseModel):
    position: int
    title: str
    video_url: str


class BlockLessonsResponse(BaseModel):
    """Lessons of a block; locked blocks list no lessons"""

    block_id: str
    title: str
    locked: bool
    lessons: List[LessonView]
