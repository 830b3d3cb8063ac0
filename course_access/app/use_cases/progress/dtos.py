from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class SaveProgressCommand(BaseModel):
    """Playback position reported by the player"""

    block_id: str
    position: int
    seconds: float = 0.0
    percent: int = 0
    done: bool = False


class LessonProgressView(BaseModel):
    position: int
    seconds: float
    percent: int
    done: bool
    updated_at: datetime


class BlockProgressResponse(BaseModel):
    """Per-lesson progress of a block plus where to resume"""

    block_id: str
    total_lessons: int
    completed_lessons: int
    percent: int
    resume_position: Optional[int]
    lessons: List[LessonProgressView]
