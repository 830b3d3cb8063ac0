"""
LessonProgress Entity

Resume position and completion of a lesson for one identity.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel, UniqueConstraint

from ..base import utcnow


class LessonProgress(SQLModel, table=True):
    """
    LessonProgress entity - where a viewer stopped in a lesson.

    Business Rules:
    - One row per (identity, block_id, position)
    - percent is clamped to 0..100
    - done once percent reaches 90 or the viewer marks it; never reset
    """

    __tablename__ = "lesson_progress"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    identity: str = Field(max_length=255)
    block_id: str = Field(max_length=100)
    position: int

    seconds: float = Field(default=0.0)
    percent: int = Field(default=0)
    done: bool = Field(default=False)

    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        UniqueConstraint(
            "identity", "block_id", "position", name="uq_progress_identity_block_position"
        ),
        Index("idx_progress_identity", "identity"),
    )
