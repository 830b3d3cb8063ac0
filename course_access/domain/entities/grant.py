"""
Grant Entity

Records that an identity owns an entitlement.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel, UniqueConstraint

from ..base import utcnow


class Grant(SQLModel, table=True):
    """
    Grant entity - a purchased (or manually granted) entitlement.

    Business Rules:
    - Unique per (identity, entitlement_id); re-granting is a no-op
    - entitlement_id is a block ("course-1-block-2") or a bundle ("course-1-full")
    - Never revoked by logout
    """

    __tablename__ = "grants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    identity: str = Field(max_length=255)
    entitlement_id: str = Field(max_length=100)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        UniqueConstraint("identity", "entitlement_id", name="uq_grant_identity_entitlement"),
        Index("idx_grant_identity", "identity"),
    )
