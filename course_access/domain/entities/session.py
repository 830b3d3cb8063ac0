"""
Session Entity

Stores digests of bearer session tokens.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow


class Session(SQLModel, table=True):
    """
    Session entity - a logged-in browser.

    Business Rules:
    - Token is 32 random bytes; only its SHA-256 hex digest is stored
    - Multiple sessions per identity are allowed
    - Deleted on logout
    - Expires after 30 days, checked lazily on every request
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    identity: str = Field(max_length=255)
    token_hash: str = Field(unique=True, max_length=64)  # SHA-256 output

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_session_identity", "identity"),
        Index("idx_session_expires_at", "expires_at"),
    )
