"""
OneTimeCode Entity

Short-lived numeric login codes sent by email.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow


class OneTimeCode(SQLModel, table=True):
    """
    OneTimeCode entity - proves control of an email address.

    Business Rules:
    - Code is 6 digits, stored only as a bcrypt hash
    - At most one active code per identity (new request deletes older ones)
    - Expires after 5 minutes, checked lazily on verification
    - Single-use: deleted on successful verification
    - Deleted after too many mismatched attempts
    """

    __tablename__ = "one_time_codes"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    identity: str = Field(max_length=255)
    code_hash: str = Field(max_length=60)  # Bcrypt output
    attempts: int = Field(default=0)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_one_time_code_identity", "identity"),
        Index("idx_one_time_code_expires_at", "expires_at"),
    )
