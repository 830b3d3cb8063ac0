"""
AuditEvent Entity

Immutable log of authentication and purchase events.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from ..base import utcnow


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - immutable log of security relevant events.

    Business Rules:
    - Immutable (never updated or deleted)
    - identity nullable for system events (purge, rejected callbacks)
    - Metadata never contains raw codes or tokens
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    identity: Optional[str] = Field(default=None, max_length=255)

    action: str = Field(max_length=100)  # e.g., "login", "grant_created"
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_identity", "identity"),
    )
