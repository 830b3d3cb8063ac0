"""
Order Entity

Payment provider transaction for one entitlement.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import OrderStatus


class Order(SQLModel, table=True):
    """
    Order entity - a purchase attempt through the payment provider.

    Business Rules:
    - order_reference is unique and shared with the provider
    - Amount is in whole currency units, priced from the catalog
    - pending -> approved | declined, both terminal
    - Approval creates exactly one Grant
    """

    __tablename__ = "orders"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    order_reference: str = Field(unique=True, max_length=64)
    identity: str = Field(max_length=255)
    entitlement_id: str = Field(max_length=100)

    amount: int
    currency: str = Field(default="UAH", max_length=3)
    status: OrderStatus = Field(default=OrderStatus.pending)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    paid_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_order_identity", "identity"),
        Index("idx_order_status", "status"),
    )
