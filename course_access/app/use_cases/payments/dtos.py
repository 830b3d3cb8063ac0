"""
Payment Use Case DTOs
"""

from typing import Any, Dict

from pydantic import BaseModel


class CreateOrderResponse(BaseModel):
    """Pending order plus the signed form that starts the payment"""

    order_reference: str
    amount: int
    currency: str
    payment_url: str
    fields: Dict[str, Any]


class CompletePaymentResponse(BaseModel):
    """Outcome of a provider callback"""

    order_reference: str
    order_status: str
    grant_created: bool
    acknowledgment: Dict[str, Any]


class DevPurchaseResponse(BaseModel):
    """Response for a development purchase (no payment provider)"""

    entitlement_id: str
    created: bool
    redirect_url: str
