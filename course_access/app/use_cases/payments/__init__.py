"""
Payment Use Cases
"""

from .create_order_use_case import CreateOrderUseCase
from .complete_payment_use_case import CompletePaymentUseCase
from .dev_purchase_use_case import DevPurchaseUseCase
from .dtos import CompletePaymentResponse, CreateOrderResponse, DevPurchaseResponse

__all__ = [
    "CreateOrderUseCase",
    "CompletePaymentUseCase",
    "DevPurchaseUseCase",
    "CreateOrderResponse",
    "CompletePaymentResponse",
    "DevPurchaseResponse",
]
