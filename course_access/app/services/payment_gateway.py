from abc import ABC, abstractmethod
from typing import Any, Dict

from course_access.domain.entities import Order


class IPaymentGateway(ABC):
    """Payment provider protocol boundary - application layer"""

    @property
    @abstractmethod
    def payment_url(self) -> str:
        """URL the purchase form is posted to"""
        pass

    @abstractmethod
    def purchase_form(self, order: Order, product_name: str) -> Dict[str, Any]:
        """Signed form fields that start a payment for an order"""
        pass

    @abstractmethod
    def callback_is_authentic(self, payload: Dict[str, Any]) -> bool:
        """Verify the signature a provider callback carries"""
        pass

    @abstractmethod
    def acknowledge(self, order_reference: str) -> Dict[str, Any]:
        """Signed acknowledgment returned to the provider"""
        pass
