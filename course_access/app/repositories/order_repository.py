from abc import ABC, abstractmethod
from typing import Optional

from course_access.domain.entities import Order, OrderStatus


class IOrderRepository(ABC):
    """Order repository interface - application layer"""

    @abstractmethod
    async def create(self, order: Order) -> Order:
        """Create a new order"""
        pass

    @abstractmethod
    async def get_by_reference(self, order_reference: str) -> Optional[Order]:
        """Get order by provider-facing reference"""
        pass

    @abstractmethod
    async def transition_from_pending(
        self, order_reference: str, status: OrderStatus, paid_at=None
    ) -> bool:
        """
        Move a pending order to a terminal status.

        Returns True only for the call that performed the transition.
        """
        pass
