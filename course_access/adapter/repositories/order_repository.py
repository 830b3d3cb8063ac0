from typing import Optional

from sqlalchemy import update
from sqlmodel import select

from course_access.adapter.repositories.base import SqlRepository
from course_access.app.repositories.order_repository import IOrderRepository
from course_access.domain.entities import Order, OrderStatus


class OrderRepository(SqlRepository, IOrderRepository):
    """Order repository implementation using SQLModel"""

    async def create(self, order: Order) -> Order:
        """Create a new order"""
        return await self._persist(order)

    async def get_by_reference(self, order_reference: str) -> Optional[Order]:
        """Get order by provider-facing reference"""
        stmt = (
            select(Order)
            .where(Order.order_reference == order_reference)
            .execution_options(populate_existing=True)
        )
        result = await self._run(self.session.exec(stmt))
        return result.one_or_none()

    async def transition_from_pending(
        self, order_reference: str, status: OrderStatus, paid_at=None
    ) -> bool:
        """Conditional update; a terminal order is never touched again"""
        values = {"status": status}
        if paid_at is not None:
            values["paid_at"] = paid_at

        stmt = (
            update(Order)
            .where(
                Order.order_reference == order_reference,
                Order.status == OrderStatus.pending,
            )
            .values(**values)
            .execution_options(synchronize_session="fetch")
        )
        result = await self._run(self.session.execute(stmt))
        return result.rowcount > 0
