"""
Create Order Use Case

Starts a paid purchase: stores a pending order and signs the provider form.
"""

from uuid import uuid4

from course_access.app.services.payment_gateway import IPaymentGateway
from course_access.app.services.unit_of_work import UnitOfWork
from course_access.domain.catalog import Catalog
from course_access.domain.entities import AuditEvent, Order
from course_access.domain.entitlements import has_access
from course_access.libs.result import Error, Result, Return
from .dtos import CreateOrderResponse


class CreateOrderUseCase:
    """
    Use case for starting a purchase.

    Business Rules:
    - Caller must be logged in (identity comes from the session)
    - Item must be a catalog block or full-course id; price comes from the catalog
    - Items already covered by the caller's entitlements cannot be bought again
    - Order starts pending; only a signed callback moves it
    """

    def __init__(self, uow: UnitOfWork, catalog: Catalog, gateway: IPaymentGateway, currency: str):
        self.uow = uow
        self.catalog = catalog
        self.gateway = gateway
        self.currency = currency

    async def execute(self, identity: str, item_id: str) -> Result[CreateOrderResponse]:
        """
        Execute create order use case.

        Errors:
            - INVALID_ENTITLEMENT: Item not in the catalog
            - ALREADY_OWNED: Caller already has access to the item
        """
        item = self.catalog.find_item(item_id)
        if item is None:
            return Return.err(Error("INVALID_ENTITLEMENT", "Unknown item"))

        async with self.uow:
            owned = await self.uow.grants.list_entitlement_ids(identity)
            if has_access(owned, item_id):
                return Return.err(Error("ALREADY_OWNED", "Item is already purchased"))

            order = Order(
                order_reference=uuid4().hex,
                identity=identity,
                entitlement_id=item.entitlement_id,
                amount=item.price,
                currency=self.currency,
            )
            await self.uow.orders.create(order)

            await self.uow.audit_events.create(
                AuditEvent(
                    identity=identity,
                    action="order_created",
                    event_metadata={
                        "order_reference": order.order_reference,
                        "entitlement_id": order.entitlement_id,
                        "amount": order.amount,
                    },
                )
            )

            await self.uow.commit()

            return Return.ok(
                CreateOrderResponse(
                    order_reference=order.order_reference,
                    amount=order.amount,
                    currency=order.currency,
                    payment_url=self.gateway.payment_url,
                    fields=self.gateway.purchase_form(order, item.title),
                )
            )
