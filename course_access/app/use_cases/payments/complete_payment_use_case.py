"""
Complete Payment Use Case

Applies a signed payment provider callback to its order.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict

from course_access.app.services.entitlement_grantor import EntitlementGrantor
from course_access.app.services.payment_gateway import IPaymentGateway
from course_access.app.services.unit_of_work import UnitOfWork
from course_access.domain.base import utcnow
from course_access.domain.entities import AuditEvent, OrderStatus
from course_access.libs.result import Error, Result, Return
from .dtos import CompletePaymentResponse

logger = logging.getLogger(__name__)

APPROVED_STATUSES = {"Approved"}
DECLINED_STATUSES = {"Declined", "Expired"}


def _same_amount(reported: Any, expected: int) -> bool:
    try:
        return Decimal(str(reported)) == Decimal(expected)
    except (InvalidOperation, ValueError):
        return False


class CompletePaymentUseCase:
    """
    Use case for the payment provider callback.

    Business Rules:
    - Signature is verified before anything is read or written
    - Invalid signature leaves the order pending and creates no grant
    - pending -> approved creates exactly one grant (same transaction)
    - pending -> declined on Declined/Expired; other statuses change nothing
    - Approved callbacks must carry the stored amount and currency
    - Callbacks for terminal orders are acknowledged without side effects
    """

    def __init__(self, uow: UnitOfWork, gateway: IPaymentGateway):
        self.uow = uow
        self.gateway = gateway

    async def execute(self, payload: Dict[str, Any]) -> Result[CompletePaymentResponse]:
        """
        Execute complete payment use case.

        Args:
            payload: Decoded callback body

        Returns:
            Result with order status and the signed acknowledgment, or Error

        Errors:
            - INVALID_PAYLOAD: No order reference
            - INVALID_SIGNATURE: Signature does not match
            - ORDER_NOT_FOUND: Unknown order reference
            - AMOUNT_MISMATCH: Approved amount/currency differ from the order
        """
        order_reference = payload.get("orderReference")
        if not order_reference or not isinstance(order_reference, str):
            return Return.err(Error("INVALID_PAYLOAD", "Missing order reference"))

        if not self.gateway.callback_is_authentic(payload):
            logger.warning(f"Rejected payment callback with invalid signature for {order_reference}")
            return Return.err(Error("INVALID_SIGNATURE", "Payment notification rejected"))

        transaction_status = payload.get("transactionStatus")

        async with self.uow:
            order = await self.uow.orders.get_by_reference(order_reference)
            if order is None:
                return Return.err(Error("ORDER_NOT_FOUND", "Order not found"))

            if order.status != OrderStatus.pending:
                return Return.ok(self._response(order_reference, order.status, False))

            new_status = None
            grant_created = False

            if transaction_status in APPROVED_STATUSES:
                if not (
                    _same_amount(payload.get("amount"), order.amount)
                    and payload.get("currency") == order.currency
                ):
                    logger.error(f"Payment callback amount mismatch for {order_reference}")
                    return Return.err(Error("AMOUNT_MISMATCH", "Payment notification rejected"))

                if await self.uow.orders.transition_from_pending(
                    order_reference, OrderStatus.approved, paid_at=utcnow()
                ):
                    new_status = OrderStatus.approved
                    grant_created = await EntitlementGrantor(self.uow).grant(
                        order.identity,
                        order.entitlement_id,
                        source="payment",
                        metadata={"order_reference": order_reference},
                    )

            elif transaction_status in DECLINED_STATUSES:
                if await self.uow.orders.transition_from_pending(
                    order_reference, OrderStatus.declined
                ):
                    new_status = OrderStatus.declined

            if new_status is None:
                # Intermediate status, or another callback won the transition
                current = await self.uow.orders.get_by_reference(order_reference)
                return Return.ok(self._response(order_reference, current.status, False))

            await self.uow.audit_events.create(
                AuditEvent(
                    identity=order.identity,
                    action=f"order_{new_status.value}",
                    event_metadata={
                        "order_reference": order_reference,
                        "transaction_status": transaction_status,
                        "reason_code": payload.get("reasonCode"),
                    },
                )
            )

            await self.uow.commit()

            logger.info(f"Order {order_reference} {new_status.value}")
            return Return.ok(self._response(order_reference, new_status, grant_created))

    def _response(
        self, order_reference: str, status: OrderStatus, grant_created: bool
    ) -> CompletePaymentResponse:
        return CompletePaymentResponse(
            order_reference=order_reference,
            order_status=OrderStatus(status).value,
            grant_created=grant_created,
            acknowledgment=self.gateway.acknowledge(order_reference),
        )
