"""
WayForPay protocol adapter.

Only the signed parts of the protocol live here: the purchase form, the
callback signature check and the signed acknowledgment.
"""

import time
from datetime import timezone
from typing import Any, Callable, Dict, List

from course_access.adapter.services.payment_signer import HmacPaymentSigner
from course_access.app.services.payment_gateway import IPaymentGateway
from course_access.domain.entities import Order

# Callback fields covered by merchantSignature, in signing order
CALLBACK_SIGNED_FIELDS = (
    "merchantAccount",
    "orderReference",
    "amount",
    "currency",
    "authCode",
    "cardPan",
    "transactionStatus",
    "reasonCode",
)

ACK_STATUS = "accept"


class WayForPayGateway(IPaymentGateway):
    def __init__(
        self,
        signer: HmacPaymentSigner,
        merchant_account: str,
        merchant_domain: str,
        pay_url: str,
        clock: Callable[[], float] = time.time,
    ):
        self.signer = signer
        self.merchant_account = merchant_account
        self.merchant_domain = merchant_domain
        self._pay_url = pay_url
        self.clock = clock

    @property
    def payment_url(self) -> str:
        return self._pay_url

    def purchase_form(self, order: Order, product_name: str) -> Dict[str, Any]:
        order_date = int(order.created_at.replace(tzinfo=timezone.utc).timestamp())
        signed_values: List[Any] = [
            self.merchant_account,
            self.merchant_domain,
            order.order_reference,
            order_date,
            order.amount,
            order.currency,
            product_name,
            1,
            order.amount,
        ]
        return {
            "merchantAccount": self.merchant_account,
            "merchantDomainName": self.merchant_domain,
            "merchantTransactionSecureType": "AUTO",
            "orderReference": order.order_reference,
            "orderDate": order_date,
            "amount": order.amount,
            "currency": order.currency,
            "productName": [product_name],
            "productCount": [1],
            "productPrice": [order.amount],
            "clientEmail": order.identity,
            "merchantSignature": self.signer.sign(signed_values),
        }

    def callback_is_authentic(self, payload: Dict[str, Any]) -> bool:
        if payload.get("merchantAccount") != self.merchant_account:
            return False
        values = [
            "" if payload.get(name) is None else payload[name]
            for name in CALLBACK_SIGNED_FIELDS
        ]
        return self.signer.verify(values, payload.get("merchantSignature"))

    def acknowledge(self, order_reference: str) -> Dict[str, Any]:
        now = int(self.clock())
        return {
            "orderReference": order_reference,
            "status": ACK_STATUS,
            "time": now,
            "signature": self.signer.sign([order_reference, ACK_STATUS, now]),
        }
