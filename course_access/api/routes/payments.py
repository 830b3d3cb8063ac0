"""
Payment API Routes

Order creation, the provider callback and the development purchase flow.
"""

import json
import logging

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, Field

from course_access.api.error import ClientError, ServerError
from course_access.app.services.payment_gateway import IPaymentGateway
from course_access.app.services.unit_of_work import UnitOfWork
from course_access.app.use_cases.payments import (
    CompletePaymentUseCase,
    CreateOrderResponse,
    CreateOrderUseCase,
    DevPurchaseResponse,
    DevPurchaseUseCase,
)
from course_access.config import ApplicationConfig
from course_access.depends import get_catalog, get_payment_gateway, get_unit_of_work, require_identity
from course_access.domain.catalog import Catalog
from course_access.libs.result import Error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payments", tags=["Payments"])


class PurchaseRequest(BaseModel):
    """Block or full-course id to buy"""

    item_id: str = Field(..., min_length=1, max_length=200, description="Entitlement id")


@router.post("/orders", status_code=status.HTTP_201_CREATED, response_model=CreateOrderResponse)
async def create_order(
    request: PurchaseRequest,
    identity: str = Depends(require_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    catalog: Catalog = Depends(get_catalog),
    gateway: IPaymentGateway = Depends(get_payment_gateway),
):
    """
    Create Order

    Prices the item from the catalog and returns the signed purchase form
    the browser posts to the provider.

    Raises:
        - 400 Bad Request: Unknown item (INVALID_ENTITLEMENT)
        - 401 Unauthorized: No session
        - 409 Conflict: Item already owned
    """
    use_case = CreateOrderUseCase(uow, catalog, gateway, ApplicationConfig.PAYMENT_CURRENCY)
    result = await use_case.execute(identity, request.item_id)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_ENTITLEMENT":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        if error.code == "ALREADY_OWNED":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.post("/webhook", status_code=status.HTTP_200_OK)
async def payment_webhook(
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    gateway: IPaymentGateway = Depends(get_payment_gateway),
):
    """
    Payment Provider Callback

    Answers with the signed acknowledgment the provider expects. Duplicate
    deliveries are acknowledged without side effects.

    Raises:
        - 400 Bad Request: Malformed body, invalid signature or amount mismatch
        - 404 Not Found: Unknown order reference
    """
    body = await request.body()
    try:
        payload = json.loads(body)
    except ValueError:
        payload = None

    if not isinstance(payload, dict):
        raise ClientError(Error("INVALID_PAYLOAD", "Malformed payment notification"))

    result = await CompletePaymentUseCase(uow, gateway).execute(payload)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_PAYLOAD", "INVALID_SIGNATURE", "AMOUNT_MISMATCH"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        if error.code == "ORDER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value.acknowledgment


@router.post(
    "/dev-purchase", status_code=status.HTTP_200_OK, response_model=DevPurchaseResponse
)
async def dev_purchase(
    request: PurchaseRequest,
    identity: str = Depends(require_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    catalog: Catalog = Depends(get_catalog),
):
    """
    Development Purchase

    Grants the item without a payment provider. Only available when
    PAYMENT_MODE is dev.

    Raises:
        - 400 Bad Request: Unknown item
        - 401 Unauthorized: No session
        - 404 Not Found: Not in dev mode
    """
    if ApplicationConfig.PAYMENT_MODE != "dev":
        raise ClientError(
            Error("NOT_FOUND", "Not found"), status_code=status.HTTP_404_NOT_FOUND
        )

    result = await DevPurchaseUseCase(uow, catalog).execute(identity, request.item_id)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_ENTITLEMENT":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value
