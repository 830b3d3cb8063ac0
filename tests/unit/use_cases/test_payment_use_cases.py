"""
Unit tests for CreateOrderUseCase, CompletePaymentUseCase and DevPurchaseUseCase
"""
from unittest.mock import MagicMock

import pytest

from course_access.app.use_cases.payments import (
    CompletePaymentUseCase,
    CreateOrderUseCase,
    DevPurchaseUseCase,
)
from course_access.domain.catalog import load_catalog
from course_access.domain.entities import Order, OrderStatus

ACK = {"orderReference": "ref-1", "status": "accept", "time": 1700000000, "signature": "sig"}


@pytest.fixture
def catalog():
    return load_catalog()


@pytest.fixture
def gateway():
    gateway = MagicMock()
    gateway.payment_url = "https://secure.wayforpay.com/pay"
    gateway.purchase_form.return_value = {"merchantSignature": "form-sig"}
    gateway.callback_is_authentic.return_value = True
    gateway.acknowledge.return_value = ACK
    return gateway


def make_order(status=OrderStatus.pending, amount=499):
    return Order(
        order_reference="ref-1",
        identity="viewer@example.com",
        entitlement_id="course-1-block-2",
        amount=amount,
        currency="UAH",
        status=status,
    )


def callback(**overrides):
    payload = {
        "merchantAccount": "test_merch_n1",
        "orderReference": "ref-1",
        "amount": 499,
        "currency": "UAH",
        "transactionStatus": "Approved",
        "merchantSignature": "sig",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_create_order_prices_from_catalog(mock_uow, catalog, gateway):
    use_case = CreateOrderUseCase(mock_uow, catalog, gateway, "UAH")

    result = await use_case.execute("viewer@example.com", "course-1-full")

    assert result.is_ok()
    data = result.value
    assert data.amount == 1499
    assert data.currency == "UAH"
    assert data.payment_url == gateway.payment_url
    assert data.fields == {"merchantSignature": "form-sig"}

    order = mock_uow.orders.create.call_args[0][0]
    assert order.status == OrderStatus.pending
    assert order.entitlement_id == "course-1-full"
    assert order.order_reference == data.order_reference
    gateway.purchase_form.assert_called_once()
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_create_order_rejects_unknown_item(mock_uow, catalog, gateway):
    result = await CreateOrderUseCase(mock_uow, catalog, gateway, "UAH").execute(
        "viewer@example.com", "course-9-block-1"
    )

    assert result.error.code == "INVALID_ENTITLEMENT"
    mock_uow.orders.create.assert_not_called()


@pytest.mark.asyncio
async def test_create_order_rejects_block_covered_by_bundle(mock_uow, catalog, gateway):
    mock_uow.grants.list_entitlement_ids.return_value = ["course-1-full"]

    result = await CreateOrderUseCase(mock_uow, catalog, gateway, "UAH").execute(
        "viewer@example.com", "course-1-block-3"
    )

    assert result.error.code == "ALREADY_OWNED"
    mock_uow.orders.create.assert_not_called()


@pytest.mark.asyncio
async def test_invalid_signature_touches_nothing(mock_uow, gateway):
    gateway.callback_is_authentic.return_value = False

    result = await CompletePaymentUseCase(mock_uow, gateway).execute(callback())

    assert result.is_err()
    assert result.error.code == "INVALID_SIGNATURE"
    mock_uow.orders.get_by_reference.assert_not_called()
    mock_uow.orders.transition_from_pending.assert_not_called()
    mock_uow.grants.add.assert_not_called()


@pytest.mark.asyncio
async def test_missing_order_reference_is_invalid_payload(mock_uow, gateway):
    result = await CompletePaymentUseCase(mock_uow, gateway).execute({"amount": 499})

    assert result.error.code == "INVALID_PAYLOAD"
    gateway.callback_is_authentic.assert_not_called()


@pytest.mark.asyncio
async def test_approved_callback_grants_once(mock_uow, gateway):
    mock_uow.orders.get_by_reference.return_value = make_order()

    result = await CompletePaymentUseCase(mock_uow, gateway).execute(callback(amount=499.0))

    assert result.is_ok()
    assert result.value.order_status == "approved"
    assert result.value.grant_created is True
    assert result.value.acknowledgment == ACK

    args, kwargs = mock_uow.orders.transition_from_pending.call_args
    assert args == ("ref-1", OrderStatus.approved)
    assert kwargs["paid_at"] is not None
    mock_uow.grants.add.assert_called_once_with("viewer@example.com", "course-1-block-2")
    mock_uow.commit.assert_called_once()

    actions = [call[0][0].action for call in mock_uow.audit_events.create.call_args_list]
    assert actions == ["grant_created", "order_approved"]


@pytest.mark.asyncio
async def test_duplicate_callback_for_approved_order_is_acknowledged(mock_uow, gateway):
    mock_uow.orders.get_by_reference.return_value = make_order(status=OrderStatus.approved)

    result = await CompletePaymentUseCase(mock_uow, gateway).execute(callback())

    assert result.is_ok()
    assert result.value.order_status == "approved"
    assert result.value.grant_created is False
    mock_uow.orders.transition_from_pending.assert_not_called()
    mock_uow.grants.add.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_lost_transition_race_creates_no_grant(mock_uow, gateway):
    mock_uow.orders.get_by_reference.side_effect = [
        make_order(),
        make_order(status=OrderStatus.approved),
    ]
    mock_uow.orders.transition_from_pending.return_value = False

    result = await CompletePaymentUseCase(mock_uow, gateway).execute(callback())

    assert result.value.order_status == "approved"
    assert result.value.grant_created is False
    mock_uow.grants.add.assert_not_called()


@pytest.mark.asyncio
async def test_amount_mismatch_is_rejected(mock_uow, gateway):
    mock_uow.orders.get_by_reference.return_value = make_order(amount=1499)

    result = await CompletePaymentUseCase(mock_uow, gateway).execute(callback(amount=1))

    assert result.error.code == "AMOUNT_MISMATCH"
    mock_uow.orders.transition_from_pending.assert_not_called()
    mock_uow.grants.add.assert_not_called()


@pytest.mark.asyncio
async def test_declined_callback_declines_order(mock_uow, gateway):
    mock_uow.orders.get_by_reference.return_value = make_order()

    result = await CompletePaymentUseCase(mock_uow, gateway).execute(
        callback(transactionStatus="Declined", reasonCode=1101)
    )

    assert result.value.order_status == "declined"
    mock_uow.orders.transition_from_pending.assert_called_once_with("ref-1", OrderStatus.declined)
    mock_uow.grants.add.assert_not_called()


@pytest.mark.asyncio
async def test_intermediate_status_keeps_order_pending(mock_uow, gateway):
    mock_uow.orders.get_by_reference.return_value = make_order()

    result = await CompletePaymentUseCase(mock_uow, gateway).execute(
        callback(transactionStatus="InProcessing")
    )

    assert result.value.order_status == "pending"
    mock_uow.orders.transition_from_pending.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_order_is_not_found(mock_uow, gateway):
    result = await CompletePaymentUseCase(mock_uow, gateway).execute(callback())

    assert result.error.code == "ORDER_NOT_FOUND"


@pytest.mark.asyncio
async def test_dev_purchase_grants_and_redirects(mock_uow, catalog):
    result = await DevPurchaseUseCase(mock_uow, catalog).execute(
        "viewer@example.com", "course-2-full"
    )

    assert result.value.created is True
    assert result.value.redirect_url == "/block.html?bid=course-2-block-1"
    mock_uow.grants.add.assert_called_once_with("viewer@example.com", "course-2-full")
    mock_uow.commit.assert_called_once()
