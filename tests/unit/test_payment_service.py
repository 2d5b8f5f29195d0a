"""Tests for order creation and team payment confirmation."""

import pytest

from app.application.services import PaymentService, TeamCertificateIssuer, TeamPaymentWorkflow
from app.application.services.payment_service import to_minor_units
from app.domain.exceptions import (
    PaymentGatewayException,
    PaymentVerificationFailedException,
    ResourceNotFoundException,
    ValidationException,
)
from app.infrastructure.security.signature import compute_payment_signature
from tests.fakes import FakePaymentGateway, InMemoryDocumentStore

SECRET = "test_razorpay_secret"


@pytest.mark.parametrize(("amount", "minor"), [(500, 50000), ("499.99", 49999), (0.5, 50)])
def test_to_minor_units(amount, minor) -> None:
    assert to_minor_units(amount) == minor


@pytest.mark.parametrize("amount", [None, "", 0, -5, "abc", True])
def test_to_minor_units_rejects_invalid(amount) -> None:
    with pytest.raises(ValidationException):
        to_minor_units(amount)


def _workflow(store, gateway=None) -> TeamPaymentWorkflow:
    payments = PaymentService(store, gateway or FakePaymentGateway(), SECRET)
    return TeamPaymentWorkflow(store, payments, TeamCertificateIssuer(store))


async def test_create_order_persists_under_user() -> None:
    store = InMemoryDocumentStore({"users": {"u1": {"id": "u1"}}})

    order = await _workflow(store).create_order("u1", 500)

    assert (order.amount, order.currency, order.key_id) == (50000, "INR", "rzp_test_key")
    assert len(order.receipt) == 20
    stored = await store.get(f"users/u1/payments/{order.order_id}")
    assert stored["isPaid"] is False
    assert stored["status"] == "created"
    assert stored["createdAt"].startswith("2023-11-14")


async def test_gateway_failure_persists_nothing() -> None:
    store = InMemoryDocumentStore({"users": {"u1": {"id": "u1"}}})
    gateway = FakePaymentGateway()
    gateway.fail = True

    with pytest.raises(PaymentGatewayException):
        await _workflow(store, gateway).create_order("u1", 500)
    assert await store.get("users/u1/payments") is None


async def test_missing_gateway_is_reported() -> None:
    payments = PaymentService(InMemoryDocumentStore(), None, SECRET)
    with pytest.raises(PaymentGatewayException):
        await payments.create_order("users/u1", 500)


async def test_confirm_unknown_order_is_not_found() -> None:
    store = InMemoryDocumentStore({"users": {"u1": {"id": "u1"}}})
    with pytest.raises(ResourceNotFoundException):
        await _workflow(store).confirm("u1", "order_x", "pay_1", "sig")


async def test_confirm_requires_all_fields() -> None:
    with pytest.raises(ValidationException):
        await _workflow(InMemoryDocumentStore()).confirm("u1", "order_x", "", "sig")


async def test_bad_signature_marks_order_and_user_failed() -> None:
    store = InMemoryDocumentStore({"users": {"u1": {"id": "u1"}}})
    workflow = _workflow(store)
    order = await workflow.create_order("u1", 500)

    with pytest.raises(PaymentVerificationFailedException):
        await workflow.confirm("u1", order.order_id, "pay_1", "0" * 64)

    user = await store.get("users/u1")
    assert user["paymentStatus"] == "failed"
    assert user["payments"][order.order_id]["status"] == "failed"
    assert user["payments"][order.order_id]["isPaid"] is False


async def test_confirm_completes_registration_and_issues_certificates() -> None:
    store = InMemoryDocumentStore(
        {
            "users": {
                "u1": {
                    "id": "u1",
                    "paymentStatus": "pending",
                    "amountDue": 500,
                    "team": {
                        "teamName": "Rockets",
                        "competitionTopic": {"topic": "Robotics 13 to 18"},
                        "members": [
                            {"name": "Asha", "authCode": "TM1"},
                            {"name": "Ben", "authCode": "TM2"},
                        ],
                    },
                }
            }
        }
    )
    workflow = _workflow(store)
    order = await workflow.create_order("u1", 500)
    signature = compute_payment_signature(order.order_id, "pay_1", SECRET)

    result = await workflow.confirm("u1", order.order_id, "pay_1", signature)

    assert result.payment_status == "completed"
    assert result.certificates.issued == 2
    user = await store.get("users/u1")
    assert user["paymentStatus"] == "completed"
    assert user["teamRegistered"] is True
    assert user["amountDue"] == 0
    payment = user["payments"][order.order_id]
    assert payment["isPaid"] is True
    assert payment["paymentId"] == "pay_1"
    certificates = list((await store.get("certificates")).values())
    assert {c["topic"] for c in certificates} == {"Robotics"}
    assert {c["type"] for c in certificates} == {"tm"}


async def _paid_order(store, workflow, uid: str = "u1") -> str:
    order = await workflow.create_order(uid, 500)
    signature = compute_payment_signature(order.order_id, "pay_1", SECRET)
    await workflow.confirm(uid, order.order_id, "pay_1", signature)
    return order.order_id


async def test_bad_signature_on_paid_order_changes_nothing() -> None:
    store = InMemoryDocumentStore({"users": {"u1": {"id": "u1"}}})
    workflow = _workflow(store)
    order_id = await _paid_order(store, workflow)
    before = await store.get("users/u1")

    with pytest.raises(PaymentVerificationFailedException):
        await workflow.confirm("u1", order_id, "pay_1", "bad")

    user = await store.get("users/u1")
    assert user == before
    assert user["paymentStatus"] == "completed"
    assert user["payments"][order_id]["status"] == "paid"


async def test_failed_second_order_keeps_completed_status() -> None:
    store = InMemoryDocumentStore({"users": {"u1": {"id": "u1"}}})
    workflow = _workflow(store)
    paid_id = await _paid_order(store, workflow)
    second = await workflow.create_order("u1", 500)

    with pytest.raises(PaymentVerificationFailedException):
        await workflow.confirm("u1", second.order_id, "pay_2", "0" * 64)

    user = await store.get("users/u1")
    assert user["payments"][second.order_id]["status"] == "failed"
    assert user["payments"][paid_id]["isPaid"] is True
    assert user["paymentStatus"] == "completed"
    assert user["teamRegistered"] is True


async def test_confirm_writes_to_the_stored_order_key() -> None:
    store = InMemoryDocumentStore({"users": {"u1": {"id": "u1"}}})
    workflow = _workflow(store)
    order = await workflow.create_order("u1", 500)
    signature = compute_payment_signature(order.order_id, "pay_1", SECRET)

    result = await workflow.confirm("u1", f"  {order.order_id} ", "pay_1", signature)

    assert result.order_id == order.order_id
    payments = await store.get("users/u1/payments")
    assert set(payments) == {order.order_id}
    assert payments[order.order_id]["isPaid"] is True
