"""Payment orders and confirmation (team registration fee).

Orders live under their owner's record at {owner}/payments/{orderId}; the
owner is a user (users/{uid}) or an olympiad entry (gio-event/{uid}).
Confirmation writes are field-scoped multi-path updates so concurrent edits
to other fields of the same record are never clobbered.
"""

from __future__ import annotations

import logging
from typing import Any

from app.application.collections import user_path
from app.application.dtos.payment import ConfirmResult, OrderResult, SignatureCheck
from app.application.interfaces import IDocumentStore, IPaymentGateway
from app.application.services.certificate_issuance import TeamCertificateIssuer
from app.domain.enums import OrderStatus, PaymentStatus
from app.domain.exceptions import (
    PaymentGatewayException,
    PaymentVerificationFailedException,
    ResourceNotFoundException,
    ValidationException,
)
from app.infrastructure.security.signature import verify_payment_signature
from app.shared.utils.datetime import from_timestamp_ms_utc, to_iso, utc_now
from app.shared.utils.generators import generate_receipt
from app.shared.utils.sanitization import validate_key

logger = logging.getLogger(__name__)


def to_minor_units(amount: Any) -> int:
    """Convert a major-unit amount (e.g. rupees) to minor units (paise).

    Raises:
        ValidationException: If amount is missing, non-numeric, or not positive.
    """
    if amount is None or amount == "" or isinstance(amount, bool):
        raise ValidationException("amount is required", "amount")
    try:
        value = float(amount)
    except (TypeError, ValueError):
        raise ValidationException("amount must be a number", "amount") from None
    if value <= 0:
        raise ValidationException("amount must be greater than 0", "amount")
    return round(value * 100)


def any_paid(payments: Any) -> bool:
    """Whether a payments map (or the list the store returns for it) holds a paid order."""
    if isinstance(payments, list):
        payments = dict(enumerate(payments))
    return any(
        isinstance(p, dict) and p.get("isPaid") is True for p in (payments or {}).values()
    )


class PaymentService:
    """Creates gateway orders and checks confirmation signatures."""

    def __init__(
        self,
        store: IDocumentStore,
        gateway: IPaymentGateway | None,
        key_secret: str,
        currency: str = "INR",
    ) -> None:
        self._store = store
        self._gateway = gateway
        self._key_secret = key_secret
        self._currency = currency

    async def create_order(self, owner_path: str, amount: Any) -> OrderResult:
        """Mint an order with the gateway, then persist it under owner_path/payments.

        Nothing is stored when the gateway call fails.
        """
        if self._gateway is None:
            raise PaymentGatewayException("payment gateway not configured")
        minor = to_minor_units(amount)
        order = await self._gateway.create_order(minor, self._currency, generate_receipt())
        order_id = order["id"]
        created_at = order.get("created_at")
        record = {
            "orderId": order_id,
            "amount": order.get("amount", minor),
            "currency": order.get("currency", self._currency),
            "receipt": order.get("receipt"),
            "status": order.get("status", OrderStatus.CREATED.value),
            "isPaid": False,
            "createdAt": to_iso(
                utc_now() if created_at is None else from_timestamp_ms_utc(int(created_at) * 1000)
            ),
        }
        await self._store.set(f"{owner_path}/payments/{order_id}", record)
        logger.info("Created payment order %s under %s", order_id, owner_path)
        return OrderResult(
            order_id=order_id,
            amount=record["amount"],
            currency=record["currency"],
            receipt=record["receipt"],
            status=record["status"],
            key_id=self._gateway.key_id,
        )

    async def check_signature(
        self, owner_path: str, order_id: str, payment_id: str, signature: str
    ) -> SignatureCheck:
        """Check signature against HMAC(orderId|paymentId) for an existing order.

        The returned order_id is the stored key (validated and stripped).

        Raises:
            ValidationException: If an input is missing.
            ResourceNotFoundException: If the order is not under owner_path.
        """
        for field, value in (
            ("orderId", order_id),
            ("paymentId", payment_id),
            ("signature", signature),
        ):
            if not value:
                raise ValidationException(f"{field} is required", field)
        order_id = validate_key(order_id, "orderId")
        order = await self._store.get(f"{owner_path}/payments/{order_id}")
        if not isinstance(order, dict):
            raise ResourceNotFoundException("payment order", order_id)
        return SignatureCheck(
            order_id=order_id,
            order=order,
            verified=verify_payment_signature(order_id, payment_id, signature, self._key_secret),
        )

    async def has_paid_order(self, owner_path: str) -> bool:
        return any_paid(await self._store.get(f"{owner_path}/payments"))


class TeamPaymentWorkflow:
    """Team fee: order -> confirmation -> member certificates."""

    def __init__(
        self,
        store: IDocumentStore,
        payments: PaymentService,
        issuer: TeamCertificateIssuer,
    ) -> None:
        self._store = store
        self._payments = payments
        self._issuer = issuer

    async def create_order(self, uid: str, amount: Any) -> OrderResult:
        return await self._payments.create_order(user_path(uid), amount)

    async def _record_failure(self, uid: str, check: SignatureCheck) -> None:
        """Mark a still-open order failed.

        A paid order is never downgraded, and the user's paymentStatus stays
        "completed" while any of their orders is paid.
        """
        owner = user_path(uid)
        if check.already_paid:
            return
        changes = {f"payments/{check.order_id}/status": OrderStatus.FAILED.value}
        if not await self._payments.has_paid_order(owner):
            changes["paymentStatus"] = PaymentStatus.FAILED.value
        await self._store.update(owner, changes)

    async def confirm(
        self, uid: str, order_id: str, payment_id: str, signature: str
    ) -> ConfirmResult:
        """Verify the signature, record the outcome, and issue certificates on success.

        Raises:
            PaymentVerificationFailedException: Signature mismatch (after the
                failure has been recorded on the order and the user).
        """
        owner = user_path(uid)
        check = await self._payments.check_signature(owner, order_id, payment_id, signature)
        order_id = check.order_id
        if not check.verified:
            await self._record_failure(uid, check)
            logger.warning("Payment verification failed for order %s (user %s)", order_id, uid)
            raise PaymentVerificationFailedException(order_id)

        await self._store.update(
            owner,
            {
                f"payments/{order_id}/isPaid": True,
                f"payments/{order_id}/status": OrderStatus.PAID.value,
                f"payments/{order_id}/paymentId": payment_id,
                f"payments/{order_id}/signature": signature,
                f"payments/{order_id}/paidAt": to_iso(),
                "paymentStatus": PaymentStatus.COMPLETED.value,
                "teamRegistered": True,
                "amountDue": 0,
            },
        )
        logger.info("Payment %s confirmed for order %s (user %s)", payment_id, order_id, uid)

        user = await self._store.get(owner) or {}
        certificates = await self._issuer.issue_for_user(uid, user)
        return ConfirmResult(
            order_id=order_id,
            payment_status=PaymentStatus.COMPLETED.value,
            certificates=certificates,
        )
