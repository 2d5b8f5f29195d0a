"""Quiz/olympiad flow: entry, payment gate, marks, and mock rank.

Entries live at gio-event/{uid}. Marks and mock marks keep the maximum ever
submitted; both are written with an ETag compare-and-set so a lower score
racing a higher one can never win.
"""

from __future__ import annotations

import logging
import math
import random
from typing import Any

from app.application.collections import OLYMPIAD_ENTRIES, olympiad_entry_path
from app.application.dtos.payment import OrderResult
from app.application.interfaces import IDocumentStore
from app.application.services.conditional import Abort, create_if_absent, transact
from app.application.services.payment_service import PaymentService
from app.domain.enums import OrderStatus
from app.domain.exceptions import (
    DuplicateSubmissionException,
    PaymentVerificationFailedException,
    ResourceNotFoundException,
    ValidationException,
)
from app.shared.utils.datetime import to_iso

logger = logging.getLogger(__name__)

# (lowest score, inclusive rank range); first match wins, scores checked high to low.
MOCK_RANK_BANDS: tuple[tuple[float, int, int], ...] = (
    (80, 100, 999),
    (55, 1_000, 9_999),
    (25, 10_000, 99_999),
    (0, 100_000, 999_999),
)


def compute_mock_rank(score: float, rng: random.Random | None = None) -> int:
    """Return a pseudo-random rank from the band containing score (0..100).

    Raises:
        ValidationException: If score is outside 0..100.
    """
    if score < 0 or score > 100:
        raise ValidationException("Invalid marks: must be between 0 and 100", "marks")
    rng = rng or random.Random()
    for floor, low, high in MOCK_RANK_BANDS:
        if score >= floor:
            return rng.randint(low, high)
    raise ValidationException("Invalid marks", "marks")


def parse_score(value: Any) -> float:
    """Coerce a submitted score to a number; reject booleans and non-numeric values."""
    if isinstance(value, bool) or value is None or value == "":
        raise ValidationException("Marks must be a number", "marks")
    try:
        score = float(value)
    except (TypeError, ValueError):
        raise ValidationException("Marks must be a number", "marks") from None
    if not math.isfinite(score):
        raise ValidationException("Marks must be a number", "marks")
    return int(score) if score.is_integer() else score


def _keep_max(new_score: float):
    def mutate(current: Any) -> float:
        if current is not None and isinstance(current, (int, float)) and new_score <= current:
            raise Abort()
        return new_score

    return mutate


def _payments(payments: dict[str, Any] | None) -> dict[str, Any]:
    return {k: v for k, v in (payments or {}).items() if isinstance(v, dict)}


class OlympiadService:
    """Per-user olympiad entry and its payment/marks state."""

    def __init__(
        self,
        store: IDocumentStore,
        payments: PaymentService,
        rng: random.Random | None = None,
    ) -> None:
        self._store = store
        self._payments = payments
        self._rng = rng or random.Random()

    async def submit_entry(self, uid: str, form: dict[str, Any]) -> None:
        """Create the entry once; a second submission is rejected, never overwritten."""
        if not form:
            raise ValidationException("Form data is missing or empty", "formData")
        entry = {k: v for k, v in form.items() if k not in ("payments", "marks", "mockMarks")}
        entry["isRegistered"] = True
        if not await create_if_absent(self._store, olympiad_entry_path(uid), entry):
            raise DuplicateSubmissionException("olympiad entry", uid)
        logger.info("Olympiad entry submitted for user %s", uid)

    async def is_registered(self, uid: str) -> bool:
        return await self._store.get(olympiad_entry_path(uid)) is not None

    async def get_entry(self, uid: str) -> dict[str, Any]:
        entry = await self._store.get(olympiad_entry_path(uid))
        if entry is None:
            raise ResourceNotFoundException("olympiad entry", uid)
        return entry

    async def list_entries(self) -> dict[str, Any]:
        entries = await self._store.get(OLYMPIAD_ENTRIES)
        if not entries:
            raise ResourceNotFoundException("olympiad entries", OLYMPIAD_ENTRIES)
        return entries

    async def get_standard(self, uid: str) -> Any:
        entry = await self.get_entry(uid)
        std = entry.get("std")
        if not std:
            raise ResourceNotFoundException("standard", uid)
        return std

    async def create_order(self, uid: str, amount: Any) -> OrderResult:
        return await self._payments.create_order(olympiad_entry_path(uid), amount)

    async def confirm_payment(
        self, uid: str, order_id: str, payment_id: str, signature: str
    ) -> None:
        """Mark the order paid and attemptable; a bad signature marks an unpaid order failed and raises."""
        owner = olympiad_entry_path(uid)
        check = await self._payments.check_signature(owner, order_id, payment_id, signature)
        order_id = check.order_id
        if not check.verified:
            if not check.already_paid:
                await self._store.update(
                    owner, {f"payments/{order_id}/status": OrderStatus.FAILED.value}
                )
            raise PaymentVerificationFailedException(order_id)
        if check.already_paid:
            # Re-confirming must not reopen an attempt that was already used.
            logger.info("Olympiad order %s already paid (user %s)", order_id, uid)
            return
        await self._store.update(
            owner,
            {
                f"payments/{order_id}/isPaid": True,
                f"payments/{order_id}/canAttempt": True,
                f"payments/{order_id}/status": OrderStatus.PAID.value,
                f"payments/{order_id}/paymentId": payment_id,
                f"payments/{order_id}/signature": signature,
                f"payments/{order_id}/paidAt": to_iso(),
            },
        )
        logger.info("Olympiad payment %s confirmed for user %s", payment_id, uid)

    async def attempt_status(self, uid: str) -> dict[str, bool]:
        payments = _payments(await self._store.get(f"{olympiad_entry_path(uid)}/payments"))
        return {
            "canAttempt": any(p.get("canAttempt") is True for p in payments.values()),
            "hasPaid": any(p.get("isPaid") is True for p in payments.values()),
        }

    async def store_marks(self, uid: str, marks: Any) -> dict[str, bool]:
        """Keep the highest marks; close the attempt gate once a paid attempt is recorded."""
        score = parse_score(marks)
        entry = await self.get_entry(uid)
        updated, _ = await transact(
            self._store, f"{olympiad_entry_path(uid)}/marks", _keep_max(score)
        )

        payments = _payments(entry.get("payments"))
        gate_closed = False
        if any(p.get("canAttempt") is True and p.get("isPaid") is True for p in payments.values()):
            await self._store.update(
                f"{olympiad_entry_path(uid)}/payments",
                {f"{order_id}/canAttempt": False for order_id in payments},
            )
            gate_closed = True
        return {"marksUpdated": updated, "attemptClosed": gate_closed}

    async def store_mock_marks(self, uid: str, marks: Any) -> dict[str, bool]:
        score = parse_score(marks)
        await self.get_entry(uid)
        updated, _ = await transact(
            self._store, f"{olympiad_entry_path(uid)}/mockMarks", _keep_max(score)
        )
        return {"marksUpdated": updated}

    async def mock_rank(self, uid: str) -> int:
        mock_marks = await self._store.get(f"{olympiad_entry_path(uid)}/mockMarks")
        if mock_marks is None:
            raise ResourceNotFoundException("mock marks", uid)
        return compute_mock_rank(parse_score(mock_marks), self._rng)
