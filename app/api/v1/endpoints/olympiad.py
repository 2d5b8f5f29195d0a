"""Quiz/olympiad API for the signed-in participant.

Entry (once per user), payment gate, marks and mock rank. Marks keep the
highest score ever submitted.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request

from app.api.v1.dependencies import get_current_user, get_olympiad_service
from app.application.services import OlympiadService
from app.application.services.form_service import unwrap_form
from app.core.limiter import limit_payment
from app.schemas.common import MessageResponse
from app.schemas.olympiad import (
    AttemptStatusResponse,
    EntryResponse,
    MarksRequest,
    MarksResponse,
    RankResponse,
    RegistrationStatusResponse,
    StandardResponse,
)
from app.schemas.payment import (
    ConfirmPaymentRequest,
    ConfirmPaymentResponse,
    CreateOrderRequest,
    OrderResponse,
)

router = APIRouter()


@router.post("/entry", response_model=MessageResponse, status_code=201)
async def submit_entry(
    body: dict[str, Any] | None = Body(None),
    uid: str = Depends(get_current_user),
    olympiad: OlympiadService = Depends(get_olympiad_service),
):
    """Register the caller; a second entry is rejected with 409."""
    await olympiad.submit_entry(uid, unwrap_form(body))
    return MessageResponse(message="Entry submitted successfully")


@router.get("/registration-status", response_model=RegistrationStatusResponse)
async def registration_status(
    uid: str = Depends(get_current_user),
    olympiad: OlympiadService = Depends(get_olympiad_service),
):
    return RegistrationStatusResponse(registered=await olympiad.is_registered(uid))


@router.get("/entry", response_model=EntryResponse)
async def get_entry(
    uid: str = Depends(get_current_user),
    olympiad: OlympiadService = Depends(get_olympiad_service),
):
    return EntryResponse(entry=await olympiad.get_entry(uid))


@router.get("/standard", response_model=StandardResponse)
async def get_standard(
    uid: str = Depends(get_current_user),
    olympiad: OlympiadService = Depends(get_olympiad_service),
):
    return StandardResponse(std=await olympiad.get_standard(uid))


@router.post("/payments/orders", response_model=OrderResponse, status_code=201)
@limit_payment
async def create_order(
    request: Request,
    body: CreateOrderRequest,
    uid: str = Depends(get_current_user),
    olympiad: OlympiadService = Depends(get_olympiad_service),
):
    order = await olympiad.create_order(uid, body.amount)
    return OrderResponse(
        order_id=order.order_id,
        amount=order.amount,
        currency=order.currency,
        receipt=order.receipt,
        status=order.status,
        key_id=order.key_id,
    )


@router.post("/payments/confirm", response_model=ConfirmPaymentResponse)
@limit_payment
async def confirm_payment(
    request: Request,
    body: ConfirmPaymentRequest,
    uid: str = Depends(get_current_user),
    olympiad: OlympiadService = Depends(get_olympiad_service),
):
    """Verify the signature; success opens the attempt gate."""
    await olympiad.confirm_payment(uid, body.order_id, body.payment_id, body.signature)
    return ConfirmPaymentResponse(message="Payment verified successfully")


@router.get("/can-attempt", response_model=AttemptStatusResponse)
async def can_attempt(
    uid: str = Depends(get_current_user),
    olympiad: OlympiadService = Depends(get_olympiad_service),
):
    status = await olympiad.attempt_status(uid)
    return AttemptStatusResponse(can_attempt=status["canAttempt"], has_paid=status["hasPaid"])


@router.post("/marks", response_model=MarksResponse)
async def store_marks(
    body: MarksRequest,
    uid: str = Depends(get_current_user),
    olympiad: OlympiadService = Depends(get_olympiad_service),
):
    """Record the attempt; closes the attempt gate after a paid attempt."""
    result = await olympiad.store_marks(uid, body.marks)
    return MarksResponse(
        message="Marks stored successfully",
        marks_updated=result["marksUpdated"],
        attempt_closed=result["attemptClosed"],
    )


@router.post("/mock-marks", response_model=MarksResponse)
async def store_mock_marks(
    body: MarksRequest,
    uid: str = Depends(get_current_user),
    olympiad: OlympiadService = Depends(get_olympiad_service),
):
    result = await olympiad.store_mock_marks(uid, body.marks)
    return MarksResponse(message="Mock marks stored successfully", marks_updated=result["marksUpdated"])


@router.get("/mock-rank", response_model=RankResponse)
async def mock_rank(
    uid: str = Depends(get_current_user),
    olympiad: OlympiadService = Depends(get_olympiad_service),
):
    return RankResponse(rank=await olympiad.mock_rank(uid))
