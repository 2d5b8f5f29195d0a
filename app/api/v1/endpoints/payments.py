"""Team registration fee: create a gateway order, confirm the payment.

A confirmed payment completes the registration and issues a certificate
to each team member in the same request.
"""

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import get_current_user, get_team_payment_workflow
from app.application.services import TeamPaymentWorkflow
from app.core.limiter import limit_payment
from app.schemas.payment import (
    ConfirmPaymentRequest,
    ConfirmPaymentResponse,
    CreateOrderRequest,
    OrderResponse,
)

router = APIRouter()


@router.post("/orders", response_model=OrderResponse, status_code=201)
@limit_payment
async def create_order(
    request: Request,
    body: CreateOrderRequest,
    uid: str = Depends(get_current_user),
    workflow: TeamPaymentWorkflow = Depends(get_team_payment_workflow),
):
    order = await workflow.create_order(uid, body.amount)
    return OrderResponse(
        order_id=order.order_id,
        amount=order.amount,
        currency=order.currency,
        receipt=order.receipt,
        status=order.status,
        key_id=order.key_id,
    )


@router.post("/confirm", response_model=ConfirmPaymentResponse)
@limit_payment
async def confirm_payment(
    request: Request,
    body: ConfirmPaymentRequest,
    uid: str = Depends(get_current_user),
    workflow: TeamPaymentWorkflow = Depends(get_team_payment_workflow),
):
    """Verify the gateway signature; on success mark paid and issue certificates.

    A signature mismatch is recorded on the order and answered with 400.
    """
    result = await workflow.confirm(uid, body.order_id, body.payment_id, body.signature)
    return ConfirmPaymentResponse(
        message="Payment verified successfully",
        payment_status=result.payment_status,
        certificates=result.certificates.to_dict() if result.certificates else None,
    )
