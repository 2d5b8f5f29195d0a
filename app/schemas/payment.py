"""Payment order and confirmation schemas."""

from typing import Any

from pydantic import Field

from app.schemas.common import CamelModel, IssuanceResponse


class CreateOrderRequest(CamelModel):
    """Amount in major units (e.g. rupees); validated by the payment service."""

    amount: Any = Field(default=None, description="Amount in major currency units, > 0")


class OrderResponse(CamelModel):
    """Order minted by the gateway; keyId is the public key for checkout."""

    order_id: str
    amount: int
    currency: str
    receipt: str | None = None
    status: str
    key_id: str


class ConfirmPaymentRequest(CamelModel):
    order_id: str | None = None
    payment_id: str | None = None
    signature: str | None = None


class ConfirmPaymentResponse(CamelModel):
    verified: bool = True
    message: str
    payment_status: str | None = None
    certificates: IssuanceResponse | None = None
