"""DTOs for payment orders and confirmation."""

from dataclasses import dataclass

from app.application.dtos.certificate import IssuanceResult


@dataclass(frozen=True)
class OrderResult:
    """Order minted by the gateway and persisted under its owner."""

    order_id: str
    amount: int
    currency: str
    receipt: str
    status: str
    key_id: str


@dataclass(frozen=True)
class ConfirmResult:
    """Successful payment confirmation (failures raise)."""

    order_id: str
    payment_status: str
    certificates: IssuanceResult | None = None


@dataclass(frozen=True)
class SignatureCheck:
    """Outcome of checking a confirmation against its stored order.

    order_id is the normalized key the order is stored under; callers write
    back to that key, never to the raw value they were given.
    """

    order_id: str
    order: dict
    verified: bool

    @property
    def already_paid(self) -> bool:
        return self.order.get("isPaid") is True
