"""Pydantic request/response schemas for the API (camelCase JSON)."""

from app.schemas.auth import CredentialsRequest, SessionResponse
from app.schemas.common import CamelModel, IdResponse, IssuanceResponse, MessageResponse
from app.schemas.health import HealthResponse
from app.schemas.payment import ConfirmPaymentResponse, OrderResponse

__all__ = [
    "CamelModel",
    "ConfirmPaymentResponse",
    "CredentialsRequest",
    "HealthResponse",
    "IdResponse",
    "IssuanceResponse",
    "MessageResponse",
    "OrderResponse",
    "SessionResponse",
]
