"""Application DTOs (no dependency on the store's JSON shape)."""

from app.application.dtos.certificate import IssuanceResult, IssueItem
from app.application.dtos.payment import ConfirmResult, OrderResult, SignatureCheck

__all__ = [
    "ConfirmResult",
    "IssuanceResult",
    "IssueItem",
    "OrderResult",
    "SignatureCheck",
]
