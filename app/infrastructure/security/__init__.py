"""Security: session tokens and payment signatures."""

from app.infrastructure.security.jwt import issue_session_token, session_uid
from app.infrastructure.security.signature import (
    compute_payment_signature,
    verify_payment_signature,
)

__all__ = [
    "compute_payment_signature",
    "issue_session_token",
    "session_uid",
    "verify_payment_signature",
]
