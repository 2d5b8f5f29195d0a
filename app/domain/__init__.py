"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import CertificateType, IssueStatus, OrderStatus, PaymentStatus
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    EventDeskException,
    ResourceNotFoundException,
    ValidationException,
)

__all__ = [
    # Enums
    "CertificateType",
    "IssueStatus",
    "OrderStatus",
    "PaymentStatus",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "EventDeskException",
    "ResourceNotFoundException",
    "ValidationException",
]
