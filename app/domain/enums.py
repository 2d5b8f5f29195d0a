"""Domain enumerations for the eventdesk application.

Enums represent fixed sets of domain values stored in the document store.
"""

from enum import Enum


class PaymentStatus(str, Enum):
    """User-level payment status (users/{uid}/paymentStatus).

    pending after team registration; completed or failed after a
    confirmation attempt.
    """

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class OrderStatus(str, Enum):
    """Per-order status stored with each payment record."""

    CREATED = "created"
    PAID = "paid"
    FAILED = "failed"


class CertificateType(str, Enum):
    """Certificate type tags. Admin-issued certificates may carry other free-form tags."""

    TEAM_MEMBER = "tm"
    SESSION = "sec"


class IssueStatus(str, Enum):
    """Outcome of one item in a bulk issuance or import."""

    ISSUED = "issued"
    SKIPPED = "skipped"
    FAILED = "failed"
