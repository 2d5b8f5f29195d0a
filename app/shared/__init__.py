"""Shared utilities: logging and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.utils import (
    generate_auth_code,
    generate_cuid,
    generate_receipt,
    to_iso,
    utc_now,
    validate_key,
)

__all__ = [
    "generate_auth_code",
    "generate_cuid",
    "generate_receipt",
    "to_iso",
    "utc_now",
    "validate_key",
]
