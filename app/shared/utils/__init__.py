"""Shared utilities: datetime, generators, sanitization."""

from app.shared.utils.datetime import (
    from_timestamp_ms_utc,
    to_iso,
    utc_now,
)
from app.shared.utils.generators import generate_auth_code, generate_cuid, generate_receipt
from app.shared.utils.sanitization import validate_key

__all__ = [
    "generate_auth_code",
    "generate_cuid",
    "generate_receipt",
    "utc_now",
    "to_iso",
    "from_timestamp_ms_utc",
    "validate_key",
]
