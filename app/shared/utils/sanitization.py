"""Input checks for values that become document store path segments."""

import re

from app.domain.exceptions import ValidationException

# Realtime Database keys may not contain . $ # [ ] / or ASCII control characters.
_FORBIDDEN_KEY_CHARS = re.compile(r"[.$#\[\]/\x00-\x1f\x7f]")
MAX_KEY_LENGTH = 768


def validate_key(value: str, field: str = "id") -> str:
    """Return value if it is a safe single path segment; raise ValidationException otherwise.

    Args:
        value: Raw identifier from a URL or request body.
        field: Field name reported in the error details.

    Returns:
        The stripped identifier.
    """
    key = (value or "").strip()
    if not key:
        raise ValidationException(f"{field} is required", field=field)
    if len(key) > MAX_KEY_LENGTH or _FORBIDDEN_KEY_CHARS.search(key):
        raise ValidationException(f"Invalid {field} format", field=field)
    return key
