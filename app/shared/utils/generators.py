"""ID and value generators (CUID keys, receipts, certificate auth codes)."""

import secrets

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()

SESSION_AUTH_CODE_PREFIX = "SEC"


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Used as a child key when several records are written in one
    multi-path update (no server-side push per record).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_receipt() -> str:
    """Return a 20-character hex receipt id for a payment order."""
    return secrets.token_hex(10)


def generate_auth_code(prefix: str = SESSION_AUTH_CODE_PREFIX) -> str:
    """Return prefix followed by 8 random digits (first digit non-zero), e.g. SEC48213377."""
    return f"{prefix}{10_000_000 + secrets.randbelow(90_000_000)}"
