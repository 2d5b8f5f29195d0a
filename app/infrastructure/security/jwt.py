"""Session tokens handed out by register/login.

A token carries only the identity-provider uid (sub) plus iat/exp; nothing
is stored server side, so there is no refresh or revocation.
"""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from app.core.config import get_settings


def issue_session_token(uid: str, issued_at: datetime | None = None) -> str:
    """Sign a token for uid, valid for access_token_expire_minutes from issued_at (default now)."""
    if not uid:
        raise ValueError("uid is required")
    settings = get_settings()
    issued_at = issued_at or datetime.now(UTC)
    claims = {
        "sub": uid,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=settings.access_token_expire_minutes),
    }
    return jwt.encode(claims, settings.secret_key.get_secret_value(), algorithm=settings.algorithm)


def session_uid(token: str) -> str:
    """Return the uid a session token was issued for.

    Raises:
        ValueError: Malformed token, bad signature, expired, or no sub.
    """
    settings = get_settings()
    try:
        claims = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid session token: {e}") from e
    uid = claims.get("sub")
    if not uid or not isinstance(uid, str):
        raise ValueError("Session token has no subject")
    return uid
