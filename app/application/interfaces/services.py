"""Service interfaces (ports) for the application layer.

Protocols define contracts for external collaborators (DIP). Infrastructure
implements them against Firebase and Razorpay; tests implement them in memory.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

# Realtime Database server value: replaced by the server's epoch-millis clock on write.
SERVER_TIMESTAMP: dict[str, str] = {".sv": "timestamp"}


class IDocumentStore(Protocol):
    """Hierarchical key-value store addressed by slash-separated paths.

    Writes are atomic per call. `update` applies a multi-path patch relative to
    `path` (keys may contain slashes); a None value deletes that child.
    """

    async def get(self, path: str) -> Any:
        """Return the JSON value at path, or None if absent."""

    async def set(self, path: str, value: Any) -> None:
        """Replace the subtree at path."""

    async def update(self, path: str, values: dict[str, Any]) -> None:
        """Merge values into the subtree at path (multi-path patch)."""

    async def push(self, path: str, value: Any) -> str:
        """Append value under a server-generated child key; return the key."""

    async def delete(self, path: str) -> None:
        """Remove the subtree at path. No-op when absent."""

    async def get_with_etag(self, path: str) -> tuple[Any, str]:
        """Return (value, etag) for path; the etag of an absent value is still valid."""

    async def set_if_match(self, path: str, value: Any, etag: str) -> bool:
        """Write value only if path still has etag. Return False on mismatch."""


@dataclass(frozen=True)
class IdentitySession:
    """Result of a sign-up or sign-in with the identity provider."""

    uid: str
    email: str
    id_token: str
    email_verified: bool = False


class IIdentityProvider(Protocol):
    """Email/password identity provider."""

    async def sign_up(self, email: str, password: str) -> IdentitySession:
        """Create an account. Raises EmailAlreadyInUseException for a taken email."""

    async def sign_in(self, email: str, password: str) -> IdentitySession:
        """Authenticate. Raises AuthenticationException on bad credentials."""

    async def send_email_verification(self, id_token: str) -> None:
        """Send the verification email for the signed-in account."""

    async def send_email_verification_for(self, email: str) -> None:
        """Send the verification email by address (privileged call)."""

    async def send_password_reset(self, email: str) -> None:
        """Send a password reset email."""

    async def is_email_verified(self, id_token: str) -> bool:
        """Return the current email verification state of the signed-in account."""


class IBlobStorage(Protocol):
    """Binary object storage addressed by object path; objects served by URL."""

    async def upload(self, object_path: str, data: bytes, content_type: str) -> str:
        """Store data at object_path and return its public download URL."""

    async def delete(self, object_path: str) -> None:
        """Delete the object. No-op when absent."""

    def object_path_from_url(self, url: str) -> str | None:
        """Return the object path encoded in a download URL, or None if foreign."""


class IPaymentGateway(Protocol):
    """Payment gateway order API."""

    key_id: str

    async def create_order(
        self, amount: int, currency: str, receipt: str
    ) -> dict[str, Any]:
        """Create an order (amount in minor units). Returns the gateway order dict (id, amount, currency, receipt, status, created_at)."""
