"""Registration and login against the identity provider.

Two credential namespaces share the provider: participants (users/{uid}) and
admins (admin/{uid}). Registration mirrors {id, email} into the namespace.
"""

from __future__ import annotations

import logging

from app.application.collections import USERS
from app.application.interfaces import IDocumentStore, IdentitySession, IIdentityProvider
from app.domain.exceptions import ResourceNotFoundException, ValidationException

logger = logging.getLogger(__name__)


def _require_credentials(email: str | None, password: str | None) -> None:
    if not email or not password:
        raise ValidationException("Email and Password are required")


class AuthService:
    """Identity-provider flows for one namespace (e.g. "users" or "admin")."""

    def __init__(
        self,
        identity: IIdentityProvider,
        store: IDocumentStore,
        namespace: str = USERS,
    ) -> None:
        self._identity = identity
        self._store = store
        self._namespace = namespace

    async def register(self, email: str, password: str) -> IdentitySession:
        """Create the account, mirror it into the namespace, send the verification email."""
        _require_credentials(email, password)
        session = await self._identity.sign_up(email, password)
        await self._store.set(
            f"{self._namespace}/{session.uid}",
            {"id": session.uid, "email": session.email or email},
        )
        await self._identity.send_email_verification(session.id_token)
        logger.info("Registered %s account %s", self._namespace, session.uid)
        return session

    async def login(self, email: str, password: str) -> IdentitySession:
        _require_credentials(email, password)
        return await self._identity.sign_in(email, password)

    async def forgot_password(self, email: str) -> None:
        if not email:
            raise ValidationException("Email is required", "email")
        await self._identity.send_password_reset(email)

    async def resend_verification(self, email: str, password: str | None = None) -> None:
        """Send the verification email again.

        With a password the caller signs in and the provider sends on their
        behalf; an already verified account is rejected. Without one the
        email must belong to a registered user and a privileged send is used.
        """
        if not email:
            raise ValidationException("Email is required", "email")
        if password:
            session = await self._identity.sign_in(email, password)
            if session.email_verified:
                raise ValidationException("Email is already verified", "email")
            await self._identity.send_email_verification(session.id_token)
            return

        if not await self._email_registered(email):
            raise ResourceNotFoundException("user", email)
        await self._identity.send_email_verification_for(email)

    async def check_verification(self, email: str, password: str) -> bool:
        _require_credentials(email, password)
        session = await self._identity.sign_in(email, password)
        return session.email_verified

    async def _email_registered(self, email: str) -> bool:
        users = await self._store.get(self._namespace) or {}
        wanted = email.strip().lower()
        return any(
            isinstance(u, dict) and str(u.get("email", "")).lower() == wanted
            for u in users.values()
        )
