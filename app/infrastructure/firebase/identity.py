"""Firebase Authentication client (Identity Toolkit REST API, email/password).

Public calls (sign-up, sign-in, out-of-band emails) use the web API key.
Sending a verification email by address alone is a privileged call made with
the service account token.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.application.interfaces import IdentitySession
from app.domain.exceptions import (
    AuthenticationException,
    EmailAlreadyInUseException,
    IdentityProviderException,
    ValidationException,
)
from app.infrastructure.firebase._rest_client import ServiceAccountTokenSource

logger = logging.getLogger(__name__)

_BASE = "https://identitytoolkit.googleapis.com/v1"

_CREDENTIAL_ERRORS = frozenset(
    {
        "EMAIL_NOT_FOUND",
        "INVALID_PASSWORD",
        "INVALID_LOGIN_CREDENTIALS",
        "USER_DISABLED",
        "INVALID_ID_TOKEN",
        "USER_NOT_FOUND",
    }
)


def _error_code(resp: httpx.Response) -> str:
    """Return the Identity Toolkit error code (e.g. 'EMAIL_EXISTS', 'WEAK_PASSWORD')."""
    try:
        message = resp.json().get("error", {}).get("message", "")
    except ValueError:
        return f"HTTP_{resp.status_code}"
    # e.g. "WEAK_PASSWORD : Password should be at least 6 characters"
    return message.split(" ")[0] if message else f"HTTP_{resp.status_code}"


class FirebaseIdentityClient:
    """IIdentityProvider over the Identity Toolkit REST API."""

    def __init__(
        self,
        api_key: str,
        http_client: httpx.AsyncClient,
        project_id: str | None = None,
        token_source: ServiceAccountTokenSource | None = None,
    ) -> None:
        self._api_key = api_key
        self._http = http_client
        self._project_id = project_id
        self._token_source = token_source

    async def _post(
        self, endpoint: str, body: dict[str, Any], *, privileged: bool = False
    ) -> dict[str, Any]:
        if privileged:
            if self._token_source is None or not self._project_id:
                raise IdentityProviderException("service account not configured")
            url = f"{_BASE}/projects/{self._project_id}/{endpoint}"
            headers = {"Authorization": f"Bearer {await self._token_source.get_token()}"}
            params: dict[str, str] = {}
        else:
            url = f"{_BASE}/{endpoint}"
            headers = {}
            params = {"key": self._api_key}
        try:
            resp = await self._http.post(url, json=body, params=params, headers=headers)
        except httpx.HTTPError as e:
            logger.error("Identity Toolkit %s failed: %s", endpoint, e)
            raise IdentityProviderException(str(e)) from e
        if resp.status_code == 200:
            return resp.json()

        code = _error_code(resp)
        if code == "EMAIL_EXISTS":
            raise EmailAlreadyInUseException()
        if code in _CREDENTIAL_ERRORS:
            raise AuthenticationException("Invalid credentials")
        if code in ("INVALID_EMAIL", "WEAK_PASSWORD", "MISSING_PASSWORD", "MISSING_EMAIL"):
            raise ValidationException(code.replace("_", " ").capitalize())
        logger.error("Identity Toolkit %s returned %s (%s)", endpoint, resp.status_code, code)
        raise IdentityProviderException(code)

    @staticmethod
    def _session(data: dict[str, Any]) -> IdentitySession:
        return IdentitySession(
            uid=data["localId"],
            email=data.get("email", ""),
            id_token=data["idToken"],
            email_verified=bool(data.get("emailVerified", False)),
        )

    async def sign_up(self, email: str, password: str) -> IdentitySession:
        data = await self._post(
            "accounts:signUp",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        return self._session(data)

    async def sign_in(self, email: str, password: str) -> IdentitySession:
        data = await self._post(
            "accounts:signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        session = self._session(data)
        # signInWithPassword does not report verification state; lookup does.
        verified = await self.is_email_verified(session.id_token)
        return IdentitySession(
            uid=session.uid,
            email=session.email,
            id_token=session.id_token,
            email_verified=verified,
        )

    async def send_email_verification(self, id_token: str) -> None:
        await self._post(
            "accounts:sendOobCode", {"requestType": "VERIFY_EMAIL", "idToken": id_token}
        )

    async def send_email_verification_for(self, email: str) -> None:
        await self._post(
            "accounts:sendOobCode",
            {"requestType": "VERIFY_EMAIL", "email": email},
            privileged=True,
        )

    async def send_password_reset(self, email: str) -> None:
        await self._post(
            "accounts:sendOobCode", {"requestType": "PASSWORD_RESET", "email": email}
        )

    async def is_email_verified(self, id_token: str) -> bool:
        data = await self._post("accounts:lookup", {"idToken": id_token})
        users = data.get("users") or []
        return bool(users and users[0].get("emailVerified", False))
