"""Thin Realtime Database REST API client (no firebase-admin).

Uses google-auth for service account tokens and the Realtime Database REST
protocol (`{database_url}/{path}.json`). All HTTP calls use httpx.AsyncClient
so they do not block the event loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import httpx

from app.domain.exceptions import DocumentStoreException

logger = logging.getLogger(__name__)

FIREBASE_SCOPES = [
    "https://www.googleapis.com/auth/firebase.database",
    "https://www.googleapis.com/auth/userinfo.email",
    "https://www.googleapis.com/auth/cloud-platform",
]


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for Firebase services."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=FIREBASE_SCOPES
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


class ServiceAccountTokenSource:
    """Access tokens for a service account; refreshes in a thread pool to avoid blocking."""

    def __init__(self, credentials) -> None:
        self._credentials = credentials

    async def get_token(self) -> str:
        return await asyncio.to_thread(_get_access_token, self._credentials)


def _encode_path(path: str) -> str:
    segments = [s for s in path.strip("/").split("/") if s]
    return "/".join(quote(s, safe="") for s in segments)


class RealtimeDatabaseClient:
    """Realtime Database client implementing IDocumentStore over REST."""

    def __init__(
        self,
        database_url: str,
        http_client: httpx.AsyncClient,
        token_source: ServiceAccountTokenSource | None = None,
    ) -> None:
        self._base = database_url.rstrip("/")
        self._http = http_client
        self._token_source = token_source

    def _url(self, path: str) -> str:
        encoded = _encode_path(path)
        return f"{self._base}/{encoded}.json" if encoded else f"{self._base}/.json"

    async def _headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._token_source is not None:
            headers["Authorization"] = f"Bearer {await self._token_source.get_token()}"
        if extra:
            headers.update(extra)
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        body: Any = None,
        headers: dict[str, str] | None = None,
        accept: tuple[int, ...] = (200, 204),
    ) -> httpx.Response:
        """Send one request; map transport errors and unexpected statuses to DocumentStoreException."""
        kwargs: dict[str, Any] = {"headers": await self._headers(headers)}
        if method in ("PUT", "PATCH", "POST"):
            kwargs["json"] = body
        try:
            resp = await self._http.request(method, self._url(path), **kwargs)
        except httpx.HTTPError as e:
            logger.error("Realtime Database %s %s failed: %s", method, path, e)
            raise DocumentStoreException(str(e)) from e
        if resp.status_code not in accept:
            logger.error(
                "Realtime Database %s %s returned %s: %s",
                method,
                path,
                resp.status_code,
                resp.text[:200],
            )
            raise DocumentStoreException(f"HTTP {resp.status_code}")
        return resp

    async def get(self, path: str) -> Any:
        """Return the JSON value at path (None when absent)."""
        resp = await self._request("GET", path)
        return resp.json() if resp.content else None

    async def set(self, path: str, value: Any) -> None:
        """Replace the subtree at path (PUT)."""
        await self._request("PUT", path, value)

    async def update(self, path: str, values: dict[str, Any]) -> None:
        """Multi-path merge relative to path (PATCH). Keys may contain slashes."""
        if not values:
            return
        await self._request("PATCH", path, values)

    async def push(self, path: str, value: Any) -> str:
        """Append under a server-generated chronological key (POST); return the key."""
        resp = await self._request("POST", path, value)
        name = (resp.json() or {}).get("name")
        if not name:
            raise DocumentStoreException("push response missing generated key")
        return name

    async def delete(self, path: str) -> None:
        """Remove the subtree at path. Idempotent when already absent."""
        await self._request("DELETE", path)

    async def get_with_etag(self, path: str) -> tuple[Any, str]:
        """Return (value, etag). Absent locations have an etag too (for create-if-absent)."""
        resp = await self._request("GET", path, headers={"X-Firebase-ETag": "true"})
        etag = resp.headers.get("ETag")
        if not etag:
            raise DocumentStoreException("ETag header missing from response")
        return (resp.json() if resp.content else None), etag

    async def set_if_match(self, path: str, value: Any, etag: str) -> bool:
        """PUT with if-match; False when the location changed since etag was read (412)."""
        resp = await self._request(
            "PUT", path, value, headers={"if-match": etag}, accept=(200, 204, 412)
        )
        return resp.status_code != 412
