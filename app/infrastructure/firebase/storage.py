"""Firebase Storage (Cloud Storage bucket) client over the JSON API.

Objects are uploaded with a firebaseStorageDownloadTokens metadata entry so
they are served through the usual Firebase download URL:
https://firebasestorage.googleapis.com/v0/b/{bucket}/o/{path}?alt=media&token={token}
"""

from __future__ import annotations

import json
import logging
import uuid
from urllib.parse import quote, unquote, urlparse

import httpx

from app.domain.exceptions import BlobStorageException
from app.infrastructure.firebase._rest_client import ServiceAccountTokenSource

logger = logging.getLogger(__name__)

_UPLOAD_BASE = "https://storage.googleapis.com/upload/storage/v1/b"
_OBJECT_BASE = "https://storage.googleapis.com/storage/v1/b"
_DOWNLOAD_BASE = "https://firebasestorage.googleapis.com/v0/b"


class FirebaseStorageClient:
    """IBlobStorage for a single bucket."""

    def __init__(
        self,
        bucket: str,
        http_client: httpx.AsyncClient,
        token_source: ServiceAccountTokenSource,
    ) -> None:
        self._bucket = bucket
        self._http = http_client
        self._token_source = token_source

    def download_url(self, object_path: str, token: str) -> str:
        return (
            f"{_DOWNLOAD_BASE}/{self._bucket}/o/{quote(object_path, safe='')}"
            f"?alt=media&token={token}"
        )

    async def upload(self, object_path: str, data: bytes, content_type: str) -> str:
        """Multipart upload (metadata + media); return the tokenized download URL."""
        download_token = str(uuid.uuid4())
        metadata = {
            "name": object_path,
            "contentType": content_type,
            "metadata": {"firebaseStorageDownloadTokens": download_token},
        }
        boundary = f"eventdesk-{uuid.uuid4().hex}"
        body = b"".join(
            [
                f"--{boundary}\r\nContent-Type: application/json; charset=UTF-8\r\n\r\n".encode(),
                json.dumps(metadata).encode(),
                f"\r\n--{boundary}\r\nContent-Type: {content_type}\r\n\r\n".encode(),
                data,
                f"\r\n--{boundary}--\r\n".encode(),
            ]
        )
        headers = {
            "Authorization": f"Bearer {await self._token_source.get_token()}",
            "Content-Type": f"multipart/related; boundary={boundary}",
        }
        url = f"{_UPLOAD_BASE}/{self._bucket}/o"
        try:
            resp = await self._http.post(
                url, params={"uploadType": "multipart"}, content=body, headers=headers
            )
        except httpx.HTTPError as e:
            logger.error("Storage upload of %s failed: %s", object_path, e)
            raise BlobStorageException(str(e)) from e
        if resp.status_code != 200:
            logger.error("Storage upload of %s returned %s", object_path, resp.status_code)
            raise BlobStorageException(f"HTTP {resp.status_code}")
        return self.download_url(object_path, download_token)

    async def delete(self, object_path: str) -> None:
        """Delete the object; a missing object is not an error."""
        url = f"{_OBJECT_BASE}/{self._bucket}/o/{quote(object_path, safe='')}"
        headers = {"Authorization": f"Bearer {await self._token_source.get_token()}"}
        try:
            resp = await self._http.delete(url, headers=headers)
        except httpx.HTTPError as e:
            logger.error("Storage delete of %s failed: %s", object_path, e)
            raise BlobStorageException(str(e)) from e
        if resp.status_code not in (200, 204, 404):
            raise BlobStorageException(f"HTTP {resp.status_code}")

    def object_path_from_url(self, url: str) -> str | None:
        """Extract the object path from a Firebase download URL for this bucket."""
        if not url:
            return None
        parsed = urlparse(url)
        marker = f"/b/{self._bucket}/o/"
        if marker not in parsed.path:
            return None
        return unquote(parsed.path.split(marker, 1)[1]) or None
