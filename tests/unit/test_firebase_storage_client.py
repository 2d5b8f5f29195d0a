"""Tests for the Firebase Storage client (httpx.MockTransport)."""

import httpx
import pytest

from app.domain.exceptions import BlobStorageException
from app.infrastructure.firebase import FirebaseStorageClient

BUCKET = "eventdesk-test.appspot.com"


class StaticToken:
    async def get_token(self) -> str:
        return "access-token"


async def test_upload_returns_tokenized_download_url() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"name": "profile_images/u1/a.png"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        storage = FirebaseStorageClient(BUCKET, http, StaticToken())
        url = await storage.upload("profile_images/u1/a.png", b"png-bytes", "image/png")

    request = seen[0]
    assert request.url.params["uploadType"] == "multipart"
    assert request.headers["Content-Type"].startswith("multipart/related; boundary=")
    assert b"firebaseStorageDownloadTokens" in request.content
    assert b"png-bytes" in request.content
    assert url.startswith(
        f"https://firebasestorage.googleapis.com/v0/b/{BUCKET}/o/profile_images%2Fu1%2Fa.png?alt=media&token="
    )
    assert storage.object_path_from_url(url) == "profile_images/u1/a.png"


async def test_upload_error_raises_blob_storage_exception() -> None:
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(403))
    ) as http:
        storage = FirebaseStorageClient(BUCKET, http, StaticToken())
        with pytest.raises(BlobStorageException):
            await storage.upload("a.png", b"x", "image/png")


@pytest.mark.parametrize("status", [204, 404])
async def test_delete_tolerates_missing_object(status: int) -> None:
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(status))
    ) as http:
        await FirebaseStorageClient(BUCKET, http, StaticToken()).delete("gone.png")


def test_object_path_from_foreign_url_is_none() -> None:
    storage = FirebaseStorageClient(BUCKET, httpx.AsyncClient(), StaticToken())
    assert storage.object_path_from_url("https://example.com/b/other/o/x.png") is None
    assert storage.object_path_from_url("") is None
