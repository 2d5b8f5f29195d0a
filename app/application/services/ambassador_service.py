"""Campus ambassadors shown on the public site (domestic and international lists)."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from pathlib import PurePosixPath
from typing import Any

from app.application.collections import (
    CAMPUS_AMBASSADORS,
    INTERNATIONAL_CAMPUS_AMBASSADORS,
)
from app.application.interfaces import IBlobStorage, IDocumentStore
from app.domain.exceptions import (
    BlobStorageException,
    ResourceNotFoundException,
    ValidationException,
)
from app.shared.utils.generators import generate_cuid
from app.shared.utils.sanitization import validate_key

logger = logging.getLogger(__name__)

AMBASSADOR_COLLECTIONS = {
    "domestic": CAMPUS_AMBASSADORS,
    "international": INTERNATIONAL_CAMPUS_AMBASSADORS,
}
EDITABLE_FIELDS = ("name", "linkedInLink", "place")

ImageOptimizer = Callable[[bytes], Awaitable[bytes]]


def collection_for(kind: str) -> str:
    try:
        return AMBASSADOR_COLLECTIONS[kind]
    except KeyError:
        raise ValidationException(f"Unknown ambassador list: {kind}", "kind") from None


class AmbassadorService:
    """Add/list/update/delete ambassadors; photos are stored as optimized WebP blobs."""

    def __init__(
        self,
        store: IDocumentStore,
        storage: IBlobStorage | None,
        optimize: ImageOptimizer,
        content_type: str = "image/webp",
    ) -> None:
        self._store = store
        self._storage = storage
        self._optimize = optimize
        self._content_type = content_type

    async def add(
        self,
        kind: str,
        fields: dict[str, Any],
        image: bytes,
        filename: str | None = None,
    ) -> dict[str, Any]:
        if self._storage is None:
            raise BlobStorageException("storage not configured")
        collection = collection_for(kind)
        missing = [f for f in EDITABLE_FIELDS if not fields.get(f)]
        if missing or not image:
            raise ValidationException("All fields are required", (missing or ["image"])[0])

        optimized = await self._optimize(image)
        stem = PurePosixPath(filename or "image").stem or "image"
        ambassador_id = generate_cuid()
        object_path = f"{collection}/{ambassador_id}_{stem}.webp"
        image_url = await self._storage.upload(object_path, optimized, self._content_type)

        record = {"id": ambassador_id, **{f: fields[f] for f in EDITABLE_FIELDS}, "imageUrl": image_url}
        try:
            await self._store.set(f"{collection}/{ambassador_id}", record)
        except Exception:
            # Do not leave an orphaned photo behind.
            await self._storage.delete(object_path)
            raise
        logger.info("Added %s campus ambassador %s", kind, ambassador_id)
        return record

    async def list(self, kind: str) -> dict[str, Any]:
        collection = collection_for(kind)
        data = await self._store.get(collection)
        if not data:
            raise ResourceNotFoundException("campus ambassadors", collection)
        return data

    async def update(self, kind: str, ambassador_id: str, fields: dict[str, Any]) -> None:
        path = f"{collection_for(kind)}/{validate_key(ambassador_id)}"
        changes = {f: fields[f] for f in EDITABLE_FIELDS if fields.get(f)}
        if not changes:
            raise ValidationException("No data provided for update")
        if await self._store.get(path) is None:
            raise ResourceNotFoundException("campus ambassador", ambassador_id)
        await self._store.update(path, changes)

    async def delete(self, kind: str, ambassador_id: str) -> None:
        """Remove the record, then its photo (a missing photo is ignored)."""
        path = f"{collection_for(kind)}/{validate_key(ambassador_id)}"
        record = await self._store.get(path)
        if record is None:
            raise ResourceNotFoundException("campus ambassador", ambassador_id)
        await self._store.delete(path)

        image_url = record.get("imageUrl") if isinstance(record, dict) else None
        if self._storage is None or not image_url:
            return
        object_path = self._storage.object_path_from_url(image_url)
        if object_path:
            try:
                await self._storage.delete(object_path)
            except BlobStorageException as e:
                logger.warning("Ambassador %s deleted but photo removal failed: %s", ambassador_id, e.message)
