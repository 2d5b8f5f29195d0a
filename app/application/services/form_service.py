"""Event sub-form submissions (award nominations, session, internship, certification, generic).

Each kind is a flat collection of push-keyed records stamped with the store's
server timestamp.
"""

from __future__ import annotations

import logging
from typing import Any

from app.application.collections import (
    AMBASSADOR_APPLICATIONS,
    GENERIC_FORMS,
    SESSION_FORMS,
)
from app.application.interfaces import SERVER_TIMESTAMP, IDocumentStore
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.shared.utils.datetime import to_iso
from app.shared.utils.sanitization import validate_key

logger = logging.getLogger(__name__)

AMBASSADOR_APPLICATION_FIELDS = (
    "name",
    "email",
    "phone",
    "state",
    "city",
    "college",
    "yearOfStudy",
    "degreeProgram",
)


def unwrap_form(payload: dict[str, Any] | None) -> dict[str, Any]:
    """Accept either a bare object or the legacy {"formData": {...}} envelope."""
    if not payload:
        raise ValidationException("Form data is missing or empty", "formData")
    if set(payload) == {"formData"}:
        payload = payload["formData"]
        if not isinstance(payload, dict) or not payload:
            raise ValidationException("Form data is missing or empty", "formData")
    return payload


def as_list(collection: dict[str, Any]) -> list[dict[str, Any]]:
    """Collection dump as [{id, ...fields}] in key order."""
    return [
        {"id": key, **value} if isinstance(value, dict) else {"id": key, "value": value}
        for key, value in collection.items()
    ]


class FormService:
    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    async def submit(self, collection: str, payload: dict[str, Any] | None) -> str:
        """Store a submission with a server timestamp; return its generated id."""
        record = {**unwrap_form(payload), "timestamp": SERVER_TIMESTAMP}
        form_id = await self._store.push(collection, record)
        logger.info("Stored %s submission %s", collection, form_id)
        return form_id

    async def list(self, collection: str) -> list[dict[str, Any]]:
        data = await self._store.get(collection)
        if not data:
            raise ResourceNotFoundException("forms", collection)
        return as_list(data)

    async def update_status(
        self, form_id: str, is_selected: bool | None, viewed: bool | None
    ) -> None:
        """Set isSelected/viewed on a generic form (only the fields provided)."""
        path = f"{GENERIC_FORMS}/{validate_key(form_id)}"
        changes = {
            key: value
            for key, value in (("isSelected", is_selected), ("viewed", viewed))
            if value is not None
        }
        if not changes:
            raise ValidationException("isSelected or viewed is required")
        if await self._store.get(path) is None:
            raise ResourceNotFoundException("form", form_id)
        await self._store.update(path, changes)

    async def delete(self, form_id: str) -> None:
        path = f"{GENERIC_FORMS}/{validate_key(form_id)}"
        if await self._store.get(path) is None:
            raise ResourceNotFoundException("form", form_id)
        await self._store.delete(path)

    async def session_phone_numbers(self) -> list[Any]:
        forms = await self._store.get(SESSION_FORMS)
        if not forms:
            raise ResourceNotFoundException("forms", SESSION_FORMS)
        return [
            form.get("number")
            for form in forms.values()
            if isinstance(form, dict) and form.get("number")
        ]

    async def submit_ambassador_application(self, application: dict[str, Any]) -> str:
        missing = [f for f in AMBASSADOR_APPLICATION_FIELDS if not application.get(f)]
        if missing:
            raise ValidationException(f"All fields are required (missing: {', '.join(missing)})")
        record = {f: application[f] for f in AMBASSADOR_APPLICATION_FIELDS}
        record["createdAt"] = to_iso()
        return await self._store.push(AMBASSADOR_APPLICATIONS, record)
