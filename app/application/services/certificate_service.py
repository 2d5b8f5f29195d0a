"""Certificate verification and admin issuance.

Certificates are one flat collection. The auth code is the public lookup key;
its uniqueness is checked by scanning the collection when a certificate is
issued. Session certificates are keyed by participant id and written with a
create-if-absent so a participant can never receive two.
"""

from __future__ import annotations

import logging
from typing import Any

from app.application.collections import (
    CERTIFICATE_DETAILS,
    CERTIFICATES,
    CERTIFICATION_FORMS,
    certificate_path,
)
from app.application.dtos.certificate import IssuanceResult, IssueItem
from app.application.interfaces import IDocumentStore
from app.application.services.certificate_issuance import existing_auth_codes
from app.application.services.conditional import create_if_absent
from app.domain.enums import CertificateType, IssueStatus
from app.domain.exceptions import (
    CertificateAlreadyIssuedException,
    DocumentStoreException,
    DuplicateAuthCodeException,
    ResourceNotFoundException,
    ValidationException,
)
from app.shared.utils.generators import (
    SESSION_AUTH_CODE_PREFIX,
    generate_auth_code,
    generate_cuid,
)
from app.shared.utils.sanitization import validate_key

logger = logging.getLogger(__name__)

EVENT_CERTIFICATE_FIELDS = ("authCode", "type", "campusAmbassador", "date", "school", "academicYear")
WORKSHOP_CERTIFICATE_FIELDS = ("name", "type", "authCode", "awardedOn", "year", "description")
CERTIFICATE_DETAIL_FIELDS = ("authCode", "name", "academicYear")
FORM_CERTIFICATE_FIELDS = ("authCode", "name", "type", "whatsapp")
ALREADY_GENERATED = "certificate already generated"


def _require(data: dict[str, Any], fields: tuple[str, ...]) -> dict[str, Any]:
    missing = [f for f in fields if not data.get(f)]
    if missing:
        raise ValidationException(f"Required fields missing: {', '.join(missing)}", missing[0])
    return {f: data[f] for f in fields}


class CertificateService:
    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    async def _all(self) -> dict[str, Any]:
        return await self._store.get(CERTIFICATES) or {}

    async def verify(self, auth_code: str) -> dict[str, Any]:
        """Return the certificate carrying auth_code as {id, ...}."""
        if not auth_code:
            raise ValidationException("Auth Code is required", "authCode")
        for certificate_id, record in (await self._all()).items():
            if isinstance(record, dict) and record.get("authCode") == auth_code:
                return {"id": certificate_id, **record}
        raise ResourceNotFoundException("certificate", auth_code)

    async def _issue(self, record: dict[str, Any]) -> str:
        auth_code = str(record["authCode"])
        if auth_code in existing_auth_codes(await self._all()):
            raise DuplicateAuthCodeException(auth_code)
        certificate_id = await self._store.push(CERTIFICATES, record)
        logger.info("Issued %s certificate %s", record.get("type"), certificate_id)
        return certificate_id

    async def issue_event_certificate(self, data: dict[str, Any]) -> str:
        return await self._issue(_require(data, EVENT_CERTIFICATE_FIELDS))

    async def issue_workshop_certificate(self, data: dict[str, Any]) -> str:
        return await self._issue(_require(data, WORKSHOP_CERTIFICATE_FIELDS))

    async def issue_from_form(self, data: dict[str, Any]) -> str:
        return await self._issue(_require(data, FORM_CERTIFICATE_FIELDS))

    async def save_details(self, data: dict[str, Any]) -> str:
        return await self._store.push(CERTIFICATE_DETAILS, _require(data, CERTIFICATE_DETAIL_FIELDS))

    async def list_all(self) -> dict[str, Any]:
        certificates = await self._all()
        if not certificates:
            raise ResourceNotFoundException("certificates", CERTIFICATES)
        return certificates

    async def delete(self, certificate_id: str) -> None:
        path = certificate_path(validate_key(certificate_id))
        if await self._store.get(path) is None:
            raise ResourceNotFoundException("certificate", certificate_id)
        await self._store.delete(path)

    async def import_rows(self, rows: list[dict[str, str]]) -> IssuanceResult:
        """Create one certificate per spreadsheet row.

        Rows with any blank field, or whose authCode is already issued (in the
        store or earlier in the sheet), are skipped. Accepted rows are written
        in a single multi-path update.
        """
        result = IssuanceResult()
        issued_codes = existing_auth_codes(await self._all())
        updates: dict[str, Any] = {}
        pending: list[IssueItem] = []

        for row_number, row in enumerate(rows, start=2):
            name = row.get("name") or None
            auth_code = row.get("authCode") or None
            if not row or any(not value for value in row.values()):
                logger.info("Skipping row %d due to missing fields: %s", row_number, row)
                result.add(
                    IssueItem(
                        name=name,
                        auth_code=auth_code,
                        status=IssueStatus.SKIPPED,
                        reason=f"row {row_number}: blank field",
                    )
                )
                continue
            if auth_code and auth_code in issued_codes:
                result.add(
                    IssueItem(
                        name=name,
                        auth_code=auth_code,
                        status=IssueStatus.SKIPPED,
                        reason=f"row {row_number}: authCode already issued",
                    )
                )
                continue
            certificate_id = generate_cuid()
            updates[certificate_id] = dict(row)
            if auth_code:
                issued_codes.add(auth_code)
            item = IssueItem(
                name=name,
                auth_code=auth_code,
                status=IssueStatus.ISSUED,
                certificate_id=certificate_id,
            )
            pending.append(item)
            result.add(item)

        if updates:
            try:
                await self._store.update(CERTIFICATES, updates)
            except DocumentStoreException as e:
                logger.error("Spreadsheet import of %d rows failed: %s", len(updates), e.message)
                for item in pending:
                    item.status = IssueStatus.FAILED
                    item.certificate_id = None
                    item.reason = e.message
        return result

    async def lookup_rows(self, rows: list[dict[str, str]]) -> list[dict[str, Any]]:
        """Return the stored certificates matching each row's authCode, in row order."""
        certificates = await self._all()
        if not certificates:
            raise ResourceNotFoundException("certificates", CERTIFICATES)
        by_code: dict[str, dict[str, Any]] = {}
        for certificate_id, record in certificates.items():
            if isinstance(record, dict) and record.get("authCode"):
                by_code.setdefault(str(record["authCode"]), {"id": certificate_id, **record})

        matched = []
        for row in rows:
            auth_code = row.get("authCode")
            if not auth_code:
                logger.info("Skipping lookup row without authCode: %s", row)
                continue
            if auth_code not in by_code:
                logger.info("No certificate found for authCode %s", auth_code)
                continue
            matched.append(by_code[auth_code])
        return matched

    # Session certificates (participants from certification forms)

    async def list_session_participants(self) -> dict[str, Any]:
        forms = await self._store.get(CERTIFICATION_FORMS)
        if not forms:
            raise ResourceNotFoundException("forms", CERTIFICATION_FORMS)
        return forms

    async def _issue_session(self, participant_id: str, form: dict[str, Any]) -> IssueItem:
        name = form.get("name")
        if not name:
            return IssueItem(
                name=None,
                auth_code=None,
                status=IssueStatus.SKIPPED,
                reason="participant has no name",
            )
        auth_code = generate_auth_code(SESSION_AUTH_CODE_PREFIX)
        record = {
            "name": name,
            "whatsapp": form.get("whatsapp"),
            "type": CertificateType.SESSION.value,
            "authCode": auth_code,
        }
        record = {k: v for k, v in record.items() if v is not None}
        if not await create_if_absent(self._store, certificate_path(participant_id), record):
            return IssueItem(
                name=name,
                auth_code=None,
                status=IssueStatus.SKIPPED,
                reason=ALREADY_GENERATED,
            )
        return IssueItem(
            name=name,
            auth_code=auth_code,
            status=IssueStatus.ISSUED,
            certificate_id=participant_id,
        )

    async def issue_session_certificate(self, participant_id: str) -> dict[str, Any]:
        participant_id = validate_key(participant_id, "participantId")
        form = await self._store.get(f"{CERTIFICATION_FORMS}/{participant_id}")
        if not isinstance(form, dict):
            raise ResourceNotFoundException("participant", participant_id)
        item = await self._issue_session(participant_id, form)
        if item.status != IssueStatus.ISSUED:
            if item.reason == ALREADY_GENERATED:
                raise CertificateAlreadyIssuedException(participant_id)
            raise ValidationException(item.reason or "Certificate not generated", "name")
        return {"authCode": item.auth_code, "name": item.name, "type": CertificateType.SESSION.value}

    async def issue_all_session_certificates(self) -> IssuanceResult:
        result = IssuanceResult()
        for participant_id, form in (await self.list_session_participants()).items():
            if not isinstance(form, dict):
                continue
            try:
                item = await self._issue_session(participant_id, form)
            except DocumentStoreException as e:
                logger.error("Session certificate for %s failed: %s", participant_id, e.message)
                item = IssueItem(
                    name=form.get("name"),
                    auth_code=None,
                    status=IssueStatus.FAILED,
                    reason=e.message,
                )
            if item.status == IssueStatus.SKIPPED:
                logger.info("Session certificate for %s skipped: %s", participant_id, item.reason)
            result.add(item)
        return result
