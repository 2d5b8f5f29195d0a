"""Certificate schemas (public verification and admin issuance)."""

from typing import Any

from app.schemas.common import CamelModel


class VerifyCertificateRequest(CamelModel):
    auth_code: str | None = None


class CertificateResponse(CamelModel):
    """Stored certificate, keyed by its id."""

    certificate: dict[str, Any]


class CertificatesResponse(CamelModel):
    certificates: dict[str, Any]


class CertificateMatchesResponse(CamelModel):
    """Certificates matching the authCodes of an uploaded spreadsheet."""

    certificates: list[dict[str, Any]]


class EventCertificateRequest(CamelModel):
    auth_code: str | None = None
    type: str | None = None
    campus_ambassador: str | None = None
    date: str | None = None
    school: str | None = None
    academic_year: str | None = None


class WorkshopCertificateRequest(CamelModel):
    name: str | None = None
    type: str | None = None
    auth_code: str | None = None
    awarded_on: str | None = None
    year: str | None = None
    description: str | None = None


class CertificateDetailsRequest(CamelModel):
    auth_code: str | None = None
    name: str | None = None
    academic_year: str | None = None


class FormCertificateRequest(CamelModel):
    auth_code: str | None = None
    name: str | None = None
    type: str | None = None
    whatsapp: str | None = None


class SessionCertificateResponse(CamelModel):
    message: str
    auth_code: str
    name: str
    type: str


class ParticipantsResponse(CamelModel):
    participants: dict[str, Any]
