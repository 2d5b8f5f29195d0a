"""Admin API: admin accounts, campus ambassadors, participants, certificates.

Every route except register and login requires a session token whose sub is
registered under admin/ (get_current_admin). Registration itself is guarded
by X-Admin-Registration-Secret when ADMIN_REGISTRATION_SECRET is set.
"""

import asyncio
import hmac

from fastapi import APIRouter, Depends, File, Form, Header, Request, UploadFile

from app.api.v1.dependencies import (
    get_admin_auth_service,
    get_ambassador_service,
    get_certificate_service,
    get_current_admin,
    get_form_service,
    get_olympiad_service,
    get_team_service,
)
from app.application.collections import SESSION_FORMS
from app.application.services import (
    AmbassadorService,
    AuthService,
    CertificateService,
    FormService,
    OlympiadService,
    TeamService,
)
from app.core.config import get_settings
from app.core.limiter import limit_auth
from app.domain.exceptions import AuthorizationException
from app.infrastructure.external.media import read_rows
from app.infrastructure.security.jwt import issue_session_token
from app.schemas.auth import CredentialsRequest, SessionResponse
from app.schemas.certificate import (
    CertificateDetailsRequest,
    CertificateMatchesResponse,
    CertificatesResponse,
    EventCertificateRequest,
    FormCertificateRequest,
    ParticipantsResponse,
    SessionCertificateResponse,
    WorkshopCertificateRequest,
)
from app.schemas.common import IdResponse, IssuanceResponse, MessageResponse
from app.schemas.form import (
    AmbassadorResponse,
    AmbassadorsResponse,
    AmbassadorUpdateRequest,
    FormsResponse,
    PhoneNumbersResponse,
)
from app.schemas.olympiad import EntriesResponse
from app.schemas.user import TeamUpdateRequest, UserResponse, UsersResponse

router = APIRouter()


# ---- Admin accounts ----


def _check_registration_secret(provided: str | None) -> None:
    expected = get_settings().admin_registration_secret
    if expected is None or not expected.get_secret_value():
        return
    if not provided or not hmac.compare_digest(
        provided.encode(), expected.get_secret_value().encode()
    ):
        raise AuthorizationException("Invalid admin registration secret")


@router.post("/register", response_model=SessionResponse, status_code=201)
@limit_auth
async def register_admin(
    request: Request,
    body: CredentialsRequest,
    x_admin_registration_secret: str | None = Header(None),
    auth: AuthService = Depends(get_admin_auth_service),
):
    """Create an admin account (mirrored under admin/)."""
    _check_registration_secret(x_admin_registration_secret)
    session = await auth.register(body.email, body.password)
    return SessionResponse(
        message="Admin registered successfully. Please verify your email.",
        token=issue_session_token(session.uid),
        email_verified=session.email_verified,
    )


@router.post("/login", response_model=SessionResponse)
@limit_auth
async def login_admin(
    request: Request,
    body: CredentialsRequest,
    auth: AuthService = Depends(get_admin_auth_service),
):
    session = await auth.login(body.email, body.password)
    return SessionResponse(
        message="Login successful",
        token=issue_session_token(session.uid),
        email_verified=session.email_verified,
    )


# ---- Campus ambassadors (kind: domestic | international) ----


@router.post(
    "/campus-ambassadors/{kind}",
    response_model=AmbassadorResponse,
    status_code=201,
)
async def add_ambassador(
    kind: str,
    name: str = Form(""),
    linked_in_link: str = Form("", alias="linkedInLink"),
    place: str = Form(""),
    image: UploadFile = File(...),
    _: str = Depends(get_current_admin),
    ambassadors: AmbassadorService = Depends(get_ambassador_service),
):
    """Add an ambassador; the photo is stored as an optimized WebP."""
    record = await ambassadors.add(
        kind,
        {"name": name, "linkedInLink": linked_in_link, "place": place},
        await image.read(),
        image.filename,
    )
    return AmbassadorResponse.model_validate(record)


@router.get("/campus-ambassadors/{kind}", response_model=AmbassadorsResponse)
async def list_ambassadors(
    kind: str,
    _: str = Depends(get_current_admin),
    ambassadors: AmbassadorService = Depends(get_ambassador_service),
):
    return AmbassadorsResponse(ambassadors=await ambassadors.list(kind))


@router.put("/campus-ambassadors/{kind}/{ambassador_id}", response_model=MessageResponse)
async def update_ambassador(
    kind: str,
    ambassador_id: str,
    body: AmbassadorUpdateRequest,
    _: str = Depends(get_current_admin),
    ambassadors: AmbassadorService = Depends(get_ambassador_service),
):
    await ambassadors.update(kind, ambassador_id, body.model_dump(by_alias=True))
    return MessageResponse(message="Campus ambassador updated successfully")


@router.delete("/campus-ambassadors/{kind}/{ambassador_id}", response_model=MessageResponse)
async def delete_ambassador(
    kind: str,
    ambassador_id: str,
    _: str = Depends(get_current_admin),
    ambassadors: AmbassadorService = Depends(get_ambassador_service),
):
    """Delete the record and its stored photo."""
    await ambassadors.delete(kind, ambassador_id)
    return MessageResponse(message="Campus ambassador deleted successfully")


# ---- Participants ----


@router.get("/users", response_model=UsersResponse)
async def list_users(
    _: str = Depends(get_current_admin),
    teams: TeamService = Depends(get_team_service),
):
    return UsersResponse(users=await teams.list_users())


@router.get("/users/{uid}", response_model=UserResponse)
async def get_user(
    uid: str,
    _: str = Depends(get_current_admin),
    teams: TeamService = Depends(get_team_service),
):
    return UserResponse(user=await teams.get_user(uid))


@router.put("/users/{uid}/team", response_model=MessageResponse)
async def update_team(
    uid: str,
    body: TeamUpdateRequest,
    _: str = Depends(get_current_admin),
    teams: TeamService = Depends(get_team_service),
):
    await teams.update_team(uid, body.mentor or {}, body.members or [])
    return MessageResponse(message="Team updated successfully")


@router.post("/users/{uid}/attendance", response_model=MessageResponse)
async def mark_attendance(
    uid: str,
    _: str = Depends(get_current_admin),
    teams: TeamService = Depends(get_team_service),
):
    await teams.mark_attendance(uid)
    return MessageResponse(message="Attendance marked")


# ---- Certificates ----


@router.post("/certificates", response_model=IdResponse, status_code=201)
async def create_event_certificate(
    body: EventCertificateRequest,
    _: str = Depends(get_current_admin),
    certificates: CertificateService = Depends(get_certificate_service),
):
    certificate_id = await certificates.issue_event_certificate(body.model_dump(by_alias=True))
    return IdResponse(message="Certificate created successfully", id=certificate_id)


@router.post("/certificates/workshop", response_model=IdResponse, status_code=201)
async def create_workshop_certificate(
    body: WorkshopCertificateRequest,
    _: str = Depends(get_current_admin),
    certificates: CertificateService = Depends(get_certificate_service),
):
    certificate_id = await certificates.issue_workshop_certificate(body.model_dump(by_alias=True))
    return IdResponse(message="Certificate created successfully", id=certificate_id)


@router.post("/certificates/details", response_model=IdResponse, status_code=201)
async def save_certificate_details(
    body: CertificateDetailsRequest,
    _: str = Depends(get_current_admin),
    certificates: CertificateService = Depends(get_certificate_service),
):
    details_id = await certificates.save_details(body.model_dump(by_alias=True))
    return IdResponse(message="Certificate details saved successfully", id=details_id)


@router.post("/certificates/from-form", response_model=IdResponse, status_code=201)
async def create_certificate_from_form(
    body: FormCertificateRequest,
    _: str = Depends(get_current_admin),
    certificates: CertificateService = Depends(get_certificate_service),
):
    certificate_id = await certificates.issue_from_form(body.model_dump(by_alias=True))
    return IdResponse(message="Certificate generated successfully", id=certificate_id)


@router.get("/certificates", response_model=CertificatesResponse)
async def list_certificates(
    _: str = Depends(get_current_admin),
    certificates: CertificateService = Depends(get_certificate_service),
):
    return CertificatesResponse(certificates=await certificates.list_all())


@router.delete("/certificates/{certificate_id}", response_model=MessageResponse)
async def delete_certificate(
    certificate_id: str,
    _: str = Depends(get_current_admin),
    certificates: CertificateService = Depends(get_certificate_service),
):
    await certificates.delete(certificate_id)
    return MessageResponse(message="Certificate deleted successfully")


@router.post("/certificates/upload", response_model=IssuanceResponse)
async def upload_certificates(
    file: UploadFile = File(...),
    _: str = Depends(get_current_admin),
    certificates: CertificateService = Depends(get_certificate_service),
):
    """Import one certificate per spreadsheet row (header row gives the field names)."""
    rows = await asyncio.to_thread(read_rows, await file.read())
    result = await certificates.import_rows(rows)
    return result.to_dict()


@router.post("/certificates/lookup", response_model=CertificateMatchesResponse)
async def lookup_certificates(
    file: UploadFile = File(...),
    _: str = Depends(get_current_admin),
    certificates: CertificateService = Depends(get_certificate_service),
):
    """Return the stored certificates whose authCode appears in the spreadsheet."""
    rows = await asyncio.to_thread(read_rows, await file.read())
    return CertificateMatchesResponse(certificates=await certificates.lookup_rows(rows))


# ---- Session certificates ----


@router.get("/session-certificates", response_model=ParticipantsResponse)
async def list_session_participants(
    _: str = Depends(get_current_admin),
    certificates: CertificateService = Depends(get_certificate_service),
):
    return ParticipantsResponse(participants=await certificates.list_session_participants())


@router.post(
    "/session-certificates/{participant_id}",
    response_model=SessionCertificateResponse,
    status_code=201,
)
async def issue_session_certificate(
    participant_id: str,
    _: str = Depends(get_current_admin),
    certificates: CertificateService = Depends(get_certificate_service),
):
    """Issue the participant's session certificate; 409 if one already exists."""
    issued = await certificates.issue_session_certificate(participant_id)
    return SessionCertificateResponse(message="Certificate generated successfully", **issued)


@router.post("/session-certificates", response_model=IssuanceResponse)
async def issue_all_session_certificates(
    _: str = Depends(get_current_admin),
    certificates: CertificateService = Depends(get_certificate_service),
):
    """Issue a session certificate to every participant that has none yet."""
    result = await certificates.issue_all_session_certificates()
    return result.to_dict()


# ---- Forms and olympiad ----


@router.get("/session-forms/phone-numbers", response_model=PhoneNumbersResponse)
async def session_phone_numbers(
    _: str = Depends(get_current_admin),
    forms: FormService = Depends(get_form_service),
):
    return PhoneNumbersResponse(phone_numbers=await forms.session_phone_numbers())


@router.get("/session-forms", response_model=FormsResponse)
async def list_session_forms(
    _: str = Depends(get_current_admin),
    forms: FormService = Depends(get_form_service),
):
    return FormsResponse(forms=await forms.list(SESSION_FORMS))


@router.get("/olympiad/entries", response_model=EntriesResponse)
async def list_olympiad_entries(
    _: str = Depends(get_current_admin),
    olympiad: OlympiadService = Depends(get_olympiad_service),
):
    return EntriesResponse(entries=await olympiad.list_entries())
