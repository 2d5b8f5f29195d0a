"""Participant auth API: register, login, password reset, email verification.

Uses only injected dependencies (get_user_auth_service). Session tokens are
created via infrastructure security with sub = identity provider uid.
"""

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import get_user_auth_service
from app.application.services import AuthService
from app.core.limiter import limit_auth
from app.infrastructure.security.jwt import issue_session_token
from app.schemas.auth import (
    CredentialsRequest,
    EmailRequest,
    ResendVerificationRequest,
    SessionResponse,
    VerificationResponse,
)
from app.schemas.common import MessageResponse

router = APIRouter()


@router.post("/register", response_model=SessionResponse, status_code=201)
@limit_auth
async def register(
    request: Request,
    body: CredentialsRequest,
    auth: AuthService = Depends(get_user_auth_service),
):
    """Create the account, mirror it under users/, send the verification email."""
    session = await auth.register(body.email, body.password)
    return SessionResponse(
        message="User registered successfully. Please verify your email.",
        token=issue_session_token(session.uid),
        email_verified=session.email_verified,
    )


@router.post("/login", response_model=SessionResponse)
@limit_auth
async def login(
    request: Request,
    body: CredentialsRequest,
    auth: AuthService = Depends(get_user_auth_service),
):
    session = await auth.login(body.email, body.password)
    return SessionResponse(
        message="Login successful",
        token=issue_session_token(session.uid),
        email_verified=session.email_verified,
    )


@router.post("/forgot-password", response_model=MessageResponse)
@limit_auth
async def forgot_password(
    request: Request,
    body: EmailRequest,
    auth: AuthService = Depends(get_user_auth_service),
):
    await auth.forgot_password(body.email)
    return MessageResponse(message="Password reset email sent")


@router.post("/resend-verification", response_model=MessageResponse)
@limit_auth
async def resend_verification(
    request: Request,
    body: ResendVerificationRequest,
    auth: AuthService = Depends(get_user_auth_service),
):
    await auth.resend_verification(body.email, body.password)
    return MessageResponse(message="Verification email sent")


@router.post("/check-verification", response_model=VerificationResponse)
@limit_auth
async def check_verification(
    request: Request,
    body: CredentialsRequest,
    auth: AuthService = Depends(get_user_auth_service),
):
    verified = await auth.check_verification(body.email, body.password)
    return VerificationResponse(verified=verified)
