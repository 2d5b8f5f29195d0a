"""Auth API schemas (participants and admins share them)."""

from pydantic import Field

from app.schemas.common import CamelModel


class CredentialsRequest(CamelModel):
    """Request body for register, login and check-verification.

    Fields are optional at the schema level; missing values are rejected
    with 400 by the service.
    """

    email: str | None = Field(default=None, description="Account email")
    password: str | None = Field(default=None, description="Account password")


class EmailRequest(CamelModel):
    """Request body for POST /auth/forgot-password."""

    email: str | None = None


class ResendVerificationRequest(CamelModel):
    """Request body for POST /auth/resend-verification.

    With a password the account signs in and the email is resent for it;
    without one the address must belong to a registered user.
    """

    email: str | None = None
    password: str | None = None


class SessionResponse(CamelModel):
    """Session token issued on register/login."""

    message: str
    token: str
    email_verified: bool = False


class VerificationResponse(CamelModel):
    verified: bool
