"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the external clients (read from app.state,
set up by the lifespan) and for the application services built from them.
Routes depend only on these dependencies, not on infrastructure directly;
tests swap the client getters through app.dependency_overrides.
"""

from __future__ import annotations

from functools import partial

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.application.collections import ADMINS, USERS, admin_path
from app.application.interfaces import (
    IBlobStorage,
    IDocumentStore,
    IIdentityProvider,
    IPaymentGateway,
)
from app.application.services import (
    AmbassadorService,
    AuthService,
    CertificateService,
    FormService,
    JudgingService,
    OlympiadService,
    PaymentService,
    TeamCertificateIssuer,
    TeamPaymentWorkflow,
    TeamService,
)
from app.core.config import get_settings
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    DocumentStoreException,
    IdentityProviderException,
)
from app.infrastructure.external.media import WEBP_CONTENT_TYPE, optimize_image
from app.infrastructure.security.jwt import session_uid

security = HTTPBearer(auto_error=False)


# ---- External clients (app.state) ----


def get_document_store(request: Request) -> IDocumentStore:
    store = getattr(request.app.state, "database", None)
    if store is None:
        raise DocumentStoreException("database not configured")
    return store


def get_identity_provider(request: Request) -> IIdentityProvider:
    identity = getattr(request.app.state, "identity", None)
    if identity is None:
        raise IdentityProviderException("identity provider not configured")
    return identity


def get_blob_storage(request: Request) -> IBlobStorage | None:
    """Storage is optional; services that need it fail with BlobStorageException."""
    return getattr(request.app.state, "storage", None)


def get_payment_gateway(request: Request) -> IPaymentGateway | None:
    """Gateway is optional; order creation fails with PaymentGatewayException."""
    return getattr(request.app.state, "payment_gateway", None)


# ---- Session ----


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str:
    """Return the uid (token sub) of the caller. Raises 401 when the token is absent or invalid."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationException("Not authenticated")
    try:
        return session_uid(credentials.credentials)
    except ValueError:
        raise AuthenticationException("Invalid or expired token") from None


async def get_current_admin(
    uid: str = Depends(get_current_user),
    store: IDocumentStore = Depends(get_document_store),
) -> str:
    """Return the uid of the caller if it is registered under admin/. Raises 403 otherwise."""
    if await store.get(admin_path(uid)) is None:
        raise AuthorizationException("Admin access required")
    return uid


# ---- Application services ----


def get_user_auth_service(
    identity: IIdentityProvider = Depends(get_identity_provider),
    store: IDocumentStore = Depends(get_document_store),
) -> AuthService:
    return AuthService(identity, store, namespace=USERS)


def get_admin_auth_service(
    identity: IIdentityProvider = Depends(get_identity_provider),
    store: IDocumentStore = Depends(get_document_store),
) -> AuthService:
    return AuthService(identity, store, namespace=ADMINS)


def get_team_service(
    store: IDocumentStore = Depends(get_document_store),
    storage: IBlobStorage | None = Depends(get_blob_storage),
) -> TeamService:
    return TeamService(store, storage)


def get_payment_service(
    store: IDocumentStore = Depends(get_document_store),
    gateway: IPaymentGateway | None = Depends(get_payment_gateway),
) -> PaymentService:
    settings = get_settings()
    return PaymentService(
        store,
        gateway,
        settings.razorpay_key_secret.get_secret_value(),
        currency=settings.payment_currency,
    )


def get_team_payment_workflow(
    store: IDocumentStore = Depends(get_document_store),
    payments: PaymentService = Depends(get_payment_service),
) -> TeamPaymentWorkflow:
    return TeamPaymentWorkflow(store, payments, TeamCertificateIssuer(store))


def get_olympiad_service(
    store: IDocumentStore = Depends(get_document_store),
    payments: PaymentService = Depends(get_payment_service),
) -> OlympiadService:
    return OlympiadService(store, payments)


def get_certificate_service(
    store: IDocumentStore = Depends(get_document_store),
) -> CertificateService:
    return CertificateService(store)


def get_form_service(
    store: IDocumentStore = Depends(get_document_store),
) -> FormService:
    return FormService(store)


def get_judging_service(
    store: IDocumentStore = Depends(get_document_store),
) -> JudgingService:
    return JudgingService(store)


def get_ambassador_service(
    store: IDocumentStore = Depends(get_document_store),
    storage: IBlobStorage | None = Depends(get_blob_storage),
) -> AmbassadorService:
    settings = get_settings()
    optimize = partial(
        optimize_image,
        max_width=settings.image_max_width,
        quality=settings.image_quality,
    )
    return AmbassadorService(store, storage, optimize, content_type=WEBP_CONTENT_TYPE)
