"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.v1.dependencies (no manual client/service construction).
"""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    admin,
    ambassador_applications,
    auth,
    certificates,
    forms,
    health,
    judging,
    olympiad,
    payments,
    users,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(payments.router, prefix="/payments", tags=["payments"])
api_router.include_router(certificates.router, prefix="/certificates", tags=["certificates"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
api_router.include_router(forms.router, prefix="/forms", tags=["forms"])
api_router.include_router(
    ambassador_applications.router,
    prefix="/ambassador-applications",
    tags=["ambassador-applications"],
)
api_router.include_router(olympiad.router, prefix="/olympiad", tags=["olympiad"])
api_router.include_router(judging.router, prefix="/judging", tags=["judging"])
