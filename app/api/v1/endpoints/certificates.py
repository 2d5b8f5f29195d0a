"""Public certificate verification by auth code."""

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_certificate_service
from app.application.services import CertificateService
from app.schemas.certificate import CertificateResponse, VerifyCertificateRequest

router = APIRouter()


@router.post("/verify", response_model=CertificateResponse)
async def verify_certificate(
    body: VerifyCertificateRequest,
    certificates: CertificateService = Depends(get_certificate_service),
):
    """Return the certificate carrying authCode, or 404."""
    return CertificateResponse(certificate=await certificates.verify(body.auth_code))
