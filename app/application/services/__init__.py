"""Application services: one per capability, built per request from injected clients."""

from app.application.services.ambassador_service import AmbassadorService
from app.application.services.auth_service import AuthService
from app.application.services.certificate_issuance import TeamCertificateIssuer, clean_topic
from app.application.services.certificate_service import CertificateService
from app.application.services.form_service import FormService
from app.application.services.judging_service import JudgingService
from app.application.services.olympiad_service import OlympiadService, compute_mock_rank
from app.application.services.payment_service import PaymentService, TeamPaymentWorkflow
from app.application.services.team_service import TeamService

__all__ = [
    "AmbassadorService",
    "AuthService",
    "CertificateService",
    "FormService",
    "JudgingService",
    "OlympiadService",
    "PaymentService",
    "TeamCertificateIssuer",
    "TeamPaymentWorkflow",
    "TeamService",
    "clean_topic",
    "compute_mock_rank",
]
