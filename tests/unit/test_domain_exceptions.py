"""Tests for domain exceptions (error_code, message, details) and their HTTP mapping."""

import pytest

from app.core.exception_handlers import _ERROR_CODE_STATUS
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    BlobStorageException,
    CertificateAlreadyIssuedException,
    ConcurrentUpdateException,
    DocumentStoreException,
    DuplicateAuthCodeException,
    DuplicateSubmissionException,
    EmailAlreadyInUseException,
    EventDeskException,
    IdentityProviderException,
    PaymentGatewayException,
    PaymentVerificationFailedException,
    ResourceNotFoundException,
    ValidationException,
)


def test_base_exception_default_error_code() -> None:
    """Base EventDeskException uses class name as error_code when not provided."""
    exc = EventDeskException("Something failed")
    assert exc.error_code == "EventDeskException"
    assert exc.to_dict() == {"error": "EventDeskException", "message": "Something failed", "details": {}}


def test_validation_exception_reports_field() -> None:
    exc = ValidationException("Invalid format", field="email")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "email"}
    assert ValidationException("Invalid").details == {}


def test_not_found_details() -> None:
    exc = ResourceNotFoundException("certificate", "AB12")
    assert exc.message == "certificate not found: AB12"
    assert exc.details == {"resource_type": "certificate", "resource_id": "AB12"}


def test_upstream_exception_hides_reason_from_message() -> None:
    exc = DocumentStoreException("HTTP 401")
    assert exc.message == "document store request failed"
    assert exc.details == {"service": "document store", "reason": "HTTP 401"}


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (ValidationException("x"), 400),
        (PaymentVerificationFailedException("o1"), 400),
        (AuthenticationException(), 401),
        (AuthorizationException(), 403),
        (ResourceNotFoundException("user", "u1"), 404),
        (EmailAlreadyInUseException(), 409),
        (DuplicateSubmissionException("olympiad entry", "u1"), 409),
        (CertificateAlreadyIssuedException("p1"), 409),
        (DuplicateAuthCodeException("A1"), 409),
        (ConcurrentUpdateException("gio-event/u1/marks", 5), 409),
        (IdentityProviderException("x"), 500),
        (DocumentStoreException("x"), 500),
        (BlobStorageException("x"), 500),
        (PaymentGatewayException("x"), 500),
    ],
)
def test_error_code_status_mapping(exc: EventDeskException, status: int) -> None:
    assert _ERROR_CODE_STATUS[exc.error_code] == status
