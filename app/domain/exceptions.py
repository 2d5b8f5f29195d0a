"""Domain exceptions for the eventdesk application.

Defines domain-level exceptions that represent business rule violations
and upstream failures. Presentation layer maps them to HTTP responses in
exception handlers (by error_code).
"""

from typing import Any


class EventDeskException(Exception):
    """Base exception for all eventdesk application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(EventDeskException):
    """Raised when input validation fails (e.g. missing field or out of range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(EventDeskException):
    """Raised when authentication fails (invalid credentials or token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(EventDeskException):
    """Raised when an authenticated caller is outside the required namespace (e.g. admin)."""

    def __init__(self, message: str = "Permission denied") -> None:
        super().__init__(message, "PERMISSION_DENIED")


class ResourceNotFoundException(EventDeskException):
    """Raised when a requested record is absent from the store."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'user', 'certificate').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class EmailAlreadyInUseException(EventDeskException):
    """Raised when registering an email the identity provider already knows."""

    def __init__(self) -> None:
        super().__init__("Email is already in use", "EMAIL_ALREADY_IN_USE")


class DuplicateSubmissionException(EventDeskException):
    """Raised when a per-user submission already exists (e.g. olympiad entry)."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"{resource_type} already submitted: {resource_id}",
            "DUPLICATE_SUBMISSION",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class CertificateAlreadyIssuedException(EventDeskException):
    """Raised when a certificate slot for a participant is already taken."""

    def __init__(self, participant_id: str) -> None:
        super().__init__(
            "Certificate already generated for this participant",
            "CERTIFICATE_ALREADY_ISSUED",
            {"participant_id": participant_id},
        )


class DuplicateAuthCodeException(EventDeskException):
    """Raised when issuing a certificate whose authCode is already in use."""

    def __init__(self, auth_code: str) -> None:
        super().__init__(
            f"Auth code already in use: {auth_code}",
            "DUPLICATE_AUTH_CODE",
            {"authCode": auth_code},
        )


class ConcurrentUpdateException(EventDeskException):
    """Raised when a conditional write keeps losing to concurrent writers."""

    def __init__(self, path: str, attempts: int) -> None:
        super().__init__(
            "Record was updated by another request; retry.",
            "CONCURRENT_UPDATE",
            {"path": path, "attempts": attempts},
        )


class PaymentVerificationFailedException(EventDeskException):
    """Raised when a payment confirmation signature does not match."""

    def __init__(self, order_id: str) -> None:
        super().__init__(
            "Payment verification failed",
            "PAYMENT_VERIFICATION_FAILED",
            {"orderId": order_id},
        )


class UpstreamServiceException(EventDeskException):
    """Base for failures of an external service (identity, store, blobs, gateway)."""

    def __init__(
        self,
        service: str,
        reason: str,
        error_code: str = "UPSTREAM_FAILURE",
    ) -> None:
        super().__init__(
            f"{service} request failed",
            error_code,
            {"service": service, "reason": reason},
        )


class IdentityProviderException(UpstreamServiceException):
    """Identity provider call failed for a reason other than bad credentials."""

    def __init__(self, reason: str) -> None:
        super().__init__("identity provider", reason, "IDENTITY_PROVIDER_ERROR")


class DocumentStoreException(UpstreamServiceException):
    """Document store call failed."""

    def __init__(self, reason: str) -> None:
        super().__init__("document store", reason, "DOCUMENT_STORE_ERROR")


class BlobStorageException(UpstreamServiceException):
    """Blob storage call failed."""

    def __init__(self, reason: str) -> None:
        super().__init__("blob storage", reason, "BLOB_STORAGE_ERROR")


class PaymentGatewayException(UpstreamServiceException):
    """Payment gateway call failed (e.g. order creation)."""

    def __init__(self, reason: str) -> None:
        super().__init__("payment gateway", reason, "PAYMENT_GATEWAY_ERROR")
