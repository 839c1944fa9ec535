"""
Service-layer failures.

Services raise these typed errors; the HTTP layer translates them into
responses through a single exception handler registered in ``app.main``.
"""

from typing import Optional

from fastapi import status


class ServiceError(Exception):
    """Base class for business-rule violations raised by services."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "service_error"
    default_detail: str = "Request could not be processed"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationFailure(ServiceError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "validation_failure"
    default_detail = "Invalid input"


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_detail = "Not found"


class NotFoundOrForbidden(ServiceError):
    """Raised when an owned entity is missing or belongs to someone else.

    Callers cannot tell the two cases apart.
    """

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_detail = "Resource not found or you don't have permission to access it"


class InvalidCredentials(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_credentials"
    default_detail = "Invalid email or password"


class AccountLocked(ServiceError):
    status_code = status.HTTP_423_LOCKED
    code = "account_locked"
    default_detail = "Account is locked due to multiple failed login attempts"


class AccountDisabled(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "account_disabled"
    default_detail = "Account is deactivated"


class EmailNotVerified(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "email_not_verified"
    default_detail = "Please verify your email first"


class TokenInvalid(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "token_invalid"
    default_detail = "Invalid token"


class TokenExpired(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "token_expired"
    default_detail = "Token has expired. Please request a new one."


class AlreadyVerified(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    code = "already_verified"
    default_detail = "Email is already verified"


class Conflict(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"
    default_detail = "Resource already exists"


class QuotaExceeded(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "quota_exceeded"
    default_detail = "Resume limit reached for your plan"


class Unauthenticated(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthenticated"
    default_detail = "Not authenticated"
