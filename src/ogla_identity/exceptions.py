"""Account and authentication exceptions.

Raised by the application services and translated to HTTP responses by
the presentation layer's exception handlers.
"""

from typing import Any

from ogla.domain.shared.exceptions import DomainException, ErrorCode
from ogla_identity.domain.user.exceptions import InvalidFieldError


class ValidationError(DomainException):
    """Raised when submitted data fails validation.

    ``errors`` carries one ``{"field", "message"}`` entry per violation.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        errors: list[dict[str, str]] | None = None,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
        self.errors = errors or []

    @classmethod
    def from_field_errors(
        cls,
        field_errors: list[InvalidFieldError],
        message: str = "Validation failed",
    ) -> "ValidationError":
        return cls(
            message,
            errors=[{"field": e.field, "message": e.message} for e in field_errors],
        )


class ConflictError(DomainException):
    """Raised when an email address is already registered."""

    def __init__(
        self,
        message: str = "User with this email already exists",
        code: ErrorCode = ErrorCode.EMAIL_ALREADY_REGISTERED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class AuthenticationError(DomainException):
    """Raised when credentials or a session are not accepted."""

    def __init__(
        self,
        message: str = "Invalid email or password",
        code: ErrorCode = ErrorCode.INVALID_CREDENTIALS,
        requires_verification: bool = False,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
        self.requires_verification = requires_verification


class NotFoundError(DomainException):
    """Raised when the requested user does not exist."""

    def __init__(
        self,
        message: str = "User not found",
        code: ErrorCode = ErrorCode.USER_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class TokenError(DomainException):
    """Raised when a verification or reset token is rejected."""

    def __init__(
        self,
        message: str = "Invalid or expired token",
        code: ErrorCode = ErrorCode.INVALID_TOKEN,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class AlreadyVerifiedError(DomainException):
    """Raised when verifying an email that is already verified."""

    def __init__(
        self,
        message: str = "Email is already verified",
        code: ErrorCode = ErrorCode.EMAIL_ALREADY_VERIFIED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class InternalError(DomainException):
    """Raised when an operation fails for reasons the caller cannot fix."""

    def __init__(
        self,
        message: str = "Internal server error",
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
