"""API request and response schemas."""

from ogla.presentation.api.schemas.auth import (
    AuthData,
    ChangePasswordRequest,
    EmailRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    UpdateProfileRequest,
    UserResponse,
    VerifyEmailRequest,
)
from ogla.presentation.api.schemas.common import (
    ApiResponse,
    CamelModel,
    ErrorResponse,
    FieldErrorResponse,
    HealthResponse,
    MessageResponse,
)

__all__ = [
    "ApiResponse",
    "AuthData",
    "CamelModel",
    "ChangePasswordRequest",
    "EmailRequest",
    "ErrorResponse",
    "FieldErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "RegisterRequest",
    "ResetPasswordRequest",
    "UpdateProfileRequest",
    "UserResponse",
    "VerifyEmailRequest",
]
