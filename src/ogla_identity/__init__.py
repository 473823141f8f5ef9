"""Ogla Identity - accounts, authentication and credential workflows.

This package handles:
- Customer registration with company profile
- Login and session tokens
- Email verification
- Password reset and password change
- Profile management and the account audit trail
"""

from ogla_identity.application.context import RequestContext
from ogla_identity.application.services import (
    AccountEffects,
    AuthenticationService,
    AuthResult,
    EmailVerificationService,
    PasswordResetService,
    ProfileService,
)
from ogla_identity.application.side_effects import SideEffectQueue
from ogla_identity.domain.user import (
    CompanyRole,
    CompanyType,
    Email,
    ProfileUpdate,
    RegistrationData,
    User,
    UserRepository,
    UserRole,
    can_bypass_email_verification,
)
from ogla_identity.exceptions import (
    AlreadyVerifiedError,
    AuthenticationError,
    ConflictError,
    InternalError,
    NotFoundError,
    TokenError,
    ValidationError,
)

__all__ = [
    # Domain
    "CompanyRole",
    "CompanyType",
    "Email",
    "ProfileUpdate",
    "RegistrationData",
    "User",
    "UserRepository",
    "UserRole",
    "can_bypass_email_verification",
    # Exceptions
    "AlreadyVerifiedError",
    "AuthenticationError",
    "ConflictError",
    "InternalError",
    "NotFoundError",
    "TokenError",
    "ValidationError",
    # Application
    "AccountEffects",
    "AuthResult",
    "AuthenticationService",
    "EmailVerificationService",
    "PasswordResetService",
    "ProfileService",
    "RequestContext",
    "SideEffectQueue",
]
