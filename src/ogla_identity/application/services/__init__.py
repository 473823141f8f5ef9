"""Application services for the identity domain."""

from ogla_identity.application.services.account_effects import AccountEffects
from ogla_identity.application.services.authentication_service import (
    AuthenticationService,
    AuthResult,
)
from ogla_identity.application.services.email_verification_service import (
    EmailVerificationService,
)
from ogla_identity.application.services.password_reset_service import (
    PasswordResetService,
)
from ogla_identity.application.services.profile_service import ProfileService
from ogla_identity.application.services.provisioning import provision_super_admin

__all__ = [
    "AccountEffects",
    "AuthResult",
    "AuthenticationService",
    "EmailVerificationService",
    "PasswordResetService",
    "ProfileService",
    "provision_super_admin",
]
