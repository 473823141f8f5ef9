"""User domain: identity, credentials and company profile.

This domain handles:
- User aggregate (identity, profile, verification and reset state)
- Registration and profile input validation
- Account policies
"""

from ogla_identity.domain.user.aggregates import User
from ogla_identity.domain.user.exceptions import (
    EmailAlreadyExistsError,
    InvalidEmailError,
    InvalidFieldError,
    InvalidProfileError,
)
from ogla_identity.domain.user.policies import can_bypass_email_verification
from ogla_identity.domain.user.repositories import UserRepository
from ogla_identity.domain.user.value_objects import (
    CompanyRole,
    CompanyType,
    Email,
    ProfileUpdate,
    RegistrationData,
    UserRole,
)

__all__ = [
    "CompanyRole",
    "CompanyType",
    "Email",
    "EmailAlreadyExistsError",
    "InvalidEmailError",
    "InvalidFieldError",
    "InvalidProfileError",
    "ProfileUpdate",
    "RegistrationData",
    "User",
    "UserRepository",
    "UserRole",
    "can_bypass_email_verification",
]
