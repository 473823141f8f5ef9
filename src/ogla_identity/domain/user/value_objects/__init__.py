"""Value objects for the user domain."""

from ogla_identity.domain.user.value_objects.company import CompanyRole, CompanyType
from ogla_identity.domain.user.value_objects.email import Email
from ogla_identity.domain.user.value_objects.profile import (
    PASSWORD_MIN_LENGTH,
    ProfileUpdate,
    RegistrationData,
    validate_password,
)
from ogla_identity.domain.user.value_objects.user_role import UserRole

__all__ = [
    "PASSWORD_MIN_LENGTH",
    "CompanyRole",
    "CompanyType",
    "Email",
    "ProfileUpdate",
    "RegistrationData",
    "UserRole",
    "validate_password",
]
