"""Authentication schemas for request/response models.

Request models only check JSON shape; field rules (lengths, phone format,
company enums) are enforced by the domain so that all violations of one
submission are reported together.
"""

from datetime import datetime
from typing import Any

from pydantic import ConfigDict, Field

from ogla.presentation.api.schemas.common import CamelModel
from ogla_identity.domain.user import ProfileUpdate, RegistrationData, User


class RegisterRequest(CamelModel):
    """Request schema for customer registration."""

    first_name: str
    last_name: str
    email: str
    password: str
    phone: str | None = None
    company_name: str
    company_type: str
    company_role: str
    address: dict[str, Any] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "firstName": "Alice",
                "lastName": "Mensah",
                "email": "alice@example.com",
                "password": "secret1",
                "phone": "+233204543372",
                "companyName": "Mensah Foods",
                "companyType": "Food & Beverage",
                "companyRole": "Owner/CEO",
            },
        },
    )

    def to_registration(self) -> RegistrationData:
        return RegistrationData(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            password=self.password,
            phone=self.phone,
            company_name=self.company_name,
            company_type=self.company_type,
            company_role=self.company_role,
            address=self.address,
        )


class LoginRequest(CamelModel):
    """Request schema for user login."""

    email: str
    password: str


class EmailRequest(CamelModel):
    """Request schema for forgot-password and resend-verification."""

    email: str


class ResetPasswordRequest(CamelModel):
    """Request schema for completing a password reset."""

    token: str = Field(..., min_length=1)
    new_password: str


class VerifyEmailRequest(CamelModel):
    """Request schema for email verification."""

    token: str = Field(..., min_length=1)


class UpdateProfileRequest(CamelModel):
    """Request schema for profile updates.

    Omitted fields are left unchanged; ``phone`` may be "" to remove it.
    Unknown keys are ignored.
    """

    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    company_name: str | None = None
    company_type: str | None = None
    company_role: str | None = None
    address: dict[str, Any] | None = None

    def to_update(self) -> ProfileUpdate:
        return ProfileUpdate(**self.model_dump())


class ChangePasswordRequest(CamelModel):
    """Request schema for changing a user's password."""

    current_password: str
    new_password: str


class UserResponse(CamelModel):
    """Public user fields. Never includes secrets or token state."""

    id: int
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    company_name: str
    company_type: str
    company_role: str
    address: dict[str, Any] | None = None
    role: str
    email_verified: bool
    last_login_at: datetime | None = None
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            phone=user.phone,
            company_name=user.company_name,
            company_type=user.company_type.value,
            company_role=user.company_role.value,
            address=user.address,
            role=user.role.value,
            email_verified=user.email_verified,
            last_login_at=user.last_login_at,
            created_at=user.created_at,
        )


class AuthData(CamelModel):
    """User plus session token, returned by register and login."""

    user: UserResponse
    token: str
    expires_at: datetime
