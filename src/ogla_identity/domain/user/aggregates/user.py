"""User aggregate: identity, credentials and account lifecycle."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Union

from ogla.domain.shared.time import ensure_tz_aware, utc_now
from ogla_identity.domain.user.value_objects import (
    CompanyRole,
    CompanyType,
    Email,
    ProfileUpdate,
    RegistrationData,
    UserRole,
)


class User:
    """
    User aggregate root.

    Holds the account state machine: at most one outstanding email
    verification token and one outstanding password reset token, each
    stored as a digest with its expiry. ``id`` is None until the store
    assigns one on insert.
    """

    def __init__(  # noqa: PLR0913
        self,
        email: Union[str, Email],
        password_hash: str,
        first_name: str,
        last_name: str,
        company_name: str,
        company_type: Union[str, CompanyType],
        company_role: Union[str, CompanyRole],
        role: Union[str, UserRole] = UserRole.CUSTOMER,
        phone: str | None = None,
        address: dict[str, Any] | None = None,
        id: int | None = None,
        email_verified: bool = False,
        email_verification_token: str | None = None,
        email_verification_expires: datetime | None = None,
        reset_password_token: str | None = None,
        reset_password_expires: datetime | None = None,
        is_active: bool = True,
        last_login_at: datetime | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        if not password_hash:
            msg = "A user always carries a password hash"
            raise ValueError(msg)

        self._id = id
        self._email = email if isinstance(email, Email) else Email(email)
        self._password_hash = password_hash
        self._first_name = first_name
        self._last_name = last_name
        self._phone = phone
        self._company_name = company_name
        self._company_type = CompanyType(company_type)
        self._company_role = CompanyRole(company_role)
        self._address = address
        self._role = UserRole(role) if role is not None else UserRole.CUSTOMER
        self._email_verified = email_verified
        self._email_verification_token = email_verification_token
        self._email_verification_expires = _aware(email_verification_expires)
        self._reset_password_token = reset_password_token
        self._reset_password_expires = _aware(reset_password_expires)
        self._is_active = is_active
        self._last_login_at = _aware(last_login_at)
        self._created_at = _aware(created_at) or utc_now()
        self._updated_at = _aware(updated_at) or utc_now()

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def id(self) -> int | None:
        return self._id

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def role(self) -> UserRole:
        return self._role

    @property
    def password_hash(self) -> str:
        return self._password_hash

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def full_name(self) -> str:
        return f"{self._first_name} {self._last_name}"

    @property
    def phone(self) -> str | None:
        return self._phone

    @property
    def company_name(self) -> str:
        return self._company_name

    @property
    def company_type(self) -> CompanyType:
        return self._company_type

    @property
    def company_role(self) -> CompanyRole:
        return self._company_role

    @property
    def address(self) -> dict[str, Any] | None:
        return self._address

    # ------------------------------------------------------------------
    # Account state
    # ------------------------------------------------------------------

    @property
    def email_verified(self) -> bool:
        return self._email_verified

    @property
    def email_verification_token(self) -> str | None:
        return self._email_verification_token

    @property
    def email_verification_expires(self) -> datetime | None:
        return self._email_verification_expires

    @property
    def reset_password_token(self) -> str | None:
        return self._reset_password_token

    @property
    def reset_password_expires(self) -> datetime | None:
        return self._reset_password_expires

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def last_login_at(self) -> datetime | None:
        return self._last_login_at

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    # ------------------------------------------------------------------
    # Email verification axis
    # ------------------------------------------------------------------

    def issue_verification_token(self, token_hash: str, expires_at: datetime) -> None:
        """Store a new verification token, replacing any earlier one."""
        self._email_verification_token = token_hash
        self._email_verification_expires = expires_at
        self._touch()

    def has_pending_verification(self, token_hash: str, now: datetime) -> bool:
        return _matches(
            self._email_verification_token,
            self._email_verification_expires,
            token_hash,
            now,
        )

    def mark_email_verified(self) -> None:
        self._email_verified = True
        self._clear_verification_token()
        self._touch()

    # ------------------------------------------------------------------
    # Password reset axis
    # ------------------------------------------------------------------

    def issue_reset_token(self, token_hash: str, expires_at: datetime) -> None:
        """Store a new reset token, replacing (and invalidating) any earlier one."""
        self._reset_password_token = token_hash
        self._reset_password_expires = expires_at
        self._touch()

    def has_pending_reset(self, token_hash: str, now: datetime) -> bool:
        return _matches(
            self._reset_password_token,
            self._reset_password_expires,
            token_hash,
            now,
        )

    def complete_password_reset(self, password_hash: str) -> None:
        """Replace the password; a used reset link also proves email ownership."""
        self._password_hash = password_hash
        self._reset_password_token = None
        self._reset_password_expires = None
        self._email_verified = True
        self._clear_verification_token()
        self._touch()

    # ------------------------------------------------------------------
    # Other mutations
    # ------------------------------------------------------------------

    def change_password(self, password_hash: str) -> None:
        self._password_hash = password_hash
        self._touch()

    def apply_profile_update(self, update: ProfileUpdate) -> list[str]:
        """Apply a validated update and return the names of the fields it set."""
        provided = update.provided_fields()
        for name in provided:
            value = getattr(update, name)
            if name == "phone":
                value = value or None
            elif name == "company_type":
                value = CompanyType(value)
            elif name == "company_role":
                value = CompanyRole(value)
            elif name == "address":
                value = dict(value)
            setattr(self, f"_{name}", value)
        if provided:
            self._touch()
        return provided

    def record_login(self, when: datetime | None = None) -> None:
        self._last_login_at = when or utc_now()
        self._touch()

    def deactivate(self) -> None:
        self._is_active = False
        self._touch()

    def activate(self) -> None:
        self._is_active = True
        self._touch()

    def assign_id(self, user_id: int) -> None:
        if self._id is not None and self._id != user_id:
            msg = f"User already has id {self._id}"
            raise ValueError(msg)
        self._id = user_id

    def _clear_verification_token(self) -> None:
        self._email_verification_token = None
        self._email_verification_expires = None

    def _touch(self) -> None:
        self._updated_at = utc_now()

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def register(
        cls,
        data: RegistrationData,
        password_hash: str,
        role: UserRole = UserRole.CUSTOMER,
        email_verified: bool = False,
    ) -> User:
        """Create a new account from validated registration data."""
        return cls(
            email=data.email,
            password_hash=password_hash,
            first_name=data.first_name,
            last_name=data.last_name,
            phone=data.phone,
            company_name=data.company_name,
            company_type=data.company_type,
            company_role=data.company_role,
            address=dict(data.address) if data.address is not None else None,
            role=role,
            email_verified=email_verified,
        )

    @classmethod
    def reconstitute(cls, **state: Any) -> User:
        """Rebuild a user from persisted state."""
        return cls(**state)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        if self._id is None or other._id is None:
            return self is other
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id) if self._id is not None else id(self)

    def __repr__(self) -> str:
        return f"User(id={self._id}, email={self._email.value}, role={self._role.value})"


def _aware(value: datetime | None) -> datetime | None:
    return ensure_tz_aware(value) if value is not None else None


def _matches(
    stored_hash: str | None,
    stored_expires: datetime | None,
    token_hash: str,
    now: datetime,
) -> bool:
    if stored_hash is None or stored_expires is None:
        return False
    return stored_hash == token_hash and now < stored_expires
