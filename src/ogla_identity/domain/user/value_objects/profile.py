"""Registration and profile input records.

Both records hold raw user input. ``validated()`` normalizes every field
and raises a single InvalidProfileError listing all violations, so the
caller can report every problem in one response.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Mapping

from ogla_identity.domain.user.exceptions import (
    InvalidEmailError,
    InvalidFieldError,
    InvalidProfileError,
)
from ogla_identity.domain.user.value_objects.company import CompanyRole, CompanyType
from ogla_identity.domain.user.value_objects.email import Email

# E.164: "+" followed by 7-15 digits, first digit 1-9
PHONE_PATTERN = re.compile(r"^\+[1-9]\d{6,14}$")

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
COMPANY_NAME_MIN_LENGTH = 2
COMPANY_NAME_MAX_LENGTH = 100
PASSWORD_MIN_LENGTH = 6


def normalize_text(value: Any, field: str, min_length: int, max_length: int) -> str:
    if not isinstance(value, str):
        raise InvalidFieldError(field, "Must be a string")
    text = value.strip()
    if not min_length <= len(text) <= max_length:
        msg = f"Must be {min_length}-{max_length} characters"
        raise InvalidFieldError(field, msg)
    return text


def normalize_phone(value: Any) -> str | None:
    """Return the phone number, or None when the field was cleared."""
    if value is None or value == "":
        return None
    if not isinstance(value, str) or not PHONE_PATTERN.match(value.strip()):
        msg = "Phone number must be in international format (e.g., +233204543372)"
        raise InvalidFieldError("phone", msg)
    return value.strip()


def normalize_email(value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidFieldError("email", "Valid email is required")
    try:
        return Email(value).value
    except InvalidEmailError as e:
        raise InvalidFieldError("email", "Valid email is required") from e


def parse_company_type(value: Any) -> CompanyType:
    try:
        return CompanyType(value)
    except ValueError as e:
        raise InvalidFieldError("company_type", "Valid company type is required") from e


def parse_company_role(value: Any) -> CompanyRole:
    try:
        return CompanyRole(value)
    except ValueError as e:
        raise InvalidFieldError("company_role", "Valid company role is required") from e


def normalize_address(value: Any) -> dict[str, Any] | None:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise InvalidFieldError("address", "Address must be an object")
    return dict(value)


def validate_password(value: Any, field: str = "password") -> str:
    if not isinstance(value, str) or len(value) < PASSWORD_MIN_LENGTH:
        msg = f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
        raise InvalidFieldError(field, msg)
    return value


def _collect(checks: list[tuple[str, Callable[[], Any]]]) -> dict[str, Any]:
    """Run every check, gathering all violations before raising."""
    values: dict[str, Any] = {}
    errors: list[InvalidFieldError] = []
    for name, check in checks:
        try:
            values[name] = check()
        except InvalidFieldError as e:
            errors.append(e)
    if errors:
        raise InvalidProfileError(errors)
    return values


@dataclass(frozen=True)
class RegistrationData:
    """Everything a customer submits to open an account."""

    first_name: str
    last_name: str
    email: str
    password: str
    company_name: str
    company_type: str | CompanyType
    company_role: str | CompanyRole
    phone: str | None = None
    address: Mapping[str, Any] | None = None

    def validated(self) -> RegistrationData:
        values = _collect(
            [
                (
                    "first_name",
                    lambda: normalize_text(
                        self.first_name, "first_name", NAME_MIN_LENGTH, NAME_MAX_LENGTH
                    ),
                ),
                (
                    "last_name",
                    lambda: normalize_text(
                        self.last_name, "last_name", NAME_MIN_LENGTH, NAME_MAX_LENGTH
                    ),
                ),
                ("email", lambda: normalize_email(self.email)),
                ("phone", lambda: normalize_phone(self.phone)),
                ("password", lambda: validate_password(self.password)),
                (
                    "company_name",
                    lambda: normalize_text(
                        self.company_name,
                        "company_name",
                        COMPANY_NAME_MIN_LENGTH,
                        COMPANY_NAME_MAX_LENGTH,
                    ),
                ),
                ("company_type", lambda: parse_company_type(self.company_type)),
                ("company_role", lambda: parse_company_role(self.company_role)),
                ("address", lambda: normalize_address(self.address)),
            ]
        )
        return replace(self, **values)


@dataclass(frozen=True)
class ProfileUpdate:
    """The mutable surface of a profile.

    A field left as None is not part of the update. ``phone`` may be set
    to an empty string to remove a stored number.
    """

    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    company_name: str | None = None
    company_type: str | CompanyType | None = None
    company_role: str | CompanyRole | None = None
    address: Mapping[str, Any] | None = None

    def provided_fields(self) -> list[str]:
        return [f.name for f in fields(self) if getattr(self, f.name) is not None]

    def is_empty(self) -> bool:
        return not self.provided_fields()

    def validated(self) -> ProfileUpdate:
        validators: dict[str, Callable[[], Any]] = {
            "first_name": lambda: normalize_text(
                self.first_name, "first_name", NAME_MIN_LENGTH, NAME_MAX_LENGTH
            ),
            "last_name": lambda: normalize_text(
                self.last_name, "last_name", NAME_MIN_LENGTH, NAME_MAX_LENGTH
            ),
            # Empty string survives as "" so that it still counts as provided
            "phone": lambda: normalize_phone(self.phone) or "",
            "company_name": lambda: normalize_text(
                self.company_name,
                "company_name",
                COMPANY_NAME_MIN_LENGTH,
                COMPANY_NAME_MAX_LENGTH,
            ),
            "company_type": lambda: parse_company_type(self.company_type),
            "company_role": lambda: parse_company_role(self.company_role),
            "address": lambda: normalize_address(self.address),
        }
        values = _collect(
            [(name, validators[name]) for name in self.provided_fields()]
        )
        return replace(self, **values)
