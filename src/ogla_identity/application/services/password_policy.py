"""Hashing of newly chosen passwords."""

from ogla_auth import PasswordHashingService, WeakPasswordError
from ogla_identity.domain.user.exceptions import InvalidFieldError
from ogla_identity.domain.user.value_objects import validate_password
from ogla_identity.exceptions import ValidationError


def hash_new_password(
    password_service: PasswordHashingService,
    password: str,
    field: str = "password",
) -> str:
    """Validate and hash a password the user is about to set.

    Raises
    ------
    ValidationError
        If the password is too short or too long for bcrypt
    """
    try:
        validate_password(password, field)
        return password_service.hash(password)
    except InvalidFieldError as e:
        raise ValidationError.from_field_errors([e]) from e
    except WeakPasswordError as e:
        raise ValidationError(
            errors=[{"field": field, "message": e.message}],
        ) from e
