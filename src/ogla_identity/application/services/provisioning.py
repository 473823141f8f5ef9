"""Out-of-band account provisioning."""

import logging

from ogla_auth import PasswordHashingService
from ogla_identity.application.services.password_policy import hash_new_password
from ogla_identity.domain.user import (
    EmailAlreadyExistsError,
    InvalidProfileError,
    RegistrationData,
    User,
    UserRepository,
    UserRole,
)
from ogla_identity.exceptions import ConflictError, ValidationError

logger = logging.getLogger(__name__)


async def provision_super_admin(
    user_repository: UserRepository,
    password_service: PasswordHashingService,
    data: RegistrationData,
) -> User:
    """Create an active, verified super admin.

    Raises
    ------
    ValidationError
        If any field is invalid
    ConflictError
        If the email is already registered
    """
    try:
        data = data.validated()
    except InvalidProfileError as e:
        raise ValidationError.from_field_errors(e.errors) from e

    if await user_repository.find_by_email(data.email) is not None:
        raise ConflictError

    user = User.register(
        data,
        hash_new_password(password_service, data.password),
        role=UserRole.SUPER_ADMIN,
        email_verified=True,
    )
    try:
        user = await user_repository.add(user)
    except EmailAlreadyExistsError as e:
        raise ConflictError from e

    logger.info("Super admin provisioned: %s (id: %s)", user.email, user.id)
    return user
