"""Authenticated profile and password management."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ogla.domain.shared.exceptions import ErrorCode
from ogla_auth import PasswordHashingService
from ogla_identity.application.services.password_policy import hash_new_password
from ogla_identity.domain.user import InvalidProfileError, ProfileUpdate, User
from ogla_identity.exceptions import (
    AuthenticationError,
    NotFoundError,
    ValidationError,
)

if TYPE_CHECKING:
    from ogla_identity.application.context import RequestContext
    from ogla_identity.application.services.account_effects import AccountEffects
    from ogla_identity.domain.user import UserRepository

logger = logging.getLogger(__name__)


class ProfileService:
    """Reads and updates the profile of an authenticated user."""

    def __init__(
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
        effects: AccountEffects,
    ):
        self._user_repo = user_repository
        self._password_service = password_service
        self._effects = effects

    async def get_profile(self, user_id: int) -> User:
        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise NotFoundError
        return user

    async def update_profile(
        self,
        user_id: int,
        update: ProfileUpdate,
        context: RequestContext | None = None,
    ) -> User:
        """Apply the provided fields and return the updated user.

        Raises
        ------
        ValidationError
            If no field was provided or any provided field is invalid
        NotFoundError
            If the user no longer exists
        """
        if update.is_empty():
            raise ValidationError("No valid fields to update")
        try:
            update = update.validated()
        except InvalidProfileError as e:
            raise ValidationError.from_field_errors(e.errors) from e

        user = await self.get_profile(user_id)
        changed = user.apply_profile_update(update)
        await self._user_repo.save(user)

        self._effects.audit(
            user.id,
            "profile_updated",
            "User updated their profile",
            context,
            metadata={"updatedFields": changed},
        )
        logger.info("Profile updated for user %s: %s", user.id, ", ".join(changed))
        return user

    async def change_password(
        self,
        user_id: int,
        current_password: str,
        new_password: str,
        context: RequestContext | None = None,
    ) -> None:
        new_hash = hash_new_password(
            self._password_service,
            new_password,
            field="new_password",
        )
        user = await self.get_profile(user_id)

        if not self._password_service.verify(current_password, user.password_hash):
            logger.warning("Password change rejected for user: %s", user.id)
            raise AuthenticationError(
                "Current password is incorrect",
                code=ErrorCode.INCORRECT_CURRENT_PASSWORD,
            )

        user.change_password(new_hash)
        await self._user_repo.save(user)

        self._effects.audit(
            user.id,
            "password_changed",
            "User changed their password",
            context,
        )
        logger.info("Password changed for user: %s", user.id)
