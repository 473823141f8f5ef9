from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ogla.domain.shared.exceptions import ErrorCode
from ogla.domain.shared.time import utc_now
from ogla_auth import (
    InvalidTokenError,
    PasswordHashingService,
    TokenPurpose,
    TokenService,
)
from ogla_identity.application.services.password_policy import hash_new_password
from ogla_identity.exceptions import NotFoundError, TokenError

if TYPE_CHECKING:
    from ogla_identity.application.context import RequestContext
    from ogla_identity.application.services.account_effects import AccountEffects
    from ogla_identity.domain.user import UserRepository

logger = logging.getLogger(__name__)

INVALID_RESET_TOKEN_MESSAGE = "Invalid or expired reset token"


class PasswordResetService:
    """Service for handling password reset requests and token validation."""

    def __init__(  # noqa: PLR0913
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
        token_service: TokenService,
        effects: AccountEffects,
        uniform_account_responses: bool = False,
    ):
        self._user_repo = user_repository
        self._password_service = password_service
        self._token_service = token_service
        self._effects = effects
        self._uniform_responses = uniform_account_responses

    async def forgot_password(
        self,
        email: str,
        context: RequestContext | None = None,
    ) -> None:
        user = await self._user_repo.find_active_by_email(email)
        if user is None:
            if self._uniform_responses:
                logger.debug("Password reset requested for unknown email: %s", email)
                return
            raise NotFoundError

        # A new token replaces (and invalidates) any pending one
        reset = self._token_service.create_reset_token(user.id)
        user.issue_reset_token(
            self._token_service.fingerprint(reset.token),
            reset.expires_at,
        )
        await self._user_repo.save(user)

        self._effects.audit(
            user.id,
            "password_reset_requested",
            "User requested password reset",
            context,
            metadata={"email": user.email},
        )
        self._effects.send_password_reset(user, reset.token)
        logger.info("Password reset requested for user: %s", user.id)

    async def reset_password(
        self,
        token: str,
        new_password: str,
        context: RequestContext | None = None,
    ) -> None:
        try:
            payload = self._token_service.verify_token(
                token,
                TokenPurpose.PASSWORD_RESET,
            )
        except InvalidTokenError as e:
            logger.warning("Rejected reset token: %s", e.message)
            code = ErrorCode.TOKEN_EXPIRED if e.expired else ErrorCode.INVALID_TOKEN
            raise TokenError(INVALID_RESET_TOKEN_MESSAGE, code=code) from e

        new_hash = hash_new_password(self._password_service, new_password)

        user = await self._user_repo.find_by_id(payload.user_id)
        if user is None:
            raise TokenError(INVALID_RESET_TOKEN_MESSAGE)

        token_hash = self._token_service.fingerprint(token)
        if not user.has_pending_reset(token_hash, utc_now()):
            logger.warning("Reset token superseded or used for user: %s", user.id)
            raise TokenError(INVALID_RESET_TOKEN_MESSAGE)

        user.complete_password_reset(new_hash)
        if not await self._user_repo.save_if_reset_token_matches(user, token_hash):
            logger.warning("Reset token consumed concurrently: %s", user.id)
            raise TokenError(INVALID_RESET_TOKEN_MESSAGE)

        self._effects.audit(
            user.id,
            "password_reset",
            "User reset their password",
            context,
        )
        logger.info("Password reset completed for user: %s", user.id)
