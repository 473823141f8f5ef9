"""Email verification workflow."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ogla.domain.shared.exceptions import ErrorCode
from ogla.domain.shared.time import utc_now
from ogla_auth import InvalidTokenError, TokenPurpose, TokenService
from ogla_identity.exceptions import AlreadyVerifiedError, NotFoundError, TokenError

if TYPE_CHECKING:
    from ogla_identity.application.context import RequestContext
    from ogla_identity.application.services.account_effects import AccountEffects
    from ogla_identity.domain.user import User, UserRepository

logger = logging.getLogger(__name__)

INVALID_VERIFICATION_TOKEN_MESSAGE = "Invalid or expired verification token"


class EmailVerificationService:
    """Confirms email ownership and re-issues verification links."""

    def __init__(
        self,
        user_repository: UserRepository,
        token_service: TokenService,
        effects: AccountEffects,
        uniform_account_responses: bool = False,
    ):
        self._user_repo = user_repository
        self._token_service = token_service
        self._effects = effects
        self._uniform_responses = uniform_account_responses

    async def verify_email(
        self,
        token: str,
        context: RequestContext | None = None,
    ) -> User:
        """Consume a verification token and mark the email verified.

        Raises
        ------
        TokenError
            If the token is invalid, expired, superseded or already used
        AlreadyVerifiedError
            If the account's email is already verified
        """
        try:
            payload = self._token_service.verify_token(
                token,
                TokenPurpose.EMAIL_VERIFICATION,
            )
        except InvalidTokenError as e:
            logger.warning("Rejected verification token: %s", e.message)
            code = ErrorCode.TOKEN_EXPIRED if e.expired else ErrorCode.INVALID_TOKEN
            raise TokenError(INVALID_VERIFICATION_TOKEN_MESSAGE, code=code) from e

        user = await self._user_repo.find_by_id(payload.user_id)
        if user is None:
            raise TokenError(INVALID_VERIFICATION_TOKEN_MESSAGE)

        # Checked first: verifying clears the stored token
        if user.email_verified:
            raise AlreadyVerifiedError

        token_hash = self._token_service.fingerprint(token)
        if not user.has_pending_verification(token_hash, utc_now()):
            logger.warning("Verification token superseded for user: %s", user.id)
            raise TokenError(INVALID_VERIFICATION_TOKEN_MESSAGE)

        user.mark_email_verified()
        if not await self._user_repo.save_if_verification_token_matches(
            user,
            token_hash,
        ):
            logger.warning("Verification token consumed concurrently: %s", user.id)
            raise TokenError(INVALID_VERIFICATION_TOKEN_MESSAGE)

        self._effects.audit(
            user.id,
            "email_verified",
            "User verified their email address",
            context,
        )
        logger.info("Email verified for user: %s", user.id)
        return user

    async def resend_verification(
        self,
        email: str,
        context: RequestContext | None = None,
    ) -> None:
        user = await self._user_repo.find_active_by_email(email)
        if user is None:
            if self._uniform_responses:
                logger.debug("Verification resend for unknown email: %s", email)
                return
            raise NotFoundError

        if user.email_verified:
            raise AlreadyVerifiedError

        verification = self._token_service.create_verification_token(user.id)
        user.issue_verification_token(
            self._token_service.fingerprint(verification.token),
            verification.expires_at,
        )
        await self._user_repo.save(user)

        self._effects.send_verification(user, verification.token)
        self._effects.audit(
            user.id,
            "verification_email_resent",
            "User requested a new verification email",
            context,
            metadata={"email": user.email},
        )
        logger.info("Verification email re-issued for user: %s", user.id)
