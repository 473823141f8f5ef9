"""Authentication service for registration, login and sessions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
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
from ogla_identity.domain.user import (
    EmailAlreadyExistsError,
    InvalidProfileError,
    RegistrationData,
    User,
    can_bypass_email_verification,
)
from ogla_identity.exceptions import (
    AuthenticationError,
    ConflictError,
    ValidationError,
)

if TYPE_CHECKING:
    from ogla_identity.application.context import RequestContext
    from ogla_identity.application.services.account_effects import AccountEffects
    from ogla_identity.domain.user import UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
DEACTIVATED_MESSAGE = "Your account has been deactivated. Please contact support."
UNVERIFIED_MESSAGE = (
    "Please verify your email address before logging in. "
    "Check your inbox for a verification link."
)


@dataclass(frozen=True)
class AuthResult:
    """A user together with a freshly issued session token."""

    user: User
    token: str
    expires_at: datetime


class AuthenticationService:
    """
    Application service for user authentication.

    Orchestrates ogla_auth infrastructure (password hashing, signed tokens)
    with the User domain to provide:
    - Registration (with the first verification token)
    - Login with password
    - Logout
    - Session token resolution for authenticated requests
    """

    def __init__(
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
        token_service: TokenService,
        effects: AccountEffects,
    ):
        self._user_repo = user_repository
        self._password_service = password_service
        self._token_service = token_service
        self._effects = effects

    async def register(
        self,
        data: RegistrationData,
        context: RequestContext | None = None,
    ) -> AuthResult:
        try:
            data = data.validated()
        except InvalidProfileError as e:
            raise ValidationError.from_field_errors(e.errors) from e

        if await self._user_repo.find_by_email(data.email) is not None:
            raise ConflictError

        password_hash = hash_new_password(self._password_service, data.password)
        user = User.register(data, password_hash)
        try:
            user = await self._user_repo.add(user)
        except EmailAlreadyExistsError as e:
            # Lost a race against a concurrent registration
            raise ConflictError from e

        session = self._token_service.create_session_token(user.id)
        verification = self._token_service.create_verification_token(user.id)
        user.issue_verification_token(
            self._token_service.fingerprint(verification.token),
            verification.expires_at,
        )
        await self._user_repo.save(user)

        self._effects.audit(
            user.id,
            "user_registered",
            "New user registration completed",
            context,
            metadata={
                "email": user.email,
                "firstName": user.first_name,
                "lastName": user.last_name,
                "companyName": user.company_name,
                "companyType": user.company_type.value,
                "companyRole": user.company_role.value,
            },
        )
        self._effects.send_welcome_verification(user, verification.token)

        logger.info("User registered: %s (id: %s)", user.email, user.id)
        return AuthResult(user=user, token=session.token, expires_at=session.expires_at)

    async def login(
        self,
        email: str,
        password: str,
        context: RequestContext | None = None,
    ) -> AuthResult:
        """Check credentials and issue a session token.

        Unknown email and wrong password fail with the same error, so the
        response never reveals whether an account exists.
        """
        user = await self._user_repo.find_by_email(email)
        if user is None:
            logger.warning("Login failed for unknown email: %s", email)
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        if not user.is_active:
            self._effects.audit_failure(
                user.id, "login_failed", "Account deactivated", context
            )
            logger.warning("Login rejected for deactivated user: %s", user.id)
            raise AuthenticationError(
                DEACTIVATED_MESSAGE,
                code=ErrorCode.ACCOUNT_DEACTIVATED,
            )

        if not user.email_verified and not can_bypass_email_verification(user):
            self._effects.audit_failure(
                user.id, "login_failed", "Email not verified", context
            )
            logger.info("Login rejected for unverified user: %s", user.id)
            raise AuthenticationError(
                UNVERIFIED_MESSAGE,
                code=ErrorCode.EMAIL_NOT_VERIFIED,
                requires_verification=True,
            )

        if not self._password_service.verify(password, user.password_hash):
            self._effects.audit_failure(
                user.id, "login_failed", "Invalid password", context
            )
            logger.warning("Login failed for user: %s", user.id)
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        now = utc_now()
        user.record_login(now)
        if self._password_service.needs_rehash(user.password_hash):
            user.change_password(self._password_service.hash(password))
            logger.info("Rehashed password for user: %s", user.id)
        await self._user_repo.save(user)

        session = self._token_service.create_session_token(user.id)
        self._effects.audit(
            user.id,
            "user_login",
            "User logged in successfully",
            context,
            metadata={
                "email": user.email,
                "role": user.role.value,
                "loginTime": now.isoformat(),
            },
        )

        logger.info("User logged in: %s", user.id)
        return AuthResult(user=user, token=session.token, expires_at=session.expires_at)

    async def logout(
        self,
        user_id: int,
        context: RequestContext | None = None,
    ) -> None:
        # Sessions are stateless; the client discards its token
        self._effects.audit(user_id, "user_logout", "User logged out", context)
        logger.info("User logged out: %s", user_id)

    async def authenticate(self, token: str) -> User:
        """Resolve a bearer session token to an active user.

        Raises
        ------
        AuthenticationError
            If the token is invalid, expired, not a session token, or the
            user is missing or deactivated
        """
        try:
            payload = self._token_service.verify_token(token, TokenPurpose.SESSION)
        except InvalidTokenError as e:
            message = "Token expired" if e.expired else "Invalid token"
            raise AuthenticationError(
                message,
                code=ErrorCode.AUTHENTICATION_REQUIRED,
            ) from e

        user = await self._user_repo.find_by_id(payload.user_id)
        if user is None:
            raise AuthenticationError(
                "User not found",
                code=ErrorCode.AUTHENTICATION_REQUIRED,
            )
        if not user.is_active:
            raise AuthenticationError(
                "Account is deactivated",
                code=ErrorCode.ACCOUNT_DEACTIVATED,
            )
        return user
