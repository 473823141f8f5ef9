"""FastAPI dependency injection for the Ogla API.

Provides dependencies for:
- Database sessions
- Token, password, email and audit infrastructure
- Application services (built per request)
- Authentication (current user from the bearer session token)
- Request context and deferred side effects
"""

import logging
from functools import lru_cache
from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ogla.domain.shared.exceptions import ErrorCode
from ogla.presentation.api.config import get_api_settings
from ogla_auth import PasswordHashingService, TokenService
from ogla_config.settings import Settings, get_settings
from ogla_identity.application.context import RequestContext
from ogla_identity.application.ports import ActivityLog
from ogla_identity.application.services import (
    AccountEffects,
    AuthenticationService,
    EmailVerificationService,
    PasswordResetService,
    ProfileService,
)
from ogla_identity.application.side_effects import SideEffectQueue
from ogla_identity.domain.user import User
from ogla_identity.exceptions import AuthenticationError
from ogla_identity.infrastructure.email import EmailService
from ogla_identity.infrastructure.persistence.sqlalchemy import (
    ActivityLogRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)

# Security scheme for bearer session tokens
security = HTTPBearer(auto_error=False)

SettingsDep = Annotated[Settings, Depends(get_api_settings)]


# -----------------------------------------------------------------------------
# Database Engine & Session (Singleton)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    The engine manages the connection pool and is reused across all requests.

    Returns
    -------
    AsyncEngine instance
    """
    return create_async_engine(
        get_settings().database_url,
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
    )


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """
    Get the shared async session maker (singleton).

    Returns
    -------
    async_sessionmaker configured with the shared engine
    """
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request using the shared engine/pool.

    Yields
    ------
    AsyncSession for database operations
    """
    async with get_session_maker()() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Infrastructure Services
# -----------------------------------------------------------------------------


def get_token_service(settings: SettingsDep) -> TokenService:
    """Get token service configured with API settings."""
    return TokenService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        session_token_expire_days=settings.jwt_session_token_expire_days,
        verification_token_expire_hours=settings.email_verification_expire_hours,
        reset_token_expire_hours=settings.password_reset_expire_hours,
    )


def get_password_service(settings: SettingsDep) -> PasswordHashingService:
    """Get password hashing service."""
    return PasswordHashingService(rounds=settings.bcrypt_rounds)


def get_email_service(settings: SettingsDep) -> EmailService:
    return EmailService(settings)


def get_activity_log() -> ActivityLog:
    """Audit log writing through its own sessions."""
    return ActivityLogRepositorySQLAlchemy(get_session_maker())


TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]
PasswordServiceDep = Annotated[PasswordHashingService, Depends(get_password_service)]


# -----------------------------------------------------------------------------
# Request Context & Side Effects
# -----------------------------------------------------------------------------


async def get_side_effects() -> AsyncGenerator[SideEffectQueue, None]:
    """
    Per-request side-effect queue.

    Whatever the services queued is dispatched in the background once the
    endpoint has finished. A rolled back unit of work has already dropped
    its commit-bound effects; audits of rejected attempts still run.
    """
    queue = SideEffectQueue()
    try:
        yield queue
    finally:
        queue.dispatch()


SideEffects = Annotated[SideEffectQueue, Depends(get_side_effects)]


def get_request_context(request: Request, settings: SettingsDep) -> RequestContext:
    """Client IP and user agent for audit events."""
    ip_address = None
    if settings.api_trust_proxy_headers:
        forwarded_for = request.headers.get("x-forwarded-for", "")
        ip_address = forwarded_for.split(",")[0].strip() or None
    if ip_address is None and request.client is not None:
        ip_address = request.client.host
    return RequestContext.from_values(
        ip_address=ip_address,
        user_agent=request.headers.get("user-agent"),
    )


ClientContext = Annotated[RequestContext, Depends(get_request_context)]


def get_account_effects(
    side_effects: SideEffects,
    activity_log: Annotated[ActivityLog, Depends(get_activity_log)],
    email_service: Annotated[EmailService, Depends(get_email_service)],
) -> AccountEffects:
    return AccountEffects(
        side_effects=side_effects,
        activity_log=activity_log,
        email_service=email_service,
    )


AccountEffectsDep = Annotated[AccountEffects, Depends(get_account_effects)]


# -----------------------------------------------------------------------------
# Application Services
# -----------------------------------------------------------------------------


def get_authentication_service(
    session: DBSession,
    password_service: PasswordServiceDep,
    token_service: TokenServiceDep,
    effects: AccountEffectsDep,
) -> AuthenticationService:
    """
    Get authentication service with all dependencies.

    This service orchestrates registration, login, logout and session
    token resolution.
    """
    return AuthenticationService(
        user_repository=UserRepositorySQLAlchemy(session),
        password_service=password_service,
        token_service=token_service,
        effects=effects,
    )


def get_email_verification_service(
    session: DBSession,
    token_service: TokenServiceDep,
    effects: AccountEffectsDep,
    settings: SettingsDep,
) -> EmailVerificationService:
    return EmailVerificationService(
        user_repository=UserRepositorySQLAlchemy(session),
        token_service=token_service,
        effects=effects,
        uniform_account_responses=settings.uniform_account_responses,
    )


def get_password_reset_service(
    session: DBSession,
    password_service: PasswordServiceDep,
    token_service: TokenServiceDep,
    effects: AccountEffectsDep,
    settings: SettingsDep,
) -> PasswordResetService:
    return PasswordResetService(
        user_repository=UserRepositorySQLAlchemy(session),
        password_service=password_service,
        token_service=token_service,
        effects=effects,
        uniform_account_responses=settings.uniform_account_responses,
    )


def get_profile_service(
    session: DBSession,
    password_service: PasswordServiceDep,
    effects: AccountEffectsDep,
) -> ProfileService:
    return ProfileService(
        user_repository=UserRepositorySQLAlchemy(session),
        password_service=password_service,
        effects=effects,
    )


# Type aliases for injected services
AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]
VerificationService = Annotated[
    EmailVerificationService,
    Depends(get_email_verification_service),
]
ResetService = Annotated[PasswordResetService, Depends(get_password_reset_service)]
ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]


# -----------------------------------------------------------------------------
# Current User (Bearer Authentication)
# -----------------------------------------------------------------------------


async def get_current_user(
    auth_service: AuthService,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> User:
    """
    FastAPI dependency to get the current authenticated user.

    Parameters
    ----------
    auth_service
        Resolves the session token to a user
    credentials
        Bearer token from Authorization header

    Returns
    -------
    The authenticated, active User

    Raises
    ------
    AuthenticationError
        401 if the token is missing, invalid or expired, or the user is
        missing or deactivated
    """
    if credentials is None:
        raise AuthenticationError(
            "Access token required",
            code=ErrorCode.AUTHENTICATION_REQUIRED,
        )

    try:
        return await auth_service.authenticate(credentials.credentials)
    except AuthenticationError as e:
        logger.warning("Rejected bearer token: %s", e.message)
        raise


# Type alias for injected current user
CurrentUser = Annotated[User, Depends(get_current_user)]
