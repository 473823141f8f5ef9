"""Authentication router for registration, login and account management."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import APIRouter, status
from sqlalchemy.ext.asyncio import AsyncSession

from ogla.presentation.api.dependencies import (
    AuthService,
    ClientContext,
    CurrentUser,
    DBSession,
    ProfileServiceDep,
    ResetService,
    SideEffects,
    VerificationService,
)
from ogla.presentation.api.schemas import (
    ApiResponse,
    AuthData,
    ChangePasswordRequest,
    EmailRequest,
    ErrorResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    UpdateProfileRequest,
    UserResponse,
    VerifyEmailRequest,
)
from ogla_identity.application.services import AuthResult
from ogla_identity.application.side_effects import SideEffectQueue

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Validation or token error"},
    401: {"model": ErrorResponse, "description": "Not authenticated"},
    404: {"model": ErrorResponse, "description": "User not found"},
}


@asynccontextmanager
async def _unit_of_work(
    session: AsyncSession,
    side_effects: SideEffectQueue,
) -> AsyncIterator[None]:
    """Commit on success, roll back on any failure.

    A rollback also drops the queued effects that describe the lost changes.
    """
    try:
        yield
        await session.commit()
    except Exception:
        await session.rollback()
        side_effects.rollback()
        raise


def _auth_data(result: AuthResult) -> AuthData:
    return AuthData(
        user=UserResponse.from_user(result.user),
        token=result.token,
        expires_at=result.expires_at,
    )


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new customer",
    responses={400: ERROR_RESPONSES[400]},
)
async def register(
    request: RegisterRequest,
    auth_service: AuthService,
    session: DBSession,
    side_effects: SideEffects,
    context: ClientContext,
) -> ApiResponse[AuthData]:
    """
    Create a customer account.

    The returned session token is usable immediately, but logging in again
    requires a verified email. A verification link is sent by email.
    """
    async with _unit_of_work(session, side_effects):
        result = await auth_service.register(request.to_registration(), context)

    return ApiResponse[AuthData](
        message="User registered successfully",
        data=_auth_data(result),
    )


@router.post(
    "/login",
    summary="Authenticate user",
    responses={401: ERROR_RESPONSES[401]},
)
async def login(
    request: LoginRequest,
    auth_service: AuthService,
    session: DBSession,
    side_effects: SideEffects,
    context: ClientContext,
) -> ApiResponse[AuthData]:
    """
    Authenticate with email and password.

    Unverified accounts are rejected with ``requiresVerification: true``.
    """
    async with _unit_of_work(session, side_effects):
        result = await auth_service.login(request.email, request.password, context)

    return ApiResponse[AuthData](message="Login successful", data=_auth_data(result))


@router.post(
    "/logout",
    summary="Log out",
    responses={401: ERROR_RESPONSES[401]},
)
async def logout(
    current_user: CurrentUser,
    auth_service: AuthService,
    context: ClientContext,
) -> MessageResponse:
    """Record the logout. Session tokens are stateless; the client drops it."""
    await auth_service.logout(current_user.id, context)
    return MessageResponse(message="Logout successful")


@router.post(
    "/forgot-password",
    summary="Request a password reset email",
    responses={404: ERROR_RESPONSES[404]},
)
async def forgot_password(
    request: EmailRequest,
    reset_service: ResetService,
    session: DBSession,
    side_effects: SideEffects,
    context: ClientContext,
) -> MessageResponse:
    async with _unit_of_work(session, side_effects):
        await reset_service.forgot_password(request.email, context)

    return MessageResponse(message="Password reset email sent")


@router.post(
    "/reset-password",
    summary="Reset password with a reset token",
    responses={400: ERROR_RESPONSES[400]},
)
async def reset_password(
    request: ResetPasswordRequest,
    reset_service: ResetService,
    session: DBSession,
    side_effects: SideEffects,
    context: ClientContext,
) -> MessageResponse:
    """
    Set a new password using the token from the reset email.

    A successful reset also marks the email as verified.
    """
    async with _unit_of_work(session, side_effects):
        await reset_service.reset_password(
            request.token,
            request.new_password,
            context,
        )

    return MessageResponse(message="Password reset successfully")


@router.post(
    "/verify-email",
    summary="Verify email address",
    responses={400: ERROR_RESPONSES[400]},
)
async def verify_email(
    request: VerifyEmailRequest,
    verification_service: VerificationService,
    session: DBSession,
    side_effects: SideEffects,
    context: ClientContext,
) -> MessageResponse:
    async with _unit_of_work(session, side_effects):
        await verification_service.verify_email(request.token, context)

    return MessageResponse(message="Email verified successfully")


@router.post(
    "/resend-verification",
    summary="Send a new verification email",
    responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]},
)
async def resend_verification(
    request: EmailRequest,
    verification_service: VerificationService,
    session: DBSession,
    side_effects: SideEffects,
    context: ClientContext,
) -> MessageResponse:
    async with _unit_of_work(session, side_effects):
        await verification_service.resend_verification(request.email, context)

    return MessageResponse(message="Verification email sent")


@router.get(
    "/profile",
    summary="Get the current user's profile",
    responses={401: ERROR_RESPONSES[401], 404: ERROR_RESPONSES[404]},
)
async def get_profile(
    current_user: CurrentUser,
    profile_service: ProfileServiceDep,
) -> ApiResponse[UserResponse]:
    user = await profile_service.get_profile(current_user.id)
    return ApiResponse[UserResponse](
        message="Profile retrieved successfully",
        data=UserResponse.from_user(user),
    )


@router.put(
    "/profile",
    summary="Update the current user's profile",
    responses={400: ERROR_RESPONSES[400], 401: ERROR_RESPONSES[401]},
)
async def update_profile(
    request: UpdateProfileRequest,
    current_user: CurrentUser,
    profile_service: ProfileServiceDep,
    session: DBSession,
    side_effects: SideEffects,
    context: ClientContext,
) -> ApiResponse[UserResponse]:
    """
    Update any subset of the profile fields.

    Email, role and password cannot be changed here.
    """
    async with _unit_of_work(session, side_effects):
        user = await profile_service.update_profile(
            current_user.id,
            request.to_update(),
            context,
        )

    return ApiResponse[UserResponse](
        message="Profile updated successfully",
        data=UserResponse.from_user(user),
    )


@router.put(
    "/change-password",
    summary="Change the current user's password",
    responses=ERROR_RESPONSES,
)
async def change_password(
    request: ChangePasswordRequest,
    current_user: CurrentUser,
    profile_service: ProfileServiceDep,
    session: DBSession,
    side_effects: SideEffects,
    context: ClientContext,
) -> MessageResponse:
    """Existing session tokens stay valid after a password change."""
    async with _unit_of_work(session, side_effects):
        await profile_service.change_password(
            current_user.id,
            request.current_password,
            request.new_password,
            context,
        )

    return MessageResponse(message="Password changed successfully")
