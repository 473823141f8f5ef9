"""Unit tests for AuthenticationService."""

from datetime import timedelta
from unittest.mock import AsyncMock, Mock

import pytest

from ogla.domain.shared.exceptions import ErrorCode
from ogla_auth import PasswordHashingService, TokenPurpose, TokenService
from ogla_identity.application.context import RequestContext
from ogla_identity.application.services import AccountEffects, AuthenticationService
from ogla_identity.domain.user import EmailAlreadyExistsError, UserRole
from ogla_identity.exceptions import (
    AuthenticationError,
    ConflictError,
    ValidationError,
)
from tests.shared.fixtures.factories import TestUserFactory

SECRET = "test-secret-key"
CONTEXT = RequestContext(ip_address="203.0.113.7", user_agent="pytest")


async def _assign_id(user):
    user.assign_id(1)
    return user


class TestAuthenticationServiceRegister:
    """Tests for register."""

    def setup_method(self):
        self.user_repo = AsyncMock()
        self.user_repo.find_by_email.return_value = None
        self.user_repo.add.side_effect = _assign_id
        self.password_service = Mock(spec=PasswordHashingService)
        self.password_service.hash.return_value = "hashed"
        self.token_service = TokenService(secret_key=SECRET)
        self.effects = Mock(spec=AccountEffects)

        self.service = AuthenticationService(
            user_repository=self.user_repo,
            password_service=self.password_service,
            token_service=self.token_service,
            effects=self.effects,
        )

    @pytest.mark.asyncio
    async def test_register_success(self):
        result = await self.service.register(
            TestUserFactory.registration_data(),
            CONTEXT,
        )

        assert result.user.id == 1
        assert result.user.email == "alice@example.com"
        assert result.user.role is UserRole.CUSTOMER
        assert result.user.email_verified is False
        payload = self.token_service.verify_token(result.token, TokenPurpose.SESSION)
        assert payload.user_id == 1
        # exp is stored with second precision
        assert abs(result.expires_at - payload.exp) < timedelta(seconds=1)

    @pytest.mark.asyncio
    async def test_register_stores_digest_of_emailed_token(self):
        result = await self.service.register(TestUserFactory.registration_data())

        self.effects.send_welcome_verification.assert_called_once()
        user, token = self.effects.send_welcome_verification.call_args[0]
        assert user is result.user
        assert user.email_verification_token == TokenService.fingerprint(token)
        assert user.email_verification_token != token
        self.user_repo.save.assert_awaited_once_with(result.user)

    @pytest.mark.asyncio
    async def test_register_audits_company_profile(self):
        await self.service.register(TestUserFactory.registration_data(), CONTEXT)

        self.effects.audit.assert_called_once()
        args, kwargs = self.effects.audit.call_args
        assert args[:2] == (1, "user_registered")
        assert args[3] is CONTEXT
        assert kwargs["metadata"]["companyName"] == "Mensah Foods"
        assert kwargs["metadata"]["companyType"] == "Food & Beverage"

    @pytest.mark.asyncio
    async def test_register_existing_email_conflicts(self):
        self.user_repo.find_by_email.return_value = TestUserFactory.alice()

        with pytest.raises(ConflictError) as exc_info:
            await self.service.register(TestUserFactory.registration_data())

        assert exc_info.value.code is ErrorCode.EMAIL_ALREADY_REGISTERED
        self.user_repo.add.assert_not_called()
        self.effects.send_welcome_verification.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_lost_race_conflicts(self):
        self.user_repo.add.side_effect = EmailAlreadyExistsError("alice@example.com")

        with pytest.raises(ConflictError):
            await self.service.register(TestUserFactory.registration_data())

    @pytest.mark.asyncio
    async def test_register_reports_every_invalid_field(self):
        data = TestUserFactory.registration_data(
            first_name="A",
            phone="12345",
            company_role="Chief",
        )

        with pytest.raises(ValidationError) as exc_info:
            await self.service.register(data)

        fields = {error["field"] for error in exc_info.value.errors}
        assert fields == {"first_name", "phone", "company_role"}
        self.user_repo.find_by_email.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_normalizes_email(self):
        result = await self.service.register(
            TestUserFactory.registration_data(email="  ALICE@Example.com "),
        )

        assert result.user.email == "alice@example.com"
        self.user_repo.find_by_email.assert_awaited_once_with("alice@example.com")


class TestAuthenticationServiceLogin:
    """Tests for login."""

    def setup_method(self):
        self.user_repo = AsyncMock()
        self.password_service = Mock(spec=PasswordHashingService)
        self.password_service.verify.return_value = True
        self.password_service.needs_rehash.return_value = False
        self.token_service = TokenService(secret_key=SECRET)
        self.effects = Mock(spec=AccountEffects)

        self.service = AuthenticationService(
            user_repository=self.user_repo,
            password_service=self.password_service,
            token_service=self.token_service,
            effects=self.effects,
        )

    @pytest.mark.asyncio
    async def test_login_success(self):
        user = TestUserFactory.verified_alice()
        self.user_repo.find_by_email.return_value = user

        result = await self.service.login("alice@example.com", "secret1", CONTEXT)

        assert result.user is user
        assert user.last_login_at is not None
        self.user_repo.save.assert_awaited_once_with(user)
        audit_args, audit_kwargs = self.effects.audit.call_args
        assert audit_args[1] == "user_login"
        assert audit_kwargs["metadata"]["role"] == "customer"

    @pytest.mark.asyncio
    async def test_unknown_email_gets_generic_error(self):
        self.user_repo.find_by_email.return_value = None

        with pytest.raises(AuthenticationError) as exc_info:
            await self.service.login("nobody@example.com", "secret1")

        assert exc_info.value.message == "Invalid email or password"
        assert exc_info.value.code is ErrorCode.INVALID_CREDENTIALS
        self.effects.audit.assert_not_called()
        self.effects.audit_failure.assert_not_called()

    @pytest.mark.asyncio
    async def test_wrong_password_gets_same_generic_error(self):
        self.user_repo.find_by_email.return_value = TestUserFactory.verified_alice()
        self.password_service.verify.return_value = False

        with pytest.raises(AuthenticationError) as exc_info:
            await self.service.login("alice@example.com", "wrong!", CONTEXT)

        assert exc_info.value.message == "Invalid email or password"
        assert exc_info.value.requires_verification is False
        self.effects.audit_failure.assert_called_once_with(
            1,
            "login_failed",
            "Invalid password",
            CONTEXT,
        )
        self.user_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_unverified_user_is_rejected(self):
        self.user_repo.find_by_email.return_value = TestUserFactory.alice()

        with pytest.raises(AuthenticationError) as exc_info:
            await self.service.login("alice@example.com", "secret1")

        assert exc_info.value.code is ErrorCode.EMAIL_NOT_VERIFIED
        assert exc_info.value.requires_verification is True
        self.password_service.verify.assert_not_called()

    @pytest.mark.asyncio
    async def test_super_admin_bypasses_verification(self):
        admin = TestUserFactory.super_admin(email_verified=False)
        self.user_repo.find_by_email.return_value = admin

        result = await self.service.login(admin.email, "secret1")

        assert result.user is admin

    @pytest.mark.asyncio
    async def test_deactivated_user_is_rejected(self):
        self.user_repo.find_by_email.return_value = TestUserFactory.verified_alice(
            is_active=False,
        )

        with pytest.raises(AuthenticationError) as exc_info:
            await self.service.login("alice@example.com", "secret1")

        assert exc_info.value.code is ErrorCode.ACCOUNT_DEACTIVATED
        assert self.effects.audit_failure.call_args[0][2] == "Account deactivated"

    @pytest.mark.asyncio
    async def test_outdated_hash_is_upgraded(self):
        user = TestUserFactory.verified_alice()
        self.user_repo.find_by_email.return_value = user
        self.password_service.needs_rehash.return_value = True
        self.password_service.hash.return_value = "rehashed"

        await self.service.login("alice@example.com", "secret1")

        assert user.password_hash == "rehashed"
        self.password_service.hash.assert_called_once_with("secret1")


class TestAuthenticationServiceSession:
    """Tests for authenticate and logout."""

    def setup_method(self):
        self.user_repo = AsyncMock()
        self.token_service = TokenService(secret_key=SECRET)
        self.effects = Mock(spec=AccountEffects)

        self.service = AuthenticationService(
            user_repository=self.user_repo,
            password_service=Mock(spec=PasswordHashingService),
            token_service=self.token_service,
            effects=self.effects,
        )

    @pytest.mark.asyncio
    async def test_authenticate_resolves_user(self):
        user = TestUserFactory.verified_alice()
        self.user_repo.find_by_id.return_value = user
        token = self.token_service.create_session_token(1).token

        assert await self.service.authenticate(token) is user
        self.user_repo.find_by_id.assert_awaited_once_with(1)

    @pytest.mark.asyncio
    async def test_expired_session(self):
        token = self.token_service.create_session_token(
            1,
            expires_delta=timedelta(seconds=-1),
        ).token

        with pytest.raises(AuthenticationError, match="Token expired") as exc_info:
            await self.service.authenticate(token)

        assert exc_info.value.code is ErrorCode.AUTHENTICATION_REQUIRED

    @pytest.mark.asyncio
    async def test_reset_token_is_not_a_session(self):
        token = self.token_service.create_reset_token(1).token

        with pytest.raises(AuthenticationError, match="Invalid token"):
            await self.service.authenticate(token)

        self.user_repo.find_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_deleted_user(self):
        self.user_repo.find_by_id.return_value = None
        token = self.token_service.create_session_token(1).token

        with pytest.raises(AuthenticationError, match="User not found"):
            await self.service.authenticate(token)

    @pytest.mark.asyncio
    async def test_deactivated_user(self):
        self.user_repo.find_by_id.return_value = TestUserFactory.alice(
            is_active=False,
        )
        token = self.token_service.create_session_token(1).token

        with pytest.raises(AuthenticationError) as exc_info:
            await self.service.authenticate(token)

        assert exc_info.value.code is ErrorCode.ACCOUNT_DEACTIVATED

    @pytest.mark.asyncio
    async def test_logout_is_audited(self):
        await self.service.logout(1, CONTEXT)

        self.effects.audit.assert_called_once_with(
            1,
            "user_logout",
            "User logged out",
            CONTEXT,
        )
