"""End-to-end account journeys through the public API."""

import asyncio

from fastapi.testclient import TestClient

from ogla_auth import PasswordHashingService
from ogla_identity.application.services import provision_super_admin
from ogla_identity.infrastructure.persistence.sqlalchemy import (
    UserRepositorySQLAlchemy,
)
from tests.shared.fixtures.factories import TestUserFactory


def _post(client: TestClient, prefix: str, path: str, body: dict, **kwargs):
    return client.post(f"{prefix}/auth/{path}", json=body, **kwargs)


class TestNewCustomerJourney:
    def test_register_verify_login(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        mail_outbox,
        activity_log,
    ):
        """Alice registers, is turned away until she verifies, then logs in."""
        registered = _post(
            test_client,
            api_v1_prefix,
            "register",
            TestUserFactory.registration_payload(),
        )
        assert registered.status_code == 201
        user_id = registered.json()["data"]["user"]["id"]

        credentials = {"email": "alice@example.com", "password": "secret1"}
        rejected = _post(test_client, api_v1_prefix, "login", credentials)
        assert rejected.status_code == 401
        assert rejected.json()["requiresVerification"] is True

        token = mail_outbox.send_welcome_verification_email.call_args.kwargs["token"]
        verified = _post(test_client, api_v1_prefix, "verify-email", {"token": token})
        assert verified.status_code == 200

        accepted = _post(test_client, api_v1_prefix, "login", credentials)
        assert accepted.status_code == 200
        assert accepted.json()["data"]["user"]["emailVerified"] is True

        actions = [event.action for event in reversed(activity_log(user_id))]
        assert actions == [
            "user_registered",
            "login_failed",
            "email_verified",
            "user_login",
        ]

    def test_forgotten_password_twice(
        self,
        test_client: TestClient,
        registered_user: dict,
        api_v1_prefix: str,
        mail_outbox,
    ):
        """Only the newest reset link works, and using it verifies the email."""
        for _ in range(2):
            response = _post(
                test_client,
                api_v1_prefix,
                "forgot-password",
                {"email": "alice@example.com"},
            )
            assert response.status_code == 200

        first_call, second_call = mail_outbox.send_password_reset_email.call_args_list
        first_token = first_call.kwargs["token"]
        second_token = second_call.kwargs["token"]
        assert first_token != second_token

        stale = _post(
            test_client,
            api_v1_prefix,
            "reset-password",
            {"token": first_token, "newPassword": "n3w-secret"},
        )
        assert stale.status_code == 400
        assert stale.json()["code"] == "INVALID_TOKEN"

        fresh = _post(
            test_client,
            api_v1_prefix,
            "reset-password",
            {"token": second_token, "newPassword": "n3w-secret"},
        )
        assert fresh.status_code == 200

        login = _post(
            test_client,
            api_v1_prefix,
            "login",
            {"email": "alice@example.com", "password": "n3w-secret"},
        )
        assert login.status_code == 200
        assert login.json()["data"]["user"]["emailVerified"] is True

    def test_profile_maintenance(
        self,
        test_client: TestClient,
        auth_headers: dict,
        api_v1_prefix: str,
    ):
        """A verified customer edits the profile and rotates the password."""
        updated = test_client.put(
            f"{api_v1_prefix}/auth/profile",
            headers=auth_headers,
            json={"companyType": "Export/Import", "phone": "+233501234567"},
        )
        assert updated.status_code == 200

        changed = test_client.put(
            f"{api_v1_prefix}/auth/change-password",
            headers=auth_headers,
            json={"currentPassword": "secret1", "newPassword": "secret2"},
        )
        assert changed.status_code == 200

        # Session tokens survive a password change
        profile = test_client.get(f"{api_v1_prefix}/auth/profile", headers=auth_headers)
        assert profile.status_code == 200
        assert profile.json()["data"]["companyType"] == "Export/Import"
        assert profile.json()["data"]["phone"] == "+233501234567"


class TestSuperAdminJourney:
    def test_provisioned_admin_logs_in_without_verification(
        self,
        test_client: TestClient,
        sqlite_session_maker,
        update_user_row,
        api_v1_prefix: str,
    ):
        async def _provision():
            async with sqlite_session_maker() as session:
                user = await provision_super_admin(
                    UserRepositorySQLAlchemy(session),
                    PasswordHashingService(rounds=4),
                    TestUserFactory.registration_data(
                        email=TestUserFactory.ADMIN_EMAIL,
                        password="admin-pass",
                    ),
                )
                await session.commit()
                return user

        loop = asyncio.new_event_loop()
        try:
            loop.run_until_complete(_provision())
        finally:
            loop.close()
        update_user_row(TestUserFactory.ADMIN_EMAIL, email_verified=False)

        response = _post(
            test_client,
            api_v1_prefix,
            "login",
            {"email": TestUserFactory.ADMIN_EMAIL, "password": "admin-pass"},
        )

        assert response.status_code == 200
        assert response.json()["data"]["user"]["role"] == "super_admin"
