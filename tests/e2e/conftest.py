"""Pytest configuration for end-to-end account journeys."""

# Re-export shared API fixtures
from tests.shared.fixtures.api import (
    activity_log,
    api_settings,
    api_v1_prefix,
    app,
    auth_headers,
    mail_outbox,
    registered_user,
    registration_payload,
    sqlite_session_maker,
    test_client,
    update_user_row,
    verification_token,
    verified_user,
)

__all__ = [
    "activity_log",
    "api_settings",
    "api_v1_prefix",
    "app",
    "auth_headers",
    "mail_outbox",
    "registered_user",
    "registration_payload",
    "sqlite_session_maker",
    "test_client",
    "update_user_row",
    "verification_token",
    "verified_user",
]
