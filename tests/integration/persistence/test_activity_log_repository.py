"""Integration tests for the activity log with Testcontainers PostgreSQL."""

import pytest

from ogla_identity.application.context import RequestContext
from ogla_identity.application.ports import ActivityEvent
from ogla_identity.domain.user import User
from ogla_identity.infrastructure.persistence.sqlalchemy import (
    ActivityLogRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)
from tests.shared.fixtures.factories import FAKE_PASSWORD_HASH, TestUserFactory


@pytest.mark.integration
class TestActivityLogRepository:
    @pytest.mark.asyncio
    async def test_record_and_read_back(self, session_maker):
        async with session_maker() as session:
            user = await UserRepositorySQLAlchemy(session).add(
                User.register(
                    TestUserFactory.registration_data().validated(),
                    FAKE_PASSWORD_HASH,
                ),
            )
            await session.commit()

        log = ActivityLogRepositorySQLAlchemy(session_maker)
        context = RequestContext(ip_address="203.0.113.7", user_agent="pytest")
        await log.record(
            ActivityEvent.for_user(user.id, "user_registered", "New user", context),
        )
        await log.record(
            ActivityEvent.for_user(
                user.id,
                "profile_updated",
                "Profile",
                context,
                metadata={"updatedFields": ["phone"]},
            ),
        )

        events = await log.find_by_user(user.id)

        assert [e.action for e in events] == ["profile_updated", "user_registered"]
        assert events[0].metadata == {"updatedFields": ["phone"]}
        assert events[0].ip_address == "203.0.113.7"
        assert events[0].entity_type == "user"
        assert events[0].entity_id == user.id
