"""SQLAlchemy implementation of the ActivityLog port."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ogla_identity.application.ports import ActivityEvent, ActivityLog
from ogla_identity.infrastructure.persistence.sqlalchemy.models import (
    UserActivityModel,
)

logger = logging.getLogger(__name__)

USER_AGENT_MAX_LENGTH = 500


class ActivityLogRepositorySQLAlchemy(ActivityLog):
    """Writes audit events through a session of its own.

    Events are recorded after the request's unit of work has finished, so
    they cannot share the request session.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker

    async def record(self, event: ActivityEvent) -> None:
        async with self._session_maker() as session:
            session.add(
                UserActivityModel(
                    user_id=event.user_id,
                    action=event.action,
                    entity_type=event.entity_type,
                    entity_id=event.entity_id,
                    details=event.details,
                    activity_metadata=event.metadata,
                    ip_address=event.ip_address,
                    user_agent=event.user_agent[:USER_AGENT_MAX_LENGTH],
                    created_at=event.occurred_at,
                ),
            )
            await session.commit()

        logger.debug(
            "Activity logged: action=%s, user_id=%s, ip=%s",
            event.action,
            event.user_id,
            event.ip_address,
        )

    async def find_by_user(self, user_id: int, limit: int = 50) -> list[ActivityEvent]:
        """Return the most recent events of a user, newest first."""
        stmt = (
            select(UserActivityModel)
            .where(UserActivityModel.user_id == user_id)
            .order_by(UserActivityModel.created_at.desc(), UserActivityModel.id.desc())
            .limit(limit)
        )
        async with self._session_maker() as session:
            result = await session.execute(stmt)
            models = result.scalars().all()

        return [self._map_to_domain(model) for model in models]

    def _map_to_domain(self, model: UserActivityModel) -> ActivityEvent:
        return ActivityEvent(
            user_id=model.user_id,
            action=model.action,
            details=model.details or "",
            entity_type=model.entity_type,
            entity_id=model.entity_id,
            metadata=model.activity_metadata,
            ip_address=model.ip_address or "unknown",
            user_agent=model.user_agent or "unknown",
            occurred_at=model.created_at,
        )
