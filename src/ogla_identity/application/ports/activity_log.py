"""Activity log port.

The audit trail is append-only and best-effort: callers never wait on it
and never fail because of it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ogla.domain.shared.time import utc_now
from ogla_identity.application.context import RequestContext


@dataclass(frozen=True)
class ActivityEvent:
    """A single audit record."""

    user_id: int | None
    action: str
    details: str
    entity_type: str = "user"
    entity_id: int | None = None
    metadata: dict[str, Any] | None = None
    ip_address: str = "unknown"
    user_agent: str = "unknown"
    occurred_at: datetime = field(default_factory=utc_now)

    @classmethod
    def for_user(
        cls,
        user_id: int | None,
        action: str,
        details: str,
        context: RequestContext | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> ActivityEvent:
        context = context or RequestContext.empty()
        return cls(
            user_id=user_id,
            action=action,
            details=details,
            entity_id=user_id,
            metadata=metadata,
            ip_address=context.ip_address,
            user_agent=context.user_agent,
        )


class ActivityLog(ABC):
    """Append-only store of audit events."""

    @abstractmethod
    async def record(self, event: ActivityEvent) -> None:
        """Persist an audit event."""
