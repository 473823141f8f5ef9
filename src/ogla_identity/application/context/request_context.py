"""Request metadata attached to audit events."""

from __future__ import annotations

from dataclasses import dataclass

UNKNOWN = "unknown"


@dataclass(frozen=True)
class RequestContext:
    """Immutable client metadata for the current request."""

    ip_address: str = UNKNOWN
    user_agent: str = UNKNOWN

    @classmethod
    def from_values(
        cls,
        ip_address: str | None,
        user_agent: str | None,
    ) -> RequestContext:
        return cls(
            ip_address=ip_address or UNKNOWN,
            user_agent=user_agent or UNKNOWN,
        )

    @classmethod
    def empty(cls) -> RequestContext:
        return cls()
