"""Audit and notification side effects shared by the account services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ogla_identity.application.ports import ActivityEvent

if TYPE_CHECKING:
    from ogla_identity.application.context import RequestContext
    from ogla_identity.application.ports import ActivityLog
    from ogla_identity.application.side_effects import SideEffectQueue
    from ogla_identity.domain.user import User
    from ogla_identity.infrastructure.email import EmailService


class AccountEffects:
    """Queues audit events and account emails on a SideEffectQueue.

    Nothing here runs inline: the effects execute after the request's
    unit of work, and their failures are logged by the queue.
    """

    def __init__(
        self,
        side_effects: SideEffectQueue,
        activity_log: ActivityLog,
        email_service: EmailService,
    ):
        self._queue = side_effects
        self._activity_log = activity_log
        self._email_service = email_service

    def audit(  # noqa: PLR0913
        self,
        user_id: int | None,
        action: str,
        details: str,
        context: RequestContext | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Audit a change; dropped if the unit of work rolls back."""
        event = ActivityEvent.for_user(
            user_id=user_id,
            action=action,
            details=details,
            context=context,
            metadata=metadata,
        )
        self._queue.submit(f"audit:{action}", self._activity_log.record, event)

    def audit_failure(
        self,
        user_id: int | None,
        action: str,
        details: str,
        context: RequestContext | None = None,
    ) -> None:
        """Audit a rejected attempt; recorded even though the request fails."""
        event = ActivityEvent.for_user(
            user_id=user_id,
            action=action,
            details=details,
            context=context,
        )
        self._queue.submit_always(f"audit:{action}", self._activity_log.record, event)

    def send_welcome_verification(self, user: User, token: str) -> None:
        self._queue.submit_blocking(
            "email:welcome-verification",
            self._email_service.send_welcome_verification_email,
            to_email=user.email,
            first_name=user.first_name,
            company_name=user.company_name,
            token=token,
        )

    def send_verification(self, user: User, token: str) -> None:
        self._queue.submit_blocking(
            "email:email-verification",
            self._email_service.send_verification_email,
            to_email=user.email,
            first_name=user.first_name,
            token=token,
        )

    def send_password_reset(self, user: User, token: str) -> None:
        self._queue.submit_blocking(
            "email:password-reset",
            self._email_service.send_password_reset_email,
            to_email=user.email,
            first_name=user.first_name,
            token=token,
        )
