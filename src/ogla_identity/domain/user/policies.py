"""Account policies."""

from ogla_identity.domain.user.aggregates.user import User
from ogla_identity.domain.user.value_objects import UserRole


def can_bypass_email_verification(user: User) -> bool:
    """Return True if ``user`` may log in without a verified email.

    Only super admins qualify: they are provisioned out of band and may
    need access before any mail transport is configured.
    """
    return user.role is UserRole.SUPER_ADMIN
