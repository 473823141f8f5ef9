"""Ports consumed by the identity application services."""

from ogla_identity.application.ports.activity_log import ActivityEvent, ActivityLog

__all__ = ["ActivityEvent", "ActivityLog"]
