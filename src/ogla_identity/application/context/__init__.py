"""Request-scoped context objects."""

from ogla_identity.application.context.request_context import RequestContext

__all__ = ["RequestContext"]
