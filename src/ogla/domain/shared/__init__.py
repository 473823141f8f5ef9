"""Shared kernel used by all bounded contexts."""

from ogla.domain.shared.exceptions import DomainException, ErrorCode
from ogla.domain.shared.time import ensure_tz_aware, utc_now

__all__ = [
    "DomainException",
    "ErrorCode",
    "ensure_tz_aware",
    "utc_now",
]
