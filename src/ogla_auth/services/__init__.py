"""Authentication services.

Provides password hashing and signed token management.
"""

from ogla_auth.services.password_service import PasswordHashingService
from ogla_auth.services.token_service import TokenService

__all__ = [
    "PasswordHashingService",
    "TokenService",
]
