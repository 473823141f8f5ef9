"""Ogla Auth - Generic authentication infrastructure.

This package provides authentication building blocks that are independent
of the user domain. It handles:
- Password hashing (bcrypt)
- Purpose-tagged signed token creation and verification (JWT)

Architecture:
    ogla_auth/
    ├── services/           # Pure logic (password hashing, tokens)
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions

Usage:
    from ogla_auth import PasswordHashingService, TokenService, TokenPurpose
"""

from ogla_auth.exceptions import (
    AuthError,
    InvalidTokenError,
    WeakPasswordError,
)
from ogla_auth.schemas import IssuedToken, TokenPayload, TokenPurpose
from ogla_auth.services import PasswordHashingService, TokenService

__all__ = [
    # Services
    "PasswordHashingService",
    "TokenService",
    # Schemas
    "IssuedToken",
    "TokenPayload",
    "TokenPurpose",
    # Exceptions
    "AuthError",
    "InvalidTokenError",
    "WeakPasswordError",
]
