"""Authentication schemas and data structures.

These are simple data classes used for transferring token data
between components.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class TokenPurpose(str, Enum):
    """What a signed token may be used for."""

    SESSION = "session"
    EMAIL_VERIFICATION = "email_verification"
    PASSWORD_RESET = "password_reset"


@dataclass(frozen=True)
class IssuedToken:
    """A freshly signed token together with its expiry."""

    token: str
    expires_at: datetime


@dataclass(frozen=True)
class TokenPayload:
    """Decoded token payload.

    This represents the data extracted from a verified token.

    Attributes
    ----------
    user_id
        The id of the user the token was issued to
    purpose
        What the token may be used for
    exp
        Token expiration timestamp
    token_id
        Random per-token identifier (``jti`` claim)
    """

    user_id: int
    purpose: TokenPurpose
    exp: datetime
    token_id: str
