"""Signed token service.

Provides creation and verification of purpose-tagged JWTs used for
sessions, email verification and password reset.
"""

import hashlib
import secrets
from datetime import datetime, timedelta, timezone

import jwt

from ogla_auth.exceptions import InvalidTokenError
from ogla_auth.schemas import IssuedToken, TokenPayload, TokenPurpose


class TokenService:
    """Service for signed, time-limited token creation and verification.

    Every token carries the subject (user id), a purpose tag and a random
    ``jti`` so that two tokens issued within the same second never collide.

    Examples
    --------
    >>> service = TokenService(secret_key="your-secret-key")
    >>> issued = service.create_session_token(42)
    >>> payload = service.verify_token(issued.token, TokenPurpose.SESSION)
    >>> print(payload.user_id)
    42
    """

    DEFAULT_SESSION_EXPIRE_DAYS = 7
    DEFAULT_VERIFICATION_EXPIRE_HOURS = 24
    DEFAULT_RESET_EXPIRE_HOURS = 1
    ALGORITHM = "HS256"

    def __init__(
        self,
        secret_key: str,
        session_token_expire_days: int = DEFAULT_SESSION_EXPIRE_DAYS,
        verification_token_expire_hours: int = DEFAULT_VERIFICATION_EXPIRE_HOURS,
        reset_token_expire_hours: int = DEFAULT_RESET_EXPIRE_HOURS,
    ):
        """Initialize the token service.

        Parameters
        ----------
        secret_key
            Secret key for signing tokens. Must be kept secure.
        session_token_expire_days
            Days until a session token expires (default 7)
        verification_token_expire_hours
            Hours until an email verification token expires (default 24)
        reset_token_expire_hours
            Hours until a password reset token expires (default 1)
        """
        if not secret_key:
            msg = "Token secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._lifetimes = {
            TokenPurpose.SESSION: timedelta(days=session_token_expire_days),
            TokenPurpose.EMAIL_VERIFICATION: timedelta(
                hours=verification_token_expire_hours,
            ),
            TokenPurpose.PASSWORD_RESET: timedelta(hours=reset_token_expire_hours),
        }

    def create_session_token(
        self,
        user_id: int,
        expires_delta: timedelta | None = None,
    ) -> IssuedToken:
        """Create a session token proving identity for later calls."""
        return self.create_token(user_id, TokenPurpose.SESSION, expires_delta)

    def create_verification_token(
        self,
        user_id: int,
        expires_delta: timedelta | None = None,
    ) -> IssuedToken:
        """Create a single-purpose email verification token."""
        return self.create_token(
            user_id,
            TokenPurpose.EMAIL_VERIFICATION,
            expires_delta,
        )

    def create_reset_token(
        self,
        user_id: int,
        expires_delta: timedelta | None = None,
    ) -> IssuedToken:
        """Create a single-purpose password reset token."""
        return self.create_token(user_id, TokenPurpose.PASSWORD_RESET, expires_delta)

    def create_token(
        self,
        user_id: int,
        purpose: TokenPurpose,
        expires_delta: timedelta | None = None,
    ) -> IssuedToken:
        """Create a signed token for the given purpose.

        Parameters
        ----------
        user_id
            The user's identifier
        purpose
            What the token may be used for
        expires_delta
            Custom expiration time (optional, defaults to the purpose lifetime)

        Returns
        -------
        The encoded token and its expiry
        """
        now = datetime.now(tz=timezone.utc)
        expire = now + (expires_delta or self._lifetimes[purpose])

        payload = {
            "sub": str(user_id),
            "purpose": purpose.value,
            "jti": secrets.token_urlsafe(16),
            "iat": now,
            "exp": expire,
        }

        token = jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)
        return IssuedToken(token=token, expires_at=expire)

    def verify_token(self, token: str, purpose: TokenPurpose) -> TokenPayload:
        """Verify and decode a token issued for ``purpose``.

        Parameters
        ----------
        token
            The token string to verify
        purpose
            The purpose the caller expects

        Returns
        -------
        TokenPayload containing the decoded data

        Raises
        ------
        InvalidTokenError
            If token is invalid, expired, malformed or issued for
            another purpose
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={"require": ["sub", "exp", "purpose"]},
            )

            decoded = TokenPayload(
                user_id=int(payload["sub"]),
                purpose=TokenPurpose(payload["purpose"]),
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                token_id=payload.get("jti", ""),
            )

        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired", expired=True) from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e
        except (KeyError, ValueError, TypeError) as e:
            raise InvalidTokenError(f"Malformed token payload: {e}") from e

        if decoded.purpose is not purpose:
            msg = f"Expected a {purpose.value} token, got {decoded.purpose.value}"
            raise InvalidTokenError(msg)

        return decoded

    @staticmethod
    def fingerprint(token: str) -> str:
        """Return the SHA-256 digest under which a token is stored."""
        return hashlib.sha256(token.encode()).hexdigest()
