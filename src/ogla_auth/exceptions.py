"""Authentication exceptions.

These exceptions are raised by the ogla_auth package and should be
caught and handled by the application layer (the ogla_identity services).
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidTokenError(AuthError):
    """Raised when a signed token is invalid, expired, or malformed."""

    def __init__(self, message: str = "Invalid or expired token", expired: bool = False):
        self.expired = expired
        super().__init__(message)


class WeakPasswordError(AuthError):
    """Raised when a password doesn't meet strength requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)
