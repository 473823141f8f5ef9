"""User domain exceptions.

Custom exceptions for the user domain, used for validation
and business rule violations.
"""


class InvalidEmailError(ValueError):
    """Raised when email format is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class InvalidFieldError(ValueError):
    """Raised when a single user field fails validation."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class InvalidProfileError(ValueError):
    """Raised with every field violation found in one submission."""

    def __init__(self, errors: list[InvalidFieldError]) -> None:
        self.errors = errors
        fields = ", ".join(e.field for e in errors)
        super().__init__(f"Invalid fields: {fields}")


class EmailAlreadyExistsError(Exception):
    """Email already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Email already registered: {email}")
