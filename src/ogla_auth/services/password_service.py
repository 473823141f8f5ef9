"""bcrypt hashing for account passwords."""

import bcrypt

from ogla_auth.exceptions import WeakPasswordError

DEFAULT_ROUNDS = 12
MIN_PASSWORD_LENGTH = 6
# bcrypt ignores everything past the first 72 bytes
MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")


class PasswordHashingService:
    """Hashes and checks account passwords.

    The cost factor comes from ``BCRYPT_ROUNDS``. Hashes made with a
    different cost are reported by ``needs_rehash`` so that a successful
    login can upgrade them.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self._rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a new password.

        Raises
        ------
        WeakPasswordError
            If the password is empty, shorter than six characters or
            longer than bcrypt can hash
        """
        self.validate_strength(password)
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("ascii")

    def verify(self, password: str, password_hash: str) -> bool:
        """Compare ``password`` with a stored hash in constant time.

        A stored value that is not a bcrypt hash never matches.
        """
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("ascii"))
        except (ValueError, TypeError):
            return False

    def validate_strength(self, password: str) -> None:
        if not password:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)

        if len(password) < MIN_PASSWORD_LENGTH:
            msg = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            raise WeakPasswordError(msg)

        if len(_encode(password)) > MAX_PASSWORD_BYTES:
            msg = f"Password cannot exceed {MAX_PASSWORD_BYTES} bytes"
            raise WeakPasswordError(msg)

    def needs_rehash(self, password_hash: str) -> bool:
        """Whether the hash was made with another cost factor."""
        # $2b$<cost>$<salt and digest>
        parts = password_hash.split("$")
        if len(parts) < 4 or not parts[2].isdigit():
            return True
        return int(parts[2]) != self._rounds
