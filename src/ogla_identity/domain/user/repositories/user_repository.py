"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Union

from ogla_identity.domain.user.aggregates.user import User
from ogla_identity.domain.user.value_objects.email import Email


class UserRepository(ABC):
    """Repository interface for User aggregates."""

    @abstractmethod
    async def find_by_id(self, user_id: int) -> Optional[User]:
        """Find a user by their ID."""

    @abstractmethod
    async def find_by_email(self, email: Union[str, Email]) -> Optional[User]:
        """Find a user by their email address."""

    @abstractmethod
    async def find_active_by_email(self, email: Union[str, Email]) -> Optional[User]:
        """Find a user by email, ignoring deactivated accounts."""

    @abstractmethod
    async def add(self, user: User) -> User:
        """Insert a new user and assign its generated ID.

        Raises
        ------
        EmailAlreadyExistsError
            If the email is already registered
        """

    @abstractmethod
    async def save(self, user: User) -> None:
        """Persist the current state of an existing user."""

    @abstractmethod
    async def save_if_verification_token_matches(
        self,
        user: User,
        token_hash: str,
    ) -> bool:
        """Persist ``user`` only if the stored verification digest is ``token_hash``.

        Returns False when another request consumed or replaced the token first.
        """

    @abstractmethod
    async def save_if_reset_token_matches(self, user: User, token_hash: str) -> bool:
        """Persist ``user`` only if the stored reset digest is ``token_hash``."""
