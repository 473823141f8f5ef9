"""SQLAlchemy implementation of UserRepository."""

import logging
from typing import Any, Union

from sqlalchemy import ColumnElement, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ogla_identity.domain.user import (
    Email,
    EmailAlreadyExistsError,
    User,
    UserRepository,
)
from ogla_identity.exceptions import InternalError
from ogla_identity.infrastructure.persistence.sqlalchemy.models import UserModel

logger = logging.getLogger(__name__)


def _normalize_email(email: Union[str, Email]) -> str:
    # Lookups never validate: a malformed address simply matches nothing
    return email.value if isinstance(email, Email) else email.strip().lower()


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, user_id: int) -> User | None:
        model = await self._find_model_by_id(user_id)
        if model is None:
            return None
        return self._map_to_domain(model)

    async def find_by_email(self, email: Union[str, Email]) -> User | None:
        stmt = select(UserModel).where(UserModel.email == _normalize_email(email))
        return await self._find_one(stmt)

    async def find_active_by_email(self, email: Union[str, Email]) -> User | None:
        stmt = select(UserModel).where(
            UserModel.email == _normalize_email(email),
            UserModel.is_active.is_(True),
        )
        return await self._find_one(stmt)

    async def add(self, user: User) -> User:
        model = self._map_to_model(user)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            if "UNIQUE constraint failed" in str(e) or "unique" in str(e).lower():
                raise EmailAlreadyExistsError(user.email) from e
            raise

        user.assign_id(model.id)
        logger.info("Created user: %s (email: %s)", user.id, user.email)
        return user

    async def save(self, user: User) -> None:
        model = await self._find_model_by_id(user.id)
        if model is None:
            raise InternalError(
                "User could not be saved",
                details={"user_id": user.id},
            )

        self._update_model(model, user)
        await self._session.flush()
        logger.debug("Updated user: %s", user.id)

    async def save_if_verification_token_matches(
        self,
        user: User,
        token_hash: str,
    ) -> bool:
        return await self._save_where(
            user,
            UserModel.email_verification_token == token_hash,
        )

    async def save_if_reset_token_matches(self, user: User, token_hash: str) -> bool:
        return await self._save_where(
            user,
            UserModel.reset_password_token == token_hash,
        )

    async def _save_where(self, user: User, condition: ColumnElement[bool]) -> bool:
        """Write the user's state in a single UPDATE guarded by ``condition``.

        Returns False when no row matched, meaning a concurrent request
        changed the guarded column first.
        """
        stmt = (
            update(UserModel)
            .where(UserModel.id == user.id, condition)
            .values(**self._column_values(user))
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def _find_one(self, stmt) -> User | None:
        result = await self._session.execute(
            stmt.execution_options(populate_existing=True),
        )
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return self._map_to_domain(model)

    async def _find_model_by_id(self, user_id: int | None) -> UserModel | None:
        if user_id is None:
            return None
        stmt = (
            select(UserModel)
            .where(UserModel.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            email=model.email,
            password_hash=model.password_hash,
            first_name=model.first_name,
            last_name=model.last_name,
            phone=model.phone,
            company_name=model.company_name,
            company_type=model.company_type,
            company_role=model.company_role,
            address=model.address,
            role=model.role,
            email_verified=model.email_verified,
            email_verification_token=model.email_verification_token,
            email_verification_expires=model.email_verification_expires,
            reset_password_token=model.reset_password_token,
            reset_password_expires=model.reset_password_expires,
            is_active=model.is_active,
            last_login_at=model.last_login_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _map_to_model(self, user: User) -> UserModel:
        return UserModel(
            id=user.id,
            created_at=user.created_at,
            **self._column_values(user),
        )

    def _update_model(self, model: UserModel, user: User) -> None:
        for column, value in self._column_values(user).items():
            setattr(model, column, value)

    @staticmethod
    def _column_values(user: User) -> dict[str, Any]:
        return {
            "email": user.email,
            "password_hash": user.password_hash,
            "first_name": user.first_name,
            "last_name": user.last_name,
            "phone": user.phone,
            "company_name": user.company_name,
            "company_type": user.company_type.value,
            "company_role": user.company_role.value,
            "address": user.address,
            "role": user.role.value,
            "email_verified": user.email_verified,
            "email_verification_token": user.email_verification_token,
            "email_verification_expires": user.email_verification_expires,
            "reset_password_token": user.reset_password_token,
            "reset_password_expires": user.reset_password_expires,
            "is_active": user.is_active,
            "last_login_at": user.last_login_at,
            "updated_at": user.updated_at,
        }
