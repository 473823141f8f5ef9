"""SQLAlchemy persistence for the identity domain."""

from ogla_identity.infrastructure.persistence.sqlalchemy.base import Base
from ogla_identity.infrastructure.persistence.sqlalchemy.models import (
    UserActivityModel,
    UserModel,
)
from ogla_identity.infrastructure.persistence.sqlalchemy.repositories import (
    ActivityLogRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)

__all__ = [
    "ActivityLogRepositorySQLAlchemy",
    "Base",
    "UserActivityModel",
    "UserModel",
    "UserRepositorySQLAlchemy",
]
