from ogla_identity.infrastructure.persistence.sqlalchemy.repositories.activity_log_repository import (  # noqa: E501
    ActivityLogRepositorySQLAlchemy,
)
from ogla_identity.infrastructure.persistence.sqlalchemy.repositories.user_repository import (  # noqa: E501
    UserRepositorySQLAlchemy,
)

__all__ = ["ActivityLogRepositorySQLAlchemy", "UserRepositorySQLAlchemy"]
