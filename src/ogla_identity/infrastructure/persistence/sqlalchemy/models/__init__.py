from ogla_identity.infrastructure.persistence.sqlalchemy.models.user_activity_model import (  # noqa: E501
    UserActivityModel,
)
from ogla_identity.infrastructure.persistence.sqlalchemy.models.user_model import (
    UserModel,
)

__all__ = ["UserActivityModel", "UserModel"]
