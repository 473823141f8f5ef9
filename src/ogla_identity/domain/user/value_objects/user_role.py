from enum import Enum


class UserRole(str, Enum):
    """User roles, lowest privilege first."""

    CUSTOMER = "customer"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"
