"""SQLAlchemy ORM models for the identity context.

Importing this package registers every identity table on the shared
declarative metadata.
"""

from identity.infrastructure.models.role import (
    RoleClaimModel,
    RoleModel,
    UserRoleModel,
)
from identity.infrastructure.models.user import (
    UserClaimModel,
    UserLoginModel,
    UserModel,
    UserTokenModel,
)

__all__ = [
    "RoleClaimModel",
    "RoleModel",
    "UserClaimModel",
    "UserLoginModel",
    "UserModel",
    "UserRoleModel",
    "UserTokenModel",
]
