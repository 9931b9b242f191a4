"""SQLAlchemy ORM models for role tables.

Roles, their claims and the user/role link table. Nothing in the
application reads or writes these yet; they are mapped so the schema
is complete.
"""

from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from identity.infrastructure.models import table_names
from infrastructure.database.models import Base


class RoleModel(Base):
    """ORM model for the Roles table."""

    __tablename__ = table_names.ROLES
    __table_args__ = (Index("RoleNameIndex", "normalized_name", unique=True),)

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str | None] = mapped_column(String(256))
    normalized_name: Mapped[str | None] = mapped_column(String(256))
    concurrency_stamp: Mapped[str | None] = mapped_column(Text)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<RoleModel(id={self.id}, name={self.name})>"


class RoleClaimModel(Base):
    """ORM model for the RoleClaims table."""

    __tablename__ = table_names.ROLE_CLAIMS

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    role_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey(f"{table_names.ROLES}.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    claim_type: Mapped[str | None] = mapped_column(Text)
    claim_value: Mapped[str | None] = mapped_column(Text)


class UserRoleModel(Base):
    """ORM model for the UserRoles link table."""

    __tablename__ = table_names.USER_ROLES

    user_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey(f"{table_names.USERS}.id", ondelete="CASCADE"),
        primary_key=True,
    )
    role_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey(f"{table_names.ROLES}.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
