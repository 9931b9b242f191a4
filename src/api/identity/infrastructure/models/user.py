"""SQLAlchemy ORM models for user-owned identity tables.

Users plus the per-user claims, external logins and tokens. Dependent rows
reference Users with ON DELETE CASCADE, so a hard delete of a user removes
them as well.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from identity.infrastructure.models import table_names
from infrastructure.database.models import Base


class UserModel(Base):
    """ORM model for the Users table.

    Note: normalized_email is indexed but not unique at the database level;
    email uniqueness is a configurable validation rule.
    """

    __tablename__ = table_names.USERS
    __table_args__ = (
        Index("UserNameIndex", "normalized_user_name", unique=True),
        Index("EmailIndex", "normalized_email"),
    )

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    user_name: Mapped[str | None] = mapped_column(String(256))
    normalized_user_name: Mapped[str | None] = mapped_column(String(256))
    email: Mapped[str | None] = mapped_column(String(256))
    normalized_email: Mapped[str | None] = mapped_column(String(256))
    email_confirmed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    password_hash: Mapped[str | None] = mapped_column(Text)
    security_stamp: Mapped[str | None] = mapped_column(Text)
    concurrency_stamp: Mapped[str | None] = mapped_column(Text)
    phone_number: Mapped[str | None] = mapped_column(Text)
    phone_number_confirmed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    two_factor_enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    lockout_end: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    lockout_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    access_failed_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<UserModel(id={self.id}, user_name={self.user_name})>"


class UserClaimModel(Base):
    """ORM model for the UserClaims table."""

    __tablename__ = table_names.USER_CLAIMS

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey(f"{table_names.USERS}.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    claim_type: Mapped[str | None] = mapped_column(Text)
    claim_value: Mapped[str | None] = mapped_column(Text)


class UserLoginModel(Base):
    """ORM model for the UserLogins table (external provider logins)."""

    __tablename__ = table_names.USER_LOGINS

    login_provider: Mapped[str] = mapped_column(String(128), primary_key=True)
    provider_key: Mapped[str] = mapped_column(String(128), primary_key=True)
    provider_display_name: Mapped[str | None] = mapped_column(Text)
    user_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey(f"{table_names.USERS}.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


class UserTokenModel(Base):
    """ORM model for the UserTokens table."""

    __tablename__ = table_names.USER_TOKENS

    user_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey(f"{table_names.USERS}.id", ondelete="CASCADE"),
        primary_key=True,
    )
    login_provider: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), primary_key=True)
    value: Mapped[str | None] = mapped_column(Text)
