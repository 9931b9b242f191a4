"""create identity tables

Revision ID: 3c9a1f0e7b21
Revises:
Create Date: 2026-10-19

Creates the seven identity tables under their custom names: Users, Roles,
UserRoles, UserClaims, UserLogins, UserTokens and RoleClaims. Dependent
tables cascade on delete of their owning user or role.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c9a1f0e7b21"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create identity tables and their indexes."""
    op.create_table(
        "Users",
        sa.Column("id", sa.String(255), nullable=False),
        sa.Column("user_name", sa.String(256), nullable=True),
        sa.Column("normalized_user_name", sa.String(256), nullable=True),
        sa.Column("email", sa.String(256), nullable=True),
        sa.Column("normalized_email", sa.String(256), nullable=True),
        sa.Column("email_confirmed", sa.Boolean, nullable=False),
        sa.Column("password_hash", sa.Text, nullable=True),
        sa.Column("security_stamp", sa.Text, nullable=True),
        sa.Column("concurrency_stamp", sa.Text, nullable=True),
        sa.Column("phone_number", sa.Text, nullable=True),
        sa.Column("phone_number_confirmed", sa.Boolean, nullable=False),
        sa.Column("two_factor_enabled", sa.Boolean, nullable=False),
        sa.Column("lockout_end", sa.DateTime(timezone=True), nullable=True),
        sa.Column("lockout_enabled", sa.Boolean, nullable=False),
        sa.Column("access_failed_count", sa.Integer, nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_Users"),
    )
    op.create_index("UserNameIndex", "Users", ["normalized_user_name"], unique=True)
    op.create_index("EmailIndex", "Users", ["normalized_email"])

    op.create_table(
        "Roles",
        sa.Column("id", sa.String(255), nullable=False),
        sa.Column("name", sa.String(256), nullable=True),
        sa.Column("normalized_name", sa.String(256), nullable=True),
        sa.Column("concurrency_stamp", sa.Text, nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_Roles"),
    )
    op.create_index("RoleNameIndex", "Roles", ["normalized_name"], unique=True)

    op.create_table(
        "UserClaims",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("claim_type", sa.Text, nullable=True),
        sa.Column("claim_value", sa.Text, nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_UserClaims"),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["Users.id"],
            name="fk_UserClaims_user_id_Users",
            ondelete="CASCADE",
        ),
    )
    op.create_index("ix_UserClaims_user_id", "UserClaims", ["user_id"])

    op.create_table(
        "UserLogins",
        sa.Column("login_provider", sa.String(128), nullable=False),
        sa.Column("provider_key", sa.String(128), nullable=False),
        sa.Column("provider_display_name", sa.Text, nullable=True),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.PrimaryKeyConstraint(
            "login_provider", "provider_key", name="pk_UserLogins"
        ),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["Users.id"],
            name="fk_UserLogins_user_id_Users",
            ondelete="CASCADE",
        ),
    )
    op.create_index("ix_UserLogins_user_id", "UserLogins", ["user_id"])

    op.create_table(
        "UserTokens",
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("login_provider", sa.String(128), nullable=False),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("value", sa.Text, nullable=True),
        sa.PrimaryKeyConstraint(
            "user_id", "login_provider", "name", name="pk_UserTokens"
        ),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["Users.id"],
            name="fk_UserTokens_user_id_Users",
            ondelete="CASCADE",
        ),
    )

    op.create_table(
        "UserRoles",
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("role_id", sa.String(255), nullable=False),
        sa.PrimaryKeyConstraint("user_id", "role_id", name="pk_UserRoles"),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["Users.id"],
            name="fk_UserRoles_user_id_Users",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["role_id"],
            ["Roles.id"],
            name="fk_UserRoles_role_id_Roles",
            ondelete="CASCADE",
        ),
    )
    op.create_index("ix_UserRoles_role_id", "UserRoles", ["role_id"])

    op.create_table(
        "RoleClaims",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("role_id", sa.String(255), nullable=False),
        sa.Column("claim_type", sa.Text, nullable=True),
        sa.Column("claim_value", sa.Text, nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_RoleClaims"),
        sa.ForeignKeyConstraint(
            ["role_id"],
            ["Roles.id"],
            name="fk_RoleClaims_role_id_Roles",
            ondelete="CASCADE",
        ),
    )
    op.create_index("ix_RoleClaims_role_id", "RoleClaims", ["role_id"])


def downgrade() -> None:
    """Drop identity tables, dependents first."""
    op.drop_index("ix_RoleClaims_role_id", table_name="RoleClaims")
    op.drop_table("RoleClaims")
    op.drop_index("ix_UserRoles_role_id", table_name="UserRoles")
    op.drop_table("UserRoles")
    op.drop_table("UserTokens")
    op.drop_index("ix_UserLogins_user_id", table_name="UserLogins")
    op.drop_table("UserLogins")
    op.drop_index("ix_UserClaims_user_id", table_name="UserClaims")
    op.drop_table("UserClaims")
    op.drop_index("RoleNameIndex", table_name="Roles")
    op.drop_table("Roles")
    op.drop_index("EmailIndex", table_name="Users")
    op.drop_index("UserNameIndex", table_name="Users")
    op.drop_table("Users")
