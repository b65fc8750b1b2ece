"""Initial schema for user groups, user states, and users."""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None

_ADMIN_GROUP_ID = 1


def upgrade() -> None:
    user_groups = op.create_table(
        "user_groups",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column("code", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.UniqueConstraint("code", name="uq_user_groups_code"),
        sa.CheckConstraint("code IN ('admin', 'user')", name="ck_user_groups_code"),
    )
    user_states = op.create_table(
        "user_states",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column("code", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.UniqueConstraint("code", name="uq_user_states_code"),
        sa.CheckConstraint("code IN ('active', 'blocked')", name="ck_user_states_code"),
    )

    op.bulk_insert(
        user_groups,
        [
            {"id": 1, "code": "admin", "description": "This is admin user group"},
            {"id": 2, "code": "user", "description": ""},
        ],
    )
    op.bulk_insert(
        user_states,
        [
            {"id": 1, "code": "active", "description": "Active user"},
            {"id": 2, "code": "blocked", "description": "Deleted user"},
        ],
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("login", sa.Text(), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column(
            "created_date",
            sa.Date(),
            nullable=False,
            server_default=sa.text("CURRENT_DATE"),
        ),
        sa.Column("group_id", sa.Integer(), sa.ForeignKey("user_groups.id"), nullable=False),
        sa.Column("state_id", sa.Integer(), sa.ForeignKey("user_states.id"), nullable=False),
        sa.UniqueConstraint("login", name="uq_users_login"),
    )
    op.create_index("ix_users_state_id", "users", ["state_id"], unique=False)
    op.create_index(
        "uq_users_single_admin",
        "users",
        ["group_id"],
        unique=True,
        sqlite_where=sa.text(f"group_id = {_ADMIN_GROUP_ID}"),
        postgresql_where=sa.text(f"group_id = {_ADMIN_GROUP_ID}"),
    )


def downgrade() -> None:
    op.drop_index("uq_users_single_admin", table_name="users")
    op.drop_index("ix_users_state_id", table_name="users")
    op.drop_table("users")
    op.drop_table("user_states")
    op.drop_table("user_groups")
