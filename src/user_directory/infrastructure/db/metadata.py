"""SQLAlchemy metadata definitions for user directory tables."""

from __future__ import annotations

import sqlalchemy as sa

metadata = sa.MetaData()

ADMIN_GROUP_ID = 1
USER_GROUP_ID = 2
ACTIVE_STATE_ID = 1
BLOCKED_STATE_ID = 2

user_groups = sa.Table(
    "user_groups",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True, autoincrement=False),
    sa.Column("code", sa.Text(), nullable=False),
    sa.Column("description", sa.Text(), nullable=False, server_default=sa.text("''")),
    sa.UniqueConstraint("code", name="uq_user_groups_code"),
    sa.CheckConstraint("code IN ('admin', 'user')", name="ck_user_groups_code"),
)

user_states = sa.Table(
    "user_states",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True, autoincrement=False),
    sa.Column("code", sa.Text(), nullable=False),
    sa.Column("description", sa.Text(), nullable=False, server_default=sa.text("''")),
    sa.UniqueConstraint("code", name="uq_user_states_code"),
    sa.CheckConstraint("code IN ('active', 'blocked')", name="ck_user_states_code"),
)

users = sa.Table(
    "users",
    metadata,
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

sa.Index("ix_users_state_id", users.c.state_id)
sa.Index(
    "uq_users_single_admin",
    users.c.group_id,
    unique=True,
    sqlite_where=users.c.group_id == ADMIN_GROUP_ID,
    postgresql_where=users.c.group_id == ADMIN_GROUP_ID,
)
