from __future__ import annotations

from pathlib import Path

import pytest
import sqlalchemy as sa
from alembic.config import Config

from alembic import command


def _configure_alembic(database_url: str) -> Config:
    alembic_config = Config("alembic.ini")
    alembic_config.set_main_option("sqlalchemy.url", database_url)
    return alembic_config


def test_upgrade_creates_tables_and_seeds_reference_rows(tmp_path: Path) -> None:
    database_url = f"sqlite+pysqlite:///{tmp_path / 'schema.db'}"

    command.upgrade(_configure_alembic(database_url), "head")

    engine = sa.create_engine(database_url)
    inspector = sa.inspect(engine)
    assert {"users", "user_groups", "user_states"} <= set(inspector.get_table_names())

    unique_constraints = {item["name"] for item in inspector.get_unique_constraints("users")}
    assert "uq_users_login" in unique_constraints
    indexes = {item["name"]: item for item in inspector.get_indexes("users")}
    assert bool(indexes["uq_users_single_admin"]["unique"]) is True

    with engine.connect() as connection:
        groups = connection.execute(
            sa.text("SELECT id, code, description FROM user_groups ORDER BY id")
        ).all()
        states = connection.execute(
            sa.text("SELECT id, code, description FROM user_states ORDER BY id")
        ).all()

    assert [tuple(row) for row in groups] == [
        (1, "admin", "This is admin user group"),
        (2, "user", ""),
    ]
    assert [tuple(row) for row in states] == [
        (1, "active", "Active user"),
        (2, "blocked", "Deleted user"),
    ]


def test_partial_index_allows_many_users_but_one_admin(tmp_path: Path) -> None:
    database_url = f"sqlite+pysqlite:///{tmp_path / 'single_admin.db'}"
    command.upgrade(_configure_alembic(database_url), "head")

    engine = sa.create_engine(database_url)
    insert = sa.text(
        "INSERT INTO users (login, password_hash, group_id, state_id) "
        "VALUES (:login, 'hash', :group_id, 1)"
    )
    with engine.begin() as connection:
        connection.execute(insert, {"login": "root", "group_id": 1})
        connection.execute(insert, {"login": "first", "group_id": 2})
        connection.execute(insert, {"login": "second", "group_id": 2})

    with pytest.raises(sa.exc.IntegrityError):
        with engine.begin() as connection:
            connection.execute(insert, {"login": "root2", "group_id": 1})


def test_downgrade_drops_all_tables(tmp_path: Path) -> None:
    database_url = f"sqlite+pysqlite:///{tmp_path / 'downgrade.db'}"
    alembic_config = _configure_alembic(database_url)

    command.upgrade(alembic_config, "head")
    command.downgrade(alembic_config, "base")

    inspector = sa.inspect(sa.create_engine(database_url))
    assert not {"users", "user_groups", "user_states"} & set(inspector.get_table_names())
