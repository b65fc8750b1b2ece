"""SQLAlchemy adapter for user account persistence."""

from __future__ import annotations

from datetime import date
from typing import cast

import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from user_directory.application.ports.user_repository_port import (
    DuplicateAdminError,
    DuplicateLoginError,
    UserAccount,
    UserAccountCreateInput,
    UserGroup,
    UserRepositoryPort,
    UserState,
)
from user_directory.domain.accounts.account_state import AccountState
from user_directory.domain.accounts.groups import Group
from user_directory.infrastructure.db.metadata import user_groups, user_states, users


def _is_duplicate_login_error(error: IntegrityError) -> bool:
    message = str(error.orig).lower()
    return "unique constraint failed: users.login" in message or "uq_users_login" in message


def _is_duplicate_admin_error(error: IntegrityError) -> bool:
    message = str(error.orig).lower()
    return (
        "unique constraint failed: users.group_id" in message
        or "uq_users_single_admin" in message
    )


def _group_id_for(code: Group) -> sa.ScalarSelect[int]:
    return sa.select(user_groups.c.id).where(user_groups.c.code == code.value).scalar_subquery()


def _state_id_for(code: AccountState) -> sa.ScalarSelect[int]:
    return sa.select(user_states.c.id).where(user_states.c.code == code.value).scalar_subquery()


def _select_accounts() -> sa.Select[tuple[object, ...]]:
    return (
        sa.select(
            users.c.id,
            users.c.login,
            users.c.password_hash,
            users.c.created_date,
            user_groups.c.id.label("group_id"),
            user_groups.c.code.label("group_code"),
            user_groups.c.description.label("group_description"),
            user_states.c.id.label("state_id"),
            user_states.c.code.label("state_code"),
            user_states.c.description.label("state_description"),
        )
        .join(user_groups, users.c.group_id == user_groups.c.id)
        .join(user_states, users.c.state_id == user_states.c.id)
    )


class SqlAlchemyUserRepository(UserRepositoryPort):
    """User repository backed by SQLAlchemy async sessions."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def create_user(self, payload: UserAccountCreateInput) -> UserAccount:
        """Insert one account atomically and return the persisted row."""

        statement = (
            sa.insert(users)
            .values(
                login=payload.login,
                password_hash=payload.password_hash,
                created_date=payload.created_date,
                group_id=_group_id_for(payload.group),
                state_id=_state_id_for(payload.state),
            )
            .returning(users.c.id)
        )

        async with self._session_factory() as session:
            try:
                result = await session.execute(statement)
                await session.commit()
            except IntegrityError as error:
                await session.rollback()
                if _is_duplicate_login_error(error):
                    raise DuplicateLoginError(f"login already exists: {payload.login}") from error
                if _is_duplicate_admin_error(error):
                    raise DuplicateAdminError("admin account already exists") from error
                raise
            user_id = int(result.scalar_one())

            created = await self._fetch_one(session, users.c.id == user_id)

        if created is None:  # pragma: no cover - row was committed above.
            raise LookupError(f"inserted user not found: {user_id}")
        return created

    async def list_by_state(self, *, state: AccountState) -> list[UserAccount]:
        """Return accounts in the given state ordered by id."""

        statement = (
            _select_accounts()
            .where(user_states.c.code == state.value)
            .order_by(users.c.id.asc())
        )

        async with self._session_factory() as session:
            result = await session.execute(statement)

        return [_to_user_account(row) for row in result.mappings().all()]

    async def get_by_login(self, *, login: str) -> UserAccount | None:
        """Return account by exact login, including blocked accounts."""

        async with self._session_factory() as session:
            return await self._fetch_one(session, users.c.login == login)

    async def get_active_by_login(self, *, login: str) -> UserAccount | None:
        """Return active account by exact login or None."""

        async with self._session_factory() as session:
            return await self._fetch_one(
                session,
                sa.and_(
                    users.c.login == login,
                    user_states.c.code == AccountState.ACTIVE.value,
                ),
            )

    async def set_state(self, *, user_id: int, state: AccountState) -> UserAccount | None:
        """Update account state in place and return the updated row."""

        statement = (
            sa.update(users)
            .where(users.c.id == user_id)
            .values(state_id=_state_id_for(state))
        )

        async with self._session_factory() as session:
            result = await session.execute(statement)
            await session.commit()
            if result.rowcount == 0:
                return None
            return await self._fetch_one(session, users.c.id == user_id)

    async def admin_exists(self) -> bool:
        """Return whether any account, in any state, belongs to the admin group."""

        admin_rows = (
            sa.select(users.c.id)
            .join(user_groups, users.c.group_id == user_groups.c.id)
            .where(user_groups.c.code == Group.ADMIN.value)
        )
        statement = sa.select(admin_rows.exists())

        async with self._session_factory() as session:
            result = await session.execute(statement)

        return bool(result.scalar_one())

    async def _fetch_one(
        self,
        session: AsyncSession,
        condition: sa.ColumnElement[bool],
    ) -> UserAccount | None:
        result = await session.execute(_select_accounts().where(condition).limit(1))
        row = result.mappings().first()
        if row is None:
            return None
        return _to_user_account(row)


def _to_user_account(row: sa.RowMapping) -> UserAccount:
    return UserAccount(
        user_id=int(row["id"]),
        login=cast(str, row["login"]),
        password_hash=cast(str, row["password_hash"]),
        created_date=cast(date, row["created_date"]),
        group=UserGroup(
            group_id=int(row["group_id"]),
            code=Group(cast(str, row["group_code"])),
            description=cast(str, row["group_description"]),
        ),
        state=UserState(
            state_id=int(row["state_id"]),
            code=AccountState(cast(str, row["state_code"])),
            description=cast(str, row["state_description"]),
        ),
    )
