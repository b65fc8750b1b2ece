"""Port for user account persistence operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Protocol

from user_directory.domain.accounts.account_state import AccountState
from user_directory.domain.accounts.groups import Group


class DuplicateLoginError(ValueError):
    """Raised when the store rejects an insert on the unique login constraint."""


class DuplicateAdminError(ValueError):
    """Raised when the store rejects a second account in the admin group."""


@dataclass(frozen=True)
class UserGroup:
    """Group reference row."""

    group_id: int
    code: Group
    description: str


@dataclass(frozen=True)
class UserState:
    """State reference row."""

    state_id: int
    code: AccountState
    description: str


@dataclass(frozen=True)
class UserAccount:
    """User persistence model with group and state resolved."""

    user_id: int
    login: str
    password_hash: str
    created_date: date
    group: UserGroup
    state: UserState


@dataclass(frozen=True)
class UserAccountCreateInput:
    """Input payload for inserting one user row."""

    login: str
    password_hash: str
    created_date: date
    group: Group
    state: AccountState


class UserRepositoryPort(Protocol):
    """User repository contract."""

    async def create_user(self, payload: UserAccountCreateInput) -> UserAccount:
        """Insert one account atomically and return the persisted row.

        Raises `DuplicateLoginError` or `DuplicateAdminError` when a store
        constraint rejects the insert.
        """

    async def list_by_state(self, *, state: AccountState) -> list[UserAccount]:
        """Return accounts in the given state ordered by id."""

    async def get_by_login(self, *, login: str) -> UserAccount | None:
        """Return account by exact login, including blocked accounts."""

    async def get_active_by_login(self, *, login: str) -> UserAccount | None:
        """Return active account by exact login or None."""

    async def set_state(self, *, user_id: int, state: AccountState) -> UserAccount | None:
        """Update account state in place and return the updated row."""

    async def admin_exists(self) -> bool:
        """Return whether any account, in any state, belongs to the admin group."""
