"""Application service for user directory lifecycle operations."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from user_directory.application.ports.password_hasher_port import (
    MalformedCredentialError,
    PasswordHasherPort,
)
from user_directory.application.ports.user_repository_port import (
    DuplicateAdminError,
    DuplicateLoginError,
    UserAccount,
    UserAccountCreateInput,
    UserRepositoryPort,
)
from user_directory.domain.accounts.account_state import AccountState
from user_directory.domain.accounts.groups import Group
from user_directory.domain.accounts.transitions import assert_transition
from user_directory.domain.result import Err, Ok, Result

logger = logging.getLogger(__name__)


class BusinessErrorKind(StrEnum):
    """Expected, recoverable business-rule violations."""

    LOGIN_TAKEN = "login_taken"
    ADMIN_ALREADY_EXISTS = "admin_already_exists"


_BUSINESS_ERROR_MESSAGES: dict[BusinessErrorKind, str] = {
    BusinessErrorKind.LOGIN_TAKEN: "login is already taken",
    BusinessErrorKind.ADMIN_ALREADY_EXISTS: "admin has already been created and must be single",
}


@dataclass(frozen=True)
class BusinessError:
    """Structured business error reported to callers."""

    kind: BusinessErrorKind
    message: str

    @classmethod
    def of(cls, kind: BusinessErrorKind) -> BusinessError:
        return cls(kind=kind, message=_BUSINESS_ERROR_MESSAGES[kind])


class CredentialCheckOutcome(StrEnum):
    """Supported password verification outcomes."""

    VERIFIED = "verified"
    INVALID_CREDENTIALS = "invalid_credentials"
    MALFORMED_CREDENTIAL = "malformed_credential"


@dataclass(frozen=True)
class UserCandidate:
    """Caller-supplied data for one account creation."""

    login: str
    password: str
    group: Group | None = None


class UserDirectoryService:
    """Expose listing, lookup, creation and soft-deletion of user accounts."""

    def __init__(
        self,
        *,
        users: UserRepositoryPort,
        password_hasher: PasswordHasherPort,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._today = today

    async def list_active(self) -> list[UserAccount]:
        """Return every active account with group and state resolved."""

        return await self._users.list_by_state(state=AccountState.ACTIVE)

    async def get_active_by_login(self, *, login: str) -> UserAccount | None:
        """Return the active account with exactly this login, or None."""

        return await self._users.get_active_by_login(login=login)

    async def create(self, candidate: UserCandidate) -> Result[UserAccount, BusinessError]:
        """Create one account, enforcing single-admin and unique-login rules.

        The admin check runs before hashing so a rejected admin candidate costs
        neither a key derivation nor a write. Login uniqueness is left to the
        store's constraint; there is no separate existence pre-check.
        """

        wants_admin = candidate.group is Group.ADMIN
        if wants_admin and await self._users.admin_exists():
            logger.info("user_create_rejected login=%s reason=admin_exists", candidate.login)
            return Err(BusinessError.of(BusinessErrorKind.ADMIN_ALREADY_EXISTS))

        payload = UserAccountCreateInput(
            login=candidate.login,
            password_hash=self._password_hasher.hash_password(candidate.password),
            created_date=self._today(),
            group=Group.ADMIN if wants_admin else Group.USER,
            state=AccountState.ACTIVE,
        )
        try:
            created = await self._users.create_user(payload)
        except DuplicateLoginError:
            logger.info("user_create_rejected login=%s reason=login_taken", candidate.login)
            return Err(BusinessError.of(BusinessErrorKind.LOGIN_TAKEN))
        except DuplicateAdminError:
            logger.info(
                "user_create_rejected login=%s reason=admin_exists_concurrent",
                candidate.login,
            )
            return Err(BusinessError.of(BusinessErrorKind.ADMIN_ALREADY_EXISTS))

        logger.info(
            "user_created user_id=%s login=%s group=%s",
            created.user_id,
            created.login,
            created.group.code.value,
        )
        return Ok(created)

    async def soft_delete(self, *, login: str) -> bool:
        """Block the account with this login; False when no account matches."""

        target = await self._users.get_by_login(login=login)
        if target is None:
            return False

        assert_transition(target.state.code, AccountState.BLOCKED)
        blocked = await self._users.set_state(user_id=target.user_id, state=AccountState.BLOCKED)
        if blocked is None:  # pragma: no cover - row vanished between read and update.
            return False
        logger.info("user_blocked user_id=%s login=%s", blocked.user_id, blocked.login)
        return True

    async def verify_credentials(self, *, login: str, password: str) -> CredentialCheckOutcome:
        """Check a password against the stored credential of an active account."""

        user = await self._users.get_active_by_login(login=login)
        if user is None:
            return CredentialCheckOutcome.INVALID_CREDENTIALS

        try:
            verified = self._password_hasher.verify_password(
                password=password,
                password_hash=user.password_hash,
            )
        except MalformedCredentialError:
            logger.exception("credential_malformed user_id=%s login=%s", user.user_id, login)
            return CredentialCheckOutcome.MALFORMED_CREDENTIAL

        if not verified:
            return CredentialCheckOutcome.INVALID_CREDENTIALS
        return CredentialCheckOutcome.VERIFIED
