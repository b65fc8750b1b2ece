"""Pydantic models for user directory HTTP payloads."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from user_directory.application.ports.user_repository_port import UserAccount
from user_directory.domain.accounts.account_state import AccountState
from user_directory.domain.accounts.groups import Group


class StrictModel(BaseModel):
    """Base model with strict unknown-field rejection."""

    model_config = ConfigDict(extra="forbid")


class UserCreatePayload(StrictModel):
    """Account creation request body."""

    login: str = Field(min_length=1)
    password: str
    group: Group | None = None


class UserGroupResponse(StrictModel):
    id: int
    code: Group
    description: str


class UserStateResponse(StrictModel):
    id: int
    code: AccountState
    description: str


class UserResponse(StrictModel):
    """Outward account representation; never carries the credential."""

    id: int
    login: str
    created_date: date
    group: UserGroupResponse
    state: UserStateResponse

    @classmethod
    def from_account(cls, account: UserAccount) -> UserResponse:
        return cls(
            id=account.user_id,
            login=account.login,
            created_date=account.created_date,
            group=UserGroupResponse(
                id=account.group.group_id,
                code=account.group.code,
                description=account.group.description,
            ),
            state=UserStateResponse(
                id=account.state.state_id,
                code=account.state.code,
                description=account.state.description,
            ),
        )


class ErrorResponse(StrictModel):
    detail: str
