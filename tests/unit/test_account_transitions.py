from __future__ import annotations

import pytest

from user_directory.domain.accounts.account_state import AccountState
from user_directory.domain.accounts.transitions import (
    InvalidAccountTransitionError,
    assert_transition,
    can_transition,
)


@pytest.mark.parametrize(
    ("from_state", "to_state"),
    [
        (AccountState.ACTIVE, AccountState.BLOCKED),
        (AccountState.BLOCKED, AccountState.BLOCKED),
    ],
)
def test_allowed_transitions_pass(from_state: AccountState, to_state: AccountState) -> None:
    assert_transition(from_state, to_state)
    assert can_transition(from_state, to_state) is True


@pytest.mark.parametrize(
    ("from_state", "to_state"),
    [
        (AccountState.BLOCKED, AccountState.ACTIVE),
        (AccountState.ACTIVE, AccountState.ACTIVE),
    ],
)
def test_disallowed_transitions_raise(from_state: AccountState, to_state: AccountState) -> None:
    with pytest.raises(InvalidAccountTransitionError):
        assert_transition(from_state, to_state)


def test_state_enum_values_are_exact_active_and_blocked() -> None:
    assert {member.value for member in AccountState} == {"active", "blocked"}
