"""Deterministic transition guards for account states."""

from __future__ import annotations

from typing import Final

from user_directory.domain.accounts.account_state import AccountState


class InvalidAccountTransitionError(ValueError):
    """Raised when an attempted account state transition is not allowed."""


_ALLOWED_TRANSITIONS: Final[dict[AccountState, frozenset[AccountState]]] = {
    AccountState.ACTIVE: frozenset({AccountState.BLOCKED}),
    # Soft-delete is idempotent: re-blocking a blocked account is accepted.
    AccountState.BLOCKED: frozenset({AccountState.BLOCKED}),
}


def can_transition(from_state: AccountState, to_state: AccountState) -> bool:
    """Return whether the transition is valid for the account state machine."""

    return to_state in _ALLOWED_TRANSITIONS[from_state]


def assert_transition(from_state: AccountState, to_state: AccountState) -> None:
    """Assert a transition is allowed, else raise deterministic domain error."""

    if not can_transition(from_state, to_state):
        raise InvalidAccountTransitionError(
            f"Invalid account state transition: {from_state.value} -> {to_state.value}"
        )
