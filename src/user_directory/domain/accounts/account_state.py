"""Account lifecycle state enum."""

from __future__ import annotations

from enum import StrEnum


class AccountState(StrEnum):
    """Lifecycle states; only `active` accounts are visible to lookups."""

    ACTIVE = "active"
    BLOCKED = "blocked"
