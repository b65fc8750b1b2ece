"""User group enum for directory accounts."""

from __future__ import annotations

from enum import StrEnum


class Group(StrEnum):
    """Supported account groups; at most one account may hold `admin`."""

    ADMIN = "admin"
    USER = "user"
