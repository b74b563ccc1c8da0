"""Roles seeded on first start.

Role names are the identifiers used inside policy tuples, so the values
here are lowercase and stable.
"""

from enum import Enum


class DefaultRole(str, Enum):
    """Built-in roles created by bootstrap."""

    ADMIN = "admin"
    """Full access: bound to every permission in the catalogue."""

    USER = "user"
    """Default role of self-registered accounts: read-only user listing."""

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    DefaultRole.ADMIN: "超级管理员",
    DefaultRole.USER: "普通用户",
}
