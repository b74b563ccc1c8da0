"""Account status values."""

from enum import IntEnum


class UserStatus(IntEnum):
    """Account status stored as a small integer.

    Disabled accounts keep their roles but cannot log in.
    """

    DISABLED = 0
    ENABLED = 1
