"""Role domain entity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Role:
    """Named grouping of permissions.

    ``name`` is the stable identifier the policy engine stores in both the
    policy and grouping relations; renaming a role requires a full resync.
    """

    name: str
    description: str = ""
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None
