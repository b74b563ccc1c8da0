"""Permission domain entity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Permission:
    """A (resource pattern, action) pair.

    Attributes:
        resource: Path pattern; may contain ``:name`` segments and a
            trailing ``*``.
        action: Uppercase HTTP method.
        description: Human-readable label.
    """

    resource: str
    action: str
    description: str = ""
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
