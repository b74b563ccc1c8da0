"""Policy tuples exchanged between the identity store and the engine."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class PolicyRule:
    """One element of P: ``role`` may perform ``action`` on ``resource``."""

    role: str
    resource: str
    action: str

    def as_list(self) -> list[str]:
        return [self.role, self.resource, self.action]

    def __str__(self) -> str:
        return f"{self.role},{self.resource},{self.action}"


@dataclass(frozen=True, slots=True)
class GroupingRule:
    """One element of G: ``username`` holds ``role``."""

    username: str
    role: str

    def as_list(self) -> list[str]:
        return [self.username, self.role]


class GrantOutcome(Enum):
    CREATED = "created"
    ALREADY_EXISTS = "already_exists"


class RevokeOutcome(Enum):
    REMOVED = "removed"
    NOT_FOUND = "not_found"
