"""Authorization gate input and output.

The gate is framework-free: the HTTP adapter builds a RequestContext from
the verified token and the raw request line, and renders the Decision.
"""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True, kw_only=True)
class RequestContext:
    """Minimal request description.

    Attributes:
        username: Subject from the verified token (None or empty if absent).
        path: Absolute request path exactly as received.
        method: Uppercase HTTP verb.
    """

    username: str | None
    path: str
    method: str


class DenyReason(Enum):
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    ENGINE_ERROR = "engine_error"
    STORAGE_ERROR = "storage_error"


@dataclass(frozen=True, slots=True, kw_only=True)
class Decision:
    """Outcome of an authorization check."""

    allowed: bool
    reason: DenyReason | None = None
    matched_role: str | None = None

    @classmethod
    def allow(cls, role: str) -> "Decision":
        return cls(allowed=True, matched_role=role)

    @classmethod
    def deny(cls, reason: DenyReason) -> "Decision":
        return cls(allowed=False, reason=reason)
