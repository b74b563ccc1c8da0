"""Policy engine failures (matcher evaluation, checkpoint writes)."""

from dataclasses import dataclass

from rbac_admin.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class PolicyEngineError(DomainError):
    """Policy engine failure.

    Attributes:
        operation: Engine operation that failed (enforce, add_policy, save, ...).
    """

    operation: str
