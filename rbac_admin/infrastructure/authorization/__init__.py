"""Policy engine adapters (casbin) and path matching."""

from rbac_admin.infrastructure.authorization.key_match import key_match
from rbac_admin.infrastructure.authorization.policy_engine import (
    CasbinPolicyEngine,
    PolicyModelNotFoundError,
    build_enforcer,
)

__all__ = [
    "CasbinPolicyEngine",
    "PolicyModelNotFoundError",
    "build_enforcer",
    "key_match",
]
