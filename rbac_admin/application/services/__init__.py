"""RBAC services: synchronizer, authorization gate and bootstrap."""

from rbac_admin.application.services.authorization_gate import AuthorizationGate
from rbac_admin.application.services.bootstrap import Bootstrapper, BootstrapError
from rbac_admin.application.services.policy_synchronizer import PolicySynchronizer

__all__ = [
    "AuthorizationGate",
    "BootstrapError",
    "Bootstrapper",
    "PolicySynchronizer",
]
