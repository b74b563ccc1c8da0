"""Domain protocols (ports).

Infrastructure adapters satisfy these structurally; nothing inherits from
them.
"""

from rbac_admin.domain.protocols.logger_protocol import LoggerProtocol
from rbac_admin.domain.protocols.password_hashing_protocol import (
    PasswordHashingProtocol,
)
from rbac_admin.domain.protocols.permission_repository import PermissionRepository
from rbac_admin.domain.protocols.policy_engine_protocol import PolicyEngine
from rbac_admin.domain.protocols.role_repository import RoleRepository
from rbac_admin.domain.protocols.token_service_protocol import TokenServiceProtocol
from rbac_admin.domain.protocols.user_repository import UserRepository

__all__ = [
    "LoggerProtocol",
    "PasswordHashingProtocol",
    "PermissionRepository",
    "PolicyEngine",
    "RoleRepository",
    "TokenServiceProtocol",
    "UserRepository",
]
