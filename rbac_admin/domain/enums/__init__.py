"""Domain enums.

Usage:
    from rbac_admin.domain.enums import DefaultRole, HttpMethod, UserStatus
"""

from rbac_admin.domain.enums.default_role import DefaultRole
from rbac_admin.domain.enums.http_method import HttpMethod
from rbac_admin.domain.enums.user_status import UserStatus

__all__ = ["DefaultRole", "HttpMethod", "UserStatus"]
