"""Domain value objects.

Usage:
    from rbac_admin.domain.value_objects import Decision, PolicyRule, RequestContext
"""

from rbac_admin.domain.value_objects.authorization import (
    Decision,
    DenyReason,
    RequestContext,
)
from rbac_admin.domain.value_objects.page import Page
from rbac_admin.domain.value_objects.policy import (
    GrantOutcome,
    GroupingRule,
    PolicyRule,
    RevokeOutcome,
)

__all__ = [
    "Decision",
    "DenyReason",
    "GrantOutcome",
    "GroupingRule",
    "Page",
    "PolicyRule",
    "RequestContext",
    "RevokeOutcome",
]
