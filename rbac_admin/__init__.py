"""RBAC administration backend.

User accounts, roles and permissions behind an HTTP API, with a casbin
policy engine kept in step with the relational identity store.
"""

__version__ = "0.1.0"
