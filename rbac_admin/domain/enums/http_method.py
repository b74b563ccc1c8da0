"""HTTP methods accepted in policy tuples.

Usage:
    from rbac_admin.domain.enums import HttpMethod

    if not HttpMethod.is_valid(method):
        ...
"""

from enum import Enum


class HttpMethod(str, Enum):
    """Uppercase HTTP verbs a permission may name as its action."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"

    @classmethod
    def values(cls) -> list[str]:
        """Get all method values as strings."""
        return [method.value for method in cls]

    @classmethod
    def is_valid(cls, value: str) -> bool:
        """Check if a string is an accepted method (case-sensitive)."""
        return value in cls.values()
