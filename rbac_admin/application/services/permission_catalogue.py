"""Permissions the service considers canonical.

Seeded on every start. Resources are raw path patterns matched against
the request path as received, so they mirror the router's real paths
(including the trailing slash of collection routes).
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CatalogueEntry:
    resource: str
    action: str
    description: str


PERMISSION_CATALOGUE: tuple[CatalogueEntry, ...] = (
    CatalogueEntry("/api/v1/users/", "GET", "List users"),
    CatalogueEntry("/api/v1/users/register", "POST", "Create user"),
    CatalogueEntry("/api/v1/users/*", "GET", "View user details"),
    CatalogueEntry("/api/v1/users/*", "PUT", "Update user"),
    CatalogueEntry("/api/v1/users/*", "DELETE", "Delete user"),
    CatalogueEntry("/api/v1/users/:id/password", "PUT", "Change user password"),
    CatalogueEntry("/api/v1/roles/*", "GET", "List and view roles"),
    CatalogueEntry("/api/v1/roles/*", "POST", "Create role"),
    CatalogueEntry("/api/v1/roles/*", "PUT", "Update role"),
    CatalogueEntry("/api/v1/roles/*", "DELETE", "Delete role"),
    CatalogueEntry("/api/v1/permissions/policy", "POST", "Add policy"),
    CatalogueEntry("/api/v1/permissions/policy", "DELETE", "Remove policy"),
    CatalogueEntry("/api/v1/permissions/policies", "GET", "List policies"),
    CatalogueEntry("/api/v1/permissions/user-role", "PUT", "Update user roles"),
    CatalogueEntry("/api/v1/test", "GET", "Example endpoint"),
)

# Read-only user listing for the default role.
USER_ROLE_PERMISSIONS: frozenset[tuple[str, str]] = frozenset(
    {
        ("/api/v1/users/", "GET"),
        ("/api/v1/users/*", "GET"),
    }
)
