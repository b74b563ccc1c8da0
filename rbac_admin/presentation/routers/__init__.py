"""Routers: non-versioned system endpoints and the versioned API."""

from rbac_admin.presentation.routers.system import system_router

__all__ = ["system_router"]
