"""Application layer: commands, queries, handlers and RBAC services."""
