"""Infrastructure layer: adapters for storage, policy engine, security and logging."""
