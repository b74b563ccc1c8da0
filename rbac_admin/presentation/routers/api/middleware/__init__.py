"""Request middleware and security dependencies."""
