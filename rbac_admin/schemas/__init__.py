"""Request/response schemas (HTTP-layer DTOs)."""
