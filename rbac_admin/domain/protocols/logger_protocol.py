"""LoggerProtocol definition for structured logging.

Backend-agnostic port for structured logs. Implementations MUST emit
key-value context and never carry secrets (passwords, hashes, tokens).

Usage:
    from rbac_admin.core.container import get_logger

    logger = get_logger()
    logger.info("policy_granted", role="user", resource="/api/v1/test", action="GET")

    scoped = logger.bind(component="authorization_gate")
    scoped.warning("authorization_denied", username="bob")
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters.

    Log calls take an event name plus structured context. ``error`` and
    ``critical`` accept an optional exception which implementations expand
    into ``error_type`` and ``error_message`` fields.
    """

    def debug(self, message: str, /, **context: Any) -> None: ...

    def info(self, message: str, /, **context: Any) -> None: ...

    def warning(self, message: str, /, **context: Any) -> None: ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Event name.
            error: Optional exception instance.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None: ...

    def bind(self, **context: Any) -> "LoggerProtocol":
        """Return new logger with permanently bound context.

        The original logger instance remains unchanged.
        """
        ...

    def with_context(self, **context: Any) -> "LoggerProtocol":
        """Alias for bind()."""
        ...
