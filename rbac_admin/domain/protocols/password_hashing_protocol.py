"""Password hashing port."""

from typing import Protocol


class PasswordHashingProtocol(Protocol):
    """Opaque hash/verify pair. Implementations must use a slow hash."""

    def hash_password(self, password: str) -> str: ...

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Return True if ``password`` matches ``password_hash``; never raises."""
        ...
