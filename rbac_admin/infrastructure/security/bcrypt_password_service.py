"""Bcrypt password hashing service (adapter).

Implements PasswordHashingProtocol structurally.

Security:
    - Bcrypt with a configurable cost factor (10 minimum)
    - Random salt per hash
    - bcrypt only reads the first 72 bytes of a password; longer inputs are
      cut to that length before hashing and verifying
"""

import bcrypt

_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class BcryptPasswordService:
    """Bcrypt password hashing service.

    Usage:
        service = BcryptPasswordService(cost_factor=settings.bcrypt_rounds)
        password_hash = service.hash_password("123456")
        service.verify_password("123456", password_hash)  # True
    """

    def __init__(self, cost_factor: int = 12) -> None:
        """Initialize bcrypt password service.

        Args:
            cost_factor: Bcrypt cost factor (log2 of the iteration count).

        Raises:
            ValueError: If cost_factor is below 10 or above 20.
        """
        if cost_factor < 10:
            msg = "Cost factor must be at least 10 for security"
            raise ValueError(msg)
        if cost_factor > 20:
            msg = "Cost factor above 20 is impractically slow"
            raise ValueError(msg)
        self._cost_factor = cost_factor

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password.

        Returns:
            60-character bcrypt hash (``$2b$<cost>$...``).
        """
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a bcrypt hash.

        Malformed hashes verify as False.
        """
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except ValueError:
            return False
