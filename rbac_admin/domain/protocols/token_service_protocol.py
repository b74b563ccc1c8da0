"""Access token port."""

from typing import Any, Protocol

from rbac_admin.core.errors import AuthenticationError
from rbac_admin.core.result import Result


class TokenServiceProtocol(Protocol):
    """Issues and verifies signed access tokens carrying a username claim."""

    expiration_minutes: int

    def generate_access_token(self, *, user_id: int, username: str) -> str: ...

    def validate_access_token(
        self, token: str
    ) -> Result[dict[str, Any], AuthenticationError]: ...
