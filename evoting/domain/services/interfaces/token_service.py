"""Access token service interface."""

from typing import Any, Protocol


class ITokenService(Protocol):
    """Issues and verifies opaque access tokens."""

    def issue(
        self, claims: dict[str, Any], expires_minutes: int | None = None
    ) -> str:
        """Sign the claims into a token.

        ``expires_minutes`` overrides the configured access-token lifetime.
        """
        ...

    def decode(self, token: str) -> dict[str, Any]:
        """Verify a token and return its claims.

        Raises:
            InvalidCredentialsError: If the token is invalid or expired
        """
        ...
