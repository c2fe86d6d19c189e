"""JWT access token service."""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from evoting.domain.exceptions import InvalidCredentialsError
from evoting.infrastructure.config.settings import Settings, get_settings


class JWTTokenService:
    """Issues and verifies HS256 signed access tokens."""

    def __init__(self, config: Settings | None = None):
        config = config or get_settings()
        self._secret_key = config.secret_key
        self._algorithm = config.jwt_algorithm
        self._expire_minutes = config.access_token_expire_minutes

    def issue(
        self, claims: dict[str, Any], expires_minutes: int | None = None
    ) -> str:
        to_encode = claims.copy()
        if expires_minutes is None:
            expires_minutes = self._expire_minutes
        expire = datetime.now(UTC) + timedelta(minutes=expires_minutes)
        to_encode.update({"exp": expire})
        return jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)

    def decode(self, token: str) -> dict[str, Any]:
        try:
            return jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as e:
            raise InvalidCredentialsError("Invalid or expired token") from e
