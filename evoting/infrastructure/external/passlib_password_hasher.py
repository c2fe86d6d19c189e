"""bcrypt password hashing."""

from passlib.context import CryptContext


class PasslibPasswordHasher:
    def __init__(self, schemes: list[str] | None = None):
        self._context = CryptContext(schemes=schemes or ["bcrypt"], deprecated="auto")

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        return self._context.verify(password, password_hash)
