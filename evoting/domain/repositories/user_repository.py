"""User repository interface."""

from abc import abstractmethod

from evoting.domain.entities.user import User
from evoting.domain.repositories.base import MutableRepository


class UserRepository(MutableRepository[User]):
    """Repository interface for user accounts."""

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None:
        pass

    @abstractmethod
    async def get_by_verification_token(self, token: str) -> User | None:
        pass

    @abstractmethod
    async def get_by_ids(self, user_ids: list[int]) -> list[User]:
        pass
