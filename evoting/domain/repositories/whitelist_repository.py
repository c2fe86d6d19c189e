"""Whitelist entry repository interface."""

from abc import abstractmethod

from evoting.domain.entities.whitelist_entry import WhitelistEntry
from evoting.domain.repositories.base import MutableRepository


class WhitelistRepository(MutableRepository[WhitelistEntry]):
    """Repository interface for whitelist entries."""

    @abstractmethod
    async def get_by_user_and_election(
        self, user_id: int, election_id: int
    ) -> WhitelistEntry | None:
        pass

    @abstractmethod
    async def get_by_address_and_election(
        self, address: str, election_id: int
    ) -> WhitelistEntry | None:
        pass

    @abstractmethod
    async def get_by_election(self, election_id: int) -> list[WhitelistEntry]:
        pass

    @abstractmethod
    async def count_by_election(self, election_id: int) -> int:
        pass
