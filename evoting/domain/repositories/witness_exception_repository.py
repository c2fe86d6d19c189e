"""Witness exception repository interface."""

from abc import abstractmethod

from evoting.domain.entities.witness_exception import WitnessException
from evoting.domain.repositories.base import BaseRepository


class WitnessExceptionRepository(BaseRepository[WitnessException]):
    @abstractmethod
    async def get_by_election(self, election_id: int) -> list[WitnessException]:
        pass

    @abstractmethod
    async def count_by_election(self, election_id: int) -> int:
        pass
