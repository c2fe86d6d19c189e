"""Candidate repository interface."""

from abc import abstractmethod

from evoting.domain.entities.candidate import Candidate
from evoting.domain.repositories.base import BaseRepository


class CandidateRepository(BaseRepository[Candidate]):
    """Repository interface for candidates."""

    @abstractmethod
    async def get_by_election(self, election_id: int) -> list[Candidate]:
        """Get an election's candidates in creation order."""
        pass

    @abstractmethod
    async def increment_tally(self, candidate_id: int) -> bool:
        """Add one to a candidate's tally in a single conditional write.

        Returns:
            True if the candidate exists and was updated
        """
        pass

    @abstractmethod
    async def decrement_tally(self, candidate_id: int) -> bool:
        """Subtract one from a candidate's tally, never below zero.

        Returns:
            True if the tally was decremented
        """
        pass

    @abstractmethod
    async def delete_by_election(self, election_id: int) -> int:
        """Delete every candidate of an election.

        Returns:
            Number of candidates deleted
        """
        pass
