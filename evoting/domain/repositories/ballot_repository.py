"""Ballot repository interface."""

from abc import abstractmethod

from evoting.domain.entities.ballot import Ballot
from evoting.domain.repositories.base import BaseRepository


class BallotRepository(BaseRepository[Ballot]):
    """Repository interface for ballots.

    ``create`` raises AlreadyVotedError when a ballot already references
    the same whitelist entry.
    """

    @abstractmethod
    async def get_by_whitelist(self, whitelist_id: int) -> list[Ballot]:
        """Get every ballot recorded for a whitelist entry."""
        pass

    @abstractmethod
    async def invalidate_by_whitelist(self, whitelist_id: int) -> list[Ballot]:
        """Mark a whitelist entry's valid ballots invalid.

        Returns:
            Only the ballots that were valid before the call
        """
        pass

    @abstractmethod
    async def count_by_election(self, election_id: int) -> int:
        """Count ballots (valid or not) cast in an election."""
        pass
