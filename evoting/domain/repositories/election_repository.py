"""Election repository interface."""

from abc import abstractmethod
from datetime import datetime

from evoting.domain.entities.election import Election, ElectionStatus
from evoting.domain.repositories.base import MutableRepository


class ElectionRepository(MutableRepository[Election]):
    """Repository interface for elections."""

    @abstractmethod
    async def get_by_statuses(
        self, statuses: list[ElectionStatus]
    ) -> list[Election]:
        """Get elections whose status is one of ``statuses``.

        Args:
            statuses: Allowed statuses

        Returns:
            Election entities ordered by ID
        """
        pass

    @abstractmethod
    async def finish_elapsed(self, now: datetime) -> int:
        """Move every ONGOING election whose vote window has passed to FINISH.

        Args:
            now: Reference time

        Returns:
            Number of elections finished
        """
        pass

    @abstractmethod
    async def pin_winner(self, election_id: int, candidate_id: int) -> int:
        """Set the winner only if none is pinned yet.

        Returns:
            The winner ID stored after the call
        """
        pass

    @abstractmethod
    async def set_witnesses(self, election_id: int, user_ids: list[int]) -> None:
        """Replace the witnesses assigned to an election."""
        pass

    @abstractmethod
    async def delete(self, entity_id: int) -> bool:
        """Delete an election; candidates and witness links cascade."""
        pass
