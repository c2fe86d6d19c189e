"""Unit of Work interface for transaction management.

All repositories handed out by one unit of work share a single database
transaction, so multi-write operations such as casting a ballot either
commit as a whole or not at all.
"""

from abc import ABC, abstractmethod

from evoting.domain.repositories.ballot_repository import BallotRepository
from evoting.domain.repositories.candidate_repository import CandidateRepository
from evoting.domain.repositories.election_repository import ElectionRepository
from evoting.domain.repositories.user_repository import UserRepository
from evoting.domain.repositories.whitelist_repository import WhitelistRepository
from evoting.domain.repositories.witness_exception_repository import (
    WitnessExceptionRepository,
)


class IUnitOfWork(ABC):
    """Unit of Work interface for transaction management."""

    @property
    @abstractmethod
    def election_repository(self) -> ElectionRepository:
        """Get the election repository for this unit of work."""
        pass

    @property
    @abstractmethod
    def candidate_repository(self) -> CandidateRepository:
        """Get the candidate repository for this unit of work."""
        pass

    @property
    @abstractmethod
    def whitelist_repository(self) -> WhitelistRepository:
        """Get the whitelist repository for this unit of work."""
        pass

    @property
    @abstractmethod
    def ballot_repository(self) -> BallotRepository:
        """Get the ballot repository for this unit of work."""
        pass

    @property
    @abstractmethod
    def witness_exception_repository(self) -> WitnessExceptionRepository:
        """Get the witness exception repository for this unit of work."""
        pass

    @property
    @abstractmethod
    def user_repository(self) -> UserRepository:
        """Get the user repository for this unit of work."""
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Commit the current transaction."""
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Rollback the current transaction."""
        pass

    @abstractmethod
    async def flush(self) -> None:
        """Flush changes to database without committing.

        This is useful when you need to make foreign key references available
        within the same transaction.
        """
        pass
