"""SQLAlchemy unit of work."""

from sqlalchemy.ext.asyncio import AsyncSession

from evoting.domain.repositories.ballot_repository import BallotRepository
from evoting.domain.repositories.candidate_repository import CandidateRepository
from evoting.domain.repositories.election_repository import ElectionRepository
from evoting.domain.repositories.user_repository import UserRepository
from evoting.domain.repositories.whitelist_repository import WhitelistRepository
from evoting.domain.repositories.witness_exception_repository import (
    WitnessExceptionRepository,
)
from evoting.domain.services.interfaces.unit_of_work import IUnitOfWork
from evoting.infrastructure.persistence.ballot_repository_impl import (
    BallotRepositoryImpl,
)
from evoting.infrastructure.persistence.candidate_repository_impl import (
    CandidateRepositoryImpl,
)
from evoting.infrastructure.persistence.election_repository_impl import (
    ElectionRepositoryImpl,
)
from evoting.infrastructure.persistence.user_repository_impl import (
    UserRepositoryImpl,
)
from evoting.infrastructure.persistence.whitelist_repository_impl import (
    WhitelistRepositoryImpl,
)
from evoting.infrastructure.persistence.witness_exception_repository_impl import (
    WitnessExceptionRepositoryImpl,
)


class UnitOfWorkImpl(IUnitOfWork):
    """Unit of work whose repositories all share one AsyncSession."""

    def __init__(self, session: AsyncSession):
        """Initialize with the session the repositories will share.

        Args:
            session: AsyncSession for database operations
        """
        self._session = session
        self._election_repository = ElectionRepositoryImpl(session)
        self._candidate_repository = CandidateRepositoryImpl(session)
        self._whitelist_repository = WhitelistRepositoryImpl(session)
        self._ballot_repository = BallotRepositoryImpl(session)
        self._witness_exception_repository = WitnessExceptionRepositoryImpl(session)
        self._user_repository = UserRepositoryImpl(session)

    @property
    def session(self) -> AsyncSession:
        return self._session

    @property
    def election_repository(self) -> ElectionRepository:
        return self._election_repository

    @property
    def candidate_repository(self) -> CandidateRepository:
        return self._candidate_repository

    @property
    def whitelist_repository(self) -> WhitelistRepository:
        return self._whitelist_repository

    @property
    def ballot_repository(self) -> BallotRepository:
        return self._ballot_repository

    @property
    def witness_exception_repository(self) -> WitnessExceptionRepository:
        return self._witness_exception_repository

    @property
    def user_repository(self) -> UserRepository:
        return self._user_repository

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()

    async def flush(self) -> None:
        await self._session.flush()
