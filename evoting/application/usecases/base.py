"""Shared plumbing for transactional use cases."""

from collections.abc import Callable
from datetime import datetime

from evoting.common.logging import get_logger
from evoting.domain.entities.election import Election
from evoting.domain.exceptions import NotFoundError, VotingDomainError
from evoting.domain.services.interfaces.unit_of_work import IUnitOfWork
from evoting.domain.utils.time import utc_now


logger = get_logger(__name__)

INTERNAL_ERROR_CODE = "Internal"
INTERNAL_ERROR_MESSAGE = "Internal server error"

Clock = Callable[[], datetime]


class TransactionalUseCase:
    """Base for use cases that run inside one unit of work.

    Domain errors are reported to the caller with their code. Anything else
    is logged and reported as a generic internal failure. Either way the
    transaction is rolled back.
    """

    def __init__(self, uow: IUnitOfWork, clock: Clock | None = None) -> None:
        self.uow = uow
        self._clock = clock or utc_now

    def now(self) -> datetime:
        return self._clock()

    async def _reconcile(self, now: datetime) -> None:
        """Finish every election whose vote window has passed."""
        await self.uow.election_repository.finish_elapsed(now)

    async def _handle_failure(self, action: str, e: Exception) -> tuple[str, str]:
        """Roll back and translate an exception into (error_code, message)."""
        try:
            await self.uow.rollback()
        except Exception as rollback_error:
            logger.error(f"Rollback failed after {action}: {rollback_error}")

        if isinstance(e, VotingDomainError):
            logger.info(
                "Request rejected", action=action, code=e.code, reason=e.message
            )
            return e.code, e.message

        logger.error(f"Failed to {action}: {e}", exc_info=e)
        return INTERNAL_ERROR_CODE, INTERNAL_ERROR_MESSAGE

    async def _load_election(self, election_id: int) -> Election:
        election = await self.uow.election_repository.get_by_id(election_id)
        if election is None:
            raise NotFoundError("Election", election_id)
        return election
