"""Ballot casting and invalidation."""

from datetime import timedelta

from evoting.application.dtos.ballot_dto import (
    BallotOutputItem,
    CastVoteInputDto,
    CastVoteOutputDto,
    InvalidateBallotInputDto,
    InvalidateBallotOutputDto,
)
from evoting.application.usecases.base import Clock, TransactionalUseCase
from evoting.common.logging import get_logger
from evoting.domain.entities import Ballot
from evoting.domain.exceptions import (
    InvalidCandidateError,
    NotFoundError,
    OutOfWindowError,
    WindowExpiredError,
)
from evoting.domain.services.access_policy import AccessPolicy, Action
from evoting.domain.services.election_state_machine import ElectionStateMachine
from evoting.domain.services.interfaces.unit_of_work import IUnitOfWork
from evoting.domain.services.whitelist_gate import WhitelistGate


logger = get_logger(__name__)


class CastBallotUseCase(TransactionalUseCase):
    """Records ballots and their compensating invalidations.

    The ballot insert and the tally change always commit together in one
    unit of work.
    """

    def __init__(
        self,
        uow: IUnitOfWork,
        clock: Clock | None = None,
        invalidation_grace_hours: int = 24,
    ) -> None:
        """Initialize the use case.

        Args:
            uow: Unit of work providing the repositories
            clock: Returns the current UTC time
            invalidation_grace_hours: Hours after vote_end during which
                ballots may still be invalidated
        """
        super().__init__(uow, clock)
        self.invalidation_grace = timedelta(hours=invalidation_grace_hours)

    async def cast_vote(self, input_dto: CastVoteInputDto) -> CastVoteOutputDto:
        """Cast the caller's vote for a candidate.

        Checks, in order: role, election existence and status, vote window,
        accepted whitelist entry, prior ballot, candidate membership.
        """
        try:
            actor = input_dto.actor
            AccessPolicy.require(actor, Action.CAST_VOTE)

            election = await self._load_election(input_dto.election_id)
            ElectionStateMachine.ensure_ongoing(election)
            if not election.is_vote_open(self.now()):
                raise OutOfWindowError(
                    "Voting is not open for this election",
                    {"election_id": election.id},
                )

            entry = await self.uow.whitelist_repository.get_by_user_and_election(
                actor.user_id,
                election.id,  # type: ignore[arg-type]
            )
            existing = (
                await self.uow.ballot_repository.get_by_whitelist(entry.id)  # type: ignore[arg-type]
                if entry is not None
                else []
            )
            entry = WhitelistGate.check_ballot_eligibility(
                entry, existing[0] if existing else None
            )

            candidate = await self.uow.candidate_repository.get_by_id(
                input_dto.candidate_id
            )
            if candidate is None or candidate.election_id != election.id:
                raise InvalidCandidateError(
                    "Candidate does not stand in this election",
                    {
                        "election_id": election.id,
                        "candidate_id": input_dto.candidate_id,
                    },
                )

            ballot = await self.uow.ballot_repository.create(
                Ballot(
                    candidate_id=candidate.id,  # type: ignore[arg-type]
                    whitelist_id=entry.id,  # type: ignore[arg-type]
                    transaction=input_dto.transaction,
                )
            )
            if not await self.uow.candidate_repository.increment_tally(
                candidate.id  # type: ignore[arg-type]
            ):
                raise InvalidCandidateError(
                    "Candidate disappeared while voting",
                    {"candidate_id": candidate.id},
                )
            await self.uow.commit()

            logger.info(
                "Ballot cast",
                election_id=election.id,
                candidate_id=candidate.id,
                ballot_id=ballot.id,
            )
            return CastVoteOutputDto(ballot=BallotOutputItem.from_entity(ballot))
        except Exception as e:
            code, message = await self._handle_failure("cast vote", e)
            return CastVoteOutputDto(
                success=False, error_code=code, error_message=message
            )

    async def invalidate_ballot(
        self, input_dto: InvalidateBallotInputDto
    ) -> InvalidateBallotOutputDto:
        """Invalidate a whitelist entry's ballots and take back their votes.

        Only ballots that are still valid decrement a tally, so repeating
        the call changes nothing.
        """
        try:
            AccessPolicy.require(input_dto.actor, Action.INVALIDATE_BALLOT)

            entry = await self.uow.whitelist_repository.get_by_id(
                input_dto.whitelist_id
            )
            if entry is None:
                raise NotFoundError("Whitelist entry", input_dto.whitelist_id)
            election = await self._load_election(entry.election_id)
            if election.vote_end is None:
                raise NotFoundError("Vote end of election", election.id)
            ElectionStateMachine.ensure_not_terminated(election)

            if self.now() > election.vote_end + self.invalidation_grace:
                raise WindowExpiredError(
                    "The correction period for this election has ended",
                    {"election_id": election.id},
                )

            ballots = await self.uow.ballot_repository.get_by_whitelist(entry.id)  # type: ignore[arg-type]
            if not ballots:
                raise NotFoundError("Ballot for whitelist entry", entry.id)

            flipped = await self.uow.ballot_repository.invalidate_by_whitelist(
                entry.id  # type: ignore[arg-type]
            )
            for ballot in flipped:
                await self.uow.candidate_repository.decrement_tally(
                    ballot.candidate_id
                )
            ballots = await self.uow.ballot_repository.get_by_whitelist(entry.id)  # type: ignore[arg-type]
            await self.uow.commit()

            logger.info(
                "Ballots invalidated",
                whitelist_id=entry.id,
                invalidated=len(flipped),
            )
            return InvalidateBallotOutputDto(
                ballots=[BallotOutputItem.from_entity(b) for b in ballots]
            )
        except Exception as e:
            code, message = await self._handle_failure("invalidate ballot", e)
            return InvalidateBallotOutputDto(
                success=False, error_code=code, error_message=message
            )
