"""Election lifecycle transitions: start, terminate, de-terminate, finish."""

from evoting.application.dtos.election_dto import (
    DeterminateElectionInputDto,
    ElectionOutputDto,
    ElectionOutputItem,
    FinishElapsedOutputDto,
    StartElectionInputDto,
    TerminateElectionInputDto,
    TerminateElectionOutputDto,
    WitnessExceptionOutputItem,
)
from evoting.application.usecases.base import Clock, TransactionalUseCase
from evoting.common.logging import get_logger
from evoting.domain.entities import WitnessException
from evoting.domain.exceptions import UnauthorizedError, ValidationError
from evoting.domain.services.access_policy import AccessPolicy, Action
from evoting.domain.services.election_state_machine import ElectionStateMachine
from evoting.domain.services.interfaces.unit_of_work import IUnitOfWork
from evoting.domain.services.time_window_validator import derive_schedule
from evoting.domain.utils.time import ensure_utc
from evoting.domain.value_objects.election_schedule import ElectionSchedule


logger = get_logger(__name__)


class ElectionLifecycleUseCase(TransactionalUseCase):
    """Drives elections through DRAFT -> ONGOING -> FINISH/TERMINATE."""

    def __init__(
        self,
        uow: IUnitOfWork,
        clock: Clock | None = None,
        witness_exception_threshold: int = 0,
    ) -> None:
        """Initialize the use case.

        Args:
            uow: Unit of work providing the repositories
            clock: Returns the current UTC time
            witness_exception_threshold: Number of witness exceptions that
                terminates an election; 0 disables automatic termination
        """
        super().__init__(uow, clock)
        self.witness_exception_threshold = witness_exception_threshold

    async def start_election(
        self, input_dto: StartElectionInputDto
    ) -> ElectionOutputDto:
        """Start a DRAFT election with a schedule derived from durations."""
        try:
            AccessPolicy.require(input_dto.actor, Action.START_ELECTION)
            if not input_dto.public_key or not input_dto.public_key.strip():
                raise ValidationError("Public key is required")

            election = await self._load_election(input_dto.election_id)
            schedule = derive_schedule(
                ensure_utc(input_dto.whitelist_start),
                input_dto.whitelist_hours,
                input_dto.pending_hours,
                input_dto.vote_hours,
            )
            ElectionStateMachine.start(
                election, schedule, input_dto.public_key.strip(), self.now()
            )

            updated = await self.uow.election_repository.update(election)
            candidates = await self.uow.candidate_repository.get_by_election(
                updated.id  # type: ignore[arg-type]
            )
            await self.uow.commit()

            logger.info(
                "Election started",
                election_id=updated.id,
                vote_end=updated.vote_end.isoformat() if updated.vote_end else None,
            )
            return ElectionOutputDto(
                election=ElectionOutputItem.from_entity(updated, candidates)
            )
        except Exception as e:
            code, message = await self._handle_failure("start election", e)
            return ElectionOutputDto(
                success=False, error_code=code, error_message=message
            )

    async def terminate_election(
        self, input_dto: TerminateElectionInputDto
    ) -> TerminateElectionOutputDto:
        """Terminate an ONGOING election, or record a witness's objection.

        Admins terminate directly. Witnesses assigned to the election record
        a WitnessException; when the configured threshold of exceptions is
        reached the election is terminated as well.
        """
        try:
            actor = input_dto.actor
            AccessPolicy.require(actor, Action.TERMINATE_ELECTION)
            await self._reconcile(self.now())

            election = await self._load_election(input_dto.election_id)
            ElectionStateMachine.ensure_ongoing(election)

            if actor.is_admin:
                ElectionStateMachine.terminate(election)
                updated = await self.uow.election_repository.update(election)
                await self.uow.commit()
                logger.info(
                    "Election terminated", election_id=updated.id, by=actor.user_id
                )
                return TerminateElectionOutputDto(
                    election=ElectionOutputItem.from_entity(updated)
                )

            if not election.is_witness(actor.user_id):
                raise UnauthorizedError(
                    "Witness is not assigned to this election",
                    {"election_id": election.id, "user_id": actor.user_id},
                )
            note = (input_dto.note or "").strip()
            if not note:
                raise ValidationError("A note is required for a witness exception")

            exception = await self.uow.witness_exception_repository.create(
                WitnessException(
                    election_id=election.id,  # type: ignore[arg-type]
                    user_id=actor.user_id,
                    note=note,
                )
            )
            if self.witness_exception_threshold > 0:
                count = await self.uow.witness_exception_repository.count_by_election(
                    election.id  # type: ignore[arg-type]
                )
                if count >= self.witness_exception_threshold:
                    ElectionStateMachine.terminate(election)
                    election = await self.uow.election_repository.update(election)
                    logger.warning(
                        "Election terminated by witness exceptions",
                        election_id=election.id,
                        exceptions=count,
                    )
            await self.uow.commit()

            logger.info(
                "Witness exception recorded",
                election_id=election.id,
                witness_id=actor.user_id,
            )
            return TerminateElectionOutputDto(
                election=ElectionOutputItem.from_entity(election),
                witness_exception=WitnessExceptionOutputItem.from_entity(exception),
            )
        except Exception as e:
            code, message = await self._handle_failure("terminate election", e)
            return TerminateElectionOutputDto(
                success=False, error_code=code, error_message=message
            )

    async def determinate_election(
        self, input_dto: DeterminateElectionInputDto
    ) -> ElectionOutputDto:
        """Bring a TERMINATE election back to ONGOING with a fresh schedule."""
        try:
            AccessPolicy.require(input_dto.actor, Action.DETERMINATE_ELECTION)
            election = await self._load_election(input_dto.election_id)
            schedule = ElectionSchedule(
                whitelist_start=ensure_utc(input_dto.whitelist_start),
                whitelist_end=ensure_utc(input_dto.whitelist_end),
                vote_start=ensure_utc(input_dto.vote_start),
                vote_end=ensure_utc(input_dto.vote_end),
            )
            ElectionStateMachine.determinate(election, schedule, self.now())

            updated = await self.uow.election_repository.update(election)
            candidates = await self.uow.candidate_repository.get_by_election(
                updated.id  # type: ignore[arg-type]
            )
            await self.uow.commit()

            logger.info("Election de-terminated", election_id=updated.id)
            return ElectionOutputDto(
                election=ElectionOutputItem.from_entity(updated, candidates)
            )
        except Exception as e:
            code, message = await self._handle_failure("de-terminate election", e)
            return ElectionOutputDto(
                success=False, error_code=code, error_message=message
            )

    async def finish_elapsed_elections(self) -> FinishElapsedOutputDto:
        """Finish every ONGOING election whose vote window has passed."""
        try:
            finished = await self.uow.election_repository.finish_elapsed(self.now())
            await self.uow.commit()
            return FinishElapsedOutputDto(finished=finished)
        except Exception as e:
            code, message = await self._handle_failure("finish elapsed elections", e)
            return FinishElapsedOutputDto(
                success=False, error_code=code, error_message=message
            )
