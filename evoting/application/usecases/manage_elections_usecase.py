"""Election management use cases: drafts, listing and ongoing updates."""

from evoting.application.dtos.election_dto import (
    CandidatePairDto,
    CreateElectionInputDto,
    DeleteElectionInputDto,
    DeleteElectionOutputDto,
    ElectionOutputDto,
    ElectionOutputItem,
    GetElectionInputDto,
    ListElectionsInputDto,
    ListElectionsOutputDto,
    UpdateDraftElectionInputDto,
    UpdateOngoingElectionInputDto,
)
from evoting.application.usecases.base import Clock, TransactionalUseCase
from evoting.common.logging import get_logger
from evoting.domain.entities import Candidate, Election, ElectionStatus, UserRole
from evoting.domain.exceptions import NotFoundError, ValidationError
from evoting.domain.services.access_policy import AccessPolicy, Action
from evoting.domain.services.election_state_machine import ElectionStateMachine
from evoting.domain.services.interfaces.unit_of_work import IUnitOfWork
from evoting.domain.services.time_window_validator import merge_schedule_update
from evoting.domain.utils.time import ensure_utc
from evoting.domain.value_objects.actor import Actor


logger = get_logger(__name__)


def visible_statuses(actor: Actor) -> list[ElectionStatus]:
    """Statuses the actor may see.

    Admins see everything, witnesses everything but drafts, everyone else
    neither drafts nor terminated elections.
    """
    if actor.role == UserRole.ADMIN:
        return list(ElectionStatus)
    if actor.role == UserRole.WITNESS:
        return [s for s in ElectionStatus if s != ElectionStatus.DRAFT]
    return [ElectionStatus.ONGOING, ElectionStatus.FINISH]


class ManageElectionsUseCase(TransactionalUseCase):
    """Create, edit, list and delete elections."""

    def __init__(self, uow: IUnitOfWork, clock: Clock | None = None) -> None:
        """Initialize the use case.

        Args:
            uow: Unit of work providing the repositories
            clock: Returns the current UTC time
        """
        super().__init__(uow, clock)

    async def create_election(
        self, input_dto: CreateElectionInputDto
    ) -> ElectionOutputDto:
        """Create a DRAFT election with its candidates and witnesses."""
        try:
            AccessPolicy.require(input_dto.actor, Action.CREATE_ELECTION)
            self._validate_names(input_dto.name, input_dto.organization)
            await self._validate_candidates(input_dto.candidates)
            await self._validate_witnesses(input_dto.witness_ids)

            election = await self.uow.election_repository.create(
                Election(
                    name=input_dto.name.strip(),
                    organization=input_dto.organization.strip(),
                    description=input_dto.description,
                    witness_ids=input_dto.witness_ids,
                )
            )
            candidates = await self._create_candidates(
                election.id,  # type: ignore[arg-type]
                input_dto.candidates,
            )
            await self.uow.commit()

            logger.info(
                "Election created",
                election_id=election.id,
                candidates=len(candidates),
            )
            return ElectionOutputDto(
                election=ElectionOutputItem.from_entity(election, candidates)
            )
        except Exception as e:
            code, message = await self._handle_failure("create election", e)
            return ElectionOutputDto(
                success=False, error_code=code, error_message=message
            )

    async def update_draft_election(
        self, input_dto: UpdateDraftElectionInputDto
    ) -> ElectionOutputDto:
        """Edit a DRAFT election; candidate and witness lists are replaced."""
        try:
            AccessPolicy.require(input_dto.actor, Action.UPDATE_DRAFT_ELECTION)
            election = await self._load_election(input_dto.election_id)
            ElectionStateMachine.ensure_draft(election)

            if input_dto.name is not None:
                election.name = input_dto.name.strip()
            if input_dto.organization is not None:
                election.organization = input_dto.organization.strip()
            if input_dto.description is not None:
                election.description = input_dto.description
            self._validate_names(election.name, election.organization)

            if input_dto.candidates is not None:
                await self._validate_candidates(input_dto.candidates)
                await self.uow.candidate_repository.delete_by_election(election.id)  # type: ignore[arg-type]
                await self._create_candidates(
                    election.id,  # type: ignore[arg-type]
                    input_dto.candidates,
                )
            if input_dto.witness_ids is not None:
                await self._validate_witnesses(input_dto.witness_ids)
                await self.uow.election_repository.set_witnesses(
                    election.id,  # type: ignore[arg-type]
                    input_dto.witness_ids,
                )

            updated = await self.uow.election_repository.update(election)
            candidates = await self.uow.candidate_repository.get_by_election(
                election.id  # type: ignore[arg-type]
            )
            await self.uow.commit()
            return ElectionOutputDto(
                election=ElectionOutputItem.from_entity(updated, candidates)
            )
        except Exception as e:
            code, message = await self._handle_failure("update draft election", e)
            return ElectionOutputDto(
                success=False, error_code=code, error_message=message
            )

    async def update_ongoing_election(
        self, input_dto: UpdateOngoingElectionInputDto
    ) -> ElectionOutputDto:
        """Move schedule boundaries or edit details of an ONGOING election.

        Rejected boundaries fail the whole request with InvalidWindow.
        """
        try:
            AccessPolicy.require(input_dto.actor, Action.UPDATE_ONGOING_ELECTION)
            now = self.now()
            await self._reconcile(now)
            election = await self._load_election(input_dto.election_id)
            ElectionStateMachine.ensure_ongoing(election)

            updates = {
                "whitelist_start": input_dto.whitelist_start,
                "whitelist_end": input_dto.whitelist_end,
                "vote_start": input_dto.vote_start,
                "vote_end": input_dto.vote_end,
            }
            updates = {k: ensure_utc(v) if v else None for k, v in updates.items()}
            if any(updates.values()):
                current = election.schedule
                if current is None:
                    raise ValidationError("Election has no schedule to update")
                election.apply_schedule(merge_schedule_update(current, updates, now))

            if input_dto.description is not None:
                election.description = input_dto.description
            if input_dto.public_key is not None:
                election.public_key = input_dto.public_key

            updated = await self.uow.election_repository.update(election)
            candidates = await self.uow.candidate_repository.get_by_election(
                election.id  # type: ignore[arg-type]
            )
            await self.uow.commit()
            return ElectionOutputDto(
                election=ElectionOutputItem.from_entity(updated, candidates)
            )
        except Exception as e:
            code, message = await self._handle_failure("update ongoing election", e)
            return ElectionOutputDto(
                success=False, error_code=code, error_message=message
            )

    async def delete_election(
        self, input_dto: DeleteElectionInputDto
    ) -> DeleteElectionOutputDto:
        """Delete a DRAFT election and its candidates."""
        try:
            AccessPolicy.require(input_dto.actor, Action.DELETE_ELECTION)
            election = await self._load_election(input_dto.election_id)
            ElectionStateMachine.ensure_deletable(election)

            await self.uow.candidate_repository.delete_by_election(election.id)  # type: ignore[arg-type]
            await self.uow.election_repository.set_witnesses(election.id, [])  # type: ignore[arg-type]
            await self.uow.election_repository.delete(election.id)  # type: ignore[arg-type]
            await self.uow.commit()

            logger.info("Election deleted", election_id=election.id)
            return DeleteElectionOutputDto()
        except Exception as e:
            code, message = await self._handle_failure("delete election", e)
            return DeleteElectionOutputDto(
                success=False, error_code=code, error_message=message
            )

    async def list_elections(
        self, input_dto: ListElectionsInputDto
    ) -> ListElectionsOutputDto:
        """List visible elections grouped by status, after finishing elapsed ones."""
        try:
            await self._reconcile(self.now())

            statuses = visible_statuses(input_dto.actor)
            if input_dto.status is not None:
                statuses = [s for s in statuses if s == input_dto.status]
            elections = await self.uow.election_repository.get_by_statuses(statuses)

            grouped: dict[str, list[ElectionOutputItem]] = {
                s.value: [] for s in statuses
            }
            for election in elections:
                candidates = await self.uow.candidate_repository.get_by_election(
                    election.id  # type: ignore[arg-type]
                )
                grouped[election.status.value].append(
                    ElectionOutputItem.from_entity(election, candidates)
                )
            await self.uow.commit()
            return ListElectionsOutputDto(elections=grouped)
        except Exception as e:
            code, message = await self._handle_failure("list elections", e)
            return ListElectionsOutputDto(
                success=False, error_code=code, error_message=message
            )

    async def get_election(self, input_dto: GetElectionInputDto) -> ElectionOutputDto:
        """Get one election; invisible elections are reported as not found."""
        try:
            await self._reconcile(self.now())
            election = await self._load_election(input_dto.election_id)
            if election.status not in visible_statuses(input_dto.actor):
                raise NotFoundError("Election", input_dto.election_id)

            candidates = await self.uow.candidate_repository.get_by_election(
                election.id  # type: ignore[arg-type]
            )
            await self.uow.commit()
            return ElectionOutputDto(
                election=ElectionOutputItem.from_entity(election, candidates)
            )
        except Exception as e:
            code, message = await self._handle_failure("get election", e)
            return ElectionOutputDto(
                success=False, error_code=code, error_message=message
            )

    @staticmethod
    def _validate_names(name: str, organization: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Election name is required")
        if not organization or not organization.strip():
            raise ValidationError("Organization is required")

    async def _validate_candidates(self, pairs: list[CandidatePairDto]) -> None:
        if not pairs:
            raise ValidationError("At least one candidate is required")

        user_ids: list[int] = []
        for pair in pairs:
            if pair.lead_id == pair.deputy_id:
                raise ValidationError(
                    "Lead and deputy must be different users",
                    {"user_id": pair.lead_id},
                )
            user_ids.extend([pair.lead_id, pair.deputy_id])
        if len(set(user_ids)) != len(user_ids):
            raise ValidationError("A user may stand in only one candidate pair")

        users = await self.uow.user_repository.get_by_ids(user_ids)
        found = {u.id for u in users if not u.is_terminated}
        missing = [uid for uid in user_ids if uid not in found]
        if missing:
            raise NotFoundError("User", missing[0])

    async def _validate_witnesses(self, witness_ids: list[int]) -> None:
        if not witness_ids:
            return
        users = await self.uow.user_repository.get_by_ids(witness_ids)
        witnesses = {u.id for u in users if u.role == UserRole.WITNESS}
        for user_id in witness_ids:
            if user_id not in witnesses:
                raise ValidationError(
                    "Witnesses must be users with the WITNESS role",
                    {"user_id": user_id},
                )

    async def _create_candidates(
        self, election_id: int, pairs: list[CandidatePairDto]
    ) -> list[Candidate]:
        return [
            await self.uow.candidate_repository.create(
                Candidate(
                    election_id=election_id,
                    lead_id=pair.lead_id,
                    deputy_id=pair.deputy_id,
                )
            )
            for pair in pairs
        ]
