"""Finished election results."""

from evoting.application.dtos.election_dto import (
    CandidateOutputItem,
    ElectionOutputItem,
)
from evoting.application.dtos.result_dto import (
    ElectionResultOutputDto,
    GetResultInputDto,
    ListFinishedElectionsOutputDto,
)
from evoting.application.usecases.base import Clock, TransactionalUseCase
from evoting.common.logging import get_logger
from evoting.domain.entities import ElectionStatus
from evoting.domain.exceptions import NotFoundError
from evoting.domain.services.interfaces.unit_of_work import IUnitOfWork
from evoting.domain.services.result_aggregator import ResultAggregator


logger = get_logger(__name__)


class ElectionResultUseCase(TransactionalUseCase):
    """Reads results of finished elections, pinning the winner on first read."""

    def __init__(self, uow: IUnitOfWork, clock: Clock | None = None) -> None:
        super().__init__(uow, clock)

    async def list_finished_elections(self) -> ListFinishedElectionsOutputDto:
        try:
            await self._reconcile(self.now())
            elections = await self.uow.election_repository.get_by_statuses(
                [ElectionStatus.FINISH]
            )
            await self.uow.commit()
            return ListFinishedElectionsOutputDto(
                elections=[ElectionOutputItem.from_entity(e) for e in elections]
            )
        except Exception as e:
            code, message = await self._handle_failure("list finished elections", e)
            return ListFinishedElectionsOutputDto(
                success=False, error_code=code, error_message=message
            )

    async def get_finished_result(
        self, input_dto: GetResultInputDto
    ) -> ElectionResultOutputDto:
        """Return winner, tallies and turnout of a FINISH election.

        The winner is computed once and pinned; later reads return the
        pinned candidate even if tallies change afterwards.
        """
        try:
            await self._reconcile(self.now())
            election = await self.uow.election_repository.get_by_id(
                input_dto.election_id
            )
            if election is None or election.status != ElectionStatus.FINISH:
                raise NotFoundError("Finished election", input_dto.election_id)

            candidates = await self.uow.candidate_repository.get_by_election(
                election.id  # type: ignore[arg-type]
            )
            if election.winner_id is None:
                chosen = ResultAggregator.select_winner(candidates)
                if chosen is not None:
                    election.winner_id = await self.uow.election_repository.pin_winner(
                        election.id,  # type: ignore[arg-type]
                        chosen.id,  # type: ignore[arg-type]
                    )
                    logger.info(
                        "Winner pinned",
                        election_id=election.id,
                        candidate_id=election.winner_id,
                    )

            winner = next((c for c in candidates if c.id == election.winner_id), None)
            total_whitelists = await self.uow.whitelist_repository.count_by_election(
                election.id  # type: ignore[arg-type]
            )
            total_voters = await self.uow.ballot_repository.count_by_election(
                election.id  # type: ignore[arg-type]
            )
            await self.uow.commit()

            return ElectionResultOutputDto(
                election=ElectionOutputItem.from_entity(election, candidates),
                winner=CandidateOutputItem.from_entity(winner) if winner else None,
                tallies=[CandidateOutputItem.from_entity(c) for c in candidates],
                total_whitelists=total_whitelists,
                total_voters=total_voters,
            )
        except Exception as e:
            code, message = await self._handle_failure("get finished result", e)
            return ElectionResultOutputDto(
                success=False, error_code=code, error_message=message
            )
