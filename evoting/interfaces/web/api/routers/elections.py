"""Election management and lifecycle routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from evoting.application.dtos.election_dto import (
    CandidatePairDto,
    CreateElectionInputDto,
    DeleteElectionInputDto,
    DeterminateElectionInputDto,
    ElectionOutputItem,
    GetElectionInputDto,
    ListElectionsInputDto,
    StartElectionInputDto,
    TerminateElectionInputDto,
    TerminateElectionOutputDto,
    UpdateDraftElectionInputDto,
    UpdateOngoingElectionInputDto,
)
from evoting.application.usecases.election_lifecycle_usecase import (
    ElectionLifecycleUseCase,
)
from evoting.application.usecases.manage_elections_usecase import (
    ManageElectionsUseCase,
)
from evoting.domain.entities import ElectionStatus
from evoting.interfaces.web.api.dependencies import (
    CurrentActor,
    get_election_lifecycle_usecase,
    get_manage_elections_usecase,
)
from evoting.interfaces.web.api.errors import raise_for_failure
from evoting.interfaces.web.api.schemas import (
    CandidatePair,
    CreateElectionRequest,
    DeterminateElectionRequest,
    StartElectionRequest,
    TerminateElectionRequest,
    UpdateDraftElectionRequest,
    UpdateOngoingElectionRequest,
)


router = APIRouter(prefix="/election", tags=["election"])

ManageDep = Annotated[ManageElectionsUseCase, Depends(get_manage_elections_usecase)]
LifecycleDep = Annotated[
    ElectionLifecycleUseCase, Depends(get_election_lifecycle_usecase)
]


def _pairs(candidates: list[CandidatePair] | None) -> list[CandidatePairDto] | None:
    if candidates is None:
        return None
    return [
        CandidatePairDto(lead_id=c.lead_id, deputy_id=c.deputy_id) for c in candidates
    ]


@router.get("")
async def list_elections(
    actor: CurrentActor,
    usecase: ManageDep,
    status_filter: Annotated[ElectionStatus | None, Query(alias="status")] = None,
) -> dict[str, list[ElectionOutputItem]]:
    """Elections visible to the caller, grouped by status."""
    result = await usecase.list_elections(
        ListElectionsInputDto(actor=actor, status=status_filter)
    )
    raise_for_failure(result)
    return result.elections


@router.get("/{election_id}")
async def get_election(
    election_id: int, actor: CurrentActor, usecase: ManageDep
) -> ElectionOutputItem:
    result = await usecase.get_election(
        GetElectionInputDto(actor=actor, election_id=election_id)
    )
    raise_for_failure(result)
    return result.election  # type: ignore[return-value]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_election(
    body: CreateElectionRequest, actor: CurrentActor, usecase: ManageDep
) -> ElectionOutputItem:
    result = await usecase.create_election(
        CreateElectionInputDto(
            actor=actor,
            name=body.name,
            organization=body.organization,
            description=body.description,
            candidates=_pairs(body.candidates) or [],
            witness_ids=body.witness_ids,
        )
    )
    raise_for_failure(result)
    return result.election  # type: ignore[return-value]


@router.patch("/draft/{election_id}")
async def update_draft_election(
    election_id: int,
    body: UpdateDraftElectionRequest,
    actor: CurrentActor,
    usecase: ManageDep,
) -> ElectionOutputItem:
    result = await usecase.update_draft_election(
        UpdateDraftElectionInputDto(
            actor=actor,
            election_id=election_id,
            name=body.name,
            organization=body.organization,
            description=body.description,
            candidates=_pairs(body.candidates),
            witness_ids=body.witness_ids,
        )
    )
    raise_for_failure(result)
    return result.election  # type: ignore[return-value]


@router.patch("/start/{election_id}")
async def start_election(
    election_id: int,
    body: StartElectionRequest,
    actor: CurrentActor,
    usecase: LifecycleDep,
) -> ElectionOutputItem:
    result = await usecase.start_election(
        StartElectionInputDto(
            actor=actor,
            election_id=election_id,
            whitelist_start=body.whitelist_start,
            whitelist_hours=body.whitelist_hours,
            pending_hours=body.pending_hours,
            vote_hours=body.vote_hours,
            public_key=body.public_key,
        )
    )
    raise_for_failure(result)
    return result.election  # type: ignore[return-value]


@router.patch("/ongoing/{election_id}")
async def update_ongoing_election(
    election_id: int,
    body: UpdateOngoingElectionRequest,
    actor: CurrentActor,
    usecase: ManageDep,
) -> ElectionOutputItem:
    result = await usecase.update_ongoing_election(
        UpdateOngoingElectionInputDto(
            actor=actor,
            election_id=election_id,
            **body.model_dump(),
        )
    )
    raise_for_failure(result)
    return result.election  # type: ignore[return-value]


@router.delete("/delete/{election_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_election(
    election_id: int, actor: CurrentActor, usecase: ManageDep
) -> None:
    result = await usecase.delete_election(
        DeleteElectionInputDto(actor=actor, election_id=election_id)
    )
    raise_for_failure(result)


@router.patch("/terminate")
async def terminate_election(
    body: TerminateElectionRequest, actor: CurrentActor, usecase: LifecycleDep
) -> TerminateElectionOutputDto:
    """Terminate as admin, or file a witness exception as an assigned witness."""
    result = await usecase.terminate_election(
        TerminateElectionInputDto(
            actor=actor, election_id=body.election_id, note=body.note
        )
    )
    raise_for_failure(result)
    return result


@router.patch("/determinate")
async def determinate_election(
    body: DeterminateElectionRequest, actor: CurrentActor, usecase: LifecycleDep
) -> ElectionOutputItem:
    result = await usecase.determinate_election(
        DeterminateElectionInputDto(
            actor=actor,
            election_id=body.election_id,
            whitelist_start=body.whitelist_start,
            whitelist_end=body.whitelist_end,
            vote_start=body.vote_start,
            vote_end=body.vote_end,
        )
    )
    raise_for_failure(result)
    return result.election  # type: ignore[return-value]
