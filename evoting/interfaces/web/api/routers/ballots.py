"""Ballot casting and invalidation."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from evoting.application.dtos.ballot_dto import (
    BallotOutputItem,
    CastVoteInputDto,
    InvalidateBallotInputDto,
)
from evoting.application.usecases.cast_ballot_usecase import CastBallotUseCase
from evoting.interfaces.web.api.dependencies import (
    CurrentActor,
    get_cast_ballot_usecase,
)
from evoting.interfaces.web.api.errors import raise_for_failure
from evoting.interfaces.web.api.schemas import CastVoteRequest


router = APIRouter(prefix="/ballot", tags=["ballot"])

BallotDep = Annotated[CastBallotUseCase, Depends(get_cast_ballot_usecase)]


@router.post("/vote/{election_id}", status_code=status.HTTP_201_CREATED)
async def cast_vote(
    election_id: int,
    body: CastVoteRequest,
    actor: CurrentActor,
    usecase: BallotDep,
) -> BallotOutputItem:
    result = await usecase.cast_vote(
        CastVoteInputDto(
            actor=actor,
            election_id=election_id,
            candidate_id=body.candidate_id,
            transaction=body.transaction,
        )
    )
    raise_for_failure(result)
    return result.ballot  # type: ignore[return-value]


@router.put("/invalidate/{whitelist_id}")
async def invalidate_ballot(
    whitelist_id: int, actor: CurrentActor, usecase: BallotDep
) -> list[BallotOutputItem]:
    result = await usecase.invalidate_ballot(
        InvalidateBallotInputDto(actor=actor, whitelist_id=whitelist_id)
    )
    raise_for_failure(result)
    return result.ballots
