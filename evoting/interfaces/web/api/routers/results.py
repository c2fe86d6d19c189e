"""Public results of finished elections."""

from typing import Annotated

from fastapi import APIRouter, Depends

from evoting.application.dtos.election_dto import ElectionOutputItem
from evoting.application.dtos.result_dto import (
    ElectionResultOutputDto,
    GetResultInputDto,
)
from evoting.application.usecases.election_result_usecase import (
    ElectionResultUseCase,
)
from evoting.interfaces.web.api.dependencies import get_election_result_usecase
from evoting.interfaces.web.api.errors import raise_for_failure


router = APIRouter(prefix="/result", tags=["result"])

ResultDep = Annotated[ElectionResultUseCase, Depends(get_election_result_usecase)]


@router.get("/finished")
async def list_finished_elections(usecase: ResultDep) -> list[ElectionOutputItem]:
    result = await usecase.list_finished_elections()
    raise_for_failure(result)
    return result.elections


@router.get("/finished/{election_id}")
async def get_finished_result(
    election_id: int, usecase: ResultDep
) -> ElectionResultOutputDto:
    result = await usecase.get_finished_result(
        GetResultInputDto(election_id=election_id)
    )
    raise_for_failure(result)
    return result
