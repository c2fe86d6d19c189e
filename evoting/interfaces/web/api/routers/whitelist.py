"""Whitelist registration and review."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from evoting.application.dtos.whitelist_dto import (
    DecideWhitelistInputDto,
    ListWhitelistsInputDto,
    RegisterWhitelistInputDto,
    WhitelistEntryOutputItem,
)
from evoting.application.usecases.manage_whitelist_usecase import (
    ManageWhitelistUseCase,
)
from evoting.interfaces.web.api.dependencies import (
    CurrentActor,
    get_manage_whitelist_usecase,
)
from evoting.interfaces.web.api.errors import raise_for_failure
from evoting.interfaces.web.api.schemas import (
    DecideWhitelistRequest,
    RegisterWhitelistRequest,
)


router = APIRouter(prefix="/whitelist", tags=["whitelist"])

WhitelistDep = Annotated[
    ManageWhitelistUseCase, Depends(get_manage_whitelist_usecase)
]


@router.post("", status_code=status.HTTP_201_CREATED)
async def register_whitelist(
    body: RegisterWhitelistRequest, actor: CurrentActor, usecase: WhitelistDep
) -> WhitelistEntryOutputItem:
    result = await usecase.register_whitelist(
        RegisterWhitelistInputDto(
            actor=actor, election_id=body.election_id, address=body.address
        )
    )
    raise_for_failure(result)
    return result.entry  # type: ignore[return-value]


@router.put("/accept/{whitelist_id}")
async def decide_whitelist(
    whitelist_id: int,
    body: DecideWhitelistRequest,
    actor: CurrentActor,
    usecase: WhitelistDep,
) -> WhitelistEntryOutputItem:
    result = await usecase.decide_whitelist(
        DecideWhitelistInputDto(
            actor=actor,
            whitelist_id=whitelist_id,
            status=body.status,  # type: ignore[arg-type]
        )
    )
    raise_for_failure(result)
    return result.entry  # type: ignore[return-value]


@router.get("/{election_id}")
async def list_whitelists(
    election_id: int, actor: CurrentActor, usecase: WhitelistDep
) -> dict[str, list[WhitelistEntryOutputItem]]:
    result = await usecase.list_whitelists(
        ListWhitelistsInputDto(actor=actor, election_id=election_id)
    )
    raise_for_failure(result)
    return result.entries
