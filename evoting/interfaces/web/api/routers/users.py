"""Profile and user administration routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile

from evoting.application.dtos.user_dto import (
    BindIdentityDocumentInputDto,
    GrantRoleInputDto,
    TerminateAccountInputDto,
    UserOutputItem,
)
from evoting.application.usecases.manage_users_usecase import ManageUsersUseCase
from evoting.interfaces.web.api.dependencies import (
    CurrentActor,
    get_manage_users_usecase,
)
from evoting.interfaces.web.api.errors import raise_for_failure
from evoting.interfaces.web.api.schemas import GrantRoleRequest


profile_router = APIRouter(prefix="/profile", tags=["profile"])
router = APIRouter(prefix="/user", tags=["user"])

UsersDep = Annotated[ManageUsersUseCase, Depends(get_manage_users_usecase)]


@profile_router.post("/identity-document")
async def upload_identity_document(
    actor: CurrentActor,
    usecase: UsersDep,
    file: Annotated[UploadFile, File()],
) -> UserOutputItem:
    """Upload the caller's identity-document image."""
    content = await file.read()
    result = await usecase.bind_identity_document(
        BindIdentityDocumentInputDto(
            actor=actor, filename=file.filename or "", content=content
        )
    )
    raise_for_failure(result)
    return result.user  # type: ignore[return-value]


@router.put("/role/{user_id}")
async def grant_role(
    user_id: int, body: GrantRoleRequest, actor: CurrentActor, usecase: UsersDep
) -> UserOutputItem:
    result = await usecase.grant_role(
        GrantRoleInputDto(
            actor=actor,
            user_id=user_id,
            role=body.role,  # type: ignore[arg-type]
        )
    )
    raise_for_failure(result)
    return result.user  # type: ignore[return-value]


@router.put("/terminate-account/{user_id}")
async def terminate_account(
    user_id: int, actor: CurrentActor, usecase: UsersDep
) -> UserOutputItem:
    result = await usecase.terminate_account(
        TerminateAccountInputDto(actor=actor, user_id=user_id)
    )
    raise_for_failure(result)
    return result.user  # type: ignore[return-value]
