"""Account registration, e-mail verification, login and password reset."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from evoting.application.dtos.user_dto import (
    ForgotPasswordInputDto,
    LoginInputDto,
    LoginOutputDto,
    RegisterUserInputDto,
    ResetPasswordInputDto,
    UserOutputItem,
)
from evoting.application.usecases.auth_usecase import AuthUseCase
from evoting.interfaces.web.api.dependencies import get_auth_usecase
from evoting.interfaces.web.api.errors import raise_for_failure
from evoting.interfaces.web.api.schemas import (
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
)


router = APIRouter(prefix="/auth", tags=["auth"])

AuthDep = Annotated[AuthUseCase, Depends(get_auth_usecase)]


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, usecase: AuthDep) -> UserOutputItem:
    result = await usecase.register_user(
        RegisterUserInputDto(name=body.name, email=body.email, password=body.password)
    )
    raise_for_failure(result)
    return result.user  # type: ignore[return-value]


@router.get("/verify-email/{token}")
async def verify_email(token: str, usecase: AuthDep) -> UserOutputItem:
    result = await usecase.verify_email(token)
    raise_for_failure(result)
    return result.user  # type: ignore[return-value]


@router.post("/login")
async def login(body: LoginRequest, usecase: AuthDep) -> LoginOutputDto:
    result = await usecase.login(
        LoginInputDto(email=body.email, password=body.password)
    )
    raise_for_failure(result)
    return result


@router.post("/forgot-password")
async def forgot_password(
    body: ForgotPasswordRequest, usecase: AuthDep
) -> dict[str, str]:
    result = await usecase.forgot_password(ForgotPasswordInputDto(email=body.email))
    raise_for_failure(result)
    return {"message": "Reset password e-mail sent"}


@router.post("/reset-password")
async def reset_password(
    token: str, body: ResetPasswordRequest, usecase: AuthDep
) -> UserOutputItem:
    """Set a new password; ``token`` comes from the e-mailed reset link."""
    result = await usecase.reset_password(
        ResetPasswordInputDto(token=token, password=body.password)
    )
    raise_for_failure(result)
    return result.user  # type: ignore[return-value]
