"""FastAPI dependency providers.

One unit of work is opened per request; every use case resolved for the
request shares it.
"""

from collections.abc import AsyncIterator
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from evoting.application.usecases.auth_usecase import AuthUseCase
from evoting.application.usecases.base import Clock
from evoting.application.usecases.cast_ballot_usecase import CastBallotUseCase
from evoting.application.usecases.election_lifecycle_usecase import (
    ElectionLifecycleUseCase,
)
from evoting.application.usecases.election_result_usecase import (
    ElectionResultUseCase,
)
from evoting.application.usecases.manage_elections_usecase import (
    ManageElectionsUseCase,
)
from evoting.application.usecases.manage_users_usecase import ManageUsersUseCase
from evoting.application.usecases.manage_whitelist_usecase import (
    ManageWhitelistUseCase,
)
from evoting.domain.services.interfaces.file_storage_service import (
    IFileStorageService,
)
from evoting.domain.services.interfaces.notification_service import (
    INotificationService,
)
from evoting.domain.services.interfaces.password_hasher import IPasswordHasher
from evoting.domain.services.interfaces.token_service import ITokenService
from evoting.domain.services.interfaces.unit_of_work import IUnitOfWork
from evoting.domain.utils.time import utc_now
from evoting.domain.value_objects.actor import Actor
from evoting.infrastructure.config.async_database import async_db
from evoting.infrastructure.config.settings import Settings, get_settings
from evoting.infrastructure.external.jwt_token_service import JWTTokenService
from evoting.infrastructure.external.local_file_storage_service import (
    LocalFileStorageService,
)
from evoting.infrastructure.external.passlib_password_hasher import (
    PasslibPasswordHasher,
)
from evoting.infrastructure.external.smtp_notification_service import (
    SmtpNotificationService,
)
from evoting.infrastructure.persistence.unit_of_work_impl import UnitOfWorkImpl
from evoting.interfaces.web.api.errors import raise_for_failure


bearer_scheme = HTTPBearer(auto_error=False)


async def get_uow() -> AsyncIterator[IUnitOfWork]:
    async with async_db.get_session() as session:
        yield UnitOfWorkImpl(session)


def get_clock() -> Clock:
    return utc_now


@lru_cache
def get_notification_service() -> INotificationService:
    return SmtpNotificationService(get_settings())


@lru_cache
def get_token_service() -> ITokenService:
    return JWTTokenService(get_settings())


@lru_cache
def get_password_hasher() -> IPasswordHasher:
    return PasslibPasswordHasher()


@lru_cache
def get_file_storage_service() -> IFileStorageService:
    return LocalFileStorageService(get_settings().upload_dir)


SettingsDep = Annotated[Settings, Depends(get_settings)]
UowDep = Annotated[IUnitOfWork, Depends(get_uow)]
ClockDep = Annotated[Clock, Depends(get_clock)]


def get_auth_usecase(
    uow: UowDep,
    config: SettingsDep,
    password_hasher: Annotated[IPasswordHasher, Depends(get_password_hasher)],
    token_service: Annotated[ITokenService, Depends(get_token_service)],
    notification_service: Annotated[
        INotificationService, Depends(get_notification_service)
    ],
) -> AuthUseCase:
    return AuthUseCase(
        uow,
        password_hasher,
        token_service,
        notification_service,
        client_url=config.client_url,
        reset_token_minutes=config.reset_token_expire_minutes,
    )


def get_manage_elections_usecase(
    uow: UowDep, clock: ClockDep
) -> ManageElectionsUseCase:
    return ManageElectionsUseCase(uow, clock)


def get_election_lifecycle_usecase(
    uow: UowDep, clock: ClockDep, config: SettingsDep
) -> ElectionLifecycleUseCase:
    return ElectionLifecycleUseCase(
        uow,
        clock,
        witness_exception_threshold=config.witness_exception_threshold,
    )


def get_manage_whitelist_usecase(
    uow: UowDep,
    clock: ClockDep,
    notification_service: Annotated[
        INotificationService, Depends(get_notification_service)
    ],
) -> ManageWhitelistUseCase:
    return ManageWhitelistUseCase(uow, notification_service, clock)


def get_cast_ballot_usecase(
    uow: UowDep, clock: ClockDep, config: SettingsDep
) -> CastBallotUseCase:
    return CastBallotUseCase(
        uow, clock, invalidation_grace_hours=config.invalidation_grace_hours
    )


def get_election_result_usecase(
    uow: UowDep, clock: ClockDep
) -> ElectionResultUseCase:
    return ElectionResultUseCase(uow, clock)


def get_manage_users_usecase(
    uow: UowDep,
    config: SettingsDep,
    file_storage_service: Annotated[
        IFileStorageService, Depends(get_file_storage_service)
    ],
) -> ManageUsersUseCase:
    return ManageUsersUseCase(
        uow, file_storage_service, max_upload_bytes=config.max_upload_bytes
    )


async def get_current_actor(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    auth_usecase: Annotated[AuthUseCase, Depends(get_auth_usecase)],
) -> Actor:
    """Resolve the bearer token of the request to an Actor."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"code": "InvalidCredentials", "message": "Not authenticated"},
            headers={"WWW-Authenticate": "Bearer"},
        )
    result = await auth_usecase.authenticate(credentials.credentials)
    raise_for_failure(result)
    return result.actor  # type: ignore[return-value]


CurrentActor = Annotated[Actor, Depends(get_current_actor)]
