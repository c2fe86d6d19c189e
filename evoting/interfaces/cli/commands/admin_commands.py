"""Operator commands: admin bootstrap and the election finish sweep."""

import asyncio

from typing import Any

from evoting.application.dtos.user_dto import CreateAdminInputDto
from evoting.application.usecases.auth_usecase import AuthUseCase
from evoting.application.usecases.election_lifecycle_usecase import (
    ElectionLifecycleUseCase,
)
from evoting.infrastructure.config.async_database import async_db
from evoting.infrastructure.config.settings import get_settings
from evoting.infrastructure.external.jwt_token_service import JWTTokenService
from evoting.infrastructure.external.passlib_password_hasher import (
    PasslibPasswordHasher,
)
from evoting.infrastructure.external.smtp_notification_service import (
    SmtpNotificationService,
)
from evoting.infrastructure.persistence.unit_of_work_impl import UnitOfWorkImpl
from evoting.interfaces.cli.base import BaseCommand, Command


class CreateAdminCommand(Command, BaseCommand):
    """Create a verified ADMIN account."""

    def execute(self, **kwargs: Any) -> None:
        result = asyncio.run(
            self._run(
                CreateAdminInputDto(
                    name=kwargs["name"],
                    email=kwargs["email"],
                    password=kwargs["password"],
                )
            )
        )
        if not result.success:
            self.error(f"{result.error_code}: {result.error_message}", exit_code=1)
            return
        self.success(f"Admin {result.user.email} created (id={result.user.id})")

    @staticmethod
    async def _run(input_dto: CreateAdminInputDto):
        config = get_settings()
        try:
            async with async_db.get_session() as session:
                usecase = AuthUseCase(
                    UnitOfWorkImpl(session),
                    PasslibPasswordHasher(),
                    JWTTokenService(config),
                    SmtpNotificationService(config),
                    client_url=config.client_url,
                )
                return await usecase.create_admin(input_dto)
        finally:
            await async_db.dispose()


class FinishElapsedCommand(Command, BaseCommand):
    """Finish every ONGOING election whose vote window has passed."""

    def execute(self, **kwargs: Any) -> None:
        result = asyncio.run(self._run())
        if not result.success:
            self.error(f"{result.error_code}: {result.error_message}", exit_code=1)
            return
        self.success(f"{result.finished} election(s) finished")

    @staticmethod
    async def _run():
        try:
            async with async_db.get_session() as session:
                usecase = ElectionLifecycleUseCase(UnitOfWorkImpl(session))
                return await usecase.finish_elapsed_elections()
        finally:
            await async_db.dispose()
