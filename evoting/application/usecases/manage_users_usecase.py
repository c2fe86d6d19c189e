"""User administration and identity-document binding."""

from evoting.application.dtos.user_dto import (
    BindIdentityDocumentInputDto,
    GrantRoleInputDto,
    TerminateAccountInputDto,
    UserOutputDto,
    UserOutputItem,
)
from evoting.application.usecases.base import TransactionalUseCase
from evoting.common.logging import get_logger
from evoting.domain.entities import User, UserRole
from evoting.domain.exceptions import NotFoundError, ValidationError
from evoting.domain.services.access_policy import AccessPolicy, Action
from evoting.domain.services.interfaces.file_storage_service import (
    IFileStorageService,
)
from evoting.domain.services.interfaces.unit_of_work import IUnitOfWork


logger = get_logger(__name__)

GRANTABLE_ROLES = frozenset({UserRole.USER, UserRole.CANDIDATE, UserRole.WITNESS})


class ManageUsersUseCase(TransactionalUseCase):
    def __init__(
        self,
        uow: IUnitOfWork,
        file_storage_service: IFileStorageService,
        max_upload_bytes: int = 5 * 1024 * 1024,
    ) -> None:
        super().__init__(uow)
        self.file_storage_service = file_storage_service
        self.max_upload_bytes = max_upload_bytes

    async def bind_identity_document(
        self, input_dto: BindIdentityDocumentInputDto
    ) -> UserOutputDto:
        """Store the caller's identity-document image and record its reference.

        The stored file is removed again if the profile update fails.
        """
        reference: str | None = None
        try:
            if not input_dto.content:
                raise ValidationError("Uploaded file is empty")
            if len(input_dto.content) > self.max_upload_bytes:
                raise ValidationError(
                    f"Uploaded file exceeds {self.max_upload_bytes} bytes",
                    {"size": len(input_dto.content)},
                )
            user = await self._load_user(input_dto.actor.user_id)

            reference = await self.file_storage_service.save(
                input_dto.filename, input_dto.content
            )
            user.identity_document = reference
            updated = await self.uow.user_repository.update(user)
            await self.uow.commit()

            logger.info("Identity document bound", user_id=updated.id)
            return UserOutputDto(user=UserOutputItem.from_entity(updated))
        except Exception as e:
            if reference is not None:
                await self.file_storage_service.delete(reference)
            code, message = await self._handle_failure("bind identity document", e)
            return UserOutputDto(success=False, error_code=code, error_message=message)

    async def grant_role(self, input_dto: GrantRoleInputDto) -> UserOutputDto:
        """Change a user's role; ADMIN cannot be granted this way."""
        try:
            AccessPolicy.require(input_dto.actor, Action.MANAGE_USERS)
            try:
                role = UserRole(input_dto.role)
            except ValueError as e:
                raise ValidationError(f"Unknown role: {input_dto.role}") from e
            if role not in GRANTABLE_ROLES:
                raise ValidationError(f"Role {role.value} cannot be granted")

            user = await self._load_user(input_dto.user_id)
            if user.role == UserRole.ADMIN:
                raise ValidationError("Admin accounts cannot change role")
            user.role = role
            updated = await self.uow.user_repository.update(user)
            await self.uow.commit()

            logger.info("Role granted", user_id=updated.id, role=role.value)
            return UserOutputDto(user=UserOutputItem.from_entity(updated))
        except Exception as e:
            code, message = await self._handle_failure("grant role", e)
            return UserOutputDto(success=False, error_code=code, error_message=message)

    async def terminate_account(
        self, input_dto: TerminateAccountInputDto
    ) -> UserOutputDto:
        try:
            AccessPolicy.require(input_dto.actor, Action.MANAGE_USERS)
            user = await self._load_user(input_dto.user_id)
            if user.role == UserRole.ADMIN:
                raise ValidationError("Admin accounts cannot be terminated")

            user.is_terminated = True
            updated = await self.uow.user_repository.update(user)
            await self.uow.commit()

            logger.info("Account terminated", user_id=updated.id)
            return UserOutputDto(user=UserOutputItem.from_entity(updated))
        except Exception as e:
            code, message = await self._handle_failure("terminate account", e)
            return UserOutputDto(success=False, error_code=code, error_message=message)

    async def _load_user(self, user_id: int) -> User:
        user = await self.uow.user_repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user
