"""Whitelist registration, review and listing."""

from evoting.application.dtos.whitelist_dto import (
    DecideWhitelistInputDto,
    ListWhitelistsInputDto,
    ListWhitelistsOutputDto,
    RegisterWhitelistInputDto,
    WhitelistEntryOutputDto,
    WhitelistEntryOutputItem,
)
from evoting.application.usecases.base import Clock, TransactionalUseCase
from evoting.common.logging import get_logger
from evoting.domain.entities import WhitelistEntry, WhitelistStatus
from evoting.domain.exceptions import NotFoundError, UnauthorizedError, ValidationError
from evoting.domain.services.access_policy import AccessPolicy, Action
from evoting.domain.services.election_state_machine import ElectionStateMachine
from evoting.domain.services.interfaces.notification_service import (
    INotificationService,
)
from evoting.domain.services.interfaces.unit_of_work import IUnitOfWork
from evoting.domain.services.whitelist_gate import WhitelistGate


logger = get_logger(__name__)


class ManageWhitelistUseCase(TransactionalUseCase):
    """Voter registration for elections and its review by admins."""

    def __init__(
        self,
        uow: IUnitOfWork,
        notification_service: INotificationService,
        clock: Clock | None = None,
    ) -> None:
        super().__init__(uow, clock)
        self.notification_service = notification_service

    async def register_whitelist(
        self, input_dto: RegisterWhitelistInputDto
    ) -> WhitelistEntryOutputDto:
        """Register the caller for an election's whitelist as PENDING."""
        try:
            actor = input_dto.actor
            AccessPolicy.require(actor, Action.REGISTER_WHITELIST)
            address = input_dto.address.strip()
            if not address:
                raise ValidationError("Address is required")

            election = await self._load_election(input_dto.election_id)
            user = await self.uow.user_repository.get_by_id(actor.user_id)
            if user is None:
                raise NotFoundError("User", actor.user_id)

            repo = self.uow.whitelist_repository
            WhitelistGate.check_registration(
                election,
                user,
                self.now(),
                existing_for_user=await repo.get_by_user_and_election(
                    actor.user_id,
                    election.id,  # type: ignore[arg-type]
                ),
                existing_for_address=await repo.get_by_address_and_election(
                    address,
                    election.id,  # type: ignore[arg-type]
                ),
            )

            entry = await repo.create(
                WhitelistEntry(
                    election_id=election.id,  # type: ignore[arg-type]
                    user_id=actor.user_id,
                    email=user.email,
                    address=address,
                )
            )
            await self.uow.commit()

            logger.info(
                "Whitelist registration received",
                election_id=election.id,
                whitelist_id=entry.id,
            )
            return WhitelistEntryOutputDto(
                entry=WhitelistEntryOutputItem.from_entity(entry)
            )
        except Exception as e:
            code, message = await self._handle_failure("register whitelist", e)
            return WhitelistEntryOutputDto(
                success=False, error_code=code, error_message=message
            )

    async def decide_whitelist(
        self, input_dto: DecideWhitelistInputDto
    ) -> WhitelistEntryOutputDto:
        """Accept or decline an entry and notify the registered e-mail."""
        try:
            AccessPolicy.require(input_dto.actor, Action.DECIDE_WHITELIST)
            try:
                status = WhitelistStatus(input_dto.status)
            except ValueError as e:
                raise ValidationError(
                    f"Unknown whitelist status: {input_dto.status}"
                ) from e
            if status == WhitelistStatus.PENDING:
                raise ValidationError("Decision must be ACCEPT or DECLINE")

            entry = await self.uow.whitelist_repository.get_by_id(
                input_dto.whitelist_id
            )
            if entry is None:
                raise NotFoundError("Whitelist entry", input_dto.whitelist_id)
            election = await self._load_election(entry.election_id)
            ElectionStateMachine.ensure_not_terminated(election)

            entry.status = status
            updated = await self.uow.whitelist_repository.update(entry)
            await self.uow.commit()
        except Exception as e:
            code, message = await self._handle_failure("decide whitelist", e)
            return WhitelistEntryOutputDto(
                success=False, error_code=code, error_message=message
            )

        logger.info(
            "Whitelist decided",
            whitelist_id=updated.id,
            status=updated.status.value,
        )
        template_id = (
            "whitelist_accept"
            if updated.status == WhitelistStatus.ACCEPT
            else "whitelist_decline"
        )
        await self.notification_service.send(
            updated.email, template_id, {"election_name": election.name}
        )
        return WhitelistEntryOutputDto(
            entry=WhitelistEntryOutputItem.from_entity(updated)
        )

    async def list_whitelists(
        self, input_dto: ListWhitelistsInputDto
    ) -> ListWhitelistsOutputDto:
        """List an election's entries grouped by status."""
        try:
            actor = input_dto.actor
            AccessPolicy.require(actor, Action.VIEW_WHITELISTS)
            await self._reconcile(self.now())

            election = await self._load_election(input_dto.election_id)
            if actor.is_witness and not election.is_witness(actor.user_id):
                raise UnauthorizedError(
                    "Witness is not assigned to this election",
                    {"election_id": election.id, "user_id": actor.user_id},
                )

            entries = await self.uow.whitelist_repository.get_by_election(
                election.id  # type: ignore[arg-type]
            )
            await self.uow.commit()

            grouped: dict[str, list[WhitelistEntryOutputItem]] = {
                s.value: [] for s in WhitelistStatus
            }
            for entry in entries:
                grouped[entry.status.value].append(
                    WhitelistEntryOutputItem.from_entity(entry)
                )
            return ListWhitelistsOutputDto(entries=grouped)
        except Exception as e:
            code, message = await self._handle_failure("list whitelists", e)
            return ListWhitelistsOutputDto(
                success=False, error_code=code, error_message=message
            )
