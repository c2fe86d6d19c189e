"""Tests for ManageWhitelistUseCase."""

from collections.abc import Callable
from datetime import datetime
from unittest.mock import AsyncMock

import pytest

from evoting.application.dtos.whitelist_dto import (
    DecideWhitelistInputDto,
    ListWhitelistsInputDto,
    RegisterWhitelistInputDto,
)
from evoting.application.usecases.manage_whitelist_usecase import (
    ManageWhitelistUseCase,
)
from evoting.domain.entities import ElectionStatus, UserRole, WhitelistStatus
from tests.fixtures.entity_factories import (
    NOW,
    WITNESS_ID,
    admin_actor,
    create_actor,
    create_election,
    create_user,
    create_whitelist_entry,
    hours,
)
from tests.fixtures.in_memory_uow import InMemoryStore, InMemoryUnitOfWork


@pytest.fixture
def notifier() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def use_case(
    uow: InMemoryUnitOfWork, notifier: AsyncMock, clock: Callable[[], datetime]
) -> ManageWhitelistUseCase:
    return ManageWhitelistUseCase(uow, notifier, clock)


@pytest.fixture
def election(store: InMemoryStore) -> int:
    """ONGOING election whose whitelist window is open."""
    store.add(
        create_election(
            id=1,
            status=ElectionStatus.ONGOING,
            scheduled_from=NOW - hours(1),
            witness_ids=[WITNESS_ID],
        )
    )
    return 1


class TestRegisterWhitelist:
    @pytest.mark.asyncio
    async def test_registers_pending_entry(
        self, use_case: ManageWhitelistUseCase, election: int
    ) -> None:
        result = await use_case.register_whitelist(
            RegisterWhitelistInputDto(
                actor=create_actor(1), election_id=election, address=" 0xabc "
            )
        )

        assert result.success is True
        assert result.entry.status == "PENDING"
        assert result.entry.address == "0xabc"
        assert result.entry.email == "user1@example.com"

    @pytest.mark.asyncio
    async def test_duplicate_user(
        self, use_case: ManageWhitelistUseCase, election: int, store: InMemoryStore
    ) -> None:
        store.add(create_whitelist_entry(id=1, user_id=1, address="0x1"))

        result = await use_case.register_whitelist(
            RegisterWhitelistInputDto(
                actor=create_actor(1), election_id=election, address="0x2"
            )
        )

        assert result.error_code == "DuplicateUser"

    @pytest.mark.asyncio
    async def test_duplicate_address(
        self, use_case: ManageWhitelistUseCase, election: int, store: InMemoryStore
    ) -> None:
        store.add(create_whitelist_entry(id=1, user_id=2, address="0x1"))

        result = await use_case.register_whitelist(
            RegisterWhitelistInputDto(
                actor=create_actor(1), election_id=election, address="0x1"
            )
        )

        assert result.error_code == "DuplicateAddress"

    @pytest.mark.asyncio
    async def test_identity_document_required(
        self, use_case: ManageWhitelistUseCase, election: int, store: InMemoryStore
    ) -> None:
        store.add(create_user(id=4, identity_document=None))

        result = await use_case.register_whitelist(
            RegisterWhitelistInputDto(
                actor=create_actor(4), election_id=election, address="0x4"
            )
        )

        assert result.error_code == "ProfileIncomplete"
        assert store.rows("whitelist_entries") == []

    @pytest.mark.asyncio
    async def test_closed_window(
        self, use_case: ManageWhitelistUseCase, store: InMemoryStore
    ) -> None:
        store.add(
            create_election(
                id=2, status=ElectionStatus.ONGOING, scheduled_from=NOW - hours(2.5)
            )
        )

        result = await use_case.register_whitelist(
            RegisterWhitelistInputDto(
                actor=create_actor(1), election_id=2, address="0xabc"
            )
        )

        assert result.error_code == "OutOfWindow"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status", "code"),
        [
            (ElectionStatus.DRAFT, "NotOngoing"),
            (ElectionStatus.TERMINATE, "ElectionTerminated"),
        ],
    )
    async def test_election_must_be_ongoing(
        self,
        use_case: ManageWhitelistUseCase,
        store: InMemoryStore,
        status: ElectionStatus,
        code: str,
    ) -> None:
        store.add(create_election(id=3, status=status, scheduled_from=NOW - hours(1)))

        result = await use_case.register_whitelist(
            RegisterWhitelistInputDto(
                actor=create_actor(1), election_id=3, address="0xabc"
            )
        )

        assert result.error_code == code

    @pytest.mark.asyncio
    async def test_admin_cannot_register(
        self, use_case: ManageWhitelistUseCase, election: int
    ) -> None:
        result = await use_case.register_whitelist(
            RegisterWhitelistInputDto(
                actor=admin_actor(), election_id=election, address="0xabc"
            )
        )

        assert result.error_code == "Unauthorized"


class TestDecideWhitelist:
    @pytest.fixture(autouse=True)
    def entry(self, store: InMemoryStore, election: int) -> None:
        store.add(create_whitelist_entry(id=1, election_id=election, user_id=2))

    @pytest.mark.asyncio
    async def test_accept_notifies_voter(
        self, use_case: ManageWhitelistUseCase, notifier: AsyncMock
    ) -> None:
        result = await use_case.decide_whitelist(
            DecideWhitelistInputDto(
                actor=admin_actor(), whitelist_id=1, status=WhitelistStatus.ACCEPT
            )
        )

        assert result.entry.status == "ACCEPT"
        notifier.send.assert_awaited_once_with(
            "user2@example.com",
            "whitelist_accept",
            {"election_name": "Student council"},
        )

    @pytest.mark.asyncio
    async def test_decline_uses_decline_template(
        self, use_case: ManageWhitelistUseCase, notifier: AsyncMock
    ) -> None:
        result = await use_case.decide_whitelist(
            DecideWhitelistInputDto(
                actor=admin_actor(), whitelist_id=1, status="DECLINE"
            )
        )

        assert result.entry.status == "DECLINE"
        assert notifier.send.await_args.args[1] == "whitelist_decline"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", ["PENDING", "MAYBE"])
    async def test_rejects_non_decisions(
        self, use_case: ManageWhitelistUseCase, notifier: AsyncMock, status: str
    ) -> None:
        result = await use_case.decide_whitelist(
            DecideWhitelistInputDto(actor=admin_actor(), whitelist_id=1, status=status)
        )

        assert result.error_code == "ValidationError"
        notifier.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_terminated_election_blocks_decision(
        self, use_case: ManageWhitelistUseCase, store: InMemoryStore
    ) -> None:
        store.add(
            create_election(
                id=1, status=ElectionStatus.TERMINATE, scheduled_from=NOW - hours(1)
            )
        )

        result = await use_case.decide_whitelist(
            DecideWhitelistInputDto(
                actor=admin_actor(), whitelist_id=1, status="ACCEPT"
            )
        )

        assert result.error_code == "ElectionTerminated"
        assert store.rows("whitelist_entries")[0].status == WhitelistStatus.PENDING

    @pytest.mark.asyncio
    async def test_missing_entry(self, use_case: ManageWhitelistUseCase) -> None:
        result = await use_case.decide_whitelist(
            DecideWhitelistInputDto(
                actor=admin_actor(), whitelist_id=99, status="ACCEPT"
            )
        )

        assert result.error_code == "NotFound"

    @pytest.mark.asyncio
    async def test_voter_cannot_decide(self, use_case: ManageWhitelistUseCase) -> None:
        result = await use_case.decide_whitelist(
            DecideWhitelistInputDto(
                actor=create_actor(2), whitelist_id=1, status="ACCEPT"
            )
        )

        assert result.error_code == "Unauthorized"


class TestListWhitelists:
    @pytest.fixture(autouse=True)
    def entries(self, store: InMemoryStore, election: int) -> None:
        store.add(create_whitelist_entry(id=1, user_id=1, address="0x1"))
        store.add(
            create_whitelist_entry(
                id=2, user_id=2, address="0x2", status=WhitelistStatus.ACCEPT
            )
        )
        store.add(
            create_whitelist_entry(
                id=3, user_id=3, address="0x3", status=WhitelistStatus.ACCEPT
            )
        )

    @pytest.mark.asyncio
    async def test_admin_sees_entries_grouped_by_status(
        self, use_case: ManageWhitelistUseCase
    ) -> None:
        result = await use_case.list_whitelists(
            ListWhitelistsInputDto(actor=admin_actor(), election_id=1)
        )

        grouped = {k: [e.id for e in v] for k, v in result.entries.items()}
        assert grouped == {"PENDING": [1], "ACCEPT": [2, 3], "DECLINE": []}

    @pytest.mark.asyncio
    async def test_assigned_witness_may_list(
        self, use_case: ManageWhitelistUseCase
    ) -> None:
        result = await use_case.list_whitelists(
            ListWhitelistsInputDto(
                actor=create_actor(WITNESS_ID, UserRole.WITNESS), election_id=1
            )
        )

        assert result.success is True

    @pytest.mark.asyncio
    async def test_unassigned_witness_is_unauthorized(
        self, use_case: ManageWhitelistUseCase
    ) -> None:
        result = await use_case.list_whitelists(
            ListWhitelistsInputDto(
                actor=create_actor(51, UserRole.WITNESS), election_id=1
            )
        )

        assert result.error_code == "Unauthorized"

    @pytest.mark.asyncio
    async def test_voter_is_unauthorized(
        self, use_case: ManageWhitelistUseCase
    ) -> None:
        result = await use_case.list_whitelists(
            ListWhitelistsInputDto(actor=create_actor(1), election_id=1)
        )

        assert result.error_code == "Unauthorized"
