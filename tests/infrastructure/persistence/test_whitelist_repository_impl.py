"""Tests for WhitelistRepositoryImpl and UserRepositoryImpl constraint mapping."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from evoting.domain.entities.user import User
from evoting.domain.entities.whitelist_entry import WhitelistEntry
from evoting.domain.exceptions import (
    DuplicateAddressError,
    DuplicateEmailError,
    DuplicateUserError,
)
from evoting.infrastructure.exceptions import DatabaseError
from evoting.infrastructure.persistence.user_repository_impl import UserRepositoryImpl
from evoting.infrastructure.persistence.whitelist_repository_impl import (
    WhitelistRepositoryImpl,
)


def _unique_violation(constraint: str) -> IntegrityError:
    return IntegrityError(
        "INSERT", {}, Exception(f'violates unique constraint "{constraint}"')
    )


@pytest.fixture
def mock_session() -> MagicMock:
    session = MagicMock(spec=AsyncSession)
    session.execute = AsyncMock()
    return session


def _entry() -> WhitelistEntry:
    return WhitelistEntry(
        election_id=1, user_id=2, email="user2@example.com", address="0x2"
    )


class TestWhitelistRepositoryImpl:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("constraint", "error"),
        [
            ("uq_whitelist_entries_address_election", DuplicateAddressError),
            ("uq_whitelist_entries_user_election", DuplicateUserError),
        ],
    )
    async def test_unique_violations(
        self, mock_session: MagicMock, constraint: str, error: type[Exception]
    ) -> None:
        mock_session.execute.side_effect = _unique_violation(constraint)

        with pytest.raises(error):
            await WhitelistRepositoryImpl(mock_session).create(_entry())

    @pytest.mark.asyncio
    async def test_other_errors_are_database_errors(
        self, mock_session: MagicMock
    ) -> None:
        mock_session.execute.side_effect = OperationalError("INSERT", {}, Exception())

        with pytest.raises(DatabaseError):
            await WhitelistRepositoryImpl(mock_session).create(_entry())

    @pytest.mark.asyncio
    async def test_count_by_election(self, mock_session: MagicMock) -> None:
        mock_result = MagicMock()
        mock_result.scalar.return_value = 4
        mock_session.execute.return_value = mock_result

        assert await WhitelistRepositoryImpl(mock_session).count_by_election(1) == 4


class TestUserRepositoryImpl:
    @pytest.mark.asyncio
    async def test_duplicate_email(self, mock_session: MagicMock) -> None:
        mock_session.execute.side_effect = _unique_violation("uq_users_email")

        with pytest.raises(DuplicateEmailError):
            await UserRepositoryImpl(mock_session).create(
                User(name="Ada", email="ada@example.com", password_hash="x")
            )

    @pytest.mark.asyncio
    async def test_get_by_ids_empty_list(self, mock_session: MagicMock) -> None:
        assert await UserRepositoryImpl(mock_session).get_by_ids([]) == []
