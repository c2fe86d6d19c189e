"""Tests for ElectionRepositoryImpl."""

from datetime import UTC, datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from evoting.domain.entities.election import ElectionStatus
from evoting.infrastructure.exceptions import DatabaseError, UpdateError
from evoting.infrastructure.persistence.election_repository_impl import (
    ElectionRepositoryImpl,
)


NOW = datetime(2026, 5, 1, 12, 0, tzinfo=UTC)


def _row(**overrides) -> SimpleNamespace:
    values = {
        "id": 1,
        "name": "Student council",
        "organization": "Campus",
        "description": None,
        "status": "ONGOING",
        "whitelist_start": NOW,
        "whitelist_end": NOW,
        "vote_start": NOW,
        "vote_end": NOW,
        "public_key": "pk",
        "winner_id": None,
        "witness_ids": [50],
        "created_at": NOW,
        "updated_at": NOW,
    }
    values.update(overrides)
    return SimpleNamespace(_mapping=values)


class TestElectionRepositoryImpl:
    """Test cases for ElectionRepositoryImpl."""

    @pytest.fixture
    def mock_session(self) -> MagicMock:
        """Create mock async session."""
        session = MagicMock(spec=AsyncSession)
        session.execute = AsyncMock()
        return session

    @pytest.fixture
    def repository(self, mock_session: MagicMock) -> ElectionRepositoryImpl:
        return ElectionRepositoryImpl(mock_session)

    @pytest.mark.asyncio
    async def test_get_by_id_maps_row(
        self, repository: ElectionRepositoryImpl, mock_session: MagicMock
    ) -> None:
        mock_result = MagicMock()
        mock_result.first.return_value = _row()
        mock_session.execute.return_value = mock_result

        election = await repository.get_by_id(1)

        assert election is not None
        assert election.status == ElectionStatus.ONGOING
        assert election.witness_ids == [50]
        assert election.created_at == NOW

    @pytest.mark.asyncio
    async def test_get_by_statuses_passes_values(
        self, repository: ElectionRepositoryImpl, mock_session: MagicMock
    ) -> None:
        mock_result = MagicMock()
        mock_result.fetchall.return_value = [_row(id=1), _row(id=2, status="FINISH")]
        mock_session.execute.return_value = mock_result

        elections = await repository.get_by_statuses(
            [ElectionStatus.ONGOING, ElectionStatus.FINISH]
        )

        assert [e.id for e in elections] == [1, 2]
        params = mock_session.execute.call_args.args[1]
        assert params == {"statuses": ["ONGOING", "FINISH"]}

    @pytest.mark.asyncio
    async def test_get_by_statuses_empty_skips_query(
        self, repository: ElectionRepositoryImpl, mock_session: MagicMock
    ) -> None:
        assert await repository.get_by_statuses([]) == []
        mock_session.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_finish_elapsed_returns_rowcount(
        self, repository: ElectionRepositoryImpl, mock_session: MagicMock
    ) -> None:
        mock_result = MagicMock()
        mock_result.rowcount = 3
        mock_session.execute.return_value = mock_result

        assert await repository.finish_elapsed(NOW) == 3
        sql = str(mock_session.execute.call_args.args[0])
        assert "status = 'ONGOING'" in sql
        assert "vote_end < :now" in sql

    @pytest.mark.asyncio
    @pytest.mark.parametrize("rowcount,deleted", [(1, True), (0, False)])
    async def test_delete_reports_whether_a_row_was_removed(
        self,
        repository: ElectionRepositoryImpl,
        mock_session: MagicMock,
        rowcount: int,
        deleted: bool,
    ) -> None:
        mock_result = MagicMock()
        mock_result.rowcount = rowcount
        mock_session.execute.return_value = mock_result

        assert await repository.delete(7) is deleted
        assert mock_session.execute.call_args.args[1] == {"id": 7}

    @pytest.mark.asyncio
    async def test_pin_winner_returns_stored_winner(
        self, repository: ElectionRepositoryImpl, mock_session: MagicMock
    ) -> None:
        update_result = MagicMock()
        select_result = MagicMock()
        select_result.scalar.return_value = 2
        mock_session.execute.side_effect = [update_result, select_result]

        winner_id = await repository.pin_winner(1, 3)

        assert winner_id == 2
        pin_sql = str(mock_session.execute.call_args_list[0].args[0])
        assert "winner_id IS NULL" in pin_sql

    @pytest.mark.asyncio
    async def test_pin_winner_missing_election(
        self, repository: ElectionRepositoryImpl, mock_session: MagicMock
    ) -> None:
        select_result = MagicMock()
        select_result.scalar.return_value = None
        mock_session.execute.side_effect = [MagicMock(), select_result]

        with pytest.raises(UpdateError):
            await repository.pin_winner(99, 3)

    @pytest.mark.asyncio
    async def test_set_witnesses_replaces_rows(
        self, repository: ElectionRepositoryImpl, mock_session: MagicMock
    ) -> None:
        await repository.set_witnesses(1, [50, 51, 50])

        statements = [str(c.args[0]) for c in mock_session.execute.call_args_list]
        assert "DELETE FROM election_witnesses" in statements[0]
        assert len(statements) == 3
        calls = mock_session.execute.call_args_list
        inserted = [c.args[1]["user_id"] for c in calls[1:]]
        assert inserted == [50, 51]

    @pytest.mark.asyncio
    async def test_database_error_is_wrapped(
        self, repository: ElectionRepositoryImpl, mock_session: MagicMock
    ) -> None:
        mock_session.execute.side_effect = OperationalError("SELECT", {}, Exception())

        with pytest.raises(DatabaseError):
            await repository.finish_elapsed(NOW)
