"""Election repository implementation using SQLAlchemy."""

import logging

from datetime import UTC, datetime

from pydantic import BaseModel as PydanticBaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from evoting.domain.entities.election import Election, ElectionStatus
from evoting.domain.repositories.election_repository import ElectionRepository
from evoting.infrastructure.exceptions import DatabaseError, UpdateError
from evoting.infrastructure.persistence.base_repository_impl import BaseRepositoryImpl


logger = logging.getLogger(__name__)


class ElectionModel(PydanticBaseModel):
    """Election database model."""

    id: int | None = None
    name: str
    organization: str
    description: str | None = None
    status: str
    whitelist_start: datetime | None = None
    whitelist_end: datetime | None = None
    vote_start: datetime | None = None
    vote_end: datetime | None = None
    public_key: str | None = None
    winner_id: int | None = None
    witness_ids: list[int] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        arbitrary_types_allowed = True


class ElectionRepositoryImpl(BaseRepositoryImpl[Election], ElectionRepository):
    """Election repository implementation using SQLAlchemy."""

    TABLE = "elections"
    COLUMNS = (
        "id",
        "name",
        "organization",
        "description",
        "status",
        "whitelist_start",
        "whitelist_end",
        "vote_start",
        "vote_end",
        "public_key",
        "winner_id",
        "ARRAY(SELECT w.user_id FROM election_witnesses w "
        "WHERE w.election_id = elections.id ORDER BY w.user_id) AS witness_ids",
        "created_at",
        "updated_at",
    )

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session.

        Args:
            session: AsyncSession for database operations
        """
        super().__init__(
            session=session,
            entity_class=Election,
            model_class=ElectionModel,
        )

    async def get_by_statuses(
        self, statuses: list[ElectionStatus]
    ) -> list[Election]:
        """Get elections whose status is one of ``statuses``.

        Args:
            statuses: Allowed statuses

        Returns:
            Election entities ordered by ID
        """
        if not statuses:
            return []
        try:
            return await self._fetch_all(
                f"""
                SELECT {self._select_list}
                FROM elections
                WHERE status = ANY(:statuses)
                ORDER BY id
                """,
                {"statuses": [s.value for s in statuses]},
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error getting elections by status: {e}")
            raise DatabaseError(
                "Failed to get elections by status",
                {"statuses": [s.value for s in statuses], "error": str(e)},
            ) from e

    async def finish_elapsed(self, now: datetime) -> int:
        """Move every ONGOING election whose vote window has passed to FINISH.

        Args:
            now: Reference time

        Returns:
            Number of elections finished
        """
        try:
            result = await self.session.execute(
                text("""
                    UPDATE elections
                    SET status = 'FINISH', updated_at = :now
                    WHERE status = 'ONGOING'
                      AND vote_end IS NOT NULL
                      AND vote_end < :now
                """),
                {"now": now},
            )
            finished = result.rowcount or 0  # type: ignore[attr-defined]
            if finished:
                logger.info(f"Finished {finished} elapsed election(s)")
            return finished
        except SQLAlchemyError as e:
            logger.error(f"Database error finishing elapsed elections: {e}")
            raise DatabaseError(
                "Failed to finish elapsed elections", {"error": str(e)}
            ) from e

    async def pin_winner(self, election_id: int, candidate_id: int) -> int:
        """Set the winner only if none is pinned yet.

        Returns:
            The winner ID stored after the call
        """
        try:
            await self.session.execute(
                text("""
                    UPDATE elections
                    SET winner_id = :candidate_id, updated_at = :now
                    WHERE id = :id AND winner_id IS NULL
                """),
                {
                    "id": election_id,
                    "candidate_id": candidate_id,
                    "now": datetime.now(UTC),
                },
            )
            result = await self.session.execute(
                text("SELECT winner_id FROM elections WHERE id = :id"),
                {"id": election_id},
            )
            winner_id = result.scalar()
            if winner_id is None:
                raise UpdateError(f"Election with ID {election_id} not found")
            return int(winner_id)
        except SQLAlchemyError as e:
            logger.error(f"Database error pinning winner: {e}")
            raise DatabaseError(
                "Failed to pin winner",
                {"id": election_id, "candidate_id": candidate_id, "error": str(e)},
            ) from e

    async def set_witnesses(self, election_id: int, user_ids: list[int]) -> None:
        """Replace the witnesses assigned to an election."""
        try:
            await self.session.execute(
                text("DELETE FROM election_witnesses WHERE election_id = :id"),
                {"id": election_id},
            )
            for user_id in dict.fromkeys(user_ids):
                await self.session.execute(
                    text("""
                        INSERT INTO election_witnesses (election_id, user_id)
                        VALUES (:election_id, :user_id)
                    """),
                    {"election_id": election_id, "user_id": user_id},
                )
        except SQLAlchemyError as e:
            logger.error(f"Database error setting witnesses: {e}")
            raise DatabaseError(
                "Failed to set witnesses",
                {"id": election_id, "user_ids": user_ids, "error": str(e)},
            ) from e

    async def create(self, entity: Election) -> Election:
        """Create a new election with its witness assignments.

        Args:
            entity: Election entity to create

        Returns:
            Created Election entity with ID
        """
        try:
            now = datetime.now(UTC)
            result = await self.session.execute(
                text("""
                    INSERT INTO elections (
                        name, organization, description, status,
                        whitelist_start, whitelist_end, vote_start, vote_end,
                        public_key, winner_id, created_at, updated_at
                    )
                    VALUES (
                        :name, :organization, :description, :status,
                        :whitelist_start, :whitelist_end, :vote_start, :vote_end,
                        :public_key, :winner_id, :created_at, :updated_at
                    )
                    RETURNING id
                """),
                {**self._params(entity), "created_at": now, "updated_at": now},
            )
            election_id = result.scalar()
            if election_id is None:
                raise RuntimeError("Failed to create election")
            await self.set_witnesses(election_id, entity.witness_ids)

            created = await self.get_by_id(election_id)
            if created is None:
                raise RuntimeError("Failed to create election")
            return created

        except SQLAlchemyError as e:
            logger.error(f"Database error creating election: {e}")
            raise DatabaseError(
                "Failed to create election", {"entity": str(entity), "error": str(e)}
            ) from e

    async def update(self, entity: Election) -> Election:
        """Update an existing election's columns.

        Witness assignments are changed only through ``set_witnesses``.

        Args:
            entity: Election entity to update

        Returns:
            Updated Election entity
        """
        try:
            result = await self.session.execute(
                text("""
                    UPDATE elections
                    SET name = :name,
                        organization = :organization,
                        description = :description,
                        status = :status,
                        whitelist_start = :whitelist_start,
                        whitelist_end = :whitelist_end,
                        vote_start = :vote_start,
                        vote_end = :vote_end,
                        public_key = :public_key,
                        winner_id = :winner_id,
                        updated_at = :updated_at
                    WHERE id = :id
                """),
                {
                    **self._params(entity),
                    "id": entity.id,
                    "updated_at": datetime.now(UTC),
                },
            )
            if not result.rowcount:  # type: ignore[attr-defined]
                raise UpdateError(f"Election with ID {entity.id} not found")

            updated = await self.get_by_id(entity.id)  # type: ignore[arg-type]
            if updated is None:
                raise UpdateError(f"Election with ID {entity.id} not found")
            return updated

        except SQLAlchemyError as e:
            logger.error(f"Database error updating election: {e}")
            raise DatabaseError(
                "Failed to update election", {"entity": str(entity), "error": str(e)}
            ) from e

    async def delete(self, entity_id: int) -> bool:
        try:
            result = await self.session.execute(
                text("DELETE FROM elections WHERE id = :id"), {"id": entity_id}
            )
            return result.rowcount > 0  # type: ignore[attr-defined]
        except SQLAlchemyError as e:
            raise self._db_error("deleting", e, id=entity_id) from e

    def _params(self, entity: Election) -> dict[str, object]:
        return {
            "name": entity.name,
            "organization": entity.organization,
            "description": entity.description,
            "status": entity.status.value,
            "whitelist_start": entity.whitelist_start,
            "whitelist_end": entity.whitelist_end,
            "vote_start": entity.vote_start,
            "vote_end": entity.vote_end,
            "public_key": entity.public_key,
            "winner_id": entity.winner_id,
        }

    def _to_entity(self, model: ElectionModel) -> Election:
        """Convert database model to domain entity.

        Args:
            model: Database model

        Returns:
            Election entity
        """
        election = Election(
            id=model.id,
            name=model.name,
            organization=model.organization,
            description=model.description,
            status=ElectionStatus(model.status),
            whitelist_start=model.whitelist_start,
            whitelist_end=model.whitelist_end,
            vote_start=model.vote_start,
            vote_end=model.vote_end,
            public_key=model.public_key,
            winner_id=model.winner_id,
            witness_ids=list(model.witness_ids or []),
        )
        election.created_at = model.created_at
        election.updated_at = model.updated_at
        return election
