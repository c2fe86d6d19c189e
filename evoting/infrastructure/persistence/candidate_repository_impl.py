"""Candidate repository implementation using SQLAlchemy."""

import logging

from datetime import UTC, datetime

from pydantic import BaseModel as PydanticBaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from evoting.domain.entities.candidate import Candidate
from evoting.domain.repositories.candidate_repository import CandidateRepository
from evoting.infrastructure.exceptions import DatabaseError, UpdateError
from evoting.infrastructure.persistence.base_repository_impl import BaseRepositoryImpl


logger = logging.getLogger(__name__)


class CandidateModel(PydanticBaseModel):
    """Candidate database model."""

    id: int | None = None
    election_id: int
    lead_id: int
    deputy_id: int
    tally: int = 0
    created_at: datetime | None = None

    class Config:
        arbitrary_types_allowed = True


class CandidateRepositoryImpl(BaseRepositoryImpl[Candidate], CandidateRepository):
    """Candidate repository implementation using SQLAlchemy.

    Tally changes are single UPDATE statements evaluated by the database,
    so concurrent ballots for the same candidate never lose an increment.
    """

    TABLE = "candidates"
    COLUMNS = ("id", "election_id", "lead_id", "deputy_id", "tally", "created_at")

    def __init__(self, session: AsyncSession):
        super().__init__(
            session=session,
            entity_class=Candidate,
            model_class=CandidateModel,
        )

    async def get_by_election(self, election_id: int) -> list[Candidate]:
        """Get an election's candidates in creation order.

        Args:
            election_id: Election ID

        Returns:
            Candidate entities ordered by ID
        """
        try:
            return await self._fetch_all(
                f"""
                SELECT {self._select_list}
                FROM candidates
                WHERE election_id = :election_id
                ORDER BY id ASC
                """,
                {"election_id": election_id},
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error getting candidates by election: {e}")
            raise DatabaseError(
                "Failed to get candidates by election",
                {"election_id": election_id, "error": str(e)},
            ) from e

    async def increment_tally(self, candidate_id: int) -> bool:
        try:
            result = await self.session.execute(
                text("UPDATE candidates SET tally = tally + 1 WHERE id = :id"),
                {"id": candidate_id},
            )
            return result.rowcount > 0  # type: ignore[attr-defined]
        except SQLAlchemyError as e:
            logger.error(f"Database error incrementing tally: {e}")
            raise DatabaseError(
                "Failed to increment tally", {"id": candidate_id, "error": str(e)}
            ) from e

    async def decrement_tally(self, candidate_id: int) -> bool:
        try:
            result = await self.session.execute(
                text("""
                    UPDATE candidates
                    SET tally = tally - 1
                    WHERE id = :id AND tally > 0
                """),
                {"id": candidate_id},
            )
            decremented = result.rowcount > 0  # type: ignore[attr-defined]
            if not decremented:
                logger.warning(
                    f"Tally of candidate {candidate_id} not decremented "
                    "(missing or already zero)"
                )
            return decremented
        except SQLAlchemyError as e:
            logger.error(f"Database error decrementing tally: {e}")
            raise DatabaseError(
                "Failed to decrement tally", {"id": candidate_id, "error": str(e)}
            ) from e

    async def delete_by_election(self, election_id: int) -> int:
        try:
            result = await self.session.execute(
                text("DELETE FROM candidates WHERE election_id = :election_id"),
                {"election_id": election_id},
            )
            return result.rowcount or 0  # type: ignore[attr-defined]
        except SQLAlchemyError as e:
            logger.error(f"Database error deleting candidates: {e}")
            raise DatabaseError(
                "Failed to delete candidates",
                {"election_id": election_id, "error": str(e)},
            ) from e

    async def create(self, entity: Candidate) -> Candidate:
        """Create a new candidate.

        Args:
            entity: Candidate entity to create

        Returns:
            Created Candidate entity with ID
        """
        try:
            created = await self._fetch_one(
                f"""
                INSERT INTO candidates (
                    election_id, lead_id, deputy_id, tally, created_at
                )
                VALUES (:election_id, :lead_id, :deputy_id, :tally, :created_at)
                RETURNING {self._select_list}
                """,
                {
                    "election_id": entity.election_id,
                    "lead_id": entity.lead_id,
                    "deputy_id": entity.deputy_id,
                    "tally": entity.tally,
                    "created_at": datetime.now(UTC),
                },
            )
            if created is None:
                raise RuntimeError("Failed to create candidate")
            return created
        except SQLAlchemyError as e:
            logger.error(f"Database error creating candidate: {e}")
            raise DatabaseError(
                "Failed to create candidate", {"entity": str(entity), "error": str(e)}
            ) from e

    def _to_entity(self, model: CandidateModel) -> Candidate:
        candidate = Candidate(
            id=model.id,
            election_id=model.election_id,
            lead_id=model.lead_id,
            deputy_id=model.deputy_id,
            tally=model.tally,
        )
        candidate.created_at = model.created_at
        return candidate
