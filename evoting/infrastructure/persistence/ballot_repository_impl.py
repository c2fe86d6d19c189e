"""Ballot repository implementation using SQLAlchemy."""

import logging

from datetime import UTC, datetime

from pydantic import BaseModel as PydanticBaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from evoting.domain.entities.ballot import Ballot
from evoting.domain.exceptions import AlreadyVotedError
from evoting.domain.repositories.ballot_repository import BallotRepository
from evoting.infrastructure.exceptions import DatabaseError
from evoting.infrastructure.persistence.base_repository_impl import BaseRepositoryImpl


logger = logging.getLogger(__name__)


class BallotModel(PydanticBaseModel):
    """Ballot database model."""

    id: int | None = None
    candidate_id: int
    whitelist_id: int
    valid: bool = True
    transaction_ref: str | None = None
    created_at: datetime | None = None

    class Config:
        arbitrary_types_allowed = True


class BallotRepositoryImpl(BaseRepositoryImpl[Ballot], BallotRepository):
    """Ballot repository implementation using SQLAlchemy.

    ``ballots.whitelist_id`` is UNIQUE, so a second concurrent insert for
    the same whitelist entry fails in the database and surfaces as
    AlreadyVotedError.
    """

    TABLE = "ballots"
    COLUMNS = (
        "id",
        "candidate_id",
        "whitelist_id",
        "valid",
        "transaction_ref",
        "created_at",
    )

    def __init__(self, session: AsyncSession):
        super().__init__(
            session=session,
            entity_class=Ballot,
            model_class=BallotModel,
        )

    async def get_by_whitelist(self, whitelist_id: int) -> list[Ballot]:
        try:
            return await self._fetch_all(
                f"""
                SELECT {self._select_list}
                FROM ballots
                WHERE whitelist_id = :whitelist_id
                ORDER BY id ASC
                """,
                {"whitelist_id": whitelist_id},
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error getting ballots by whitelist: {e}")
            raise DatabaseError(
                "Failed to get ballots by whitelist",
                {"whitelist_id": whitelist_id, "error": str(e)},
            ) from e

    async def invalidate_by_whitelist(self, whitelist_id: int) -> list[Ballot]:
        """Mark a whitelist entry's valid ballots invalid.

        The ``valid = TRUE`` predicate makes a repeated call return nothing,
        so callers decrement tallies only once.

        Args:
            whitelist_id: Whitelist entry ID

        Returns:
            The ballots flipped by this call
        """
        try:
            return await self._fetch_all(
                f"""
                UPDATE ballots
                SET valid = FALSE
                WHERE whitelist_id = :whitelist_id AND valid = TRUE
                RETURNING {self._select_list}
                """,
                {"whitelist_id": whitelist_id},
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error invalidating ballots: {e}")
            raise DatabaseError(
                "Failed to invalidate ballots",
                {"whitelist_id": whitelist_id, "error": str(e)},
            ) from e

    async def count_by_election(self, election_id: int) -> int:
        try:
            return await self._scalar_int(
                """
                SELECT COUNT(*)
                FROM ballots b
                JOIN candidates c ON c.id = b.candidate_id
                WHERE c.election_id = :election_id
                """,
                {"election_id": election_id},
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error counting ballots: {e}")
            raise DatabaseError(
                "Failed to count ballots",
                {"election_id": election_id, "error": str(e)},
            ) from e

    async def create(self, entity: Ballot) -> Ballot:
        """Record a ballot.

        Raises:
            AlreadyVotedError: A ballot already references the whitelist entry
        """
        try:
            created = await self._fetch_one(
                f"""
                INSERT INTO ballots (
                    candidate_id, whitelist_id, valid, transaction_ref, created_at
                )
                VALUES (
                    :candidate_id, :whitelist_id, :valid, :transaction_ref, :created_at
                )
                RETURNING {self._select_list}
                """,
                {
                    "candidate_id": entity.candidate_id,
                    "whitelist_id": entity.whitelist_id,
                    "valid": entity.valid,
                    "transaction_ref": entity.transaction,
                    "created_at": datetime.now(UTC),
                },
            )
            if created is None:
                raise RuntimeError("Failed to create ballot")
            return created
        except IntegrityError as e:
            logger.warning(
                f"Duplicate ballot rejected for whitelist entry {entity.whitelist_id}"
            )
            raise AlreadyVotedError(
                "A ballot has already been cast for this whitelist entry",
                {"whitelist_id": entity.whitelist_id},
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"Database error creating ballot: {e}")
            raise DatabaseError(
                "Failed to create ballot",
                {"whitelist_id": entity.whitelist_id, "error": str(e)},
            ) from e

    def _to_entity(self, model: BallotModel) -> Ballot:
        ballot = Ballot(
            id=model.id,
            candidate_id=model.candidate_id,
            whitelist_id=model.whitelist_id,
            valid=model.valid,
            transaction=model.transaction_ref,
        )
        ballot.created_at = model.created_at
        return ballot
