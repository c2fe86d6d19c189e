"""Witness exception repository implementation using SQLAlchemy."""

import logging

from datetime import UTC, datetime

from pydantic import BaseModel as PydanticBaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from evoting.domain.entities.witness_exception import WitnessException
from evoting.domain.repositories.witness_exception_repository import (
    WitnessExceptionRepository,
)
from evoting.infrastructure.exceptions import DatabaseError
from evoting.infrastructure.persistence.base_repository_impl import BaseRepositoryImpl


logger = logging.getLogger(__name__)


class WitnessExceptionModel(PydanticBaseModel):
    """Witness exception database model."""

    id: int | None = None
    election_id: int
    user_id: int
    note: str
    created_at: datetime | None = None

    class Config:
        arbitrary_types_allowed = True


class WitnessExceptionRepositoryImpl(
    BaseRepositoryImpl[WitnessException], WitnessExceptionRepository
):
    """Witness exception repository implementation using SQLAlchemy."""

    TABLE = "witness_exceptions"
    COLUMNS = ("id", "election_id", "user_id", "note", "created_at")

    def __init__(self, session: AsyncSession):
        super().__init__(
            session=session,
            entity_class=WitnessException,
            model_class=WitnessExceptionModel,
        )

    async def get_by_election(self, election_id: int) -> list[WitnessException]:
        try:
            return await self._fetch_all(
                f"""
                SELECT {self._select_list}
                FROM witness_exceptions
                WHERE election_id = :election_id
                ORDER BY id ASC
                """,
                {"election_id": election_id},
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error getting witness exceptions: {e}")
            raise DatabaseError(
                "Failed to get witness exceptions",
                {"election_id": election_id, "error": str(e)},
            ) from e

    async def count_by_election(self, election_id: int) -> int:
        try:
            return await self._scalar_int(
                "SELECT COUNT(*) FROM witness_exceptions WHERE election_id = :id",
                {"id": election_id},
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error counting witness exceptions: {e}")
            raise DatabaseError(
                "Failed to count witness exceptions",
                {"election_id": election_id, "error": str(e)},
            ) from e

    async def create(self, entity: WitnessException) -> WitnessException:
        try:
            created = await self._fetch_one(
                f"""
                INSERT INTO witness_exceptions (election_id, user_id, note, created_at)
                VALUES (:election_id, :user_id, :note, :created_at)
                RETURNING {self._select_list}
                """,
                {
                    "election_id": entity.election_id,
                    "user_id": entity.user_id,
                    "note": entity.note,
                    "created_at": datetime.now(UTC),
                },
            )
            if created is None:
                raise RuntimeError("Failed to create witness exception")
            return created
        except SQLAlchemyError as e:
            logger.error(f"Database error creating witness exception: {e}")
            raise DatabaseError(
                "Failed to create witness exception",
                {"election_id": entity.election_id, "error": str(e)},
            ) from e

    def _to_entity(self, model: WitnessExceptionModel) -> WitnessException:
        exception = WitnessException(
            id=model.id,
            election_id=model.election_id,
            user_id=model.user_id,
            note=model.note,
        )
        exception.created_at = model.created_at
        return exception
