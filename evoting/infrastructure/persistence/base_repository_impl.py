"""Base repository implementation for infrastructure layer."""

import logging

from typing import Any, ClassVar, TypeVar

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from evoting.domain.entities.base import BaseEntity
from evoting.domain.repositories.base import BaseRepository
from evoting.infrastructure.exceptions import DatabaseError


logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseEntity)


class BaseRepositoryImpl(BaseRepository[T]):
    """Base repository implementation using raw SQL over an AsyncSession.

    Subclasses declare ``TABLE`` and ``COLUMNS`` and implement
    ``_to_entity``; lookup by id and the fetch helpers are
    provided here. Repositories never commit: the unit of work owning the
    session decides when the transaction ends.

    Type Parameters:
        T: Domain entity type that extends BaseEntity

    Attributes:
        session: Database session
        entity_class: Domain entity class for type conversions
        model_class: Pydantic row model validating values read from the table
    """

    TABLE: ClassVar[str] = ""
    COLUMNS: ClassVar[tuple[str, ...]] = ()

    def __init__(
        self,
        session: AsyncSession,
        entity_class: type[T],
        model_class: type[Any],
    ):
        self.session = session
        self.entity_class = entity_class
        self.model_class = model_class

    @property
    def _select_list(self) -> str:
        return ", ".join(self.COLUMNS)

    @staticmethod
    def _row_to_dict(row: Any) -> dict[str, Any]:
        if hasattr(row, "_mapping"):
            return dict(row._mapping)  # type: ignore[attr-defined]
        if hasattr(row, "_asdict"):
            return row._asdict()  # type: ignore[attr-defined]
        return dict(row)

    def _row_to_entity(self, row: Any) -> T:
        model = self.model_class(**self._row_to_dict(row))
        return self._to_entity(model)

    async def _fetch_one(self, sql: str, params: dict[str, Any]) -> T | None:
        result = await self.session.execute(text(sql), params)
        row = result.first()
        return self._row_to_entity(row) if row else None

    async def _fetch_all(self, sql: str, params: dict[str, Any]) -> list[T]:
        result = await self.session.execute(text(sql), params)
        return [self._row_to_entity(row) for row in result.fetchall()]

    async def _scalar_int(self, sql: str, params: dict[str, Any]) -> int:
        result = await self.session.execute(text(sql), params)
        value = result.scalar()
        return int(value) if value is not None else 0

    def _db_error(
        self, action: str, e: SQLAlchemyError, **details: Any
    ) -> DatabaseError:
        logger.error(f"Database error {action} {self.TABLE}: {e}")
        return DatabaseError(
            f"Failed {action} {self.TABLE}", {**details, "error": str(e)}
        )

    async def get_by_id(self, entity_id: int) -> T | None:
        """Get entity by ID."""
        try:
            return await self._fetch_one(
                f"SELECT {self._select_list} FROM {self.TABLE} WHERE id = :id",
                {"id": entity_id},
            )
        except SQLAlchemyError as e:
            raise self._db_error("getting", e, id=entity_id) from e

    def _to_entity(self, model: Any) -> T:
        """Convert database model to domain entity."""
        raise NotImplementedError("Subclass must implement _to_entity")
