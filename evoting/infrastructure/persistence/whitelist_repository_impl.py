"""Whitelist entry repository implementation using SQLAlchemy."""

import logging

from datetime import UTC, datetime

from pydantic import BaseModel as PydanticBaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from evoting.domain.entities.whitelist_entry import WhitelistEntry, WhitelistStatus
from evoting.domain.exceptions import DuplicateAddressError, DuplicateUserError
from evoting.domain.repositories.whitelist_repository import WhitelistRepository
from evoting.infrastructure.exceptions import DatabaseError, UpdateError
from evoting.infrastructure.persistence.base_repository_impl import BaseRepositoryImpl


logger = logging.getLogger(__name__)


class WhitelistEntryModel(PydanticBaseModel):
    """Whitelist entry database model."""

    id: int | None = None
    election_id: int
    user_id: int
    email: str
    address: str
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        arbitrary_types_allowed = True


class WhitelistRepositoryImpl(
    BaseRepositoryImpl[WhitelistEntry], WhitelistRepository
):
    """Whitelist entry repository implementation using SQLAlchemy."""

    TABLE = "whitelist_entries"
    COLUMNS = (
        "id",
        "election_id",
        "user_id",
        "email",
        "address",
        "status",
        "created_at",
        "updated_at",
    )

    def __init__(self, session: AsyncSession):
        super().__init__(
            session=session,
            entity_class=WhitelistEntry,
            model_class=WhitelistEntryModel,
        )

    async def get_by_user_and_election(
        self, user_id: int, election_id: int
    ) -> WhitelistEntry | None:
        try:
            return await self._fetch_one(
                f"""
                SELECT {self._select_list}
                FROM whitelist_entries
                WHERE user_id = :user_id AND election_id = :election_id
                """,
                {"user_id": user_id, "election_id": election_id},
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error getting whitelist entry by user: {e}")
            raise DatabaseError(
                "Failed to get whitelist entry by user",
                {"user_id": user_id, "election_id": election_id, "error": str(e)},
            ) from e

    async def get_by_address_and_election(
        self, address: str, election_id: int
    ) -> WhitelistEntry | None:
        try:
            return await self._fetch_one(
                f"""
                SELECT {self._select_list}
                FROM whitelist_entries
                WHERE address = :address AND election_id = :election_id
                """,
                {"address": address, "election_id": election_id},
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error getting whitelist entry by address: {e}")
            raise DatabaseError(
                "Failed to get whitelist entry by address",
                {"election_id": election_id, "error": str(e)},
            ) from e

    async def get_by_election(self, election_id: int) -> list[WhitelistEntry]:
        try:
            return await self._fetch_all(
                f"""
                SELECT {self._select_list}
                FROM whitelist_entries
                WHERE election_id = :election_id
                ORDER BY id ASC
                """,
                {"election_id": election_id},
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error getting whitelist entries: {e}")
            raise DatabaseError(
                "Failed to get whitelist entries",
                {"election_id": election_id, "error": str(e)},
            ) from e

    async def count_by_election(self, election_id: int) -> int:
        try:
            return await self._scalar_int(
                "SELECT COUNT(*) FROM whitelist_entries WHERE election_id = :id",
                {"id": election_id},
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error counting whitelist entries: {e}")
            raise DatabaseError(
                "Failed to count whitelist entries",
                {"election_id": election_id, "error": str(e)},
            ) from e

    async def create(self, entity: WhitelistEntry) -> WhitelistEntry:
        """Create a new whitelist entry.

        Raises:
            DuplicateUserError: (user, election) already registered
            DuplicateAddressError: (address, election) already registered
        """
        now = datetime.now(UTC)
        try:
            created = await self._fetch_one(
                f"""
                INSERT INTO whitelist_entries (
                    election_id, user_id, email, address, status,
                    created_at, updated_at
                )
                VALUES (
                    :election_id, :user_id, :email, :address, :status,
                    :created_at, :updated_at
                )
                RETURNING {self._select_list}
                """,
                {
                    "election_id": entity.election_id,
                    "user_id": entity.user_id,
                    "email": entity.email,
                    "address": entity.address,
                    "status": entity.status.value,
                    "created_at": now,
                    "updated_at": now,
                },
            )
            if created is None:
                raise RuntimeError("Failed to create whitelist entry")
            return created
        except IntegrityError as e:
            if "address" in str(e.orig):
                raise DuplicateAddressError(
                    "Address is already registered for this election",
                    {"election_id": entity.election_id},
                ) from e
            raise DuplicateUserError(
                "User is already registered for this election",
                {"election_id": entity.election_id, "user_id": entity.user_id},
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"Database error creating whitelist entry: {e}")
            raise DatabaseError(
                "Failed to create whitelist entry",
                {"election_id": entity.election_id, "error": str(e)},
            ) from e

    async def update(self, entity: WhitelistEntry) -> WhitelistEntry:
        """Persist a whitelist entry's status."""
        try:
            updated = await self._fetch_one(
                f"""
                UPDATE whitelist_entries
                SET status = :status, updated_at = :updated_at
                WHERE id = :id
                RETURNING {self._select_list}
                """,
                {
                    "id": entity.id,
                    "status": entity.status.value,
                    "updated_at": datetime.now(UTC),
                },
            )
            if updated is None:
                raise UpdateError(f"Whitelist entry with ID {entity.id} not found")
            return updated
        except SQLAlchemyError as e:
            logger.error(f"Database error updating whitelist entry: {e}")
            raise DatabaseError(
                "Failed to update whitelist entry", {"id": entity.id, "error": str(e)}
            ) from e

    def _to_entity(self, model: WhitelistEntryModel) -> WhitelistEntry:
        entry = WhitelistEntry(
            id=model.id,
            election_id=model.election_id,
            user_id=model.user_id,
            email=model.email,
            address=model.address,
            status=WhitelistStatus(model.status),
        )
        entry.created_at = model.created_at
        entry.updated_at = model.updated_at
        return entry
