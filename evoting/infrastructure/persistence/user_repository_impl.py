"""User repository implementation using SQLAlchemy."""

import logging

from datetime import UTC, datetime

from pydantic import BaseModel as PydanticBaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from evoting.domain.entities.user import User, UserRole
from evoting.domain.exceptions import DuplicateEmailError
from evoting.domain.repositories.user_repository import UserRepository
from evoting.infrastructure.exceptions import DatabaseError, UpdateError
from evoting.infrastructure.persistence.base_repository_impl import BaseRepositoryImpl


logger = logging.getLogger(__name__)


class UserModel(PydanticBaseModel):
    """User database model."""

    id: int | None = None
    name: str
    email: str
    password_hash: str
    role: str
    is_email_verified: bool = False
    verification_token: str | None = None
    is_terminated: bool = False
    identity_document: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        arbitrary_types_allowed = True


class UserRepositoryImpl(BaseRepositoryImpl[User], UserRepository):
    """User repository implementation using SQLAlchemy."""

    TABLE = "users"
    COLUMNS = (
        "id",
        "name",
        "email",
        "password_hash",
        "role",
        "is_email_verified",
        "verification_token",
        "is_terminated",
        "identity_document",
        "created_at",
        "updated_at",
    )

    def __init__(self, session: AsyncSession):
        super().__init__(
            session=session,
            entity_class=User,
            model_class=UserModel,
        )

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by e-mail, case-insensitively.

        Args:
            email: E-mail address

        Returns:
            User entity or None if not found
        """
        try:
            return await self._fetch_one(
                f"SELECT {self._select_list} FROM users WHERE lower(email) = :email",
                {"email": email.lower()},
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error getting user by email: {e}")
            raise DatabaseError(
                "Failed to get user by email", {"error": str(e)}
            ) from e

    async def get_by_verification_token(self, token: str) -> User | None:
        try:
            return await self._fetch_one(
                f"""
                SELECT {self._select_list}
                FROM users
                WHERE verification_token = :token
                """,
                {"token": token},
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error getting user by verification token: {e}")
            raise DatabaseError(
                "Failed to get user by verification token", {"error": str(e)}
            ) from e

    async def get_by_ids(self, user_ids: list[int]) -> list[User]:
        if not user_ids:
            return []
        try:
            return await self._fetch_all(
                f"""
                SELECT {self._select_list}
                FROM users
                WHERE id = ANY(:ids)
                ORDER BY id
                """,
                {"ids": list(user_ids)},
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error getting users by IDs: {e}")
            raise DatabaseError(
                "Failed to get users by IDs", {"ids": user_ids, "error": str(e)}
            ) from e

    async def create(self, entity: User) -> User:
        """Create a new user.

        Raises:
            DuplicateEmailError: The e-mail is already registered
        """
        now = datetime.now(UTC)
        try:
            created = await self._fetch_one(
                f"""
                INSERT INTO users (
                    name, email, password_hash, role, is_email_verified,
                    verification_token, is_terminated, identity_document,
                    created_at, updated_at
                )
                VALUES (
                    :name, :email, :password_hash, :role, :is_email_verified,
                    :verification_token, :is_terminated, :identity_document,
                    :created_at, :updated_at
                )
                RETURNING {self._select_list}
                """,
                {**self._params(entity), "created_at": now, "updated_at": now},
            )
            if created is None:
                raise RuntimeError("Failed to create user")
            return created
        except IntegrityError as e:
            raise DuplicateEmailError(
                "E-mail is already registered", {"email": entity.email}
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"Database error creating user: {e}")
            raise DatabaseError("Failed to create user", {"error": str(e)}) from e

    async def update(self, entity: User) -> User:
        try:
            updated = await self._fetch_one(
                f"""
                UPDATE users
                SET name = :name,
                    email = :email,
                    password_hash = :password_hash,
                    role = :role,
                    is_email_verified = :is_email_verified,
                    verification_token = :verification_token,
                    is_terminated = :is_terminated,
                    identity_document = :identity_document,
                    updated_at = :updated_at
                WHERE id = :id
                RETURNING {self._select_list}
                """,
                {
                    **self._params(entity),
                    "id": entity.id,
                    "updated_at": datetime.now(UTC),
                },
            )
            if updated is None:
                raise UpdateError(f"User with ID {entity.id} not found")
            return updated
        except SQLAlchemyError as e:
            logger.error(f"Database error updating user: {e}")
            raise DatabaseError(
                "Failed to update user", {"id": entity.id, "error": str(e)}
            ) from e

    def _params(self, entity: User) -> dict[str, object]:
        return {
            "name": entity.name,
            "email": entity.email,
            "password_hash": entity.password_hash,
            "role": entity.role.value,
            "is_email_verified": entity.is_email_verified,
            "verification_token": entity.verification_token,
            "is_terminated": entity.is_terminated,
            "identity_document": entity.identity_document,
        }

    def _to_entity(self, model: UserModel) -> User:
        user = User(
            id=model.id,
            name=model.name,
            email=model.email,
            password_hash=model.password_hash,
            role=UserRole(model.role),
            is_email_verified=model.is_email_verified,
            verification_token=model.verification_token,
            is_terminated=model.is_terminated,
            identity_document=model.identity_document,
        )
        user.created_at = model.created_at
        user.updated_at = model.updated_at
        return user
