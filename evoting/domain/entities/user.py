"""User entity."""

from enum import Enum

from evoting.domain.entities.base import BaseEntity


class UserRole(str, Enum):
    """Access level of a user account."""

    ADMIN = "ADMIN"
    USER = "USER"
    CANDIDATE = "CANDIDATE"
    WITNESS = "WITNESS"


class User(BaseEntity):
    """A registered account.

    ``identity_document`` holds the file storage reference of the
    identity-document image; whitelist registration requires it.
    """

    def __init__(
        self,
        name: str,
        email: str,
        password_hash: str,
        role: UserRole = UserRole.USER,
        is_email_verified: bool = False,
        verification_token: str | None = None,
        is_terminated: bool = False,
        identity_document: str | None = None,
        id: int | None = None,
    ) -> None:
        super().__init__(id)
        self.name = name
        self.email = email
        self.password_hash = password_hash
        self.role = UserRole(role)
        self.is_email_verified = is_email_verified
        self.verification_token = verification_token
        self.is_terminated = is_terminated
        self.identity_document = identity_document

    @property
    def has_identity_document(self) -> bool:
        return bool(self.identity_document)

    def mark_email_verified(self) -> None:
        self.is_email_verified = True
        self.verification_token = None

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"
