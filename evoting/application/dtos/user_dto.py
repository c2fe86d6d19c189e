"""DTOs for accounts and authentication."""

from dataclasses import dataclass

from evoting.domain.entities import User, UserRole
from evoting.domain.value_objects.actor import Actor


# =============================================================================
# Input DTOs
# =============================================================================


@dataclass
class RegisterUserInputDto:
    name: str
    email: str
    password: str


@dataclass
class LoginInputDto:
    email: str
    password: str


@dataclass
class CreateAdminInputDto:
    name: str
    email: str
    password: str


@dataclass
class ForgotPasswordInputDto:
    email: str


@dataclass
class ResetPasswordInputDto:
    """Reset token from the e-mailed link and the new password."""

    token: str
    password: str


@dataclass
class BindIdentityDocumentInputDto:
    actor: Actor
    filename: str
    content: bytes


@dataclass
class GrantRoleInputDto:
    actor: Actor
    user_id: int
    role: UserRole


@dataclass
class TerminateAccountInputDto:
    actor: Actor
    user_id: int


# =============================================================================
# Output DTOs
# =============================================================================


@dataclass
class UserOutputItem:
    id: int | None
    name: str
    email: str
    role: str
    is_email_verified: bool
    is_terminated: bool
    has_identity_document: bool

    @classmethod
    def from_entity(cls, entity: User) -> "UserOutputItem":
        return cls(
            id=entity.id,
            name=entity.name,
            email=entity.email,
            role=entity.role.value,
            is_email_verified=entity.is_email_verified,
            is_terminated=entity.is_terminated,
            has_identity_document=entity.has_identity_document,
        )


@dataclass
class UserOutputDto:
    user: UserOutputItem | None = None
    success: bool = True
    error_code: str | None = None
    error_message: str | None = None


@dataclass
class LoginOutputDto:
    access_token: str | None = None
    token_type: str = "bearer"
    user: UserOutputItem | None = None
    success: bool = True
    error_code: str | None = None
    error_message: str | None = None


@dataclass
class AuthenticateOutputDto:
    actor: Actor | None = None
    success: bool = True
    error_code: str | None = None
    error_message: str | None = None


@dataclass
class ForgotPasswordOutputDto:
    success: bool = True
    error_code: str | None = None
    error_message: str | None = None
