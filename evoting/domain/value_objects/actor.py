"""Authenticated caller identity."""

from dataclasses import dataclass

from evoting.domain.entities.user import UserRole


@dataclass(frozen=True)
class Actor:
    """The identity an inbound action is performed as.

    Built from a decoded access token; carries only what the core needs
    to authorize the action.
    """

    user_id: int
    role: UserRole
    email: str | None = None
    name: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_witness(self) -> bool:
        return self.role == UserRole.WITNESS
