"""DTOs for whitelist registration and review."""

from dataclasses import dataclass, field
from datetime import datetime

from evoting.domain.entities import WhitelistEntry, WhitelistStatus
from evoting.domain.value_objects.actor import Actor


# =============================================================================
# Input DTOs
# =============================================================================


@dataclass
class RegisterWhitelistInputDto:
    actor: Actor
    election_id: int
    address: str


@dataclass
class DecideWhitelistInputDto:
    actor: Actor
    whitelist_id: int
    status: WhitelistStatus


@dataclass
class ListWhitelistsInputDto:
    actor: Actor
    election_id: int


# =============================================================================
# Output DTOs
# =============================================================================


@dataclass
class WhitelistEntryOutputItem:
    id: int | None
    election_id: int
    user_id: int
    email: str
    address: str
    status: str
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, entity: WhitelistEntry) -> "WhitelistEntryOutputItem":
        return cls(
            id=entity.id,
            election_id=entity.election_id,
            user_id=entity.user_id,
            email=entity.email,
            address=entity.address,
            status=entity.status.value,
            created_at=entity.created_at,
        )


@dataclass
class WhitelistEntryOutputDto:
    entry: WhitelistEntryOutputItem | None = None
    success: bool = True
    error_code: str | None = None
    error_message: str | None = None


@dataclass
class ListWhitelistsOutputDto:
    """Entries grouped by status value; every status has a key."""

    entries: dict[str, list[WhitelistEntryOutputItem]] = field(default_factory=dict)
    success: bool = True
    error_code: str | None = None
    error_message: str | None = None
