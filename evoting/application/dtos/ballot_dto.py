"""DTOs for ballot casting and invalidation."""

from dataclasses import dataclass, field
from datetime import datetime

from evoting.domain.entities import Ballot
from evoting.domain.value_objects.actor import Actor


# =============================================================================
# Input DTOs
# =============================================================================


@dataclass
class CastVoteInputDto:
    actor: Actor
    election_id: int
    candidate_id: int
    transaction: str | None = None


@dataclass
class InvalidateBallotInputDto:
    actor: Actor
    whitelist_id: int


# =============================================================================
# Output DTOs
# =============================================================================


@dataclass
class BallotOutputItem:
    id: int | None
    candidate_id: int
    whitelist_id: int
    valid: bool
    transaction: str | None
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, entity: Ballot) -> "BallotOutputItem":
        return cls(
            id=entity.id,
            candidate_id=entity.candidate_id,
            whitelist_id=entity.whitelist_id,
            valid=entity.valid,
            transaction=entity.transaction,
            created_at=entity.created_at,
        )


@dataclass
class CastVoteOutputDto:
    ballot: BallotOutputItem | None = None
    success: bool = True
    error_code: str | None = None
    error_message: str | None = None


@dataclass
class InvalidateBallotOutputDto:
    """All ballots of the whitelist entry after invalidation."""

    ballots: list[BallotOutputItem] = field(default_factory=list)
    success: bool = True
    error_code: str | None = None
    error_message: str | None = None
