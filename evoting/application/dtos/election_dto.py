"""DTOs for election management and lifecycle."""

from dataclasses import dataclass, field
from datetime import datetime

from evoting.domain.entities import (
    Candidate,
    Election,
    ElectionStatus,
    WitnessException,
)
from evoting.domain.value_objects.actor import Actor


# =============================================================================
# Input DTOs
# =============================================================================


@dataclass
class CandidatePairDto:
    """Lead and deputy user IDs of one candidate."""

    lead_id: int
    deputy_id: int


@dataclass
class CreateElectionInputDto:
    actor: Actor
    name: str
    organization: str
    candidates: list[CandidatePairDto]
    description: str | None = None
    witness_ids: list[int] = field(default_factory=list)


@dataclass
class UpdateDraftElectionInputDto:
    """Draft update; None leaves a field unchanged, lists replace wholesale."""

    actor: Actor
    election_id: int
    name: str | None = None
    organization: str | None = None
    description: str | None = None
    candidates: list[CandidatePairDto] | None = None
    witness_ids: list[int] | None = None


@dataclass
class UpdateOngoingElectionInputDto:
    actor: Actor
    election_id: int
    whitelist_start: datetime | None = None
    whitelist_end: datetime | None = None
    vote_start: datetime | None = None
    vote_end: datetime | None = None
    description: str | None = None
    public_key: str | None = None


@dataclass
class DeleteElectionInputDto:
    actor: Actor
    election_id: int


@dataclass
class ListElectionsInputDto:
    actor: Actor
    status: ElectionStatus | None = None


@dataclass
class GetElectionInputDto:
    actor: Actor
    election_id: int


@dataclass
class StartElectionInputDto:
    """Start a draft election.

    The schedule is derived from ``whitelist_start`` and the three
    durations, all in whole hours.
    """

    actor: Actor
    election_id: int
    whitelist_start: datetime
    whitelist_hours: int
    pending_hours: int
    vote_hours: int
    public_key: str


@dataclass
class DeterminateElectionInputDto:
    actor: Actor
    election_id: int
    whitelist_start: datetime
    whitelist_end: datetime
    vote_start: datetime
    vote_end: datetime


@dataclass
class TerminateElectionInputDto:
    actor: Actor
    election_id: int
    note: str | None = None


# =============================================================================
# Output DTOs
# =============================================================================


@dataclass
class CandidateOutputItem:
    id: int | None
    election_id: int
    lead_id: int
    deputy_id: int
    tally: int

    @classmethod
    def from_entity(cls, entity: Candidate) -> "CandidateOutputItem":
        return cls(
            id=entity.id,
            election_id=entity.election_id,
            lead_id=entity.lead_id,
            deputy_id=entity.deputy_id,
            tally=entity.tally,
        )


@dataclass
class ElectionOutputItem:
    """An election as returned to callers."""

    id: int | None
    name: str
    organization: str
    description: str | None
    status: str
    whitelist_start: datetime | None
    whitelist_end: datetime | None
    vote_start: datetime | None
    vote_end: datetime | None
    public_key: str | None
    winner_id: int | None
    witness_ids: list[int]
    candidates: list[CandidateOutputItem] = field(default_factory=list)

    @classmethod
    def from_entity(
        cls, entity: Election, candidates: list[Candidate] | None = None
    ) -> "ElectionOutputItem":
        return cls(
            id=entity.id,
            name=entity.name,
            organization=entity.organization,
            description=entity.description,
            status=entity.status.value,
            whitelist_start=entity.whitelist_start,
            whitelist_end=entity.whitelist_end,
            vote_start=entity.vote_start,
            vote_end=entity.vote_end,
            public_key=entity.public_key,
            winner_id=entity.winner_id,
            witness_ids=list(entity.witness_ids),
            candidates=[CandidateOutputItem.from_entity(c) for c in candidates or []],
        )


@dataclass
class WitnessExceptionOutputItem:
    id: int | None
    election_id: int
    user_id: int
    note: str
    created_at: datetime | None

    @classmethod
    def from_entity(cls, entity: WitnessException) -> "WitnessExceptionOutputItem":
        return cls(
            id=entity.id,
            election_id=entity.election_id,
            user_id=entity.user_id,
            note=entity.note,
            created_at=entity.created_at,
        )


@dataclass
class ElectionOutputDto:
    """Single election result shared by create/update/start/get operations."""

    election: ElectionOutputItem | None = None
    success: bool = True
    error_code: str | None = None
    error_message: str | None = None


@dataclass
class ListElectionsOutputDto:
    """Visible elections grouped by status value."""

    elections: dict[str, list[ElectionOutputItem]] = field(default_factory=dict)
    success: bool = True
    error_code: str | None = None
    error_message: str | None = None


@dataclass
class DeleteElectionOutputDto:
    success: bool = True
    error_code: str | None = None
    error_message: str | None = None


@dataclass
class TerminateElectionOutputDto:
    """Result of a terminate request.

    An admin request terminates the election. A witness request records
    ``witness_exception`` and leaves the status unchanged unless the
    configured threshold is reached.
    """

    election: ElectionOutputItem | None = None
    witness_exception: WitnessExceptionOutputItem | None = None
    success: bool = True
    error_code: str | None = None
    error_message: str | None = None


@dataclass
class FinishElapsedOutputDto:
    finished: int = 0
    success: bool = True
    error_code: str | None = None
    error_message: str | None = None
