"""DTOs for finished election results."""

from dataclasses import dataclass, field

from evoting.application.dtos.election_dto import (
    CandidateOutputItem,
    ElectionOutputItem,
)


# =============================================================================
# Input DTOs
# =============================================================================


@dataclass
class GetResultInputDto:
    election_id: int


# =============================================================================
# Output DTOs
# =============================================================================


@dataclass
class ElectionResultOutputDto:
    election: ElectionOutputItem | None = None
    winner: CandidateOutputItem | None = None
    tallies: list[CandidateOutputItem] = field(default_factory=list)
    total_whitelists: int = 0
    total_voters: int = 0
    success: bool = True
    error_code: str | None = None
    error_message: str | None = None


@dataclass
class ListFinishedElectionsOutputDto:
    elections: list[ElectionOutputItem] = field(default_factory=list)
    success: bool = True
    error_code: str | None = None
    error_message: str | None = None
