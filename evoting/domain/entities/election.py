"""Election entity."""

from datetime import datetime
from enum import Enum

from evoting.domain.entities.base import BaseEntity
from evoting.domain.value_objects.election_schedule import ElectionSchedule


class ElectionStatus(str, Enum):
    """Lifecycle status of an election."""

    DRAFT = "DRAFT"
    ONGOING = "ONGOING"
    FINISH = "FINISH"
    TERMINATE = "TERMINATE"


class Election(BaseEntity):
    """A single voting event with its own timeline and candidate set.

    The four schedule timestamps stay unset while the election is a draft
    and are fixed together when the election is started.
    """

    def __init__(
        self,
        name: str,
        organization: str,
        description: str | None = None,
        status: ElectionStatus = ElectionStatus.DRAFT,
        whitelist_start: datetime | None = None,
        whitelist_end: datetime | None = None,
        vote_start: datetime | None = None,
        vote_end: datetime | None = None,
        public_key: str | None = None,
        winner_id: int | None = None,
        witness_ids: list[int] | None = None,
        id: int | None = None,
    ) -> None:
        super().__init__(id)
        self.name = name
        self.organization = organization
        self.description = description
        self.status = ElectionStatus(status)
        self.whitelist_start = whitelist_start
        self.whitelist_end = whitelist_end
        self.vote_start = vote_start
        self.vote_end = vote_end
        self.public_key = public_key
        self.winner_id = winner_id
        self.witness_ids = list(witness_ids or [])

    @property
    def schedule(self) -> ElectionSchedule | None:
        """Return the schedule, or None when any boundary is unset."""
        if None in (
            self.whitelist_start,
            self.whitelist_end,
            self.vote_start,
            self.vote_end,
        ):
            return None
        return ElectionSchedule(
            whitelist_start=self.whitelist_start,  # type: ignore[arg-type]
            whitelist_end=self.whitelist_end,  # type: ignore[arg-type]
            vote_start=self.vote_start,  # type: ignore[arg-type]
            vote_end=self.vote_end,  # type: ignore[arg-type]
        )

    @property
    def has_schedule(self) -> bool:
        return any(
            ts is not None
            for ts in (
                self.whitelist_start,
                self.whitelist_end,
                self.vote_start,
                self.vote_end,
            )
        )

    def apply_schedule(self, schedule: ElectionSchedule) -> None:
        """Replace all four boundaries with the given schedule."""
        self.whitelist_start = schedule.whitelist_start
        self.whitelist_end = schedule.whitelist_end
        self.vote_start = schedule.vote_start
        self.vote_end = schedule.vote_end

    def is_whitelist_open(self, now: datetime) -> bool:
        if self.whitelist_start is None or self.whitelist_end is None:
            return False
        return self.whitelist_start <= now <= self.whitelist_end

    def is_vote_open(self, now: datetime) -> bool:
        if self.vote_start is None or self.vote_end is None:
            return False
        return self.vote_start <= now <= self.vote_end

    def is_witness(self, user_id: int) -> bool:
        return user_id in self.witness_ids

    def __str__(self) -> str:
        return f"{self.name} ({self.organization}) [{self.status.value}]"
