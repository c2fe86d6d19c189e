"""Election lifecycle state machine."""

from __future__ import annotations

from datetime import datetime

from evoting.domain.entities.election import Election, ElectionStatus
from evoting.domain.exceptions import (
    ElectionTerminatedError,
    InvalidWindowError,
    NotDraftError,
    NotOngoingError,
    NotTerminatedError,
)
from evoting.domain.services.time_window_validator import validate_schedule
from evoting.domain.value_objects.election_schedule import ElectionSchedule


class ElectionStateMachine:
    """Owns ``Election.status`` and the legal transitions between states.

    The machine only mutates the entity passed in; persisting the result
    is the caller's job.
    """

    @staticmethod
    def ensure_not_terminated(election: Election) -> None:
        """Reject any action other than de-termination on a TERMINATE election."""
        if election.status == ElectionStatus.TERMINATE:
            raise ElectionTerminatedError(
                f"Election {election.id} is terminated", {"election_id": election.id}
            )

    @classmethod
    def ensure_ongoing(cls, election: Election) -> None:
        cls.ensure_not_terminated(election)
        if election.status != ElectionStatus.ONGOING:
            raise NotOngoingError(
                f"Election {election.id} is not ongoing",
                {"election_id": election.id, "status": election.status.value},
            )

    @classmethod
    def ensure_draft(cls, election: Election) -> None:
        cls.ensure_not_terminated(election)
        if election.status != ElectionStatus.DRAFT:
            raise NotDraftError(
                f"Election {election.id} is not a draft",
                {"election_id": election.id, "status": election.status.value},
            )

    @classmethod
    def start(
        cls,
        election: Election,
        schedule: ElectionSchedule,
        public_key: str,
        now: datetime,
    ) -> Election:
        """DRAFT -> ONGOING, fixing the schedule and public key."""
        cls.ensure_draft(election)
        if election.has_schedule:
            raise InvalidWindowError("election schedule is already set")
        validate_schedule(schedule, now)

        election.apply_schedule(schedule)
        election.public_key = public_key
        election.status = ElectionStatus.ONGOING
        return election

    @classmethod
    def terminate(cls, election: Election) -> Election:
        """ONGOING -> TERMINATE."""
        cls.ensure_ongoing(election)
        election.status = ElectionStatus.TERMINATE
        return election

    @staticmethod
    def determinate(
        election: Election, schedule: ElectionSchedule, now: datetime
    ) -> Election:
        """TERMINATE -> ONGOING with a fresh schedule."""
        if election.status != ElectionStatus.TERMINATE:
            raise NotTerminatedError(
                f"Election {election.id} is not terminated",
                {"election_id": election.id, "status": election.status.value},
            )
        validate_schedule(schedule, now)

        election.apply_schedule(schedule)
        election.status = ElectionStatus.ONGOING
        return election

    @classmethod
    def ensure_deletable(cls, election: Election) -> None:
        cls.ensure_draft(election)
