"""Tests for ElectionStateMachine."""

import pytest

from evoting.domain.entities import ElectionStatus
from evoting.domain.exceptions import (
    ElectionTerminatedError,
    InvalidWindowError,
    NotDraftError,
    NotOngoingError,
    NotTerminatedError,
)
from evoting.domain.services.election_state_machine import ElectionStateMachine
from evoting.domain.services.time_window_validator import derive_schedule
from evoting.domain.value_objects.election_schedule import ElectionSchedule
from tests.fixtures.entity_factories import NOW, create_election, hours


@pytest.fixture
def schedule() -> ElectionSchedule:
    return derive_schedule(NOW + hours(1), 2, 1, 3)


class TestStart:
    def test_start_sets_schedule_key_and_status(
        self, schedule: ElectionSchedule
    ) -> None:
        election = create_election()

        ElectionStateMachine.start(election, schedule, "pk-1", NOW)

        assert election.status == ElectionStatus.ONGOING
        assert election.public_key == "pk-1"
        assert election.vote_end == NOW + hours(7)
        assert election.whitelist_start < election.whitelist_end  # type: ignore[operator]
        assert election.whitelist_end < election.vote_start  # type: ignore[operator]
        assert election.vote_start < election.vote_end  # type: ignore[operator]

    def test_start_requires_draft(self, schedule: ElectionSchedule) -> None:
        election = create_election(status=ElectionStatus.FINISH)

        with pytest.raises(NotDraftError):
            ElectionStateMachine.start(election, schedule, "pk", NOW)

    def test_start_on_terminated_election_fails_terminated(
        self, schedule: ElectionSchedule
    ) -> None:
        election = create_election(status=ElectionStatus.TERMINATE)

        with pytest.raises(ElectionTerminatedError):
            ElectionStateMachine.start(election, schedule, "pk", NOW)

    def test_start_rejects_existing_schedule(self, schedule: ElectionSchedule) -> None:
        election = create_election(scheduled_from=NOW + hours(1))

        with pytest.raises(InvalidWindowError):
            ElectionStateMachine.start(election, schedule, "pk", NOW)

    def test_start_rejects_past_start_and_leaves_election_untouched(self) -> None:
        election = create_election()
        past = derive_schedule(NOW - hours(1), 2, 1, 3)

        with pytest.raises(InvalidWindowError):
            ElectionStateMachine.start(election, past, "pk", NOW)
        assert election.status == ElectionStatus.DRAFT
        assert not election.has_schedule


class TestTerminateAndDeterminate:
    def test_terminate_requires_ongoing(self) -> None:
        with pytest.raises(NotOngoingError):
            ElectionStateMachine.terminate(create_election())

    def test_terminate_twice_fails_terminated(self) -> None:
        election = create_election(status=ElectionStatus.ONGOING)
        ElectionStateMachine.terminate(election)

        with pytest.raises(ElectionTerminatedError):
            ElectionStateMachine.terminate(election)

    def test_determinate_requires_terminated(self, schedule: ElectionSchedule) -> None:
        election = create_election(status=ElectionStatus.ONGOING)

        with pytest.raises(NotTerminatedError):
            ElectionStateMachine.determinate(election, schedule, NOW)

    def test_round_trip_keeps_latest_schedule(self) -> None:
        election = create_election(
            status=ElectionStatus.ONGOING, scheduled_from=NOW - hours(1)
        )
        first = derive_schedule(NOW + hours(1), 1, 1, 1)
        second = derive_schedule(NOW + hours(5), 2, 2, 2)

        ElectionStateMachine.terminate(election)
        ElectionStateMachine.determinate(election, first, NOW)
        assert election.status == ElectionStatus.ONGOING
        assert election.schedule == first

        ElectionStateMachine.terminate(election)
        ElectionStateMachine.determinate(election, second, NOW)
        assert election.status == ElectionStatus.ONGOING
        assert election.schedule == second

    def test_determinate_validates_new_schedule(self) -> None:
        election = create_election(status=ElectionStatus.TERMINATE)
        bad = ElectionSchedule(
            whitelist_start=NOW + hours(1),
            whitelist_end=NOW + hours(3),
            vote_start=NOW + hours(2),
            vote_end=NOW + hours(4),
        )

        with pytest.raises(InvalidWindowError):
            ElectionStateMachine.determinate(election, bad, NOW)
        assert election.status == ElectionStatus.TERMINATE


class TestDelete:
    def test_only_drafts_are_deletable(self) -> None:
        ElectionStateMachine.ensure_deletable(create_election())

        with pytest.raises(NotDraftError):
            ElectionStateMachine.ensure_deletable(
                create_election(status=ElectionStatus.ONGOING)
            )
