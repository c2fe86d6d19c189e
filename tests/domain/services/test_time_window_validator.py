"""Tests for schedule derivation and validation."""

import pytest

from evoting.domain.exceptions import InvalidWindowError
from evoting.domain.services.time_window_validator import (
    check_ordering,
    derive_schedule,
    merge_schedule_update,
    validate_schedule,
)
from evoting.domain.value_objects.election_schedule import ElectionSchedule
from tests.fixtures.entity_factories import NOW, hours


def _schedule(ws: float, we: float, vs: float, ve: float) -> ElectionSchedule:
    """Schedule with boundaries given as hour offsets from NOW."""
    return ElectionSchedule(
        whitelist_start=NOW + hours(ws),
        whitelist_end=NOW + hours(we),
        vote_start=NOW + hours(vs),
        vote_end=NOW + hours(ve),
    )


class TestDeriveSchedule:
    def test_boundaries_follow_durations(self) -> None:
        schedule = derive_schedule(NOW + hours(1), 2, 1, 3)

        assert schedule.whitelist_start == NOW + hours(1)
        assert schedule.whitelist_end == NOW + hours(3)
        assert schedule.vote_start == NOW + hours(4)
        assert schedule.vote_end == NOW + hours(7)

    @pytest.mark.parametrize(
        ("whitelist_hours", "pending_hours", "vote_hours"),
        [(0, 1, 1), (1, -1, 1), (1, 1, 0)],
    )
    def test_rejects_out_of_range_durations(
        self, whitelist_hours: int, pending_hours: int, vote_hours: int
    ) -> None:
        with pytest.raises(InvalidWindowError):
            derive_schedule(NOW + hours(1), whitelist_hours, pending_hours, vote_hours)

    def test_zero_pending_hours_is_rejected_by_ordering(self) -> None:
        schedule = derive_schedule(NOW + hours(1), 2, 0, 3)

        with pytest.raises(InvalidWindowError) as exc_info:
            validate_schedule(schedule, NOW)
        assert "vote_start" in exc_info.value.constraint


class TestValidateSchedule:
    def test_valid_schedule_is_returned(self) -> None:
        schedule = _schedule(1, 3, 4, 7)

        assert validate_schedule(schedule, NOW) is schedule

    def test_start_must_be_in_future(self) -> None:
        with pytest.raises(InvalidWindowError) as exc_info:
            validate_schedule(_schedule(0, 3, 4, 7), NOW)
        assert exc_info.value.constraint == "whitelist_start must be in the future"

    def test_reports_first_violated_constraint(self) -> None:
        # whitelist_end and vote_end are both wrong; the earlier one is named
        with pytest.raises(InvalidWindowError) as exc_info:
            check_ordering(_schedule(2, 1, 4, 3))
        assert (
            exc_info.value.constraint == "whitelist_end must be after whitelist_start"
        )

    def test_vote_end_must_follow_vote_start(self) -> None:
        with pytest.raises(InvalidWindowError) as exc_info:
            check_ordering(_schedule(1, 2, 3, 3))
        assert exc_info.value.constraint == "vote_end must be after vote_start"
        assert exc_info.value.code == "InvalidWindow"


class TestMergeScheduleUpdate:
    def test_moves_supplied_boundary(self) -> None:
        current = _schedule(-3, -1, 1, 4)

        merged = merge_schedule_update(current, {"vote_end": NOW + hours(6)}, NOW)

        assert merged.vote_end == NOW + hours(6)
        assert merged.whitelist_start == current.whitelist_start

    def test_past_boundaries_that_are_not_supplied_are_kept(self) -> None:
        current = _schedule(-3, -1, -0.5, 4)

        merged = merge_schedule_update(
            current, {"vote_end": NOW + hours(2), "whitelist_start": None}, NOW
        )

        assert merged.vote_start == NOW - hours(0.5)

    def test_resending_a_past_boundary_unchanged_is_accepted(self) -> None:
        current = _schedule(-3, -1, 1, 4)

        merged = merge_schedule_update(
            current,
            {
                "whitelist_start": current.whitelist_start,
                "whitelist_end": current.whitelist_end,
                "vote_end": NOW + hours(6),
            },
            NOW,
        )

        assert merged.whitelist_start == NOW - hours(3)
        assert merged.vote_end == NOW + hours(6)

    def test_moving_a_boundary_to_another_past_time_is_rejected(self) -> None:
        with pytest.raises(InvalidWindowError) as exc_info:
            merge_schedule_update(
                _schedule(-3, -1, 1, 4), {"whitelist_start": NOW - hours(4)}, NOW
            )
        assert exc_info.value.constraint == "whitelist_start must be in the future"

    def test_rejects_supplied_boundary_in_the_past(self) -> None:
        with pytest.raises(InvalidWindowError):
            merge_schedule_update(
                _schedule(-3, -1, 1, 4), {"vote_end": NOW - hours(1)}, NOW
            )

    def test_rejects_update_that_breaks_ordering_with_existing_neighbour(
        self,
    ) -> None:
        # new vote_start would land after the existing vote_end
        with pytest.raises(InvalidWindowError) as exc_info:
            merge_schedule_update(
                _schedule(-3, -1, 1, 4), {"vote_start": NOW + hours(5)}, NOW
            )
        assert exc_info.value.constraint == "vote_end must be after vote_start"

    def test_ignores_unknown_keys(self) -> None:
        current = _schedule(1, 3, 4, 7)

        merged = merge_schedule_update(current, {"name": NOW + hours(9)}, NOW)

        assert merged == current
