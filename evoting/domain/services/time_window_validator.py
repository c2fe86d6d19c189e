"""Time window computation and validation for election schedules."""

from datetime import datetime, timedelta

from evoting.domain.exceptions import InvalidWindowError
from evoting.domain.value_objects.election_schedule import ElectionSchedule


def derive_schedule(
    whitelist_start: datetime,
    whitelist_hours: int,
    pending_hours: int,
    vote_hours: int,
) -> ElectionSchedule:
    """Compute absolute boundaries from a start time and durations in hours.

    Args:
        whitelist_start: When whitelist registration opens
        whitelist_hours: Length of the whitelist window (>= 1)
        pending_hours: Gap between whitelist close and vote open (>= 0)
        vote_hours: Length of the vote window (>= 1)

    Returns:
        The derived schedule (not yet validated against "now")

    Raises:
        InvalidWindowError: If a duration is out of range
    """
    if whitelist_hours < 1:
        raise InvalidWindowError("whitelist duration must be at least 1 hour")
    if pending_hours < 0:
        raise InvalidWindowError("pending duration must not be negative")
    if vote_hours < 1:
        raise InvalidWindowError("vote duration must be at least 1 hour")

    whitelist_end = whitelist_start + timedelta(hours=whitelist_hours)
    vote_start = whitelist_end + timedelta(hours=pending_hours)
    vote_end = vote_start + timedelta(hours=vote_hours)
    return ElectionSchedule(
        whitelist_start=whitelist_start,
        whitelist_end=whitelist_end,
        vote_start=vote_start,
        vote_end=vote_end,
    )


def check_ordering(schedule: ElectionSchedule) -> None:
    """Raise InvalidWindowError naming the first ordering violation."""
    if not schedule.whitelist_end > schedule.whitelist_start:
        raise InvalidWindowError("whitelist_end must be after whitelist_start")
    if not schedule.vote_start > schedule.whitelist_end:
        raise InvalidWindowError("vote_start must be after whitelist_end")
    if not schedule.vote_end > schedule.vote_start:
        raise InvalidWindowError("vote_end must be after vote_start")


def validate_schedule(schedule: ElectionSchedule, now: datetime) -> ElectionSchedule:
    """Validate a fresh schedule against "now" and the ordering rules.

    Returns:
        The schedule unchanged, for chaining

    Raises:
        InvalidWindowError: citing the first violated constraint
    """
    if not schedule.whitelist_start > now:
        raise InvalidWindowError("whitelist_start must be in the future")
    check_ordering(schedule)
    return schedule


def merge_schedule_update(
    current: ElectionSchedule,
    updates: dict[str, datetime | None],
    now: datetime,
) -> ElectionSchedule:
    """Merge new boundaries into an ongoing election's schedule.

    Each supplied boundary is checked against the effective value of its
    neighbours (new-or-existing) and must lie in the future. Boundaries
    that are omitted, or re-sent with their current value, are not checked
    against "now", since an ongoing election may already be past them.

    Raises:
        InvalidWindowError: If any supplied boundary is rejected
    """
    supplied = {
        name: value
        for name, value in updates.items()
        if value is not None and name in ElectionSchedule.BOUNDARIES
    }
    existing = current.as_dict()
    for name, value in supplied.items():
        if value != existing[name] and not value > now:
            raise InvalidWindowError(f"{name} must be in the future")

    merged = ElectionSchedule(**{**existing, **supplied})
    check_ordering(merged)
    return merged
