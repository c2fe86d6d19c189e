"""Tests for WhitelistGate."""

import pytest

from evoting.domain.entities import ElectionStatus, WhitelistStatus
from evoting.domain.exceptions import (
    AlreadyVotedError,
    DuplicateAddressError,
    DuplicateUserError,
    ElectionTerminatedError,
    NotOngoingError,
    NotWhitelistedError,
    OutOfWindowError,
    ProfileIncompleteError,
)
from evoting.domain.services.whitelist_gate import WhitelistGate
from tests.fixtures.entity_factories import (
    NOW,
    create_ballot,
    create_election,
    create_user,
    create_whitelist_entry,
    hours,
)


def _ongoing(scheduled_from_offset: float = -1):
    return create_election(
        status=ElectionStatus.ONGOING,
        scheduled_from=NOW + hours(scheduled_from_offset),
    )


class TestCheckRegistration:
    def test_eligible_user_passes(self) -> None:
        WhitelistGate.check_registration(
            _ongoing(), create_user(), NOW, None, None
        )

    @pytest.mark.parametrize("offset", [0, -2])
    def test_window_bounds_are_inclusive(self, offset: float) -> None:
        WhitelistGate.check_registration(
            _ongoing(offset), create_user(), NOW, None, None
        )

    @pytest.mark.parametrize("offset", [0.5, -2.5])
    def test_outside_window_fails(self, offset: float) -> None:
        with pytest.raises(OutOfWindowError):
            WhitelistGate.check_registration(
                _ongoing(offset), create_user(), NOW, None, None
            )

    def test_draft_election_is_not_ongoing(self) -> None:
        with pytest.raises(NotOngoingError):
            WhitelistGate.check_registration(
                create_election(), create_user(), NOW, None, None
            )

    def test_terminated_election_fails_terminated(self) -> None:
        election = _ongoing()
        election.status = ElectionStatus.TERMINATE

        with pytest.raises(ElectionTerminatedError):
            WhitelistGate.check_registration(election, create_user(), NOW, None, None)

    def test_duplicate_user(self) -> None:
        with pytest.raises(DuplicateUserError):
            WhitelistGate.check_registration(
                _ongoing(), create_user(), NOW, create_whitelist_entry(), None
            )

    def test_duplicate_address(self) -> None:
        with pytest.raises(DuplicateAddressError):
            WhitelistGate.check_registration(
                _ongoing(),
                create_user(),
                NOW,
                None,
                create_whitelist_entry(user_id=2),
            )

    def test_missing_identity_document(self) -> None:
        with pytest.raises(ProfileIncompleteError):
            WhitelistGate.check_registration(
                _ongoing(), create_user(identity_document=None), NOW, None, None
            )


class TestCheckBallotEligibility:
    def test_accepted_entry_without_ballot_is_returned(self) -> None:
        entry = create_whitelist_entry(status=WhitelistStatus.ACCEPT)

        assert WhitelistGate.check_ballot_eligibility(entry, None) is entry

    @pytest.mark.parametrize(
        "status", [WhitelistStatus.PENDING, WhitelistStatus.DECLINE]
    )
    def test_entry_must_be_accepted(self, status: WhitelistStatus) -> None:
        with pytest.raises(NotWhitelistedError):
            WhitelistGate.check_ballot_eligibility(
                create_whitelist_entry(status=status), None
            )

    def test_missing_entry(self) -> None:
        with pytest.raises(NotWhitelistedError):
            WhitelistGate.check_ballot_eligibility(None, None)

    def test_existing_ballot_means_already_voted(self) -> None:
        with pytest.raises(AlreadyVotedError):
            WhitelistGate.check_ballot_eligibility(
                create_whitelist_entry(status=WhitelistStatus.ACCEPT),
                create_ballot(valid=False),
            )
