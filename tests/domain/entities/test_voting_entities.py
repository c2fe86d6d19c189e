"""Tests for voting domain entities."""

import pytest

from evoting.domain.entities import (
    Candidate,
    Election,
    ElectionStatus,
    UserRole,
    WhitelistStatus,
)
from evoting.domain.value_objects.actor import Actor
from tests.fixtures.entity_factories import (
    NOW,
    create_election,
    create_user,
    create_whitelist_entry,
    hours,
)


class TestElection:
    def test_new_election_is_unscheduled_draft(self) -> None:
        election = Election(name="Board", organization="Club")

        assert election.status == ElectionStatus.DRAFT
        assert election.schedule is None
        assert election.has_schedule is False
        assert election.witness_ids == []

    def test_status_accepts_string_value(self) -> None:
        election = Election(name="Board", organization="Club", status="ONGOING")  # type: ignore[arg-type]

        assert election.status is ElectionStatus.ONGOING

    def test_partial_schedule_has_no_schedule_object(self) -> None:
        election = create_election()
        election.vote_end = NOW

        assert election.has_schedule is True
        assert election.schedule is None

    def test_vote_window_is_inclusive(self) -> None:
        election = create_election(scheduled_from=NOW - hours(3))

        assert election.is_vote_open(NOW)
        assert election.is_vote_open(NOW + hours(3))
        assert not election.is_vote_open(NOW + hours(3.1))
        assert not election.is_whitelist_open(NOW)

    def test_unscheduled_windows_are_closed(self) -> None:
        election = create_election()

        assert not election.is_vote_open(NOW)
        assert not election.is_whitelist_open(NOW)

    def test_is_witness(self) -> None:
        election = create_election(witness_ids=[5, 6])

        assert election.is_witness(5)
        assert not election.is_witness(7)

    def test_equality_by_id(self) -> None:
        assert create_election(id=3) == create_election(id=3)
        assert create_election(id=3) != create_election(id=4)
        assert create_election(id=None) != create_election(id=None)


class TestCandidate:
    def test_negative_tally_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            Candidate(election_id=1, lead_id=1, deputy_id=2, tally=-1)


class TestUser:
    def test_mark_email_verified_clears_token(self) -> None:
        user = create_user(is_email_verified=False)
        user.verification_token = "abc"

        user.mark_email_verified()

        assert user.is_email_verified is True
        assert user.verification_token is None

    def test_identity_document(self) -> None:
        assert create_user().has_identity_document is True
        assert create_user(identity_document=None).has_identity_document is False
        assert create_user(identity_document="").has_identity_document is False


class TestWhitelistEntry:
    def test_default_status_is_pending(self) -> None:
        entry = create_whitelist_entry()

        assert entry.status == WhitelistStatus.PENDING
        assert not entry.is_accepted

    def test_accepted(self) -> None:
        assert create_whitelist_entry(status=WhitelistStatus.ACCEPT).is_accepted


class TestActor:
    def test_role_flags(self) -> None:
        admin = Actor(user_id=1, role=UserRole.ADMIN)
        witness = Actor(user_id=2, role=UserRole.WITNESS)

        assert admin.is_admin and not admin.is_witness
        assert witness.is_witness and not witness.is_admin
