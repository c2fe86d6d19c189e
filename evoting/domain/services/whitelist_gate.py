"""Eligibility rules for whitelist registration and ballot casting."""

from datetime import datetime

from evoting.domain.entities.ballot import Ballot
from evoting.domain.entities.election import Election
from evoting.domain.entities.user import User
from evoting.domain.entities.whitelist_entry import WhitelistEntry
from evoting.domain.exceptions import (
    AlreadyVotedError,
    DuplicateAddressError,
    DuplicateUserError,
    NotWhitelistedError,
    OutOfWindowError,
    ProfileIncompleteError,
)
from evoting.domain.services.election_state_machine import ElectionStateMachine


class WhitelistGate:
    """Decides who may join an election's whitelist and who may vote."""

    @staticmethod
    def check_registration(
        election: Election,
        user: User,
        now: datetime,
        existing_for_user: WhitelistEntry | None,
        existing_for_address: WhitelistEntry | None,
    ) -> None:
        """Validate a whitelist registration.

        Args:
            election: Target election
            user: Registering user
            now: Reference time
            existing_for_user: Entry already held by the user, if any
            existing_for_address: Entry already using the address, if any

        Raises:
            ElectionTerminatedError: election is terminated
            NotOngoingError: election is not ongoing
            OutOfWindowError: now is outside the whitelist window
            DuplicateUserError: user already registered
            DuplicateAddressError: address already registered
            ProfileIncompleteError: no identity document on file
        """
        ElectionStateMachine.ensure_ongoing(election)
        if not election.is_whitelist_open(now):
            raise OutOfWindowError(
                "Whitelist registration is closed",
                {"election_id": election.id},
            )
        if existing_for_user is not None:
            raise DuplicateUserError(
                "User is already registered for this election",
                {"election_id": election.id, "user_id": user.id},
            )
        if existing_for_address is not None:
            raise DuplicateAddressError(
                "Address is already registered for this election",
                {"election_id": election.id},
            )
        if not user.has_identity_document:
            raise ProfileIncompleteError(
                "An identity document is required before registering",
                {"user_id": user.id},
            )

    @staticmethod
    def check_ballot_eligibility(
        entry: WhitelistEntry | None, existing_ballot: Ballot | None
    ) -> WhitelistEntry:
        """Return the accepted entry authorizing a vote.

        Raises:
            NotWhitelistedError: no accepted entry
            AlreadyVotedError: a ballot already references the entry
        """
        if entry is None or not entry.is_accepted:
            raise NotWhitelistedError("Voter is not whitelisted for this election")
        if existing_ballot is not None:
            raise AlreadyVotedError(
                "A ballot has already been cast for this whitelist entry",
                {"whitelist_id": entry.id},
            )
        return entry
