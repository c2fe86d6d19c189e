"""Candidate entity."""

from evoting.domain.entities.base import BaseEntity


class Candidate(BaseEntity):
    """A lead/deputy pair standing in one election.

    ``tally`` is the running count of valid ballots and is only changed by
    casting or invalidating a ballot.
    """

    def __init__(
        self,
        election_id: int,
        lead_id: int,
        deputy_id: int,
        tally: int = 0,
        id: int | None = None,
    ) -> None:
        super().__init__(id)
        if tally < 0:
            raise ValueError("tally must not be negative")
        self.election_id = election_id
        self.lead_id = lead_id
        self.deputy_id = deputy_id
        self.tally = tally

    def __str__(self) -> str:
        return f"Candidate {self.id} ({self.lead_id}/{self.deputy_id})"
