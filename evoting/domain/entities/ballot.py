"""Ballot entity."""

from evoting.domain.entities.base import BaseEntity


class Ballot(BaseEntity):
    """The record of one cast vote.

    Linked to the whitelist entry that authorized it. Ballots are
    invalidated, never deleted.
    """

    def __init__(
        self,
        candidate_id: int,
        whitelist_id: int,
        valid: bool = True,
        transaction: str | None = None,
        id: int | None = None,
    ) -> None:
        super().__init__(id)
        self.candidate_id = candidate_id
        self.whitelist_id = whitelist_id
        self.valid = valid
        self.transaction = transaction
