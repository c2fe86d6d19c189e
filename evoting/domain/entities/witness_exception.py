"""Witness exception entity."""

from evoting.domain.entities.base import BaseEntity


class WitnessException(BaseEntity):
    """A witness's recorded objection to an election."""

    def __init__(
        self,
        election_id: int,
        user_id: int,
        note: str,
        id: int | None = None,
    ) -> None:
        super().__init__(id)
        self.election_id = election_id
        self.user_id = user_id
        self.note = note
