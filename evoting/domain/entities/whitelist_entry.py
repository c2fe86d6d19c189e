"""Whitelist entry entity."""

from enum import Enum

from evoting.domain.entities.base import BaseEntity


class WhitelistStatus(str, Enum):
    """Approval state of a whitelist registration."""

    PENDING = "PENDING"
    ACCEPT = "ACCEPT"
    DECLINE = "DECLINE"


class WhitelistEntry(BaseEntity):
    """A user's request to vote in an election.

    At most one entry exists per (user, election) and per
    (address, election).
    """

    def __init__(
        self,
        election_id: int,
        user_id: int,
        email: str,
        address: str,
        status: WhitelistStatus = WhitelistStatus.PENDING,
        id: int | None = None,
    ) -> None:
        super().__init__(id)
        self.election_id = election_id
        self.user_id = user_id
        self.email = email
        self.address = address
        self.status = WhitelistStatus(status)

    @property
    def is_accepted(self) -> bool:
        return self.status == WhitelistStatus.ACCEPT
