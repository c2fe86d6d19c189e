"""Domain entities."""

from evoting.domain.entities.ballot import Ballot
from evoting.domain.entities.base import BaseEntity
from evoting.domain.entities.candidate import Candidate
from evoting.domain.entities.election import Election, ElectionStatus
from evoting.domain.entities.user import User, UserRole
from evoting.domain.entities.whitelist_entry import WhitelistEntry, WhitelistStatus
from evoting.domain.entities.witness_exception import WitnessException


__all__ = [
    "Ballot",
    "BaseEntity",
    "Candidate",
    "Election",
    "ElectionStatus",
    "User",
    "UserRole",
    "WhitelistEntry",
    "WhitelistStatus",
    "WitnessException",
]
