"""Domain exceptions.

Every exception carries a stable ``code`` that the application layer
reports to callers and the web layer maps to an HTTP status.
"""

from typing import Any


class VotingDomainError(Exception):
    """Base exception for business rule violations."""

    code = "DomainError"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class UnauthorizedError(VotingDomainError):
    """The actor's role does not allow the action."""

    code = "Unauthorized"


class NotFoundError(VotingDomainError):
    """A referenced entity does not exist."""

    code = "NotFound"

    def __init__(self, entity: str, entity_id: Any = None):
        message = (
            f"{entity} not found"
            if entity_id is None
            else f"{entity} with ID {entity_id} not found"
        )
        super().__init__(message, {"entity": entity, "id": entity_id})


class InvalidWindowError(VotingDomainError):
    """Proposed schedule boundaries violate the required ordering."""

    code = "InvalidWindow"

    def __init__(self, constraint: str):
        super().__init__(
            f"Invalid time window: {constraint}", {"constraint": constraint}
        )
        self.constraint = constraint


class OutOfWindowError(VotingDomainError):
    """Action attempted outside its valid time range."""

    code = "OutOfWindow"


class NotOngoingError(VotingDomainError):
    code = "NotOngoing"


class NotDraftError(VotingDomainError):
    code = "NotDraft"


class NotTerminatedError(VotingDomainError):
    code = "NotTerminated"


class ElectionTerminatedError(VotingDomainError):
    """Only de-termination is allowed on a terminated election."""

    code = "ElectionTerminated"


class DuplicateUserError(VotingDomainError):
    code = "DuplicateUser"


class DuplicateAddressError(VotingDomainError):
    code = "DuplicateAddress"


class DuplicateEmailError(VotingDomainError):
    code = "DuplicateEmail"


class ProfileIncompleteError(VotingDomainError):
    """The user has not bound an identity document yet."""

    code = "ProfileIncomplete"


class NotWhitelistedError(VotingDomainError):
    code = "NotWhitelisted"


class AlreadyVotedError(VotingDomainError):
    code = "AlreadyVoted"


class InvalidCandidateError(VotingDomainError):
    code = "InvalidCandidate"


class WindowExpiredError(VotingDomainError):
    """The correction grace period after voting has passed."""

    code = "WindowExpired"


class InvalidCredentialsError(VotingDomainError):
    code = "InvalidCredentials"


class ValidationError(VotingDomainError):
    """Input is structurally valid but semantically rejected."""

    code = "ValidationError"
