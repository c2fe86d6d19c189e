"""Role based capability checks."""

from enum import Enum
from typing import ClassVar

from evoting.domain.entities.user import UserRole
from evoting.domain.exceptions import UnauthorizedError
from evoting.domain.value_objects.actor import Actor


class Action(str, Enum):
    """State-changing or restricted operations."""

    CREATE_ELECTION = "create_election"
    UPDATE_DRAFT_ELECTION = "update_draft_election"
    UPDATE_ONGOING_ELECTION = "update_ongoing_election"
    DELETE_ELECTION = "delete_election"
    START_ELECTION = "start_election"
    TERMINATE_ELECTION = "terminate_election"
    DETERMINATE_ELECTION = "determinate_election"
    REGISTER_WHITELIST = "register_whitelist"
    DECIDE_WHITELIST = "decide_whitelist"
    VIEW_WHITELISTS = "view_whitelists"
    CAST_VOTE = "cast_vote"
    INVALIDATE_BALLOT = "invalidate_ballot"
    MANAGE_USERS = "manage_users"


_ALL_ROLES = frozenset(UserRole)
_ADMIN = frozenset({UserRole.ADMIN})
_NON_ADMIN = _ALL_ROLES - _ADMIN


class AccessPolicy:
    """Single place that decides which role may perform which action."""

    PERMISSIONS: ClassVar[dict[Action, frozenset[UserRole]]] = {
        Action.CREATE_ELECTION: _ADMIN,
        Action.UPDATE_DRAFT_ELECTION: _ADMIN,
        Action.UPDATE_ONGOING_ELECTION: _ADMIN,
        Action.DELETE_ELECTION: _ADMIN,
        Action.START_ELECTION: _ADMIN,
        Action.TERMINATE_ELECTION: frozenset({UserRole.ADMIN, UserRole.WITNESS}),
        Action.DETERMINATE_ELECTION: _ADMIN,
        Action.REGISTER_WHITELIST: _NON_ADMIN,
        Action.DECIDE_WHITELIST: _ADMIN,
        Action.VIEW_WHITELISTS: frozenset({UserRole.ADMIN, UserRole.WITNESS}),
        Action.CAST_VOTE: _NON_ADMIN,
        Action.INVALIDATE_BALLOT: _ADMIN,
        Action.MANAGE_USERS: _ADMIN,
    }

    @classmethod
    def allows(cls, actor: Actor, action: Action) -> bool:
        return actor.role in cls.PERMISSIONS.get(action, frozenset())

    @classmethod
    def require(cls, actor: Actor, action: Action) -> None:
        """Raise UnauthorizedError unless the actor may perform the action."""
        if not cls.allows(actor, action):
            raise UnauthorizedError(
                f"Role {actor.role.value} is not allowed to {action.value}",
                {"user_id": actor.user_id, "action": action.value},
            )
