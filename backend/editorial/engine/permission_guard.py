"""Permission Guard - Role to workflow action mapping

The engine itself never checks roles. Callers (the HTTP layer, the scheduler)
ask the guard before invoking a transition.
"""
from typing import Dict, FrozenSet, Iterable, List, Optional

from ..domain.enums import UserRole, WorkflowAction as A
from ..domain.errors import PermissionDeniedError
from ..domain.models import ActorContext
from ..utils.logger import get_logger

logger = get_logger(__name__)


WRITER_ACTIONS: FrozenSet[A] = frozenset({A.SUBMIT_FOR_REVIEW, A.START_WORK})

EDITOR_ACTIONS: FrozenSet[A] = WRITER_ACTIONS | {
    A.BEGIN_REVIEW, A.ADVANCE_STAGE, A.REQUEST_REVISION, A.RETURN_TO_WRITER,
    A.ASSIGN, A.UNASSIGN, A.PUT_ON_HOLD, A.RESUME,
}

PUBLISHER_ACTIONS: FrozenSet[A] = EDITOR_ACTIONS | {
    A.APPROVE, A.REJECT, A.SCHEDULE, A.PUBLISH, A.UNPUBLISH,
    A.SET_FEATURED, A.SET_TRENDING, A.EXPIRE,
}

ROLE_PERMISSIONS: Dict[UserRole, FrozenSet[A]] = {
    UserRole.USER: frozenset(),
    UserRole.REPORTER: WRITER_ACTIONS,
    UserRole.CONTRIBUTOR: WRITER_ACTIONS,
    UserRole.COLUMNIST: WRITER_ACTIONS,
    UserRole.JOURNALIST: WRITER_ACTIONS,
    UserRole.AUTHOR: WRITER_ACTIONS,
    UserRole.EDITOR: EDITOR_ACTIONS,
    UserRole.PUBLISHER: PUBLISHER_ACTIONS,
    UserRole.ADMIN: frozenset(A),
}


def normalize_role(role: str) -> Optional[UserRole]:
    """Map 'ROLE_EDITOR' / 'editor' to UserRole.EDITOR; unknown roles map to None"""
    name = role.strip().upper()
    if name.startswith("ROLE_"):
        name = name[5:]
    try:
        return UserRole(name)
    except ValueError:
        return None


def normalize_roles(roles: Iterable[str]) -> List[UserRole]:
    return [r for r in (normalize_role(role) for role in roles) if r is not None]


def highest_role(roles: Iterable[str]) -> UserRole:
    """Highest-privilege role held, USER if none is recognised"""
    ranked = list(UserRole)
    normalized = normalize_roles(roles)
    if not normalized:
        return UserRole.USER
    return max(normalized, key=ranked.index)


class PermissionGuard:
    """
    Permission enforcement for workflow actions

    Rules:
    - Writers (reporter, contributor, columnist, journalist, author) start work
      and submit for review
    - Editors run the review desks and send articles back
    - Publishers decide: approve, reject, schedule, publish
    - Admins may do everything
    """

    def __init__(self, permissions: Optional[Dict[UserRole, FrozenSet[A]]] = None):
        self._permissions = permissions or ROLE_PERMISSIONS

    def allowed_actions(self, roles: Iterable[str]) -> FrozenSet[A]:
        allowed: FrozenSet[A] = frozenset()
        for role in normalize_roles(roles):
            allowed = allowed | self._permissions.get(role, frozenset())
        return allowed

    def can_perform(self, actor: ActorContext, action: A) -> bool:
        return action in self.allowed_actions(actor.roles)

    def require(self, actor: ActorContext, action: A) -> None:
        """
        Raises:
            PermissionDeniedError: If none of the actor's roles allows the action
        """
        if not self.can_perform(actor, action):
            logger.info(
                f"Action {action.value} denied for {actor.actor_id}",
                extra={"actor_id": actor.actor_id, "action": action.value}
            )
            raise PermissionDeniedError(
                f"Roles {actor.roles} may not perform {action.value}",
                details={"action": action.value, "roles": actor.roles}
            )
