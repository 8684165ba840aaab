# =======================================================================================
# securepass/utils/validators.py - Lifecycle & Role Validation
# =======================================================================================
from typing import Dict, Optional, Tuple

from .exceptions import InvalidTransitionError, UnauthorizedError
from ..models.enums import ActiveView, PassStatus, UserRole
from ..models.schemas import User

ALLOWED_TRANSITIONS: Dict[PassStatus, Tuple[PassStatus, ...]] = {
    PassStatus.PENDING: (PassStatus.APPROVED, PassStatus.REJECTED),
    PassStatus.APPROVED: (PassStatus.CHECKED_IN,),
    PassStatus.CHECKED_IN: (PassStatus.CHECKED_OUT,),
    PassStatus.REJECTED: (),
    PassStatus.CHECKED_OUT: (),
}

# Roles allowed to move a pass *into* the given status
TRANSITION_ROLES: Dict[PassStatus, Tuple[UserRole, ...]] = {
    PassStatus.APPROVED: (UserRole.ADMIN, UserRole.SECURITY),
    PassStatus.REJECTED: (UserRole.ADMIN, UserRole.SECURITY),
    PassStatus.CHECKED_IN: (UserRole.ADMIN, UserRole.SECURITY),
    PassStatus.CHECKED_OUT: (UserRole.ADMIN, UserRole.SECURITY),
}

ROLE_VIEWS: Dict[UserRole, Tuple[ActiveView, ...]] = {
    UserRole.VISITOR: (
        ActiveView.DASHBOARD, ActiveView.REQUEST, ActiveView.MY_PASSES,
    ),
    UserRole.SECURITY: (
        ActiveView.DASHBOARD, ActiveView.REQUEST, ActiveView.ALL_PASSES,
        ActiveView.SECURITY, ActiveView.HISTORY,
    ),
    UserRole.ADMIN: tuple(ActiveView),
}


class PassTransitionValidator:
    """Validates pass status changes and who may make them."""

    @staticmethod
    def validate_transition(current: PassStatus, new: PassStatus) -> bool:
        """Only forward moves along PENDING -> APPROVED/REJECTED -> CHECKED_IN -> CHECKED_OUT."""
        if new not in ALLOWED_TRANSITIONS[current]:
            raise InvalidTransitionError(f"Cannot move pass from {current.value} to {new.value}")
        return True

    @staticmethod
    def authorize_transition(actor: Optional[User], new: PassStatus) -> bool:
        if new not in TRANSITION_ROLES:
            # nothing may move a pass back into this state
            raise InvalidTransitionError(f"No pass can be moved to {new.value}")
        if actor is None:
            raise UnauthorizedError("A signed-in user is required to change pass status")
        if actor.role not in TRANSITION_ROLES[new]:
            raise UnauthorizedError(f"Role {actor.role.value} may not set status {new.value}")
        return True


class ViewAccessValidator:
    """Role gating for the named views."""

    @staticmethod
    def allowed_views(role: UserRole) -> Tuple[ActiveView, ...]:
        return ROLE_VIEWS[role]

    @staticmethod
    def ensure_view_allowed(actor: Optional[User], view: ActiveView) -> bool:
        if actor is None:
            raise UnauthorizedError("A signed-in user is required")
        if view not in ROLE_VIEWS[actor.role]:
            raise UnauthorizedError(f"View '{view.value}' is not available to {actor.role.value}")
        return True

    @staticmethod
    def landing_view(user: User) -> ActiveView:
        """Security staff start on the gate view; everybody else on the dashboard."""
        if user.role == UserRole.SECURITY:
            return ActiveView.SECURITY
        return ActiveView.DASHBOARD
