"""Role-based authorization."""
import enum
import logging
from typing import Dict, FrozenSet
from ticket_tally.exceptions import AuthorizationError
from ticket_tally.models.enums import Role
from ticket_tally.schemas.auth import Principal

logger = logging.getLogger(__name__)


class Permission(str, enum.Enum):
    """Operations gated by role."""
    CREATE_TICKET = "create_ticket"
    COMMENT_TICKET = "comment_ticket"
    VIEW_OWN_TICKETS = "view_own_tickets"
    VIEW_ALL_TICKETS = "view_all_tickets"
    CHANGE_TICKET_STATUS = "change_ticket_status"
    CHANGE_TICKET_PRIORITY = "change_ticket_priority"
    MANAGE_PROJECTS = "manage_projects"
    MANAGE_STAFF = "manage_staff"
    VIEW_REPORTS = "view_reports"


_EVERYONE = frozenset(Role)
_STAFF = frozenset({Role.ITSTAFF, Role.ADMIN})
_ADMIN = frozenset({Role.ADMIN})

PERMISSIONS: Dict[Permission, FrozenSet[Role]] = {
    Permission.CREATE_TICKET: _EVERYONE,
    Permission.COMMENT_TICKET: _EVERYONE,
    Permission.VIEW_OWN_TICKETS: _EVERYONE,
    Permission.VIEW_ALL_TICKETS: _STAFF,
    Permission.CHANGE_TICKET_STATUS: _STAFF,
    Permission.CHANGE_TICKET_PRIORITY: _STAFF,
    Permission.MANAGE_PROJECTS: _ADMIN,
    Permission.MANAGE_STAFF: _ADMIN,
    Permission.VIEW_REPORTS: _ADMIN,
}

if set(PERMISSIONS) != set(Permission):
    raise RuntimeError("Permission table is missing entries")


def is_allowed(principal: Principal, permission: Permission) -> bool:
    """Whether the principal's role grants ``permission``."""
    return Role(principal.role) in PERMISSIONS[permission]


def authorize(principal: Principal, permission: Permission) -> None:
    """Raise AuthorizationError unless the principal holds ``permission``."""
    if not is_allowed(principal, permission):
        logger.warning(
            "Denied %s to %s (%s)", permission.value, principal.email, principal.role.value
        )
        raise AuthorizationError(
            f"Role '{principal.role.value}' may not perform '{permission.value}'"
        )


def is_self_scoped(role: Role) -> bool:
    """Whether list views for this role only show the principal's own tickets."""
    role = Role(role)
    if role is Role.EMPLOYEE:
        return True
    if role in (Role.ITSTAFF, Role.ADMIN):
        return False
    raise ValueError(f"Unhandled role: {role}")
