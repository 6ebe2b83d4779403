"""
Workspace role hierarchy and permission table.

Roles are strictly ordered viewer < member < admin < owner. Every
(resource, action) pair maps to the minimum role allowed to perform it.
"""

import logging
from types import MappingProxyType
from typing import Optional

from convoforms.domain.entities.enums import WorkspaceRole

logger = logging.getLogger(__name__)

ROLE_HIERARCHY = MappingProxyType(
    {
        WorkspaceRole.viewer: 1,
        WorkspaceRole.member: 2,
        WorkspaceRole.admin: 3,
        WorkspaceRole.owner: 4,
    }
)

PERMISSION_TABLE = MappingProxyType(
    {
        ("workspace", "read"): WorkspaceRole.viewer,
        ("workspace", "update"): WorkspaceRole.admin,
        ("workspace", "delete"): WorkspaceRole.owner,
        ("members", "read"): WorkspaceRole.admin,
        ("members", "invite"): WorkspaceRole.admin,
        ("members", "update"): WorkspaceRole.admin,
        ("members", "remove"): WorkspaceRole.owner,
        ("forms", "read"): WorkspaceRole.viewer,
        ("forms", "create"): WorkspaceRole.member,
        ("forms", "update"): WorkspaceRole.member,
        ("forms", "delete"): WorkspaceRole.admin,
        ("forms", "publish"): WorkspaceRole.admin,
        ("templates", "read"): WorkspaceRole.viewer,
        ("templates", "create"): WorkspaceRole.admin,
        ("templates", "update"): WorkspaceRole.admin,
        ("templates", "delete"): WorkspaceRole.admin,
        ("activities", "read"): WorkspaceRole.admin,
        ("billing", "read"): WorkspaceRole.owner,
        ("billing", "manage"): WorkspaceRole.owner,
    }
)

# Roles that can be granted through an invitation
INVITABLE_ROLES = frozenset(
    {WorkspaceRole.admin, WorkspaceRole.member, WorkspaceRole.viewer}
)


def _coerce_role(role) -> Optional[WorkspaceRole]:
    if isinstance(role, WorkspaceRole):
        return role
    try:
        return WorkspaceRole(role)
    except ValueError:
        return None


def role_rank(role) -> int:
    """Numeric rank of a role; unknown roles rank 0"""
    known = _coerce_role(role)
    if known is None:
        return 0
    return ROLE_HIERARCHY[known]


def has_permission(user_role, required_role) -> bool:
    """True when user_role is at least as high as required_role"""
    required = role_rank(required_role)
    return required > 0 and role_rank(user_role) >= required


def can_manage_role(acting_role, target_role) -> bool:
    """True when acting_role is strictly higher than target_role"""
    return role_rank(acting_role) > role_rank(target_role)


def required_role_for(resource: str, action: str) -> Optional[WorkspaceRole]:
    return PERMISSION_TABLE.get((resource, action))


def is_action_allowed(role, resource: str, action: str) -> bool:
    required = required_role_for(resource, action)
    if required is None:
        logger.warning(f"No permission defined for {resource}:{action}")
        return False
    return has_permission(role, required)


def parse_role(role: str) -> Optional[WorkspaceRole]:
    """Parse a role string, returning None when it is not a workspace role"""
    return _coerce_role(role)
