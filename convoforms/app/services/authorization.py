"""
Workspace authorization checks backed by the membership table.
"""

from typing import Optional
from uuid import UUID

from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.domain.entities import WorkspaceRole
from convoforms.domain.rbac import is_action_allowed, parse_role


async def get_user_workspace_role(
    uow: UnitOfWork, workspace_id: UUID, user_id: str
) -> Optional[WorkspaceRole]:
    member = await uow.members.get(workspace_id, user_id)
    if member is None:
        return None
    return parse_role(member.role)


async def check_workspace_permission(
    uow: UnitOfWork, user_id: str, workspace_id: UUID, resource: str, action: str
) -> bool:
    """
    Check whether a user may perform action on resource in a workspace.

    Non-members are denied, whether or not the workspace exists.
    """
    role = await get_user_workspace_role(uow, workspace_id, user_id)
    if role is None:
        return False
    return is_action_allowed(role, resource, action)
