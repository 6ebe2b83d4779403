"""
Remove Member Use Case

Handles removing a member from a workspace.
"""

from typing import Optional
from uuid import UUID

from convoforms.app.services.activity_logger import ActivityLogger, RequestContext
from convoforms.app.services.authorization import check_workspace_permission
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.domain.entities import WorkspaceRole
from convoforms.domain.rbac import can_manage_role
from convoforms.libs.result import Error, Result, Return

from .dtos import RemoveMemberResponse


class RemoveMemberUseCase:
    """
    Use case for removing members from a workspace.

    Business Rules:
    - Caller needs members:remove
    - Owners cannot be removed
    - Callers cannot remove themselves
    - Caller must outrank the target
    - The membership row is deleted
    """

    def __init__(self, uow: UnitOfWork, request_context: Optional[RequestContext] = None):
        self.uow = uow
        self.activity_logger = ActivityLogger(uow, request_context)

    async def execute(
        self, actor_id: str, workspace_id: UUID, target_user_id: str
    ) -> Result[RemoveMemberResponse]:
        async with self.uow:
            if not await check_workspace_permission(
                self.uow, actor_id, workspace_id, "members", "remove"
            ):
                return Return.err(
                    Error(
                        "INSUFFICIENT_PERMISSIONS",
                        "You don't have permission to remove members",
                    )
                )

            target = await self.uow.members.get(workspace_id, target_user_id)
            if target is None:
                return Return.err(
                    Error("MEMBER_NOT_FOUND", "Member not found in this workspace")
                )

            target_role = WorkspaceRole(target.role)
            if target_role == WorkspaceRole.owner:
                return Return.err(
                    Error("CANNOT_REMOVE_OWNER", "Cannot remove the workspace owner")
                )

            if actor_id == target_user_id:
                return Return.err(
                    Error("CANNOT_REMOVE_SELF", "You cannot remove yourself from the workspace")
                )

            actor = await self.uow.members.get(workspace_id, actor_id)
            if not can_manage_role(actor.role, target_role):
                return Return.err(
                    Error("CANNOT_MANAGE_ROLE", "You cannot remove members with this role")
                )

            await self.uow.members.delete(target)
            await self.uow.commit()

            await self.activity_logger.member_removed(
                workspace_id, actor_id, target_user_id, target_role.value
            )

            return Return.ok(RemoveMemberResponse(status="removed"))
