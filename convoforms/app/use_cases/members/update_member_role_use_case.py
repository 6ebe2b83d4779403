"""
Update Member Role Use Case

Handles changing a member's role within a workspace.
"""

from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from convoforms.app.services.activity_logger import ActivityLogger, RequestContext
from convoforms.app.services.authorization import check_workspace_permission
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.domain.base import utc_now
from convoforms.domain.entities import WorkspaceRole
from convoforms.domain.rbac import can_manage_role, parse_role
from convoforms.libs.result import Error, Result, Return

from .dtos import UpdateMemberRoleResponse


class UpdateMemberRoleUseCase:
    """
    Use case for changing a member's role.

    Business Rules:
    - Caller needs members:update
    - Callers cannot change their own role
    - Owners' roles cannot be changed
    - Caller must outrank both the target's current role and the new role
    """

    def __init__(
        self,
        uow: UnitOfWork,
        request_context: Optional[RequestContext] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.uow = uow
        self.activity_logger = ActivityLogger(uow, request_context)
        self.clock = clock

    async def execute(
        self, actor_id: str, workspace_id: UUID, target_user_id: str, new_role: str
    ) -> Result[UpdateMemberRoleResponse]:
        async with self.uow:
            role = parse_role(new_role)
            if role is None:
                return Return.err(
                    Error(
                        "INVALID_ROLE",
                        f"Invalid role: {new_role}. Must be one of: owner, admin, member, viewer",
                    )
                )

            if not await check_workspace_permission(
                self.uow, actor_id, workspace_id, "members", "update"
            ):
                return Return.err(
                    Error(
                        "INSUFFICIENT_PERMISSIONS",
                        "You don't have permission to change member roles",
                    )
                )

            target = await self.uow.members.get(workspace_id, target_user_id)
            if target is None:
                return Return.err(
                    Error("MEMBER_NOT_FOUND", "Member not found in this workspace")
                )

            if actor_id == target_user_id:
                return Return.err(
                    Error("CANNOT_CHANGE_OWN_ROLE", "You cannot change your own role")
                )

            old_role = WorkspaceRole(target.role)
            if old_role == WorkspaceRole.owner:
                return Return.err(
                    Error("CANNOT_MODIFY_OWNER", "Cannot change the workspace owner's role")
                )

            actor = await self.uow.members.get(workspace_id, actor_id)
            if not (can_manage_role(actor.role, old_role) and can_manage_role(actor.role, role)):
                return Return.err(
                    Error(
                        "CANNOT_MANAGE_ROLE",
                        "You cannot manage members with this role",
                    )
                )

            target.role = role
            target.updated_at = self.clock()
            await self.uow.members.update(target)
            await self.uow.commit()

            await self.activity_logger.member_role_changed(
                workspace_id, actor_id, target_user_id, old_role.value, role.value
            )

            return Return.ok(
                UpdateMemberRoleResponse(
                    user_id=target_user_id, old_role=old_role.value, role=role.value
                )
            )
