"""
Update Workspace Use Case
"""

from typing import Any, Dict, Optional

from convoforms.app.services.activity_logger import ActivityLogger, RequestContext
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.domain.base import utc_now
from convoforms.domain.rbac import is_action_allowed, parse_role
from convoforms.libs.result import Error, Result, Return

from .dtos import WorkspaceInfo, to_workspace_info

UPDATABLE_FIELDS = ("name", "description", "avatar_url", "settings")
REQUIRED_FIELDS = ("name",)


class UpdateWorkspaceUseCase:
    """
    Use case for updating workspace details.

    Business Rules:
    - Non-members get WORKSPACE_NOT_FOUND, as with GetWorkspaceUseCase
    - Caller needs workspace:update
    - Only name, description, avatar_url and settings can change
    - name cannot be cleared
    - The slug is immutable
    """

    def __init__(self, uow: UnitOfWork, request_context: Optional[RequestContext] = None):
        self.uow = uow
        self.activity_logger = ActivityLogger(uow, request_context)

    async def execute(
        self, user_id: str, slug: str, changes: Dict[str, Any]
    ) -> Result[WorkspaceInfo]:
        async with self.uow:
            workspace = await self.uow.workspaces.get_by_slug(slug)
            if workspace is None:
                return Return.err(Error("WORKSPACE_NOT_FOUND", "Workspace not found"))

            member = await self.uow.members.get(workspace.id, user_id)
            if member is None:
                return Return.err(Error("WORKSPACE_NOT_FOUND", "Workspace not found"))

            role = parse_role(member.role)
            if role is None or not is_action_allowed(role, "workspace", "update"):
                return Return.err(
                    Error(
                        "INSUFFICIENT_PERMISSIONS",
                        "You don't have permission to update this workspace",
                    )
                )

            for field in REQUIRED_FIELDS:
                if field in changes and changes[field] is None:
                    return Return.err(
                        Error("INVALID_WORKSPACE_UPDATE", f"Workspace {field} cannot be empty")
                    )

            applied = {}
            for field in UPDATABLE_FIELDS:
                if field in changes and getattr(workspace, field) != changes[field]:
                    setattr(workspace, field, changes[field])
                    applied[field] = changes[field]

            if applied:
                workspace.updated_at = utc_now()
                workspace = await self.uow.workspaces.update(workspace)
                await self.uow.commit()

                await self.activity_logger.workspace_updated(
                    workspace.id, user_id, sorted(applied)
                )

            return Return.ok(to_workspace_info(workspace, member.role))
