"""
Create Workspace Use Case

Handles creating a new workspace owned by the caller.
"""

import copy
from typing import Optional

from sqlalchemy.exc import IntegrityError

from convoforms.app.services.activity_logger import ActivityLogger, RequestContext
from convoforms.app.services.identity import CurrentUser, ensure_user
from convoforms.app.services.quota import can_create_workspace
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.domain.base import utc_now
from convoforms.domain.entities import (
    DEFAULT_WORKSPACE_SETTINGS,
    Workspace,
    WorkspaceMember,
    WorkspaceRole,
    WorkspaceType,
)
from convoforms.libs.result import Error, Result, Return

from .dtos import WorkspaceInfo, to_workspace_info


class CreateWorkspaceUseCase:
    """
    Use case for creating a workspace.

    Business Rules:
    - The owner's plan must allow another workspace (checked under a
      subscription row lock)
    - Slugs are globally unique
    - An owner has at most one default workspace
    - Workspace and owner membership are committed together
    """

    def __init__(self, uow: UnitOfWork, request_context: Optional[RequestContext] = None):
        self.uow = uow
        self.activity_logger = ActivityLogger(uow, request_context)

    async def execute(
        self,
        identity: CurrentUser,
        name: str,
        slug: str,
        description: Optional[str] = None,
        workspace_type: str = WorkspaceType.team.value,
    ) -> Result[WorkspaceInfo]:
        try:
            ws_type = WorkspaceType(workspace_type)
        except ValueError:
            return Return.err(
                Error("INVALID_WORKSPACE_TYPE", f"Invalid workspace type: {workspace_type}")
            )

        async with self.uow:
            quota = await can_create_workspace(self.uow, identity.user_id, lock=True)
            if not quota.allowed:
                return Return.err(Error("PLAN_LIMIT_EXCEEDED", quota.reason))

            if await self.uow.workspaces.get_by_slug(slug):
                return Return.err(Error("SLUG_TAKEN", "This workspace URL is already taken"))

            if ws_type == WorkspaceType.default and await self.uow.workspaces.get_default_for_owner(
                identity.user_id
            ):
                return Return.err(
                    Error("DEFAULT_WORKSPACE_EXISTS", "You already have a default workspace")
                )

            user = await ensure_user(self.uow, identity)
            if user is None:
                return Return.err(
                    Error("USER_NOT_FOUND", "User profile not found. Complete onboarding first")
                )

            now = utc_now()
            try:
                workspace = await self.uow.workspaces.create(
                    Workspace(
                        name=name,
                        slug=slug,
                        type=ws_type,
                        owner_id=user.id,
                        description=description,
                        settings=copy.deepcopy(DEFAULT_WORKSPACE_SETTINGS),
                    )
                )
                await self.uow.members.create(
                    WorkspaceMember(
                        workspace_id=workspace.id,
                        user_id=user.id,
                        role=WorkspaceRole.owner,
                        joined_at=now,
                    )
                )
                await self.uow.commit()
            except IntegrityError:
                await self.uow.rollback()
                return Return.err(
                    Error("SLUG_TAKEN", "This workspace URL is already taken")
                )

            await self.activity_logger.workspace_created(
                workspace.id,
                user.id,
                {"workspace_name": workspace.name, "workspace_type": ws_type.value},
            )

            return Return.ok(to_workspace_info(workspace, WorkspaceRole.owner))
