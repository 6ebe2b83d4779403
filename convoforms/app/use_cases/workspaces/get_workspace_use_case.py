from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.libs.result import Error, Result, Return

from .dtos import WorkspaceInfo, to_workspace_info


class GetWorkspaceUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str, slug: str) -> Result[WorkspaceInfo]:
        """
        Get a workspace by slug.

        Non-members get WORKSPACE_NOT_FOUND so slugs do not leak.
        """
        async with self.uow:
            workspace = await self.uow.workspaces.get_by_slug(slug)
            if workspace is None:
                return Return.err(Error("WORKSPACE_NOT_FOUND", "Workspace not found"))

            member = await self.uow.members.get(workspace.id, user_id)
            if member is None:
                return Return.err(Error("WORKSPACE_NOT_FOUND", "Workspace not found"))

            return Return.ok(to_workspace_info(workspace, member.role))
