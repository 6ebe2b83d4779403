from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.libs.result import Result, Return

from .dtos import ListWorkspacesResponse, to_workspace_info


class ListWorkspacesUseCase:
    """Workspaces the caller belongs to, with the caller's role in each"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str) -> Result[ListWorkspacesResponse]:
        async with self.uow:
            rows = await self.uow.workspaces.list_for_member(user_id)
            return Return.ok(
                ListWorkspacesResponse(
                    workspaces=[to_workspace_info(ws, role) for ws, role in rows]
                )
            )
