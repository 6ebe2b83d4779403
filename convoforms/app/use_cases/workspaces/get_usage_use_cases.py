"""
Plan usage read-outs for display and pre-flight checks.
"""

from uuid import UUID

from convoforms.app.services.authorization import check_workspace_permission
from convoforms.app.services.quota import get_workspace_member_usage, get_workspace_usage
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.libs.result import Error, Result, Return


class GetWorkspaceUsageUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str) -> Result[dict]:
        async with self.uow:
            return Return.ok(await get_workspace_usage(self.uow, user_id))


class GetWorkspaceMemberUsageUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str, workspace_id: UUID) -> Result[dict]:
        async with self.uow:
            if not await check_workspace_permission(
                self.uow, user_id, workspace_id, "workspace", "read"
            ):
                return Return.err(
                    Error(
                        "INSUFFICIENT_PERMISSIONS",
                        "You don't have access to this workspace",
                    )
                )

            return Return.ok(await get_workspace_member_usage(self.uow, workspace_id, user_id))
