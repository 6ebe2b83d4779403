from uuid import UUID

from convoforms.app.services.authorization import check_workspace_permission
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.libs.result import Error, Result, Return

from .dtos import ListInvitationsResponse, to_invitation_info


class ListInvitationsUseCase:
    """List every invitation of a workspace (members:read)"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str, workspace_id: UUID) -> Result[ListInvitationsResponse]:
        async with self.uow:
            if not await check_workspace_permission(
                self.uow, user_id, workspace_id, "members", "read"
            ):
                return Return.err(
                    Error(
                        "INSUFFICIENT_PERMISSIONS",
                        "You don't have permission to view invitations for this workspace",
                    )
                )

            invitations = await self.uow.invitations.list_by_workspace(workspace_id)
            return Return.ok(
                ListInvitationsResponse(
                    invitations=[to_invitation_info(i) for i in invitations]
                )
            )
