from uuid import UUID

from convoforms.app.services.authorization import check_workspace_permission
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.domain.entities import WorkspaceRole
from convoforms.libs.result import Error, Result, Return

from .dtos import ListMembersResponse, MemberInfo


class ListMembersUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str, workspace_id: UUID) -> Result[ListMembersResponse]:
        async with self.uow:
            if not await check_workspace_permission(
                self.uow, user_id, workspace_id, "members", "read"
            ):
                return Return.err(
                    Error(
                        "INSUFFICIENT_PERMISSIONS",
                        "You don't have permission to view members of this workspace",
                    )
                )

            rows = await self.uow.members.list_with_users(workspace_id)
            members = [
                MemberInfo(
                    user_id=user.id,
                    email=user.email,
                    display_name=user.display_name,
                    first_name=user.first_name,
                    last_name=user.last_name,
                    avatar_url=user.avatar_url,
                    role=WorkspaceRole(member.role).value,
                    joined_at=member.joined_at.isoformat() if member.joined_at else None,
                    invited_by=member.invited_by,
                )
                for member, user in rows
            ]
            return Return.ok(ListMembersResponse(members=members))
