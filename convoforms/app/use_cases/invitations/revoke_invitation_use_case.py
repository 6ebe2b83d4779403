from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from convoforms.app.services.activity_logger import ActivityLogger, RequestContext
from convoforms.app.services.authorization import check_workspace_permission
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.domain.base import utc_now
from convoforms.domain.entities import InvitationStatus
from convoforms.libs.result import Error, Result, Return

from .dtos import RevokeInvitationResponse


class RevokeInvitationUseCase:
    """
    Revoke a pending invitation.

    Revoked invitations end in the expired state, so their token stops
    working. Accepted invitations cannot be revoked.
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
        self, user_id: str, workspace_id: UUID, invitation_id: UUID
    ) -> Result[RevokeInvitationResponse]:
        async with self.uow:
            if not await check_workspace_permission(
                self.uow, user_id, workspace_id, "members", "invite"
            ):
                return Return.err(
                    Error(
                        "INSUFFICIENT_PERMISSIONS",
                        "You don't have permission to revoke invitations in this workspace",
                    )
                )

            invitation = await self.uow.invitations.get_by_id(invitation_id)
            if invitation is None or invitation.workspace_id != workspace_id:
                return Return.err(Error("INVITATION_NOT_FOUND", "Invitation not found"))

            if invitation.status == InvitationStatus.accepted:
                return Return.err(
                    Error(
                        "INVITATION_ALREADY_ACCEPTED",
                        "This invitation has already been accepted",
                    )
                )

            if invitation.status == InvitationStatus.pending:
                invitation.status = InvitationStatus.expired
                invitation.updated_at = self.clock()
                await self.uow.invitations.update(invitation)
                await self.uow.commit()

                await self.activity_logger.invitation_revoked(
                    workspace_id, user_id, invitation.id, invitation.email
                )

            return Return.ok(RevokeInvitationResponse(status="revoked"))
