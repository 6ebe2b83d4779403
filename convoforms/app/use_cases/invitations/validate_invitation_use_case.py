"""
Validate Invitation Use Case

Public lookup of an invitation by its token, used to render the
"join workspace" screen before the invitee signs in.
"""

from datetime import datetime
from typing import Callable

from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.domain.base import utc_now
from convoforms.domain.entities import InvitationStatus, WorkspaceInvitation, WorkspaceRole
from convoforms.libs.result import Error, Result, Return

from .dtos import InvitationWorkspaceSummary, InviterSummary, ValidateInvitationResponse
from .tokens import hash_invitation_token


async def check_invitation_usable(
    uow: UnitOfWork, invitation: WorkspaceInvitation, now: datetime
):
    """
    Return an Error when the invitation can no longer be used, else None.

    A pending invitation found past its expiry is marked expired and
    committed before the error is returned.
    """
    if now > invitation.expires_at:
        if invitation.status == InvitationStatus.pending:
            invitation.status = InvitationStatus.expired
            invitation.updated_at = now
            await uow.invitations.update(invitation)
            await uow.commit()
        return Error("INVITATION_EXPIRED", "Invitation has expired")

    if invitation.status != InvitationStatus.pending:
        return Error("INVITATION_NO_LONGER_VALID", "Invitation is no longer valid")

    return None


class ValidateInvitationUseCase:
    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(self, token: str) -> Result[ValidateInvitationResponse]:
        if not token:
            return Return.err(Error("TOKEN_REQUIRED", "Invitation token is required"))

        async with self.uow:
            invitation = await self.uow.invitations.get_by_token_hash(
                hash_invitation_token(token)
            )
            if invitation is None:
                return Return.err(Error("INVALID_TOKEN", "Invalid invitation token"))

            error = await check_invitation_usable(self.uow, invitation, self.clock())
            if error:
                return Return.err(error)

            workspace = await self.uow.workspaces.get_by_id(invitation.workspace_id)
            if workspace is None:
                return Return.err(Error("INVALID_TOKEN", "Invalid invitation token"))

            inviter = await self.uow.users.get_by_id(invitation.invited_by)

            return Return.ok(
                ValidateInvitationResponse(
                    email=invitation.email,
                    role=WorkspaceRole(invitation.role).value,
                    expires_at=invitation.expires_at.isoformat(),
                    workspace=InvitationWorkspaceSummary(
                        id=str(workspace.id),
                        name=workspace.name,
                        slug=workspace.slug,
                        description=workspace.description,
                    ),
                    inviter=InviterSummary(
                        name=inviter.display_name if inviter else "A team member",
                        email=inviter.email if inviter else None,
                    ),
                )
            )
