"""
Accept Invitation Use Case

Turns a pending invitation into a workspace membership for the caller.
"""

from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError

from convoforms.app.services.activity_logger import ActivityLogger, RequestContext
from convoforms.app.services.email_sender import IEmailSender, WelcomeEmail
from convoforms.app.services.identity import CurrentUser, ensure_user
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.domain.base import utc_now
from convoforms.domain.entities import InvitationStatus, WorkspaceMember, WorkspaceRole
from convoforms.libs.result import Error, Result, Return

from .dtos import AcceptInvitationResponse
from .tokens import hash_invitation_token
from .validate_invitation_use_case import check_invitation_usable


class AcceptInvitationUseCase:
    """
    Use case for accepting workspace invitations.

    Business Rules:
    - Expired invitations are rejected and marked expired
    - Only pending invitations can be accepted
    - The local user is created from identity claims when missing
    - An existing member gets a conflict; the invitation is still marked accepted
    - Membership insert and invitation status change commit together
    - member.joined and the welcome email happen after commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: IEmailSender,
        app_url: str,
        request_context: Optional[RequestContext] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.app_url = app_url
        self.activity_logger = ActivityLogger(uow, request_context)
        self.clock = clock

    async def execute(
        self, token: str, identity: Optional[CurrentUser]
    ) -> Result[AcceptInvitationResponse]:
        if identity is None or not identity.user_id:
            return Return.err(Error("UNAUTHORIZED", "Authentication required"))
        if not token:
            return Return.err(Error("TOKEN_REQUIRED", "Invitation token is required"))

        async with self.uow:
            invitation = await self.uow.invitations.get_by_token_hash(
                hash_invitation_token(token)
            )
            if invitation is None:
                return Return.err(Error("INVALID_TOKEN", "Invalid invitation token"))

            if invitation.status == InvitationStatus.accepted:
                if await self.uow.members.get(invitation.workspace_id, identity.user_id):
                    return Return.err(
                        Error("ALREADY_MEMBER", "You are already a member of this workspace")
                    )

            now = self.clock()
            error = await check_invitation_usable(self.uow, invitation, now)
            if error:
                return Return.err(error)

            workspace = await self.uow.workspaces.get_by_id(invitation.workspace_id)
            if workspace is None:
                return Return.err(Error("INVALID_TOKEN", "Invalid invitation token"))

            user = await ensure_user(self.uow, identity, fallback_email=invitation.email)

            existing = await self.uow.members.get(invitation.workspace_id, user.id)
            if existing:
                invitation.status = InvitationStatus.accepted
                invitation.updated_at = now
                await self.uow.invitations.update(invitation)
                await self.uow.commit()
                return Return.err(
                    Error("ALREADY_MEMBER", "You are already a member of this workspace")
                )

            role = WorkspaceRole(invitation.role)
            try:
                await self.uow.members.create(
                    WorkspaceMember(
                        workspace_id=invitation.workspace_id,
                        user_id=user.id,
                        role=role,
                        invited_by=invitation.invited_by,
                        invited_at=invitation.created_at,
                        joined_at=now,
                    )
                )
                invitation.status = InvitationStatus.accepted
                invitation.updated_at = now
                await self.uow.invitations.update(invitation)
                await self.uow.commit()
            except IntegrityError:
                # Concurrent accept of the same invitation by the same user
                await self.uow.rollback()
                return Return.err(
                    Error("ALREADY_MEMBER", "You are already a member of this workspace")
                )

            await self.activity_logger.member_joined(
                workspace.id, user.id, invitation.id, role.value
            )

            await self.email_sender.send_welcome_email(
                WelcomeEmail(
                    to=user.email,
                    user_name=user.display_name,
                    workspace_name=workspace.name,
                    workspace_url=f"{self.app_url.rstrip('/')}/{workspace.slug}",
                )
            )

            return Return.ok(
                AcceptInvitationResponse(
                    workspace_id=str(workspace.id),
                    workspace_slug=workspace.slug,
                    workspace_name=workspace.name,
                    role=role.value,
                )
            )
