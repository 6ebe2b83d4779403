"""
Invite Member Use Case

Handles inviting people to join a workspace with a given role.
"""

from datetime import datetime, timedelta
from typing import Callable, Optional
from uuid import UUID

from convoforms.app.services.activity_logger import ActivityLogger, RequestContext
from convoforms.app.services.authorization import check_workspace_permission
from convoforms.app.services.email_sender import IEmailSender, InvitationEmail
from convoforms.app.services.quota import can_invite_to_workspace
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.domain.base import utc_now
from convoforms.domain.entities import EmailStatus, WorkspaceInvitation
from convoforms.domain.rbac import INVITABLE_ROLES, parse_role
from convoforms.libs.result import Error, Result, Return

from .dtos import InviteMemberResponse, to_invitation_info
from .tokens import build_invitation_url, generate_invitation_token, hash_invitation_token


class InviteMemberUseCase:
    """
    Use case for inviting people to a workspace.

    Business Rules:
    - Role must be admin, member or viewer
    - Inviter needs members:invite in the workspace
    - Inviter's plan must allow invites and have a free seat
    - Existing members and emails with a pending invite are rejected
    - Invitation expires after ttl_days; only the token hash is stored
    - The email is sent after commit; delivery failure does not fail the invite
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: IEmailSender,
        app_url: str,
        request_context: Optional[RequestContext] = None,
        clock: Callable[[], datetime] = utc_now,
        ttl_days: int = 7,
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.app_url = app_url
        self.activity_logger = ActivityLogger(uow, request_context)
        self.clock = clock
        self.ttl_days = ttl_days

    async def execute(
        self, inviter_id: str, workspace_id: UUID, email: str, role: str
    ) -> Result[InviteMemberResponse]:
        email = email.strip().lower()

        async with self.uow:
            invited_role = parse_role(role)
            if invited_role not in INVITABLE_ROLES:
                return Return.err(
                    Error(
                        "INVALID_ROLE",
                        f"Invalid role: {role}. Must be one of: admin, member, viewer",
                    )
                )

            if not await check_workspace_permission(
                self.uow, inviter_id, workspace_id, "members", "invite"
            ):
                return Return.err(
                    Error(
                        "INSUFFICIENT_PERMISSIONS",
                        "You don't have permission to invite members to this workspace",
                    )
                )

            workspace = await self.uow.workspaces.get_by_id(workspace_id)
            if workspace is None:
                return Return.err(Error("WORKSPACE_NOT_FOUND", "Workspace not found"))

            quota = await can_invite_to_workspace(
                self.uow, workspace_id, inviter_id, lock=True
            )
            if not quota.allowed:
                return Return.err(Error("PLAN_LIMIT_EXCEEDED", quota.reason))

            existing_user = await self.uow.users.get_by_email(email)
            if existing_user and await self.uow.members.get(workspace_id, existing_user.id):
                return Return.err(
                    Error("ALREADY_MEMBER", "User is already a member of this workspace")
                )

            pending = await self.uow.invitations.get_pending_by_workspace_and_email(
                workspace_id, email
            )
            if pending:
                return Return.err(
                    Error(
                        "INVITE_ALREADY_EXISTS",
                        "A pending invitation already exists for this email",
                    )
                )

            token = generate_invitation_token()
            invitation = WorkspaceInvitation(
                workspace_id=workspace_id,
                email=email,
                role=invited_role,
                invited_by=inviter_id,
                token_hash=hash_invitation_token(token),
                expires_at=self.clock() + timedelta(days=self.ttl_days),
            )
            invitation = await self.uow.invitations.create(invitation)
            await self.uow.commit()

            inviter = await self.uow.users.get_by_id(inviter_id)
            email_result = await self.email_sender.send_invitation_email(
                InvitationEmail(
                    invitee_email=email,
                    inviter_name=inviter.display_name if inviter else "A team member",
                    workspace_name=workspace.name,
                    workspace_description=workspace.description,
                    role=invited_role.value,
                    invitation_url=build_invitation_url(self.app_url, token),
                    expires_at=invitation.expires_at,
                )
            )

            invitation.email_attempts = (invitation.email_attempts or 0) + 1
            invitation.updated_at = self.clock()
            if email_result.success:
                invitation.email_status = EmailStatus.sent
                invitation.email_sent_at = self.clock()
                invitation.email_error_message = None
            else:
                invitation.email_status = EmailStatus.failed
                invitation.email_error_message = email_result.error
            invitation = await self.uow.invitations.update(invitation)
            await self.uow.commit()

            await self.activity_logger.member_invited(
                workspace_id, inviter_id, invitation.id, email, invited_role.value
            )

            message = (
                "Invitation sent successfully"
                if email_result.success
                else f"Invitation created but email failed to send: {email_result.error}"
            )
            return Return.ok(
                InviteMemberResponse(
                    invitation=to_invitation_info(invitation),
                    email_sent=email_result.success,
                    message=message,
                )
            )
