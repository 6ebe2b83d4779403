"""
Invitation Use Case DTOs
"""

from typing import List, Optional

from pydantic import BaseModel

from convoforms.domain.entities import EmailStatus, InvitationStatus, WorkspaceRole


class InvitationInfo(BaseModel):
    """Invitation as returned to workspace admins (never includes the token)"""

    id: str
    email: str
    role: str
    status: str
    invited_by: str
    expires_at: str
    created_at: str
    email_status: str


class InviteMemberResponse(BaseModel):
    invitation: InvitationInfo
    email_sent: bool
    message: str


class ListInvitationsResponse(BaseModel):
    invitations: List[InvitationInfo]


class InvitationWorkspaceSummary(BaseModel):
    id: str
    name: str
    slug: str
    description: Optional[str] = None


class InviterSummary(BaseModel):
    name: str
    email: Optional[str] = None


class ValidateInvitationResponse(BaseModel):
    """Public view of an invitation, shown before the invitee signs in"""

    email: str
    role: str
    expires_at: str
    workspace: InvitationWorkspaceSummary
    inviter: InviterSummary


class AcceptInvitationResponse(BaseModel):
    workspace_id: str
    workspace_slug: str
    workspace_name: str
    role: str


class RevokeInvitationResponse(BaseModel):
    status: str


def to_invitation_info(invitation) -> InvitationInfo:
    return InvitationInfo(
        id=str(invitation.id),
        email=invitation.email,
        role=WorkspaceRole(invitation.role).value,
        status=InvitationStatus(invitation.status).value,
        invited_by=invitation.invited_by,
        expires_at=invitation.expires_at.isoformat(),
        created_at=invitation.created_at.isoformat(),
        email_status=EmailStatus(invitation.email_status).value,
    )
