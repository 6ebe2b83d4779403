"""
WorkspaceInvitation Entity

Pending invitations to join a workspace.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from convoforms.domain.base import utc_now

from .enums import EmailStatus, InvitationStatus, WorkspaceRole


class WorkspaceInvitation(SQLModel, table=True):
    """
    WorkspaceInvitation entity - pending invitations to join a workspace.

    Business Rules:
    - Created by admin/owner, never with the owner role
    - Expires after 7 days
    - Token is single-use and only its SHA-256 hash is stored
    - Cannot invite existing members
    """

    __tablename__ = "workspace_invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    workspace_id: UUID = Field(foreign_key="workspaces.id", nullable=False, index=True)
    email: str = Field(max_length=255, nullable=False)

    role: WorkspaceRole = Field(default=WorkspaceRole.member, nullable=False)
    invited_by: str = Field(foreign_key="users.id", nullable=False, max_length=255)
    token_hash: str = Field(unique=True, index=True, max_length=64)

    status: InvitationStatus = Field(default=InvitationStatus.pending)

    # Email delivery tracking
    email_status: EmailStatus = Field(default=EmailStatus.pending)
    email_sent_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    email_error_message: Optional[str] = Field(default=None)
    email_attempts: int = Field(default=0)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_invitation_workspace_email", "workspace_id", "email"),
        Index("idx_invitation_status", "status"),
        Index("idx_invitation_expires_at", "expires_at"),
    )
