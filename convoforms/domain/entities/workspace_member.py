"""
WorkspaceMember Entity

Links a User to a Workspace with a role.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from convoforms.domain.base import utc_now

from .enums import WorkspaceRole


class WorkspaceMember(SQLModel, table=True):
    """
    WorkspaceMember entity - the (workspace, user, role) relation.

    Business Rules:
    - (workspace_id, user_id) is the primary key, so a user joins a workspace once
    - Owners cannot be removed or have their role changed
    - Members cannot change or remove their own membership
    """

    __tablename__ = "workspace_members"

    workspace_id: UUID = Field(foreign_key="workspaces.id", primary_key=True)
    user_id: str = Field(foreign_key="users.id", primary_key=True, max_length=255)

    role: WorkspaceRole = Field(default=WorkspaceRole.member, nullable=False)

    invited_by: Optional[str] = Field(default=None, max_length=255)
    invited_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    joined_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    last_seen_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_workspace_member_user_id", "user_id"),)
