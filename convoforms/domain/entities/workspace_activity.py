"""
WorkspaceActivity Entity

Append-only log of what happened in a workspace.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from convoforms.domain.base import utc_now


class WorkspaceActivity(SQLModel, table=True):
    """
    WorkspaceActivity entity - immutable activity record.

    Business Rules:
    - Never updated or deleted
    - Written after the change it describes has been committed
    """

    __tablename__ = "workspace_activities"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    workspace_id: UUID = Field(foreign_key="workspaces.id", nullable=False)
    user_id: str = Field(foreign_key="users.id", nullable=False, max_length=255)

    action: str = Field(max_length=100, nullable=False)  # "member.invited"
    resource: Optional[str] = Field(default=None, max_length=50)
    resource_id: Optional[str] = Field(default=None, max_length=255)

    activity_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    ip_address: Optional[str] = Field(default=None, max_length=45)
    user_agent: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_activity_workspace_created", "workspace_id", "created_at"),
    )
