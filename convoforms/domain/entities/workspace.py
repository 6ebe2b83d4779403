"""
Workspace Entity

Tenant unit owning forms, templates and memberships.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from convoforms.domain.base import utc_now

from .enums import WorkspaceType

DEFAULT_WORKSPACE_SETTINGS = {
    "theme": "light",
    "timezone": "UTC",
    "notifications": {"email": True, "browser": True},
}


class Workspace(SQLModel, table=True):
    """
    Workspace entity - aggregate root for membership and activity.

    Business Rules:
    - slug is globally unique and URL-safe, immutable after creation
    - At most one default workspace per owner (partial unique index)
    - The creator becomes the owner member
    """

    __tablename__ = "workspaces"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    slug: str = Field(unique=True, index=True, max_length=64)

    type: WorkspaceType = Field(default=WorkspaceType.team)
    owner_id: str = Field(foreign_key="users.id", nullable=False, index=True)

    description: Optional[str] = Field(default=None)
    avatar_url: Optional[str] = Field(default=None, max_length=1024)
    settings: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index(
            "uq_workspace_owner_default",
            "owner_id",
            "type",
            unique=True,
            sqlite_where=text("type = 'default'"),
            postgresql_where=text("type = 'default'"),
        ),
    )
