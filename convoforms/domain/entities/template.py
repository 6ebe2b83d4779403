"""
Template Entity

Reusable form schemas, either global or scoped to a workspace.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from convoforms.domain.base import utc_now


class Template(SQLModel, table=True):
    """
    Template entity.

    Business Rules:
    - Global templates have no workspace and cannot be deleted
    - Workspace templates are visible to members of that workspace only
    - Cloning copies the schema into a new workspace template
    """

    __tablename__ = "templates"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    name: str = Field(max_length=255)
    description: Optional[str] = Field(default=None)
    form_schema: dict = Field(default_factory=dict, sa_column=Column(JSON))
    category: Optional[str] = Field(default=None, max_length=100)

    is_global: bool = Field(default=False)
    created_by: Optional[str] = Field(default=None, foreign_key="users.id", max_length=255)
    workspace_id: Optional[UUID] = Field(default=None, foreign_key="workspaces.id")

    usage_count: int = Field(default=0)
    clone_count: int = Field(default=0)
    thumbnail_url: Optional[str] = Field(default=None, max_length=1024)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_template_workspace_id", "workspace_id"),
        Index("idx_template_is_global", "is_global"),
    )
