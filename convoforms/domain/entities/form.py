"""
Form Entity
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, SQLModel

from convoforms.domain.base import utc_now


class Form(SQLModel, table=True):
    """
    Form entity - a form definition owned by a workspace.

    Business Rules:
    - version is bumped on every update
    - published_at is set the first time the form is published
    """

    __tablename__ = "forms"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    workspace_id: UUID = Field(foreign_key="workspaces.id", nullable=False, index=True)
    created_by: str = Field(foreign_key="users.id", nullable=False, max_length=255)

    title: str = Field(max_length=255)
    description: Optional[str] = Field(default=None)
    config: dict = Field(default_factory=dict, sa_column=Column(JSON))

    is_conversational: bool = Field(default=True)
    is_published: bool = Field(default=False)
    published_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    version: int = Field(default=1)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
