"""
FormTemplate Entity

Records which template a form was created from.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from convoforms.domain.base import utc_now


class FormTemplate(SQLModel, table=True):
    __tablename__ = "form_templates"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    form_id: UUID = Field(foreign_key="forms.id", nullable=False, index=True)
    template_id: UUID = Field(foreign_key="templates.id", nullable=False, index=True)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
