"""
Form Use Case DTOs
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from convoforms.domain.entities import Form


class FormInfo(BaseModel):
    id: str
    workspace_id: str
    created_by: str
    title: str
    description: Optional[str] = None
    config: Dict[str, Any]
    is_conversational: bool
    is_published: bool
    published_at: Optional[str] = None
    version: int
    created_at: str
    updated_at: str


class ListFormsResponse(BaseModel):
    forms: List[FormInfo]


class DeleteFormResponse(BaseModel):
    status: str


def to_form_info(form: Form) -> FormInfo:
    return FormInfo(
        id=str(form.id),
        workspace_id=str(form.workspace_id),
        created_by=form.created_by,
        title=form.title,
        description=form.description,
        config=form.config or {},
        is_conversational=form.is_conversational,
        is_published=form.is_published,
        published_at=form.published_at.isoformat() if form.published_at else None,
        version=form.version,
        created_at=form.created_at.isoformat(),
        updated_at=form.updated_at.isoformat(),
    )
