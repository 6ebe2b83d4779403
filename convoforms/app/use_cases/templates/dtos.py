"""
Template Use Case DTOs
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from convoforms.domain.entities import Template


class TemplateInfo(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    form_schema: Dict[str, Any]
    category: Optional[str] = None
    is_global: bool
    created_by: Optional[str] = None
    workspace_id: Optional[str] = None
    usage_count: int
    clone_count: int
    thumbnail_url: Optional[str] = None
    created_at: str
    updated_at: str


class Pagination(BaseModel):
    page: int
    limit: int
    total_templates: int
    total_pages: int
    has_next: bool
    has_prev: bool


class ListTemplatesResponse(BaseModel):
    templates: List[TemplateInfo]
    pagination: Pagination


class DeleteTemplateResponse(BaseModel):
    status: str


class SavedFormTemplateResponse(BaseModel):
    template: TemplateInfo
    form_id: str
    form_title: str


def to_template_info(template: Template) -> TemplateInfo:
    return TemplateInfo(
        id=str(template.id),
        name=template.name,
        description=template.description,
        form_schema=template.form_schema or {},
        category=template.category,
        is_global=template.is_global,
        created_by=template.created_by,
        workspace_id=str(template.workspace_id) if template.workspace_id else None,
        usage_count=template.usage_count,
        clone_count=template.clone_count,
        thumbnail_url=template.thumbnail_url,
        created_at=template.created_at.isoformat(),
        updated_at=template.updated_at.isoformat(),
    )
