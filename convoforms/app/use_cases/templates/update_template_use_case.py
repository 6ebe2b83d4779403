"""
Update Template Use Case
"""

from typing import Any, Dict, Optional
from uuid import UUID

from convoforms.app.services.activity_logger import ActivityLogger, RequestContext
from convoforms.app.services.authorization import check_workspace_permission
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.domain.base import utc_now
from convoforms.libs.result import Error, Result, Return

from .dtos import TemplateInfo, to_template_info

UPDATABLE_FIELDS = ("name", "description", "form_schema", "category", "thumbnail_url")
REQUIRED_FIELDS = ("name", "form_schema")


class UpdateTemplateUseCase:
    """
    Use case for editing a workspace template.

    Business Rules:
    - Global templates are read-only
    - Caller needs templates:update in the template's workspace
    - name and form_schema cannot be cleared
    - Usage and clone counters are not editable
    """

    def __init__(self, uow: UnitOfWork, request_context: Optional[RequestContext] = None):
        self.uow = uow
        self.activity_logger = ActivityLogger(uow, request_context)

    async def execute(
        self, user_id: str, template_id: UUID, changes: Dict[str, Any]
    ) -> Result[TemplateInfo]:
        async with self.uow:
            template = await self.uow.templates.get_by_id(template_id)
            if template is None:
                return Return.err(Error("TEMPLATE_NOT_FOUND", "Template not found"))

            if template.is_global or template.workspace_id is None:
                return Return.err(
                    Error("CANNOT_MODIFY_GLOBAL_TEMPLATE", "Global templates cannot be modified")
                )

            if not await check_workspace_permission(
                self.uow, user_id, template.workspace_id, "templates", "update"
            ):
                return Return.err(
                    Error(
                        "INSUFFICIENT_PERMISSIONS",
                        "You don't have permission to edit this template",
                    )
                )

            for field in REQUIRED_FIELDS:
                if field in changes and changes[field] is None:
                    return Return.err(
                        Error("INVALID_TEMPLATE_UPDATE", f"Template {field} cannot be empty")
                    )

            applied = []
            for field in UPDATABLE_FIELDS:
                if field in changes and getattr(template, field) != changes[field]:
                    setattr(template, field, changes[field])
                    applied.append(field)

            if applied:
                template.updated_at = utc_now()
                template = await self.uow.templates.update(template)
                await self.uow.commit()

                await self.activity_logger.template_updated(
                    template.workspace_id, user_id, template.id, sorted(applied)
                )

            return Return.ok(to_template_info(template))
