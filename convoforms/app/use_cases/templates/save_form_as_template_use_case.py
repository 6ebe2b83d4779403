"""
Save Form As Template Use Case

Snapshots a form's config into a new workspace template.
"""

import copy
from typing import Optional
from uuid import UUID

from convoforms.app.services.activity_logger import ActivityLogger, RequestContext
from convoforms.app.services.authorization import check_workspace_permission
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.domain.entities import Template
from convoforms.libs.result import Error, Result, Return

from .dtos import SavedFormTemplateResponse, to_template_info


class SaveFormAsTemplateUseCase:
    """
    Use case for turning an existing form into a template.

    Business Rules:
    - Caller needs templates:create in the form's workspace
    - The template lands in the form's workspace and is never global
    - The form config is copied; later form edits do not touch the template
    - description falls back to the form's description
    """

    def __init__(self, uow: UnitOfWork, request_context: Optional[RequestContext] = None):
        self.uow = uow
        self.activity_logger = ActivityLogger(uow, request_context)

    async def execute(
        self,
        user_id: str,
        form_id: UUID,
        name: str,
        description: Optional[str] = None,
        category: Optional[str] = None,
        thumbnail_url: Optional[str] = None,
    ) -> Result[SavedFormTemplateResponse]:
        async with self.uow:
            form = await self.uow.forms.get_by_id(form_id)
            if form is None:
                return Return.err(Error("FORM_NOT_FOUND", "Form not found"))

            if not await check_workspace_permission(
                self.uow, user_id, form.workspace_id, "templates", "create"
            ):
                return Return.err(
                    Error(
                        "INSUFFICIENT_PERMISSIONS",
                        "You don't have permission to create templates in this workspace",
                    )
                )

            template = await self.uow.templates.create(
                Template(
                    name=name,
                    description=description or form.description,
                    form_schema=copy.deepcopy(form.config or {}),
                    category=category,
                    thumbnail_url=thumbnail_url,
                    is_global=False,
                    created_by=user_id,
                    workspace_id=form.workspace_id,
                )
            )
            await self.uow.commit()

            await self.activity_logger.template_created(
                form.workspace_id,
                user_id,
                template.id,
                template.name,
            )

            return Return.ok(
                SavedFormTemplateResponse(
                    template=to_template_info(template),
                    form_id=str(form.id),
                    form_title=form.title,
                )
            )
