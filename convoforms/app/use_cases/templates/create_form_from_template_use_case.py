"""
Create Form From Template Use Case
"""

import copy
from typing import Optional
from uuid import UUID

from convoforms.app.services.activity_logger import ActivityLogger, RequestContext
from convoforms.app.services.authorization import check_workspace_permission
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.app.use_cases.forms.dtos import FormInfo, to_form_info
from convoforms.domain.base import utc_now
from convoforms.domain.entities import Form, FormTemplate
from convoforms.libs.result import Error, Result, Return

from .access import load_readable_template


class CreateFormFromTemplateUseCase:
    """
    Use case for starting a form from a template.

    Business Rules:
    - Source access as for cloning
    - Caller needs forms:create in the target workspace
    - The template schema becomes the form config
    - A FormTemplate link records provenance; usage_count is incremented
    """

    def __init__(self, uow: UnitOfWork, request_context: Optional[RequestContext] = None):
        self.uow = uow
        self.activity_logger = ActivityLogger(uow, request_context)

    async def execute(
        self,
        user_id: str,
        template_id: UUID,
        workspace_id: UUID,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Result[FormInfo]:
        async with self.uow:
            template, error = await load_readable_template(self.uow, user_id, template_id)
            if error:
                return Return.err(error)

            if not await check_workspace_permission(
                self.uow, user_id, workspace_id, "forms", "create"
            ):
                return Return.err(
                    Error(
                        "INSUFFICIENT_PERMISSIONS",
                        "You don't have permission to create forms in this workspace",
                    )
                )

            form = await self.uow.forms.create(
                Form(
                    workspace_id=workspace_id,
                    created_by=user_id,
                    title=title or template.name,
                    description=description or template.description,
                    config=copy.deepcopy(template.form_schema),
                )
            )
            await self.uow.forms.link_template(
                FormTemplate(form_id=form.id, template_id=template.id)
            )

            template.usage_count += 1
            template.updated_at = utc_now()
            await self.uow.templates.update(template)
            await self.uow.commit()

            await self.activity_logger.form_created(
                workspace_id,
                user_id,
                form.id,
                form.title,
                {"template_id": str(template.id), "source": "template"},
            )

            return Return.ok(to_form_info(form))
