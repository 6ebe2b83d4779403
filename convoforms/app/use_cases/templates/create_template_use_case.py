from typing import Any, Dict, Optional
from uuid import UUID

from convoforms.app.services.activity_logger import ActivityLogger, RequestContext
from convoforms.app.services.authorization import check_workspace_permission
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.domain.entities import Template
from convoforms.libs.result import Error, Result, Return

from .dtos import TemplateInfo, to_template_info


class CreateTemplateUseCase:
    """Create a workspace template. Templates created here are never global."""

    def __init__(self, uow: UnitOfWork, request_context: Optional[RequestContext] = None):
        self.uow = uow
        self.activity_logger = ActivityLogger(uow, request_context)

    async def execute(
        self,
        user_id: str,
        workspace_id: UUID,
        name: str,
        form_schema: Dict[str, Any],
        description: Optional[str] = None,
        category: Optional[str] = None,
        thumbnail_url: Optional[str] = None,
    ) -> Result[TemplateInfo]:
        async with self.uow:
            if not await check_workspace_permission(
                self.uow, user_id, workspace_id, "templates", "create"
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
                    description=description,
                    form_schema=form_schema,
                    category=category,
                    thumbnail_url=thumbnail_url,
                    is_global=False,
                    created_by=user_id,
                    workspace_id=workspace_id,
                )
            )
            await self.uow.commit()

            await self.activity_logger.template_created(
                workspace_id, user_id, template.id, template.name
            )

            return Return.ok(to_template_info(template))
