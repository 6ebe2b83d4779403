from typing import Optional
from uuid import UUID

from convoforms.app.services.activity_logger import ActivityLogger, RequestContext
from convoforms.app.services.authorization import check_workspace_permission
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.libs.result import Error, Result, Return

from .dtos import DeleteTemplateResponse


class DeleteTemplateUseCase:
    def __init__(self, uow: UnitOfWork, request_context: Optional[RequestContext] = None):
        self.uow = uow
        self.activity_logger = ActivityLogger(uow, request_context)

    async def execute(self, user_id: str, template_id: UUID) -> Result[DeleteTemplateResponse]:
        async with self.uow:
            template = await self.uow.templates.get_by_id(template_id)
            if template is None:
                return Return.err(Error("TEMPLATE_NOT_FOUND", "Template not found"))

            if template.is_global or template.workspace_id is None:
                return Return.err(
                    Error("CANNOT_DELETE_GLOBAL_TEMPLATE", "Global templates cannot be deleted")
                )

            if not await check_workspace_permission(
                self.uow, user_id, template.workspace_id, "templates", "delete"
            ):
                return Return.err(
                    Error(
                        "INSUFFICIENT_PERMISSIONS",
                        "You don't have permission to delete this template",
                    )
                )

            workspace_id, name = template.workspace_id, template.name
            await self.uow.templates.delete(template)
            await self.uow.commit()

            await self.activity_logger.template_deleted(workspace_id, user_id, template_id, name)

            return Return.ok(DeleteTemplateResponse(status="deleted"))
