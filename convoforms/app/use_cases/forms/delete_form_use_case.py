from typing import Optional
from uuid import UUID

from convoforms.app.services.activity_logger import ActivityLogger, RequestContext
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.libs.result import Result, Return

from .access import load_form_for
from .dtos import DeleteFormResponse


class DeleteFormUseCase:
    def __init__(self, uow: UnitOfWork, request_context: Optional[RequestContext] = None):
        self.uow = uow
        self.activity_logger = ActivityLogger(uow, request_context)

    async def execute(self, user_id: str, form_id: UUID) -> Result[DeleteFormResponse]:
        async with self.uow:
            form, error = await load_form_for(self.uow, user_id, form_id, "delete")
            if error:
                return Return.err(error)

            workspace_id, title = form.workspace_id, form.title
            await self.uow.forms.delete(form)
            await self.uow.commit()

            await self.activity_logger.form_deleted(workspace_id, user_id, form_id, title)

            return Return.ok(DeleteFormResponse(status="deleted"))
