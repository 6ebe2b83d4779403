from typing import Any, Dict, Optional
from uuid import UUID

from convoforms.app.services.activity_logger import ActivityLogger, RequestContext
from convoforms.app.services.authorization import check_workspace_permission
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.domain.entities import Form
from convoforms.libs.result import Error, Result, Return

from .dtos import FormInfo, to_form_info


class CreateFormUseCase:
    """Create a form in a workspace (forms:create, member and above)"""

    def __init__(self, uow: UnitOfWork, request_context: Optional[RequestContext] = None):
        self.uow = uow
        self.activity_logger = ActivityLogger(uow, request_context)

    async def execute(
        self,
        user_id: str,
        workspace_id: UUID,
        title: str,
        description: Optional[str] = None,
        config: Optional[Dict[str, Any]] = None,
        is_conversational: bool = True,
    ) -> Result[FormInfo]:
        async with self.uow:
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
                    title=title,
                    description=description,
                    config=config or {},
                    is_conversational=is_conversational,
                )
            )
            await self.uow.commit()

            await self.activity_logger.form_created(workspace_id, user_id, form.id, form.title)

            return Return.ok(to_form_info(form))
