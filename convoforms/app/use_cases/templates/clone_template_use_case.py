"""
Clone Template Use Case

Copy-on-write: the source is never modified except for its clone counter.
"""

import copy
from typing import Optional
from uuid import UUID

from convoforms.app.services.activity_logger import ActivityLogger, RequestContext
from convoforms.app.services.authorization import check_workspace_permission
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.domain.base import utc_now
from convoforms.domain.entities import Template
from convoforms.libs.result import Error, Result, Return

from .access import load_readable_template
from .dtos import TemplateInfo, to_template_info


class CloneTemplateUseCase:
    """
    Use case for cloning a template into a workspace.

    Business Rules:
    - Source must be global, or the caller must belong to its workspace
    - Caller needs templates:create in the target workspace
    - The copy is a workspace template named "<name> (Copy)" unless overridden
    - Source clone_count is incremented
    """

    def __init__(self, uow: UnitOfWork, request_context: Optional[RequestContext] = None):
        self.uow = uow
        self.activity_logger = ActivityLogger(uow, request_context)

    async def execute(
        self,
        user_id: str,
        template_id: UUID,
        workspace_id: UUID,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Result[TemplateInfo]:
        async with self.uow:
            source, error = await load_readable_template(self.uow, user_id, template_id)
            if error:
                return Return.err(error)

            if not await check_workspace_permission(
                self.uow, user_id, workspace_id, "templates", "create"
            ):
                return Return.err(
                    Error(
                        "INSUFFICIENT_PERMISSIONS",
                        "You don't have permission to create templates in the target workspace",
                    )
                )

            source.clone_count += 1
            source.updated_at = utc_now()
            await self.uow.templates.update(source)

            clone = await self.uow.templates.create(
                Template(
                    name=name or f"{source.name} (Copy)",
                    description=description or source.description,
                    form_schema=copy.deepcopy(source.form_schema),
                    category=source.category,
                    thumbnail_url=source.thumbnail_url,
                    is_global=False,
                    created_by=user_id,
                    workspace_id=workspace_id,
                )
            )
            await self.uow.commit()

            await self.activity_logger.template_cloned(
                workspace_id, user_id, clone.id, source.id, clone.name
            )

            return Return.ok(to_template_info(clone))
