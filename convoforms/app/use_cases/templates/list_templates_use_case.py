import math
from typing import Optional
from uuid import UUID

from convoforms.app.services.authorization import check_workspace_permission
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.libs.result import Error, Result, Return

from .dtos import ListTemplatesResponse, Pagination, to_template_info

MAX_PAGE_SIZE = 100


class ListTemplatesUseCase:
    """
    Use case for browsing templates.

    Business Rules:
    - Caller needs templates:read in the workspace
    - Returns global templates and templates of that workspace
    - Ordered by usage count, then newest first
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: str,
        workspace_id: UUID,
        is_global: Optional[bool] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 50,
    ) -> Result[ListTemplatesResponse]:
        page = max(page, 1)
        limit = max(1, min(limit, MAX_PAGE_SIZE))

        async with self.uow:
            if not await check_workspace_permission(
                self.uow, user_id, workspace_id, "templates", "read"
            ):
                return Return.err(
                    Error("INSUFFICIENT_PERMISSIONS", "Access denied to workspace")
                )

            templates, total = await self.uow.templates.list_visible(
                workspace_id,
                is_global=is_global,
                category=category,
                search=search,
                offset=(page - 1) * limit,
                limit=limit,
            )

            total_pages = math.ceil(total / limit)
            return Return.ok(
                ListTemplatesResponse(
                    templates=[to_template_info(t) for t in templates],
                    pagination=Pagination(
                        page=page,
                        limit=limit,
                        total_templates=total,
                        total_pages=total_pages,
                        has_next=page < total_pages,
                        has_prev=page > 1,
                    ),
                )
            )
