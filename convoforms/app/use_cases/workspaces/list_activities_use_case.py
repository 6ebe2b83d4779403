from typing import Optional
from uuid import UUID

from convoforms.app.services.authorization import check_workspace_permission
from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.libs.result import Error, Result, Return

from .dtos import ActivityInfo, ListActivitiesResponse

MAX_PAGE_SIZE = 100


class ListActivitiesUseCase:
    """
    Use case for reading a workspace's activity feed.

    Business Rules:
    - Caller needs activities:read (admin and above)
    - Newest first, cursor-based pagination
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: str,
        workspace_id: UUID,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Result[ListActivitiesResponse]:
        limit = max(1, min(limit, MAX_PAGE_SIZE))

        async with self.uow:
            if not await check_workspace_permission(
                self.uow, user_id, workspace_id, "activities", "read"
            ):
                return Return.err(
                    Error(
                        "INSUFFICIENT_PERMISSIONS",
                        "You don't have permission to view workspace activity",
                    )
                )

            activities, next_cursor = await self.uow.activities.get_by_workspace_paginated(
                workspace_id, limit=limit, cursor=cursor
            )

            return Return.ok(
                ListActivitiesResponse(
                    activities=[
                        ActivityInfo(
                            id=str(a.id),
                            user_id=a.user_id,
                            action=a.action,
                            resource=a.resource,
                            resource_id=a.resource_id,
                            metadata=a.activity_metadata,
                            ip_address=a.ip_address,
                            user_agent=a.user_agent,
                            created_at=a.created_at.isoformat(),
                        )
                        for a in activities
                    ],
                    next_cursor=next_cursor,
                )
            )
