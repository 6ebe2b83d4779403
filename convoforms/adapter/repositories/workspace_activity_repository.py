import base64
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from convoforms.app.repositories.workspace_activity_repository import (
    IWorkspaceActivityRepository,
)
from convoforms.domain.entities import WorkspaceActivity

CURSOR_SEPARATOR = "|"


def encode_cursor(activity: WorkspaceActivity) -> str:
    raw = f"{activity.created_at.isoformat()}{CURSOR_SEPARATOR}{activity.id}"
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("utf-8")


def decode_cursor(cursor: str) -> Tuple[datetime, UUID]:
    """Raises ValueError for a malformed cursor"""
    raw = base64.urlsafe_b64decode(cursor.encode("utf-8")).decode("utf-8")
    created_at, activity_id = raw.split(CURSOR_SEPARATOR)
    return datetime.fromisoformat(created_at), UUID(activity_id)


class WorkspaceActivityRepository(IWorkspaceActivityRepository):
    """WorkspaceActivity repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, activity: WorkspaceActivity) -> WorkspaceActivity:
        """Create a new activity (immutable)"""
        self.session.add(activity)
        await self.session.flush()
        await self.session.refresh(activity)
        return activity

    async def get_by_workspace_paginated(
        self, workspace_id: UUID, limit: int = 50, cursor: Optional[str] = None
    ) -> Tuple[List[WorkspaceActivity], Optional[str]]:
        """
        Get activities for a workspace with cursor-based pagination.

        Ordered by (created_at, id) descending. The cursor is the base64
        encoded "created_at|id" of the last row of the previous page, so
        rows sharing a timestamp are not skipped across pages.
        """
        stmt = select(WorkspaceActivity).where(
            WorkspaceActivity.workspace_id == workspace_id
        )

        if cursor:
            try:
                cursor_created_at, cursor_id = decode_cursor(cursor)
            except (ValueError, TypeError):
                # Invalid cursor, start from the newest
                pass
            else:
                stmt = stmt.where(
                    or_(
                        WorkspaceActivity.created_at < cursor_created_at,
                        and_(
                            WorkspaceActivity.created_at == cursor_created_at,
                            WorkspaceActivity.id < cursor_id,
                        ),
                    )
                )

        stmt = stmt.order_by(
            WorkspaceActivity.created_at.desc(), WorkspaceActivity.id.desc()
        ).limit(limit + 1)

        result = await self.session.exec(stmt)
        activities = list(result.all())

        has_more = len(activities) > limit
        if has_more:
            activities = activities[:limit]

        next_cursor = encode_cursor(activities[-1]) if has_more and activities else None
        return activities, next_cursor
