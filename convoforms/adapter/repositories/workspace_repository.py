from typing import List, Optional, Tuple
from uuid import UUID

from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from convoforms.app.repositories.workspace_repository import IWorkspaceRepository
from convoforms.domain.entities import (
    Workspace,
    WorkspaceMember,
    WorkspaceRole,
    WorkspaceType,
)


class WorkspaceRepository(IWorkspaceRepository):
    """Workspace repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, workspace_id: UUID) -> Optional[Workspace]:
        """Get workspace by ID"""
        stmt = select(Workspace).where(Workspace.id == workspace_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_slug(self, slug: str) -> Optional[Workspace]:
        """Get workspace by slug"""
        stmt = select(Workspace).where(Workspace.slug == slug)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_default_for_owner(self, owner_id: str) -> Optional[Workspace]:
        stmt = select(Workspace).where(
            Workspace.owner_id == owner_id,
            Workspace.type == WorkspaceType.default,
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def count_by_owner(self, owner_id: str) -> int:
        stmt = (
            select(func.count())
            .select_from(Workspace)
            .where(Workspace.owner_id == owner_id)
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def list_for_member(
        self, user_id: str
    ) -> List[Tuple[Workspace, WorkspaceRole]]:
        stmt = (
            select(Workspace, WorkspaceMember.role)
            .join(WorkspaceMember, WorkspaceMember.workspace_id == Workspace.id)
            .where(WorkspaceMember.user_id == user_id)
            .order_by(Workspace.created_at)
        )
        result = await self.session.exec(stmt)
        return [(workspace, role) for workspace, role in result.all()]

    async def create(self, workspace: Workspace) -> Workspace:
        """Create a new workspace"""
        self.session.add(workspace)
        await self.session.flush()
        await self.session.refresh(workspace)
        return workspace

    async def update(self, workspace: Workspace) -> Workspace:
        """Update existing workspace"""
        self.session.add(workspace)
        await self.session.flush()
        await self.session.refresh(workspace)
        return workspace
